# tests/test_task_store.py

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from todo_service.core.errors import DecodeError, EncodeError, StoreIOError
from todo_service.models import Task
from todo_service.store.codec import pack_record
from todo_service.store.task_store import TaskStore


def test_missing_file_scans_as_empty(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "absent.db")
    assert store.scan_all() == []
    assert not store.path.exists()


def test_append_then_scan_keeps_order(store: TaskStore) -> None:
    titles = ["first", "second", "first", "third"]
    for t in titles:
        store.append(Task(title=t))

    tasks = store.scan_all()
    assert [t.title for t in tasks] == titles
    assert all(not t.done for t in tasks)


def test_file_is_sequence_of_records(store: TaskStore) -> None:
    a, b = Task(title="a"), Task(title="b", done=True)
    store.append(a)
    store.append(b)

    assert store.path.read_bytes() == pack_record(a) + pack_record(b)


def test_truncated_payload_is_an_error(store: TaskStore) -> None:
    store.append(Task(title="ok"))
    record = pack_record(Task(title="cut short"))
    with open(store.path, "ab") as f:
        f.write(record[:-3])

    with pytest.raises(DecodeError, match="record 1"):
        store.scan_all()


def test_truncated_length_prefix_is_an_error(store: TaskStore) -> None:
    store.append(Task(title="ok"))
    with open(store.path, "ab") as f:
        f.write(b"\x05\x00\x00")

    with pytest.raises(DecodeError, match="truncated length prefix"):
        store.scan_all()


def test_garbage_payload_is_an_error(store: TaskStore) -> None:
    store.path.write_bytes((4).to_bytes(8, "little") + b"nope")

    with pytest.raises(DecodeError):
        store.scan_all()


def test_rewrite_replaces_contents(store: TaskStore) -> None:
    for t in ("a", "b", "c"):
        store.append(Task(title=t))

    store.rewrite_all([Task(title="c", done=True), Task(title="a")])

    assert store.scan_all() == [Task(title="c", done=True), Task(title="a")]


def test_rewrite_on_missing_file_creates_it(store: TaskStore) -> None:
    store.rewrite_all([])
    assert store.path.exists()
    assert store.scan_all() == []


def test_failed_rewrite_leaves_store_intact(store: TaskStore, monkeypatch) -> None:
    store.append(Task(title="keep me"))
    before = store.path.read_bytes()

    def broken_replace(src, dst):
        raise OSError("disk on fire")

    monkeypatch.setattr(os, "replace", broken_replace)

    with pytest.raises(StoreIOError, match="disk on fire"):
        store.rewrite_all([Task(title="lost", done=True)])

    assert store.path.read_bytes() == before
    # temp file cleaned up
    assert [p.name for p in store.path.parent.iterdir()] == [store.path.name]


def test_drop_removes_file_and_is_idempotent(store: TaskStore) -> None:
    store.append(Task(title="a"))

    store.drop_store()
    assert not store.path.exists()
    assert store.scan_all() == []

    store.drop_store()


def test_unwritable_location_raises_store_io_error(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "no-such-dir" / "todo.db")

    with pytest.raises(StoreIOError):
        store.append(Task(title="a"))
    with pytest.raises(StoreIOError):
        store.rewrite_all([Task(title="a")])


def test_directory_in_place_of_file_raises_store_io_error(tmp_path: Path) -> None:
    path = tmp_path / "todo.db"
    path.mkdir()
    store = TaskStore(path)

    with pytest.raises(StoreIOError):
        store.scan_all()


@pytest.mark.parametrize("declared", [2**63 + 5, 2**40, 2**32])
def test_oversized_length_prefix_is_an_error(store: TaskStore, declared: int) -> None:
    store.append(Task(title="ok"))
    with open(store.path, "ab") as f:
        f.write(declared.to_bytes(8, "little") + b"{}")

    with pytest.raises(DecodeError, match=f"record 1: declared {declared} bytes, found 2"):
        store.scan_all()


def test_rewrite_keeps_existing_file_mode(store: TaskStore) -> None:
    store.append(Task(title="a"))
    os.chmod(store.path, 0o640)

    store.rewrite_all([Task(title="a", done=True)])

    assert stat.S_IMODE(os.stat(store.path).st_mode) == 0o640


def test_unencodable_title_is_rejected_before_writing(store: TaskStore) -> None:
    with pytest.raises(EncodeError):
        store.append(Task(title="\ud800"))
    assert not store.path.exists()
