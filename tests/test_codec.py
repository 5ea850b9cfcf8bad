# tests/test_codec.py

from __future__ import annotations

import struct

import pytest

from todo_service.core.errors import DecodeError, EncodeError
from todo_service.models import Task
from todo_service.store.codec import decode, encode, pack_record


@pytest.mark.parametrize(
    "task",
    [
        Task(title="buy milk", done=False),
        Task(title="", done=True),
        Task(title="épicerie ✅ 日本語", done=False),
    ],
)
def test_decode_inverts_encode(task: Task) -> None:
    assert decode(encode(task)) == task


def test_pack_record_prefixes_little_endian_length() -> None:
    task = Task(title="a")
    record = pack_record(task)

    (length,) = struct.unpack("<Q", record[:8])
    assert length == len(record) - 8
    assert record[8:] == encode(task)


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"not json",
        b'{"title": "a", "done": ',
        b'{"done": true}',
        b'{"title": ["a"], "done": false}',
        b"\xff\xfe\x00",
    ],
)
def test_decode_rejects_malformed_bytes(data: bytes) -> None:
    with pytest.raises(DecodeError):
        decode(data)


def test_encode_rejects_lone_surrogates() -> None:
    with pytest.raises(EncodeError, match="not valid UTF-8"):
        encode(Task(title="\ud800"))
