import contextlib
import logging
import os
import stat
import tempfile
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO

from todo_service.core.errors import DecodeError, StoreIOError
from todo_service.models import Task
from todo_service.store.codec import LENGTH_PREFIX, decode, pack_record

logger = logging.getLogger(__name__)


class TaskStore:
    """
    File-backed task log.

    The file is a sequence of records: an 8-byte little-endian length, then
    that many bytes of an encoded task. A missing file is an empty store.

    - append() adds one record at the end
    - scan_all() reads every record in order
    - rewrite_all() replaces the whole file (temp file + rename, never partial)
    - drop_store() removes the file

    `lock` is re-entrant; hold it around read-modify-write sequences so an
    append can't land between the read and the rewrite.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.lock = threading.RLock()

    def append(self, task: Task) -> None:
        record = pack_record(task)
        with self.lock:
            try:
                with open(self.path, "ab") as f:
                    f.write(record)
            except OSError as e:
                raise StoreIOError(f"could not write task to {self.path}: {e}") from e
        logger.debug("Appended task %r (%d bytes)", task.title, len(record))

    def scan_all(self) -> list[Task]:
        with self.lock:
            try:
                f = open(self.path, "rb")
            except FileNotFoundError:
                return []
            except OSError as e:
                raise StoreIOError(f"could not read {self.path}: {e}") from e

            with f:
                try:
                    return list(self._iter_records(f))
                except OSError as e:
                    raise StoreIOError(f"could not read {self.path}: {e}") from e

    def _iter_records(self, f: BinaryIO):
        size = os.fstat(f.fileno()).st_size
        offset = 0
        index = 0
        while True:
            header = f.read(LENGTH_PREFIX.size)
            if not header:
                return
            offset += len(header)
            if len(header) < LENGTH_PREFIX.size:
                raise DecodeError(
                    f"record {index}: truncated length prefix ({len(header)} of {LENGTH_PREFIX.size} bytes)"
                )
            (length,) = LENGTH_PREFIX.unpack(header)

            # checked before reading so a corrupt prefix never drives the allocation
            remaining = size - offset
            if length > remaining:
                raise DecodeError(
                    f"record {index}: declared {length} bytes, found {remaining}"
                )

            payload = f.read(length)
            offset += len(payload)
            if len(payload) != length:
                raise DecodeError(
                    f"record {index}: declared {length} bytes, found {len(payload)}"
                )

            try:
                yield decode(payload)
            except DecodeError as e:
                raise DecodeError(f"record {index}: {e}") from e
            index += 1

    def rewrite_all(self, tasks: Iterable[Task]) -> None:
        data = b"".join(pack_record(t) for t in tasks)
        directory = self.path.parent

        with self.lock:
            # keep the permissions of the file being replaced
            try:
                mode = stat.S_IMODE(os.stat(self.path).st_mode)
            except FileNotFoundError:
                mode = None
            except OSError as e:
                raise StoreIOError(f"could not stat {self.path}: {e}") from e

            try:
                fd, tmp_name = tempfile.mkstemp(
                    prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
                )
            except OSError as e:
                raise StoreIOError(f"could not open temp file next to {self.path}: {e}") from e

            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                    f.flush()
                    os.fsync(f.fileno())
                if mode is not None:
                    os.chmod(tmp_name, mode)
                os.replace(tmp_name, self.path)
            except OSError as e:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
                raise StoreIOError(f"could not rewrite {self.path}: {e}") from e

        logger.debug("Rewrote %s (%d bytes)", self.path, len(data))

    def drop_store(self) -> None:
        with self.lock:
            try:
                os.remove(self.path)
            except FileNotFoundError:
                return
            except OSError as e:
                raise StoreIOError(f"could not drop {self.path}: {e}") from e
        logger.info("Dropped store %s", self.path)
