class TodoError(Exception):
    """Base class for every failure surfaced by the todo service."""


class StoreIOError(TodoError):
    """The store file could not be opened, read, written or removed."""


class DecodeError(TodoError):
    """A store record is malformed or truncated."""


class RemoteCallError(TodoError):
    """A remote call failed: transport error, deadline, or server-side error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ArgumentError(TodoError):
    """Missing or unknown command-line input."""


class EncodeError(TodoError):
    """A task could not be serialized into a store record."""
