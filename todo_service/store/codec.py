import struct

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from todo_service.core.errors import DecodeError, EncodeError
from todo_service.models import Task

# 8-byte little-endian unsigned record length
LENGTH_PREFIX = struct.Struct("<Q")


def encode(task: Task) -> bytes:
    # lone surrogates survive JSON parsing but have no UTF-8 form
    try:
        return task.model_dump_json().encode("utf-8")
    except (PydanticSerializationError, UnicodeEncodeError) as e:
        raise EncodeError("could not serialize task: title is not valid UTF-8") from e


def decode(data: bytes) -> Task:
    try:
        return Task.model_validate_json(data)
    except ValidationError as e:
        raise DecodeError(f"could not deserialize task: {e}") from e


def pack_record(task: Task) -> bytes:
    """Length prefix followed by the encoded task."""
    payload = encode(task)
    return LENGTH_PREFIX.pack(len(payload)) + payload
