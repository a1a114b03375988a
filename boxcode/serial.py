"""Typed value serialization for box codes.

Values are dumped to JSON with pydantic and prefixed with the body
length as an unsigned LEB128 varint:

    [varint length][JSON body]

The prefix makes the byte stream self-framing. A rendered grid usually
holds a few padding bits past the payload, which decode to trailing
bytes; the length tells the reader where the payload ends.
"""

from __future__ import annotations

from typing import Any, TypeVar

import structlog
from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError
from pydantic_core import PydanticSerializationError

from .errors import DeserializationError, SerializationError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# A 32-bit length never needs more than 5 varint bytes.
MAX_VARINT_BYTES = 5


def encode_varint(value: int) -> bytes:
    """Encode a non-negative int as unsigned LEB128."""
    if value < 0:
        raise ValueError(f"varint must be non-negative, got {value}")
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def decode_varint(data: bytes) -> tuple[int, int]:
    """Decode an unsigned LEB128 varint from the start of data.

    Returns:
        (value, number of bytes consumed).

    Raises:
        DeserializationError: If data ends mid-varint or the varint is
            longer than MAX_VARINT_BYTES.
    """
    value = 0
    for i, byte in enumerate(data[:MAX_VARINT_BYTES]):
        value |= (byte & 0x7F) << (7 * i)
        if not byte & 0x80:
            return value, i + 1
    raise DeserializationError("Truncated or oversized length prefix")


def serialize(value: Any, tp: Any = None) -> bytes:
    """Serialize value to length-prefixed JSON bytes.

    Args:
        value: Value to serialize.
        tp: Type to serialize as. Defaults to type(value).

    Raises:
        SerializationError: If pydantic cannot build a schema for the
            type or cannot dump the value.
    """
    try:
        adapter = TypeAdapter(tp if tp is not None else type(value))
        body = adapter.dump_json(value)
    except (PydanticSchemaGenerationError, PydanticSerializationError) as e:
        raise SerializationError(str(e)) from e

    logger.debug("value_serialized", type=type(value).__name__, body_bytes=len(body))
    return encode_varint(len(body)) + body


def deserialize(data: bytes, tp: type[T]) -> T:
    """Read a length-prefixed value written by serialize().

    Bytes after the framed body are ignored.

    Raises:
        DeserializationError: If the prefix is bad, the body is short, or
            the body does not validate as tp.
    """
    length, consumed = decode_varint(data)
    body = data[consumed : consumed + length]
    if len(body) < length:
        raise DeserializationError(f"Expected {length} body bytes, got {len(body)}")

    try:
        return TypeAdapter(tp).validate_json(body)
    except ValidationError as e:
        raise DeserializationError(str(e)) from e
