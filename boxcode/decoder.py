"""Box-code decoder.

Recovers the payload from box-drawing text by:
1. Scanning the text grapheme by grapheme
2. Looking each grapheme up in the glyph families, widest first, to get
   its (point, bit width) pair
3. Repacking the points into bytes, least significant bits first

Parsing is permissive: anything outside the glyph families (spaces,
newlines, blackout labels, decoration) is skipped. Damaged input shortens
the recovered bit stream instead of failing.

The grid carries no length of its own. Byte-level callers pass the
expected length to decode_to_bytes(); decode_typed() reads the length
prefix written by encode_typed().
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

import regex
import structlog

from .errors import DeserializationError, MalformedGlyphError
from .glyphs import PARSE_ORDER
from .serial import deserialize

logger = structlog.get_logger(__name__)

T = TypeVar("T")

_GRAPHEME = regex.compile(r"\X")

_FAMILY_GRAPHEMES: dict[str, list[str]] = {
    family: _GRAPHEME.findall(family) for family, _bits in PARSE_ORDER
}


def _point_in_family(grapheme: str, family: str) -> int:
    """Position of grapheme within a glyph family."""
    try:
        return _FAMILY_GRAPHEMES[family].index(grapheme)
    except ValueError:
        raise MalformedGlyphError(
            f"Glyph {grapheme!r} matched family {family!r} without a position"
        ) from None


def parse_points(text: str) -> list[tuple[int, int]]:
    """Extract (point, bit width) pairs from rendered box text.

    Args:
        text: Box-drawing text, possibly with labels and other characters.

    Returns:
        One pair per recognised glyph, in reading order.
    """
    points: list[tuple[int, int]] = []
    for grapheme in _GRAPHEME.findall(text):
        for family, bits in PARSE_ORDER:
            if grapheme in family:
                points.append((_point_in_family(grapheme, family), bits))
                break
    return points


def points_to_bytes(points: Iterable[tuple[int, int]]) -> bytes:
    """Pack variable-width points into bytes.

    Each point is ORed in above the bits already held; whole bytes are
    flushed low-order first. A trailing partial byte is dropped.
    """
    result = bytearray()
    accumulator = 0
    offset = 0
    for point, bits in points:
        accumulator |= point << offset
        offset += bits
        while offset >= 8:
            result.append(accumulator & 0xFF)
            accumulator >>= 8
            offset -= 8
    return bytes(result)


def decode_to_bytes(text: str, length: int | None = None) -> bytes:
    """Decode box text to raw bytes.

    Args:
        text: Rendered box text.
        length: Expected payload length in bytes. When given the result
            is cut to this length; when None every whole byte recovered
            is returned, padding included.

    Raises:
        DeserializationError: If fewer than length bytes were recovered.
    """
    return decode_points(parse_points(text), length)


def decode_points(points: list[tuple[int, int]], length: int | None = None) -> bytes:
    """Pack already-parsed points into bytes, with decode_to_bytes() length handling."""
    data = points_to_bytes(points)

    logger.debug("boxes_parsed", points=len(points), data_bytes=len(data))

    if length is None:
        return data
    if len(data) < length:
        logger.warning("decode_short", expected=length, recovered=len(data))
        raise DeserializationError(f"Expected {length} bytes, recovered {len(data)}")
    return data[:length]


def decode_typed(text: str, tp: type[T]) -> T:
    """Decode box text written by encode_typed() back to a value of type tp.

    Raises:
        DeserializationError: If the recovered bytes do not hold a valid tp.
    """
    return deserialize(decode_to_bytes(text), tp)
