"""Box-code encoder.

Converts a byte payload into a grid of box-drawing characters.

Encoding algorithm:
1. Size a layout that can carry len(data) * 8 bits
2. Walk the filled cells in row-major order, giving each connected cell
   the next N bits of the payload (N = the cell's connectivity width),
   least significant bits first
3. Render each point as the matching glyph of the cell's family

Cells with fewer than two filled neighbours carry no bits; the cursor
moves past them without consuming anything.
"""

from __future__ import annotations

from typing import Any

import structlog

from .errors import LayoutUnsatisfiableError
from .layout import BoxLayout
from .renderer import render_points
from .serial import serialize
from .sizer import BoxLayoutConfig, layout_for_bytes

logger = structlog.get_logger(__name__)


class PointPacker:
    """Repacks bytes into the variable-width points of a layout.

    Holds the bit accumulator and the row-major cursor between bytes, so
    the payload can be fed one byte at a time.
    """

    def __init__(self, layout: BoxLayout) -> None:
        self.layout = layout
        self.accumulator = 0
        self.offset = 0
        self.x = 0
        self.y = 0

    def advance(self, byte: int) -> list[int]:
        """Feed one byte and return the points it completes."""
        self.accumulator |= byte << self.offset
        self.offset += 8

        points: list[int] = []
        while True:
            self._check_cursor()
            connectivity = self.layout.connectivity_at(self.x, self.y)
            if connectivity is not None:
                width = connectivity.bits
                if self.offset < width:
                    # Wait for the next byte; this cell is not filled yet.
                    break
                points.append(self.accumulator & ((1 << width) - 1))
                self.accumulator >>= width
                self.offset -= width
            self._step()
            if self.offset == 0:
                break
        return points

    def finish(self) -> list[int]:
        """Flush bits left over after the last byte as one final point."""
        if self.offset == 0:
            return []
        self._check_cursor()
        # advance() only stops early on a connected cell wider than offset.
        point = self.accumulator
        self.accumulator = 0
        self.offset = 0
        self._step()
        return [point]

    def _step(self) -> None:
        if self.x < self.layout.width - 1:
            self.x += 1
        else:
            self.x = 0
            self.y += 1

    def _check_cursor(self) -> None:
        if self.y >= self.layout.height:
            raise LayoutUnsatisfiableError(
                f"Payload exceeds layout capacity of {self.layout.capacity_bits()} bits"
            )


def bytes_to_points(layout: BoxLayout, data: bytes) -> list[int]:
    """Split data into one point per connected cell of the layout.

    Args:
        layout: Layout the points will be drawn into.
        data: Payload bytes.

    Returns:
        Point values in row-major cell order.

    Raises:
        LayoutUnsatisfiableError: If the layout is too small for data.
    """
    packer = PointPacker(layout)
    points: list[int] = []
    for byte in data:
        points.extend(packer.advance(byte))
    points.extend(packer.finish())
    return points


def encode_with_layout(data: bytes, layout: BoxLayout) -> str:
    """Render data into a caller-supplied layout."""
    points = bytes_to_points(layout, data)
    return render_points(layout, points)


def encode(data: bytes, config: BoxLayoutConfig | None = None) -> str:
    """Encode bytes as box-drawing text.

    Args:
        data: Payload bytes.
        config: Layout constraints. None uses the defaults.

    Returns:
        Rendered grid, rows separated by newlines.

    Raises:
        LayoutUnsatisfiableError: If no layout within the config bounds
            can hold the payload.
    """
    layout = layout_for_bytes(len(data), config)
    if layout is None:
        raise LayoutUnsatisfiableError(
            f"No layout within the configured bounds can hold {len(data)} bytes"
        )

    logger.debug(
        "encoding_boxes",
        data_bytes=len(data),
        width=layout.width,
        height=layout.height,
        capacity_bits=layout.capacity_bits(),
    )
    return encode_with_layout(data, layout)


def encode_typed(value: Any, config: BoxLayoutConfig | None = None, tp: Any = None) -> str:
    """Serialize a value and encode it as box-drawing text.

    The serialized form carries its own length prefix, so decode_typed()
    can recover the value without knowing the payload size.

    Args:
        value: Any value pydantic can serialize (models, dataclasses,
            builtins).
        config: Layout constraints.
        tp: Type to serialize value as. Defaults to type(value).

    Raises:
        SerializationError: If the value cannot be serialized.
        LayoutUnsatisfiableError: If the payload does not fit the config.
    """
    return encode(serialize(value, tp), config)
