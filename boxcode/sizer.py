"""Layout sizing for box codes.

Finds a layout big enough to carry a given number of payload bits:

1. Start from the smallest grid allowed by the config and any blackout text
2. Overlay the blackout text
3. Append a row or a column, whichever keeps height / width closest to the
   target aspect ratio, until the capacity is reached or both maxima are hit

Growth only ever appends filled cells, so blackout text is never moved or
overwritten and the grid never shrinks.
"""

from __future__ import annotations

from dataclasses import dataclass

import regex
import structlog

from .glyphs import PARSE_ORDER
from .layout import BoxLayout

logger = structlog.get_logger(__name__)

DEFAULT_MIN_SIDE = 2
DEFAULT_ASPECT_RATIO = 1.0

_GRAPHEME = regex.compile(r"\X")
_GLYPHS = frozenset("".join(family for family, _bits in PARSE_ORDER))
# Control, format, separator and unassigned code points, bar the plain space.
_UNPRINTABLE = regex.compile(r"[\p{C}\p{Zl}\p{Zp}]|[^\S ]")


@dataclass(frozen=True)
class BoxLayoutConfig:
    """Constraints for sizing a layout.

    Attributes:
        min_width: Minimum grid width in cells (default 2).
        max_width: Maximum grid width (default: the payload bit length).
        min_height: Minimum grid height in cells (default 2).
        max_height: Maximum grid height (default: the payload bit length).
        aspect_ratio: Target height / width ratio (default 1.0).
        blackouts: (x, y, text) labels drawn into the grid. Each label needs
            one free column after it so the box closes around the text.
    """

    min_width: int | None = None
    max_width: int | None = None
    min_height: int | None = None
    max_height: int | None = None
    aspect_ratio: float | None = None
    blackouts: tuple[tuple[int, int, str], ...] = ()

    def __post_init__(self) -> None:
        for name in ("min_width", "max_width", "min_height", "max_height"):
            value = getattr(self, name)
            if value is not None and value < 1:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.aspect_ratio is not None and not self.aspect_ratio > 0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        # Accept lists from callers; keep the stored value hashable.
        object.__setattr__(self, "blackouts", tuple(tuple(b) for b in self.blackouts))
        for left, top, text in self.blackouts:
            if left < 0 or top < 0:
                raise ValueError(f"Blackout position must be non-negative, got ({left}, {top})")
            if not text:
                raise ValueError("Blackout text must not be empty")
            _check_label(text)


def _check_label(text: str) -> None:
    """Reject label text the parser could not skip cleanly."""
    glyphs = sorted(set(text) & _GLYPHS)
    if glyphs:
        raise ValueError(
            f"Blackout text {text!r} contains box-drawing glyphs {''.join(glyphs)!r}"
        )
    if _UNPRINTABLE.search(text):
        raise ValueError(f"Blackout text {text!r} contains control or whitespace characters")
    # Each character must stay a cluster of its own, even between two glyphs.
    if len(_GRAPHEME.findall(text)) != len(text) or any(
        len(_GRAPHEME.findall(f"─{char}─")) != 3 for char in text
    ):
        raise ValueError(f"Blackout text {text!r} must be one grapheme per character")


def size_for(bit_length: int, config: BoxLayoutConfig | None = None) -> BoxLayout | None:
    """Grow a layout until it can carry bit_length bits.

    Args:
        bit_length: Number of payload bits to fit.
        config: Sizing constraints. None uses the defaults.

    Returns:
        The sized layout, or None if no layout within the configured
        maxima reaches the required capacity.
    """
    config = config or BoxLayoutConfig()

    min_width = config.min_width or DEFAULT_MIN_SIDE
    min_height = config.min_height or DEFAULT_MIN_SIDE
    for left, top, text in config.blackouts:
        # One extra column so the box closes to the right of the text.
        min_width = max(min_width, left + len(text) + 1)
        min_height = max(min_height, top + 1)

    max_width = config.max_width or max(bit_length, min_width)
    max_height = config.max_height or max(bit_length, min_height)
    aspect_ratio = config.aspect_ratio or DEFAULT_ASPECT_RATIO

    layout = BoxLayout.filled(min_width, min_height)
    for left, top, text in config.blackouts:
        layout.place_text(left, top, text)

    # Dead-end cells beside blackouts count in capacity_bits() but carry nothing.
    capacity = layout.payload_bits()
    while capacity < bit_length and not (
        layout.height >= max_height and layout.width >= max_width
    ):
        current_ratio = layout.height / layout.width
        new_row = (
            current_ratio < aspect_ratio and layout.height < max_height
        ) or layout.width >= max_width
        # Only the new line and the one it was appended to change class.
        if new_row:
            before = layout.row_bits(layout.height - 1)
            layout.add_row()
            after = layout.row_bits(layout.height - 2) + layout.row_bits(layout.height - 1)
        else:
            before = layout.column_bits(layout.width - 1)
            layout.add_column()
            after = layout.column_bits(layout.width - 2) + layout.column_bits(layout.width - 1)
        capacity += after - before

    if capacity >= bit_length and layout.height <= max_height and layout.width <= max_width:
        logger.debug(
            "layout_sized",
            bit_length=bit_length,
            width=layout.width,
            height=layout.height,
            capacity_bits=capacity,
        )
        return layout

    logger.warning(
        "layout_unsatisfiable",
        bit_length=bit_length,
        width=layout.width,
        height=layout.height,
        capacity_bits=capacity,
        max_width=max_width,
        max_height=max_height,
    )
    return None


def layout_for_bytes(byte_length: int, config: BoxLayoutConfig | None = None) -> BoxLayout | None:
    """Size a layout for byte_length bytes of payload."""
    return size_for(byte_length * 8, config)
