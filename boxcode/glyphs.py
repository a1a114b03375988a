"""Connectivity classes and box-drawing glyph families.

Every filled cell in a layout is classified by which of its four
grid neighbours are also filled. The class fixes how many payload bits
the cell carries (2, 3 or 4) and which glyph family renders it.

Members of a family share a shape (corner, tee, cross, straight line)
and differ only in stroke weight, so the choice of member carries the
payload without changing the drawn outline.
"""

from __future__ import annotations

from enum import Enum

# Glyph families. Order within a family is the point value; these exact
# code points are the wire format.
TOP_LEFT = "┌┍┎┏"
TOP_RIGHT = "┐┑┒┓"
BOTTOM_LEFT = "└┕┖┗"
BOTTOM_RIGHT = "┘┙┚┛"
LEFT = "├┝┞┟┠┡┢┣"
RIGHT = "┤┥┦┧┨┩┪┫"
TOP = "┬┭┮┯┰┱┲┳"
BOTTOM = "┴┵┶┷┸┹┺┻"
CROSS = (
    "┼┽┾┿╀╁╂╃"
    "╄╅╆╇╈╉╊╋"
)
HORIZONTAL = "─╼━╾"
VERTICAL = "│╽┃╿"


class Connectivity(Enum):
    """Which neighbours of a filled cell are filled too."""

    RIGHT_DOWN = "right_down"
    LEFT_DOWN = "left_down"
    RIGHT_UP = "right_up"
    LEFT_UP = "left_up"
    DOWN_UP = "down_up"
    RIGHT_LEFT = "right_left"
    RIGHT_LEFT_DOWN = "right_left_down"
    RIGHT_LEFT_UP = "right_left_up"
    RIGHT_DOWN_UP = "right_down_up"
    LEFT_DOWN_UP = "left_down_up"
    ALL = "all"

    @property
    def bits(self) -> int:
        """Payload bits carried by a cell of this class."""
        return _BITS[self]

    @property
    def glyphs(self) -> str:
        """Candidate glyphs, indexed by point value."""
        return _FAMILIES[self]


_BITS: dict[Connectivity, int] = {
    Connectivity.RIGHT_DOWN: 2,
    Connectivity.LEFT_DOWN: 2,
    Connectivity.RIGHT_UP: 2,
    Connectivity.LEFT_UP: 2,
    Connectivity.DOWN_UP: 2,
    Connectivity.RIGHT_LEFT: 2,
    Connectivity.RIGHT_LEFT_DOWN: 3,
    Connectivity.RIGHT_LEFT_UP: 3,
    Connectivity.RIGHT_DOWN_UP: 3,
    Connectivity.LEFT_DOWN_UP: 3,
    Connectivity.ALL: 4,
}

_FAMILIES: dict[Connectivity, str] = {
    Connectivity.RIGHT_DOWN: TOP_LEFT,
    Connectivity.LEFT_DOWN: TOP_RIGHT,
    Connectivity.RIGHT_UP: BOTTOM_LEFT,
    Connectivity.LEFT_UP: BOTTOM_RIGHT,
    Connectivity.DOWN_UP: VERTICAL,
    Connectivity.RIGHT_LEFT: HORIZONTAL,
    Connectivity.RIGHT_LEFT_DOWN: TOP,
    Connectivity.RIGHT_LEFT_UP: BOTTOM,
    Connectivity.RIGHT_DOWN_UP: LEFT,
    Connectivity.LEFT_DOWN_UP: RIGHT,
    Connectivity.ALL: CROSS,
}

# (right, left, down, up) -> class
_CLASSIFY: dict[tuple[bool, bool, bool, bool], Connectivity] = {
    (True, True, False, False): Connectivity.RIGHT_LEFT,
    (False, False, True, True): Connectivity.DOWN_UP,
    (True, False, True, False): Connectivity.RIGHT_DOWN,
    (False, True, True, False): Connectivity.LEFT_DOWN,
    (True, False, False, True): Connectivity.RIGHT_UP,
    (False, True, False, True): Connectivity.LEFT_UP,
    (True, True, True, False): Connectivity.RIGHT_LEFT_DOWN,
    (True, True, False, True): Connectivity.RIGHT_LEFT_UP,
    (True, False, True, True): Connectivity.RIGHT_DOWN_UP,
    (False, True, True, True): Connectivity.LEFT_DOWN_UP,
    (True, True, True, True): Connectivity.ALL,
}

# Parser priority: widest families first.
PARSE_ORDER: list[tuple[str, int]] = [
    (CROSS, 4),
    (LEFT, 3),
    (RIGHT, 3),
    (TOP, 3),
    (BOTTOM, 3),
    (TOP_LEFT, 2),
    (TOP_RIGHT, 2),
    (BOTTOM_LEFT, 2),
    (BOTTOM_RIGHT, 2),
    (HORIZONTAL, 2),
    (VERTICAL, 2),
]


def classify(
    has_right: bool,
    has_left: bool,
    has_down: bool,
    has_up: bool,
) -> Connectivity | None:
    """Classify a filled cell from its filled neighbours.

    Returns:
        The connectivity class, or None when fewer than two neighbours
        are filled (such a cell carries no bits).
    """
    return _CLASSIFY.get((has_right, has_left, has_down, has_up))


def get_bits(connectivity: Connectivity) -> int:
    """Bit width of a connectivity class."""
    return connectivity.bits


def get_glyph(connectivity: Connectivity, point: int) -> str:
    """Select the glyph drawing `point` for a cell of this class.

    Args:
        connectivity: Connectivity class of the cell.
        point: Payload value, 0 <= point < 2 ** connectivity.bits.

    Returns:
        A single box-drawing character.

    Raises:
        ValueError: If point does not fit the class's bit width.
    """
    family = connectivity.glyphs
    if not 0 <= point < len(family):
        raise ValueError(
            f"Point {point} out of range for {connectivity.name} "
            f"({connectivity.bits} bits, max {len(family) - 1})"
        )
    return family[point]
