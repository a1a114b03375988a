"""Grid layout model for box codes.

A layout is a rectangle of cells. A cell is either filled (it carries
payload bits and is drawn as a box-drawing glyph) or a blackout cell
holding one character of literal text, used to embed readable labels
inside the grid.

Each adjacency between two filled cells is worth two bits: one for
each end. A cell's connectivity class width therefore equals its number
of filled neighbours, and the layout capacity is twice the number of
filled adjacencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from .glyphs import Connectivity, classify

# Marker used by text templates for a filled cell.
TEMPLATE_FILLED = "#"


def estimate_bits(width: int, height: int) -> int:
    """Capacity of an all-filled grid, in bits.

    Args:
        width: Grid width in cells (>= 1).
        height: Grid height in cells (>= 1).

    Returns:
        2 * (horizontal adjacencies + vertical adjacencies).
    """
    length_wise = (width - 1) * 2 * height
    height_wise = (height - 1) * 2 * width
    return length_wise + height_wise


@dataclass
class BoxLayout:
    """A rectangular grid of cells.

    Attributes:
        cells: Rows of cells. None marks a filled cell, a one-character
            string marks a blackout cell showing that character.
    """

    cells: list[list[str | None]]

    def __post_init__(self) -> None:
        if not self.cells or not self.cells[0]:
            raise ValueError("Layout must have at least one row and one column")
        width = len(self.cells[0])
        for y, row in enumerate(self.cells):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} cells, expected {width}")

    @classmethod
    def filled(cls, width: int, height: int) -> BoxLayout:
        """Build an all-filled width x height layout."""
        return cls([[None] * width for _ in range(height)])

    @classmethod
    def from_template(cls, template: str) -> BoxLayout:
        """Build a layout from a text sketch.

        Each line is a row. Whitespace is ignored, '#' is a filled cell
        and any other character becomes a blackout cell showing it.

        Example:
            BoxLayout.from_template("####\\n#XX#\\n####")
        """
        rows = []
        for line in template.strip("\n").split("\n"):
            row = [None if c == TEMPLATE_FILLED else c for c in line if not c.isspace()]
            rows.append(row)
        return cls(rows)

    def to_template(self) -> str:
        """Inverse of from_template."""
        return "\n".join(
            "".join(TEMPLATE_FILLED if cell is None else cell for cell in row)
            for row in self.cells
        )

    @property
    def width(self) -> int:
        return len(self.cells[0])

    @property
    def height(self) -> int:
        return len(self.cells)

    def is_filled(self, x: int, y: int) -> bool:
        """True if (x, y) is inside the grid and filled."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return False
        return self.cells[y][x] is None

    def blackout_at(self, x: int, y: int) -> str | None:
        """Literal text of a blackout cell, or None."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return self.cells[y][x]

    def connectivity_at(self, x: int, y: int) -> Connectivity | None:
        """Connectivity class of the cell at (x, y).

        Out-of-bounds neighbours count as not filled.
        """
        if not self.is_filled(x, y):
            return None
        return classify(
            self.is_filled(x + 1, y),
            self.is_filled(x - 1, y),
            self.is_filled(x, y + 1),
            self.is_filled(x, y - 1),
        )

    def capacity_bits(self) -> int:
        """Total payload bits this layout can carry."""
        bit_count = 0
        for y in range(self.height):
            for x in range(self.width):
                if not self.is_filled(x, y):
                    continue
                # Only look right and down so each adjacency is counted once.
                if self.is_filled(x + 1, y):
                    bit_count += 2
                if self.is_filled(x, y + 1):
                    bit_count += 2
        return bit_count

    def payload_bits(self) -> int:
        """Bits actually carried: the sum of connected cell widths.

        Equal to capacity_bits() unless a filled cell has exactly one filled
        neighbour; such a cell carries nothing and its adjacency is only
        worth one bit.
        """
        return sum(self.row_bits(y) for y in range(self.height))

    def row_bits(self, y: int) -> int:
        """Payload bits carried by the cells of row y."""
        return self._line_bits((x, y) for x in range(self.width))

    def column_bits(self, x: int) -> int:
        """Payload bits carried by the cells of column x."""
        return self._line_bits((x, y) for y in range(self.height))

    def _line_bits(self, positions) -> int:
        total = 0
        for x, y in positions:
            connectivity = self.connectivity_at(x, y)
            if connectivity is not None:
                total += connectivity.bits
        return total

    def place_text(self, x: int, y: int, text: str) -> None:
        """Blackout consecutive cells starting at (x, y) with text."""
        for i, char in enumerate(text):
            self.cells[y][x + i] = char

    def add_row(self) -> None:
        """Append a row of filled cells at the bottom."""
        self.cells.append([None] * self.width)

    def add_column(self) -> None:
        """Append a filled cell to the right end of every row."""
        for row in self.cells:
            row.append(None)
