"""Text rendering for box codes.

Draws a layout and its point sequence as rows of box-drawing glyphs:
- Blackout cells: their literal text
- Connected cells: the glyph selected by the next point
- Filled cells with fewer than two filled neighbours: a space

Once the points run out the remaining connected cells are drawn with
point 0, so the outline always closes. Those cells decode to padding bits.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from .glyphs import get_glyph
from .layout import BoxLayout

logger = structlog.get_logger(__name__)


def render_points(layout: BoxLayout, points: Sequence[int]) -> str:
    """Render points into the layout.

    Args:
        layout: Layout to draw.
        points: One point per connected cell, in row-major order. May be
            shorter than the number of connected cells.

    Returns:
        The grid as text, rows separated by newlines (none after the last).

    Raises:
        ValueError: If there are more points than connected cells, or a
            point does not fit its cell's bit width.
    """
    rows: list[str] = []
    point_idx = 0
    for y in range(layout.height):
        row: list[str] = []
        for x in range(layout.width):
            blackout = layout.blackout_at(x, y)
            if blackout is not None:
                row.append(blackout)
                continue

            connectivity = layout.connectivity_at(x, y)
            if connectivity is None:
                row.append(" ")
                continue

            point = points[point_idx] if point_idx < len(points) else 0
            point_idx += 1
            row.append(get_glyph(connectivity, point))
        rows.append("".join(row))

    if point_idx < len(points):
        raise ValueError(
            f"Layout has {point_idx} connected cells but {len(points)} points were given"
        )

    logger.debug(
        "boxes_rendered",
        width=layout.width,
        height=layout.height,
        points=len(points),
        padding_cells=point_idx - len(points),
    )
    return "\n".join(rows)
