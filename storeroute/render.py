"""Diagnostic text rendering of floor plans and routes.

Each cell becomes exactly one character, rows are separated by newlines. The
glyph of a cell is picked by the first matching category:

    entrance, exit, article (first label character), route, blocked, free

Rendering is a convenience view: when the route cannot be computed, the floor
is drawn without it instead of failing.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Set

from storeroute.config import RENDER_CONFIG, RenderConfig
from storeroute.exceptions import IntegrityError
from storeroute.logging import get_logger
from storeroute.model.floor import FloorPlan
from storeroute.types.base import Cell

logger = get_logger(__name__)


def render_floor(
    floor: FloorPlan,
    route: Optional[Iterable[Cell]] = None,
    config: Optional[RenderConfig] = None,
    *,
    draw_route: bool = True,
) -> str:
    """Render ``floor`` as text, one glyph per cell.

    Args:
        floor: Floor plan to draw.
        route: Cells to mark as route. When None and ``draw_route`` is set, the
            optimal route is computed; integrity failures draw no route.
        config: Glyph configuration (defaults to ``RENDER_CONFIG``).
        draw_route: Set to False to draw the bare floor.

    Returns:
        The rendered floor with a trailing newline after every row.
    """
    glyphs = config or RENDER_CONFIG

    route_cells: Set[Cell] = set()
    if route is not None:
        route_cells = set(route)
    elif draw_route:
        try:
            route_cells = set(floor.compute_optimal_route())
        except IntegrityError as exc:
            logger.warning("Rendering floor without route: %s", exc)

    blocked = floor.to_array()
    lines: List[str] = []
    for y in range(floor.height):
        row: List[str] = []
        for x in range(floor.width):
            cell = Cell(x, y)
            if cell == floor.entrance:
                row.append(glyphs.entrance)
            elif cell == floor.exit:
                row.append(glyphs.exit)
            elif cell in floor.articles:
                row.append(floor.articles[cell][0])
            elif cell in route_cells:
                row.append(glyphs.route)
            elif blocked[y, x]:
                row.append(glyphs.blocked)
            else:
                row.append(glyphs.free)
        lines.append("".join(row) + "\n")
    return "".join(lines)
