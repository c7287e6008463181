"""A* shortest path between two floor cells.

Movement is 4-directional with unit cost per step. The Manhattan distance to
the goal is admissible and consistent for this cost model, so the first time
the goal is popped from the frontier its distance is minimal.

Notes:
    All search state (distances, predecessors, frontier, closed set) is local
    to a single ``find_shortest_path`` call. Nothing is stored on ``Cell`` or
    ``FloorPlan`` objects, so independent searches never see each other's
    state.

    Frontier entries are ``(priority, sequence, cell)`` tuples. ``sequence``
    is a per-call insertion counter, so cells with equal priority are expanded
    in insertion order (FIFO). The tie-break decides which of several
    equal-length paths is returned, never whether the result is optimal.
"""

from __future__ import annotations

from heapq import heappop, heappush
from itertools import count
from typing import TYPE_CHECKING, Dict, List, Set, Tuple

from storeroute.exceptions import UnreachableError
from storeroute.types.base import Cell, CellLike, Cost

if TYPE_CHECKING:
    from storeroute.model.floor import FloorPlan


def find_shortest_path(floor: FloorPlan, start: CellLike, goal: CellLike) -> List[Cell]:
    """Find the shortest obstacle-avoiding path from ``start`` to ``goal``.

    Args:
        floor: Floor plan providing passability and neighbours.
        start: Cell to start from.
        goal: Cell to reach.

    Returns:
        Cells from ``start`` to ``goal`` inclusive. A single-element list when
        both are the same cell.

    Raises:
        UnreachableError: If ``start`` or ``goal`` is blocked, or the frontier
            is exhausted without reaching ``goal``.
    """
    src = Cell.of(start)
    dst = Cell.of(goal)
    if floor.is_blocked(src) or floor.is_blocked(dst):
        raise UnreachableError(src, dst)

    sequence = count()
    distance: Dict[Cell, Cost] = {src: 0}
    came_from: Dict[Cell, Cell] = {}
    closed: Set[Cell] = set()
    frontier: List[Tuple[Cost, int, Cell]] = [(src.manhattan(dst), next(sequence), src)]

    while frontier:
        _, _, current = heappop(frontier)
        if current in closed:
            # Stale entry; the cell was already finalized at a lower priority.
            continue
        closed.add(current)

        if current == dst:
            return _reconstruct_path(came_from, current)

        tentative = distance[current] + 1
        for neighbor in floor.neighbors(current):
            if neighbor in closed or floor.is_blocked(neighbor):
                continue
            if tentative < distance.get(neighbor, tentative + 1):
                distance[neighbor] = tentative
                came_from[neighbor] = current
                priority = tentative + neighbor.manhattan(dst)
                heappush(frontier, (priority, next(sequence), neighbor))

    raise UnreachableError(src, dst)


def _reconstruct_path(came_from: Dict[Cell, Cell], goal: Cell) -> List[Cell]:
    """Walk predecessor links back from ``goal`` and return the path in order."""
    path = [goal]
    current = goal
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path
