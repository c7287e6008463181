"""Optimal article-ordering search over a floor plan.

The planner solves a Traveling Salesman Problem with fixed endpoints exactly:

1. A* paths are computed for every cell pair the route may walk directly
   (entrance to each article, each article to the exit, every article pair)
   and cached in both directions.
2. Article orderings are enumerated lexicographically. The running distance
   of the current ordering is compared against the best complete route seen
   so far; once it meets or exceeds it, every ordering sharing the current
   prefix is skipped in one step (branch and bound).
3. The segments of the best ordering are concatenated into the final route.

The search is brute force and only suitable for small article counts.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from storeroute.algorithms.astar import find_shortest_path
from storeroute.algorithms.permutations import PermutationEnumerator
from storeroute.config import PLANNER_CONFIG, PlannerConfig
from storeroute.exceptions import UnreachableError
from storeroute.logging import get_logger
from storeroute.model.floor import FloorPlan
from storeroute.model.route import Route
from storeroute.types.base import Cell, Cost

logger = get_logger(__name__)

CellPair = Tuple[Cell, Cell]


class PathCache:
    """Shortest paths keyed by ordered cell pair.

    ``(a, b)`` and ``(b, a)`` are separate entries; ``put`` fills both, the
    second with the reversed path.
    """

    def __init__(self) -> None:
        self._paths: Dict[CellPair, Tuple[Cell, ...]] = {}

    def put(self, a: Cell, b: Cell, path: Sequence[Cell]) -> None:
        """Store ``path`` from ``a`` to ``b`` and its reverse from ``b`` to ``a``."""
        forward = tuple(path)
        self._paths[(a, b)] = forward
        self._paths[(b, a)] = forward[::-1]

    def path(self, a: Cell, b: Cell) -> Tuple[Cell, ...]:
        """Return the cached path from ``a`` to ``b``.

        Raises:
            KeyError: If the pair was never computed.
        """
        try:
            return self._paths[(a, b)]
        except KeyError:
            raise KeyError(f"No cached path from {a} to {b}") from None

    def distance(self, a: Cell, b: Cell) -> Cost:
        """Return the step count of the cached path from ``a`` to ``b``."""
        return len(self.path(a, b)) - 1

    def __contains__(self, pair: object) -> bool:
        return pair in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[CellPair]:
        return iter(self._paths)


class RoutePlanner:
    """Find the shortest entrance-to-exit route visiting every article.

    A planner holds the cache and ordering state of one computation. Use a
    new instance (or call ``plan()`` again) after editing the floor.

    Attributes:
        floor: Floor plan to route through. Treated as read-only while planning.
        config: Planner configuration.
    """

    def __init__(self, floor: FloorPlan, config: Optional[PlannerConfig] = None) -> None:
        self.floor = floor
        self.config = config or PLANNER_CONFIG
        self.evaluated = 0
        self.pruned = 0

    def plan(self) -> Route:
        """Compute the optimal route.

        Returns:
            The route with minimal step count. If several orderings tie, the
            lexicographically first one (in article insertion order) wins.

        Raises:
            UnreachableError: If some required cell pair has no path.
        """
        floor = self.floor
        waypoints: List[Cell] = list(floor.articles.keys())
        self.evaluated = 0
        self.pruned = 0

        if self.config.is_large(len(waypoints)):
            logger.warning(
                "Exhaustive ordering search over %d articles may take very long",
                len(waypoints),
            )

        cache = self._build_cache(waypoints)

        if not waypoints:
            route = Route(cache.path(floor.entrance, floor.exit))
            logger.info("Route without articles: %d steps", route.cost)
            return route

        best_order, best_distance = self._search(waypoints, cache)
        route = self._assemble(best_order, cache)
        logger.info(
            "Optimal route: %d steps through %s",
            best_distance,
            " -> ".join(route.labels),
        )
        return route

    def _build_cache(self, waypoints: Sequence[Cell]) -> PathCache:
        """Compute every pairwise path the route may traverse directly."""
        floor = self.floor
        cache = PathCache()
        if not waypoints:
            self._cache_path(cache, floor.entrance, floor.exit)
            return cache

        for i, a in enumerate(waypoints):
            self._cache_path(cache, floor.entrance, a)
            self._cache_path(cache, a, floor.exit)
            for b in waypoints[i + 1 :]:
                self._cache_path(cache, a, b)

        logger.debug(
            "Cached %d directed paths for %d articles", len(cache), len(waypoints)
        )
        return cache

    def _cache_path(self, cache: PathCache, a: Cell, b: Cell) -> None:
        if (a, b) in cache:
            return
        try:
            path = find_shortest_path(self.floor, a, b)
        except UnreachableError as exc:
            raise UnreachableError(
                a,
                b,
                f"No path between {self._describe(a)} and {self._describe(b)}",
            ) from exc
        cache.put(a, b, path)

    def _search(
        self, waypoints: Sequence[Cell], cache: PathCache
    ) -> Tuple[Tuple[int, ...], Cost]:
        """Run the pruned ordering search and return the best ordering and cost."""
        entrance = self.floor.entrance
        exit_cell = self.floor.exit
        enumerator = PermutationEnumerator(len(waypoints))
        best_order: Optional[Tuple[int, ...]] = None
        best_distance: Optional[Cost] = None

        for ordering in enumerator:
            self.evaluated += 1
            running: Cost = 0
            last = entrance
            abandoned = False
            for position, index in enumerate(ordering):
                current = waypoints[index]
                running += cache.distance(last, current)
                last = current
                if best_distance is not None and running >= best_distance:
                    # No completion of this prefix can beat the best route.
                    enumerator.skip_remaining_right(position)
                    self.pruned += 1
                    abandoned = True
                    break
            if abandoned:
                continue

            running += cache.distance(last, exit_cell)
            if best_distance is None or running < best_distance:
                best_order = ordering
                best_distance = running

        assert best_order is not None and best_distance is not None
        logger.debug(
            "Ordering search: %d evaluated, %d pruned, best %d steps",
            self.evaluated,
            self.pruned,
            best_distance,
        )
        return best_order, best_distance

    def _assemble(self, ordering: Sequence[int], cache: PathCache) -> Route:
        """Concatenate cached segments for ``ordering`` into a route."""
        floor = self.floor
        waypoints = list(floor.articles.keys())
        order = tuple(waypoints[index] for index in ordering)

        cells: List[Cell] = [floor.entrance]
        last = floor.entrance
        for stop in (*order, floor.exit):
            # Each segment starts with the previous segment's last cell.
            cells.extend(cache.path(last, stop)[1:])
            last = stop

        return Route(
            cells=tuple(cells),
            order=order,
            labels=tuple(floor.articles[cell] for cell in order),
        )

    def _describe(self, cell: Cell) -> str:
        floor = self.floor
        if cell in floor.articles:
            return f"article '{floor.articles[cell]}' at {cell}"
        if cell == floor.entrance:
            return f"entrance {cell}"
        if cell == floor.exit:
            return f"exit {cell}"
        return str(cell)


def compute_optimal_route(
    floor: FloorPlan, config: Optional[PlannerConfig] = None
) -> Route:
    """Return the shortest entrance-to-exit route through every article of ``floor``.

    Convenience wrapper around ``RoutePlanner(floor, config).plan()``.
    """
    return RoutePlanner(floor, config=config).plan()
