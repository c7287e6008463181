"""storeroute: Shortest shopping routes through store floor plans.

storeroute computes the shortest walking route that starts at a store's
entrance, visits every requested article in the best order, and ends at the
counter, avoiding blocked floor cells. Point-to-point distances come from A*
search; the article order is found exactly by a branch-and-bound search over
all orderings.

Primary API:
    FloorPlan - Packed obstacle bitmap with entrance, exit and articles
    FloorPlan.compute_optimal_route() - Plan the optimal route
    find_shortest_path() - A* between two cells
    PermutationEnumerator - Lexicographic orderings with prefix skipping
    render_floor() - One-glyph-per-cell text view

Example:
    from storeroute import FloorPlan, render_floor

    floor = FloorPlan.from_rows(
        [".#......", ".#..#...", ".#..#...", "....#..."],
        entrance=(0, 0),
        exit=(7, 3),
        articles={(0, 2): "Cheese", (5, 0): "Ponies"},
    )
    route = floor.compute_optimal_route()
    print(route.cost)
    print(render_floor(floor, route))
"""

from __future__ import annotations

from storeroute import cli, logging
from storeroute._version import __version__
from storeroute.algorithms.astar import find_shortest_path
from storeroute.algorithms.permutations import PermutationEnumerator
from storeroute.algorithms.planner import PathCache, RoutePlanner, compute_optimal_route
from storeroute.config import PlannerConfig, RenderConfig
from storeroute.exceptions import IntegrityError, UnreachableError
from storeroute.lib.nx import to_networkx
from storeroute.model.floor import FloorPlan
from storeroute.model.route import Route
from storeroute.render import render_floor
from storeroute.types.base import Cell

__all__ = [
    # Version
    "__version__",
    # Model
    "Cell",
    "FloorPlan",
    "Route",
    # Algorithms
    "find_shortest_path",
    "PermutationEnumerator",
    "PathCache",
    "RoutePlanner",
    "compute_optimal_route",
    # Errors
    "IntegrityError",
    "UnreachableError",
    # Configuration
    "PlannerConfig",
    "RenderConfig",
    # Rendering and integrations
    "render_floor",
    "to_networkx",
    # Utilities
    "cli",
    "logging",
]
