"""Search and planning algorithms."""

from storeroute.algorithms.astar import find_shortest_path
from storeroute.algorithms.permutations import PermutationEnumerator
from storeroute.algorithms.planner import PathCache, RoutePlanner, compute_optimal_route

__all__ = [
    "find_shortest_path",
    "PermutationEnumerator",
    "PathCache",
    "RoutePlanner",
    "compute_optimal_route",
]
