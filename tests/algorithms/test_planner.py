"""Tests for `storeroute.algorithms.planner` route optimization."""

import logging
import math
from itertools import permutations

import pytest

from storeroute.algorithms.astar import find_shortest_path
from storeroute.algorithms.planner import PathCache, RoutePlanner, compute_optimal_route
from storeroute.config import PlannerConfig
from storeroute.exceptions import IntegrityError, UnreachableError
from storeroute.model.floor import FloorPlan
from storeroute.types.base import Cell


def _brute_force_cost(floor: FloorPlan) -> int:
    """Minimum route cost over every article ordering, without pruning."""

    def steps(a, b):
        return len(find_shortest_path(floor, a, b)) - 1

    best = math.inf
    for ordering in permutations(floor.articles):
        stops = (floor.entrance, *ordering, floor.exit)
        best = min(best, sum(steps(a, b) for a, b in zip(stops, stops[1:])))
    return best


def _assert_route_shape(floor, route):
    assert route.start == floor.entrance
    assert route.end == floor.exit
    for article in floor.articles:
        assert article in route
    for a, b in zip(route.cells, route.cells[1:]):
        assert a.manhattan(b) == 1
        assert not floor.is_blocked(b)


@pytest.fixture
def aisle_floor() -> FloorPlan:
    rows = [
        "..........",
        ".##.###.#.",
        ".#......#.",
        ".#.####.#.",
        "..........",
    ]
    return FloorPlan.from_rows(
        rows,
        entrance=(0, 0),
        exit=(9, 4),
        articles={
            (2, 2): "Apples",
            (5, 0): "Bread",
            (7, 2): "Coffee",
            (3, 4): "Dates",
            (9, 1): "Eggs",
        },
    )


# Path cache


def test_path_cache_stores_both_directions():
    cache = PathCache()
    a, b = Cell(0, 0), Cell(0, 2)
    cache.put(a, b, [a, Cell(0, 1), b])
    assert cache.path(a, b) == (a, Cell(0, 1), b)
    assert cache.path(b, a) == (b, Cell(0, 1), a)
    assert cache.distance(a, b) == 2
    assert cache.distance(b, a) == 2
    assert (a, b) in cache and (b, a) in cache
    assert len(cache) == 2
    assert set(cache) == {(a, b), (b, a)}


def test_path_cache_missing_pair():
    with pytest.raises(KeyError):
        PathCache().path(Cell(0, 0), Cell(1, 1))


# Reference store


def test_reference_store_route(store_floor):
    route = store_floor.compute_optimal_route()
    assert len(route) == 17
    assert route.cost == 16
    assert route.labels == ("Cheese", "Butter", "Ponies", "Salad")
    assert route.order == (Cell(0, 2), Cell(2, 3), Cell(5, 0), Cell(6, 2))
    assert route.cells == tuple(
        Cell(x, y)
        for x, y in [
            (0, 0),
            (0, 1),
            (0, 2),
            (0, 3),
            (1, 3),
            (2, 3),
            (3, 3),
            (3, 2),
            (3, 1),
            (3, 0),
            (4, 0),
            (5, 0),
            (6, 0),
            (6, 1),
            (6, 2),
            (7, 2),
            (7, 3),
        ]
    )
    _assert_route_shape(store_floor, route)


def test_reference_store_after_edits(store_floor):
    assert len(store_floor.compute_optimal_route()) == 17

    store_floor.block((2, 2))
    store_floor.block((3, 2))
    store_floor.free((1, 1))

    route = store_floor.compute_optimal_route()
    assert len(route) == 21
    assert route.cost == 20
    assert route.cost == _brute_force_cost(store_floor)
    _assert_route_shape(store_floor, route)


def test_route_cost_matches_brute_force(store_floor, aisle_floor):
    for floor in (store_floor, aisle_floor):
        route = compute_optimal_route(floor)
        assert route.cost == _brute_force_cost(floor)
        _assert_route_shape(floor, route)


def test_route_visits_articles_in_reported_order(aisle_floor):
    route = aisle_floor.compute_optimal_route()
    positions = [route.cells.index(cell) for cell in route.order]
    assert positions == sorted(positions)
    assert set(route.order) == set(aisle_floor.articles)
    assert route.labels == tuple(aisle_floor.articles[c] for c in route.order)


# Degenerate inputs


def test_no_articles_is_direct_path(store_floor):
    floor = FloorPlan(bytes([64, 72, 72, 8]), 1, (0, 0), (7, 3))
    route = floor.compute_optimal_route()
    assert list(route.cells) == find_shortest_path(floor, (0, 0), (7, 3))
    assert route.order == () and route.labels == ()
    assert route.cost == 16


def test_no_articles_same_entrance_and_exit():
    floor = FloorPlan(bytes(1), 1, (3, 0), (3, 0))
    route = floor.compute_optimal_route()
    assert route.cells == (Cell(3, 0),)
    assert route.cost == 0


def test_single_article(open_floor):
    floor = FloorPlan(bytes(4), 1, (0, 0), (7, 3), {(0, 3): "Milk"})
    route = floor.compute_optimal_route()
    assert route.cost == 10
    assert Cell(0, 3) in route
    assert route.labels == ("Milk",)


def test_article_on_entrance(open_floor):
    floor = FloorPlan(bytes(4), 1, (0, 0), (7, 3), {(0, 0): "Basket"})
    route = floor.compute_optimal_route()
    assert route.cost == open_floor.entrance.manhattan(open_floor.exit)
    assert route.order == (Cell(0, 0),)


# Failures


def test_ringed_article_raises_unreachable(ringed_floor):
    with pytest.raises(UnreachableError, match="Milk") as exc_info:
        ringed_floor.compute_optimal_route()
    assert isinstance(exc_info.value, IntegrityError)
    assert Cell(3, 2) in (exc_info.value.start, exc_info.value.goal)
    assert isinstance(exc_info.value.__cause__, UnreachableError)


def test_unreachable_exit_raises(store_floor):
    # Wall off the exit's two neighbours
    store_floor.block((6, 3))
    store_floor.block((7, 2))
    with pytest.raises(IntegrityError, match="exit"):
        store_floor.compute_optimal_route()


# Planner behaviour


def test_pruning_skips_orderings(store_floor):
    planner = RoutePlanner(store_floor)
    route = planner.plan()
    assert route.cost == 16
    assert planner.pruned > 0
    assert planner.evaluated < math.factorial(len(store_floor.articles))


def test_repeated_plans_are_identical(aisle_floor):
    planner = RoutePlanner(aisle_floor)
    assert planner.plan() == planner.plan()
    assert compute_optimal_route(aisle_floor) == planner.plan()


def test_planner_does_not_modify_floor(store_floor):
    before = store_floor.to_bytes()
    store_floor.compute_optimal_route()
    assert store_floor.to_bytes() == before


def test_large_article_count_logs_warning(store_floor, caplog):
    with caplog.at_level(logging.WARNING, logger="storeroute"):
        RoutePlanner(store_floor, config=PlannerConfig(warn_waypoints=2)).plan()
    assert any("may take very long" in r.getMessage() for r in caplog.records)


def test_result_logged_at_info(store_floor, caplog):
    with caplog.at_level(logging.INFO, logger="storeroute"):
        store_floor.compute_optimal_route()
    messages = [r.getMessage() for r in caplog.records]
    assert any("Optimal route: 16 steps" in m for m in messages)
