"""Global pytest configuration and shared floor-plan fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from storeroute.model.floor import FloorPlan

INTEGRATION_DIR = Path(__file__).parent / "integration"

# Reference store layout, 8x4 cells, one byte per row:
#
#   ^█░░░P░░     ^ entrance (0,0)   $ exit (7,3)
#   ░█░░█░░░     C Cheese (0,2)     B Butter (2,3)
#   C█░░█░S░     P Ponies (5,0)     S Salad (6,2)
#   ░░B░█░░$
STORE_BITMAP = bytes([64, 72, 72, 8])
STORE_ARTICLES = {
    (0, 2): "Cheese",
    (2, 3): "Butter",
    (5, 0): "Ponies",
    (6, 2): "Salad",
}


@pytest.fixture
def store_floor() -> FloorPlan:
    return FloorPlan(STORE_BITMAP, 1, (0, 0), (7, 3), STORE_ARTICLES)


@pytest.fixture
def open_floor() -> FloorPlan:
    """8x4 floor without obstacles or articles."""
    return FloorPlan(bytes(4), 1, (0, 0), (7, 3))


@pytest.fixture
def ringed_floor() -> FloorPlan:
    """Article 'Milk' at (3, 2) enclosed by a ring of blocked cells."""
    rows = [
        ".......",
        "..###..",
        "..#.#..",
        "..###..",
        ".......",
    ]
    return FloorPlan.from_rows(
        rows,
        entrance=(0, 0),
        exit=(6, 4),
        articles={(0, 4): "Bread", (3, 2): "Milk"},
    )


@pytest.fixture
def store_yaml_path() -> Path:
    return INTEGRATION_DIR / "store_1.yaml"
