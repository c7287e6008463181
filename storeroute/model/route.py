"""Lightweight representation of a planned walking route.

The ``Route`` dataclass stores the full cell sequence from entrance to exit
together with the article visiting order that produced it. Derived values
(step cost, endpoints) are exposed as properties, and ``to_dict()`` provides a
JSON-friendly view for the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Tuple

from storeroute.types.base import Cell, Cost


@dataclass(frozen=True)
class Route:
    """A complete route through a floor plan.

    Attributes:
        cells: Inclusive sequence of cells from entrance to exit. Consecutive
            cells are 4-adjacent, except that a zero-length route holds one cell.
        order: Article cells in the order they are first visited.
        labels: Article labels matching ``order``.
    """

    cells: Tuple[Cell, ...]
    order: Tuple[Cell, ...] = ()
    labels: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.cells:
            raise ValueError("A route must contain at least one cell.")
        if len(self.order) != len(self.labels):
            raise ValueError("Route order and labels must have equal length.")

    def __len__(self) -> int:
        """Return the number of cells on the route, endpoints included."""
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __getitem__(self, idx: int) -> Cell:
        return self.cells[idx]

    def __contains__(self, cell: object) -> bool:
        return cell in self.cells

    @property
    def cost(self) -> Cost:
        """Number of unit steps walked."""
        return len(self.cells) - 1

    @property
    def start(self) -> Cell:
        return self.cells[0]

    @property
    def end(self) -> Cell:
        return self.cells[-1]

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation of the route."""
        return {
            "cost": self.cost,
            "length": len(self.cells),
            "order": [
                {"name": label, "at": list(cell.as_tuple())}
                for cell, label in zip(self.order, self.labels)
            ],
            "cells": [list(cell.as_tuple()) for cell in self.cells],
        }
