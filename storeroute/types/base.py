"""Base types shared across storeroute.

Defines the ``Cell`` coordinate value type and the numeric cost alias used by
the search and planning algorithms.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

#: Path cost in unit steps between 4-adjacent cells.
Cost = int

#: Anything accepted where a cell is expected: a ``Cell`` or an ``(x, y)`` pair.
CellLike = Union["Cell", Tuple[int, int], Sequence[int]]


@dataclass(frozen=True, order=True)
class Cell:
    """A single addressable floor position.

    Cells are plain values: two cells are equal iff both coordinates match, and
    they carry no search state of their own.

    Attributes:
        x: Column index, growing to the right.
        y: Row index, growing downwards.
    """

    x: int
    y: int

    @classmethod
    def of(cls, value: CellLike) -> Cell:
        """Coerce ``value`` into a ``Cell``.

        Args:
            value: A ``Cell`` or a two-element ``(x, y)`` sequence of integers.

        Returns:
            The corresponding ``Cell``.

        Raises:
            ValueError: If ``value`` is None or not a pair of integers.
        """
        if isinstance(value, Cell):
            return value
        if value is None or isinstance(value, (str, bytes)):
            raise ValueError(f"Expected a cell or (x, y) pair, got {value!r}")
        try:
            x, y = value
        except (TypeError, ValueError) as exc:
            raise ValueError(
                f"Expected a cell or (x, y) pair, got {value!r}"
            ) from exc
        if isinstance(x, bool) or isinstance(y, bool):
            raise ValueError(f"Cell coordinates must be integers, got {value!r}")
        if not isinstance(x, int) or not isinstance(y, int):
            raise ValueError(f"Cell coordinates must be integers, got {value!r}")
        return cls(x, y)

    def manhattan(self, other: Cell) -> Cost:
        """Return the obstacle-free step count between this cell and ``other``."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"Cell({self.x}/{self.y})"
