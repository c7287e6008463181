"""Error types raised for structural inconsistencies in floor plans.

Plain invalid-argument failures (missing inputs, malformed values) use the
builtin ``ValueError``. ``IntegrityError`` is reserved for data that is
well-formed but inconsistent: a bitmap that does not divide into rows, a
landmark on a blocked cell, or two cells with no path between them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from storeroute.types.base import Cell


class IntegrityError(Exception):
    """Raised when floor-plan data or reachability assumptions are violated."""


class UnreachableError(IntegrityError):
    """Raised when no path exists between two cells.

    Attributes:
        start: Cell the search started from.
        goal: Cell the search tried to reach.
    """

    def __init__(
        self, start: Cell, goal: Cell, message: Optional[str] = None
    ) -> None:
        self.start = start
        self.goal = goal
        if message is None:
            message = f"{goal} unreachable from {start}"
        super().__init__(message)
