"""Floor plan model: a packed obstacle bitmap plus landmarks and articles.

The floor is stored one bit per cell, row-major, with each row padded to a
byte boundary. The most significant bit of a byte is the leftmost cell. A set
bit marks a blocked cell. Cells outside ``[0, width) x [0, height)`` count as
blocked.

Besides obstacles the plan designates an entrance, an exit (the counter), and
a mapping of article cells to labels. All of these must be passable when the
plan is constructed.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Iterable,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

import numpy as np

from storeroute.exceptions import IntegrityError
from storeroute.logging import get_logger
from storeroute.types.base import Cell, CellLike

if TYPE_CHECKING:
    from storeroute.config import PlannerConfig
    from storeroute.model.route import Route

logger = get_logger(__name__)


class FloorPlan:
    """Rectangular store floor with obstacles, entrance, exit and articles.

    The obstacle bitmap is copied on construction, so later ``block()`` and
    ``free()`` calls never touch the caller's buffer. Landmarks and articles
    are fixed for the lifetime of the plan; only passability can change, and
    only between route computations.

    Example:
        >>> floor = FloorPlan(
        ...     bytes([64, 72, 72, 8]), 1, (0, 0), (7, 3), {(0, 2): "Cheese"}
        ... )
        >>> floor.width, floor.height
        (8, 4)
        >>> floor.is_blocked((1, 0))
        True
    """

    def __init__(
        self,
        floor: Any,
        row_bytes: int,
        entrance: Optional[CellLike],
        exit: Optional[CellLike],
        articles: Optional[Mapping[CellLike, str]] = None,
        width: Optional[int] = None,
    ) -> None:
        """Initialize the plan and check it for integrity.

        Args:
            floor: Packed obstacle bitmap (bytes-like or iterable of 0..255).
            row_bytes: Number of bytes per floor row.
            entrance: Start cell of every route.
            exit: End cell of every route.
            articles: Mapping of article cell to non-empty label.
            width: Logical width in cells. Defaults to ``row_bytes * 8``; any
                remaining padding bits in a row are treated as out of bounds.

        Raises:
            ValueError: If a required argument is missing or malformed.
            IntegrityError: If the bitmap cannot be divided into rows, or the
                entrance, exit or an article lies on a blocked or out-of-bounds
                cell.
        """
        if floor is None:
            raise ValueError("Argument 'floor' missing.")
        if entrance is None:
            raise ValueError("Argument 'entrance' missing.")
        if exit is None:
            raise ValueError("Argument 'exit' missing.")
        if isinstance(row_bytes, bool) or not isinstance(row_bytes, int):
            raise ValueError(f"'row_bytes' must be an integer, got {row_bytes!r}")
        if row_bytes <= 0:
            raise ValueError(f"'row_bytes' must be positive, got {row_bytes}")

        if isinstance(floor, (int, str)):
            raise ValueError(f"Floor bitmap must be bytes-like, got {floor!r}")
        try:
            raw = bytes(floor)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid floor bitmap: {exc}") from exc

        if len(raw) % row_bytes != 0:
            raise IntegrityError(
                f"Can't divide floor of {len(raw)} bytes into rows of "
                f"{row_bytes} bytes."
            )

        height = len(raw) // row_bytes
        self._bitmap: np.ndarray = (
            np.frombuffer(raw, dtype=np.uint8).copy().reshape(height, row_bytes)
        )
        self._row_bytes = row_bytes
        self._height = height

        max_width = row_bytes * 8
        if width is None:
            width = max_width
        elif isinstance(width, bool) or not isinstance(width, int):
            raise ValueError(f"'width' must be an integer, got {width!r}")
        elif not 0 < width <= max_width:
            raise ValueError(
                f"'width' must be in 1..{max_width} for {row_bytes} row bytes, "
                f"got {width}"
            )
        self._width = width

        self._entrance = Cell.of(entrance)
        self._exit = Cell.of(exit)
        if self.is_blocked(self._entrance):
            raise IntegrityError(
                f"Entrance {self._entrance} is blocked. "
                "(marked as blocked on the floor or outside of floor area)"
            )
        if self.is_blocked(self._exit):
            raise IntegrityError(
                f"Exit {self._exit} is blocked. "
                "(marked as blocked on the floor or outside of floor area)"
            )

        normalized: Dict[Cell, str] = {}
        for position, label in (articles or {}).items():
            cell = Cell.of(position)
            if not isinstance(label, str) or not label:
                raise ValueError(
                    f"Article label at {cell} must be a non-empty string, "
                    f"got {label!r}"
                )
            if cell in normalized and normalized[cell] != label:
                raise ValueError(
                    f"{cell} assigned to both '{normalized[cell]}' and '{label}'"
                )
            if self.is_blocked(cell):
                raise IntegrityError(
                    f"{cell} for article '{label}' is blocked. "
                    "(marked as blocked on the floor or outside of floor area)"
                )
            normalized[cell] = label
        self._articles: Mapping[Cell, str] = MappingProxyType(normalized)

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[str],
        entrance: CellLike,
        exit: CellLike,
        articles: Optional[Mapping[CellLike, str]] = None,
        blocked_char: str = "#",
    ) -> FloorPlan:
        """Build a plan from text rows, one character per cell.

        Args:
            rows: Equal-length strings; ``blocked_char`` marks blocked cells,
                any other character is free.
            entrance: Start cell.
            exit: End cell.
            articles: Mapping of article cell to label.
            blocked_char: Character that marks a blocked cell.

        Returns:
            A new ``FloorPlan`` whose width equals the row length.

        Raises:
            ValueError: If ``rows`` is empty or rows differ in length,
                or ``blocked_char`` is not a single character.
        """
        if not isinstance(blocked_char, str) or len(blocked_char) != 1:
            raise ValueError(
                f"blocked_char must be a single character, got {blocked_char!r}"
            )
        if not rows:
            raise ValueError("At least one floor row is required.")
        width = len(rows[0])
        if width == 0:
            raise ValueError("Floor rows must not be empty.")
        for index, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(
                    f"Floor row {index} has {len(row)} cells, expected {width}"
                )

        grid = np.array(
            [[char == blocked_char for char in row] for row in rows], dtype=bool
        )
        packed = np.packbits(grid, axis=1)
        return cls(
            packed.tobytes(),
            int(packed.shape[1]),
            entrance,
            exit,
            articles,
            width=width,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FloorPlan:
        """Build a plan from a validated floor document.

        See ``storeroute.dsl.loader.load_floor_yaml`` for the document shape.
        Edits listed under ``edits`` are applied in order after construction.
        """
        articles: Dict[Tuple[int, ...], str] = {}
        for entry in data.get("articles", []):
            position = tuple(entry["at"])
            if position in articles and articles[position] != entry["name"]:
                raise ValueError(
                    f"Cell {list(position)} assigned to both "
                    f"'{articles[position]}' and '{entry['name']}'"
                )
            articles[position] = entry["name"]
        floor_section = data["floor"]
        if "rows" in floor_section:
            plan = cls.from_rows(
                floor_section["rows"],
                tuple(data["entrance"]),
                tuple(data["exit"]),
                articles,
                blocked_char=floor_section.get("blocked_char", "#"),
            )
        else:
            plan = cls(
                floor_section["bitmap"],
                floor_section["row_bytes"],
                tuple(data["entrance"]),
                tuple(data["exit"]),
                articles,
                width=floor_section.get("width"),
            )

        for edit in data.get("edits", []):
            if "block" in edit:
                plan.block(tuple(edit["block"]))
            else:
                plan.free(tuple(edit["free"]))
        return plan

    @classmethod
    def from_yaml(cls, yaml_str: str) -> FloorPlan:
        """Load, validate and build a plan from a YAML document."""
        from storeroute.dsl.loader import load_floor_yaml

        return cls.from_dict(load_floor_yaml(yaml_str))

    @property
    def width(self) -> int:
        """Logical width of the floor in cells."""
        return self._width

    @property
    def height(self) -> int:
        """Logical height of the floor in cells."""
        return self._height

    @property
    def row_bytes(self) -> int:
        return self._row_bytes

    @property
    def entrance(self) -> Cell:
        return self._entrance

    @property
    def exit(self) -> Cell:
        return self._exit

    @property
    def articles(self) -> Mapping[Cell, str]:
        """Read-only mapping of article cell to label, in insertion order."""
        return self._articles

    def in_bounds(self, cell: CellLike) -> bool:
        c = Cell.of(cell)
        return 0 <= c.x < self._width and 0 <= c.y < self._height

    def is_blocked(self, cell: CellLike) -> bool:
        """Return True if ``cell`` is outside the floor or marked as blocked."""
        c = Cell.of(cell)
        if not (0 <= c.x < self._width and 0 <= c.y < self._height):
            return True
        # Byte c.x // 8 of row c.y holds the bit; 0x80 >> (c.x % 8) selects it.
        return bool(self._bitmap[c.y, c.x >> 3] & (0x80 >> (c.x & 7)))

    def block(self, cell: CellLike) -> None:
        """Mark ``cell`` as blocked.

        Raises:
            ValueError: If ``cell`` lies outside the floor.
        """
        c = self._require_in_bounds(cell)
        self._bitmap[c.y, c.x >> 3] |= 0x80 >> (c.x & 7)
        logger.debug("Blocked %s", c)

    def free(self, cell: CellLike) -> None:
        """Mark ``cell`` as passable.

        Raises:
            ValueError: If ``cell`` lies outside the floor.
        """
        c = self._require_in_bounds(cell)
        self._bitmap[c.y, c.x >> 3] &= ~np.uint8(0x80 >> (c.x & 7))
        logger.debug("Freed %s", c)

    def neighbors(self, cell: CellLike) -> Tuple[Cell, Cell, Cell, Cell]:
        """Return the four axis-aligned neighbours of ``cell``, unfiltered."""
        c = Cell.of(cell)
        return (
            Cell(c.x - 1, c.y),
            Cell(c.x + 1, c.y),
            Cell(c.x, c.y - 1),
            Cell(c.x, c.y + 1),
        )

    def passable_cells(self) -> Iterable[Cell]:
        """Yield every passable cell in row-major order."""
        blocked = self.to_array()
        for y in range(self._height):
            for x in range(self._width):
                if not blocked[y, x]:
                    yield Cell(x, y)

    def to_array(self) -> np.ndarray:
        """Return the obstacle map as a ``(height, width)`` boolean array.

        ``True`` marks a blocked cell. The array is a copy.
        """
        return np.unpackbits(self._bitmap, axis=1)[:, : self._width].astype(bool)

    def to_bytes(self) -> bytes:
        """Return the current packed bitmap."""
        return self._bitmap.tobytes()

    def compute_optimal_route(self, config: Optional[PlannerConfig] = None) -> Route:
        """Return the shortest entrance-to-exit route passing every article.

        Raises:
            IntegrityError: If some required cell pair has no path.
        """
        from storeroute.algorithms.planner import RoutePlanner

        return RoutePlanner(self, config=config).plan()

    def _require_in_bounds(self, cell: CellLike) -> Cell:
        c = Cell.of(cell)
        if not (0 <= c.x < self._width and 0 <= c.y < self._height):
            raise ValueError(
                f"{c} is outside of the {self._width}x{self._height} floor"
            )
        return c

    def __repr__(self) -> str:
        return (
            f"FloorPlan(width={self._width}, height={self._height}, "
            f"entrance={self._entrance}, exit={self._exit}, "
            f"articles={len(self._articles)})"
        )
