"""Shared value types."""

from storeroute.types.base import Cell, CellLike, Cost

__all__ = ["Cell", "CellLike", "Cost"]
