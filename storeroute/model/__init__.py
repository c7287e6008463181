"""Floor-plan and route models."""

from storeroute.model.floor import FloorPlan
from storeroute.model.route import Route

__all__ = ["FloorPlan", "Route"]
