"""Configuration classes for storeroute components."""

from dataclasses import dataclass


@dataclass
class PlannerConfig:
    """Configuration for the waypoint-ordering search."""

    # Waypoint count above which the exhaustive search logs a slowness warning
    warn_waypoints: int = 10

    def is_large(self, waypoint_count: int) -> bool:
        """Return True if ``waypoint_count`` exceeds the warning threshold."""
        return waypoint_count > self.warn_waypoints


@dataclass
class RenderConfig:
    """Glyphs used by the diagnostic floor renderer, one per cell category."""

    entrance: str = "^"
    exit: str = "$"
    route: str = "·"
    blocked: str = "█"
    free: str = "░"

    def __post_init__(self) -> None:
        for name in ("entrance", "exit", "route", "blocked", "free"):
            glyph = getattr(self, name)
            if not isinstance(glyph, str) or len(glyph) != 1:
                raise ValueError(
                    f"Render glyph '{name}' must be a single character, got {glyph!r}"
                )


# Global configuration instances
PLANNER_CONFIG = PlannerConfig()
RENDER_CONFIG = RenderConfig()
