"""
Comfort: rises while temperature is inside tolerance, falls outside it.
NO UI DEPENDENCIES.
"""
from cat_comfort.config import GameConfig
from cat_comfort.constants import MAX_COMFORT
from cat_comfort.state import clamp_unit
from cat_comfort.systems.temperature import sanitize_dt

TREND_THRESHOLD = 0.01


class ComfortSystem:
    """Pure comfort rules for one config."""

    def __init__(self, config: GameConfig):
        self.config = config

    def update_comfort(self, current: float, in_range: bool, dt: float) -> float:
        """Advance comfort by dt seconds, clamped to 0.0 - 1.0."""
        delta = self.config.comfort_change_rate * sanitize_dt(dt)
        current = current + delta if in_range else current - delta
        return clamp_unit(current)

    def is_max_comfort(self, level: float) -> bool:
        """Reached once the clamped value saturates at the ceiling."""
        return level >= MAX_COMFORT

    def is_comfort_failure(self, level: float) -> bool:
        return level <= 0.0

    def is_success_condition_met(self, level: float) -> bool:
        """Used to resolve a round whose timer ran out."""
        return level >= self.config.success_comfort_threshold

    def get_comfort_status(self, level: float) -> str:
        if level >= 0.8:
            return "excellent"
        if level >= 0.6:
            return "good"
        if level >= 0.4:
            return "fair"
        if level >= 0.2:
            return "poor"
        return "critical"

    def get_comfort_trend(self, current: float, previous: float) -> str:
        """'increasing', 'decreasing' or 'stable' (changes under 1% are stable)."""
        difference = current - previous
        if difference > TREND_THRESHOLD:
            return "increasing"
        if difference < -TREND_THRESHOLD:
            return "decreasing"
        return "stable"
