"""
Countdown and hold timers.
NO UI DEPENDENCIES.
"""
import math

from cat_comfort.config import GameConfig
from cat_comfort.systems.temperature import sanitize_dt


class TimerSystem:
    """Timer rules for one config. All values are simulated seconds."""

    def __init__(self, config: GameConfig):
        self.config = config

    def update_game_timer(self, timer: float, dt: float) -> float:
        return max(0.0, timer - sanitize_dt(dt))

    def update_interference_timer(self, timer: float, dt: float) -> float:
        return max(0.0, timer - sanitize_dt(dt))

    def update_success_hold_timer(self, current: float, is_max_comfort: bool, dt: float) -> float:
        """
        Accumulate while comfort is at max. Any tick below max resets the
        streak to zero.
        """
        if is_max_comfort:
            return current + sanitize_dt(dt)
        return 0.0

    def is_time_failure(self, game_timer: float) -> bool:
        return game_timer <= 0

    def is_success_hold_complete(self, success_hold_timer: float) -> bool:
        return success_hold_timer >= self.config.success_hold_time

    def get_remaining_success_time(self, success_hold_timer: float) -> int:
        """Whole seconds of hold still needed, never negative."""
        return max(0, math.ceil(self.config.success_hold_time - success_hold_timer))

    def get_time_urgency(self, game_timer: float, duration: float) -> str:
        """'normal' above half time, 'warning' above a fifth, else 'critical'."""
        if duration <= 0:
            return "critical"
        ratio = game_timer / duration
        if ratio > 0.5:
            return "normal"
        if ratio > 0.2:
            return "warning"
        return "critical"

    @staticmethod
    def format_time(seconds: float) -> str:
        """MM:SS, truncating fractions."""
        seconds = max(0, int(seconds))
        return f"{seconds // 60:02d}:{seconds % 60:02d}"
