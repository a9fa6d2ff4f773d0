"""
Temperature control: how the two held controls and natural cooling move
the current temperature, and whether it sits inside the target band.
NO UI DEPENDENCIES.
"""
import math

from cat_comfort.config import GameConfig
from cat_comfort.random_source import RandomSource
from cat_comfort.state import clamp_unit


def sanitize_dt(dt: float) -> float:
    """Negative or non-finite elapsed time counts as no time at all."""
    if not math.isfinite(dt) or dt < 0:
        return 0.0
    return dt


class TemperatureSystem:
    """
    Pure temperature rules for one config.
    """

    def __init__(self, config: GameConfig, rng: RandomSource):
        self.config = config
        self.rng = rng

    def update_temperature(
        self,
        current: float,
        plus_held: bool,
        minus_held: bool,
        reversed_controls: bool,
        dt: float
    ) -> float:
        """
        Advance temperature by dt seconds.

        Plus wins over minus when both are held. With neither held the
        temperature cools.
        """
        dt = sanitize_dt(dt)

        # Reversal swaps what each control means
        effective_plus = minus_held if reversed_controls else plus_held
        effective_minus = plus_held if reversed_controls else minus_held

        if effective_plus:
            current += self.config.temperature_change_rate * dt
        elif effective_minus:
            current -= self.config.temperature_change_rate * dt
        else:
            current -= self.config.temperature_cooling_rate * dt

        return clamp_unit(current)

    def generate_random_target_temperature(self) -> float:
        """Uniform draw between the configured target bounds."""
        low, high = sorted((self.config.target_temperature_min, self.config.target_temperature_max))
        return clamp_unit(self.rng.uniform(low, high))

    def is_temperature_in_range(self, current: float, target: float, tolerance: float) -> bool:
        """Inclusive: exactly `tolerance` away still counts."""
        return abs(current - target) <= tolerance

    def get_temperature_difference(self, current: float, target: float) -> float:
        return abs(current - target)

    def get_temperature_status(self, current: float, target: float, tolerance: float) -> str:
        """One of 'in_range', 'too_cold' or 'too_hot'."""
        if self.is_temperature_in_range(current, target, tolerance):
            return "in_range"
        return "too_cold" if current < target else "too_hot"
