"""
Interference events: generation, expiry and the center-button rules.
NO UI DEPENDENCIES.

An event moves NONE -> one active type -> NONE. It ends either when its
remaining time runs out or, for clearable types, when the player clicks
the center button.
"""
from dataclasses import dataclass, replace
from typing import Union

from cat_comfort.config import GameConfig
from cat_comfort.random_source import RandomSource
from cat_comfort.state import (
    ACTIVE_INTERFERENCE_TYPES, InterferenceEvent, InterferenceType, clamp_unit
)
from cat_comfort.systems.temperature import sanitize_dt


@dataclass(frozen=True)
class InterferenceInfo:
    """Display text for an interference type."""
    icon: str
    title: str
    description: str


_INTERFERENCE_CONTENT = {
    InterferenceType.CONTROLS_REVERSED: InterferenceInfo(
        icon="🔄",
        title="Controls Reversed!",
        description="The + and - buttons are swapped!",
    ),
    InterferenceType.TEMPERATURE_SHOCK: InterferenceInfo(
        icon="⚡",
        title="Temperature Shock!",
        description="The target temperature has shifted!",
    ),
    InterferenceType.BUBBLE_OBSTRUCTION: InterferenceInfo(
        icon="🫧",
        title="Bubble Trouble!",
        description="Bubbles are blocking your view!",
    ),
}

DEFAULT_INTERFERENCE_INFO = InterferenceInfo(
    icon="⚠️",
    title="Interference!",
    description="Something is wrong!",
)


def coerce_interference_type(value: Union[InterferenceType, str, None]) -> InterferenceType:
    """Map any value to a known type; unknown values become NONE."""
    if isinstance(value, InterferenceType):
        return value
    try:
        return InterferenceType(value)
    except ValueError:
        return InterferenceType.NONE


class InterferenceSystem:
    """
    Interference rules for one config and random source.
    """

    def __init__(self, config: GameConfig, rng: RandomSource):
        self.config = config
        self.rng = rng

    def generate_random_interference_interval(self) -> float:
        """Seconds until the next interference may start."""
        low, high = sorted((self.config.interference_min_interval, self.config.interference_max_interval))
        return max(0.0, self.rng.uniform(low, high))

    def should_trigger_interference(self, timer: float, is_active: bool) -> bool:
        """Never retriggers while an event is running."""
        return timer <= 0 and not is_active

    def get_random_interference_type(self) -> InterferenceType:
        """Equal chance for each active type."""
        return self.rng.choice(ACTIVE_INTERFERENCE_TYPES)

    def create_interference_event(self, interference_type: InterferenceType) -> InterferenceEvent:
        """
        Start an event of the given type.
        Every type lasts `interference_duration`; NONE or an unknown value
        yields a cleared event.
        """
        interference_type = coerce_interference_type(interference_type)
        if interference_type == InterferenceType.NONE:
            return self.clear_interference_event()

        duration = max(0.0, self.config.interference_duration)
        return InterferenceEvent(
            type=interference_type,
            is_active=True,
            duration=duration,
            remaining_time=duration,
        )

    def update_interference_event(self, event: InterferenceEvent, dt: float) -> InterferenceEvent:
        """Count an active event down; a spent event comes back cleared."""
        if not event.is_active:
            return event

        remaining = max(0.0, event.remaining_time - sanitize_dt(dt))
        if remaining <= 0:
            return self.clear_interference_event()
        return replace(event, remaining_time=remaining)

    def clear_interference_event(self) -> InterferenceEvent:
        return InterferenceEvent(
            type=InterferenceType.NONE,
            is_active=False,
            duration=0.0,
            remaining_time=0.0,
        )

    def apply_temperature_shock(self) -> float:
        """New target temperature: the low or high shock value, 50/50."""
        return clamp_unit(self.rng.choice((self.config.shock_low_target, self.config.shock_high_target)))

    def can_be_cleared_by_click(self, interference_type: InterferenceType) -> bool:
        """Controls reversal only ends when its timer runs out."""
        return interference_type != InterferenceType.CONTROLS_REVERSED

    def get_interference_content(self, interference_type: Union[InterferenceType, str, None]) -> InterferenceInfo:
        """Display text, with a generic fallback for anything unrecognised."""
        return _INTERFERENCE_CONTENT.get(coerce_interference_type(interference_type), DEFAULT_INTERFERENCE_INFO)
