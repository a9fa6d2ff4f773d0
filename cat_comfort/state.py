"""
Core data structures for the comfort game.
NO UI DEPENDENCIES.

GameState is an immutable snapshot. Every transition builds a new one with
dataclasses.replace, so two states compare equal exactly when every field
(including the nested interference event) matches.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional


class GameStatus(str, Enum):
    """Round status. Anything other than PLAYING is frozen."""
    PLAYING = "playing"
    SUCCESS = "success"
    FAILURE = "failure"
    PAUSED = "paused"


class InterferenceType(str, Enum):
    """Kinds of interference. NONE means no event is active."""
    NONE = "none"
    CONTROLS_REVERSED = "controls_reversed"   # plus and minus swap meaning
    TEMPERATURE_SHOCK = "temperature_shock"   # target jumps to an extreme
    BUBBLE_OBSTRUCTION = "bubble_obstruction"  # visual only


ACTIVE_INTERFERENCE_TYPES = (
    InterferenceType.CONTROLS_REVERSED,
    InterferenceType.TEMPERATURE_SHOCK,
    InterferenceType.BUBBLE_OBSTRUCTION,
)


@dataclass(frozen=True)
class InterferenceEvent:
    """A timed perturbation. Inactive events always have type NONE."""
    type: InterferenceType = InterferenceType.NONE
    is_active: bool = False
    duration: float = 0.0
    remaining_time: float = 0.0


@dataclass(frozen=True)
class GameState:
    """Authoritative per-tick snapshot of a round."""
    current_temperature: float
    target_temperature: float
    tolerance_width: float
    current_comfort: float
    game_timer: float
    success_hold_timer: float = 0.0
    is_plus_held: bool = False
    is_minus_held: bool = False
    game_status: GameStatus = GameStatus.PLAYING
    interference_event: InterferenceEvent = field(default_factory=InterferenceEvent)
    interference_timer: float = 0.0
    is_controls_reversed: bool = False

    @property
    def is_playing(self) -> bool:
        return self.game_status == GameStatus.PLAYING

    @property
    def is_finished(self) -> bool:
        """True once the round resolved to success or failure."""
        return self.game_status in (GameStatus.SUCCESS, GameStatus.FAILURE)


def with_controls(
    state: GameState,
    plus_held: Optional[bool] = None,
    minus_held: Optional[bool] = None
) -> GameState:
    """
    Write the control latches. None leaves a latch as it is.
    The input layer calls this between ticks; the latest write wins.
    """
    changes = {}
    if plus_held is not None:
        changes["is_plus_held"] = plus_held
    if minus_held is not None:
        changes["is_minus_held"] = minus_held
    if not changes:
        return state
    return replace(state, **changes)


def clamp_unit(value: float) -> float:
    """Clamp to 0.0 - 1.0."""
    return max(0.0, min(1.0, value))
