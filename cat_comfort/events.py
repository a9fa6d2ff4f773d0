"""
Trace events raised on notable transitions.

The manager hands these to an optional listener so a host can log, animate
or record them. Nothing in the simulation depends on them.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from cat_comfort.state import GameStatus, InterferenceType


class ClearReason(str, Enum):
    """Why an interference event ended."""
    EXPIRED = "expired"
    CLICKED = "clicked"


class ResolutionReason(str, Enum):
    """Why a round ended."""
    TIMER_EXPIRED = "timer_expired"
    SUCCESS_HOLD = "success_hold"


@dataclass(frozen=True)
class GameEvent:
    """Base class for trace events."""
    pass


@dataclass(frozen=True)
class InterferenceTriggeredEvent(GameEvent):
    """A new interference started."""
    interference_type: InterferenceType
    duration: float
    target_temperature: float  # target after the event's side effect


@dataclass(frozen=True)
class InterferenceClearedEvent(GameEvent):
    """An interference ended, by timer or by the center button."""
    interference_type: InterferenceType
    reason: ClearReason


@dataclass(frozen=True)
class RoundResolvedEvent(GameEvent):
    """The round left the playing status."""
    status: GameStatus
    reason: ResolutionReason
    comfort: float


EventListener = Callable[[GameEvent], None]
