"""
Cat Comfort - deterministic simulation core for a temperature-balancing
arcade mini-game.
"""

from cat_comfort.config import (
    EngineSettings, GameConfig, config_for_round, get_game_config, get_settings, round_duration
)
from cat_comfort.events import (
    ClearReason, GameEvent, InterferenceClearedEvent, InterferenceTriggeredEvent,
    ResolutionReason, RoundResolvedEvent
)
from cat_comfort.manager import GameStateManager, GameStateSummary
from cat_comfort.random_source import RandomSource, create_random_source
from cat_comfort.records import state_from_record, state_to_record
from cat_comfort.state import (
    GameState, GameStatus, InterferenceEvent, InterferenceType, with_controls
)

__all__ = [
    "ClearReason",
    "EngineSettings",
    "GameConfig",
    "GameEvent",
    "GameState",
    "GameStateManager",
    "GameStateSummary",
    "GameStatus",
    "InterferenceClearedEvent",
    "InterferenceEvent",
    "InterferenceTriggeredEvent",
    "InterferenceType",
    "RandomSource",
    "ResolutionReason",
    "RoundResolvedEvent",
    "config_for_round",
    "create_random_source",
    "get_game_config",
    "get_settings",
    "round_duration",
    "state_from_record",
    "state_to_record",
    "with_controls",
]
