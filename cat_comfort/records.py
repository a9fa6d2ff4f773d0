"""
JSON-like records for handing state to persistence and transport layers.

Keys are camelCase to match what web clients already read
(`currentTemperature`, `interferenceEvent`, ...). Loading is lenient:
bounded values are clamped and an unknown interference type loads as a
cleared event.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cat_comfort.state import (
    GameState, GameStatus, InterferenceEvent, InterferenceType, clamp_unit
)
from cat_comfort.systems.interference import coerce_interference_type


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InterferenceEventRecord(_CamelModel):
    """Wire schema for an interference event."""

    type: str = Field(default=InterferenceType.NONE.value)
    is_active: bool = False
    duration: float = 0.0
    remaining_time: float = 0.0


class GameStateRecord(_CamelModel):
    """Wire schema for a full game state."""

    current_temperature: float
    target_temperature: float
    tolerance_width: float
    current_comfort: float
    game_timer: float
    success_hold_timer: float = 0.0
    is_plus_held: bool = False
    is_minus_held: bool = False
    game_status: GameStatus = GameStatus.PLAYING
    interference_event: InterferenceEventRecord = Field(default_factory=InterferenceEventRecord)
    interference_timer: float = 0.0
    is_controls_reversed: bool = False


def state_to_record(state: GameState) -> dict[str, Any]:
    """Serialize a state to a camelCase dict of plain JSON types."""
    event = state.interference_event
    record = GameStateRecord(
        current_temperature=state.current_temperature,
        target_temperature=state.target_temperature,
        tolerance_width=state.tolerance_width,
        current_comfort=state.current_comfort,
        game_timer=state.game_timer,
        success_hold_timer=state.success_hold_timer,
        is_plus_held=state.is_plus_held,
        is_minus_held=state.is_minus_held,
        game_status=state.game_status,
        interference_event=InterferenceEventRecord(
            type=event.type.value,
            is_active=event.is_active,
            duration=event.duration,
            remaining_time=event.remaining_time,
        ),
        interference_timer=state.interference_timer,
        is_controls_reversed=state.is_controls_reversed,
    )
    return record.model_dump(mode="json", by_alias=True)


def state_from_record(data: dict[str, Any]) -> GameState:
    """
    Rebuild a state from a record.

    Raises pydantic.ValidationError when required fields are missing or
    have the wrong type.
    """
    record = GameStateRecord.model_validate(data)
    event = _event_from_record(record.interference_event)

    return GameState(
        current_temperature=clamp_unit(record.current_temperature),
        target_temperature=clamp_unit(record.target_temperature),
        tolerance_width=clamp_unit(record.tolerance_width),
        current_comfort=clamp_unit(record.current_comfort),
        game_timer=max(0.0, record.game_timer),
        success_hold_timer=max(0.0, record.success_hold_timer),
        is_plus_held=record.is_plus_held,
        is_minus_held=record.is_minus_held,
        game_status=record.game_status,
        interference_event=event,
        interference_timer=max(0.0, record.interference_timer),
        # Reversal is on exactly while a reversal event is live
        is_controls_reversed=event.type == InterferenceType.CONTROLS_REVERSED,
    )


def _event_from_record(record: InterferenceEventRecord) -> InterferenceEvent:
    interference_type = coerce_interference_type(record.type)
    if interference_type == InterferenceType.NONE or not record.is_active:
        return InterferenceEvent()
    remaining = max(0.0, record.remaining_time)
    if remaining <= 0:
        return InterferenceEvent()
    return InterferenceEvent(
        type=interference_type,
        is_active=True,
        duration=max(0.0, record.duration),
        remaining_time=remaining,
    )
