"""
Pytest fixtures for the comfort game tests.
"""

import random

import pytest

from cat_comfort.config import GameConfig
from cat_comfort.manager import GameStateManager
from cat_comfort.state import GameState, InterferenceEvent


class ScriptedRandom:
    """
    Random source that replays scripted values.

    uniform() pops from `uniforms`, falling back to the midpoint of its
    bounds; choice() pops from `choices`, falling back to the first element.
    """

    def __init__(self, uniforms=(), choices=()):
        self.uniforms = list(uniforms)
        self.choices = list(choices)

    def uniform(self, a, b):
        if self.uniforms:
            return self.uniforms.pop(0)
        return (a + b) / 2

    def choice(self, seq):
        if self.choices:
            wanted = self.choices.pop(0)
            assert wanted in seq, f"{wanted!r} is not one of {seq!r}"
            return wanted
        return seq[0]


@pytest.fixture
def config() -> GameConfig:
    """Default tuning values, spelled out so env overrides can't leak in."""
    return GameConfig(
        temperature_change_rate=0.5,
        temperature_cooling_rate=0.3,
        comfort_change_rate=0.2,
        game_duration=30.0,
        success_hold_time=5.0,
        initial_temperature=0.5,
        initial_comfort=0.5,
        success_comfort_threshold=0.8,
        target_temperature_min=0.3,
        target_temperature_max=0.7,
        tolerance_width=0.1,
        interference_min_interval=3.0,
        interference_max_interval=5.0,
        interference_duration=8.0,
        shock_low_target=0.1,
        shock_high_target=0.9,
    )


@pytest.fixture
def scripted_rng() -> ScriptedRandom:
    return ScriptedRandom()


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def events() -> list:
    """Collects everything passed to the manager's listener."""
    return []


@pytest.fixture
def manager(config, scripted_rng, events) -> GameStateManager:
    """Manager whose draws are predictable: targets 0.5, intervals 4.0."""
    return GameStateManager(config, rng=scripted_rng, on_event=events.append)


@pytest.fixture
def make_state():
    """
    Factory for mid-round states. Defaults sit on target, with comfort at
    0.5 and no interference due for a long time.
    """

    def _make_state(**overrides) -> GameState:
        values = dict(
            current_temperature=0.5,
            target_temperature=0.5,
            tolerance_width=0.1,
            current_comfort=0.5,
            game_timer=30.0,
            success_hold_timer=0.0,
            is_plus_held=False,
            is_minus_held=False,
            interference_event=InterferenceEvent(),
            interference_timer=100.0,
            is_controls_reversed=False,
        )
        values.update(overrides)
        return GameState(**values)

    return _make_state
