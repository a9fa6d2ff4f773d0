"""
END-TO-END SIMULATION TESTS

These tests drive the GameStateManager tick by tick:
- Round creation and reset
- Timer expiry and success-hold resolution
- Interference triggering, expiry and center-button clearing
- Terminal states staying frozen
- State invariants over long randomized runs

NO UI DEPENDENCIES - pure simulation testing.
"""
import random

import pytest

from cat_comfort.events import (
    ClearReason, InterferenceClearedEvent, InterferenceTriggeredEvent,
    ResolutionReason, RoundResolvedEvent
)
from cat_comfort.manager import GameStateManager
from cat_comfort.random_source import RandomSource, create_random_source
from cat_comfort.state import GameStatus, InterferenceEvent, InterferenceType, with_controls
from conftest import ScriptedRandom


def reversed_event(remaining=8.0):
    return InterferenceEvent(
        type=InterferenceType.CONTROLS_REVERSED, is_active=True, duration=8.0, remaining_time=remaining
    )


def bubble_event(remaining=8.0):
    return InterferenceEvent(
        type=InterferenceType.BUBBLE_OBSTRUCTION, is_active=True, duration=8.0, remaining_time=remaining
    )


class TestRoundLifecycle:
    """Tests for creating and resetting rounds."""

    def test_initial_state(self, manager):
        """A fresh round starts from config with a drawn target and timer."""
        state = manager.create_initial_state()

        assert state.game_status == GameStatus.PLAYING
        assert state.current_temperature == 0.5
        assert state.target_temperature == pytest.approx(0.5)
        assert state.tolerance_width == 0.1
        assert state.current_comfort == 0.5
        assert state.game_timer == 30.0
        assert state.success_hold_timer == 0.0
        assert not state.is_plus_held
        assert not state.is_minus_held
        assert state.interference_event == InterferenceEvent()
        assert state.interference_timer == pytest.approx(4.0)
        assert not state.is_controls_reversed

    def test_initial_state_with_real_randomness(self, config, seeded_rng):
        manager = GameStateManager(config, rng=seeded_rng)
        state = manager.create_initial_state()
        assert 0.3 <= state.target_temperature <= 0.7
        assert 3.0 <= state.interference_timer <= 5.0
        assert manager.validate_game_state(state)

    def test_reset_discards_old_round(self, manager):
        """Reset hands back a fresh state regardless of the old one."""
        old = manager.simulate(manager.create_initial_state(), 40.0, dt=0.5)
        assert old.game_status != GameStatus.PLAYING

        fresh = manager.reset_game_state()
        assert fresh.game_status == GameStatus.PLAYING
        assert fresh.game_timer == 30.0

    def test_update_config_rebuilds_systems(self, manager, config):
        """A new config replaces the old one wholesale."""
        shorter = config.model_copy(update={"game_duration": 12.0, "comfort_change_rate": 0.4})
        manager.update_config(shorter)

        assert manager.config is shorter
        assert config.game_duration == 30.0
        assert manager.create_initial_state().game_timer == 12.0
        assert manager.comfort_system.config is shorter

    @pytest.mark.parametrize("round_number,duration", [(1, 30.0), (2, 20.0), (3, 10.0), (5, 10.0)])
    def test_start_round_shortens_duration(self, manager, round_number, duration):
        state = manager.start_round(round_number)
        assert state.game_timer == duration
        assert manager.config.game_duration == duration

    def test_default_manager(self):
        """A manager can be built with no arguments."""
        manager = GameStateManager()
        assert manager.create_initial_state().game_status == GameStatus.PLAYING


class TestTickBasics:
    """Tests for an ordinary tick."""

    def test_scenario_plus_held(self, manager, make_state):
        """Holding plus for half a second at rate 0.5 adds exactly 0.25."""
        state = make_state(current_temperature=0.2, target_temperature=0.45, is_plus_held=True)
        new_state = manager.update_game_state(state, 0.5)
        assert new_state.current_temperature == pytest.approx(0.45)

    def test_timers_advance(self, manager, make_state):
        state = manager.update_game_state(make_state(interference_timer=10.0), 0.5)
        assert state.game_timer == pytest.approx(29.5)
        assert state.interference_timer == pytest.approx(9.5)

    def test_comfort_rises_in_range(self, manager, make_state):
        """Idle cooling keeps us in range for a short tick, so comfort rises."""
        state = manager.update_game_state(make_state(), 0.1)
        assert state.current_temperature == pytest.approx(0.47)
        assert state.current_comfort == pytest.approx(0.52)

    def test_comfort_falls_out_of_range(self, manager, make_state):
        state = manager.update_game_state(make_state(current_temperature=0.9), 0.1)
        assert state.current_comfort == pytest.approx(0.48)

    def test_input_state_is_not_mutated(self, manager, make_state):
        """Transitions return new snapshots."""
        state = make_state(is_plus_held=True)
        before = make_state(is_plus_held=True)
        manager.update_game_state(state, 0.5)
        assert state == before

    @pytest.mark.parametrize("dt", [-1.0, float("nan")])
    def test_invalid_dt_is_a_zero_tick(self, manager, make_state, dt):
        """A glitched delta advances nothing and raises nothing."""
        state = make_state(is_plus_held=True)
        assert manager.update_game_state(state, dt) == state

    def test_latches_survive_ticks(self, manager, make_state):
        state = manager.update_game_state(make_state(is_plus_held=True, is_minus_held=True), 0.1)
        assert state.is_plus_held
        assert state.is_minus_held


class TestRoundResolution:
    """Tests for how a round ends."""

    def test_timer_expiry_with_high_comfort_succeeds(self, manager, make_state, events):
        """0.3s left, a 0.5s tick and comfort 0.9 ends in success."""
        state = make_state(game_timer=0.3, current_comfort=0.9)
        new_state = manager.update_game_state(state, 0.5)

        assert new_state.game_status == GameStatus.SUCCESS
        assert new_state.game_timer == 0.0
        assert events == [RoundResolvedEvent(GameStatus.SUCCESS, ResolutionReason.TIMER_EXPIRED, 0.9)]

    def test_timer_expiry_with_low_comfort_fails(self, manager, make_state):
        state = manager.update_game_state(make_state(game_timer=0.3, current_comfort=0.5), 0.5)
        assert state.game_status == GameStatus.FAILURE

    def test_terminating_tick_does_not_simulate(self, manager, make_state):
        """Temperature, comfort and interference stay put on the final tick."""
        state = make_state(
            game_timer=0.3,
            current_temperature=0.9,
            is_plus_held=True,
            interference_event=bubble_event(remaining=0.2),
            interference_timer=0.1,
        )
        new_state = manager.update_game_state(state, 0.5)

        assert new_state.game_status == GameStatus.FAILURE
        assert new_state.current_temperature == 0.9
        assert new_state.current_comfort == 0.5
        assert new_state.interference_event == bubble_event(remaining=0.2)

    def test_success_hold_wins_early(self, manager, make_state, events):
        """Holding max comfort for the full hold time ends the round."""
        state = make_state(current_comfort=1.0, success_hold_timer=4.9)
        new_state = manager.update_game_state(state, 0.2)

        assert new_state.game_status == GameStatus.SUCCESS
        assert new_state.success_hold_timer == pytest.approx(5.1)
        assert new_state.game_timer == pytest.approx(29.8)
        assert events[-1].reason == ResolutionReason.SUCCESS_HOLD

    def test_hold_resets_when_comfort_drops(self, manager, make_state):
        """Leaving max comfort zeroes the hold streak immediately."""
        state = make_state(current_comfort=1.0, success_hold_timer=3.0, current_temperature=0.9)
        new_state = manager.update_game_state(state, 0.2)
        assert new_state.current_comfort < 1.0
        assert new_state.success_hold_timer == 0.0

    @pytest.mark.parametrize("status", [GameStatus.SUCCESS, GameStatus.FAILURE, GameStatus.PAUSED])
    def test_non_playing_states_are_frozen(self, manager, make_state, status, events):
        """Repeated ticks on a finished round change nothing."""
        state = make_state(game_status=status, is_plus_held=True, interference_timer=0.0)
        current = state
        for _ in range(10):
            current = manager.update_game_state(current, 0.5)
            assert current == state
        assert events == []

    def test_click_on_finished_round_is_noop(self, manager, make_state):
        state = make_state(game_status=GameStatus.FAILURE, interference_event=bubble_event())
        assert manager.handle_center_button_click(state) == state

    def test_simulate_runs_to_resolution(self, manager):
        state = manager.simulate(manager.create_initial_state(), 100.0, dt=0.1)
        assert state.is_finished

    def test_simulate_with_zero_dt_returns_immediately(self, manager, make_state):
        state = make_state()
        assert manager.simulate(state, 10.0, dt=0.0) is state


class TestInterferenceFlow:
    """Tests for interference inside the tick."""

    def test_expiry_clears_event_and_reversal(self, manager, make_state, events):
        """0.2s left on a reversal and a 0.5s tick ends it."""
        state = make_state(
            interference_event=reversed_event(remaining=0.2),
            is_controls_reversed=True,
            interference_timer=2.0,
        )
        new_state = manager.update_game_state(state, 0.5)

        assert new_state.interference_event.type == InterferenceType.NONE
        assert not new_state.interference_event.is_active
        assert not new_state.is_controls_reversed
        assert new_state.interference_timer == pytest.approx(4.0)
        assert events == [InterferenceClearedEvent(InterferenceType.CONTROLS_REVERSED, ClearReason.EXPIRED)]

    def test_active_event_counts_down(self, manager, make_state):
        state = manager.update_game_state(make_state(interference_event=bubble_event()), 0.5)
        assert state.interference_event.remaining_time == pytest.approx(7.5)

    def test_trigger_reverses_controls_before_temperature(self, config, make_state, events):
        """A reversal that starts this tick already affects this tick's temperature."""
        rng = ScriptedRandom(choices=[InterferenceType.CONTROLS_REVERSED])
        manager = GameStateManager(config, rng=rng, on_event=events.append)
        state = make_state(interference_timer=0.2, is_plus_held=True)

        new_state = manager.update_game_state(state, 0.5)

        assert new_state.is_controls_reversed
        assert new_state.interference_event == reversed_event()
        assert new_state.interference_timer == pytest.approx(4.0)
        assert new_state.current_temperature == pytest.approx(0.25)
        assert events == [InterferenceTriggeredEvent(InterferenceType.CONTROLS_REVERSED, 8.0, 0.5)]

    def test_trigger_temperature_shock_moves_target(self, config, make_state):
        """The shocked target is used for this tick's comfort check."""
        rng = ScriptedRandom(choices=[InterferenceType.TEMPERATURE_SHOCK, 0.9])
        manager = GameStateManager(config, rng=rng)
        new_state = manager.update_game_state(make_state(interference_timer=0.2), 0.5)

        assert new_state.target_temperature == 0.9
        assert new_state.interference_event.type == InterferenceType.TEMPERATURE_SHOCK
        assert not new_state.is_controls_reversed
        assert new_state.current_comfort == pytest.approx(0.4)

    def test_trigger_bubble_is_visual_only(self, config, make_state):
        rng = ScriptedRandom(choices=[InterferenceType.BUBBLE_OBSTRUCTION])
        manager = GameStateManager(config, rng=rng)
        new_state = manager.update_game_state(make_state(interference_timer=0.2), 0.5)

        assert new_state.interference_event.type == InterferenceType.BUBBLE_OBSTRUCTION
        assert new_state.target_temperature == 0.5
        assert not new_state.is_controls_reversed

    def test_no_retrigger_while_active(self, manager, make_state, events):
        """A due timer waits for the running event to finish."""
        state = make_state(interference_event=bubble_event(remaining=5.0), interference_timer=0.0)
        new_state = manager.update_game_state(state, 0.5)

        assert new_state.interference_event.type == InterferenceType.BUBBLE_OBSTRUCTION
        assert new_state.interference_event.remaining_time == pytest.approx(4.5)
        assert events == []


class TestCenterButton:
    """Tests for clearing interference by click."""

    def test_reversal_cannot_be_clicked_away(self, manager, make_state, events):
        """Clicking during a reversal changes nothing."""
        state = make_state(interference_event=reversed_event(), is_controls_reversed=True)
        assert manager.handle_center_button_click(state) == state
        assert events == []

    def test_click_clears_bubble(self, manager, make_state, events):
        state = make_state(interference_event=bubble_event(), interference_timer=1.0, is_plus_held=True)
        new_state = manager.handle_center_button_click(state)

        assert new_state.interference_event == InterferenceEvent()
        assert new_state.interference_timer == pytest.approx(4.0)
        assert new_state.is_plus_held
        assert not new_state.is_minus_held
        assert events == [InterferenceClearedEvent(InterferenceType.BUBBLE_OBSTRUCTION, ClearReason.CLICKED)]

    def test_click_clears_shock_but_keeps_target(self, manager, make_state):
        state = make_state(
            target_temperature=0.9,
            interference_event=InterferenceEvent(
                type=InterferenceType.TEMPERATURE_SHOCK, is_active=True, duration=8.0, remaining_time=3.0
            ),
        )
        new_state = manager.handle_center_button_click(state)
        assert not new_state.interference_event.is_active
        assert new_state.target_temperature == 0.9

    def test_click_without_interference_is_noop(self, manager, make_state):
        state = make_state()
        assert manager.handle_center_button_click(state) is state


class TestQueries:
    """Tests for summaries and validation."""

    def test_summary(self, manager, make_state):
        summary = manager.get_game_state_summary(
            make_state(current_temperature=0.2, current_comfort=0.9)
        )
        assert summary.temperature_status == "too_cold"
        assert summary.comfort_status == "excellent"
        assert summary.time_urgency == "normal"
        assert not summary.interference_active

    def test_validate_accepts_initial_state(self, manager):
        assert manager.validate_game_state(manager.create_initial_state())

    def test_validate_rejects_out_of_range(self, manager, make_state):
        assert not manager.validate_game_state(make_state(current_temperature=1.5))
        assert not manager.validate_game_state(make_state(current_comfort=-0.1))

    def test_validate_rejects_inconsistent_interference(self, manager, make_state):
        active_none = InterferenceEvent(type=InterferenceType.NONE, is_active=True)
        assert not manager.validate_game_state(make_state(interference_event=active_none))
        assert not manager.validate_game_state(make_state(is_controls_reversed=True))

    def test_validate_rejects_reversal_event_without_reversed_controls(self, manager, make_state):
        """A live reversal event must come with reversed controls."""
        state = make_state(interference_event=reversed_event(), is_controls_reversed=False)
        assert not manager.validate_game_state(state)

    def test_validate_accepts_live_reversal(self, manager, make_state):
        state = make_state(interference_event=reversed_event(), is_controls_reversed=True)
        assert manager.validate_game_state(state)


class TestRandomSource:
    """Tests for what the manager needs from a random source."""

    def test_scripted_source_satisfies_protocol(self, scripted_rng):
        """uniform() and choice() are all a source has to provide."""
        assert isinstance(scripted_rng, RandomSource)

    def test_default_source_satisfies_protocol(self):
        assert isinstance(create_random_source(1), RandomSource)


class TestInvariants:
    """Long randomized runs that check every snapshot."""

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_invariants_hold_every_tick(self, config, seed):
        """Bounds, interference consistency and one-way status hold throughout."""
        manager = GameStateManager(config, rng=random.Random(seed))
        inputs = random.Random(seed + 100)

        for round_number in (1, 2, 3):
            state = manager.start_round(round_number)
            for _ in range(3000):
                state = with_controls(
                    state,
                    plus_held=inputs.random() < 0.5,
                    minus_held=inputs.random() < 0.3,
                )
                if inputs.random() < 0.05:
                    state = manager.handle_center_button_click(state)

                previous_status = state.game_status
                state = manager.update_game_state(state, inputs.uniform(0.0, 0.05))

                assert manager.validate_game_state(state)
                if state.is_controls_reversed:
                    assert state.interference_event.type == InterferenceType.CONTROLS_REVERSED
                if previous_status != GameStatus.PLAYING:
                    assert state.game_status == previous_status
            assert state.is_finished

    def test_same_seed_same_trajectory(self, config):
        """Identical seeds and inputs replay identically."""

        def run(seed):
            manager = GameStateManager(config, rng=random.Random(seed))
            state = with_controls(manager.create_initial_state(), plus_held=True)
            trajectory = []
            for _ in range(600):
                state = manager.update_game_state(state, 1 / 60)
                trajectory.append(state)
            return trajectory

        assert run(77) == run(77)
