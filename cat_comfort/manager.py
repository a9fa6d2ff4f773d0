"""
GameStateManager - orchestrates all simulation systems.
NO UI DEPENDENCIES.

This is the central gameplay module. The manager owns the config, the random
source and the four systems; the state itself is passed in and handed back
as a new immutable snapshot on every call.

Usage:
    manager = GameStateManager(GameConfig(), rng=random.Random(7))
    state = manager.create_initial_state()
    while state.is_playing:
        state = with_controls(state, plus_held=True)
        state = manager.update_game_state(state, dt)
"""
import logging
from dataclasses import dataclass, replace
from typing import Optional

from cat_comfort.config import GameConfig, config_for_round, get_game_config
from cat_comfort.events import (
    ClearReason, EventListener, GameEvent, InterferenceClearedEvent,
    InterferenceTriggeredEvent, ResolutionReason, RoundResolvedEvent
)
from cat_comfort.random_source import RandomSource, create_random_source
from cat_comfort.state import GameState, GameStatus, InterferenceType
from cat_comfort.systems import (
    ComfortSystem, InterferenceSystem, TemperatureSystem, TimerSystem, sanitize_dt
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameStateSummary:
    """Coarse labels for a state, for HUDs and logs."""
    temperature_status: str
    comfort_status: str
    time_urgency: str
    interference_active: bool


class GameStateManager:
    """
    Composes the temperature, comfort, interference and timer systems into
    one per-tick transition.

    One instance per game session. The only thing it keeps between calls is
    configuration; the state belongs to the caller.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[RandomSource] = None,
        on_event: Optional[EventListener] = None
    ):
        self.rng = rng if rng is not None else create_random_source()
        self.on_event = on_event
        self.update_config(config if config is not None else get_game_config())

    # =========================================================================
    # CONFIGURATION
    # =========================================================================

    @property
    def config(self) -> GameConfig:
        return self._config

    def update_config(self, config: GameConfig) -> None:
        """Swap in a new config and rebuild every system from it."""
        self._config = config
        self.temperature_system = TemperatureSystem(config, self.rng)
        self.comfort_system = ComfortSystem(config)
        self.interference_system = InterferenceSystem(config, self.rng)
        self.timer_system = TimerSystem(config)

    # =========================================================================
    # ROUND LIFECYCLE
    # =========================================================================

    def create_initial_state(self) -> GameState:
        """Fresh round from the current config."""
        return GameState(
            current_temperature=self._config.initial_temperature,
            target_temperature=self.temperature_system.generate_random_target_temperature(),
            tolerance_width=self._config.tolerance_width,
            current_comfort=self._config.initial_comfort,
            game_timer=self._config.game_duration,
            success_hold_timer=0.0,
            is_plus_held=False,
            is_minus_held=False,
            game_status=GameStatus.PLAYING,
            interference_event=self.interference_system.clear_interference_event(),
            interference_timer=self.interference_system.generate_random_interference_interval(),
            is_controls_reversed=False,
        )

    def reset_game_state(self) -> GameState:
        """Discard the old round entirely and start a new one."""
        return self.create_initial_state()

    def start_round(self, round_number: int) -> GameState:
        """Shorten the round for `round_number`, then start it."""
        self.update_config(config_for_round(self._config, round_number))
        logger.info(f"Starting round {round_number} ({self._config.game_duration:.0f}s)")
        return self.reset_game_state()

    # =========================================================================
    # UPDATE LOOP
    # =========================================================================

    def update_game_state(self, state: GameState, dt: float) -> GameState:
        """
        Advance the round by dt seconds.

        Order matters: the timer check ends the round before anything else
        moves, and interference is settled before temperature and comfort
        are recomputed.
        """
        if state.game_status != GameStatus.PLAYING:
            return state

        if sanitize_dt(dt) != dt:
            logger.debug(f"Clamping invalid tick delta {dt!r} to 0")
            dt = 0.0

        state = replace(
            state,
            game_timer=self.timer_system.update_game_timer(state.game_timer, dt),
            interference_timer=self.timer_system.update_interference_timer(state.interference_timer, dt),
        )

        # Timer expiry ends the round on this tick, nothing else advances
        if self.timer_system.is_time_failure(state.game_timer):
            if self.comfort_system.is_success_condition_met(state.current_comfort):
                status = GameStatus.SUCCESS
            else:
                status = GameStatus.FAILURE
            return self._resolve(state, status, ResolutionReason.TIMER_EXPIRED)

        state = self._update_interference(state, dt)

        temperature = self.temperature_system.update_temperature(
            state.current_temperature,
            state.is_plus_held,
            state.is_minus_held,
            state.is_controls_reversed,
            dt
        )
        in_range = self.temperature_system.is_temperature_in_range(
            temperature, state.target_temperature, state.tolerance_width
        )
        comfort = self.comfort_system.update_comfort(state.current_comfort, in_range, dt)
        hold = self.timer_system.update_success_hold_timer(
            state.success_hold_timer, self.comfort_system.is_max_comfort(comfort), dt
        )

        state = replace(
            state,
            current_temperature=temperature,
            current_comfort=comfort,
            success_hold_timer=hold,
        )

        if self.timer_system.is_success_hold_complete(hold):
            return self._resolve(state, GameStatus.SUCCESS, ResolutionReason.SUCCESS_HOLD)

        return state

    def _update_interference(self, state: GameState, dt: float) -> GameState:
        """Expire the running event, then maybe start a new one."""
        event = state.interference_event

        if event.is_active:
            updated = self.interference_system.update_interference_event(event, dt)
            if not updated.is_active:
                state = replace(
                    state,
                    interference_event=updated,
                    is_controls_reversed=False,
                    interference_timer=self.interference_system.generate_random_interference_interval(),
                )
                logger.debug(f"Interference {event.type.value} expired")
                self._emit(InterferenceClearedEvent(event.type, ClearReason.EXPIRED))
            else:
                state = replace(state, interference_event=updated)

        if not self.interference_system.should_trigger_interference(
            state.interference_timer, state.interference_event.is_active
        ):
            return state

        interference_type = self.interference_system.get_random_interference_type()
        new_event = self.interference_system.create_interference_event(interference_type)
        changes = {
            "interference_event": new_event,
            "interference_timer": self.interference_system.generate_random_interference_interval(),
        }

        if interference_type == InterferenceType.CONTROLS_REVERSED:
            changes["is_controls_reversed"] = True
        elif interference_type == InterferenceType.TEMPERATURE_SHOCK:
            changes["target_temperature"] = self.interference_system.apply_temperature_shock()
        # Bubble obstruction has no simulation effect

        state = replace(state, **changes)
        logger.debug(
            f"Interference {interference_type.value} triggered "
            f"for {new_event.duration:.1f}s"
        )
        self._emit(InterferenceTriggeredEvent(
            interference_type, new_event.duration, state.target_temperature
        ))
        return state

    def _resolve(self, state: GameState, status: GameStatus, reason: ResolutionReason) -> GameState:
        state = replace(state, game_status=status)
        logger.info(
            f"Round resolved: {status.value} ({reason.value}, "
            f"comfort {state.current_comfort:.2f})"
        )
        self._emit(RoundResolvedEvent(status, reason, state.current_comfort))
        return state

    # =========================================================================
    # PLAYER COMMANDS
    # =========================================================================

    def handle_center_button_click(self, state: GameState) -> GameState:
        """
        Clear the active interference if the player is allowed to.
        The control latches are left exactly as they were.
        """
        if state.game_status != GameStatus.PLAYING:
            return state

        event = state.interference_event
        if not event.is_active or not self.interference_system.can_be_cleared_by_click(event.type):
            return state

        logger.debug(f"Center button cleared interference {event.type.value}")
        self._emit(InterferenceClearedEvent(event.type, ClearReason.CLICKED))
        return replace(
            state,
            interference_event=self.interference_system.clear_interference_event(),
            is_controls_reversed=False,
            interference_timer=self.interference_system.generate_random_interference_interval(),
        )

    # =========================================================================
    # STATE QUERIES
    # =========================================================================

    def get_game_state_summary(self, state: GameState) -> GameStateSummary:
        return GameStateSummary(
            temperature_status=self.temperature_system.get_temperature_status(
                state.current_temperature, state.target_temperature, state.tolerance_width
            ),
            comfort_status=self.comfort_system.get_comfort_status(state.current_comfort),
            time_urgency=self.timer_system.get_time_urgency(state.game_timer, self._config.game_duration),
            interference_active=state.interference_event.is_active,
        )

    def validate_game_state(self, state: GameState) -> bool:
        """Check bounds and the interference invariants."""
        event = state.interference_event
        return (
            0 <= state.current_temperature <= 1
            and 0 <= state.target_temperature <= 1
            and 0 <= state.tolerance_width <= 1
            and 0 <= state.current_comfort <= 1
            and state.game_timer >= 0
            and state.success_hold_timer >= 0
            and state.interference_timer >= 0
            and event.is_active == (event.type != InterferenceType.NONE)
            and event.remaining_time >= 0
            and state.is_controls_reversed == (event.type == InterferenceType.CONTROLS_REVERSED)
        )

    # =========================================================================
    # CONVENIENCE METHODS FOR TESTING
    # =========================================================================

    def simulate(self, state: GameState, seconds: float, dt: float = 1 / 60) -> GameState:
        """
        Run fixed-size ticks for a number of seconds, stopping early once
        the round resolves. Control latches stay as they are in `state`.
        """
        if dt <= 0:
            return state

        elapsed = 0.0
        while elapsed < seconds and state.game_status == GameStatus.PLAYING:
            state = self.update_game_state(state, dt)
            elapsed += dt
        return state

    def _emit(self, event: GameEvent) -> None:
        if self.on_event is not None:
            self.on_event(event)
