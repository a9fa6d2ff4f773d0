"""
Tick engine implementation.
Drives a GameStateManager from the wall clock and routes player input.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from cat_comfort.config import EngineSettings, get_settings
from cat_comfort.manager import GameStateManager
from cat_comfort.state import GameState, GameStatus, with_controls

logger = logging.getLogger(__name__)

StateListener = Callable[[GameState], None]


@dataclass
class TickStats:
    """Statistics for tick timing."""

    tick_number: int
    dt: float
    duration_ms: float


class TickEngine:
    """
    Manages the game tick loop.

    Each tick feeds the real elapsed time (capped at max_tick_seconds) into
    the manager and publishes the new snapshot to listeners. Input calls
    only rewrite the held snapshot; they take effect on the next tick.
    """

    def __init__(
        self,
        manager: GameStateManager,
        settings: Optional[EngineSettings] = None,
        state: Optional[GameState] = None,
    ) -> None:
        self._manager = manager
        self._settings = settings if settings is not None else get_settings()
        self._state = state if state is not None else manager.create_initial_state()

        self._tick_number = 0
        self._is_running = False
        self._is_paused = False
        self._task: asyncio.Task | None = None
        self._stop_event = asyncio.Event()
        self._last_tick: float | None = None

        self._listeners: list[StateListener] = []

        self._recent_stats: list[TickStats] = []
        self._max_stats_history = 100

    @property
    def state(self) -> GameState:
        """Latest snapshot."""
        return self._state

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def is_running(self) -> bool:
        """Whether the tick engine is actively running (not paused)."""
        return self._is_running and not self._is_paused

    @property
    def is_paused(self) -> bool:
        return self._is_paused

    @property
    def recent_stats(self) -> list[TickStats]:
        return list(self._recent_stats)

    def add_listener(self, listener: StateListener) -> None:
        """Call `listener` with every new snapshot."""
        self._listeners.append(listener)

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def start(self) -> None:
        """Start the tick engine loop."""
        if self._task is not None:
            return

        self._is_running = True
        self._stop_event.clear()
        self._last_tick = time.perf_counter()
        self._task = asyncio.create_task(self._run_loop())
        logger.info(f"Tick engine started (rate: {self._settings.tick_rate_ms}ms)")

    async def stop(self) -> None:
        """Stop the tick engine loop."""
        if self._task is None:
            return

        self._is_running = False
        self._stop_event.set()

        try:
            await asyncio.wait_for(self._task, timeout=5.0)
        except asyncio.TimeoutError:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

        self._task = None
        logger.info("Tick engine stopped")

    def pause(self) -> None:
        """Pause ticking. Simulated time does not pass while paused."""
        self._is_paused = True
        logger.info(f"Tick engine paused at tick {self._tick_number}")

    def resume(self) -> None:
        self._is_paused = False
        self._last_tick = time.perf_counter()
        logger.info(f"Tick engine resumed at tick {self._tick_number}")

    def step(self, dt: float) -> GameState:
        """Execute a single tick of `dt` seconds (when paused)."""
        if not self._is_paused:
            return self._state

        self._process_tick(dt)
        logger.debug(f"Manual tick step executed: {self._tick_number}")
        return self._state

    def restart(self, round_number: Optional[int] = None) -> GameState:
        """Replace the snapshot with a fresh round."""
        if round_number is None:
            self._state = self._manager.reset_game_state()
        else:
            self._state = self._manager.start_round(round_number)
        self._publish()
        return self._state

    # =========================================================================
    # INPUT
    # =========================================================================

    def press_plus(self) -> None:
        self._state = with_controls(self._state, plus_held=True)

    def release_plus(self) -> None:
        self._state = with_controls(self._state, plus_held=False)

    def press_minus(self) -> None:
        self._state = with_controls(self._state, minus_held=True)

    def release_minus(self) -> None:
        self._state = with_controls(self._state, minus_held=False)

    def click_center(self) -> None:
        self._state = self._manager.handle_center_button_click(self._state)
        self._publish()

    # =========================================================================
    # LOOP
    # =========================================================================

    async def _run_loop(self) -> None:
        """
        Main tick loop.
        Fail-fast: errors from the manager or a listener propagate.
        """
        tick_seconds = self._settings.tick_rate_ms / 1000

        while self._is_running:
            now = time.perf_counter()
            elapsed = now - (self._last_tick if self._last_tick is not None else now)
            self._last_tick = now

            if not self._is_paused:
                self._process_tick(min(elapsed, self._settings.max_tick_seconds))

            tick_duration = time.perf_counter() - now
            sleep_time = max(0.0, tick_seconds - tick_duration)

            # Wait for either sleep time or stop signal
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=sleep_time)
                break
            except asyncio.TimeoutError:
                pass

    def _process_tick(self, dt: float) -> None:
        """Process a single tick."""
        tick_start = time.perf_counter()
        self._tick_number += 1

        was_playing = self._state.game_status == GameStatus.PLAYING
        self._state = self._manager.update_game_state(self._state, dt)
        if was_playing and self._state.game_status != GameStatus.PLAYING:
            logger.info(
                f"Round ended at tick {self._tick_number}: {self._state.game_status.value}"
            )

        self._publish()

        duration_ms = (time.perf_counter() - tick_start) * 1000
        self._recent_stats.append(TickStats(self._tick_number, dt, duration_ms))
        if len(self._recent_stats) > self._max_stats_history:
            self._recent_stats.pop(0)

        if duration_ms > self._settings.tick_rate_ms:
            logger.warning(
                f"Tick {self._tick_number} took {duration_ms:.1f}ms "
                f"(target: {self._settings.tick_rate_ms}ms)"
            )

    def _publish(self) -> None:
        for listener in self._listeners:
            listener(self._state)
