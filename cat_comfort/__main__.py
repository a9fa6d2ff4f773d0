#!/usr/bin/env python3
"""
Cat Comfort - headless runner

Plays one round with a simple autopilot and logs what happens. Handy for
checking tuning changes without a UI.

Usage:
    python -m cat_comfort --seed 7 --round 2
"""
import argparse
import logging
import sys
from typing import Optional, Sequence, Tuple

from cat_comfort.config import get_game_config
from cat_comfort.events import GameEvent
from cat_comfort.manager import GameStateManager
from cat_comfort.random_source import create_random_source
from cat_comfort.state import GameState, GameStatus, with_controls

logger = logging.getLogger("cat_comfort")


def autopilot_controls(state: GameState) -> Tuple[bool, bool]:
    """
    (plus_held, minus_held) that push temperature toward the target,
    accounting for reversed controls. Holds nothing while within half the
    tolerance of the target on either side.
    """
    difference = state.target_temperature - state.current_temperature
    if abs(difference) <= state.tolerance_width / 2:
        want_heat, want_cool = False, False
    else:
        want_heat, want_cool = difference > 0, difference < 0

    if state.is_controls_reversed:
        return want_cool, want_heat
    return want_heat, want_cool


def play_round(manager: GameStateManager, round_number: int, dt: float) -> GameState:
    """Run a round to completion under the autopilot."""
    state = manager.start_round(round_number)
    while state.game_status == GameStatus.PLAYING:
        plus, minus = autopilot_controls(state)
        state = with_controls(state, plus_held=plus, minus_held=minus)
        state = manager.handle_center_button_click(state)
        state = manager.update_game_state(state, dt)
    return state


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play one headless round")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--round", type=int, default=1, dest="round_number", help="Round number (1-based)")
    parser.add_argument("--dt", type=float, default=1 / 60, help="Seconds per tick")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    args = parser.parse_args(argv)
    if args.dt <= 0:
        parser.error("--dt must be positive")
    return args


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point. Returns 0 on success, 1 on failure."""
    args = parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    def on_event(event: GameEvent) -> None:
        logger.info(f"Event: {event}")

    manager = GameStateManager(
        get_game_config(),
        rng=create_random_source(args.seed),
        on_event=on_event,
    )
    state = play_round(manager, args.round_number, args.dt)

    summary = manager.get_game_state_summary(state)
    logger.info(
        f"Finished: {state.game_status.value} with comfort {state.current_comfort:.2f} "
        f"({summary.comfort_status})"
    )
    return 0 if state.game_status == GameStatus.SUCCESS else 1


if __name__ == "__main__":
    sys.exit(main())
