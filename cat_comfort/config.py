"""
Configuration management for the comfort game.
Uses pydantic-settings so every tuning value can be overridden from the
environment (prefix CAT_COMFORT_) or a .env file.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cat_comfort import constants


class GameConfig(BaseSettings):
    """
    Per-round tuning values.

    Frozen: a round change substitutes a whole new config rather than
    editing this one.
    """

    model_config = SettingsConfigDict(
        env_prefix="CAT_COMFORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Rates
    temperature_change_rate: float = Field(
        default=constants.TEMPERATURE_CHANGE_RATE,
        description="Temperature change per second while a control is held"
    )
    temperature_cooling_rate: float = Field(
        default=constants.TEMPERATURE_COOLING_RATE,
        description="Temperature drop per second when no control is held"
    )
    comfort_change_rate: float = Field(
        default=constants.COMFORT_CHANGE_RATE,
        description="Comfort change per second, up in tolerance and down outside it"
    )

    # Round timing
    game_duration: float = Field(
        default=constants.GAME_DURATION,
        description="Round length in seconds"
    )
    success_hold_time: float = Field(
        default=constants.SUCCESS_HOLD_TIME,
        description="Seconds at max comfort that win the round early"
    )

    # Temperature
    initial_temperature: float = Field(default=constants.INITIAL_TEMPERATURE)
    target_temperature_min: float = Field(default=constants.TARGET_TEMPERATURE_MIN)
    target_temperature_max: float = Field(default=constants.TARGET_TEMPERATURE_MAX)
    tolerance_width: float = Field(
        default=constants.TOLERANCE_WIDTH,
        description="Half-width of the acceptable band around the target"
    )

    # Comfort
    initial_comfort: float = Field(
        default=constants.INITIAL_COMFORT,
        description="Comfort level at round start"
    )
    success_comfort_threshold: float = Field(
        default=constants.SUCCESS_COMFORT_THRESHOLD,
        description="Minimum comfort for a success when the timer runs out"
    )

    # Interference
    interference_min_interval: float = Field(default=constants.INTERFERENCE_MIN_INTERVAL)
    interference_max_interval: float = Field(default=constants.INTERFERENCE_MAX_INTERVAL)
    interference_duration: float = Field(
        default=constants.INTERFERENCE_DURATION,
        description="Lifetime in seconds of every interference type"
    )
    shock_low_target: float = Field(default=constants.SHOCK_LOW_TARGET)
    shock_high_target: float = Field(default=constants.SHOCK_HIGH_TARGET)


class EngineSettings(BaseSettings):
    """Settings for the real-time tick driver."""

    model_config = SettingsConfigDict(
        env_prefix="CAT_COMFORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    tick_rate_ms: int = Field(
        default=constants.TICK_RATE_MS,
        description="Tick rate in milliseconds"
    )
    max_tick_seconds: float = Field(
        default=constants.MAX_TICK_SECONDS,
        description="Upper bound on the elapsed time fed into a single tick"
    )


@lru_cache()
def get_game_config() -> GameConfig:
    """Get cached default game config."""
    return GameConfig()


@lru_cache()
def get_settings() -> EngineSettings:
    """Get cached engine settings instance."""
    return EngineSettings()


def round_duration(round_number: int) -> float:
    """
    Round length for a 1-based round number.
    Each round is shorter than the last, down to a floor.
    """
    round_number = max(1, round_number)
    duration = constants.FIRST_ROUND_DURATION - (round_number - 1) * constants.ROUND_DURATION_STEP
    return max(constants.MIN_ROUND_DURATION, duration)


def config_for_round(base: GameConfig, round_number: int) -> GameConfig:
    """Return a new config for the given round; `base` is left untouched."""
    return base.model_copy(update={"game_duration": round_duration(round_number)})
