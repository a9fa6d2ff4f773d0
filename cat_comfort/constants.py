"""
Game constants - all magic numbers in one place.
NO UI DEPENDENCIES.
"""

# =============================================================================
# RATES (units per second, all scalars live in 0.0 - 1.0)
# =============================================================================
TEMPERATURE_CHANGE_RATE = 0.5     # while a control is held
TEMPERATURE_COOLING_RATE = 0.3    # natural cooling with no control held
COMFORT_CHANGE_RATE = 0.2

# =============================================================================
# TIMING (all in seconds)
# =============================================================================
GAME_DURATION = 30.0
SUCCESS_HOLD_TIME = 5.0           # continuous time at max comfort to win early
INTERFERENCE_MIN_INTERVAL = 3.0
INTERFERENCE_MAX_INTERVAL = 5.0
INTERFERENCE_DURATION = 8.0

# =============================================================================
# TEMPERATURE
# =============================================================================
INITIAL_TEMPERATURE = 0.5
TARGET_TEMPERATURE_MIN = 0.3
TARGET_TEMPERATURE_MAX = 0.7
TOLERANCE_WIDTH = 0.1
SHOCK_LOW_TARGET = 0.1            # temperature shock picks one of these two
SHOCK_HIGH_TARGET = 0.9

# =============================================================================
# COMFORT
# =============================================================================
INITIAL_COMFORT = 0.5
MAX_COMFORT = 1.0
SUCCESS_COMFORT_THRESHOLD = 0.8

# =============================================================================
# ROUNDS
# =============================================================================
FIRST_ROUND_DURATION = 30.0
ROUND_DURATION_STEP = 10.0        # each round is this much shorter
MIN_ROUND_DURATION = 10.0

# =============================================================================
# TICK ENGINE
# =============================================================================
TICK_RATE_MS = 16                 # ~60 Hz
MAX_TICK_SECONDS = 0.25           # longer frame gaps are clamped to this
