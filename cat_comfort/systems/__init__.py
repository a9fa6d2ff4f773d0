"""
Simulation systems composed by the GameStateManager.
"""

from cat_comfort.systems.temperature import TemperatureSystem, sanitize_dt
from cat_comfort.systems.comfort import ComfortSystem
from cat_comfort.systems.interference import InterferenceSystem, InterferenceInfo
from cat_comfort.systems.timer import TimerSystem

__all__ = [
    "TemperatureSystem",
    "ComfortSystem",
    "InterferenceSystem",
    "InterferenceInfo",
    "TimerSystem",
    "sanitize_dt",
]
