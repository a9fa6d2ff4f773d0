"""
Real-time tick driver for the comfort game.
"""

from cat_comfort.tick_engine.engine import TickEngine, TickStats

__all__ = ["TickEngine", "TickStats"]
