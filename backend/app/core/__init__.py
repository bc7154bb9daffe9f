"""Core module - estimation, countdown and insight logic plus logging setup."""

from .estimator import estimate_life_expectancy
from .countdown import AnimatedValue, CountdownRun, CountdownState, CountdownTicker, convert_units
from .insights import build_insights

__all__ = [
    'estimate_life_expectancy',
    'AnimatedValue', 'CountdownRun', 'CountdownState', 'CountdownTicker', 'convert_units',
    'build_insights',
]
