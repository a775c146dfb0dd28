#!/usr/bin/env python3
"""
Three-planet weather forecast engine
Orbit positions, alignment geometry, daily classification and yearly summaries
"""

from .aggregator import YearAggregator
from .classifier import DayClassifier
from .core_types import (
    ORIGIN,
    AggregationStats,
    Body,
    DayCondition,
    Position,
    WeatherCondition,
    YearSummary,
)
from .errors import CacheUnavailableError, PlanetConfigError, WeatherError

__all__ = [
    "ORIGIN",
    "AggregationStats",
    "Body",
    "CacheUnavailableError",
    "DayClassifier",
    "DayCondition",
    "PlanetConfigError",
    "Position",
    "WeatherCondition",
    "WeatherError",
    "YearAggregator",
    "YearSummary",
]
