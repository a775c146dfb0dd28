#!/usr/bin/env python3
"""
Aggregation observers

Diagnostics emitted while summarizing a day range. They are side effects only;
nothing here feeds back into the YearSummary.
"""

import logging

from typing import Protocol

from .core_types import AggregationStats, DayCondition, YearSummary
from .monitoring import (
    track_cache_hit,
    track_cache_miss,
    track_cache_write_failure,
    track_day_classified,
)

logger = logging.getLogger(__name__)


class AggregationObserver(Protocol):
    """Receives per-day events from YearAggregator"""

    def on_cache_hit(self, condition: DayCondition) -> None: ...

    def on_cache_miss(self, day: int) -> None: ...

    def on_classified(self, condition: DayCondition, determinant: float) -> None: ...

    def on_cache_write_failed(self, condition: DayCondition, error: Exception) -> None: ...

    def on_complete(self, summary: YearSummary, stats: AggregationStats) -> None: ...


class NullObserver:
    """Discards every event"""

    def on_cache_hit(self, condition: DayCondition) -> None:
        pass

    def on_cache_miss(self, day: int) -> None:
        pass

    def on_classified(self, condition: DayCondition, determinant: float) -> None:
        pass

    def on_cache_write_failed(self, condition: DayCondition, error: Exception) -> None:
        pass

    def on_complete(self, summary: YearSummary, stats: AggregationStats) -> None:
        pass


class LoggingObserver:
    """Logs diagnostics and feeds the metrics collector.

    Tracks the smallest non-zero and the largest |determinant| seen, which is
    how the alignment tolerance was calibrated.
    """

    def __init__(self, log: logging.Logger | logging.LoggerAdapter | None = None):
        self.log = log or logger
        self.min_determinant: float | None = None
        self.max_determinant: float = 0.0

    def on_cache_hit(self, condition: DayCondition) -> None:
        track_cache_hit()
        self.log.debug(f"Day {condition.day} already cached", extra={"day": condition.day})

    def on_cache_miss(self, day: int) -> None:
        track_cache_miss()

    def on_classified(self, condition: DayCondition, determinant: float) -> None:
        track_day_classified()
        magnitude = abs(determinant)
        if magnitude and (self.min_determinant is None or magnitude < self.min_determinant):
            self.min_determinant = magnitude
        if magnitude > self.max_determinant:
            self.max_determinant = magnitude

    def on_cache_write_failed(self, condition: DayCondition, error: Exception) -> None:
        track_cache_write_failure()
        self.log.warning(
            f"Cache write failed for day {condition.day}; will recompute next run: {error}",
            extra={"day": condition.day},
        )

    def on_complete(self, summary: YearSummary, stats: AggregationStats) -> None:
        self.log.info(
            "Aggregation complete",
            extra={
                "days": stats.days,
                "cache_hits": stats.cache_hits,
                "computed": stats.computed,
                "inserted": stats.inserted,
                "write_failures": stats.write_failures,
                "min_determinant": self.min_determinant,
                "max_determinant": self.max_determinant,
            },
        )
