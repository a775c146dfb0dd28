#!/usr/bin/env python3
"""
Year aggregator: day-by-day classification with a read-through cache

For each day in [0, total_days) the cache is consulted first; missing days are
classified and inserted (insert-if-absent, never overwritten). Days are
processed strictly in order, one cache round-trip at a time, so the rainiest
day tie-break (earliest day wins) is stable.
"""

from __future__ import annotations

import logging

from typing import TYPE_CHECKING

from constants.planets import DAYS_PER_YEAR

from .classifier import DayClassifier
from .core_types import AggregationStats, DayCondition, WeatherCondition, YearSummary
from .errors import CacheUnavailableError
from .monitoring import Timer
from .observers import AggregationObserver, NullObserver

if TYPE_CHECKING:
    from app.services.prediction_cache import PredictionCache

logger = logging.getLogger(__name__)


class YearAggregator:
    """Summarizes weather conditions over a range of days"""

    def __init__(
        self,
        classifier: DayClassifier,
        cache: PredictionCache | None = None,
        observer: AggregationObserver | None = None,
    ):
        self.classifier = classifier
        self.cache = cache
        self.observer = observer or NullObserver()
        self.last_stats: AggregationStats | None = None

    async def summarize_years(self, years: int) -> YearSummary:
        """Summary over `years` years of DAYS_PER_YEAR days"""
        if years < 0:
            raise ValueError(f"years must be non-negative, got {years}")
        return await self.summarize(years * DAYS_PER_YEAR)

    async def summarize(self, total_days: int) -> YearSummary:
        """Count conditions for days 0..total_days-1 and find the rainiest day."""
        if total_days < 0:
            raise ValueError(f"total_days must be non-negative, got {total_days}")

        stats = AggregationStats()
        counts = {condition: 0 for condition in WeatherCondition}
        max_perimeter = 0.0
        most_rainy_day: int | None = None

        with Timer("aggregator.summarize"):
            for day in range(total_days):
                condition = await self._condition_for(day, stats)
                counts[condition.condition] += 1

                if condition.condition is WeatherCondition.RAIN and condition.perimeter:
                    # Strict comparison: ties keep the earliest day
                    if condition.perimeter > max_perimeter:
                        max_perimeter = condition.perimeter
                        most_rainy_day = day

            stats.days = total_days

        summary = YearSummary(
            drought_days=counts[WeatherCondition.DROUGHT],
            rainy_days=counts[WeatherCondition.RAIN],
            optimal_days=counts[WeatherCondition.OPTIMAL],
            normal_days=counts[WeatherCondition.NORMAL],
            most_rainy_day=most_rainy_day,
            max_perimeter=max_perimeter if most_rainy_day is not None else None,
        )
        self.last_stats = stats
        self.observer.on_complete(summary, stats)
        return summary

    async def _condition_for(self, day: int, stats: AggregationStats) -> DayCondition:
        if self.cache is not None:
            cached = await self._read(day)
            if cached is not None:
                stats.cache_hits += 1
                self.observer.on_cache_hit(cached)
                return cached
            self.observer.on_cache_miss(day)

        condition, det = self.classifier.evaluate(day)
        stats.computed += 1
        self.observer.on_classified(condition, det)

        if self.cache is not None:
            try:
                if await self.cache.insert_if_absent(condition):
                    stats.inserted += 1
            except CacheUnavailableError as e:
                stats.write_failures += 1
                self.observer.on_cache_write_failed(condition, e)

        return condition

    async def _read(self, day: int) -> DayCondition | None:
        try:
            return await self.cache.get(day)
        except CacheUnavailableError as e:
            logger.warning(f"Cache read failed for day {day}; classifying instead: {e}")
            return None
