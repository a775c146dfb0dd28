from __future__ import annotations

import pytest

from app.services.prediction_cache import MemoryPredictionCache, PredictionCache
from forecast.aggregator import YearAggregator
from forecast.classifier import DayClassifier
from forecast.core_types import DayCondition, WeatherCondition
from forecast.errors import CacheUnavailableError
from forecast.monitoring import get_metrics, reset_metrics
from forecast.observers import LoggingObserver


class _BrokenCache(PredictionCache):
    """Cache whose backend is always down."""

    name = "broken"

    async def exists(self, day):
        raise CacheUnavailableError("down")

    async def get(self, day):
        raise CacheUnavailableError("down")

    async def insert_if_absent(self, condition):
        raise CacheUnavailableError("down")


class _WriteOnlyFailureCache(MemoryPredictionCache):
    """Reads work, writes fail."""

    async def insert_if_absent(self, condition):
        raise CacheUnavailableError("read-only replica")


class _ScriptedClassifier:
    """Classifier double returning fixed conditions per day."""

    def __init__(self, script: dict[int, DayCondition]):
        self.script = script

    def evaluate(self, day):
        return self.script.get(day, DayCondition(day, WeatherCondition.NORMAL)), 3.0


@pytest.mark.asyncio
async def test_summarize_zero_days():
    summary = await YearAggregator(DayClassifier()).summarize(0)
    assert summary.drought_days == summary.rainy_days == summary.optimal_days == 0
    assert summary.normal_days == 0
    assert summary.most_rainy_day is None
    assert summary.max_perimeter is None


@pytest.mark.asyncio
async def test_summary_counts_cover_every_day():
    classifier = DayClassifier()
    summary = await YearAggregator(classifier).summarize(730)
    assert summary.total_days == 730

    conditions = classifier.classify_range(0, 730)
    assert summary.rainy_days == sum(c.condition is WeatherCondition.RAIN for c in conditions)
    assert summary.drought_days == sum(c.condition is WeatherCondition.DROUGHT for c in conditions)
    assert summary.drought_days >= 1  # day 0


@pytest.mark.asyncio
async def test_most_rainy_day_has_the_largest_perimeter():
    classifier = DayClassifier()
    summary = await YearAggregator(classifier).summarize(365)
    rain = [c for c in classifier.classify_range(0, 365) if c.condition is WeatherCondition.RAIN]
    if not rain:
        assert summary.most_rainy_day is None
        return
    best = max(c.perimeter for c in rain)
    assert summary.max_perimeter == best
    assert summary.most_rainy_day == min(c.day for c in rain if c.perimeter == best)


@pytest.mark.asyncio
async def test_rainiest_day_tie_keeps_earliest():
    script = {
        2: DayCondition(2, WeatherCondition.RAIN, 10.0),
        4: DayCondition(4, WeatherCondition.RAIN, 30.0),
        6: DayCondition(6, WeatherCondition.RAIN, 30.0),
        7: DayCondition(7, WeatherCondition.RAIN, 20.0),
    }
    summary = await YearAggregator(_ScriptedClassifier(script)).summarize(10)
    assert summary.rainy_days == 4
    assert summary.normal_days == 6
    assert summary.most_rainy_day == 4
    assert summary.max_perimeter == 30.0


@pytest.mark.asyncio
async def test_second_run_is_served_from_cache():
    cache = MemoryPredictionCache()
    aggregator = YearAggregator(DayClassifier(), cache=cache)

    first = await aggregator.summarize(365)
    assert aggregator.last_stats.inserted == 365
    assert len(cache) == 365

    second = await aggregator.summarize(365)
    assert second == first
    assert aggregator.last_stats.inserted == 0
    assert aggregator.last_stats.cache_hits == 365
    assert aggregator.last_stats.computed == 0


@pytest.mark.asyncio
async def test_cached_records_are_never_overwritten():
    cache = MemoryPredictionCache()
    await cache.insert_if_absent(DayCondition(0, WeatherCondition.NORMAL))

    summary = await YearAggregator(DayClassifier(), cache=cache).summarize(1)
    assert summary.normal_days == 1
    assert (await cache.get(0)).condition is WeatherCondition.NORMAL


@pytest.mark.asyncio
async def test_unavailable_cache_yields_same_summary():
    healthy = await YearAggregator(DayClassifier(), cache=MemoryPredictionCache()).summarize(400)

    aggregator = YearAggregator(DayClassifier(), cache=_BrokenCache())
    degraded = await aggregator.summarize(400)
    assert degraded == healthy
    assert aggregator.last_stats.write_failures == 400
    assert aggregator.last_stats.cache_hits == 0


@pytest.mark.asyncio
async def test_write_failures_reported_to_observer():
    observer = LoggingObserver()
    failures = []
    observer.on_cache_write_failed = lambda condition, error: failures.append(condition.day)

    aggregator = YearAggregator(DayClassifier(), cache=_WriteOnlyFailureCache(), observer=observer)
    await aggregator.summarize(5)
    assert failures == [0, 1, 2, 3, 4]
    assert aggregator.last_stats.inserted == 0


@pytest.mark.asyncio
async def test_observer_tracks_determinant_range():
    observer = LoggingObserver()
    await YearAggregator(DayClassifier(), observer=observer).summarize(100)
    assert observer.max_determinant > 0
    assert observer.min_determinant is not None
    assert observer.min_determinant <= observer.max_determinant


@pytest.mark.asyncio
async def test_summarize_years_and_negative_input():
    aggregator = YearAggregator(DayClassifier())
    summary = await aggregator.summarize_years(1)
    assert summary.total_days == 365
    with pytest.raises(ValueError):
        await aggregator.summarize(-1)
    with pytest.raises(ValueError):
        await aggregator.summarize_years(-2)


class _CountingClassifier(DayClassifier):
    def __init__(self):
        super().__init__()
        self.position_calls = 0

    def positions(self, day):
        self.position_calls += 1
        return super().positions(day)


@pytest.mark.asyncio
async def test_positions_computed_once_per_classified_day():
    classifier = _CountingClassifier()
    cache = MemoryPredictionCache()
    aggregator = YearAggregator(classifier, cache=cache)

    await aggregator.summarize(50)
    assert classifier.position_calls == 50

    await aggregator.summarize(60)
    assert classifier.position_calls == 60


@pytest.mark.asyncio
async def test_cache_misses_counted_only_when_cache_consulted():
    reset_metrics()
    try:
        await YearAggregator(DayClassifier(), observer=LoggingObserver()).summarize(30)
        snapshot = get_metrics()
        assert snapshot["cache"]["misses"] == 0
        assert snapshot["days_classified"] == 30

        cached = YearAggregator(DayClassifier(), cache=MemoryPredictionCache(), observer=LoggingObserver())
        await cached.summarize(30)
        await cached.summarize(30)
        snapshot = get_metrics()
        assert snapshot["cache"]["misses"] == 30
        assert snapshot["cache"]["hits"] == 30
    finally:
        reset_metrics()
