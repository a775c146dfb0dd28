from __future__ import annotations

import pytest

from forecast.core_types import AggregationStats, DayCondition, WeatherCondition, YearSummary
from forecast.monitoring import (
    Timer,
    get_metrics,
    reset_metrics,
    setup_prometheus_metrics,
    track_request,
)
from forecast.observers import LoggingObserver


@pytest.fixture(autouse=True)
def _clean_metrics():
    reset_metrics()
    yield
    reset_metrics()


def test_timer_records_timing():
    with Timer("unit.block"):
        pass
    stats = get_metrics()["metrics"]["unit.block"]
    assert stats["count"] == 1
    assert stats["errors"] == 0


def test_track_request_marks_errors():
    with pytest.raises(RuntimeError):
        with track_request("unit_endpoint"):
            raise RuntimeError("fail")
    with track_request("unit_endpoint"):
        pass
    stats = get_metrics()["metrics"]["request.unit_endpoint"]
    assert stats["count"] == 2
    assert stats["errors"] == 1
    assert stats["error_rate"] == 0.5


def test_prometheus_setup_is_idempotent():
    setup_prometheus_metrics()
    assert setup_prometheus_metrics() is False


def test_logging_observer_feeds_cache_counters():
    observer = LoggingObserver()
    observer.on_cache_hit(DayCondition(1, WeatherCondition.NORMAL))
    for day in (2, 3, 4):
        observer.on_cache_miss(day)
    observer.on_classified(DayCondition(2, WeatherCondition.NORMAL), -1500.0)
    observer.on_classified(DayCondition(3, WeatherCondition.DROUGHT), 0.0)
    observer.on_classified(DayCondition(4, WeatherCondition.NORMAL), 300.0)
    observer.on_cache_write_failed(DayCondition(4, WeatherCondition.NORMAL), RuntimeError("x"))
    observer.on_complete(YearSummary(normal_days=3, drought_days=1), AggregationStats(days=4))

    snapshot = get_metrics()
    assert snapshot["cache"]["hits"] == 1
    assert snapshot["cache"]["misses"] == 3
    assert snapshot["cache"]["write_failures"] == 1
    assert snapshot["cache"]["hit_rate"] == 0.25
    assert snapshot["days_classified"] == 3
    assert observer.min_determinant == 300.0
    assert observer.max_determinant == 1500.0
