#!/usr/bin/env python3
"""
Monitoring hooks for performance tracking and observability
Lightweight counters and timers plus optional Prometheus export
"""

import threading
import time

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from prometheus_client import Counter, Gauge, Histogram

# ============================================================================
# METRICS STORAGE
# ============================================================================


@dataclass
class MetricStats:
    """Statistics for a single metric"""

    count: int = 0
    total_time: float = 0.0
    min_time: float = float("inf")
    max_time: float = 0.0
    last_time: float = 0.0
    errors: int = 0

    @property
    def avg_time(self) -> float:
        """Average time per call"""
        return self.total_time / self.count if self.count > 0 else 0.0

    def record(self, duration: float, error: bool = False):
        """Record a metric observation"""
        self.count += 1
        self.total_time += duration
        self.min_time = min(self.min_time, duration)
        self.max_time = max(self.max_time, duration)
        self.last_time = duration
        if error:
            self.errors += 1


@dataclass
class CacheStats:
    """Prediction cache statistics"""

    hits: int = 0
    misses: int = 0
    write_failures: int = 0

    @property
    def hit_rate(self) -> float:
        """Cache hit rate"""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


# ============================================================================
# METRICS COLLECTOR
# ============================================================================


class MetricsCollector:
    """Thread-safe metrics collection"""

    def __init__(self):
        self._metrics: dict[str, MetricStats] = {}
        self._cache_stats = CacheStats()
        self._days_classified = 0
        self._lock = threading.Lock()
        self._start_time = time.time()

    def record_timing(self, name: str, duration: float, error: bool = False):
        """Record a timing metric"""
        with self._lock:
            if name not in self._metrics:
                self._metrics[name] = MetricStats()
            self._metrics[name].record(duration, error)

    def record_cache_hit(self):
        with self._lock:
            self._cache_stats.hits += 1

    def record_cache_miss(self):
        with self._lock:
            self._cache_stats.misses += 1

    def record_cache_write_failure(self):
        with self._lock:
            self._cache_stats.write_failures += 1

    def record_day_classified(self):
        with self._lock:
            self._days_classified += 1

    def record_error(self, error_type: str):
        """Record an error occurrence under errors.<type>"""
        with self._lock:
            name = f"errors.{error_type}"
            if name not in self._metrics:
                self._metrics[name] = MetricStats()
            self._metrics[name].record(0, error=True)

    def get_metrics(self) -> dict[str, Any]:
        """Get all metrics as a dictionary"""
        with self._lock:
            uptime = time.time() - self._start_time

            metrics_dict = {}
            for name, stats in self._metrics.items():
                metrics_dict[name] = {
                    "count": stats.count,
                    "total_time": stats.total_time,
                    "avg_time": stats.avg_time,
                    "min_time": stats.min_time if stats.count > 0 else 0,
                    "max_time": stats.max_time,
                    "last_time": stats.last_time,
                    "errors": stats.errors,
                    "error_rate": stats.errors / stats.count if stats.count > 0 else 0,
                }

            return {
                "uptime_seconds": uptime,
                "metrics": metrics_dict,
                "days_classified": self._days_classified,
                "cache": {
                    "hits": self._cache_stats.hits,
                    "misses": self._cache_stats.misses,
                    "hit_rate": self._cache_stats.hit_rate,
                    "write_failures": self._cache_stats.write_failures,
                },
            }

    def reset(self):
        """Reset all metrics"""
        with self._lock:
            self._metrics.clear()
            self._cache_stats = CacheStats()
            self._days_classified = 0
            self._start_time = time.time()


# Global metrics collector instance
_collector = MetricsCollector()


# ============================================================================
# CONTEXT MANAGERS
# ============================================================================


class Timer:
    """Context manager for timing code blocks

    Usage:
        with Timer("year_summary"):
            ...
    """

    def __init__(self, name: str):
        self.name = name
        self.start = None

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = time.perf_counter() - self.start
        _collector.record_timing(self.name, duration, exc_type is not None)


# ============================================================================
# PUBLIC API
# ============================================================================


def get_metrics() -> dict[str, Any]:
    """Get current metrics snapshot"""
    return _collector.get_metrics()


def reset_metrics():
    """Reset all metrics"""
    _collector.reset()


# ============================================================================
# PROMETHEUS INTEGRATION
# ============================================================================

prom_request_count: Counter | None = None
prom_request_duration: Histogram | None = None
prom_cache_hits: Counter | None = None
prom_cache_misses: Counter | None = None
prom_cache_write_failures: Counter | None = None
prom_days_classified: Counter | None = None
prom_active_requests: Gauge | None = None
prom_uptime: Gauge | None = None

_prometheus_lock = threading.Lock()


def setup_prometheus_metrics() -> bool:
    """Register Prometheus metrics on the default registry.

    Idempotent; metrics are exposed via the app's /metrics endpoint.
    Returns True when metrics were registered by this call.
    """
    global prom_request_count, prom_request_duration, prom_cache_hits, prom_cache_misses
    global prom_cache_write_failures, prom_days_classified, prom_active_requests, prom_uptime

    with _prometheus_lock:
        if prom_request_count is not None:
            return False

        prom_request_count = Counter(
            "weather_requests_total",
            "Total requests",
            ["method", "endpoint", "status"],
        )
        prom_request_duration = Histogram(
            "weather_request_duration_seconds",
            "Request duration",
            ["method", "endpoint"],
            buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
        )
        prom_cache_hits = Counter("weather_cache_hits_total", "Prediction cache hits")
        prom_cache_misses = Counter("weather_cache_misses_total", "Prediction cache misses")
        prom_cache_write_failures = Counter(
            "weather_cache_write_failures_total", "Prediction cache writes that failed"
        )
        prom_days_classified = Counter(
            "weather_days_classified_total", "Days classified from planet geometry"
        )
        prom_active_requests = Gauge("weather_active_requests", "Active requests")
        prom_uptime = Gauge("weather_uptime_seconds", "Application uptime")
        prom_uptime.set_function(lambda: time.time() - _collector._start_time)
        return True


# ============================================================================
# TRACKING HELPERS
# ============================================================================


@contextmanager
def track_request(endpoint: str, method: str = "GET"):
    """Track an API request"""
    start = time.perf_counter()
    if prom_active_requests is not None:
        prom_active_requests.inc()
    status = "error"
    try:
        yield
        status = "success"
    finally:
        duration = time.perf_counter() - start
        _collector.record_timing(f"request.{endpoint}", duration, status == "error")
        if prom_request_duration is not None:
            prom_request_duration.labels(method=method, endpoint=endpoint).observe(duration)
        if prom_request_count is not None:
            prom_request_count.labels(method=method, endpoint=endpoint, status=status).inc()
        if prom_active_requests is not None:
            prom_active_requests.dec()


def track_cache_hit():
    _collector.record_cache_hit()
    if prom_cache_hits is not None:
        prom_cache_hits.inc()


def track_cache_miss():
    _collector.record_cache_miss()
    if prom_cache_misses is not None:
        prom_cache_misses.inc()


def track_cache_write_failure():
    _collector.record_cache_write_failure()
    if prom_cache_write_failures is not None:
        prom_cache_write_failures.inc()


def track_day_classified():
    _collector.record_day_classified()
    if prom_days_classified is not None:
        prom_days_classified.inc()


def track_error(endpoint: str, error_type: str):
    """Track an error"""
    _collector.record_error(f"{endpoint}.{error_type}")
