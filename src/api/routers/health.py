#!/usr/bin/env python3
"""
Health check endpoints for monitoring and readiness
"""

import os

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_prediction_cache
from api.models.responses import (
    CacheCheck,
    HealthStatus,
    MetricsSnapshotResponse,
    PlanetConfigCheck,
    ReadinessChecks,
    ReadinessResponse,
)
from app.services.prediction_cache import PredictionCache
from forecast.errors import PlanetConfigError
from forecast.monitoring import get_metrics
from forecast.planet_config import get_planets

router = APIRouter(tags=["health"])


@router.get(
    "/health/live",
    response_model=HealthStatus,
    summary="Liveness",
    operation_id="health_live",
)
async def liveness_check() -> HealthStatus:
    """
    Kubernetes liveness probe endpoint.

    Returns 200 OK if the application process is alive and responsive.
    """
    return HealthStatus(
        status="ok",
        timestamp=datetime.now(UTC),
        process_id=str(os.getpid()),
    )


async def _check_cache(cache: PredictionCache | None) -> CacheCheck:
    if cache is None:
        return CacheCheck(status="warning", backend="none", error="Prediction cache not configured")
    result = await cache.health_check()
    if result["status"] == "healthy":
        return CacheCheck(status="ok", backend=result["backend"])
    return CacheCheck(status="error", backend=result["backend"], error=result.get("error"))


def _check_planets() -> PlanetConfigCheck:
    try:
        bodies = get_planets()
    except PlanetConfigError as e:
        return PlanetConfigCheck(status="error", error=str(e))
    return PlanetConfigCheck(status="ok", planets=[body.name for body in bodies])


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    responses={
        200: {"description": "Service is ready"},
        503: {"description": "Service is not ready"},
    },
    summary="Readiness",
    operation_id="health_ready",
)
async def readiness_check(
    cache: PredictionCache | None = Depends(get_prediction_cache),
) -> ReadinessResponse:
    """
    Kubernetes readiness probe endpoint.

    Returns 200 OK when the prediction cache answers and the planets are loaded.
    Returns 503 Service Unavailable otherwise.
    """
    checks = ReadinessChecks(cache=await _check_cache(cache), planets=_check_planets())

    critical_failures = [
        f"{name}: {check.error or 'unknown error'}"
        for name, check in (("cache", checks.cache), ("planets", checks.planets))
        if check.status == "error"
    ]

    response = ReadinessResponse(
        status="ready" if not critical_failures else "not_ready",
        timestamp=datetime.now(UTC),
        checks=checks,
        errors=critical_failures or None,
    )

    if critical_failures:
        return JSONResponse(
            content=response.model_dump(mode="json"),
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return response


@router.get(
    "/health/metrics",
    response_model=MetricsSnapshotResponse,
    summary="Metrics",
    operation_id="health_metrics",
)
async def metrics_endpoint() -> MetricsSnapshotResponse:
    """In-process metrics snapshot: request timings, cache hits and days classified."""
    return MetricsSnapshotResponse(**get_metrics())
