#!/usr/bin/env python3
"""
Solar System Weather API - Main Application
FastAPI application for planet-alignment weather forecasts
"""

import os
import uuid

from contextlib import asynccontextmanager
from urllib.parse import urlparse

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, Field

from api.models.responses import Problem
from api.routers.health import router as health_router
from api.routers.weather import router as weather_router
from app.core.config import API_DESCRIPTION, API_TITLE, API_VERSION
from app.core.environment import get_complete_config
from app.core.logging import get_api_logger, setup_logging
from app.services.prediction_cache import PredictionCache, build_prediction_cache
from forecast.classifier import DayClassifier
from forecast.errors import CacheUnavailableError
from forecast.monitoring import setup_prometheus_metrics
from forecast.planet_config import initialize_planet_config

# Initialize structured logging EARLY (before any logger usage)
config = get_complete_config()
setup_logging(level=config.logging.level, format_json=config.logging.format_json)
logger = get_api_logger("main")


# ============================================================================
# LIFESPAN
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting Weather API...")

    bodies = initialize_planet_config()
    app.state.classifier = DayClassifier(bodies)
    _setup_prometheus_metrics()
    app.state.prediction_cache = await _initialize_prediction_cache()
    try:
        yield
    finally:
        await _graceful_shutdown(app)


def _setup_prometheus_metrics():
    """Setup Prometheus monitoring."""
    if setup_prometheus_metrics():
        logger.info("Prometheus metrics registered, exposed at /metrics")


async def _initialize_prediction_cache() -> PredictionCache:
    """Build the configured cache backend and open its connections.

    A backend that cannot be reached at startup is still returned: the
    aggregator degrades to computing every day and readiness reports 503.
    """
    cache = build_prediction_cache(config.cache)
    try:
        await cache.initialize()
        logger.info(f"Prediction cache ready: {cache.name}")
    except CacheUnavailableError as e:
        logger.warning(f"Prediction cache {cache.name} unavailable at startup: {e}")
    return cache


async def _graceful_shutdown(app: FastAPI):
    """Handle graceful application shutdown."""
    logger.info("Initiating graceful shutdown...")
    cache: PredictionCache | None = getattr(app.state, "prediction_cache", None)
    if cache is not None:
        try:
            await cache.close()
        except CacheUnavailableError as e:
            logger.error(f"Error closing prediction cache: {e}")
        app.state.prediction_cache = None
    logger.info("Weather API shutdown complete")


app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)


# ============================================================================
# CORS
# ============================================================================


def configure_cors_security():
    """Configure CORS; remote deployments must list their origins explicitly."""
    strict = config.env_type == "remote"
    cors_origins_env = os.getenv("CORS_ALLOWED_ORIGINS", "").strip()

    allowed_origins = []
    for origin in (o.strip() for o in cors_origins_env.split(",")):
        if not origin:
            continue
        if origin == "*":
            if strict:
                raise RuntimeError("CORS Security Error: Wildcard origins prohibited in remote environments")
            logger.warning("Wildcard CORS origin (*) should not be used")
        elif not origin.startswith(("http://", "https://")) or not urlparse(origin).netloc:
            logger.error(f"Invalid CORS origin: {origin}")
            if strict:
                raise RuntimeError(f"CORS Security Error: Invalid origin: {origin}")
            continue
        allowed_origins.append(origin)

    if not allowed_origins:
        if strict:
            raise RuntimeError(
                "CORS Security Error: CORS_ALLOWED_ORIGINS required for remote environments"
            )
        allowed_origins = [
            "http://localhost:3000",
            "http://localhost:8000",
            "http://localhost:8080",
        ]
        logger.info("Using default localhost CORS origins")

    return {
        "allow_origins": allowed_origins,
        "allow_credentials": True,
        "allow_methods": ["GET", "OPTIONS"],
        "allow_headers": ["accept", "content-type", "origin", "x-request-id"],
        "expose_headers": ["x-request-id"],
        "max_age": 86400,
    }


app.add_middleware(CORSMiddleware, **configure_cors_security())

app.include_router(health_router, prefix="/api/v1")
app.include_router(weather_router)


# ============================================================================
# ROOT & METRICS
# ============================================================================


class RootInfoResponse(BaseModel):
    name: str
    version: str
    status: str
    docs: str
    weather: str = Field(..., description="Weather API entry point")


@app.get("/", response_model=RootInfoResponse, tags=["health"], operation_id="root_info")
async def root() -> dict[str, object]:
    return {
        "name": API_TITLE,
        "version": API_VERSION,
        "status": "operational",
        "docs": "/api/docs",
        "weather": "/api/v1/weather/",
    }


@app.get("/metrics", response_class=PlainTextResponse, tags=["health"], operation_id="prometheus_metrics")
async def metrics():
    """Prometheus metrics endpoint"""
    return PlainTextResponse(generate_latest(), media_type=CONTENT_TYPE_LATEST)


# ============================================================================
# ERROR HANDLERS (RFC 7807 Problem Details)
# ============================================================================


def _request_id(request: Request) -> str:
    return request.headers.get("x-request-id") or str(uuid.uuid4())


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    detail = None
    title = "HTTP error"
    if isinstance(exc.detail, dict):
        title = exc.detail.get("title") or title
        detail = exc.detail.get("detail") or detail
    elif isinstance(exc.detail, str):
        title = exc.detail

    problem = Problem(
        title=title,
        status=exc.status_code,
        detail=detail,
        instance=str(request.url),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=problem.model_dump(),
        headers={"X-Request-ID": _request_id(request)},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    problem = Problem(
        title="Validation error",
        status=422,
        detail="Request parameters failed validation",
        instance=str(request.url),
        code="VALIDATION_ERROR",
        errors=jsonable_encoder(exc.errors()),
    )
    return JSONResponse(
        status_code=422,
        content=problem.model_dump(),
        headers={"X-Request-ID": _request_id(request)},
    )


# Fallback handler for uncaught exceptions
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}")
    problem = Problem(
        title="Internal Server Error",
        status=500,
        detail=str(exc)[:200],
        instance=str(request.url),
        code="INTERNAL_ERROR",
    )
    return JSONResponse(
        status_code=500,
        content=problem.model_dump(),
        headers={"X-Request-ID": _request_id(request)},
    )


# Custom OpenAPI schema with metadata (servers/contact)
def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    schema = get_openapi(
        title=app.title,
        version=os.getenv("OPENAPI_VERSION", API_VERSION),
        description=app.description,
        routes=app.routes,
    )
    schema["servers"] = [{"url": os.getenv("OPENAPI_PUBLIC_URL", "/")}]
    schema.setdefault("info", {}).setdefault("contact", {})
    schema["info"]["contact"].update({"name": "Weather API Support"})
    app.openapi_schema = schema
    return app.openapi_schema


app.openapi = custom_openapi
