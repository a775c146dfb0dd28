#!/usr/bin/env python3
"""
Weather API endpoints
Day predictions, yearly summaries and day-range listings
"""

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from api.dependencies import get_aggregator, get_classifier
from api.models.responses import (
    DayConditionResponse,
    DayRangeResponse,
    WeatherIndexResponse,
    YearSummaryResponse,
)
from app.core.config import MAX_DAY, MAX_DAYS_PER_RANGE, MAX_YEARS_PER_REQUEST
from app.core.logging import get_api_logger
from app.openapi.common import DEFAULT_ERROR_RESPONSES
from constants.planets import DAYS_PER_YEAR
from forecast.aggregator import YearAggregator
from forecast.classifier import DayClassifier
from forecast.monitoring import track_error, track_request

router = APIRouter(prefix="/api/v1/weather", tags=["weather"], responses=DEFAULT_ERROR_RESPONSES)
logger = get_api_logger("weather")


@router.get(
    "/",
    response_model=WeatherIndexResponse,
    summary="Weather API index",
    operation_id="weather_index",
)
async def weather_index(classifier: DayClassifier = Depends(get_classifier)) -> WeatherIndexResponse:
    """List the weather endpoints and the configured planets."""
    return WeatherIndexResponse(
        name="Weather Predictor API",
        endpoints=[
            "/api/v1/weather/day/{day}",
            "/api/v1/weather/years/{years}",
            "/api/v1/weather/days?start=&end=",
        ],
        planets=[body.to_dict() for body in classifier.bodies],
    )


@router.get(
    "/day/{day}",
    response_model=DayConditionResponse,
    summary="Weather for one day",
    operation_id="weather_day",
)
async def get_weather_by_day(
    day: int = Path(..., ge=0, le=MAX_DAY, description="Day index, 0 is the first day"),
    classifier: DayClassifier = Depends(get_classifier),
) -> DayConditionResponse:
    """
    Classify a single day from the planets' positions.

    Returns drought, optimal, rain (with the triangle perimeter) or normal.
    """
    with track_request("weather_day"):
        return DayConditionResponse.from_condition(classifier.classify(day))


@router.get(
    "/years/{years}",
    response_model=YearSummaryResponse,
    summary="Weather summary over a number of years",
    operation_id="weather_years",
)
async def get_weather_for_years(
    years: int = Path(..., ge=0, description="Number of 365-day years from day 0"),
    aggregator: YearAggregator = Depends(get_aggregator),
) -> YearSummaryResponse:
    """
    Count drought, rain and optimal days over `years` years.

    Also reports the rainiest day (largest perimeter, earliest on ties).
    Days already in the prediction cache are reused; new ones are stored.
    """
    with track_request("weather_years"):
        if years > MAX_YEARS_PER_REQUEST:
            track_error("weather_years", "validation_error")
            raise HTTPException(
                status_code=400,
                detail={
                    "title": "Invalid years parameter",
                    "detail": f"years cannot exceed {MAX_YEARS_PER_REQUEST}",
                },
            )

        total_days = years * DAYS_PER_YEAR
        summary = await aggregator.summarize(total_days)
        logger.info(
            f"Summarized {years} years",
            extra={"years": years, "rainy_days": summary.rainy_days},
        )
        return YearSummaryResponse.from_summary(years, total_days, summary)


@router.get(
    "/days",
    response_model=DayRangeResponse,
    summary="Weather for a range of days",
    operation_id="weather_days",
)
async def get_weather_for_range(
    start: int = Query(0, ge=0, le=MAX_DAY, description="First day (inclusive)"),
    end: int = Query(..., ge=0, le=MAX_DAY, description="Last day (exclusive)"),
    classifier: DayClassifier = Depends(get_classifier),
) -> DayRangeResponse:
    """Classify every day in [start, end)."""
    with track_request("weather_days"):
        if end < start:
            track_error("weather_days", "validation_error")
            raise HTTPException(
                status_code=400,
                detail={"title": "Invalid day range", "detail": "end must not be before start"},
            )
        if end - start > MAX_DAYS_PER_RANGE:
            track_error("weather_days", "validation_error")
            raise HTTPException(
                status_code=400,
                detail={
                    "title": "Invalid day range",
                    "detail": f"Range cannot exceed {MAX_DAYS_PER_RANGE} days",
                },
            )

        predictions = classifier.classify_range(start, end)
        return DayRangeResponse(
            start=start,
            end=end,
            predictions=[DayConditionResponse.from_condition(p) for p in predictions],
        )
