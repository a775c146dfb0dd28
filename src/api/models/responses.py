"""
Response models for OpenAPI specification and contract stability.

Every route declares a response model so the schema stays stable for clients.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from forecast.core_types import DayCondition, WeatherCondition, YearSummary


# =======================
# Health & Monitoring
# =======================

class HealthStatus(BaseModel):
    """Basic health status response."""
    status: str = Field(..., description="Health status: ok, warning, error")
    timestamp: datetime = Field(..., description="Check timestamp")
    process_id: str = Field(..., description="Process ID as string")


class DependencyCheck(BaseModel):
    """Individual dependency check result."""
    status: str = Field(..., description="Check status: ok, warning, error")
    error: Optional[str] = Field(None, description="Error message if failed")


class CacheCheck(DependencyCheck):
    """Prediction cache round-trip check."""
    backend: str = Field(..., description="Cache backend: memory, redis or postgres")


class PlanetConfigCheck(DependencyCheck):
    """Planet configuration check."""
    planets: List[str] = Field(default_factory=list, description="Configured planet names")


class ReadinessChecks(BaseModel):
    """Dependency checks run by the readiness probe."""
    cache: CacheCheck
    planets: PlanetConfigCheck


class ReadinessResponse(BaseModel):
    """Readiness probe response."""
    status: str = Field(..., description="ready or not_ready")
    timestamp: datetime = Field(..., description="Check timestamp")
    checks: ReadinessChecks = Field(..., description="Per-dependency results")
    errors: Optional[List[str]] = Field(None, description="Critical failures")


class MetricsSnapshotResponse(BaseModel):
    """In-process metrics snapshot."""
    uptime_seconds: float
    days_classified: int
    cache: Dict[str, Any]
    metrics: Dict[str, Dict[str, Any]]


# =======================
# Weather
# =======================

class DayConditionResponse(BaseModel):
    """Weather condition for one day."""
    day: int = Field(..., ge=0, description="Day index, 0 is the first day")
    condition: WeatherCondition = Field(..., description="drought, optimal, rain or normal")
    label: str = Field(..., description="Human-readable condition name")
    perimeter: Optional[float] = Field(
        None, description="Triangle perimeter formed by the planets; rain days only"
    )

    @classmethod
    def from_condition(cls, condition: DayCondition) -> "DayConditionResponse":
        return cls(
            day=condition.day,
            condition=condition.condition,
            label=condition.condition.label,
            perimeter=condition.perimeter,
        )


class YearSummaryResponse(BaseModel):
    """Condition counts over a number of years."""
    years: int = Field(..., ge=0, description="Years requested")
    total_days: int = Field(..., ge=0, description="Days aggregated (years * 365)")
    drought_days: int = Field(..., ge=0)
    rainy_days: int = Field(..., ge=0)
    optimal_days: int = Field(..., ge=0)
    normal_days: int = Field(..., ge=0)
    most_rainy_day: Optional[int] = Field(
        None, description="Rain day with the largest perimeter; earliest on ties"
    )
    max_perimeter: Optional[float] = Field(None, description="Perimeter on most_rainy_day")

    @classmethod
    def from_summary(cls, years: int, total_days: int, summary: YearSummary) -> "YearSummaryResponse":
        return cls(years=years, total_days=total_days, **summary.to_dict())


class DayRangeResponse(BaseModel):
    """Conditions for a contiguous range of days."""
    start: int = Field(..., ge=0, description="First day (inclusive)")
    end: int = Field(..., ge=0, description="Last day (exclusive)")
    predictions: List[DayConditionResponse]


class WeatherIndexResponse(BaseModel):
    """Weather API entry point."""
    name: str
    endpoints: List[str]
    planets: List[Dict[str, Any]]


# =======================
# Errors
# =======================

class Problem(BaseModel):
    """Problem Details per RFC 7807 for error responses."""
    type: Optional[str] = Field(
        None, description="URI reference that identifies the problem type"
    )
    title: str = Field(..., description="Short, human-readable summary of the problem")
    status: int = Field(..., description="HTTP status code")
    detail: Optional[str] = Field(None, description="Human-readable explanation")
    instance: Optional[str] = Field(
        None, description="URI reference that identifies the specific occurrence"
    )
    code: Optional[str] = Field(None, description="Application-specific error code")
    errors: Optional[List[Dict[str, Any]]] = Field(
        None, description="Field-level validation errors"
    )
