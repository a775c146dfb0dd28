#!/usr/bin/env python3
"""
Core data types for the weather forecast engine
Value objects shared by the orbit model, classifier, aggregator and cache
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from constants.planets import SUN_X, SUN_Y

# ============================================================================
# GEOMETRY
# ============================================================================


@dataclass(frozen=True)
class Position:
    """Point in the orbital plane, already rounded to one decimal"""

    x: float
    y: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


ORIGIN = Position(SUN_X, SUN_Y)


@dataclass(frozen=True)
class Body:
    """Planet orbiting the sun on a circular path

    radius: distance from the sun (must be positive)
    angular_speed: degrees advanced per day, negative for clockwise
    """

    name: str
    radius: float
    angular_speed: float

    def __post_init__(self):
        if self.radius <= 0:
            raise ValueError(f"Body {self.name!r} radius must be positive, got {self.radius}")

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "radius": self.radius,
            "angular_speed": self.angular_speed,
        }


# ============================================================================
# WEATHER CONDITIONS
# ============================================================================


class WeatherCondition(str, Enum):
    """Weather outcome for a single day"""

    DROUGHT = "drought"
    OPTIMAL = "optimal"
    RAIN = "rain"
    NORMAL = "normal"

    @property
    def label(self) -> str:
        return _CONDITION_LABELS[self]


_CONDITION_LABELS = {
    WeatherCondition.DROUGHT: "Sequía",
    WeatherCondition.OPTIMAL: "Presión y temperatura óptimas",
    WeatherCondition.RAIN: "Lluvia",
    WeatherCondition.NORMAL: "Normalidad",
}


@dataclass(frozen=True)
class DayCondition:
    """Classification of one day; perimeter is set only for rain"""

    day: int
    condition: WeatherCondition
    perimeter: float | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        data: dict[str, Any] = {"day": self.day, "condition": self.condition.value}
        if self.perimeter is not None:
            data["perimeter"] = self.perimeter
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "DayCondition":
        """Create from dictionary (cache records, JSON payloads)"""
        perimeter = data.get("perimeter")
        return cls(
            day=int(data["day"]),
            condition=WeatherCondition(data["condition"]),
            perimeter=float(perimeter) if perimeter is not None else None,
        )


# ============================================================================
# AGGREGATES
# ============================================================================


@dataclass(frozen=True)
class YearSummary:
    """Per-condition day counts over an aggregation window"""

    drought_days: int = 0
    rainy_days: int = 0
    optimal_days: int = 0
    normal_days: int = 0
    most_rainy_day: int | None = None
    max_perimeter: float | None = None

    @property
    def total_days(self) -> int:
        return self.drought_days + self.rainy_days + self.optimal_days + self.normal_days

    def to_dict(self) -> dict:
        return {
            "drought_days": self.drought_days,
            "rainy_days": self.rainy_days,
            "optimal_days": self.optimal_days,
            "normal_days": self.normal_days,
            "most_rainy_day": self.most_rainy_day,
            "max_perimeter": self.max_perimeter,
        }


@dataclass
class AggregationStats:
    """Cache traffic observed during one summarize() call"""

    days: int = 0
    cache_hits: int = 0
    computed: int = 0
    inserted: int = 0
    write_failures: int = 0
