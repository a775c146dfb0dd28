#!/usr/bin/env python3
"""
Day classifier: planet geometry -> weather condition

Priority order for a day d with planets A, B, C:

1. A, B, C aligned
   a. A-B and B-C also aligned with the sun  -> DROUGHT
   b. otherwise                             -> OPTIMAL
2. not aligned
   a. sun inside triangle ABC               -> RAIN (with perimeter)
   b. otherwise                             -> NORMAL
"""

from collections.abc import Sequence

from .core_types import ORIGIN, Body, DayCondition, Position, WeatherCondition
from .geometry import are_aligned, determinant, is_sun_inside_triangle, triangle_perimeter
from .orbits import body_position
from .planet_config import REQUIRED_PLANETS, get_planets


class DayClassifier:
    """Pure classifier over a fixed set of three bodies"""

    def __init__(self, bodies: Sequence[Body] | None = None):
        bodies = tuple(bodies) if bodies is not None else get_planets()
        if len(bodies) != REQUIRED_PLANETS:
            raise ValueError(
                f"DayClassifier needs exactly {REQUIRED_PLANETS} bodies, got {len(bodies)}"
            )
        self.bodies: tuple[Body, Body, Body] = bodies  # type: ignore[assignment]

    def positions(self, day: int) -> tuple[Position, Position, Position]:
        """Rounded positions of the three bodies on `day`"""
        if day < 0:
            raise ValueError(f"day must be non-negative, got {day}")
        a, b, c = self.bodies
        return body_position(a, day), body_position(b, day), body_position(c, day)

    def classify(self, day: int) -> DayCondition:
        """Weather condition for `day`. Deterministic in `day` alone."""
        return self.evaluate(day)[0]

    def evaluate(self, day: int) -> tuple[DayCondition, float]:
        """Condition for `day` plus the determinant of the three positions"""
        pos_a, pos_b, pos_c = self.positions(day)
        return self._classify(day, pos_a, pos_b, pos_c), determinant(pos_a, pos_b, pos_c)

    @staticmethod
    def _classify(day: int, pos_a: Position, pos_b: Position, pos_c: Position) -> DayCondition:
        if are_aligned(pos_a, pos_b, pos_c):
            if are_aligned(pos_a, pos_b, ORIGIN) and are_aligned(pos_b, pos_c, ORIGIN):
                return DayCondition(day, WeatherCondition.DROUGHT)
            return DayCondition(day, WeatherCondition.OPTIMAL)

        if is_sun_inside_triangle(pos_a, pos_b, pos_c):
            perimeter = triangle_perimeter(pos_a, pos_b, pos_c)
            return DayCondition(day, WeatherCondition.RAIN, perimeter)

        return DayCondition(day, WeatherCondition.NORMAL)

    def classify_range(self, start: int, end: int) -> list[DayCondition]:
        """Conditions for days in [start, end)"""
        if start < 0 or end < start:
            raise ValueError(f"invalid day range [{start}, {end})")
        return [self.classify(day) for day in range(start, end)]
