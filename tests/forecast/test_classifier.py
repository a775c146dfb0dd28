from __future__ import annotations

import pytest

from forecast.classifier import DayClassifier
from forecast.core_types import Body, WeatherCondition

# Day 1 of each set puts the planets in a known arrangement
RAIN_BODIES = (Body("A", 1000, 0), Body("B", 1000, 120), Body("C", 1000, 240))
NORMAL_BODIES = (Body("A", 1000, 0), Body("B", 1000, 90), Body("C", 2000, 45))
OPTIMAL_BODIES = (
    Body("A", 1000, 0),
    Body("B", 1414.2135623730951, 45),
    Body("C", 1414.2135623730951, -45),
)


def test_day_zero_is_drought_for_default_planets() -> None:
    result = DayClassifier().classify(0)
    assert result.condition is WeatherCondition.DROUGHT
    assert result.perimeter is None


def test_equal_radii_integer_speed_multiples_start_in_drought() -> None:
    classifier = DayClassifier((Body("A", 700, 2), Body("B", 700, 4), Body("C", 1400, -6)))
    assert classifier.classify(0).condition is WeatherCondition.DROUGHT


def test_rain_when_sun_enclosed() -> None:
    result = DayClassifier(RAIN_BODIES).classify(1)
    assert result.condition is WeatherCondition.RAIN
    assert result.perimeter is not None and result.perimeter > 0
    assert result.perimeter == pytest.approx(3 * 1732.05, rel=1e-3)


def test_optimal_when_aligned_off_the_sun() -> None:
    result = DayClassifier(OPTIMAL_BODIES).classify(1)
    assert result.condition is WeatherCondition.OPTIMAL
    assert result.perimeter is None


def test_normal_otherwise() -> None:
    result = DayClassifier(NORMAL_BODIES).classify(1)
    assert result.condition is WeatherCondition.NORMAL


def test_classify_is_pure_in_day() -> None:
    first = DayClassifier()
    second = DayClassifier()
    days = [0, 1, 45, 90, 359, 720, 3649]
    assert [first.classify(d) for d in days] == [second.classify(d) for d in days]
    assert first.classify(90) == first.classify(90)


def test_classify_range_is_half_open() -> None:
    classifier = DayClassifier()
    results = classifier.classify_range(10, 20)
    assert [r.day for r in results] == list(range(10, 20))
    assert results == [classifier.classify(d) for d in range(10, 20)]
    assert classifier.classify_range(5, 5) == []


def test_invalid_inputs_rejected() -> None:
    classifier = DayClassifier()
    with pytest.raises(ValueError):
        classifier.classify(-1)
    with pytest.raises(ValueError):
        classifier.classify_range(10, 5)
    with pytest.raises(ValueError):
        DayClassifier(RAIN_BODIES[:2])


def test_evaluate_returns_condition_and_determinant() -> None:
    classifier = DayClassifier(RAIN_BODIES)
    condition, det = classifier.evaluate(1)
    assert condition == classifier.classify(1)
    assert abs(det) == pytest.approx(2598000.0)


def test_classify_is_total_for_huge_days() -> None:
    classifier = DayClassifier()
    # Every default speed is a whole number of degrees, so 360 * k days is day 0
    assert classifier.classify(360 * 10**400).condition is WeatherCondition.DROUGHT
    assert isinstance(classifier.classify(10**309).condition, WeatherCondition)
