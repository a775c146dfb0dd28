from __future__ import annotations

from itertools import permutations

from forecast.core_types import ORIGIN, Position
from forecast.geometry import (
    are_aligned,
    determinant,
    distance,
    is_sun_inside_triangle,
    triangle_perimeter,
)

ENCLOSING = (Position(1000.0, 0.0), Position(-500.0, 866.0), Position(-500.0, -866.0))
FIRST_QUADRANT = (Position(1000.0, 0.0), Position(0.0, 1000.0), Position(1414.2, 1414.2))


def test_determinant_is_zero_for_colinear_points() -> None:
    assert determinant(Position(0.0, 0.0), Position(1.0, 1.0), Position(2.5, 2.5)) == 0


def test_are_aligned_is_permutation_invariant() -> None:
    for points in (ENCLOSING, FIRST_QUADRANT, (Position(500.0, 0.0), Position(1000.0, 0.0), ORIGIN)):
        expected = are_aligned(*points)
        assert all(are_aligned(*p) == expected for p in permutations(points))


def test_are_aligned_absorbs_rounding_noise() -> None:
    # Nearly on the x axis; |D| stays well under the tolerance
    assert are_aligned(Position(500.0, 0.3), Position(1000.0, -0.4), Position(2000.0, 0.1))


def test_wide_triangle_is_not_aligned() -> None:
    assert not are_aligned(*ENCLOSING)


def test_custom_tolerance() -> None:
    points = (Position(0.0, 0.0), Position(10.0, 0.0), Position(10.0, 1.0))
    assert are_aligned(*points, tolerance=11)
    assert not are_aligned(*points, tolerance=10)


def test_sun_inside_enclosing_triangle() -> None:
    assert is_sun_inside_triangle(*ENCLOSING)


def test_sun_outside_triangle() -> None:
    assert not is_sun_inside_triangle(*FIRST_QUADRANT)


def test_degenerate_triangles_do_not_crash() -> None:
    same_point = (Position(3.0, 4.0),) * 3
    assert isinstance(is_sun_inside_triangle(*same_point), bool)
    assert not is_sun_inside_triangle(Position(0.0, 1.0), Position(1.0, 1.0), Position(2.0, 1.0))


def test_distance_and_perimeter() -> None:
    assert distance(Position(0.0, 0.0), Position(3.0, 4.0)) == 5.0
    assert triangle_perimeter(Position(0.0, 0.0), Position(3.0, 0.0), Position(3.0, 4.0)) == 12.0
