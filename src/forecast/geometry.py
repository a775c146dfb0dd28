#!/usr/bin/env python3
"""
Geometry kernel over planet positions

Every test here derives from the signed doubled area of a triangle:

    D(p1, p2, p3) = p1.x*(p2.y - p3.y) + p2.x*(p3.y - p1.y) + p3.x*(p1.y - p2.y)

D is zero iff the three points are exactly colinear. Inputs are expected to be
rounded positions from the orbit model.
"""

import math

from constants.planets import ALIGNMENT_TOLERANCE

from .core_types import ORIGIN, Position


def determinant(p1: Position, p2: Position, p3: Position) -> float:
    """Signed doubled area of the triangle p1-p2-p3"""
    return p1.x * (p2.y - p3.y) + p2.x * (p3.y - p1.y) + p3.x * (p1.y - p2.y)


def are_aligned(
    p1: Position,
    p2: Position,
    p3: Position,
    tolerance: float = ALIGNMENT_TOLERANCE,
) -> bool:
    """True when the three points lie on one line, within tolerance.

    The tolerance absorbs the one-decimal rounding of positions. Argument order
    only flips the sign of D, so the result is permutation invariant.
    """
    return abs(determinant(p1, p2, p3)) < tolerance


def distance(p1: Position, p2: Position) -> float:
    """Euclidean distance between two positions"""
    return math.hypot(p1.x - p2.x, p1.y - p2.y)


def triangle_perimeter(p1: Position, p2: Position, p3: Position) -> float:
    """Sum of the three side lengths"""
    return distance(p1, p2) + distance(p2, p3) + distance(p3, p1)


def is_sun_inside_triangle(p1: Position, p2: Position, p3: Position) -> bool:
    """True iff the sun (origin) is enclosed by the triangle p1-p2-p3.

    Area decomposition: the whole triangle's area equals the sum of the three
    sub-triangles built from the sun and each edge exactly when the sun is
    inside or on an edge. Compared with exact equality, no tolerance.
    """
    whole = abs(determinant(p1, p2, p3))
    parts = (
        abs(determinant(p1, p2, ORIGIN))
        + abs(determinant(p2, p3, ORIGIN))
        + abs(determinant(p3, p1, ORIGIN))
    )
    return whole == parts
