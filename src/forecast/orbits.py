#!/usr/bin/env python3
"""
Orbit model: circular orbits around the sun
"""

import math

from fractions import Fraction

from constants.planets import POSITION_DECIMALS

from .core_types import Body, Position

FULL_TURN = 360

# Largest day count whose product with a float speed is still computed on
# integers exactly representable as floats
FLOAT_EXACT_DAYS = 2**53


def planet_position(radius: float, angle: float) -> Position:
    """Position of a planet at `radius` and `angle` degrees from the x axis.

    Both coordinates are rounded to one decimal. Every downstream alignment and
    area comparison is only meaningful at this resolution.

    Angles beyond +/-360 are accepted as-is; cos/sin handle the periodicity.
    """
    radians = math.radians(angle)
    x = round(radius * math.cos(radians), POSITION_DECIMALS)
    y = round(radius * math.sin(radians), POSITION_DECIMALS)
    return Position(x, y)


def body_position(body: Body, day: int) -> Position:
    """Position of `body` after `day` days"""
    if day <= FLOAT_EXACT_DAYS:
        return planet_position(body.radius, body.angular_speed * day)
    # speed * day would lose every fractional degree (or overflow a float);
    # reduce modulo a full turn in exact rational arithmetic instead
    angle = Fraction(body.angular_speed) * day % FULL_TURN
    return planet_position(body.radius, float(angle))
