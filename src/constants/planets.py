"""
Planet constants for the three-body weather model.
Angular speeds are degrees per day; clockwise motion is negative.
"""


# Default planets: {name: (radius, angular_speed)}
# Order matters: the classifier reads them as A, B, C in this order.
PLANET_DEFAULTS: dict[str, tuple[float, float]] = {
    "Ferengi": (500.0, -1.0),  # 1 deg/day clockwise
    "Vulcano": (1000.0, 5.0),  # 5 deg/day counter-clockwise
    "Betazoide": (2000.0, -3.0),  # 3 deg/day clockwise
}

# Bodies are aligned when |D| falls below this value. Empirical for the
# default orbit scale; not derived from the radii.
ALIGNMENT_TOLERANCE = 42872.22

# Sun coordinates (origin of every orbit)
SUN_X = 0.0
SUN_Y = 0.0

# Positions are rounded to this many decimals before any geometry
POSITION_DECIMALS = 1

DAYS_PER_YEAR = 365
