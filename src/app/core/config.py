#!/usr/bin/env python3
"""
Application configuration
"""

import os

# API metadata
API_TITLE = "Solar System Weather API"
API_DESCRIPTION = "Daily weather forecast from the alignment of three planets"
API_VERSION = "1.0.0"

# API limits
MAX_YEARS_PER_REQUEST = int(os.getenv("MAX_YEARS_PER_REQUEST", "100"))
MAX_DAYS_PER_RANGE = int(os.getenv("MAX_DAYS_PER_RANGE", "3650"))
MAX_DAY = int(os.getenv("MAX_DAY", str(10**12)))
