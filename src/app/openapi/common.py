#!/usr/bin/env python3
"""
Shared OpenAPI helpers and reusable response docs.
"""

from __future__ import annotations

from typing import Any, Dict


# Reusable default error responses for routers. These are documentation-only
# (the global exception handlers already return RFC7807 Problem JSON).
DEFAULT_ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"description": "Bad Request"},
    404: {"description": "Not Found"},
    422: {"description": "Validation Error"},  # FastAPI default
    500: {"description": "Server Error"},
}
