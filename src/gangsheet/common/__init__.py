"""Common utilities shared across the package."""

from __future__ import annotations

from .units import (
    POINTS_PER_INCH,
    inches_to_points,
    points_to_inches,
    pixels_to_points,
)
from .defaults import (
    SHEET_DEFAULTS,
    REQUEST_LIMITS,
    PRICE_DEFAULTS,
)

__all__ = [
    # units
    "POINTS_PER_INCH",
    "inches_to_points",
    "points_to_inches",
    "pixels_to_points",
    # defaults
    "SHEET_DEFAULTS",
    "REQUEST_LIMITS",
    "PRICE_DEFAULTS",
]
