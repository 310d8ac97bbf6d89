"""Centralized defaults and request limits.

All the numbers the service assumes when a caller does not say otherwise,
plus the bounds a request has to stay inside. Grouped in one place so
tuning them doesn't mean hunting through the layout code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Tuple


@dataclass(frozen=True)
class SheetDefaults:
    """Physical defaults for a gang sheet."""

    margin_inches: float = 0.125  # Safe margin on every edge
    spacing_inches: float = 0.5  # Gap between neighbouring copies
    length_step_inches: float = 1.0  # Sheet length is rounded up to a multiple of this
    raster_dpi: int = 300  # Assumed resolution of uploaded raster images


@dataclass(frozen=True)
class RequestLimits:
    """Bounds a single request must respect."""

    min_quantity: int = 1
    max_quantity: int = 10000
    allowed_widths_inches: Tuple[int, ...] = (22, 30)
    min_length_inches: int = 12
    max_length_inches: int = 200
    default_length_inches: int = 200


@dataclass(frozen=True)
class PriceDefaults:
    """Default tier table as (max length in inches, price) pairs."""

    tiers: Tuple[Tuple[int, Decimal], ...] = field(default_factory=lambda: (
        (12, Decimal("5.28")),
        (24, Decimal("10.56")),
        (36, Decimal("15.84")),
        (48, Decimal("21.12")),
        (60, Decimal("26.40")),
        (80, Decimal("35.20")),
        (100, Decimal("44.00")),
        (120, Decimal("49.28")),
        (140, Decimal("56.32")),
        (160, Decimal("61.60")),
        (180, Decimal("68.64")),
        (200, Decimal("75.68")),
    ))


SHEET_DEFAULTS = SheetDefaults()
REQUEST_LIMITS = RequestLimits()
PRICE_DEFAULTS = PriceDefaults()
