"""
Module: pricing.tiers

Purpose:
    Map a sheet's final length to a price using a tier table.
    Each tier is a maximum length (inches) and the price charged for
    sheets up to that length. Billing saturates at the largest tier.

Key Classes:
    - CostTier: One (threshold, price) bracket
    - RoundingPolicy: How a length is matched against the thresholds
    - TierTable: Validated, ordered tier table with price lookup
    - SheetQuote / Quote: Priced layout

Key Functions:
    - quote_layout(): Price every sheet of a layout

Rounding policies:
    FIRST_TIER_AT_LEAST
        First tier whose threshold >= length. Default.
    CEIL_TO_TWELVE
        Round the length up to a multiple of 12 first, use that exact
        tier if the table has one, else fall back to the first tier
        above it.

Dependencies:
    - decimal (std): Money
    - gangsheet.layout.models: LayoutResult

Used By:
    - gangsheet.controller: Build result totals
    - gangsheet.cli: Summary output
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable, Tuple, Union

from gangsheet.common.defaults import PRICE_DEFAULTS
from gangsheet.core.errors import InvalidConstraintError
from gangsheet.layout.models import LayoutResult

logger = logging.getLogger(__name__)

Number = Union[int, float, Decimal]

ROUNDING_UNIT_INCHES = 12


class RoundingPolicy(str, Enum):
    """How a sheet length is matched to a tier."""

    FIRST_TIER_AT_LEAST = "first-tier"
    CEIL_TO_TWELVE = "ceil-12"


@dataclass(frozen=True, slots=True)
class CostTier:
    """Price charged for sheets up to threshold_inches long."""

    threshold_inches: float
    price: Decimal

    def __post_init__(self) -> None:
        if self.threshold_inches <= 0:
            raise InvalidConstraintError(
                f"Tier threshold must be positive: {self.threshold_inches}"
            )
        if self.price < 0:
            raise InvalidConstraintError(f"Tier price must be non-negative: {self.price}")


class TierTable:
    """
    Ordered tier table.

    Example:
        >>> table = TierTable.default()
        >>> table.price_for(37)
        Decimal('21.12')
        >>> table.price_for(500)  # saturates at the largest tier
        Decimal('75.68')
    """

    def __init__(self, tiers: Iterable[CostTier]) -> None:
        self._tiers: Tuple[CostTier, ...] = tuple(tiers)
        if not self._tiers:
            raise InvalidConstraintError("Tier table must not be empty")
        thresholds = [t.threshold_inches for t in self._tiers]
        if any(b <= a for a, b in zip(thresholds, thresholds[1:])):
            raise InvalidConstraintError(
                f"Tier thresholds must be strictly increasing: {thresholds}"
            )

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[Number, Number]]) -> TierTable:
        """Build a table from (threshold_inches, price) pairs."""
        return cls(CostTier(float(t), Decimal(str(p))) for t, p in pairs)

    @classmethod
    def default(cls) -> TierTable:
        """The standard price list."""
        return cls.from_pairs(PRICE_DEFAULTS.tiers)

    @property
    def tiers(self) -> Tuple[CostTier, ...]:
        return self._tiers

    @property
    def max_tier(self) -> CostTier:
        return self._tiers[-1]

    def tier_for(
        self,
        length_inches: float,
        policy: RoundingPolicy = RoundingPolicy.FIRST_TIER_AT_LEAST,
    ) -> CostTier:
        """
        Find the tier a sheet of the given length is billed at.

        Args:
            length_inches: Final (already rounded) sheet length
            policy: Matching policy

        Returns:
            Matching tier; the largest tier when the length exceeds all
        """
        if length_inches < 0:
            raise InvalidConstraintError(f"Length must be non-negative: {length_inches}")

        if policy is RoundingPolicy.CEIL_TO_TWELVE:
            rounded = math.ceil(length_inches / ROUNDING_UNIT_INCHES) * ROUNDING_UNIT_INCHES
            for tier in self._tiers:
                if tier.threshold_inches == rounded:
                    return tier
            length_inches = rounded

        for tier in self._tiers:
            if length_inches <= tier.threshold_inches:
                return tier
        return self.max_tier

    def price_for(
        self,
        length_inches: float,
        policy: RoundingPolicy = RoundingPolicy.FIRST_TIER_AT_LEAST,
    ) -> Decimal:
        """Price for a sheet of the given length."""
        return self.tier_for(length_inches, policy).price


@dataclass(frozen=True)
class SheetQuote:
    """Price for one produced sheet."""

    index: int
    filename: str
    width_inches: float
    length_inches: float
    tier_inches: float
    price: Decimal


@dataclass(frozen=True)
class Quote:
    """Prices for every sheet of a layout."""

    sheets: Tuple[SheetQuote, ...]
    policy: RoundingPolicy

    @property
    def total(self) -> Decimal:
        return sum((s.price for s in self.sheets), Decimal("0"))


def quote_layout(
    layout: LayoutResult,
    table: TierTable | None = None,
    policy: RoundingPolicy = RoundingPolicy.FIRST_TIER_AT_LEAST,
) -> Quote:
    """
    Price each sheet of a layout by its final length.

    Args:
        layout: Paginated layout
        table: Tier table (default price list when None)
        policy: Tier matching policy

    Returns:
        Quote with one SheetQuote per sheet
    """
    table = table or TierTable.default()
    quotes = []
    for sheet in layout.sheets:
        tier = table.tier_for(sheet.height_inches, policy)
        quotes.append(SheetQuote(
            index=sheet.index,
            filename=sheet.filename,
            width_inches=sheet.width_inches,
            length_inches=sheet.height_inches,
            tier_inches=tier.threshold_inches,
            price=tier.price,
        ))
    quote = Quote(sheets=tuple(quotes), policy=policy)
    logger.info(f"Quoted {len(quotes)} sheets ({policy.value}): total {quote.total}")
    return quote
