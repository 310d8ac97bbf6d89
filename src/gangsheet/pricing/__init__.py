"""
Module: pricing

Purpose:
    Tiered pricing of produced sheets by length.
"""

from .tiers import (
    CostTier,
    RoundingPolicy,
    TierTable,
    SheetQuote,
    Quote,
    quote_layout,
)

__all__ = [
    "CostTier",
    "RoundingPolicy",
    "TierTable",
    "SheetQuote",
    "Quote",
    "quote_layout",
]
