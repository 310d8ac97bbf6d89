"""
Gang Sheet Core Package

Shared data models and the exception taxonomy. Everything in here is
pure: no file access, no rendering.
"""

from .errors import (
    GangSheetError,
    ValidationError,
    DegenerateAssetError,
    UnsupportedAssetKind,
    AssetTooWideError,
    AssetTooTallError,
    InvalidQuantityError,
    InvalidConstraintError,
    PackingStalledError,
)
from .models import AssetKind, AssetFootprint, Design

__all__ = [
    # errors
    "GangSheetError",
    "ValidationError",
    "DegenerateAssetError",
    "UnsupportedAssetKind",
    "AssetTooWideError",
    "AssetTooTallError",
    "InvalidQuantityError",
    "InvalidConstraintError",
    "PackingStalledError",
    # models
    "AssetKind",
    "AssetFootprint",
    "Design",
]
