"""
Module: assets.descriptor

Purpose:
    Turn a loaded asset into the footprint the layout engine works with:
    un-rotated width and height in points plus the rotation flag.

Key Functions:
    - resolve(): RawAsset -> AssetFootprint
    - footprint_size(): Native dimensions -> points

Dependencies:
    - gangsheet.common.units: Pixel/point conversion

Used By:
    - gangsheet.controller: Once per distinct asset per request
"""

from __future__ import annotations

from typing import Tuple

from gangsheet.common.units import pixels_to_points
from gangsheet.core.errors import DegenerateAssetError, UnsupportedAssetKind
from gangsheet.core.models import AssetFootprint, AssetKind

from .loader import RawAsset


def footprint_size(raw: RawAsset) -> Tuple[float, float]:
    """
    Un-rotated (width, height) of an asset in points.

    Vectors are already in points. Rasters are converted from pixels at
    the asset's assumed DPI: points = pixels / dpi * 72.

    Raises:
        UnsupportedAssetKind: If the kind is unknown
        DegenerateAssetError: If a raster has no usable DPI
    """
    if raw.kind is AssetKind.VECTOR:
        return (float(raw.width), float(raw.height))
    if raw.kind is AssetKind.RASTER:
        if not raw.dpi or raw.dpi <= 0:
            raise DegenerateAssetError(f"{raw.name!r} has no usable resolution: {raw.dpi}")
        return (pixels_to_points(raw.width, raw.dpi), pixels_to_points(raw.height, raw.dpi))
    raise UnsupportedAssetKind(f"{raw.name!r} has unsupported kind {raw.kind!r}")


def resolve(raw: RawAsset, rotate: bool = False) -> AssetFootprint:
    """
    Compute the footprint of one copy of an asset.

    Args:
        raw: Loaded asset
        rotate: Whether copies are placed rotated by 90 degrees

    Returns:
        AssetFootprint with un-rotated size in points

    Raises:
        UnsupportedAssetKind: Asset is neither vector nor raster
        DegenerateAssetError: Either dimension is zero or negative

    Example:
        >>> resolve(raster_1200x600_at_300dpi).base_width
        288.0
    """
    width, height = footprint_size(raw)
    if width <= 0 or height <= 0:
        raise DegenerateAssetError(
            f"{raw.name!r} has a degenerate size: {width:g} x {height:g} pt"
        )
    return AssetFootprint(base_width=width, base_height=height, rotated=rotate)
