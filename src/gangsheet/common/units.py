"""
Module: common.units

Purpose:
    Unit conversion helpers. Everything inside the layout engine is
    measured in PDF points (1/72 inch); inches and pixels only appear
    at the boundaries.

Key Functions:
    - inches_to_points(): Inches -> points
    - points_to_inches(): Points -> inches
    - pixels_to_points(): Pixels at a given DPI -> points

Used By:
    - gangsheet.assets.descriptor: Raster footprint conversion
    - gangsheet.layout.config: SheetConstraints.from_inches
    - gangsheet.layout.models: Sheet dimensions in inches
"""

from __future__ import annotations

POINTS_PER_INCH = 72.0


def inches_to_points(inches: float) -> float:
    """Convert inches to PDF points."""
    return inches * POINTS_PER_INCH


def points_to_inches(points: float) -> float:
    """Convert PDF points to inches."""
    return points / POINTS_PER_INCH


def pixels_to_points(pixels: float, dpi: float) -> float:
    """
    Convert a pixel length to PDF points at the given resolution.

    Args:
        pixels: Length in pixels
        dpi: Dots per inch the pixels were produced at

    Returns:
        Length in points (pixels / dpi * 72)

    Example:
        >>> pixels_to_points(600, 300)
        144.0
    """
    if dpi <= 0:
        raise ValueError(f"dpi must be positive: {dpi}")
    return pixels / dpi * POINTS_PER_INCH
