"""
Module: layout.models

Purpose:
    Data models for sheet layout.
    Immutable dataclasses representing placed copies, produced sheets
    and the overall layout result.

Key Classes:
    - PackingMode: Uniform grid vs shelf packing
    - Placement: One copy positioned on a sheet
    - Sheet: Complete layout of a single gang sheet
    - LayoutResult: Ordered sheets plus diagnostics

Coordinates:
    PDF convention - origin at the sheet's bottom-left corner, y grows
    upwards, units are points.

Used By:
    - gangsheet.layout.packer: Creates Placements and Sheets
    - gangsheet.layout.paginator: Creates LayoutResult
    - gangsheet.output.renderer: Draws placements
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from gangsheet.common.units import points_to_inches
from gangsheet.core.models import AssetFootprint

FILENAME_PREFIX = "gangsheet"


class PackingMode(str, Enum):
    """How a sheet was packed."""

    UNIFORM = "uniform"
    SHELF = "shelf"


@dataclass(frozen=True)
class Placement:
    """
    A copy of a design positioned on a sheet.

    (x, y) is the bottom-left corner of the cell the copy occupies on the
    sheet, i.e. of its *oriented* bounding box. The renderer's draw
    primitive works from a different point, the anchor: the bottom-left
    of the un-rotated asset before it is turned 90 degrees counter-
    clockwise about that anchor. For a rotated copy the anchor therefore
    sits oriented_width to the right of the cell, otherwise the turned
    asset would swing out to the left of its cell.

    Attributes:
        design: Name of the Design this copy belongs to
        x: Left edge of the oriented cell (points)
        y: Bottom edge of the oriented cell (points)
        footprint: Footprint of the copy (carries the rotation flag)
        row: Grid row, 0 = top row (uniform mode only)
        col: Grid column, 0 = left column (uniform mode only)

    Example:
        >>> fp = AssetFootprint(288, 144, rotated=True)
        >>> p = Placement("logo", x=9, y=9, footprint=fp)
        >>> p.anchor
        (153, 9)
    """

    design: str
    x: float
    y: float
    footprint: AssetFootprint
    row: Optional[int] = None
    col: Optional[int] = None

    @property
    def rotated(self) -> bool:
        return self.footprint.rotated

    @property
    def width(self) -> float:
        """Oriented width of the cell."""
        return self.footprint.oriented_width

    @property
    def height(self) -> float:
        """Oriented height of the cell."""
        return self.footprint.oriented_height

    @property
    def anchor(self) -> Tuple[float, float]:
        """Point the draw primitive rotates about (un-rotated bottom-left)."""
        if self.rotated:
            return (self.x + self.footprint.oriented_width, self.y)
        return (self.x, self.y)

    @property
    def bbox(self) -> Tuple[float, float, float, float]:
        """
        Area covered on the sheet as (x0, y0, x1, y1).

        Derived from the anchor: turning the un-rotated box
        [0, w] x [0, h] by 90 degrees CCW maps it onto [-h, 0] x [0, w].
        """
        ax, ay = self.anchor
        fp = self.footprint
        if self.rotated:
            return (ax - fp.base_height, ay, ax, ay + fp.base_width)
        return (ax, ay, ax + fp.base_width, ay + fp.base_height)


@dataclass(frozen=True)
class Sheet:
    """
    Layout of a single gang sheet.

    Attributes:
        index: Sheet number (0-indexed)
        width_pts: Sheet width (always the constraint width)
        height_pts: Final sheet height, rounded up and capped at max height
        raw_height_pts: Height actually needed before rounding
        placements: Placed copies in layout order
        mode: Packing mode used for this sheet

    Example:
        >>> sheet.width_inches, sheet.height_inches
        (22, 33)
        >>> sheet.filename
        'gangsheet_22x33.pdf'
    """

    index: int
    width_pts: float
    height_pts: float
    raw_height_pts: float
    placements: Tuple[Placement, ...]
    mode: PackingMode = PackingMode.UNIFORM

    @property
    def consumed(self) -> int:
        """Number of queued copies this sheet used up."""
        return len(self.placements)

    @property
    def width_inches(self) -> float:
        return _tidy(points_to_inches(self.width_pts))

    @property
    def height_inches(self) -> float:
        return _tidy(points_to_inches(self.height_pts))

    @property
    def filename(self) -> str:
        """Conventional file name: gangsheet_<width>x<height>.pdf"""
        return f"{FILENAME_PREFIX}_{self.width_inches}x{self.height_inches}.pdf"

    @property
    def is_empty(self) -> bool:
        return not self.placements


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output with diagnostics.

    Attributes:
        sheets: Sheets in production order
        warnings: Non-fatal notes gathered during layout
    """

    sheets: Tuple[Sheet, ...]
    warnings: list[str] = field(default_factory=list)

    @property
    def sheet_count(self) -> int:
        return len(self.sheets)

    @property
    def total_placements(self) -> int:
        """Total number of copies placed across all sheets."""
        return sum(s.consumed for s in self.sheets)

    @property
    def total_height_inches(self) -> float:
        return _tidy(sum(points_to_inches(s.height_pts) for s in self.sheets))

    def copies_by_design(self) -> dict[str, int]:
        """Count of placed copies per design name."""
        counts: Counter[str] = Counter()
        for sheet in self.sheets:
            counts.update(p.design for p in sheet.placements)
        return dict(counts)


def _tidy(value: float) -> float:
    """Collapse float noise so whole inches print as integers."""
    rounded = round(value, 3)
    if rounded == int(rounded):
        return int(rounded)
    return rounded
