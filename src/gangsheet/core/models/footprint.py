"""
Module: footprint

Purpose:
    Provides the AssetFootprint and Design dataclasses - the only facts
    about an uploaded asset the layout engine needs: how big it is, whether
    it is turned on its side, and how many copies were asked for.

Key Classes:
    - AssetKind: Closed set of supported asset kinds (vector | raster)
    - AssetFootprint: Un-rotated size in points plus rotation flag
    - Design: Named footprint with a requested copy count

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - gangsheet.assets.descriptor: Produces footprints
    - gangsheet.layout.queue: Expands designs into a copy queue
    - gangsheet.layout.packer: Reads oriented dimensions
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from gangsheet.core.errors import DegenerateAssetError, InvalidQuantityError


class AssetKind(str, Enum):
    """How an asset is drawn onto a sheet."""

    VECTOR = "vector"
    RASTER = "raster"


@dataclass(frozen=True, slots=True)
class AssetFootprint:
    """
    Physical size of one copy of an asset, in points.

    base_width/base_height are always the un-rotated page or image size.
    When rotated is True the copy is laid out turned 90 degrees, so the
    space it takes on the sheet is the swapped pair.

    Attributes:
        base_width: Un-rotated width in points
        base_height: Un-rotated height in points
        rotated: Whether copies are placed rotated by 90 degrees

    Invariants:
        - base_width > 0
        - base_height > 0

    Example:
        >>> fp = AssetFootprint(288, 144, rotated=True)
        >>> fp.oriented_width, fp.oriented_height
        (144, 288)
    """

    base_width: float
    base_height: float
    rotated: bool = False

    def __post_init__(self) -> None:
        """Validate dimensions on construction."""
        if self.base_width <= 0 or self.base_height <= 0:
            raise DegenerateAssetError(
                f"Asset dimensions must be positive: "
                f"{self.base_width} x {self.base_height} pt"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def oriented_width(self) -> float:
        """Horizontal space one copy takes on the sheet."""
        return self.base_height if self.rotated else self.base_width

    @property
    def oriented_height(self) -> float:
        """Vertical space one copy takes on the sheet."""
        return self.base_width if self.rotated else self.base_height

    @property
    def oriented_size(self) -> tuple[float, float]:
        """(oriented_width, oriented_height) tuple."""
        return (self.oriented_width, self.oriented_height)

    # ─────────────────────────────────────────────────────────────────────────
    # Transformations
    # ─────────────────────────────────────────────────────────────────────────

    def with_rotation(self, rotated: bool) -> AssetFootprint:
        """Return a copy with the rotation flag set to rotated."""
        if rotated == self.rotated:
            return self
        return replace(self, rotated=rotated)


@dataclass(frozen=True, slots=True)
class Design:
    """
    A named asset and how many copies of it to lay out.

    Attributes:
        name: Identifier used in placements (usually the upload filename)
        footprint: Size of one copy
        requested_copies: Number of copies wanted (> 0)
    """

    name: str
    footprint: AssetFootprint
    requested_copies: int

    def __post_init__(self) -> None:
        if self.requested_copies <= 0:
            raise InvalidQuantityError(
                f"requested_copies must be positive for {self.name!r}: "
                f"{self.requested_copies}"
            )

    def with_rotation(self, rotated: bool) -> Design:
        """Return a copy whose footprint has the given rotation flag."""
        return replace(self, footprint=self.footprint.with_rotation(rotated))
