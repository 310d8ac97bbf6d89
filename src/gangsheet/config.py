"""
Module: config

Purpose:
    Configuration dataclass for a gang sheet request. Immutable
    configuration with validation on construction; every bound a
    front-end is expected to enforce is checked here.

Key Classes:
    - GangSheetConfig: Main configuration for building gang sheets

Dependencies:
    - dataclasses (std)
    - gangsheet.common.defaults: Limits and defaults

Used By:
    - gangsheet.controller: build_gangsheets
    - gangsheet.cli: Built from command-line arguments
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from gangsheet.common.defaults import REQUEST_LIMITS, SHEET_DEFAULTS
from gangsheet.core.errors import InvalidConstraintError, InvalidQuantityError
from gangsheet.layout.config import SheetConstraints
from gangsheet.output.writer import OutputBundle
from gangsheet.pricing.tiers import RoundingPolicy


@dataclass(frozen=True)
class GangSheetConfig:
    """
    Configuration for one gang sheet request (immutable).

    Attributes:
        quantity: Copies wanted of every uploaded asset
        gang_width_inches: Roll width; one of the allowed widths
        max_length_inches: Longest sheet that may be produced
        rotate: Place every copy rotated by 90 degrees
        margin_inches: Safe margin on every edge
        spacing_inches: Gap between copies
        length_step_inches: Sheet lengths are rounded up to a multiple of this
        raster_dpi: Resolution raster uploads are assumed to have
        rounding_policy: How sheet lengths are matched to price tiers
        bundle: Delivery format when more than one sheet is produced
        output_dir: Where to write files (None = nothing written)
        write_metadata: Whether to write build_metadata.json

    Example:
        >>> config = GangSheetConfig(quantity=50, gang_width_inches=22)
        >>> config.to_constraints().width
        1584.0
    """

    # Required
    quantity: int

    # Sheet
    gang_width_inches: int = REQUEST_LIMITS.allowed_widths_inches[0]
    max_length_inches: float = REQUEST_LIMITS.default_length_inches
    rotate: bool = False
    margin_inches: float = SHEET_DEFAULTS.margin_inches
    spacing_inches: float = SHEET_DEFAULTS.spacing_inches
    length_step_inches: float = SHEET_DEFAULTS.length_step_inches

    # Assets
    raster_dpi: int = SHEET_DEFAULTS.raster_dpi

    # Pricing
    rounding_policy: RoundingPolicy = RoundingPolicy.FIRST_TIER_AT_LEAST

    # Output
    bundle: OutputBundle = OutputBundle.PDF
    output_dir: Optional[Path] = None
    write_metadata: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        limits = REQUEST_LIMITS
        if not limits.min_quantity <= self.quantity <= limits.max_quantity:
            raise InvalidQuantityError(
                f"quantity must be between {limits.min_quantity} and "
                f"{limits.max_quantity}: {self.quantity}"
            )
        if self.gang_width_inches not in limits.allowed_widths_inches:
            raise InvalidConstraintError(
                f"gang_width_inches must be one of {limits.allowed_widths_inches}: "
                f"{self.gang_width_inches}"
            )
        if not limits.min_length_inches <= self.max_length_inches <= limits.max_length_inches:
            raise InvalidConstraintError(
                f"max_length_inches must be between {limits.min_length_inches} and "
                f"{limits.max_length_inches}: {self.max_length_inches}"
            )
        if self.raster_dpi <= 0:
            raise InvalidConstraintError(f"raster_dpi must be positive: {self.raster_dpi}")

    def to_constraints(self) -> SheetConstraints:
        """Sheet constraints in points for the layout engine."""
        return SheetConstraints.from_inches(
            self.gang_width_inches,
            self.max_length_inches,
            margin=self.margin_inches,
            spacing=self.spacing_inches,
            length_step=self.length_step_inches,
        )
