"""
Module: layout.config

Purpose:
    Physical constraints of the output sheet. Defines roll width,
    maximum length, safe margin, inter-copy spacing and the length step
    that produced sheets are rounded up to.

Key Classes:
    - SheetConstraints: Immutable sheet constraints in points

Dependencies:
    - dataclasses (std)
    - gangsheet.common.units: Inch/point conversion

Used By:
    - gangsheet.layout.packer: Column/row fitting
    - gangsheet.layout.paginator: Sheet loop
    - gangsheet.config: Built from a validated request
"""

from __future__ import annotations

from dataclasses import dataclass

from gangsheet.common.defaults import SHEET_DEFAULTS
from gangsheet.common.units import POINTS_PER_INCH, inches_to_points
from gangsheet.core.errors import InvalidConstraintError


@dataclass(frozen=True)
class SheetConstraints:
    """
    Constraints for a single gang sheet (immutable, points).

    Attributes:
        width: Fixed sheet (roll) width
        max_height: Longest sheet that may be produced
        margin: Safe margin kept clear on every edge
        spacing: Gap between neighbouring copies, both axes
        length_step: Produced sheet heights are rounded up to a
            multiple of this (one inch by default)

    Example:
        >>> c = SheetConstraints.from_inches(22, 200, margin=0.125, spacing=0.5)
        >>> c.available_width
        1566.0
    """

    width: float
    max_height: float
    margin: float = 0.0
    spacing: float = 0.0
    length_step: float = POINTS_PER_INCH

    def __post_init__(self) -> None:
        """Validate constraints on construction."""
        if self.width <= 0:
            raise InvalidConstraintError(f"width must be positive: {self.width}")
        if self.max_height <= 0:
            raise InvalidConstraintError(f"max_height must be positive: {self.max_height}")
        if self.margin < 0:
            raise InvalidConstraintError(f"margin must be non-negative: {self.margin}")
        if self.spacing < 0:
            raise InvalidConstraintError(f"spacing must be non-negative: {self.spacing}")
        if self.length_step <= 0:
            raise InvalidConstraintError(f"length_step must be positive: {self.length_step}")
        if self.available_width <= 0:
            raise InvalidConstraintError("Margins exceed sheet width")
        if self.available_height <= 0:
            raise InvalidConstraintError("Margins exceed sheet max height")

    @classmethod
    def from_inches(
        cls,
        width: float,
        max_height: float,
        *,
        margin: float = SHEET_DEFAULTS.margin_inches,
        spacing: float = SHEET_DEFAULTS.spacing_inches,
        length_step: float = SHEET_DEFAULTS.length_step_inches,
    ) -> SheetConstraints:
        """Build constraints from measurements given in inches."""
        return cls(
            width=inches_to_points(width),
            max_height=inches_to_points(max_height),
            margin=inches_to_points(margin),
            spacing=inches_to_points(spacing),
            length_step=inches_to_points(length_step),
        )

    @property
    def available_width(self) -> float:
        """Width available for copies (excluding margins)."""
        return self.width - 2 * self.margin

    @property
    def available_height(self) -> float:
        """Height available for copies on a full-length sheet."""
        return self.max_height - 2 * self.margin
