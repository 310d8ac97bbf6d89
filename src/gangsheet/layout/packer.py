"""
Module: layout.packer

Purpose:
    Pack as many queued copies as fit onto a single sheet.
    Pure geometry: no rendering, no I/O, deterministic for equal input.

Key Functions:
    - pack_one_sheet(): Main entry point, picks the packing mode
    - columns_per_row(): Copies that fit across the sheet
    - rows_per_full_sheet(): Rows that fit on a full-length sheet
    - round_sheet_height(): Round a needed height up to the length step

Algorithm:
    Uniform mode (every remaining copy has the same oriented size):
    1. Fit columns across the width and rows down a full-length sheet
    2. Use as many rows as the remaining copies need, capped by the sheet
    3. Fill rows left-to-right, top row first; bottom row sits on the margin
    4. Round the sheet height up to the next length step

    Shelf mode (mixed sizes):
    1. Walk the queue in order with a cursor starting top-left
    2. Wrap to a new shelf when the next copy would cross the right margin
    3. Stop when the next copy would cross the bottom margin
    4. Trim the sheet to the used height, rounded up to the length step

Used By:
    - gangsheet.layout.paginator: Called once per produced sheet
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

from gangsheet.core.errors import AssetTooTallError, AssetTooWideError
from gangsheet.core.models import AssetFootprint, Design

from .config import SheetConstraints
from .models import PackingMode, Placement, Sheet

logger = logging.getLogger(__name__)

# Tolerance for float comparisons on point values
_EPS = 1e-9


def pack_one_sheet(
    remaining: Sequence[Design],
    constraints: SheetConstraints,
    index: int = 0,
) -> Tuple[Optional[Sheet], int]:
    """
    Lay out the next sheet from the front of the queue.

    Args:
        remaining: Queue entries not yet placed, in order
        constraints: Sheet constraints
        index: Index to give the produced sheet

    Returns:
        (sheet, consumed) where consumed is the number of entries from
        the front of remaining that were placed on the sheet. An empty
        queue produces no sheet: (None, 0)

    Raises:
        AssetTooWideError: If a copy cannot fit even one per row
        AssetTooTallError: If a copy cannot fit even alone on a sheet
    """
    if not remaining:
        return None, 0

    sizes = {d.footprint.oriented_size for d in remaining}
    if len(sizes) == 1:
        sheet = _pack_uniform(remaining, constraints, index)
    else:
        sheet = _pack_shelf(remaining, constraints, index)

    logger.debug(
        f"Sheet {index}: {sheet.mode.value} mode, {sheet.consumed} copies, "
        f"{sheet.raw_height_pts:.1f}pt needed -> {sheet.height_pts:.1f}pt"
    )
    return sheet, sheet.consumed


# ─────────────────────────────────────────────────────────────────────────────
# Fitting helpers
# ─────────────────────────────────────────────────────────────────────────────

def columns_per_row(width: float, constraints: SheetConstraints) -> int:
    """
    Number of copies of the given oriented width that fit across a sheet.

    cols = floor((W - 2*margin + spacing) / (width + spacing))

    Raises:
        AssetTooWideError: If not even one column fits
    """
    cols = _floor((constraints.width - 2 * constraints.margin + constraints.spacing)
                  / (width + constraints.spacing))
    if cols < 1:
        raise AssetTooWideError(
            f"Asset is {width:.1f}pt wide but only "
            f"{constraints.available_width:.1f}pt is available across the sheet"
        )
    return cols


def rows_per_full_sheet(height: float, constraints: SheetConstraints) -> int:
    """
    Number of rows of the given oriented height on a full-length sheet.

    rows = floor((max_height - 2*margin + spacing) / (height + spacing))

    Raises:
        AssetTooTallError: If not even one row fits
    """
    rows = _floor((constraints.max_height - 2 * constraints.margin + constraints.spacing)
                  / (height + constraints.spacing))
    if rows < 1:
        raise AssetTooTallError(
            f"Asset is {height:.1f}pt tall but only "
            f"{constraints.available_height:.1f}pt is available down the sheet"
        )
    return rows


def round_sheet_height(raw_height: float, constraints: SheetConstraints) -> float:
    """
    Round a needed height up to the next length step, capped at max height.

    Never rounds down, so no copy is ever clipped by the rounding.
    """
    steps = _ceil(raw_height / constraints.length_step)
    return min(steps * constraints.length_step, constraints.max_height)


def check_fits(footprint: AssetFootprint, constraints: SheetConstraints) -> None:
    """Raise if a single copy of footprint can never be placed."""
    columns_per_row(footprint.oriented_width, constraints)
    rows_per_full_sheet(footprint.oriented_height, constraints)


# ─────────────────────────────────────────────────────────────────────────────
# Packing modes
# ─────────────────────────────────────────────────────────────────────────────

def _pack_uniform(
    remaining: Sequence[Design],
    constraints: SheetConstraints,
    index: int,
) -> Sheet:
    """Grid layout for copies that all share one oriented size."""
    width, height = remaining[0].footprint.oriented_size
    margin, spacing = constraints.margin, constraints.spacing

    cols = columns_per_row(width, constraints)
    max_rows = rows_per_full_sheet(height, constraints)
    rows_needed = math.ceil(len(remaining) / cols)
    rows = min(rows_needed, max_rows)

    raw_height = rows * height + (rows - 1) * spacing + 2 * margin
    sheet_height = round_sheet_height(raw_height, constraints)
    consumed = min(len(remaining), rows * cols)

    placements: List[Placement] = []
    for i, design in enumerate(remaining[:consumed]):
        row, col = divmod(i, cols)
        placements.append(Placement(
            design=design.name,
            x=margin + col * (width + spacing),
            # Row 0 is the top row; the last row rests on the bottom margin
            y=margin + (rows - 1 - row) * (height + spacing),
            footprint=design.footprint,
            row=row,
            col=col,
        ))

    return Sheet(
        index=index,
        width_pts=constraints.width,
        height_pts=sheet_height,
        raw_height_pts=raw_height,
        placements=tuple(placements),
        mode=PackingMode.UNIFORM,
    )


def _pack_shelf(
    remaining: Sequence[Design],
    constraints: SheetConstraints,
    index: int,
) -> Sheet:
    """Left-to-right, top-to-bottom shelf layout for mixed sizes."""
    margin, spacing = constraints.margin, constraints.spacing
    right_edge = constraints.width - margin
    top = constraints.max_height

    x = margin
    y = top - margin
    row_height = 0.0
    lowest_y = top
    placements: List[Placement] = []

    for design in remaining:
        width, height = design.footprint.oriented_size
        if width > constraints.available_width + _EPS:
            raise AssetTooWideError(
                f"{design.name!r} is {width:.1f}pt wide but only "
                f"{constraints.available_width:.1f}pt is available across the sheet"
            )

        if x > margin and x + width > right_edge + _EPS:
            x = margin
            y -= row_height + spacing
            row_height = 0.0

        if y - height < margin - _EPS:
            if not placements:
                raise AssetTooTallError(
                    f"{design.name!r} is {height:.1f}pt tall but only "
                    f"{constraints.available_height:.1f}pt is available down the sheet"
                )
            break

        placements.append(Placement(
            design=design.name,
            x=x,
            y=y - height,
            footprint=design.footprint,
        ))
        x += width + spacing
        row_height = max(row_height, height)
        lowest_y = min(lowest_y, y - height)

    used_height = top - lowest_y + margin
    sheet_height = round_sheet_height(used_height, constraints)

    # Placements were laid out on a full-length sheet; move them onto the trimmed one
    shift = top - sheet_height
    if shift > 0:
        placements = [
            Placement(
                design=p.design,
                x=p.x,
                y=p.y - shift,
                footprint=p.footprint,
            )
            for p in placements
        ]

    return Sheet(
        index=index,
        width_pts=constraints.width,
        height_pts=sheet_height,
        raw_height_pts=used_height,
        placements=tuple(placements),
        mode=PackingMode.SHELF,
    )


def _floor(value: float) -> int:
    return math.floor(value + _EPS)


def _ceil(value: float) -> int:
    return math.ceil(value - _EPS)
