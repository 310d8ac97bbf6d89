"""
Module: layout.paginator

Purpose:
    Spread the whole copy queue over as many sheets as it takes.
    Calls the packer for one sheet at a time until the queue is empty.

Key Functions:
    - paginate(): Main pagination function

Algorithm:
    1. While copies remain, pack the next sheet from the front of the queue
    2. Append the sheet and advance the queue by what it consumed
    3. A sheet that consumes nothing is a packer bug -> PackingStalledError

Dependencies:
    - gangsheet.layout.packer: pack_one_sheet
    - gangsheet.layout.queue: CopyQueue

Used By:
    - gangsheet.controller: generate_layout
"""

from __future__ import annotations

import logging
from typing import List

from gangsheet.core.errors import PackingStalledError

from .config import SheetConstraints
from .models import LayoutResult, Sheet
from .packer import pack_one_sheet
from .queue import CopyQueue

logger = logging.getLogger(__name__)


def paginate(
    queue: CopyQueue,
    constraints: SheetConstraints,
) -> LayoutResult:
    """
    Pack every queued copy onto sheets.

    An empty queue produces an empty result. Every sheet but the last is
    as full as the packer can make it; the last one is usually shorter.

    Args:
        queue: Copies to place (consumed in place)
        constraints: Sheet constraints

    Returns:
        LayoutResult with sheets in production order

    Raises:
        PackingStalledError: If a sheet consumes no copies
        AssetTooWideError / AssetTooTallError: Propagated from the packer
    """
    sheets: List[Sheet] = []
    warnings: List[str] = []
    initial = len(queue)

    while not queue.is_empty:
        index = len(sheets)
        sheet, consumed = pack_one_sheet(queue.remaining(), constraints, index=index)

        if sheet is None or consumed <= 0:
            raise PackingStalledError(
                f"Packer placed nothing on sheet {index} with "
                f"{len(queue)} copies still queued"
            )

        if sheet.height_pts < sheet.raw_height_pts:
            # Only reachable through the max-height cap; the packer never plans past it
            warnings.append(
                f"Sheet {index} needs {sheet.raw_height_pts:.1f}pt, "
                f"clamped to {sheet.height_pts:.1f}pt"
            )
            logger.warning(warnings[-1])

        sheets.append(sheet)
        queue.advance(consumed)
        logger.info(
            f"Sheet {index}: {consumed} copies, "
            f"{sheet.width_inches}x{sheet.height_inches} in, {len(queue)} left"
        )

    placed = sum(s.consumed for s in sheets)
    if placed != initial:
        raise PackingStalledError(
            f"Placed {placed} copies but {initial} were queued"
        )

    logger.info(f"Paginated {initial} copies onto {len(sheets)} sheets")

    return LayoutResult(sheets=tuple(sheets), warnings=warnings)
