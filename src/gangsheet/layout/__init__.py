"""
Module: layout

Purpose:
    Sheet packing and pagination.
    Turns a queue of copies into positioned sheet layouts.

Key Functions:
    - pack_one_sheet(): Lay out a single sheet
    - paginate(): Lay out the whole queue over as many sheets as needed

Key Classes:
    - SheetConstraints: Sheet width, max length, margin, spacing
    - CopyQueue: Ordered copies still to place
    - Placement: One copy positioned on a sheet
    - Sheet: Single sheet layout
    - LayoutResult: All sheets of a request

Used By:
    - gangsheet.controller: generate_layout / build_gangsheets
"""

from .config import SheetConstraints
from .models import PackingMode, Placement, Sheet, LayoutResult
from .queue import CopyQueue
from .packer import (
    pack_one_sheet,
    columns_per_row,
    rows_per_full_sheet,
    round_sheet_height,
    check_fits,
)
from .paginator import paginate

__all__ = [
    # Config
    "SheetConstraints",
    # Models
    "PackingMode",
    "Placement",
    "Sheet",
    "LayoutResult",
    "CopyQueue",
    # Functions
    "pack_one_sheet",
    "columns_per_row",
    "rows_per_full_sheet",
    "round_sheet_height",
    "check_fits",
    "paginate",
]
