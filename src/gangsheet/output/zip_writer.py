"""
Module: output.zip_writer

Purpose:
    Bundle rendered sheets into a ZIP archive, one PDF per sheet.

Key Functions:
    - write_sheets_zip(): Main entry point
    - unique_filenames(): Per-sheet names with collision suffixes

Dependencies:
    - zipfile (std)
    - gangsheet.output.renderer: Sheet rendering

Used By:
    - gangsheet.output.writer: ZIP bundle mode
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from gangsheet.assets.loader import RawAsset
from gangsheet.layout.models import LayoutResult, Sheet
from gangsheet.pricing.tiers import Quote

from .renderer import render_sheet

logger = logging.getLogger(__name__)


def write_sheets_zip(
    layout: LayoutResult,
    assets: Mapping[str, RawAsset],
    output_path: Path,
    *,
    quote: Optional[Quote] = None,
    include_readme: bool = True,
) -> Path:
    """
    Write every sheet as its own PDF inside a ZIP archive.

    Creates a ZIP file with structure:
        gangsheets.zip
        ├── README.txt                 # Summary (optional)
        ├── gangsheet_22x200.pdf
        ├── gangsheet_22x200_2.pdf
        └── gangsheet_22x37.pdf

    Args:
        layout: Paginated layout
        assets: Loaded assets keyed by design name
        output_path: Path for .zip file (will append .zip if missing)
        quote: Prices to list in the README
        include_readme: Whether to include README.txt

    Returns:
        Path to created ZIP file
    """
    if output_path.suffix != ".zip":
        output_path = output_path.with_suffix(".zip")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Creating ZIP export at {output_path}")

    names = unique_filenames(layout.sheets)
    with zipfile.ZipFile(output_path, "w", zipfile.ZIP_DEFLATED) as zf:
        if include_readme:
            zf.writestr("README.txt", _generate_readme(layout, names, quote))
        for sheet, name in zip(layout.sheets, names):
            zf.writestr(name, render_sheet(sheet, assets))

    return output_path


def unique_filenames(sheets: Sequence[Sheet]) -> List[str]:
    """
    Conventional sheet filenames, suffixed _2, _3... on repeats.

    Example:
        >>> unique_filenames([s200, s200, s37])
        ['gangsheet_22x200.pdf', 'gangsheet_22x200_2.pdf', 'gangsheet_22x37.pdf']
    """
    seen: dict[str, int] = {}
    names = []
    for sheet in sheets:
        name = sheet.filename
        count = seen.get(name, 0) + 1
        seen[name] = count
        if count > 1:
            stem, suffix = name.rsplit(".", 1)
            name = f"{stem}_{count}.{suffix}"
        names.append(name)
    return names


def _generate_readme(
    layout: LayoutResult,
    names: Sequence[str],
    quote: Optional[Quote],
) -> str:
    """Generate README.txt content."""
    lines = [
        "Gang Sheets",
        "=" * 50,
        "",
        f"Sheets: {layout.sheet_count}",
        f"Copies: {layout.total_placements}",
    ]
    if quote is not None:
        lines.append(f"Total cost: {quote.total}")
    lines.extend(["", "=" * 50, "Sheet List:", ""])

    prices = {q.index: q.price for q in quote.sheets} if quote else {}
    for sheet, name in zip(layout.sheets, names):
        line = f"{sheet.index + 1}. {name} ({sheet.consumed} copies)"
        if sheet.index in prices:
            line += f" - {prices[sheet.index]}"
        lines.append(line)

    lines.append("")
    return "\n".join(lines)
