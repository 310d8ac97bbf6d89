"""
Module: output.writer

Purpose:
    Write rendered sheets to disk in the requested bundle format.

Key Functions:
    - write_sheets(): Main entry point

Bundle formats:
    - PDF:   One multi-page PDF (gangsheets.pdf) when there is more than
             one sheet, otherwise the single sheet's PDF
    - ZIP:   One PDF per sheet inside gangsheets.zip
    - FILES: One PDF per sheet in the output directory

Used By:
    - gangsheet.controller: build_gangsheets
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import List, Mapping, Optional

from gangsheet.assets.loader import RawAsset
from gangsheet.layout.models import LayoutResult
from gangsheet.pricing.tiers import Quote

from .renderer import render_document, render_sheet
from .zip_writer import unique_filenames, write_sheets_zip

logger = logging.getLogger(__name__)

COMBINED_PDF_NAME = "gangsheets.pdf"
ZIP_NAME = "gangsheets.zip"


class OutputBundle(str, Enum):
    """How multiple sheets are delivered."""

    PDF = "pdf"
    ZIP = "zip"
    FILES = "files"


def write_sheets(
    layout: LayoutResult,
    assets: Mapping[str, RawAsset],
    output_dir: Path,
    *,
    bundle: OutputBundle = OutputBundle.PDF,
    quote: Optional[Quote] = None,
) -> List[Path]:
    """
    Render a layout and write it under output_dir.

    A single sheet is always written as its own PDF, whatever the bundle.

    Args:
        layout: Paginated layout
        assets: Loaded assets keyed by design name
        output_dir: Directory to write into (created if missing)
        bundle: Delivery format for multiple sheets
        quote: Prices, listed in the ZIP README

    Returns:
        Paths of the files written

    Raises:
        OSError: If the directory or files cannot be written
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    if layout.sheet_count == 0:
        logger.warning("No sheets to write")
        return []

    if layout.sheet_count == 1:
        sheet = layout.sheets[0]
        path = output_dir / sheet.filename
        path.write_bytes(render_sheet(sheet, assets))
        written = [path]
    elif bundle is OutputBundle.ZIP:
        written = [write_sheets_zip(layout, assets, output_dir / ZIP_NAME, quote=quote)]
    elif bundle is OutputBundle.FILES:
        written = []
        for sheet, name in zip(layout.sheets, unique_filenames(layout.sheets)):
            path = output_dir / name
            path.write_bytes(render_sheet(sheet, assets))
            written.append(path)
    else:
        path = output_dir / COMBINED_PDF_NAME
        path.write_bytes(render_document(layout, assets))
        written = [path]

    for path in written:
        logger.info(f"Wrote {path}")
    return written
