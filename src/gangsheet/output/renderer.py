"""
Module: output.renderer

Purpose:
    Render laid-out sheets to PDF using PyMuPDF.
    Each Sheet becomes one PDF page of exactly the sheet's size, with
    every placement drawn into the box it covers.

Key Functions:
    - render_sheet(): One sheet -> single-page PDF bytes
    - render_document(): All sheets -> one multi-page PDF
    - placement_rect(): Placement -> page rectangle

Coordinates:
    Layout coordinates are bottom-up (PDF user space); PyMuPDF page
    rectangles are top-down, so y is flipped against the sheet height.

Dependencies:
    - fitz (PyMuPDF): PDF creation
    - gangsheet.assets.embed: Per-kind draw capability

Used By:
    - gangsheet.output.writer: File output
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Dict, Iterable, Mapping

import fitz

from gangsheet.assets.embed import AssetEmbedder, create_embedder
from gangsheet.assets.loader import RawAsset
from gangsheet.layout.models import LayoutResult, Placement, Sheet

logger = logging.getLogger(__name__)


def render_sheet(sheet: Sheet, assets: Mapping[str, RawAsset]) -> bytes:
    """
    Render a single sheet to a one-page PDF.

    Args:
        sheet: Sheet layout
        assets: Loaded assets keyed by design name

    Returns:
        PDF file bytes

    Raises:
        KeyError: If a placement names a design missing from assets
    """
    return _render([sheet], assets)


def render_document(layout: LayoutResult, assets: Mapping[str, RawAsset]) -> bytes:
    """
    Render every sheet of a layout as pages of one PDF.

    Page sizes differ when sheet lengths differ. A PDF cannot have zero
    pages, so an empty layout renders to empty bytes.

    Example:
        >>> pdf = render_document(layout, {"logo.pdf": asset})
        >>> fitz.open(stream=pdf).page_count == layout.sheet_count
        True
    """
    if layout.sheet_count == 0:
        logger.warning("Empty layout, nothing to render")
        return b""
    return _render(layout.sheets, assets)


def placement_rect(placement: Placement, sheet_height: float) -> fitz.Rect:
    """
    Page rectangle (top-left origin) a placement covers.

    Uses the placement's anchor-derived bbox, so rotated copies land in
    their own cell.
    """
    x0, y0, x1, y1 = placement.bbox
    return fitz.Rect(x0, sheet_height - y1, x1, sheet_height - y0)


def _render(sheets: Iterable[Sheet], assets: Mapping[str, RawAsset]) -> bytes:
    doc = fitz.open()
    with ExitStack() as stack:
        stack.callback(doc.close)
        embedders: Dict[str, AssetEmbedder] = {}

        for sheet in sheets:
            page = doc.new_page(width=sheet.width_pts, height=sheet.height_pts)
            for placement in sheet.placements:
                embedder = embedders.get(placement.design)
                if embedder is None:
                    embedder = stack.enter_context(create_embedder(assets[placement.design]))
                    embedders[placement.design] = embedder
                embedder.draw(
                    page,
                    placement_rect(placement, sheet.height_pts),
                    rotate=90 if placement.rotated else 0,
                )
            logger.debug(f"Rendered sheet {sheet.index}: {sheet.consumed} copies")

        return doc.tobytes(garbage=3, deflate=True)
