"""
Module: assets.loader

Purpose:
    Open an uploaded asset and read its intrinsic size. PDFs are opened
    with PyMuPDF and must have exactly one page; everything else is tried
    as a raster image with Pillow.

Key Functions:
    - load_asset(): Bytes or path -> RawAsset

Key Classes:
    - RawAsset: Loaded asset bytes plus kind and native dimensions

Dependencies:
    - fitz (PyMuPDF): PDF page boxes
    - PIL.Image: Raster dimensions

Used By:
    - gangsheet.controller: build_gangsheets
    - gangsheet.assets.embed: Draws the loaded bytes
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import fitz
from PIL import Image, UnidentifiedImageError

from gangsheet.common.defaults import SHEET_DEFAULTS
from gangsheet.core.errors import UnsupportedAssetKind
from gangsheet.core.models import AssetKind

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF-"

AssetSource = Union[bytes, str, Path]


@dataclass(frozen=True)
class RawAsset:
    """
    A loaded asset, before any layout decisions.

    Attributes:
        name: Display name (usually the upload filename)
        kind: VECTOR for PDF pages, RASTER for images
        data: Original file bytes
        width: Native width - points for vectors, pixels for rasters
        height: Native height - points for vectors, pixels for rasters
        dpi: Resolution rasters are assumed to be printed at (None for vectors)
        image_format: Pillow format name for rasters ("PNG", "JPEG", ...)
    """

    name: str
    kind: AssetKind
    data: bytes
    width: float
    height: float
    dpi: Optional[float] = None
    image_format: Optional[str] = None


def load_asset(
    source: AssetSource,
    *,
    name: Optional[str] = None,
    raster_dpi: float = SHEET_DEFAULTS.raster_dpi,
) -> RawAsset:
    """
    Load an asset from bytes or a file path.

    Args:
        source: File bytes, or a path to read them from
        name: Display name; defaults to the file name for paths
        raster_dpi: Resolution raster images are assumed to have

    Returns:
        RawAsset with native dimensions

    Raises:
        UnsupportedAssetKind: If the data is not a single-page PDF or an
            image Pillow can read, or the image has too many pixels
        OSError: If a path cannot be read

    Example:
        >>> asset = load_asset(Path("logo.pdf"))
        >>> asset.kind, asset.width, asset.height
        (<AssetKind.VECTOR: 'vector'>, 288.0, 144.0)
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        data = path.read_bytes()
        name = name or path.name
    else:
        data = bytes(source)
        name = name or "asset"

    if data.startswith(PDF_MAGIC):
        asset = _load_pdf(data, name)
    else:
        asset = _load_raster(data, name, raster_dpi)

    logger.debug(
        f"Loaded {asset.kind.value} asset {name!r}: "
        f"{asset.width:g} x {asset.height:g}"
    )
    return asset


def _load_pdf(data: bytes, name: str) -> RawAsset:
    """Read the page box of a single-page PDF."""
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except (fitz.FileDataError, RuntimeError, ValueError) as e:
        raise UnsupportedAssetKind(f"{name!r} is not a readable PDF: {e}") from e

    with doc:
        if doc.page_count != 1:
            raise UnsupportedAssetKind(
                f"{name!r} has {doc.page_count} pages; only single-page PDFs are supported"
            )
        rect = doc[0].rect
        return RawAsset(
            name=name,
            kind=AssetKind.VECTOR,
            data=data,
            width=rect.width,
            height=rect.height,
        )


def _load_raster(data: bytes, name: str, dpi: float) -> RawAsset:
    """
    Read pixel dimensions of a raster image.

    Images over Pillow's decompression-bomb limit are rejected rather
    than decoded.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
            image_format = img.format
    except Image.DecompressionBombError as e:
        raise UnsupportedAssetKind(f"{name!r} is too large to process: {e}") from e
    except (UnidentifiedImageError, OSError) as e:
        raise UnsupportedAssetKind(
            f"{name!r} is neither a PDF nor a supported raster image"
        ) from e

    return RawAsset(
        name=name,
        kind=AssetKind.RASTER,
        data=data,
        width=width,
        height=height,
        dpi=dpi,
        image_format=image_format,
    )
