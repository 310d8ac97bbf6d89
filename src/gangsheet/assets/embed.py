"""
Module: assets.embed

Purpose:
    Draw an asset onto a PDF page. One embedder exists per asset per
    target document: it holds whatever handle the target document needs
    to reuse the asset (an opened source PDF, an image xref) so repeated
    copies do not duplicate the asset's data in the output file.

Key Classes:
    - AssetEmbedder: Abstract draw capability
    - VectorEmbedder: Shows a PDF page (PyMuPDF show_pdf_page)
    - RasterEmbedder: Inserts an image (PyMuPDF insert_image, xref reuse)

Key Functions:
    - create_embedder(): Pick the embedder for an asset's kind

Dependencies:
    - fitz (PyMuPDF): PDF drawing
    - PIL: Normalising raster formats PyMuPDF cannot embed directly

Used By:
    - gangsheet.output.renderer: Draws every placement
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from typing import Optional

import fitz
from PIL import Image

from gangsheet.core.errors import UnsupportedAssetKind
from gangsheet.core.models import AssetKind

from .loader import RawAsset

logger = logging.getLogger(__name__)

# Formats passed to PyMuPDF untouched; anything else is re-encoded as PNG
DIRECT_RASTER_FORMATS = frozenset({"PNG", "JPEG"})


class AssetEmbedder(ABC):
    """
    Draw capability for one asset in one target document.

    Use as a context manager so any opened source is closed afterwards.
    """

    def __init__(self, asset: RawAsset) -> None:
        self.asset = asset

    @abstractmethod
    def draw(self, page: fitz.Page, rect: fitz.Rect, rotate: int = 0) -> None:
        """
        Draw the asset into rect on page.

        Args:
            page: Target page
            rect: Target box in page coordinates (top-left origin)
            rotate: 0 or 90 degrees
        """

    def close(self) -> None:
        """Release any source handles."""

    def __enter__(self) -> AssetEmbedder:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class VectorEmbedder(AssetEmbedder):
    """Shows page 0 of the asset's PDF as a form XObject."""

    def __init__(self, asset: RawAsset) -> None:
        super().__init__(asset)
        self._source: Optional[fitz.Document] = None

    def _open(self) -> fitz.Document:
        if self._source is None:
            self._source = fitz.open(stream=self.asset.data, filetype="pdf")
        return self._source

    def draw(self, page: fitz.Page, rect: fitz.Rect, rotate: int = 0) -> None:
        page.show_pdf_page(rect, self._open(), 0, rotate=rotate)

    def close(self) -> None:
        if self._source is not None:
            self._source.close()
            self._source = None


class RasterEmbedder(AssetEmbedder):
    """Inserts the image once, then reuses its xref for every copy."""

    def __init__(self, asset: RawAsset) -> None:
        super().__init__(asset)
        self._xref = 0
        self._stream: Optional[bytes] = None

    def _image_stream(self) -> bytes:
        if self._stream is None:
            if self.asset.image_format in DIRECT_RASTER_FORMATS:
                self._stream = self.asset.data
            else:
                # PyMuPDF can't embed every format Pillow reads (e.g. WEBP with alpha)
                with Image.open(io.BytesIO(self.asset.data)) as img:
                    buf = io.BytesIO()
                    img.save(buf, format="PNG")
                self._stream = buf.getvalue()
                logger.debug(
                    f"Re-encoded {self.asset.name!r} from {self.asset.image_format} to PNG"
                )
        return self._stream

    def draw(self, page: fitz.Page, rect: fitz.Rect, rotate: int = 0) -> None:
        if self._xref:
            page.insert_image(rect, xref=self._xref, rotate=rotate, keep_proportion=False)
        else:
            self._xref = page.insert_image(
                rect, stream=self._image_stream(), rotate=rotate, keep_proportion=False
            )


def create_embedder(asset: RawAsset) -> AssetEmbedder:
    """
    Choose the embedder for an asset's kind.

    Raises:
        UnsupportedAssetKind: For kinds without a draw capability
    """
    if asset.kind is AssetKind.VECTOR:
        return VectorEmbedder(asset)
    if asset.kind is AssetKind.RASTER:
        return RasterEmbedder(asset)
    raise UnsupportedAssetKind(f"No way to draw {asset.name!r} ({asset.kind!r})")
