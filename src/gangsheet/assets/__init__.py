"""
Module: assets

Purpose:
    Loading uploaded assets, measuring them, and drawing them onto
    output pages.

Key Functions:
    - load_asset(): Bytes/path -> RawAsset
    - resolve(): RawAsset -> AssetFootprint
    - create_embedder(): RawAsset -> AssetEmbedder

Dependencies:
    - fitz (PyMuPDF): Vector assets and output drawing
    - PIL: Raster assets
"""

from .loader import RawAsset, load_asset
from .descriptor import resolve, footprint_size
from .embed import AssetEmbedder, VectorEmbedder, RasterEmbedder, create_embedder

__all__ = [
    "RawAsset",
    "load_asset",
    "resolve",
    "footprint_size",
    "AssetEmbedder",
    "VectorEmbedder",
    "RasterEmbedder",
    "create_embedder",
]
