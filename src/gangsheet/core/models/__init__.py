"""
Core Models Package

Immutable, validated data models shared by the asset, layout and pricing
packages. All models are frozen dataclasses: a request's footprints and
designs are computed once and never mutated while sheets are packed.
"""

from .footprint import AssetKind, AssetFootprint, Design

__all__ = [
    "AssetKind",
    "AssetFootprint",
    "Design",
]
