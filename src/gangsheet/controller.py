"""
Module: controller

Purpose:
    Orchestrate gang sheet generation.
    Load → Resolve → Paginate → Price → Render

Key Functions:
    - generate_layout(): Designs + constraints -> sheets (pure core contract)
    - build_gangsheets(): Full pipeline from uploaded files to written output

Key Classes:
    - BuildResult: Complete build result

Errors:
    Every core failure is raised as its own GangSheetError subclass and is
    never caught here; a front-end maps ValidationError to 4xx and
    anything else to 5xx.

Dependencies:
    - gangsheet.assets: Loading and footprint resolution
    - gangsheet.layout: Packing and pagination
    - gangsheet.pricing: Tier prices
    - gangsheet.output: PDF rendering and bundling

Used By:
    - gangsheet.cli: Command-line entry point
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from gangsheet.assets import RawAsset, load_asset, resolve
from gangsheet.common.units import points_to_inches
from gangsheet.core.errors import InvalidConstraintError, InvalidQuantityError
from gangsheet.core.models import Design

from .config import GangSheetConfig
from .layout import CopyQueue, LayoutResult, SheetConstraints, check_fits, paginate
from .output import write_sheets
from .pricing import Quote, TierTable, quote_layout

logger = logging.getLogger(__name__)

METADATA_FILENAME = "build_metadata.json"

# A path, or an upload as (filename, bytes)
SourceSpec = Union[str, Path, Tuple[str, bytes]]


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        layout: Sheets produced
        quote: Price per sheet and total
        files: Paths written (empty when no output_dir was configured)
        metadata: Build metadata dictionary
        warnings: Any warnings during build

    Example:
        >>> result = build_gangsheets(config, [Path("logo.pdf")])
        >>> print(f"{result.sheet_count} sheets, total {result.total_cost}")
    """

    layout: LayoutResult
    quote: Quote
    files: Tuple[Path, ...]
    metadata: dict
    warnings: Tuple[str, ...]

    @property
    def sheet_count(self) -> int:
        return self.layout.sheet_count

    @property
    def total_cost(self) -> Decimal:
        return self.quote.total


def generate_layout(
    designs: Sequence[Design],
    constraints: SheetConstraints,
    rotate: Optional[bool] = None,
) -> LayoutResult:
    """
    Lay out every requested copy of every design onto sheets.

    Every design is checked for fit before anything is packed, so an
    unplaceable design fails the whole request with no sheets produced.

    Args:
        designs: Designs in the order their copies should be placed
        constraints: Sheet constraints
        rotate: Force every footprint's rotation flag; None keeps each
            design's own flag

    Returns:
        LayoutResult with sheets in production order

    Raises:
        InvalidQuantityError: No designs given
        InvalidConstraintError: Two designs share a name
        AssetTooWideError / AssetTooTallError: A design can never fit
        PackingStalledError: Internal packer failure
    """
    if not designs:
        raise InvalidQuantityError("At least one design is required")

    names = [d.name for d in designs]
    if len(set(names)) != len(names):
        raise InvalidConstraintError(f"Design names must be unique: {names}")

    if rotate is not None:
        designs = [d.with_rotation(rotate) for d in designs]

    queue = CopyQueue.from_designs(designs)
    for footprint in queue.distinct_footprints():
        check_fits(footprint, constraints)

    logger.info(f"Laying out {len(queue)} copies of {len(designs)} designs")
    return paginate(queue, constraints)


def build_gangsheets(
    config: GangSheetConfig,
    sources: Sequence[SourceSpec],
    *,
    tiers: Optional[TierTable] = None,
) -> BuildResult:
    """
    Build gang sheets from uploaded files.

    Pipeline:
    1. Load each source (PDF or raster) and measure it
    2. Resolve footprints and build one Design per source
    3. Paginate all copies onto sheets
    4. Price each sheet
    5. (Optional) Render and write sheets + metadata to output_dir

    Args:
        config: Request configuration
        sources: File paths, or (filename, bytes) pairs for uploads
        tiers: Price table (default price list when None)

    Returns:
        BuildResult with layout, quote and written files

    Raises:
        GangSheetError subclasses: Validation or packing failures
        OSError: If output cannot be written
    """
    if not sources:
        raise InvalidQuantityError("No files uploaded")

    start_time = time.perf_counter()
    logger.info(
        f"Starting build: {len(sources)} files x {config.quantity}, "
        f"{config.gang_width_inches}in wide, max {config.max_length_inches}in, "
        f"rotate={config.rotate}"
    )

    # 1-2. Load and resolve
    assets: Dict[str, RawAsset] = {}
    designs: List[Design] = []
    for source in sources:
        asset = _load_source(source, config.raster_dpi)
        name = _unique_name(asset.name, assets)
        assets[name] = asset
        designs.append(Design(
            name=name,
            footprint=resolve(asset, rotate=config.rotate),
            requested_copies=config.quantity,
        ))

    # 3. Paginate
    layout = generate_layout(designs, config.to_constraints())

    # 4. Price
    quote = quote_layout(layout, tiers, config.rounding_policy)

    # 5. Render
    files: List[Path] = []
    if config.output_dir is not None:
        files = write_sheets(
            layout,
            assets,
            Path(config.output_dir),
            bundle=config.bundle,
            quote=quote,
        )

    elapsed = time.perf_counter() - start_time
    logger.info(f"Gang sheet build completed in {elapsed:.2f}s")

    metadata = _build_metadata(config, designs, layout, quote, elapsed)
    if config.output_dir is not None and config.write_metadata:
        _write_metadata(Path(config.output_dir), metadata)

    return BuildResult(
        layout=layout,
        quote=quote,
        files=tuple(files),
        metadata=metadata,
        warnings=tuple(layout.warnings),
    )


def _load_source(source: SourceSpec, raster_dpi: int) -> RawAsset:
    """Load a path or a (filename, bytes) upload."""
    if isinstance(source, tuple):
        filename, data = source
        return load_asset(data, name=filename, raster_dpi=raster_dpi)
    return load_asset(source, raster_dpi=raster_dpi)


def _unique_name(name: str, taken: Dict[str, RawAsset]) -> str:
    """Suffix repeated upload names: logo.pdf, logo (2).pdf, ..."""
    if name not in taken:
        return name
    stem, dot, ext = name.rpartition(".")
    if not dot:
        stem, ext = name, ""
    counter = 2
    while True:
        candidate = f"{stem} ({counter}){dot}{ext}"
        if candidate not in taken:
            return candidate
        counter += 1


def _build_metadata(
    config: GangSheetConfig,
    designs: Sequence[Design],
    layout: LayoutResult,
    quote: Quote,
    elapsed: float,
) -> dict:
    """
    Build metadata dictionary for a finished request.

    Contains:
    - Request configuration
    - Per-design footprints
    - Per-sheet size, copies and price
    - Totals and timing

    Returns:
        Metadata dictionary ready for JSON serialization
    """
    prices = {q.index: q for q in quote.sheets}
    sheets = []
    for sheet in layout.sheets:
        counts: Dict[str, int] = {}
        for placement in sheet.placements:
            counts[placement.design] = counts.get(placement.design, 0) + 1
        sheet_quote = prices[sheet.index]
        sheets.append({
            "index": sheet.index,
            "filename": sheet.filename,
            "width_inches": sheet.width_inches,
            "height_inches": sheet.height_inches,
            "raw_height_inches": round(points_to_inches(sheet.raw_height_pts), 3),
            "mode": sheet.mode.value,
            "copies": sheet.consumed,
            "copies_by_design": counts,
            "tier_inches": sheet_quote.tier_inches,
            "cost": str(sheet_quote.price),
        })

    return {
        "generated_at": datetime.now().isoformat(timespec="seconds"),
        "config": {
            "quantity": config.quantity,
            "gang_width_inches": config.gang_width_inches,
            "max_length_inches": config.max_length_inches,
            "rotate": config.rotate,
            "margin_inches": config.margin_inches,
            "spacing_inches": config.spacing_inches,
            "length_step_inches": config.length_step_inches,
            "raster_dpi": config.raster_dpi,
            "rounding_policy": config.rounding_policy.value,
            "bundle": config.bundle.value,
        },
        "designs": [
            {
                "name": d.name,
                "width_pts": round(d.footprint.base_width, 3),
                "height_pts": round(d.footprint.base_height, 3),
                "rotated": d.footprint.rotated,
                "copies": d.requested_copies,
            }
            for d in designs
        ],
        "sheets": sheets,
        "total_copies": layout.total_placements,
        "total_cost": str(quote.total),
        "warnings": list(layout.warnings),
        "elapsed_seconds": round(elapsed, 3),
    }


def _write_metadata(output_dir: Path, metadata: dict) -> Path:
    """Write build_metadata.json next to the sheets."""
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / METADATA_FILENAME
    path.write_text(json.dumps(metadata, indent=2), encoding="utf-8")
    logger.info(f"Wrote build metadata to {path}")
    return path
