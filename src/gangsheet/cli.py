"""
Module: cli

Purpose:
    Command-line entry point. Takes the same inputs the upload form
    did (files, quantity, width, max length, rotate) and writes the
    sheets to a directory.

Key Functions:
    - main(): Parse arguments, run the build, print a summary
    - build_parser(): argparse parser

Exit codes:
    0 success, 1 internal or I/O failure, 2 invalid request
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from gangsheet import __version__
from gangsheet.common.defaults import REQUEST_LIMITS, SHEET_DEFAULTS
from gangsheet.config import GangSheetConfig
from gangsheet.controller import BuildResult, build_gangsheets
from gangsheet.core.errors import GangSheetError
from gangsheet.output.writer import OutputBundle
from gangsheet.pricing.tiers import RoundingPolicy

logger = logging.getLogger("gangsheet")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gangsheet",
        description="Lay out copies of PDF/image designs onto gang sheets.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="Design files (PDF, PNG, JPEG...)")
    parser.add_argument("-q", "--quantity", type=int, required=True,
                        help="Copies of each design")
    parser.add_argument("-w", "--width", type=int, default=REQUEST_LIMITS.allowed_widths_inches[0],
                        choices=REQUEST_LIMITS.allowed_widths_inches,
                        help="Sheet width in inches")
    parser.add_argument("-l", "--max-length", type=float,
                        default=REQUEST_LIMITS.default_length_inches,
                        help="Maximum sheet length in inches")
    parser.add_argument("-r", "--rotate", action="store_true", help="Rotate designs 90 degrees")
    parser.add_argument("--margin", type=float, default=SHEET_DEFAULTS.margin_inches,
                        help="Safe margin in inches")
    parser.add_argument("--spacing", type=float, default=SHEET_DEFAULTS.spacing_inches,
                        help="Gap between copies in inches")
    parser.add_argument("--dpi", type=int, default=SHEET_DEFAULTS.raster_dpi,
                        help="Assumed resolution of raster designs")
    parser.add_argument("--bundle", choices=[b.value for b in OutputBundle],
                        default=OutputBundle.PDF.value,
                        help="How to deliver more than one sheet")
    parser.add_argument("--policy", choices=[p.value for p in RoundingPolicy],
                        default=RoundingPolicy.FIRST_TIER_AT_LEAST.value,
                        help="How sheet lengths are matched to price tiers")
    parser.add_argument("-o", "--output", type=Path, default=Path("output"),
                        help="Output directory")
    parser.add_argument("--dry-run", action="store_true",
                        help="Compute layout and price without writing files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        config = GangSheetConfig(
            quantity=args.quantity,
            gang_width_inches=args.width,
            max_length_inches=args.max_length,
            rotate=args.rotate,
            margin_inches=args.margin,
            spacing_inches=args.spacing,
            raster_dpi=args.dpi,
            rounding_policy=RoundingPolicy(args.policy),
            bundle=OutputBundle(args.bundle),
            output_dir=None if args.dry_run else args.output,
        )
        result = build_gangsheets(config, args.files)
    except GangSheetError as e:
        logger.error(f"Error: {e}")
        return EXIT_INVALID if e.is_client_error else EXIT_FAILURE
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return EXIT_FAILURE

    _print_summary(result)
    return EXIT_OK


def _print_summary(result: BuildResult) -> None:
    for sheet_quote in result.quote.sheets:
        print(
            f"{sheet_quote.filename}: {sheet_quote.width_inches}x{sheet_quote.length_inches} in "
            f"({result.layout.sheets[sheet_quote.index].consumed} copies) "
            f"-> {sheet_quote.price}"
        )
    print(f"Total: {result.sheet_count} sheets, {result.total_cost}")
    for path in result.files:
        print(f"Wrote {path}")


if __name__ == "__main__":
    sys.exit(main())
