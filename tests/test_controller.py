"""
Tests for the build pipeline.

generate_layout() is exercised with plain designs; build_gangsheets()
runs end to end with real PDF and PNG files.
"""

import json
from decimal import Decimal

import pytest

from gangsheet.config import GangSheetConfig
from gangsheet.controller import METADATA_FILENAME, build_gangsheets, generate_layout
from gangsheet.core.errors import (
    AssetTooWideError,
    InvalidConstraintError,
    InvalidQuantityError,
    UnsupportedAssetKind,
)
from gangsheet.core.models import AssetFootprint, Design
from gangsheet.output import OutputBundle
from gangsheet.pricing import RoundingPolicy, TierTable


class TestGenerateLayout:
    """Tests for generate_layout()."""

    def test_generate_when_rotate_forced_then_all_footprints_rotated(self, dtf_constraints):
        designs = [Design("logo", AssetFootprint(288, 144), 16)]

        layout = generate_layout(designs, dtf_constraints, rotate=True)

        placements = layout.sheets[0].placements
        assert all(p.rotated for p in placements)
        # 2in-wide cells: 8 across
        assert max(p.col for p in placements) == 7

    def test_generate_when_rotate_none_then_own_flags_kept(self, dtf_constraints):
        designs = [
            Design("a", AssetFootprint(288, 144, rotated=True), 1),
            Design("b", AssetFootprint(288, 144), 1),
        ]

        layout = generate_layout(designs, dtf_constraints)

        assert [p.rotated for p in layout.sheets[0].placements] == [True, False]

    def test_generate_when_one_design_too_wide_then_no_sheets(self, dtf_constraints):
        designs = [
            Design("fits", AssetFootprint(288, 144), 500),
            Design("banner", AssetFootprint(22 * 72, 144), 1),
        ]

        with pytest.raises(AssetTooWideError):
            generate_layout(designs, dtf_constraints)

    def test_generate_when_rotation_makes_it_fit_then_succeeds(self, dtf_constraints):
        """A 23x2in design is too wide upright but fits turned on its side."""
        designs = [Design("long", AssetFootprint(23 * 72, 144), 2)]

        with pytest.raises(AssetTooWideError):
            generate_layout(designs, dtf_constraints)
        layout = generate_layout(designs, dtf_constraints, rotate=True)

        assert layout.total_placements == 2

    def test_generate_when_no_designs_then_raises(self, dtf_constraints):
        with pytest.raises(InvalidQuantityError):
            generate_layout([], dtf_constraints)

    def test_generate_when_duplicate_names_then_raises(self, dtf_constraints):
        designs = [Design("a", AssetFootprint(72, 72), 1)] * 2

        with pytest.raises(InvalidConstraintError):
            generate_layout(designs, dtf_constraints)


class TestBuildGangsheets:
    """End-to-end tests for build_gangsheets()."""

    def test_build_when_dry_run_then_layout_and_price_only(self, sample_pdf):
        config = GangSheetConfig(quantity=50)

        result = build_gangsheets(config, [sample_pdf])

        assert result.sheet_count == 1
        assert result.layout.sheets[0].filename == "gangsheet_22x33.pdf"
        assert result.total_cost == Decimal("15.84")
        assert result.files == ()
        assert result.metadata["total_copies"] == 50

    def test_build_when_output_dir_then_sheet_and_metadata_written(self, sample_pdf, tmp_path):
        # Arrange
        config = GangSheetConfig(quantity=50, output_dir=tmp_path)

        # Act
        result = build_gangsheets(config, [sample_pdf])

        # Assert
        assert result.files == (tmp_path / "gangsheet_22x33.pdf",)
        metadata = json.loads((tmp_path / METADATA_FILENAME).read_text())
        assert metadata["total_cost"] == "15.84"
        assert metadata["sheets"][0]["copies_by_design"] == {"logo.pdf": 50}
        assert metadata["config"]["rounding_policy"] == "first-tier"

    def test_build_when_metadata_disabled_then_not_written(self, sample_pdf, tmp_path):
        config = GangSheetConfig(quantity=5, output_dir=tmp_path, write_metadata=False)

        build_gangsheets(config, [sample_pdf])

        assert not (tmp_path / METADATA_FILENAME).exists()

    def test_build_when_pdf_and_png_then_mixed_shelf_sheet(self, sample_pdf, image_bytes, tmp_path):
        """PNG at 300 DPI: 600x600 px is a 2in square next to the 4x2in PDF."""
        config = GangSheetConfig(quantity=3, output_dir=tmp_path)
        sources = [sample_pdf, ("square.png", image_bytes(600, 600))]

        result = build_gangsheets(config, sources)

        assert result.sheet_count == 1
        assert result.layout.sheets[0].mode.value == "shelf"
        assert result.layout.copies_by_design() == {"logo.pdf": 3, "square.png": 3}
        assert result.files[0].exists()

    def test_build_when_same_upload_twice_then_names_deduplicated(self, pdf_bytes):
        data = pdf_bytes(288, 144)
        config = GangSheetConfig(quantity=2)

        result = build_gangsheets(config, [("logo.pdf", data), ("logo.pdf", data)])

        assert result.layout.copies_by_design() == {"logo.pdf": 2, "logo (2).pdf": 2}

    def test_build_when_many_sheets_zip_then_single_archive(self, sample_pdf, tmp_path):
        config = GangSheetConfig(
            quantity=700, output_dir=tmp_path, bundle=OutputBundle.ZIP,
        )

        result = build_gangsheets(config, [sample_pdf])

        assert result.sheet_count == 3
        assert result.files == (tmp_path / "gangsheets.zip",)

    def test_build_when_custom_tiers_and_policy_then_used(self, sample_pdf):
        config = GangSheetConfig(
            quantity=50, rounding_policy=RoundingPolicy.CEIL_TO_TWELVE,
        )
        tiers = TierTable.from_pairs([(12, 1), (24, 2), (30, 3), (36, 4), (200, 9)])

        result = build_gangsheets(config, [sample_pdf], tiers=tiers)

        # 33in rounds up to the 36in tier
        assert result.total_cost == Decimal("4")

    def test_build_when_design_too_wide_then_raises(self, pdf_bytes):
        config = GangSheetConfig(quantity=1)

        with pytest.raises(AssetTooWideError):
            build_gangsheets(config, [("banner.pdf", pdf_bytes(22 * 72, 72))])

    def test_build_when_not_a_design_then_raises(self):
        config = GangSheetConfig(quantity=1)

        with pytest.raises(UnsupportedAssetKind):
            build_gangsheets(config, [("notes.txt", b"hello")])

    def test_build_when_no_sources_then_raises(self):
        with pytest.raises(InvalidQuantityError):
            build_gangsheets(GangSheetConfig(quantity=1), [])


class TestGangSheetConfig:
    """Tests for request validation."""

    @pytest.mark.parametrize("quantity", [0, -5, 10001])
    def test_init_when_quantity_out_of_range_then_raises(self, quantity):
        with pytest.raises(InvalidQuantityError):
            GangSheetConfig(quantity=quantity)

    def test_init_when_width_not_offered_then_raises(self):
        with pytest.raises(InvalidConstraintError):
            GangSheetConfig(quantity=1, gang_width_inches=24)

    @pytest.mark.parametrize("length", [11, 201])
    def test_init_when_length_out_of_range_then_raises(self, length):
        with pytest.raises(InvalidConstraintError):
            GangSheetConfig(quantity=1, max_length_inches=length)

    def test_to_constraints_when_30in_then_points(self):
        constraints = GangSheetConfig(quantity=1, gang_width_inches=30).to_constraints()

        assert constraints.width == 2160
        assert constraints.max_height == 14400
        assert constraints.margin == 9
