"""
Tests for PDF rendering and output bundling.

Renders small layouts with real PDF and PNG assets and reads the
results back with PyMuPDF.
"""

import zipfile
from decimal import Decimal

import fitz
import pytest

from gangsheet.assets import load_asset, resolve
from gangsheet.core.models import AssetFootprint, Design
from gangsheet.layout import CopyQueue, LayoutResult, Placement, SheetConstraints, paginate
from gangsheet.output import (
    OutputBundle,
    placement_rect,
    render_document,
    render_sheet,
    unique_filenames,
    write_sheets,
    write_sheets_zip,
)
from gangsheet.pricing import quote_layout


@pytest.fixture
def short_constraints():
    """22in x 12in sheets: 16 copies of a 4x2in design per sheet."""
    return SheetConstraints.from_inches(22, 12)


@pytest.fixture
def logo(sample_pdf):
    return load_asset(sample_pdf)


def layout_for(asset, copies, constraints, rotate=False):
    design = Design(asset.name, resolve(asset, rotate=rotate), copies)
    return paginate(CopyQueue.from_designs([design]), constraints)


class TestPlacementRect:

    def test_rect_when_not_rotated_then_y_flipped(self):
        p = Placement("logo", x=9, y=9, footprint=AssetFootprint(288, 144))

        rect = placement_rect(p, sheet_height=500)

        assert tuple(rect) == pytest.approx((9, 347, 297, 491))

    def test_rect_when_rotated_then_covers_oriented_cell(self):
        p = Placement("logo", x=9, y=9, footprint=AssetFootprint(288, 144, rotated=True))

        rect = placement_rect(p, sheet_height=500)

        assert tuple(rect) == pytest.approx((9, 203, 153, 491))


class TestRenderer:

    def test_render_sheet_when_called_then_page_matches_sheet_size(self, logo, dtf_constraints):
        layout = layout_for(logo, 6, dtf_constraints)

        data = render_sheet(layout.sheets[0], {logo.name: logo})

        with fitz.open(stream=data, filetype="pdf") as doc:
            assert doc.page_count == 1
            assert doc[0].rect.width == pytest.approx(22 * 72)
            assert doc[0].rect.height == pytest.approx(layout.sheets[0].height_pts)

    def test_render_document_when_three_sheets_then_three_pages(self, logo, short_constraints):
        layout = layout_for(logo, 40, short_constraints)

        data = render_document(layout, {logo.name: logo})

        with fitz.open(stream=data, filetype="pdf") as doc:
            assert doc.page_count == 3
            heights = [round(page.rect.height) for page in doc]
        assert heights == [720, 720, 360]

    def test_render_when_raster_rotated_then_image_reused(self, sample_image, short_constraints):
        badge = load_asset(sample_image)
        layout = layout_for(badge, 5, short_constraints, rotate=True)

        data = render_sheet(layout.sheets[0], {badge.name: badge})

        with fitz.open(stream=data, filetype="pdf") as doc:
            assert len({img[0] for img in doc[0].get_images()}) == 1

    def test_render_when_design_missing_then_keyerror(self, logo, dtf_constraints):
        layout = layout_for(logo, 2, dtf_constraints)

        with pytest.raises(KeyError):
            render_sheet(layout.sheets[0], {})

    def test_render_document_when_empty_then_empty_bytes(self):
        data = render_document(LayoutResult(sheets=()), {})

        assert data == b""


class TestZipWriter:

    def test_unique_filenames_when_repeated_then_suffixed(self, logo, short_constraints):
        layout = layout_for(logo, 40, short_constraints)

        names = unique_filenames(layout.sheets)

        assert names == ["gangsheet_22x10.pdf", "gangsheet_22x10_2.pdf", "gangsheet_22x5.pdf"]

    def test_write_zip_when_called_then_one_pdf_per_sheet(self, logo, short_constraints, tmp_path):
        # Arrange
        layout = layout_for(logo, 40, short_constraints)
        quote = quote_layout(layout)

        # Act
        path = write_sheets_zip(layout, {logo.name: logo}, tmp_path / "bundle", quote=quote)

        # Assert
        assert path.suffix == ".zip"
        with zipfile.ZipFile(path) as zf:
            names = zf.namelist()
            readme = zf.read("README.txt").decode()
        assert names == [
            "README.txt",
            "gangsheet_22x10.pdf",
            "gangsheet_22x10_2.pdf",
            "gangsheet_22x5.pdf",
        ]
        assert "Copies: 40" in readme
        assert f"Total cost: {quote.total}" in readme

    def test_write_zip_when_no_readme_then_only_sheets(self, logo, short_constraints, tmp_path):
        layout = layout_for(logo, 20, short_constraints)

        path = write_sheets_zip(
            layout, {logo.name: logo}, tmp_path / "out.zip", include_readme=False
        )

        with zipfile.ZipFile(path) as zf:
            assert "README.txt" not in zf.namelist()
            assert len(zf.namelist()) == 2


class TestWriteSheets:

    def test_write_when_single_sheet_then_named_after_size(self, logo, dtf_constraints, tmp_path):
        layout = layout_for(logo, 50, dtf_constraints)

        written = write_sheets(layout, {logo.name: logo}, tmp_path, bundle=OutputBundle.ZIP)

        assert written == [tmp_path / "gangsheet_22x33.pdf"]
        assert written[0].read_bytes().startswith(b"%PDF-")

    def test_write_when_pdf_bundle_then_combined_document(self, logo, short_constraints, tmp_path):
        layout = layout_for(logo, 40, short_constraints)

        written = write_sheets(layout, {logo.name: logo}, tmp_path)

        assert written == [tmp_path / "gangsheets.pdf"]
        with fitz.open(written[0]) as doc:
            assert doc.page_count == 3

    def test_write_when_zip_bundle_then_archive(self, logo, short_constraints, tmp_path):
        layout = layout_for(logo, 40, short_constraints)

        written = write_sheets(
            layout, {logo.name: logo}, tmp_path, bundle=OutputBundle.ZIP,
            quote=quote_layout(layout),
        )

        assert written == [tmp_path / "gangsheets.zip"]

    def test_write_when_files_bundle_then_one_file_per_sheet(self, logo, short_constraints, tmp_path):
        layout = layout_for(logo, 40, short_constraints)

        written = write_sheets(layout, {logo.name: logo}, tmp_path, bundle=OutputBundle.FILES)

        assert [p.name for p in written] == [
            "gangsheet_22x10.pdf",
            "gangsheet_22x10_2.pdf",
            "gangsheet_22x5.pdf",
        ]
        assert all(p.exists() for p in written)

    def test_write_when_no_sheets_then_nothing_written(self, tmp_path):
        written = write_sheets(LayoutResult(sheets=()), {}, tmp_path / "out")

        assert written == []
        assert (tmp_path / "out").is_dir()

    def test_quote_total_when_three_sheets_then_decimal(self, logo, short_constraints):
        """10in -> 12in tier twice, 5in -> 12in tier."""
        layout = layout_for(logo, 40, short_constraints)

        assert quote_layout(layout).total == Decimal("15.84")
