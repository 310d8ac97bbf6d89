import io
import sys
from pathlib import Path

import fitz
import pytest
from PIL import Image

# Add src to sys.path so we can import gangsheet
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from gangsheet.layout import SheetConstraints


def make_pdf_bytes(width: float = 288, height: float = 144, pages: int = 1) -> bytes:
    """Build a PDF with the given page size (points) and page count."""
    doc = fitz.open()
    for i in range(pages):
        page = doc.new_page(width=width, height=height)
        page.draw_rect(fitz.Rect(2, 2, width - 2, height - 2), color=(1, 0, 0))
        page.insert_text((10, height / 2), f"design {i}", fontsize=10)
    data = doc.tobytes()
    doc.close()
    return data


def make_image_bytes(width: int = 1200, height: int = 600, fmt: str = "PNG") -> bytes:
    """Build a raster image of the given pixel size."""
    img = Image.new("RGB", (width, height), color="white")
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


# Common test fixtures
@pytest.fixture
def dtf_constraints():
    """22in x 200in sheet, 1/8in margin, 1/2in spacing."""
    return SheetConstraints.from_inches(22, 200, margin=0.125, spacing=0.5)


@pytest.fixture
def sample_pdf(tmp_path: Path):
    """A 4in x 2in single-page PDF on disk."""
    path = tmp_path / "logo.pdf"
    path.write_bytes(make_pdf_bytes(288, 144))
    return path


@pytest.fixture
def sample_image(tmp_path: Path):
    """A 1200x600 px PNG on disk (4in x 2in at 300 DPI)."""
    path = tmp_path / "badge.png"
    path.write_bytes(make_image_bytes(1200, 600))
    return path


@pytest.fixture
def pdf_bytes():
    """Factory for in-memory PDFs: pdf_bytes(width, height, pages=1)."""
    return make_pdf_bytes


@pytest.fixture
def image_bytes():
    """Factory for in-memory images: image_bytes(width, height, fmt="PNG")."""
    return make_image_bytes
