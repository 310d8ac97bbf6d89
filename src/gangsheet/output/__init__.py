"""
Module: output

Purpose:
    PDF rendering and output bundling for produced sheets.
    Converts a LayoutResult to PDF files using PyMuPDF.

Key Functions:
    - render_sheet(): Render one sheet
    - render_document(): Render all sheets into one PDF
    - write_sheets(): Write sheets to disk as PDF/ZIP/files

Dependencies:
    - fitz (PyMuPDF): PDF generation
    - gangsheet.layout.models: LayoutResult

Used By:
    - gangsheet.controller: Pipeline orchestration
"""

from .renderer import render_sheet, render_document, placement_rect
from .zip_writer import write_sheets_zip, unique_filenames
from .writer import OutputBundle, write_sheets

__all__ = [
    "render_sheet",
    "render_document",
    "placement_rect",
    "write_sheets_zip",
    "unique_filenames",
    "OutputBundle",
    "write_sheets",
]
