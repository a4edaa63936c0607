# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures: report PDFs built with pypdfium2 and logos built with Pillow."""

from __future__ import annotations

import ctypes
from collections.abc import Callable, Sequence
from io import BytesIO
from pathlib import Path

import pikepdf  # type: ignore[import-untyped]
import pypdfium2 as pdfium  # type: ignore[import-untyped]
import pytest
from PIL import Image

from pdf_rebrand.core.helpers import to_widestring

# (text, x, y) in PDF points
TextItem = tuple[str, float, float]

ORIGINAL_FOOTER = "HMQ AG, 05.03.2024"

# System TrueType fonts with extended Latin coverage
DEJAVU_DIR = Path("/usr/share/fonts/truetype/dejavu")
DEJAVU_REGULAR = DEJAVU_DIR / "DejaVuSans.ttf"
DEJAVU_BOLD = DEJAVU_DIR / "DejaVuSans-Bold.ttf"

requires_dejavu_fonts = pytest.mark.skipif(
    not (DEJAVU_REGULAR.exists() and DEJAVU_BOLD.exists()),
    reason="DejaVu fonts not found",
)


def build_pdf(
    pages: Sequence[Sequence[TextItem]],
    font_size: float = 8.0,
    black_boxes: Sequence[tuple[int, float, float, float, float]] = (),
) -> bytes:
    """Build an A4 PDF with Helvetica text items and optional black boxes.

    Args:
        pages: Text items per page.
        font_size: Font size for every text item.
        black_boxes: (page_index, x, y, width, height) rectangles filled black.
    """
    pdf = pdfium.PdfDocument.new()
    font = pdfium.raw.FPDFText_LoadStandardFont(pdf.raw, b"Helvetica")

    for page_index, items in enumerate(pages):
        page = pdf.new_page(595, 842)
        for box_page, x, y, w, h in black_boxes:
            if box_page != page_index:
                continue
            rect = pdfium.raw.FPDFPageObj_CreateNewRect(
                ctypes.c_float(x), ctypes.c_float(y), ctypes.c_float(w), ctypes.c_float(h)
            )
            pdfium.raw.FPDFPageObj_SetFillColor(rect, 0, 0, 0, 255)
            pdfium.raw.FPDFPath_SetDrawMode(rect, 2, ctypes.c_int(0))
            pdfium.raw.FPDFPage_InsertObject(page.raw, rect)
        for text, x, y in items:
            text_obj = pdfium.raw.FPDFPageObj_CreateTextObj(
                pdf.raw, font, ctypes.c_float(font_size)
            )
            pdfium.raw.FPDFText_SetText(text_obj, to_widestring(text))
            pdfium.raw.FPDFPageObj_Transform(text_obj, 1.0, 0.0, 0.0, 1.0, x, y)
            pdfium.raw.FPDFPage_InsertObject(page.raw, text_obj)
        page.gen_content()
        page.close()

    buffer = BytesIO()
    pdf.save(buffer)
    pdf.close()
    return buffer.getvalue()


def build_report(page_count: int = 3, footer: str = ORIGINAL_FOOTER) -> bytes:
    """Build a report laid out like the template.

    Title page: brand text in the right-hand banner. Following pages: body
    text, brand text in the header corner and the original footer line.
    """
    pages: list[list[TextItem]] = [
        [("Beweissicherungsbericht", 57, 700), ("HMQ AG", 505, 800)]
    ]
    for number in range(2, page_count + 1):
        pages.append(
            [
                (f"Seite {number}: Aufnahme vom 01.01.2020", 57, 600),
                ("HMQ", 540, 800),
                (footer, 57, 22),
            ]
        )
    boxes = [(0, 500, 400, 90, 100)] + [(i, 540, 790, 50, 40) for i in range(1, page_count)]
    return build_pdf(pages[:page_count], black_boxes=boxes)


def page_pixel(pdf_bytes: bytes, page_index: int, x: float, y: float) -> tuple[int, ...]:
    """Render a page at 72 DPI and return the RGB pixel at PDF point (x, y)."""
    pdf = pdfium.PdfDocument(pdf_bytes)
    try:
        page = pdf[page_index]
        image = page.render(scale=1).to_pil().convert("RGB")
        height = image.height
        pixel: tuple[int, ...] = image.getpixel((int(x), int(height - y)))
        page.close()
        return pixel
    finally:
        pdf.close()


def count_image_objects(pdf_bytes: bytes, page_index: int) -> int:
    """Count image page objects on one page."""
    pdf = pdfium.PdfDocument(pdf_bytes)
    try:
        page = pdf[page_index]
        objects = list(page.get_objects(filter=[pdfium.raw.FPDF_PAGEOBJ_IMAGE]))
        page.close()
        return len(objects)
    finally:
        pdf.close()


def with_original_xmp(pdf_bytes: bytes) -> bytes:
    """Add XMP metadata naming the original brand."""
    with pikepdf.open(BytesIO(pdf_bytes)) as pdf:
        with pdf.open_metadata(set_pikepdf_as_editor=False) as meta:
            meta["dc:title"] = "HMQ Beweissicherungsbericht"
            meta["pdf:Producer"] = "HMQ AG"
            meta["xmp:CreatorTool"] = "HMQ Report Engine"
        output = BytesIO()
        pdf.save(output)
        return output.getvalue()


def char_left(pdf_bytes: bytes, page_index: int, char: str) -> float:
    """Left edge of the first ``char`` in a page's text layer."""
    pdf = pdfium.PdfDocument(pdf_bytes)
    try:
        page = pdf[page_index]
        textpage = page.get_textpage()
        try:
            for index in range(textpage.count_chars()):
                if pdfium.raw.FPDFText_GetUnicode(textpage.raw, index) == ord(char):
                    left: float = textpage.get_charbox(index)[0]
                    return left
        finally:
            textpage.close()
            page.close()
        raise AssertionError(f"{char!r} not found on page {page_index}")
    finally:
        pdf.close()


def page_text(pdf_bytes: bytes, page_index: int) -> str:
    """Read the text layer of one page."""
    pdf = pdfium.PdfDocument(pdf_bytes)
    try:
        page = pdf[page_index]
        textpage = page.get_textpage()
        text: str = textpage.get_text_bounded()
        textpage.close()
        page.close()
        return text
    finally:
        pdf.close()


def image_bytes(size: tuple[int, int], fmt: str, mode: str = "RGB") -> bytes:
    """Encode a solid-color image with Pillow."""
    color: tuple[int, ...] = (200, 30, 30, 255) if mode == "RGBA" else (200, 30, 30)
    image = Image.new(mode, size, color)
    buffer = BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def report_pdf() -> bytes:
    """Three-page report with the original footer on pages 2 and 3."""
    return build_report()


@pytest.fixture
def single_page_pdf() -> bytes:
    """Report with only a title page."""
    return build_report(page_count=1)


@pytest.fixture
def empty_pdf() -> bytes:
    """PDF without any pages."""
    pdf = pdfium.PdfDocument.new()
    buffer = BytesIO()
    pdf.save(buffer)
    pdf.close()
    return buffer.getvalue()


@pytest.fixture
def png_logo() -> bytes:
    """300x100 RGBA PNG logo."""
    return image_bytes((300, 100), "PNG", mode="RGBA")


@pytest.fixture
def jpeg_logo() -> bytes:
    """200x200 JPEG logo."""
    return image_bytes((200, 200), "JPEG")


@pytest.fixture
def pdf_builder() -> Callable[..., bytes]:
    """Expose build_pdf to tests that need custom pages."""
    return build_pdf
