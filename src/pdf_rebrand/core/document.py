# SPDX-License-Identifier: Apache-2.0
"""Report document wrapper using pypdfium2.

This module exposes the drawing primitives the rebranding stages need
(rectangle fill, image placement, text placement, region rendering) on
top of pypdfium2. Content is only ever appended to pages; nothing is
parsed or removed from the existing content streams.
"""

from __future__ import annotations

import ctypes
from io import BytesIO
from pathlib import Path
from typing import Any, Optional, Union

import pypdfium2 as pdfium  # type: ignore[import-untyped]
from PIL import Image

from .helpers import to_byte_array, to_widestring
from .models import BLACK, WHITE, Color, LogoPlacement, Region
from .text_metrics import calculate_text_width


class ReportDocument:
    """In-memory report opened with pypdfium2.

    Example:
        >>> with ReportDocument(pdf_bytes) as doc:
        ...     doc.fill_rect(0, Region(496, 0, 99, 842))
        ...     font = doc.load_standard_font("Helvetica-Bold")
        ...     doc.draw_text(1, "Acme AG", 57, 22, font, 8.0)
        ...     output = doc.to_bytes()
    """

    def __init__(self, pdf_source: Union[Path, str, bytes]) -> None:
        """Open a document.

        Args:
            pdf_source: Path to a PDF file or PDF bytes

        Raises:
            TypeError: If pdf_source is not Path, str, or bytes
            FileNotFoundError: If the file path doesn't exist
            pypdfium2.PdfiumError: If PDFium cannot load the data
        """
        self._pdf: Optional[pdfium.PdfDocument] = None
        self._loaded_fonts: dict[str, Any] = {}  # font name/path -> font handle
        self._loaded_font_buffers: dict[str, ctypes.Array[Any]] = {}  # keep buffers alive

        if isinstance(pdf_source, bytes):
            self._pdf = pdfium.PdfDocument(pdf_source)
        elif isinstance(pdf_source, (str, Path)):
            path = Path(pdf_source)
            if not path.exists():
                raise FileNotFoundError(f"PDF file not found: {path}")
            self._pdf = pdfium.PdfDocument(path.read_bytes())
        else:
            raise TypeError(
                f"pdf_source must be Path, str, or bytes, got {type(pdf_source).__name__}"
            )

    def __enter__(self) -> ReportDocument:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Any,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the PDF document and release resources."""
        self._loaded_fonts.clear()
        self._loaded_font_buffers.clear()
        if self._pdf is not None:
            self._pdf.close()
            self._pdf = None

    @property
    def page_count(self) -> int:
        """Get the number of pages in the document."""
        return len(self._ensure_open())

    def _ensure_open(self) -> pdfium.PdfDocument:
        if self._pdf is None:
            raise RuntimeError("PDF document is not open")
        return self._pdf

    def _get_page(self, page_index: int) -> pdfium.PdfPage:
        pdf = self._ensure_open()
        if page_index < 0 or page_index >= len(pdf):
            raise IndexError(f"Page number {page_index} out of range")
        return pdf[page_index]

    def page_text(self, page_index: int) -> str:
        """Extract the complete text layer of one page."""
        page = self._get_page(page_index)
        textpage = page.get_textpage()
        try:
            result: str = textpage.get_text_bounded()
            return result
        finally:
            textpage.close()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------

    def load_standard_font(self, font_name: str) -> Optional[Any]:
        """Load one of the 14 standard PDF fonts.

        Args:
            font_name: Standard font name (e.g., "Helvetica", "Helvetica-Bold")

        Returns:
            Font handle or None if loading failed
        """
        if font_name in self._loaded_fonts:
            return self._loaded_fonts[font_name]

        pdf = self._ensure_open()
        font_handle = pdfium.raw.FPDFText_LoadStandardFont(
            pdf.raw, font_name.encode("utf-8")
        )
        if font_handle:
            self._loaded_fonts[font_name] = font_handle
            return font_handle
        return None

    def load_font(self, font_path: Union[Path, str]) -> Optional[Any]:
        """Load a TrueType font as a CID font (full Unicode coverage).

        Returns:
            Font handle or None if the file is missing or cannot be loaded
        """
        path = Path(font_path)
        key = str(path)
        if key in self._loaded_fonts:
            return self._loaded_fonts[key]
        if not path.exists():
            return None

        font_data = path.read_bytes()
        font_arr = to_byte_array(font_data)
        # PDFium keeps reading from this buffer until the document is saved
        self._loaded_font_buffers[key] = font_arr

        pdf = self._ensure_open()
        font_handle = pdfium.raw.FPDFText_LoadFont(
            pdf.raw,
            font_arr,
            ctypes.c_uint(len(font_data)),
            ctypes.c_int(pdfium.raw.FPDF_FONT_TRUETYPE),
            ctypes.c_int(1),
        )
        if font_handle:
            self._loaded_fonts[key] = font_handle
            return font_handle
        return None

    def resolve_font(
        self, font_name: str, font_path: Optional[Union[Path, str]] = None
    ) -> Any:
        """Load ``font_path`` if given, else the standard font ``font_name``.

        Raises:
            RuntimeError: If neither can be loaded
        """
        handle = self.load_font(font_path) if font_path else self.load_standard_font(font_name)
        if not handle:
            raise RuntimeError(f"Could not load font: {font_path or font_name}")
        return handle

    def text_width(self, text: str, font_handle: Any, font_size: float) -> float:
        """Measured advance width of ``text`` in points."""
        return calculate_text_width(text, font_handle, font_size)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def fill_rect(self, page_index: int, region: Region, color: Color = WHITE) -> None:
        """Append an opaque filled rectangle path to a page's content stream.

        This is a regular page object, not an annotation, so viewers cannot
        hide it independently of the page content.
        """
        page = self._get_page(page_index)

        rect = pdfium.raw.FPDFPageObj_CreateNewRect(
            ctypes.c_float(region.x),
            ctypes.c_float(region.y),
            ctypes.c_float(region.width),
            ctypes.c_float(region.height),
        )
        pdfium.raw.FPDFPageObj_SetFillColor(rect, color.r, color.g, color.b, 255)
        # Fill mode: FPDF_FILLMODE_WINDING = 2, no stroke
        pdfium.raw.FPDFPath_SetDrawMode(rect, 2, ctypes.c_int(0))
        pdfium.raw.FPDFPage_InsertObject(page.raw, rect)
        page.gen_content()

    def draw_text(
        self,
        page_index: int,
        text: str,
        x: float,
        y: float,
        font_handle: Any,
        font_size: float,
        color: Color = BLACK,
    ) -> None:
        """Draw a single line of text with its baseline origin at (x, y).

        Raises:
            RuntimeError: If PDFium rejects the text object
        """
        pdf = self._ensure_open()
        page = self._get_page(page_index)

        text_obj = pdfium.raw.FPDFPageObj_CreateTextObj(
            pdf.raw, font_handle, ctypes.c_float(font_size)
        )
        if not text_obj:
            raise RuntimeError("Could not create text object")

        if not pdfium.raw.FPDFText_SetText(text_obj, to_widestring(text)):
            raise RuntimeError(f"Could not set text: {text!r}")

        pdfium.raw.FPDFPageObj_SetFillColor(text_obj, color.r, color.g, color.b, 255)
        pdfium.raw.FPDFPageObj_Transform(
            text_obj,
            ctypes.c_double(1.0),
            ctypes.c_double(0.0),
            ctypes.c_double(0.0),
            ctypes.c_double(1.0),
            ctypes.c_double(x),
            ctypes.c_double(y),
        )
        pdfium.raw.FPDFPage_InsertObject(page.raw, text_obj)
        page.gen_content()

    def insert_image(
        self,
        page_index: int,
        placement: LogoPlacement,
        *,
        jpeg_data: Optional[bytes] = None,
        pil_image: Optional[Image.Image] = None,
    ) -> None:
        """Place an image object scaled to ``placement``.

        JPEG data is embedded as-is (DCT stream); any other image is passed
        as a decoded Pillow image and embedded as a bitmap.
        """
        if (jpeg_data is None) == (pil_image is None):
            raise ValueError("Exactly one of jpeg_data or pil_image is required")

        pdf = self._ensure_open()
        page = self._get_page(page_index)

        image = pdfium.PdfImage.new(pdf)
        if jpeg_data is not None:
            image.load_jpeg(BytesIO(jpeg_data), inline=True)
        else:
            bitmap = pdfium.PdfBitmap.from_pil(pil_image)
            image.set_bitmap(bitmap)

        # Image objects occupy the unit square; scale then move into place
        matrix = pdfium.PdfMatrix().scale(placement.width, placement.height)
        image.set_matrix(matrix.translate(placement.x, placement.y))
        page.insert_obj(image)
        page.gen_content()

    def render_region(self, page_index: int, region: Region, scale: float) -> Any:
        """Render only ``region`` of a page.

        Returns:
            pypdfium2 PdfBitmap of the cropped area
        """
        page = self._get_page(page_index)
        page_width, page_height = page.get_size()
        # crop takes the margins to cut away: (left, bottom, right, top)
        crop = (
            max(0.0, region.x),
            max(0.0, region.y),
            max(0.0, page_width - region.x1),
            max(0.0, page_height - region.y1),
        )
        return page.render(scale=scale, crop=crop)

    def insert_bitmap(self, page_index: int, region: Region, bitmap: Any) -> None:
        """Draw a rendered bitmap over ``region``."""
        pdf = self._ensure_open()
        page = self._get_page(page_index)

        image = pdfium.PdfImage.new(pdf)
        image.set_bitmap(bitmap)
        matrix = pdfium.PdfMatrix().scale(region.width, region.height)
        image.set_matrix(matrix.translate(region.x, region.y))
        page.insert_obj(image)
        page.gen_content()

    def draw_outline(
        self,
        page_index: int,
        region: Region,
        color: Color,
        label: Optional[str] = None,
        line_width: float = 1.0,
        label_font_size: float = 6.0,
    ) -> None:
        """Draw a colored region outline with an optional name label (debug aid)."""
        page = self._get_page(page_index)

        rect = pdfium.raw.FPDFPageObj_CreateNewRect(
            ctypes.c_float(region.x),
            ctypes.c_float(region.y),
            ctypes.c_float(region.width),
            ctypes.c_float(region.height),
        )
        pdfium.raw.FPDFPageObj_SetStrokeColor(rect, color.r, color.g, color.b, 220)
        pdfium.raw.FPDFPageObj_SetStrokeWidth(rect, ctypes.c_float(line_width))
        # Draw mode: stroke only (fill_mode=0, stroke=1)
        pdfium.raw.FPDFPath_SetDrawMode(rect, 0, ctypes.c_int(1))
        pdfium.raw.FPDFPage_InsertObject(page.raw, rect)
        page.gen_content()

        if label:
            font_handle = self.load_standard_font("Helvetica-Bold")
            if font_handle:
                self.draw_text(
                    page_index,
                    label,
                    region.x + 2,
                    region.y1 - label_font_size - 1,
                    font_handle,
                    label_font_size,
                    color,
                )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def to_bytes(self) -> bytes:
        """Export the PDF as bytes."""
        buffer = BytesIO()
        self._ensure_open().save(buffer)
        return buffer.getvalue()

