# SPDX-License-Identifier: Apache-2.0
"""Text measurement using PDFium font metrics."""

from __future__ import annotations

import ctypes

import pypdfium2 as pdfium  # type: ignore[import-untyped]


def calculate_text_width(
    text: str,
    font_handle: ctypes.c_void_p,
    font_size: float,
) -> float:
    """Calculate the rendered width of text using font metrics.

    Args:
        text: Text to measure.
        font_handle: PDFium font handle (FPDF_FONT).
        font_size: Font size in points.

    Returns:
        Total advance width in points.
    """
    if not text:
        return 0.0

    total_width = 0.0
    width_out = ctypes.c_float()

    for char in text:
        result = pdfium.raw.FPDFFont_GetGlyphWidth(
            font_handle,
            ord(char),
            ctypes.c_float(font_size),
            ctypes.byref(width_out),
        )
        if result:
            total_width += width_out.value

    return total_width

