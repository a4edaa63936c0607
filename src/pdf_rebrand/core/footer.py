# SPDX-License-Identifier: Apache-2.0
"""Footer rewriting on every page after the title page."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pdf_rebrand.errors import InputValidationError

from .document import ReportDocument
from .masker import mask_region
from .models import FooterLayout, MaskStrategy

logger = logging.getLogger(__name__)

# The standard 14 fonts are drawn with WinAnsiEncoding
STANDARD_FONT_ENCODING = "cp1252"


def ensure_encodable(text: str, font_name: str, font_path: Optional[Path] = None) -> None:
    """Reject text that the standard font ``font_name`` cannot represent.

    A TrueType ``font_path`` is loaded as a CID font and covers any
    character the font file has, so no check is made.

    Raises:
        InputValidationError: If a character falls outside WinAnsi.
    """
    if font_path is not None:
        return
    try:
        text.encode(STANDARD_FONT_ENCODING)
    except UnicodeEncodeError as exc:
        bad = text[exc.start : exc.end]
        raise InputValidationError(
            f"{font_name} cannot draw {bad!r} in {text!r}; "
            "configure a TrueType footer font (--font/--bold-font)",
            stage="footer",
            cause=exc,
        ) from exc


def format_footer(partner_name: str, date: str, separator: str = ", ") -> tuple[str, str]:
    """Split the footer into its bold name part and regular date suffix.

    Without a date the suffix is empty; no placeholder is drawn.
    """
    suffix = f"{separator}{date}" if date else ""
    return partner_name, suffix


def rewrite_footers(
    document: ReportDocument,
    layout: FooterLayout,
    partner_name: str,
    date: str = "",
    strategy: MaskStrategy = MaskStrategy.LAYERED,
) -> int:
    """Replace the footer line of every non-title page.

    The old footer rectangle is masked, then the partner name is drawn in
    the bold font at the baseline, immediately followed by ", <date>" in the
    regular font. The suffix starts at the measured width of the name.

    Returns:
        Number of pages rewritten.

    Raises:
        InputValidationError: If a standard font cannot draw the text.
            Nothing has been drawn at that point.
    """
    name_text, suffix_text = format_footer(partner_name, date, layout.separator)
    ensure_encodable(name_text, layout.bold_font, layout.bold_font_path)
    ensure_encodable(suffix_text, layout.regular_font, layout.regular_font_path)

    bold = document.resolve_font(layout.bold_font, layout.bold_font_path)
    regular = document.resolve_font(layout.regular_font, layout.regular_font_path)
    name_width = document.text_width(name_text, bold, layout.font_size)

    rewritten = 0
    for page_index in range(1, document.page_count):
        mask_region(document, page_index, layout.region, strategy)
        document.draw_text(
            page_index,
            name_text,
            layout.baseline_x,
            layout.baseline_y,
            bold,
            layout.font_size,
            layout.color,
        )
        if suffix_text:
            document.draw_text(
                page_index,
                suffix_text,
                layout.baseline_x + name_width,
                layout.baseline_y,
                regular,
                layout.font_size,
                layout.color,
            )
        rewritten += 1

    logger.info(
        "Rewrote footer on %d page(s): %r%s",
        rewritten,
        name_text,
        f" + {suffix_text!r}" if suffix_text else " (no date)",
    )
    return rewritten
