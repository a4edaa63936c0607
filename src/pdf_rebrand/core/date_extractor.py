# SPDX-License-Identifier: Apache-2.0
"""Report date extraction from the footer page's text layer."""

from __future__ import annotations

import logging
import re
from typing import Optional

from .document import ReportDocument

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"\d{2}\.\d{2}\.\d{4}")

# Maximum distance between the anchor label and the date ("HMQ AG, 05.03.2024")
ANCHOR_WINDOW = 12


def find_date(text: str, anchor_label: Optional[str] = None) -> str:
    """Find a DD.MM.YYYY date in ``text``.

    If ``anchor_label`` occurs in the text, the first date following it
    within a few characters wins. Otherwise the first date anywhere.

    Returns:
        The date string, or "" when none is found.
    """
    if anchor_label:
        anchored = re.search(
            re.escape(anchor_label) + r"\D{0,%d}?(%s)" % (ANCHOR_WINDOW, DATE_PATTERN.pattern),
            text,
        )
        if anchored:
            return anchored.group(1)

    match = DATE_PATTERN.search(text)
    return match.group(0) if match else ""


def extract_report_date(
    pdf_bytes: bytes,
    page_index: int = 1,
    anchor_label: Optional[str] = None,
) -> str:
    """Extract the report date from the footer of ``page_index``.

    Extraction is best effort: a short document, a missing date or any
    PDFium failure yields an empty string and never raises.

    Args:
        pdf_bytes: Complete input PDF.
        page_index: 0-based page carrying the original footer.
        anchor_label: Text the date follows in the original footer.

    Returns:
        Date as "DD.MM.YYYY", or "" if not found.
    """
    try:
        with ReportDocument(pdf_bytes) as document:
            if document.page_count <= page_index:
                logger.debug(
                    "Document has %d pages, no footer page %d to read a date from",
                    document.page_count,
                    page_index,
                )
                return ""
            text = document.page_text(page_index)
    except Exception as e:
        logger.warning("Could not read text layer for date extraction: %s", e)
        return ""

    date = find_date(text, anchor_label)
    if date:
        logger.info("Extracted report date %s from page %d", date, page_index + 1)
    else:
        logger.info("No report date found on page %d", page_index + 1)
    return date
