# SPDX-License-Identifier: Apache-2.0
"""Input checks done before any processing starts.

Both checks look at declared MIME types and file names only; the content
is not sniffed.
"""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Optional, Union

from pdf_rebrand.core.models import BrandingRequest
from pdf_rebrand.errors import InputValidationError

PDF_MIME_TYPE = "application/pdf"
SUPPORTED_IMAGE_MIME_TYPES = frozenset({"image/png", "image/jpeg", "image/jpg"})


def is_pdf_file(filename: str, mime_type: Optional[str] = None) -> bool:
    """Accept a PDF by MIME type or by ``.pdf`` file name suffix."""
    return mime_type == PDF_MIME_TYPE or filename.lower().endswith(".pdf")


def is_supported_image(mime_type: Optional[str]) -> bool:
    """Accept PNG and JPEG logos."""
    return (mime_type or "").lower() in SUPPORTED_IMAGE_MIME_TYPES


def guess_mime_type(path: Union[Path, str]) -> Optional[str]:
    """Guess a MIME type from the file name."""
    mime_type, _ = mimetypes.guess_type(str(path))
    return mime_type


def validate_request(request: BrandingRequest) -> None:
    """Check a branding request before the pipeline touches the document.

    Raises:
        InputValidationError: Empty partner name or unsupported logo type.
    """
    if not request.partner_name or not request.partner_name.strip():
        raise InputValidationError("Partner name is required")
    if request.logo is not None and not is_supported_image(request.logo.mime_type):
        raise InputValidationError(
            f"Logo must be a PNG or JPEG image, got {request.logo.mime_type!r}"
        )
