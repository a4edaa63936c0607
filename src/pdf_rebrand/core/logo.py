# SPDX-License-Identifier: Apache-2.0
"""Partner logo placement on the title page."""

from __future__ import annotations

import logging
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from pdf_rebrand.errors import LogoError, UnsupportedImageFormatError

from .document import ReportDocument
from .models import LogoBox, LogoImage, LogoPlacement

logger = logging.getLogger(__name__)

# Declared MIME type -> embedding format
IMAGE_FORMATS: dict[str, str] = {
    "image/png": "png",
    "image/jpeg": "jpeg",
    "image/jpg": "jpeg",
}


def normalize_image_format(mime_type: str) -> str:
    """Map a declared MIME type to "png" or "jpeg".

    Raises:
        UnsupportedImageFormatError: For any other type.
    """
    fmt = IMAGE_FORMATS.get((mime_type or "").strip().lower())
    if fmt is None:
        raise UnsupportedImageFormatError(f"Unsupported image format: {mime_type!r}")
    return fmt


def scale_to_fit(original_width: float, original_height: float, box: LogoBox) -> LogoPlacement:
    """Scale an image into ``box`` keeping its aspect ratio.

    The result touches the box on at least one dimension and is anchored
    at the box's bottom-left corner.

    Raises:
        LogoError: If the image has no area.
    """
    if original_width <= 0 or original_height <= 0:
        raise LogoError(
            f"Invalid logo dimensions: {original_width}x{original_height}"
        )

    scale = min(box.max_width / original_width, box.max_height / original_height)
    return LogoPlacement(
        x=box.x,
        y=box.y,
        width=original_width * scale,
        height=original_height * scale,
    )


def _open_image(data: bytes) -> Image.Image:
    try:
        image = Image.open(BytesIO(data))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise LogoError("Could not process logo", cause=e) from e
    return image


def _bitmap_ready(image: Image.Image) -> Image.Image:
    """Convert to a mode PDFium bitmaps accept (RGB, or RGBA if transparent)."""
    has_alpha = image.mode in ("RGBA", "LA") or (
        image.mode == "P" and "transparency" in image.info
    )
    target = "RGBA" if has_alpha else "RGB"
    return image if image.mode == target else image.convert(target)


def place_logo(
    document: ReportDocument,
    page_index: int,
    logo: LogoImage,
    box: LogoBox,
) -> LogoPlacement:
    """Embed the partner logo scaled into ``box``.

    Args:
        document: Open report.
        page_index: Page to draw on (the title page).
        logo: Logo bytes and declared MIME type.
        box: Anchor and maximum size.

    Returns:
        The rectangle the logo was drawn into.

    Raises:
        UnsupportedImageFormatError: MIME type is not PNG/JPEG.
        LogoError: Bytes cannot be decoded or embedded.
    """
    fmt = normalize_image_format(logo.mime_type)
    image = _open_image(logo.data)
    placement = scale_to_fit(image.width, image.height, box)

    try:
        if fmt == "jpeg" and image.format == "JPEG":
            document.insert_image(page_index, placement, jpeg_data=logo.data)
        else:
            # Declared type and content disagree, or PNG: embed decoded pixels
            document.insert_image(page_index, placement, pil_image=_bitmap_ready(image))
    except (IndexError, LogoError):
        raise
    except Exception as e:
        raise LogoError("Could not process logo", cause=e) from e

    logger.info(
        "Placed %s logo %dx%d px at (%.1f, %.1f) size %.1fx%.1f pt",
        fmt,
        image.width,
        image.height,
        placement.x,
        placement.y,
        placement.width,
        placement.height,
    )
    return placement
