# SPDX-License-Identifier: Apache-2.0
"""Document metadata rewrite using pikepdf.

Both the Info dictionary and, where the input carries one, the XMP
metadata stream are rewritten. Viewers that prefer XMP would otherwise
still show the original brand.
"""

from __future__ import annotations

import logging
from io import BytesIO

import pikepdf  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

DEFAULT_TITLE_PREFIX = "Beweissicherungsbericht"

# Info dictionary key -> XMP property carrying the same value
XMP_PROPERTIES = {
    "/Title": "dc:title",
    "/Producer": "pdf:Producer",
    "/Creator": "xmp:CreatorTool",
}


def branding_metadata(partner_name: str, title_prefix: str = DEFAULT_TITLE_PREFIX) -> dict[str, str]:
    """Info dictionary entries derived from the partner name."""
    return {
        "/Title": f"{title_prefix} {partner_name}".strip(),
        "/Producer": partner_name,
        "/Creator": partner_name,
    }


def apply_branding_metadata(
    pdf_bytes: bytes,
    partner_name: str,
    title_prefix: str = DEFAULT_TITLE_PREFIX,
) -> bytes:
    """Set Title, Producer and Creator to partner-derived strings.

    Args:
        pdf_bytes: PDF to update.
        partner_name: Partner name to write.
        title_prefix: Text placed before the partner name in the title.

    Returns:
        Updated PDF as bytes.
    """
    pdf = pikepdf.open(BytesIO(pdf_bytes))
    try:
        entries = branding_metadata(partner_name, title_prefix)
        if "/Metadata" in pdf.Root:
            with pdf.open_metadata(set_pikepdf_as_editor=False) as meta:
                for key, prop in XMP_PROPERTIES.items():
                    meta[prop] = entries[key]
            logger.debug("Updated XMP metadata")

        # Written after the XMP block, which mirrors its values into docinfo
        for key, value in entries.items():
            pdf.docinfo[key] = pikepdf.String(value)

        output = BytesIO()
        pdf.save(output)
        logger.debug("Updated document info: %s", entries)
        return output.getvalue()
    finally:
        pdf.close()


def read_metadata(pdf_bytes: bytes) -> dict[str, str]:
    """Read the Info dictionary as plain strings."""
    with pikepdf.open(BytesIO(pdf_bytes)) as pdf:
        return {str(key): str(value) for key, value in pdf.docinfo.items()}


def read_xmp_metadata(pdf_bytes: bytes) -> dict[str, str]:
    """Read the branding-related XMP properties (empty without XMP)."""
    with pikepdf.open(BytesIO(pdf_bytes)) as pdf:
        if "/Metadata" not in pdf.Root:
            return {}
        meta = pdf.open_metadata()
        return {prop: str(meta[prop]) for prop in XMP_PROPERTIES.values() if prop in meta}
