# SPDX-License-Identifier: Apache-2.0
"""Download filename for rebranded reports."""

from __future__ import annotations

import re
from datetime import date
from typing import Optional

FILENAME_PREFIX = "Beweissicherungsbericht"

# Latin letters incl. Latin-1 Supplement and Latin Extended-A/B letters
# (the multiplication and division signs are excluded), digits, whitespace, hyphen
_DISALLOWED = re.compile(r"[^A-Za-z0-9À-ÖØ-öø-ɏ\s-]")
_WHITESPACE = re.compile(r"\s+")


def sanitize_partner_name(name: str) -> str:
    """Drop disallowed characters and join words with underscores.

    Example:
        >>> sanitize_partner_name("Müller & Söhne Bau-AG")
        'Müller_Söhne_Bau-AG'
    """
    kept = _DISALLOWED.sub("", name).strip()
    return _WHITESPACE.sub("_", kept)


def build_output_filename(partner_name: str, today: Optional[date] = None) -> str:
    """Build ``Beweissicherungsbericht_<partner>_<YYYY-MM-DD>.pdf``."""
    day = (today or date.today()).isoformat()
    return f"{FILENAME_PREFIX}_{sanitize_partner_name(partner_name)}_{day}.pdf"
