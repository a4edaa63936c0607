# SPDX-License-Identifier: Apache-2.0
"""Tests for output filename building."""

from __future__ import annotations

import re
from datetime import date

import pytest

from pdf_rebrand.output.filename import (
    FILENAME_PREFIX,
    build_output_filename,
    sanitize_partner_name,
)

ALLOWED = re.compile(r"^[A-Za-z0-9À-ÖØ-öø-ɏ_-]*$")


class TestSanitizePartnerName:
    """Tests for sanitize_partner_name."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Acme AG", "Acme_AG"),
            ("Müller & Söhne Bau-AG", "Müller_Söhne_Bau-AG"),
            ("  Acme   AG  ", "Acme_AG"),
            ("Acme/../AG", "AcmeAG"),
            ("Åse Øvrebø", "Åse_Øvrebø"),
            ("Łódź GmbH", "Łódź_GmbH"),
            ("A×B÷C", "ABC"),
            ("***", ""),
        ],
    )
    def test_sanitize(self, name: str, expected: str) -> None:
        assert sanitize_partner_name(name) == expected

    @pytest.mark.parametrize(
        "name",
        ["Acme AG", 'a<b>c:"d|e?f*g', "Firma\tmit\nUmbruch", "emoji 🚀 Partner", "日本 Partner"],
    )
    def test_only_allowed_characters(self, name: str) -> None:
        """Output never contains path separators, spaces or other symbols."""
        assert ALLOWED.match(sanitize_partner_name(name))


class TestBuildOutputFilename:
    """Tests for build_output_filename."""

    def test_format(self) -> None:
        filename = build_output_filename("Müller Bau AG", date(2024, 3, 5))
        assert filename == "Beweissicherungsbericht_Müller_Bau_AG_2024-03-05.pdf"

    def test_prefix(self) -> None:
        assert build_output_filename("X", date(2024, 1, 1)).startswith(FILENAME_PREFIX + "_")

    def test_defaults_to_today(self) -> None:
        filename = build_output_filename("Acme AG")
        assert filename.endswith(f"_{date.today().isoformat()}.pdf")
