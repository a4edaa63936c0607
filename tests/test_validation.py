# SPDX-License-Identifier: Apache-2.0
"""Tests for input validation."""

from __future__ import annotations

import pytest

from pdf_rebrand.core.models import BrandingRequest, LogoImage
from pdf_rebrand.errors import InputValidationError
from pdf_rebrand.pipeline.validation import (
    guess_mime_type,
    is_pdf_file,
    is_supported_image,
    validate_request,
)


class TestIsPdfFile:
    """Tests for is_pdf_file."""

    def test_by_mime(self) -> None:
        assert is_pdf_file("upload", "application/pdf") is True

    @pytest.mark.parametrize("filename", ["report.pdf", "REPORT.PDF", "a.b.Pdf"])
    def test_by_suffix(self, filename: str) -> None:
        assert is_pdf_file(filename) is True

    @pytest.mark.parametrize(
        ("filename", "mime_type"),
        [("report.docx", None), ("report.pdf.exe", None), ("logo.png", "image/png")],
    )
    def test_rejected(self, filename: str, mime_type: str | None) -> None:
        assert is_pdf_file(filename, mime_type) is False


class TestIsSupportedImage:
    """Tests for is_supported_image."""

    @pytest.mark.parametrize("mime_type", ["image/png", "image/jpeg", "image/jpg", "IMAGE/PNG"])
    def test_supported(self, mime_type: str) -> None:
        assert is_supported_image(mime_type) is True

    @pytest.mark.parametrize("mime_type", ["image/gif", "image/svg+xml", "application/pdf", "", None])
    def test_unsupported(self, mime_type: str | None) -> None:
        assert is_supported_image(mime_type) is False


class TestGuessMimeType:
    """Tests for guess_mime_type."""

    def test_pdf(self) -> None:
        assert guess_mime_type("report.pdf") == "application/pdf"

    def test_png(self) -> None:
        assert guess_mime_type("logo.png") == "image/png"

    def test_jpeg(self) -> None:
        assert guess_mime_type("logo.jpg") == "image/jpeg"

    def test_unknown(self) -> None:
        assert guess_mime_type("no_extension") is None


class TestValidateRequest:
    """Tests for validate_request."""

    def test_valid(self) -> None:
        validate_request(BrandingRequest(partner_name="Acme AG"))

    def test_valid_with_logo(self) -> None:
        validate_request(
            BrandingRequest(partner_name="Acme AG", logo=LogoImage(b"x", "image/png"))
        )

    @pytest.mark.parametrize("name", ["", "   ", "\t\n"])
    def test_empty_partner(self, name: str) -> None:
        with pytest.raises(InputValidationError, match="Partner name"):
            validate_request(BrandingRequest(partner_name=name))

    def test_unsupported_logo(self) -> None:
        request = BrandingRequest(partner_name="Acme AG", logo=LogoImage(b"x", "image/gif"))
        with pytest.raises(InputValidationError) as exc_info:
            validate_request(request)
        assert exc_info.value.stage == "validate"
