# SPDX-License-Identifier: Apache-2.0
"""Tests for raster flattening of masked regions."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from conftest import count_image_objects, page_pixel

from pdf_rebrand.core.document import ReportDocument
from pdf_rebrand.core.masker import mask_regions
from pdf_rebrand.core.models import MaskRegion, MaskStrategy, PageScope, Region
from pdf_rebrand.core.template import DEFAULT_LAYOUT, HEADER_LOGO, PAGE1_BANNER
from pdf_rebrand.errors import ConfigurationError, FlattenError
from pdf_rebrand.output.flattener import MIN_FLATTEN_SCALE, FlattenStats, RegionFlattener


def _masked(pdf_bytes: bytes) -> bytes:
    with ReportDocument(pdf_bytes) as doc:
        mask_regions(doc, DEFAULT_LAYOUT.mask_regions, MaskStrategy.LAYERED)
        return doc.to_bytes()


class TestRegionFlattenerInit:
    """Tests for RegionFlattener configuration."""

    def test_default_scale(self) -> None:
        assert RegionFlattener().scale == MIN_FLATTEN_SCALE == 3.0

    def test_higher_scale(self) -> None:
        assert RegionFlattener(4.5).scale == 4.5

    @pytest.mark.parametrize("scale", [0.0, 1.0, 2.99])
    def test_scale_below_minimum(self, scale: float) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            RegionFlattener(scale)
        assert exc_info.value.stage == "config"


class TestFlatten:
    """Tests for flatten()."""

    def test_flattens_scoped_regions(self, report_pdf: bytes) -> None:
        """Banner on the title page and header logo on pages 2+ become images."""
        output, stats = RegionFlattener().flatten(_masked(report_pdf), DEFAULT_LAYOUT.mask_regions)

        assert stats == FlattenStats(flattened=3, skipped=0)
        for page_index in range(3):
            assert count_image_objects(output, page_index) == 1

    def test_flattened_area_stays_white(self, report_pdf: bytes) -> None:
        output, _ = RegionFlattener().flatten(_masked(report_pdf), DEFAULT_LAYOUT.mask_regions)

        assert page_pixel(output, 0, 540, 450) == (255, 255, 255)
        assert page_pixel(output, 1, 565, 810) == (255, 255, 255)

    def test_no_flatten_regions(self, report_pdf: bytes) -> None:
        """Input without flatten-marked regions is returned unchanged."""
        regions = [MaskRegion("footer", Region(56, 18, 330, 16), PageScope.FOLLOWING)]
        output, stats = RegionFlattener().flatten(report_pdf, regions)

        assert output is report_pdf
        assert stats == FlattenStats()

    def test_scope_without_pages(self, single_page_pdf: bytes) -> None:
        """Header logo has no pages to flatten in a one-page document."""
        _, stats = RegionFlattener().flatten(single_page_pdf, [HEADER_LOGO])
        assert stats.flattened == 0

    def test_render_failure_skipped(self, report_pdf: bytes) -> None:
        """A region that fails to render is skipped, others still flatten."""
        original = ReportDocument.render_region

        def flaky(self: ReportDocument, page_index: int, region: Region, scale: float) -> object:
            if page_index == 0:
                raise RuntimeError("render failed")
            return original(self, page_index, region, scale)

        with patch.object(ReportDocument, "render_region", flaky):
            output, stats = RegionFlattener().flatten(report_pdf, [PAGE1_BANNER, HEADER_LOGO])

        assert stats == FlattenStats(flattened=2, skipped=1)
        assert count_image_objects(output, 0) == 0

    def test_unreadable_input(self) -> None:
        with pytest.raises(FlattenError):
            RegionFlattener().flatten(b"not a pdf", [PAGE1_BANNER])
