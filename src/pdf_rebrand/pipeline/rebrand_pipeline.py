# SPDX-License-Identifier: Apache-2.0
"""Rebranding pipeline implementation."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Optional

from pdf_rebrand.core.date_extractor import extract_report_date
from pdf_rebrand.core.document import ReportDocument
from pdf_rebrand.core.footer import rewrite_footers
from pdf_rebrand.core.logo import place_logo
from pdf_rebrand.core.masker import mask_regions
from pdf_rebrand.core.models import (
    BrandingRequest,
    Color,
    MaskStrategy,
    ProcessingResult,
    Region,
    TemplateLayout,
)
from pdf_rebrand.core.template import DEFAULT_LAYOUT
from pdf_rebrand.errors import InputValidationError, PipelineError, StructuralError
from pdf_rebrand.output.filename import build_output_filename
from pdf_rebrand.output.flattener import MIN_FLATTEN_SCALE, RegionFlattener
from pdf_rebrand.output.metadata import DEFAULT_TITLE_PREFIX, apply_branding_metadata
from pdf_rebrand.pipeline.progress import ProgressCallback
from pdf_rebrand.pipeline.validation import validate_request

logger = logging.getLogger(__name__)

# Debug outline colors (R, G, B)
DEBUG_MASK_COLOR = Color(255, 0, 0)
DEBUG_LOGO_COLOR = Color(0, 128, 255)
DEBUG_FOOTER_COLOR = Color(0, 160, 0)


@dataclass
class PipelineConfig:
    """Rebranding pipeline configuration."""

    layout: TemplateLayout = DEFAULT_LAYOUT
    mask_strategy: MaskStrategy = MaskStrategy.RASTER

    # Render scale for RASTER flattening (relative to 72 DPI, >= 3)
    flatten_scale: float = MIN_FLATTEN_SCALE

    title_prefix: str = DEFAULT_TITLE_PREFIX

    # Debug options
    debug_draw_regions: bool = False


class RebrandPipeline:
    """PDF rebranding pipeline.

    Stages run strictly one after another on a private copy of the input.
    Any failure aborts the run; no partial output is returned or written.
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        """Initialize RebrandPipeline.

        Raises:
            ConfigurationError: If the flatten scale is invalid.
        """
        self._config = config or PipelineConfig()
        self._progress_callback = progress_callback
        self._flattener = RegionFlattener(self._config.flatten_scale)

    @property
    def config(self) -> PipelineConfig:
        return self._config

    async def process(
        self,
        pdf_source: Path | str | bytes,
        request: BrandingRequest,
        output_path: Path | None = None,
        today: Optional[date] = None,
    ) -> ProcessingResult:
        """Rebrand a PDF from path or bytes.

        The pdfium and pikepdf stages are blocking and run one at a time in
        a worker thread, so the event loop keeps serving other tasks between
        and during stages. Progress callbacks are invoked from that thread.

        Args:
            pdf_source: Input PDF path or bytes (never modified).
            request: Partner name, optional logo and optional date override.
            output_path: Also write the result here on success.
            today: Date used in the output filename (default: today).

        Raises:
            InputValidationError: Invalid request or missing input file.
            StructuralError: Unreadable or empty document.
            LogoError: Logo cannot be processed.
            PipelineError: Any other stage failure.
        """
        validate_request(request)
        partner_name = request.partner_name.strip()

        if isinstance(pdf_source, bytes):
            pdf_bytes = pdf_source
        else:
            path = Path(pdf_source)
            if not path.is_file():
                raise InputValidationError(f"PDF file not found: {path}")
            pdf_bytes = await asyncio.to_thread(path.read_bytes)

        document = await asyncio.to_thread(self._stage_load, pdf_bytes)
        with document:
            report_date = await asyncio.to_thread(self._stage_extract, pdf_bytes, request)
            stats = await asyncio.to_thread(
                self._stage_draw, document, request, partner_name, report_date
            )
            output = await asyncio.to_thread(self._stage_save, document)

        output, flatten_stats = await asyncio.to_thread(self._stage_flatten, output)
        stats.update(flatten_stats)
        output = await asyncio.to_thread(self._stage_metadata, output, partner_name)
        logger.info(
            "Rebranded %d page(s) for %r (date=%s, strategy=%s)",
            stats["pages"],
            partner_name,
            report_date or "-",
            stats["mask_strategy"],
        )

        if output_path is not None:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            await asyncio.to_thread(output_path.write_bytes, output)

        return ProcessingResult(
            pdf_bytes=output,
            filename=build_output_filename(partner_name, today),
            extracted_date=report_date,
            stats=stats,
        )

    def _stage_load(self, pdf_bytes: bytes) -> ReportDocument:
        try:
            document = ReportDocument(pdf_bytes)
        except Exception as exc:
            raise StructuralError("Could not open PDF document", cause=exc) from exc

        if document.page_count == 0:
            document.close()
            raise StructuralError("PDF document has no pages")

        self._notify("load", document.page_count, document.page_count)
        return document

    def _stage_extract(self, pdf_bytes: bytes, request: BrandingRequest) -> str:
        if request.report_date is not None:
            self._notify("extract", 1, 1, "date given")
            return request.report_date.strip()

        layout = self._config.layout
        report_date = extract_report_date(
            pdf_bytes,
            page_index=layout.date_page_index,
            anchor_label=layout.date_anchor_label,
        )
        self._notify("extract", 1, 1, report_date)
        return report_date

    def _stage_draw(
        self,
        document: ReportDocument,
        request: BrandingRequest,
        partner_name: str,
        report_date: str,
    ) -> dict[str, Any]:
        layout = self._config.layout
        strategy = self._config.mask_strategy

        try:
            fills = mask_regions(document, layout.mask_regions, strategy)
        except Exception as exc:
            raise PipelineError("Masking failed", stage="mask", cause=exc) from exc
        self._notify("mask", fills, fills)

        logo_placed = False
        if request.logo is not None:
            # LogoError propagates unchanged
            place_logo(document, 0, request.logo, layout.logo_box)
            logo_placed = True
        self._notify("logo", int(logo_placed), 1)

        try:
            footer_pages = rewrite_footers(
                document, layout.footer, partner_name, report_date, strategy
            )
        except PipelineError:
            raise
        except Exception as exc:
            raise PipelineError("Footer rewrite failed", stage="footer", cause=exc) from exc
        self._notify("footer", footer_pages, footer_pages)

        if self._config.debug_draw_regions:
            self._draw_debug_overlay(document)

        return {
            "pages": document.page_count,
            "mask_strategy": strategy.value,
            "mask_fills": fills,
            "logo_placed": logo_placed,
            "footer_pages": footer_pages,
            "report_date": report_date,
        }

    def _stage_save(self, document: ReportDocument) -> bytes:
        try:
            output = document.to_bytes()
        except Exception as exc:
            raise PipelineError("Could not save PDF", stage="save", cause=exc) from exc
        self._notify("save", 1, 1)
        return output

    def _stage_flatten(self, pdf_bytes: bytes) -> tuple[bytes, dict[str, int]]:
        if self._config.mask_strategy is not MaskStrategy.RASTER:
            return pdf_bytes, {"flattened_regions": 0, "flatten_skipped": 0}

        output, flatten_stats = self._flattener.flatten(
            pdf_bytes, self._config.layout.mask_regions
        )
        total = flatten_stats.flattened + flatten_stats.skipped
        self._notify("flatten", flatten_stats.flattened, total)
        return output, {
            "flattened_regions": flatten_stats.flattened,
            "flatten_skipped": flatten_stats.skipped,
        }

    def _stage_metadata(self, pdf_bytes: bytes, partner_name: str) -> bytes:
        try:
            output = apply_branding_metadata(
                pdf_bytes, partner_name, self._config.title_prefix
            )
        except Exception as exc:
            raise PipelineError("Could not write metadata", stage="metadata", cause=exc) from exc
        self._notify("metadata", 1, 1)
        return output

    def _draw_debug_overlay(self, document: ReportDocument) -> None:
        layout = self._config.layout
        page_count = document.page_count

        for mask in layout.mask_regions:
            for page_index in mask.scope.page_indices(page_count):
                document.draw_outline(page_index, mask.region, DEBUG_MASK_COLOR, mask.name)

        box = layout.logo_box
        document.draw_outline(
            0,
            Region(box.x, box.y, box.max_width, box.max_height),
            DEBUG_LOGO_COLOR,
            "partner_logo",
        )
        for page_index in range(1, page_count):
            document.draw_outline(
                page_index, layout.footer.region, DEBUG_FOOTER_COLOR, "footer"
            )

    def _notify(self, stage: str, current: int, total: int, message: str = "") -> None:
        if self._progress_callback is None:
            return
        self._progress_callback(stage, current, total, message)
