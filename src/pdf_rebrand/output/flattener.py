# SPDX-License-Identifier: Apache-2.0
"""Raster flattening of masked regions.

A white vector rectangle can be deleted with any content-stream editor.
Rendering the masked area and drawing the resulting pixels back over it
turns the cover into image data: removing it now requires re-rendering
the page rather than deleting a single path operator.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from pdf_rebrand.core.document import ReportDocument
from pdf_rebrand.core.models import MaskRegion
from pdf_rebrand.errors import ConfigurationError, FlattenError

logger = logging.getLogger(__name__)

MIN_FLATTEN_SCALE = 3.0


@dataclass
class FlattenStats:
    """Outcome of one flattening pass."""

    flattened: int = 0
    skipped: int = 0


class RegionFlattener:
    """Re-render selected regions of a saved PDF as embedded images.

    Uses pypdfium2 for rendering, like the page thumbnails: the region is
    rendered cropped at ``scale`` times 72 DPI and drawn back in place.
    """

    def __init__(self, scale: float = MIN_FLATTEN_SCALE) -> None:
        """Initialize RegionFlattener.

        Args:
            scale: Render scale relative to 72 DPI (at least 3).

        Raises:
            ConfigurationError: If scale is below 3.
        """
        if scale < MIN_FLATTEN_SCALE:
            raise ConfigurationError(
                f"Flatten scale must be at least {MIN_FLATTEN_SCALE}, got {scale}"
            )
        self._scale = scale

    @property
    def scale(self) -> float:
        return self._scale

    def flatten(
        self, pdf_bytes: bytes, regions: Iterable[MaskRegion]
    ) -> tuple[bytes, FlattenStats]:
        """Flatten every region marked ``flatten`` on the pages in its scope.

        A region that fails to render is logged and skipped; its vector
        fill remains as the cover.

        Args:
            pdf_bytes: Saved output of the drawing stages.
            regions: Candidate regions; only ``flatten=True`` ones are used.

        Returns:
            Tuple of (new PDF bytes, stats).

        Raises:
            FlattenError: If the document cannot be reopened or saved.
        """
        targets = [r for r in regions if r.flatten]
        stats = FlattenStats()
        if not targets:
            return pdf_bytes, stats

        try:
            document = ReportDocument(pdf_bytes)
        except Exception as e:
            raise FlattenError("Could not reopen output for flattening", cause=e) from e

        with document:
            page_count = document.page_count
            for mask in targets:
                for page_index in mask.scope.page_indices(page_count):
                    if self._flatten_one(document, page_index, mask):
                        stats.flattened += 1
                    else:
                        stats.skipped += 1

            try:
                output = document.to_bytes()
            except Exception as e:
                raise FlattenError("Could not save flattened output", cause=e) from e

        logger.info(
            "Flattened %d region(s) at %.1fx, skipped %d",
            stats.flattened,
            self._scale,
            stats.skipped,
        )
        return output, stats

    def _flatten_one(
        self, document: ReportDocument, page_index: int, mask: MaskRegion
    ) -> bool:
        try:
            bitmap = document.render_region(page_index, mask.region, self._scale)
            document.insert_bitmap(page_index, mask.region, bitmap)
        except Exception as e:
            logger.warning(
                "Failed to flatten %s on page %d, keeping vector fill: %s",
                mask.name,
                page_index + 1,
                e,
            )
            return False
        return True
