# SPDX-License-Identifier: Apache-2.0
"""Opaque white masking of fixed branding regions.

Masks are vector fills appended to the page content stream. Several
slightly larger fills are stacked under the exact-size fill so that a
click inside the region in a PDF editor hits solid color on more than one
layer. This raises the effort of removing the mask by hand; it does not
protect the covered content, which is still present in the content stream
underneath. RASTER strategy adds flattening on top (see
``pdf_rebrand.output.flattener``).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .document import ReportDocument
from .models import WHITE, MaskRegion, MaskStrategy, Region

logger = logging.getLogger(__name__)

# Outward margins (points) of the fills drawn before the exact fill
LAYER_MARGINS: tuple[float, ...] = (3.0, 2.0, 1.0)


def fill_layers(region: Region, strategy: MaskStrategy) -> list[Region]:
    """Return the rectangles to fill for ``region``, outermost first.

    The last rectangle is always the exact region.
    """
    if strategy is MaskStrategy.FILL:
        return [region]
    return [region.expanded(margin) for margin in LAYER_MARGINS] + [region]


def mask_region(
    document: ReportDocument,
    page_index: int,
    region: Region,
    strategy: MaskStrategy = MaskStrategy.LAYERED,
) -> int:
    """Cover ``region`` on one page with opaque white.

    Returns:
        Number of fills drawn.
    """
    layers = fill_layers(region, strategy)
    for layer in layers:
        document.fill_rect(page_index, layer, WHITE)
    return len(layers)


def mask_regions(
    document: ReportDocument,
    regions: Iterable[MaskRegion],
    strategy: MaskStrategy = MaskStrategy.LAYERED,
) -> int:
    """Apply every mask region to the pages its scope selects.

    Returns:
        Total number of fills drawn.
    """
    page_count = document.page_count
    drawn = 0
    for mask in regions:
        pages = mask.scope.page_indices(page_count)
        for page_index in pages:
            drawn += mask_region(document, page_index, mask.region, strategy)
        logger.debug("Masked %s on %d page(s)", mask.name, len(pages))
    return drawn
