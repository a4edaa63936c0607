# SPDX-License-Identifier: Apache-2.0
"""Core rebranding operations on a single report."""

from .date_extractor import extract_report_date, find_date
from .document import ReportDocument
from .footer import ensure_encodable, format_footer, rewrite_footers
from .logo import normalize_image_format, place_logo, scale_to_fit
from .masker import fill_layers, mask_region, mask_regions
from .models import (
    BrandingRequest,
    Color,
    FooterLayout,
    LogoBox,
    LogoImage,
    LogoPlacement,
    MaskRegion,
    MaskStrategy,
    PageScope,
    ProcessingResult,
    Region,
    TemplateLayout,
)
from .template import DEFAULT_LAYOUT

__all__ = [
    "BrandingRequest",
    "Color",
    "DEFAULT_LAYOUT",
    "FooterLayout",
    "LogoBox",
    "LogoImage",
    "LogoPlacement",
    "MaskRegion",
    "MaskStrategy",
    "PageScope",
    "ProcessingResult",
    "Region",
    "ReportDocument",
    "TemplateLayout",
    "ensure_encodable",
    "extract_report_date",
    "fill_layers",
    "find_date",
    "format_footer",
    "mask_region",
    "mask_regions",
    "normalize_image_format",
    "place_logo",
    "rewrite_footers",
    "scale_to_fit",
]
