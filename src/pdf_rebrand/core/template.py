# SPDX-License-Identifier: Apache-2.0
"""Fixed positions of the evidence report template.

All coordinates are PDF points on an A4 page (595 x 842), origin at the
bottom-left corner. They are tuned by hand against the current template
revision; a changed layout invalidates them without any error. Use
``rebrand-pdf --debug`` to draw them onto a document when re-tuning.
"""

from __future__ import annotations

from .models import (
    FooterLayout,
    LogoBox,
    MaskRegion,
    PageScope,
    Region,
    TemplateLayout,
)

# A4 page dimensions in points
PAGE_WIDTH = 595.0
PAGE_HEIGHT = 842.0

# Title page: right-hand banner over the full page height
# (brand logo, business units, addresses, certification logo)
PAGE1_BANNER = MaskRegion(
    name="page1_banner",
    region=Region(x=496, y=0, width=99, height=842),
    scope=PageScope.FIRST,
    flatten=True,
)

# Pages 2+: brand logo in the top-right corner
HEADER_LOGO = MaskRegion(
    name="header_logo",
    region=Region(x=533, y=782, width=62, height=60),
    scope=PageScope.FOLLOWING,
    flatten=True,
)

# Pages 2+: "<brand>, <date>" footer line
FOOTER_REGION = Region(x=56, y=18, width=330, height=16)

PARTNER_LOGO_BOX = LogoBox(x=57, y=750, max_width=150, max_height=60)

FOOTER_LAYOUT = FooterLayout(
    region=FOOTER_REGION,
    baseline_x=57,
    baseline_y=22,
    font_size=8.0,
)

# Brand name printed in front of the date in the original footer
ORIGINAL_BRAND_LABEL = "HMQ AG"

DEFAULT_LAYOUT = TemplateLayout(
    mask_regions=(PAGE1_BANNER, HEADER_LOGO),
    logo_box=PARTNER_LOGO_BOX,
    footer=FOOTER_LAYOUT,
    date_page_index=1,
    date_anchor_label=ORIGINAL_BRAND_LABEL,
)
