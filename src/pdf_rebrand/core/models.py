# SPDX-License-Identifier: Apache-2.0
"""Data models for template regions and branding requests.

All geometry uses the PDF coordinate system: units are points (1/72 inch)
and the origin is the bottom-left corner of the page.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class PageScope(str, Enum):
    """Pages a region applies to."""

    FIRST = "first"  # title page only
    FOLLOWING = "following"  # every page after the title page
    ALL = "all"

    def includes(self, page_index: int) -> bool:
        """Check whether a 0-based page index falls into this scope."""
        if self is PageScope.FIRST:
            return page_index == 0
        if self is PageScope.FOLLOWING:
            return page_index >= 1
        return page_index >= 0

    def page_indices(self, page_count: int) -> list[int]:
        """Return the page indices of a document covered by this scope."""
        return [i for i in range(page_count) if self.includes(i)]


class MaskStrategy(str, Enum):
    """How branding regions are covered.

    FILL: a single exact white fill.
    LAYERED: several slightly larger fills under the exact fill.
    RASTER: LAYERED, then flagged regions are re-rendered as images.
    """

    FILL = "fill"
    LAYERED = "layered"
    RASTER = "raster"


@dataclass(frozen=True)
class Region:
    """Rectangle in page space.

    Attributes:
        x: Left X coordinate
        y: Bottom Y coordinate
        width: Width in points
        height: Height in points
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def x1(self) -> float:
        """Right X coordinate."""
        return self.x + self.width

    @property
    def y1(self) -> float:
        """Top Y coordinate."""
        return self.y + self.height

    def expanded(self, margin: float) -> Region:
        """Grow the region by ``margin`` points on every side."""
        return Region(
            x=self.x - margin,
            y=self.y - margin,
            width=self.width + 2 * margin,
            height=self.height + 2 * margin,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Region:
        """Create from dictionary."""
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            width=float(data["width"]),
            height=float(data["height"]),
        )


@dataclass(frozen=True)
class Color:
    """RGB color value.

    Attributes:
        r: Red component (0-255)
        g: Green component (0-255)
        b: Blue component (0-255)
    """

    r: int = 0
    g: int = 0
    b: int = 0


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)


@dataclass(frozen=True)
class MaskRegion:
    """A named region to cover on the pages selected by ``scope``.

    Attributes:
        name: Identifier used in logs and debug labels.
        region: Rectangle to cover.
        scope: Pages the region applies to.
        flatten: Re-render the region as an image when the strategy is RASTER.
    """

    name: str
    region: Region
    scope: PageScope
    flatten: bool = False


@dataclass(frozen=True)
class LogoBox:
    """Anchor (bottom-left) and bounding box for the partner logo."""

    x: float
    y: float
    max_width: float
    max_height: float


@dataclass(frozen=True)
class LogoPlacement:
    """Final logo rectangle after scale-to-fit."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class FooterLayout:
    """Footer rectangle and text position on every non-title page.

    Attributes:
        region: Rectangle masked before the new footer is drawn.
        baseline_x: X position of the partner name.
        baseline_y: Baseline of the footer text.
        font_size: Footer font size in points.
        color: Footer text color.
        bold_font: Standard font used for the partner name.
        regular_font: Standard font used for the date suffix.
        separator: Text placed between name and date.
        bold_font_path: TrueType font replacing ``bold_font`` (names outside
            WinAnsi need one).
        regular_font_path: TrueType font replacing ``regular_font``.
    """

    region: Region
    baseline_x: float
    baseline_y: float
    font_size: float = 8.0
    color: Color = BLACK
    bold_font: str = "Helvetica-Bold"
    regular_font: str = "Helvetica"
    separator: str = ", "
    bold_font_path: Optional[Path] = None
    regular_font_path: Optional[Path] = None


@dataclass(frozen=True)
class TemplateLayout:
    """Every fixed position of one report template.

    Attributes:
        mask_regions: Branding regions to cover.
        logo_box: Where the partner logo goes on the title page.
        footer: Footer rewrite layout for pages after the title page.
        date_page_index: Page whose text layer carries the footer date.
        date_anchor_label: Text that precedes the date in the original footer.
    """

    mask_regions: tuple[MaskRegion, ...]
    logo_box: LogoBox
    footer: FooterLayout
    date_page_index: int = 1
    date_anchor_label: Optional[str] = None


@dataclass
class LogoImage:
    """Uploaded logo: raw bytes and declared MIME type."""

    data: bytes
    mime_type: str


@dataclass
class BrandingRequest:
    """User input for one conversion.

    Attributes:
        partner_name: Name drawn in the footer and metadata (non-empty).
        logo: Optional partner logo for the title page.
        report_date: Footer date override; extracted from the PDF when None.
    """

    partner_name: str
    logo: Optional[LogoImage] = None
    report_date: Optional[str] = None


@dataclass
class ProcessingResult:
    """Rebranding result."""

    pdf_bytes: bytes
    filename: str
    extracted_date: str = ""
    stats: dict[str, Any] = field(default_factory=dict)
