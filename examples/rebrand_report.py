#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
"""Example: rebrand an evidence report for a partner

Shows the basic use of pdf-rebrand. Change the settings below to try the
different masking strategies, the debug overlay or the remote service.

Usage:
    cd examples
    python rebrand_report.py

Environment variables (read from .env automatically):
    PDF_REBRAND_SERVICE_URL: Required when USE_REMOTE is True
"""

from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv

if TYPE_CHECKING:
    from pdf_rebrand.core.models import LogoImage

# Add the project to the path (for development)
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

# Load .env file from project root (service URL)
load_dotenv(PROJECT_ROOT / ".env")


# =============================================================================
# Settings - change these to customize the run
# =============================================================================

# Partner the report is rebranded for
PARTNER_NAME = "Müller Bau AG"

# Partner logo (PNG or JPEG), None to skip the logo
LOGO_PATH: Path | None = Path(__file__).parent / "partner_logo.png"

# Masking strategy: "fill" | "layered" | "raster"
# - fill: one vector rectangle per region
# - layered: overlapping rectangles with shrinking margins
# - raster: layered, then banner/logo regions are flattened to images (recommended)
MASK_STRATEGY = "raster"

# Debug: outline the template regions on every page
DEBUG_DRAW_REGIONS = False

# Use the remote rebranding service instead of local processing
USE_REMOTE = False

# Input/output paths
INPUT_PDF = Path(__file__).parent / "sample_report.pdf"
OUTPUT_DIR = Path(__file__).parent / "outputs"

# =============================================================================
# Main (usually no changes needed)
# =============================================================================


def load_logo() -> LogoImage | None:
    """Read the configured logo, if any."""
    from pdf_rebrand.core.models import LogoImage
    from pdf_rebrand.pipeline.validation import guess_mime_type

    if LOGO_PATH is None or not LOGO_PATH.exists():
        return None
    return LogoImage(data=LOGO_PATH.read_bytes(), mime_type=guess_mime_type(LOGO_PATH) or "")


async def main() -> None:
    """Run the example."""
    from pdf_rebrand.core.models import BrandingRequest, MaskStrategy
    from pdf_rebrand.output.filename import build_output_filename
    from pdf_rebrand.pipeline.rebrand_pipeline import PipelineConfig, RebrandPipeline

    if not INPUT_PDF.exists():
        print(f"Error: Input PDF not found: {INPUT_PDF}")
        sys.exit(1)

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    request = BrandingRequest(partner_name=PARTNER_NAME, logo=load_logo())
    output_pdf = OUTPUT_DIR / build_output_filename(PARTNER_NAME)

    print("=" * 60)
    print("PDF Rebranding Example")
    print("=" * 60)
    print(f"Input:       {INPUT_PDF}")
    print(f"Output:      {output_pdf}")
    print(f"Partner:     {PARTNER_NAME}")
    print(f"Logo:        {LOGO_PATH if request.logo else '-'}")
    print(f"Mode:        {'remote' if USE_REMOTE else MASK_STRATEGY}")
    print(f"Debug:       {DEBUG_DRAW_REGIONS}")
    print("=" * 60)

    if USE_REMOTE:
        from pdf_rebrand.remote import RemoteRebrandClient

        service_url = os.environ.get("PDF_REBRAND_SERVICE_URL")
        if not service_url:
            print("Error: PDF_REBRAND_SERVICE_URL environment variable is not set")
            sys.exit(1)

        print("\nSending PDF to rebranding service...")
        async with RemoteRebrandClient(service_url) as client:
            pdf_bytes = await client.rebrand(INPUT_PDF.read_bytes(), request)
        output_pdf.write_bytes(pdf_bytes)
    else:
        config = PipelineConfig(
            mask_strategy=MaskStrategy(MASK_STRATEGY),
            debug_draw_regions=DEBUG_DRAW_REGIONS,
        )
        pipeline = RebrandPipeline(config=config)

        print("\nRebranding PDF...")
        result = await pipeline.process(INPUT_PDF, request, output_pdf)

        print("\n" + "=" * 60)
        print("Rebranding Complete!")
        print("=" * 60)
        print(f"Report date:       {result.extracted_date or '(not found)'}")
        print(f"Footers rewritten: {result.stats['footer_pages']}")
        print(f"Flattened regions: {result.stats['flattened_regions']}")

    print(f"Output file:       {output_pdf}")
    print(f"File size:         {output_pdf.stat().st_size / 1024:.1f} KB")
    print("\nDone!")


if __name__ == "__main__":
    asyncio.run(main())
