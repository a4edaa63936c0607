# SPDX-License-Identifier: Apache-2.0
"""
PDF Rebrand - CLI Tool

Rebrands an evidence report for a partner: covers the original branding,
places the partner logo and rewrites the footer with the partner name and
the report date.

Usage:
    rebrand-pdf <input.pdf> --partner NAME [options]

Examples:
    rebrand-pdf report.pdf --partner "Müller Bau AG"
    rebrand-pdf report.pdf -p "Müller Bau AG" --logo logo.png
    rebrand-pdf report.pdf -p "Müller Bau AG" --strategy layered
    rebrand-pdf report.pdf -p "Łódź Bau Sp." --font DejaVuSans.ttf
    rebrand-pdf report.pdf -p "Müller Bau AG" --remote
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
from datetime import date
from pathlib import Path
from typing import NoReturn, Optional

from pdf_rebrand.config import SERVICE_URL_ENV, load_service_url
from pdf_rebrand.core.models import (
    BrandingRequest,
    LogoImage,
    MaskStrategy,
    ProcessingResult,
    TemplateLayout,
)
from pdf_rebrand.core.template import DEFAULT_LAYOUT
from pdf_rebrand.errors import PipelineError
from pdf_rebrand.output.filename import build_output_filename
from pdf_rebrand.output.flattener import MIN_FLATTEN_SCALE
from pdf_rebrand.pipeline.rebrand_pipeline import PipelineConfig, RebrandPipeline
from pdf_rebrand.pipeline.validation import guess_mime_type, is_pdf_file, is_supported_image

logger = logging.getLogger(__name__)

# Default output directory
DEFAULT_OUTPUT_DIR = "./output/"


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument Namespace.
    """
    parser = argparse.ArgumentParser(
        prog="rebrand-pdf",
        description="PDF Partner Rebranding - White-label evidence reports for partners",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  %(prog)s report.pdf -p "Müller Bau AG"                 # Mask + footer rewrite
  %(prog)s report.pdf -p "Müller Bau AG" --logo logo.png # With partner logo
  %(prog)s report.pdf -p "Acme AG" --date 05.03.2024     # Override footer date
  %(prog)s report.pdf -p "Acme AG" --strategy fill       # Plain vector masks
  %(prog)s report.pdf -p "Acme AG" --debug               # Outline template regions
  %(prog)s report.pdf -p "Łódź Bau" --font DejaVuSans.ttf # Non-WinAnsi partner name
  %(prog)s report.pdf -p "Acme AG" --remote              # Use remote service

Environment Variables:
  {SERVICE_URL_ENV}    Remote service URL (for --remote)
""",
    )

    parser.add_argument(
        "input",
        type=Path,
        help="Path to the PDF report to rebrand",
    )
    parser.add_argument(
        "-p",
        "--partner",
        required=True,
        help="Partner name for footer, metadata and filename",
    )
    parser.add_argument(
        "-l",
        "--logo",
        type=Path,
        help="Partner logo (PNG or JPEG) placed on the title page",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help=f"Output file path (default: {DEFAULT_OUTPUT_DIR}Beweissicherungsbericht_<partner>_<date>.pdf)",
    )
    parser.add_argument(
        "--date",
        help="Footer date (DD.MM.YYYY); extracted from the report if omitted",
    )

    mask_group = parser.add_argument_group("Masking options")
    mask_group.add_argument(
        "--strategy",
        default=MaskStrategy.RASTER.value,
        choices=[s.value for s in MaskStrategy],
        help="Masking strategy (default: raster)",
    )
    mask_group.add_argument(
        "--flatten-scale",
        type=float,
        default=MIN_FLATTEN_SCALE,
        help=f"Render scale for raster flattening, at least {MIN_FLATTEN_SCALE:g} (default: {MIN_FLATTEN_SCALE:g})",
    )

    footer_group = parser.add_argument_group("Footer options")
    footer_group.add_argument(
        "--font",
        type=Path,
        help="TrueType font for the footer (needed for names outside Western European characters)",
    )
    footer_group.add_argument(
        "--bold-font",
        type=Path,
        help="TrueType font for the partner name (default: --font)",
    )

    remote_group = parser.add_argument_group("Remote service options")
    remote_group.add_argument(
        "--remote",
        action="store_true",
        help="Process on the remote rebranding service instead of locally",
    )
    remote_group.add_argument(
        "--service-url",
        help=f"Remote service URL (or set {SERVICE_URL_ENV})",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (outline template regions)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    return parser.parse_args(argv)


def build_layout(args: argparse.Namespace) -> TemplateLayout:
    """Template layout with the footer fonts given on the command line.

    Raises:
        PipelineError: If a font file is missing.
    """
    if args.font is None and args.bold_font is None:
        return DEFAULT_LAYOUT

    for font_path in (args.font, args.bold_font):
        if font_path is not None and not font_path.is_file():
            raise PipelineError(f"Font file not found: {font_path}", stage="validate")

    footer = dataclasses.replace(
        DEFAULT_LAYOUT.footer,
        regular_font_path=args.font,
        bold_font_path=args.bold_font or args.font,
    )
    return dataclasses.replace(DEFAULT_LAYOUT, footer=footer)


def build_request(args: argparse.Namespace) -> BrandingRequest:
    """Create the branding request, reading the logo file if given.

    Raises:
        PipelineError: If the logo file is missing or not PNG/JPEG.
    """
    logo: Optional[LogoImage] = None
    if args.logo is not None:
        if not args.logo.exists():
            raise PipelineError(f"Logo file not found: {args.logo}", stage="validate")
        mime_type = guess_mime_type(args.logo)
        if not is_supported_image(mime_type):
            raise PipelineError(
                f"Please provide a valid PNG or JPG image: {args.logo}", stage="validate"
            )
        logo = LogoImage(data=args.logo.read_bytes(), mime_type=mime_type or "")

    return BrandingRequest(
        partner_name=args.partner,
        logo=logo,
        report_date=args.date,
    )


async def run_remote(
    args: argparse.Namespace, request: BrandingRequest
) -> ProcessingResult:
    """Rebrand on the remote service."""
    from pdf_rebrand.remote import RemoteRebrandClient

    service_url = args.service_url or load_service_url()
    async with RemoteRebrandClient(service_url) as client:
        pdf_bytes = await client.rebrand(args.input.read_bytes(), request)
    return ProcessingResult(
        pdf_bytes=pdf_bytes,
        filename=build_output_filename(request.partner_name.strip()),
    )


async def run(args: argparse.Namespace) -> int:
    """Execute the rebranding pipeline.

    Returns:
        Exit code (0: success, 1: failure).
    """
    input_path: Path = args.input

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    if not is_pdf_file(input_path.name, guess_mime_type(input_path)):
        print(f"Error: Not a PDF file: {input_path}", file=sys.stderr)
        return 1

    if not args.partner.strip():
        print("Error: Partner name must not be empty", file=sys.stderr)
        return 1

    if args.remote:
        # The service protocol carries only the PDF, the name and the logo
        local_options = (
            ("--date", args.date),
            ("--font", args.font),
            ("--bold-font", args.bold_font),
        )
        local_only = [flag for flag, value in local_options if value is not None]
        if local_only:
            print(
                f"Error: {', '.join(local_only)} cannot be used with --remote",
                file=sys.stderr,
            )
            return 1

    print(f"Input: {input_path}")
    print(f"Partner: {args.partner.strip()}")
    if args.logo:
        print(f"Logo: {args.logo}")
    print(f"Mode: {'remote' if args.remote else args.strategy}")
    if args.debug:
        print("Debug mode: enabled")
    print()

    try:
        request = build_request(args)
        if args.remote:
            result = await run_remote(args, request)
        else:
            config = PipelineConfig(
                layout=build_layout(args),
                mask_strategy=MaskStrategy(args.strategy),
                flatten_scale=args.flatten_scale,
                debug_draw_regions=args.debug,
            )
            pipeline = RebrandPipeline(config)
            print("Rebranding...")
            result = await pipeline.process(input_path, request, today=date.today())
    except PipelineError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1
    except Exception as e:
        print(f"Error: An unexpected error occurred: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    output_path: Path = args.output or Path(DEFAULT_OUTPUT_DIR) / result.filename
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(result.pdf_bytes)

    print()
    print(f"Complete: {output_path}")
    if not args.remote:
        stats = result.stats
        print(f"  Report date: {result.extracted_date or '(not found)'}")
        print(f"  Pages: {stats.get('pages', 0)}")
        print(f"  Footers rewritten: {stats.get('footer_pages', 0)}")
        print(f"  Logo placed: {'yes' if stats.get('logo_placed') else 'no'}")
        if args.strategy == MaskStrategy.RASTER.value:
            print(f"  Flattened regions: {stats.get('flattened_regions', 0)}")

    return 0


def main() -> NoReturn:
    """Main entry point."""
    args = parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    exit_code = asyncio.run(run(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
