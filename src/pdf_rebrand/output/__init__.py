# SPDX-License-Identifier: Apache-2.0
"""Post-processing of the rebranded PDF: flattening, metadata, filename."""

from .filename import build_output_filename, sanitize_partner_name
from .flattener import FlattenStats, RegionFlattener
from .metadata import (
    apply_branding_metadata,
    branding_metadata,
    read_metadata,
    read_xmp_metadata,
)

__all__ = [
    "FlattenStats",
    "RegionFlattener",
    "apply_branding_metadata",
    "branding_metadata",
    "build_output_filename",
    "read_metadata",
    "read_xmp_metadata",
    "sanitize_partner_name",
]
