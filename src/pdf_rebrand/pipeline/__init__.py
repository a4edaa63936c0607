# SPDX-License-Identifier: Apache-2.0
"""Rebranding pipeline package."""

from pdf_rebrand.errors import (
    ConfigurationError,
    FlattenError,
    InputValidationError,
    LogoError,
    PipelineError,
    ServiceError,
    StructuralError,
    UnsupportedImageFormatError,
)

from .progress import STAGES, ProgressCallback
from .rebrand_pipeline import PipelineConfig, RebrandPipeline
from .validation import (
    guess_mime_type,
    is_pdf_file,
    is_supported_image,
    validate_request,
)

__all__ = [
    "ConfigurationError",
    "FlattenError",
    "InputValidationError",
    "LogoError",
    "PipelineConfig",
    "PipelineError",
    "ProgressCallback",
    "RebrandPipeline",
    "STAGES",
    "ServiceError",
    "StructuralError",
    "UnsupportedImageFormatError",
    "guess_mime_type",
    "is_pdf_file",
    "is_supported_image",
    "validate_request",
]
