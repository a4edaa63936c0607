# SPDX-License-Identifier: Apache-2.0
"""Error definitions shared by the rebranding stages."""

from __future__ import annotations

from typing import ClassVar


class PipelineError(Exception):
    """Base exception for rebranding failures.

    Every failure reaches the caller as one of these, carrying the stage
    that raised it and, where there is one, the underlying exception.
    """

    default_stage: ClassVar[str] = "pipeline"

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage or self.default_stage
        self.cause = cause

    def __str__(self) -> str:
        text = f"[{self.stage}] {self.message}"
        if self.cause is not None:
            text += f" (caused by: {self.cause})"
        return text


class ConfigurationError(PipelineError):
    """Invalid configuration (missing service URL, bad flatten scale, ...).

    Not retryable - fix the configuration first.
    """

    default_stage = "config"


class InputValidationError(PipelineError):
    """Rejected input: wrong file type, empty partner name, bad logo type."""

    default_stage = "validate"


class StructuralError(PipelineError):
    """The document cannot be opened or has no pages."""

    default_stage = "load"


class LogoError(PipelineError):
    """The partner logo could not be decoded or embedded."""

    default_stage = "logo"


class UnsupportedImageFormatError(LogoError):
    """The logo MIME type is neither PNG nor JPEG."""


class FlattenError(PipelineError):
    """The flattening pass could not run at all."""

    default_stage = "flatten"


class ServiceError(PipelineError):
    """The remote rendering service failed or answered with garbage."""

    default_stage = "remote"
