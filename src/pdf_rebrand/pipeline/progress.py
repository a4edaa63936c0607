# SPDX-License-Identifier: Apache-2.0
"""Progress callback protocol for the rebranding pipeline."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

# Stage names in execution order
STAGES: tuple[str, ...] = (
    "load",
    "extract",
    "mask",
    "logo",
    "footer",
    "save",
    "flatten",
    "metadata",
)


@runtime_checkable
class ProgressCallback(Protocol):
    """Progress callback protocol."""

    def __call__(
        self,
        stage: str,
        current: int,
        total: int,
        message: str = "",
    ) -> None: ...
