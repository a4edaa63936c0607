# SPDX-License-Identifier: Apache-2.0
"""Client for the remote rebranding service.

The service performs the same rebranding server-side. Wire contract:

Request (POST, JSON)::

    {"pdf_base64": str, "partner_name": str,
     "logo_base64": str | null, "logo_type": "png" | "jpg" | null}

Response (JSON)::

    {"success": bool, "pdf_base64": str, "error": str | null}
"""

from __future__ import annotations

import base64
import binascii
from typing import TYPE_CHECKING, Any, Optional

from pdf_rebrand.core.logo import normalize_image_format
from pdf_rebrand.core.models import BrandingRequest, LogoImage
from pdf_rebrand.errors import ConfigurationError, ServiceError

if TYPE_CHECKING:
    import aiohttp


def encode_logo(logo: LogoImage) -> tuple[str, str]:
    """Return (base64 data, wire logo type) for a logo."""
    wire_type = "png" if normalize_image_format(logo.mime_type) == "png" else "jpg"
    return base64.b64encode(logo.data).decode("ascii"), wire_type


def build_payload(pdf_bytes: bytes, request: BrandingRequest) -> dict[str, Any]:
    """Build the JSON request body."""
    payload: dict[str, Any] = {
        "pdf_base64": base64.b64encode(pdf_bytes).decode("ascii"),
        "partner_name": request.partner_name.strip(),
        "logo_base64": None,
        "logo_type": None,
    }
    if request.logo is not None:
        payload["logo_base64"], payload["logo_type"] = encode_logo(request.logo)
    return payload


def parse_response(data: Any) -> bytes:
    """Decode the service's JSON envelope into PDF bytes.

    Raises:
        ServiceError: On ``success: false`` or a malformed envelope.
    """
    if not isinstance(data, dict):
        raise ServiceError("Unexpected response from rebranding service")
    if not data.get("success"):
        raise ServiceError(data.get("error") or "PDF processing failed")

    encoded = data.get("pdf_base64")
    if not isinstance(encoded, str) or not encoded:
        raise ServiceError("Rebranding service returned no PDF")
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ServiceError("Rebranding service returned invalid base64", cause=e) from e


class RemoteRebrandClient:
    """Async client for the remote rebranding service.

    Example:
        >>> async with RemoteRebrandClient(load_service_url()) as client:
        ...     pdf_bytes = await client.rebrand(source_bytes, request)
    """

    def __init__(
        self,
        service_url: Optional[str],
        timeout: Optional[float] = None,
    ) -> None:
        """Initialize RemoteRebrandClient.

        Args:
            service_url: Endpoint URL.
            timeout: Total request timeout in seconds (None: no timeout).

        Raises:
            ConfigurationError: If service_url is empty.
            ImportError: If aiohttp is not installed.
        """
        if not service_url:
            raise ConfigurationError("Rebranding service URL is not configured")

        # Lazy import aiohttp
        try:
            import aiohttp as _aiohttp

            self._aiohttp = _aiohttp
        except ImportError:
            raise ImportError(
                "aiohttp is required for the remote service. "
                "Install with: pip install pdf-rebrand[remote]"
            ) from None

        self._service_url = service_url
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    @property
    def service_url(self) -> str:
        return self._service_url

    async def __aenter__(self) -> RemoteRebrandClient:
        await self._ensure_session()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            timeout = self._aiohttp.ClientTimeout(total=self._timeout)
            self._session = self._aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def rebrand(self, pdf_bytes: bytes, request: BrandingRequest) -> bytes:
        """Send a PDF to the service and return the rebranded PDF.

        Raises:
            ServiceError: On HTTP errors, network failures or a failed run.
        """
        session = await self._ensure_session()
        payload = build_payload(pdf_bytes, request)

        try:
            async with session.post(self._service_url, json=payload) as response:
                if not response.ok:
                    raise ServiceError(
                        f"API error: {response.status} {response.reason or ''}".rstrip()
                    )
                try:
                    data = await response.json(content_type=None)
                except ValueError as e:
                    raise ServiceError("Rebranding service returned invalid JSON", cause=e) from e
        except self._aiohttp.ClientError as e:
            raise ServiceError(f"Rebranding service request failed: {e}", cause=e) from e

        return parse_response(data)

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
