# SPDX-License-Identifier: Apache-2.0
"""Remote rebranding service client.

Requires the optional ``remote`` extra (aiohttp):

    from pdf_rebrand.config import load_service_url
    from pdf_rebrand.remote import RemoteRebrandClient

    async with RemoteRebrandClient(load_service_url()) as client:
        pdf_bytes = await client.rebrand(source_bytes, request)
"""

from .client import RemoteRebrandClient, build_payload, encode_logo, parse_response

__all__ = [
    "RemoteRebrandClient",
    "build_payload",
    "encode_logo",
    "parse_response",
]
