# SPDX-License-Identifier: Apache-2.0
"""ctypes conversions for pypdfium2's raw PDFium API."""

import ctypes


def to_widestring(text: str) -> ctypes.Array:
    """Convert a Python string to FPDF_WIDESTRING (UTF-16LE, null-terminated).

    Example:
        >>> ws = to_widestring("Acme AG")
        >>> # ws can now be passed to FPDFText_SetText
    """
    encoded = text.encode("utf-16-le") + b"\x00\x00"
    return (ctypes.c_ushort * (len(encoded) // 2)).from_buffer_copy(encoded)


def to_byte_array(data: bytes) -> ctypes.Array:
    """Copy bytes into a ctypes ``c_ubyte`` array (for FPDFText_LoadFont)."""
    return (ctypes.c_ubyte * len(data)).from_buffer_copy(data)
