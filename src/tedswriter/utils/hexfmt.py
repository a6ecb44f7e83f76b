"""Hexadecimal rendering of buffers for logs and verification display."""

from __future__ import annotations


def to_hex(data: bytes | bytearray) -> str:
    """Render bytes as uppercase hex, two characters per byte, no separators.

    Example:
        >>> to_hex(b"\\xfc\\x05\\xff")
        'FC05FF'
    """
    return bytes(data).hex().upper()


def from_hex(text: str) -> bytes:
    """Parse the output of to_hex() (whitespace is ignored).

    Raises:
        ValueError: If text is not valid hex
    """
    return bytes.fromhex("".join(text.split()))
