"""Utility functions for tedswriter.

This module provides block checksums, hex rendering, and size calculation.
"""

from __future__ import annotations

from .checksum import apply_checksums, block_checksum, invalid_blocks, verify_checksums
from .hexfmt import from_hex, to_hex
from .sizing import fits, required_bytes, total_bits

__all__ = [
    # Checksum functions
    "apply_checksums",
    "block_checksum",
    "invalid_blocks",
    "verify_checksums",
    # Hex rendering
    "to_hex",
    "from_hex",
    # Sizing functions
    "total_bits",
    "required_bytes",
    "fits",
]
