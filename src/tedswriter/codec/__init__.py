"""Bit-packed TEDS codec.

This module provides type conversion, bit packing, encoding and decoding of
TEDS field sequences.
"""

from __future__ import annotations

from .bitpack import (
    BlockReservedPolicy,
    Cursor,
    FirstByteReservedPolicy,
    ReservedBytePolicy,
    append,
    append_terminator,
    extract,
)
from .convert import convert, parse_encoding, parse_field, to_bits
from .decoder import decode_fields, extract_bits, from_bits
from .encoder import EncodeResult, PackedField, encode, encode_with_layout, init_buffer

__all__ = [
    "encode",
    "encode_with_layout",
    "init_buffer",
    "EncodeResult",
    "PackedField",
    "decode_fields",
    "extract_bits",
    "from_bits",
    "convert",
    "parse_encoding",
    "parse_field",
    "to_bits",
    "Cursor",
    "ReservedBytePolicy",
    "BlockReservedPolicy",
    "FirstByteReservedPolicy",
    "append",
    "append_terminator",
    "extract",
]
