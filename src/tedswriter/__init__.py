"""tedswriter: IEEE 1451.4 TEDS record encoder

A Python library for encoding typed sensor metadata (calibration constants,
identifiers, dates) into the bit-packed, block-checksummed binary layout used
to program Transducer Electronic Data Sheet memories.

Key Features:
- Pydantic field records with a closed set of TEDS encodings
  (UNINT, Chr5, DATE, ConRes, ConRelRes, SINGLE)
- Sub-byte bit packing that skips reserved checksum bytes
- Per-block two's-complement checksums
- Read-back decoding and verification against a memory bank

Quick Start:
    >>> from tedswriter import FieldRecord, encode, decode_fields, to_hex
    >>>
    >>> fields = [
    ...     FieldRecord(name="Model Number", raw_value="5", bit_length=8, type_tag="UNINT"),
    ...     FieldRecord(name="Version Letter", raw_value="B", bit_length=5, type_tag="Chr5"),
    ... ]
    >>> buffer = encode(fields, buffer_size=32)
    >>> to_hex(buffer)[:8]
    'EC0510FF'
    >>> decode_fields(buffer, fields)
    {'Model Number': 5, 'Version Letter': 'B'}
"""

from __future__ import annotations

from .codec import (
    BlockReservedPolicy,
    Cursor,
    EncodeResult,
    FirstByteReservedPolicy,
    PackedField,
    ReservedBytePolicy,
    convert,
    decode_fields,
    encode,
    encode_with_layout,
    parse_field,
)
from .config import EncoderConfig, FillPattern
from .exceptions import (
    BufferOverflow,
    ParseError,
    SourceError,
    TedsError,
    TransportError,
    UnrecognizedType,
    VerificationError,
)
from .models import FieldRecord, TedsField, TypeTag
from .source import FieldSource, JsonFieldSource, RowFieldSource
from .utils import apply_checksums, to_hex, verify_checksums

__version__ = "0.1.0"

__all__ = [
    # Core API
    "FieldRecord",
    "TedsField",
    "TypeTag",
    "encode",
    "encode_with_layout",
    "decode_fields",
    "convert",
    "parse_field",
    "EncodeResult",
    "PackedField",
    # Layout
    "Cursor",
    "ReservedBytePolicy",
    "BlockReservedPolicy",
    "FirstByteReservedPolicy",
    "EncoderConfig",
    "FillPattern",
    # Exceptions
    "TedsError",
    "ParseError",
    "UnrecognizedType",
    "BufferOverflow",
    "SourceError",
    "TransportError",
    "VerificationError",
    # Sources
    "FieldSource",
    "RowFieldSource",
    "JsonFieldSource",
    # Utilities
    "apply_checksums",
    "verify_checksums",
    "to_hex",
    # Version
    "__version__",
]
