"""Decoding of packed TEDS buffers.

This module reads fields back out of a buffer produced by encode() and maps
their bits to semantic values. It is the inverse of the converter and the bit
packer, used to display and verify what was written to a device.
"""

from __future__ import annotations

import struct
from datetime import timedelta
from typing import Any, Sequence

from ..models.encodings import (
    Chr5Encoding,
    ConRelResEncoding,
    ConResEncoding,
    DateEncoding,
    Encoding,
    UnintEncoding,
)
from ..models.record import FieldRecord, TedsField
from .bitpack import DEFAULT_POLICY, Cursor, ReservedBytePolicy, extract
from .convert import CHR5_BITS, CHR5_OFFSET, TEDS_EPOCH, parse_field


def _sign_extend(bits: int, bit_length: int) -> int:
    sign_bit = 1 << (bit_length - 1)
    if bits & sign_bit:
        return bits - (1 << bit_length)
    return bits


def chr5_decode(bits: int, bit_length: int) -> str:
    """Unpack 5-bit lanes into text; codes 1-26 decode to "A".."Z"."""
    return "".join(
        chr(((bits >> (CHR5_BITS * i)) & 0x1F) + CHR5_OFFSET)
        for i in range(bit_length // CHR5_BITS)
    )


def from_bits(encoding: Encoding, bits: int, bit_length: int) -> Any:
    """Map packed bits back to a semantic value.

    The encoding supplies the type and any table parameters (minimum, step,
    resolution); its own value is ignored.

    Args:
        encoding: Encoding the field was written with
        bits: Unsigned value read from the buffer
        bit_length: Width of the field in bits

    Returns:
        int for UNINT, str for CHR5, date for DATE, float otherwise

    Example:
        >>> enc = ConResEncoding(value=0, minimum=-40, maximum=125, step=0.5)
        >>> from_bits(enc, 130, 9)
        25.0
    """
    bits &= (1 << bit_length) - 1

    if isinstance(encoding, UnintEncoding):
        return bits
    if isinstance(encoding, Chr5Encoding):
        return chr5_decode(bits, bit_length)
    if isinstance(encoding, DateEncoding):
        return TEDS_EPOCH + timedelta(days=_sign_extend(bits, bit_length))
    if isinstance(encoding, ConResEncoding):
        return encoding.minimum + encoding.step * bits
    if isinstance(encoding, ConRelResEncoding):
        return encoding.minimum * encoding.ratio**bits
    return struct.unpack(">f", struct.pack(">I", bits))[0]


def _as_fields(fields: Sequence[FieldRecord | TedsField]) -> list[TedsField]:
    return [f if isinstance(f, TedsField) else parse_field(f) for f in fields]


def extract_bits(
    buffer: bytes | bytearray,
    fields: Sequence[FieldRecord | TedsField],
    policy: ReservedBytePolicy = DEFAULT_POLICY,
) -> list[int]:
    """Read each field's raw bits from the buffer, in packing order.

    Raises:
        IndexError: If the fields extend past the end of the buffer
    """
    cursor: Cursor = policy.start()
    result = []
    for teds_field in _as_fields(fields):
        bits, cursor = extract(buffer, cursor, teds_field.bit_length, policy)
        result.append(bits)
    return result


def decode_fields(
    buffer: bytes | bytearray,
    fields: Sequence[FieldRecord | TedsField],
    policy: ReservedBytePolicy = DEFAULT_POLICY,
) -> dict[str, Any]:
    """Decode a packed buffer using the field layout it was encoded with.

    Args:
        buffer: Encoded buffer
        fields: The field sequence passed to encode()
        policy: Reserved-byte strategy used when encoding

    Returns:
        Mapping of field name to decoded value, in field order

    Example:
        ```python
        buffer = encode(records)
        values = decode_fields(buffer, records)
        print(values["Serial Number"])
        ```
    """
    teds_fields = _as_fields(fields)
    raw = extract_bits(buffer, teds_fields, policy)
    return {
        teds_field.name: from_bits(teds_field.encoding, bits, teds_field.bit_length)
        for teds_field, bits in zip(teds_fields, raw)
    }
