"""TEDS buffer size calculation utilities.

This module provides functions to calculate how much of a buffer a field
sequence occupies without actually encoding it.
"""

from __future__ import annotations

from typing import Sequence

from ..codec.bitpack import DEFAULT_POLICY, ReservedBytePolicy
from ..models.record import FieldRecord, TedsField

TERMINATOR_BITS = 8


def total_bits(fields: Sequence[FieldRecord | TedsField]) -> int:
    """Total field bits, excluding the terminator and reserved bytes.

    Example:
        >>> total_bits([FieldRecord(name="a", raw_value="1", bit_length=14, type_tag="UNINT")])
        14
    """
    return sum(f.bit_length for f in fields)


def required_bytes(
    fields: Sequence[FieldRecord | TedsField],
    policy: ReservedBytePolicy = DEFAULT_POLICY,
) -> int:
    """Smallest buffer size that holds the fields, the terminator and checksums.

    Args:
        fields: Field sequence to size
        policy: Reserved-byte strategy

    Returns:
        Size in bytes
    """
    data_bytes = (total_bits(fields) + 7) // 8 + TERMINATOR_BITS // 8
    index = policy.start().byte_index
    remaining = data_bytes
    while remaining:
        index = policy.skip(index) + 1
        remaining -= 1
    return index


def fits(
    fields: Sequence[FieldRecord | TedsField],
    buffer_size: int,
    policy: ReservedBytePolicy = DEFAULT_POLICY,
) -> bool:
    """Return True if the fields can be encoded into ``buffer_size`` bytes."""
    return required_bytes(fields, policy) <= buffer_size
