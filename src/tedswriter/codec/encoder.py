"""TEDS buffer encoder.

This module provides the encode() function that turns an ordered field sequence
into a finished TEDS buffer: initialized, bit-packed, terminated and
checksummed, ready to be written to a memory bank.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from ..config import EncoderConfig
from ..exceptions import TedsError
from ..models.record import FieldRecord, TedsField
from ..utils.checksum import apply_checksums
from .bitpack import Cursor, ReservedBytePolicy, append, append_terminator
from .convert import parse_field, to_bits

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackedField:
    """Where a field ended up in the buffer.

    Attributes:
        name: Field name
        bits: Unsigned value that was packed (before masking to bit_length)
        bit_length: Field width in bits
        start: Cursor at the field's first bit
        end: Cursor following the field's last bit
    """

    name: str
    bits: int
    bit_length: int
    start: Cursor
    end: Cursor


@dataclass
class EncodeResult:
    """Finished buffer plus the layout the packer produced."""

    buffer: bytearray
    cursor: Cursor
    fields: list[PackedField] = field(default_factory=list)


def init_buffer(size: int, config: EncoderConfig | None = None) -> bytearray:
    """Allocate a buffer and apply the configured fill pattern."""
    config = config if config is not None else EncoderConfig()
    return config.fill.apply(bytearray(size), config.block_size)


def _convert_all(fields: Sequence[FieldRecord | TedsField]) -> list[tuple[TedsField, int]]:
    converted = []
    for index, item in enumerate(fields):
        try:
            teds_field = item if isinstance(item, TedsField) else parse_field(item)
            converted.append((teds_field, to_bits(teds_field.encoding)))
        except TedsError as err:
            raise err.attach_field(item.name, index)
    return converted


def _pack_all(
    buffer: bytearray,
    converted: list[tuple[TedsField, int]],
    policy: ReservedBytePolicy,
    terminator: int,
) -> tuple[Cursor, list[PackedField]]:
    cursor = policy.start()
    placements = []
    for index, (teds_field, bits) in enumerate(converted):
        start = cursor
        try:
            cursor = append(buffer, cursor, bits, teds_field.bit_length, policy)
        except TedsError as err:
            raise err.attach_field(teds_field.name, index)
        placements.append(PackedField(teds_field.name, bits, teds_field.bit_length, start, cursor))
        logger.debug(
            "Packed %s (%d bits) at byte %d bit %d",
            teds_field.name,
            teds_field.bit_length,
            start.byte_index,
            start.bit_offset,
        )

    try:
        cursor = append_terminator(buffer, cursor, policy, terminator)
    except TedsError as err:
        raise err.attach_field("<terminator>", len(converted))
    return cursor, placements


def encode_with_layout(
    fields: Sequence[FieldRecord | TedsField],
    buffer_size: int | None = None,
    config: EncoderConfig | None = None,
) -> EncodeResult:
    """Encode fields and report where each one was placed.

    Conversion of every field happens before any bit is packed, so a bad value
    late in the sequence is reported without touching the buffer. Packing
    then runs strictly in field order.

    Args:
        fields: Ordered field records (or already parsed fields)
        buffer_size: Buffer size in bytes; defaults to config.buffer_size
        config: Encoder configuration; defaults to EncoderConfig()

    Returns:
        EncodeResult with the finished buffer, final cursor and placements

    Raises:
        UnrecognizedType: If a field has an unsupported type tag
        ParseError: If a field value or range cannot be parsed
        BufferOverflow: If the fields do not fit in the buffer
    """
    config = config if config is not None else EncoderConfig()
    size = buffer_size if buffer_size is not None else config.buffer_size
    policy = config.policy

    converted = _convert_all(fields)

    buffer = init_buffer(size, config)
    cursor, placements = _pack_all(buffer, converted, policy, config.terminator)

    last_index = None if config.checksum_all_blocks else cursor.last_byte
    apply_checksums(buffer, policy, last_index)

    logger.info(
        "Encoded %d fields into %d of %d bytes", len(placements), cursor.last_byte + 1, size
    )
    return EncodeResult(buffer=buffer, cursor=cursor, fields=placements)


def encode(
    fields: Sequence[FieldRecord | TedsField],
    buffer_size: int | None = None,
    config: EncoderConfig | None = None,
) -> bytearray:
    """Encode an ordered field sequence into a finished TEDS buffer.

    Args:
        fields: Ordered field records (or already parsed fields)
        buffer_size: Buffer size in bytes; defaults to config.buffer_size
        config: Encoder configuration; defaults to EncoderConfig()

    Returns:
        Buffer of ``buffer_size`` bytes

    Raises:
        UnrecognizedType: If a field has an unsupported type tag
        ParseError: If a field value or range cannot be parsed
        BufferOverflow: If the fields do not fit in the buffer

    Examples:
        ```python
        from tedswriter import FieldRecord, encode, to_hex

        fields = [
            FieldRecord(name="Model Number", raw_value="5", bit_length=8, type_tag="UNINT"),
        ]
        buffer = encode(fields, buffer_size=32)
        print(to_hex(buffer))  # FC05FF0000...
        ```
    """
    return encode_with_layout(fields, buffer_size, config).buffer
