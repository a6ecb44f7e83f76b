"""Bit-level packing into fixed-size TEDS buffers.

Fields are appended most-significant-bit first at a running cursor. Some bytes
of the buffer are reserved for checksums; which ones is decided by a
ReservedBytePolicy, and the packer hops over them transparently. The cursor is
an immutable value returned by every call, so one buffer can only advance
through the chain of cursors its caller threads along.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator

from ..exceptions import BufferOverflow

MAX_FIELD_BITS = 32
TERMINATOR = 0xFF


def _mask(num_bits: int) -> int:
    return (1 << num_bits) - 1


@dataclass(frozen=True)
class Cursor:
    """Next free bit position in a buffer.

    Attributes:
        byte_index: Index of the byte being filled
        bit_offset: Number of bits already used in that byte (0-7)
    """

    byte_index: int
    bit_offset: int = 0

    def __post_init__(self) -> None:
        if self.byte_index < 0:
            raise ValueError(f"byte_index must be >= 0, got {self.byte_index}")
        if not 0 <= self.bit_offset <= 7:
            raise ValueError(f"bit_offset must be 0-7, got {self.bit_offset}")

    @property
    def bit_position(self) -> int:
        """Absolute bit position from the start of the buffer."""
        return self.byte_index * 8 + self.bit_offset

    @property
    def last_byte(self) -> int:
        """Index of the last byte holding packed bits."""
        return self.byte_index if self.bit_offset else self.byte_index - 1


class ReservedBytePolicy(ABC):
    """Strategy deciding which buffer bytes are reserved for checksums.

    Each policy partitions a buffer into checksum blocks. The first byte of a
    block holds its checksum and is never written by the packer.
    """

    @abstractmethod
    def is_reserved(self, index: int) -> bool:
        """Return True if the byte at ``index`` holds a checksum."""

    @abstractmethod
    def blocks(self, size: int) -> list[range]:
        """Partition a ``size``-byte buffer into checksum blocks.

        The first index of every returned range is the block's reserved byte.
        """

    def skip(self, index: int) -> int:
        """Return the first non-reserved index at or after ``index``."""
        while self.is_reserved(index):
            index += 1
        return index

    def start(self) -> Cursor:
        """Cursor at the first packable bit of a buffer."""
        return Cursor(self.skip(0), 0)


@dataclass(frozen=True)
class BlockReservedPolicy(ReservedBytePolicy):
    """Byte 0 of every ``block_size``-byte block is reserved."""

    block_size: int = 32

    def __post_init__(self) -> None:
        if self.block_size < 2:
            raise ValueError(f"block_size must be >= 2, got {self.block_size}")

    def is_reserved(self, index: int) -> bool:
        return index % self.block_size == 0

    def blocks(self, size: int) -> list[range]:
        return [
            range(start, min(start + self.block_size, size))
            for start in range(0, size, self.block_size)
        ]


@dataclass(frozen=True)
class FirstByteReservedPolicy(ReservedBytePolicy):
    """Only byte 0 is reserved; one checksum covers the whole buffer."""

    def is_reserved(self, index: int) -> bool:
        return index == 0

    def blocks(self, size: int) -> list[range]:
        return [range(0, size)] if size else []


DEFAULT_POLICY = BlockReservedPolicy()


def split_chunks(bits: int, bit_length: int) -> Iterator[tuple[int, int]]:
    """Split the low ``bit_length`` bits of a value into byte-sized chunks.

    Chunks are yielded most significant first as ``(value, length)`` pairs.
    The leading chunk carries the ``bit_length % 8`` odd bits, if any.

    Example:
        >>> list(split_chunks(0xABC, 12))
        [(10, 4), (188, 8)]
    """
    for shift in (24, 16, 8, 0):
        length = min(8, bit_length - shift)
        if length <= 0:
            continue
        yield (bits >> shift) & _mask(length), length


def _check_bounds(buffer: bytearray, index: int, bit_offset: int) -> None:
    if index >= len(buffer):
        raise BufferOverflow(index, bit_offset, len(buffer))


def append_chunk(
    buffer: bytearray,
    cursor: Cursor,
    value: int,
    length: int,
    policy: ReservedBytePolicy = DEFAULT_POLICY,
) -> Cursor:
    """Append up to 8 bits at ``cursor`` and return the advanced cursor.

    An empty byte is overwritten whole, with the chunk left-aligned. A
    partially filled byte keeps its high ``bit_offset`` bits; chunk bits that do
    not fit spill left-aligned into the next non-reserved byte.

    Args:
        buffer: Buffer to write into
        cursor: Position to start writing at
        value: Chunk value (only the low ``length`` bits are used)
        length: Chunk length in bits (1-8)
        policy: Reserved-byte strategy

    Returns:
        Cursor following the written bits

    Raises:
        ValueError: If length is out of range
        BufferOverflow: If the chunk would be written past the end of the buffer
    """
    if not 1 <= length <= 8:
        raise ValueError(f"chunk length must be 1-8, got {length}")

    value &= _mask(length)
    index = policy.skip(cursor.byte_index)
    offset = cursor.bit_offset
    _check_bounds(buffer, index, offset)

    free = 8 - offset
    kept = buffer[index] & ~_mask(free) & 0xFF if offset else 0

    if length <= free:
        buffer[index] = kept | (value << (free - length))
        offset += length
        if offset == 8:
            return Cursor(policy.skip(index + 1), 0)
        return Cursor(index, offset)

    spill = length - free
    buffer[index] = kept | (value >> spill)
    index = policy.skip(index + 1)
    _check_bounds(buffer, index, 0)
    buffer[index] = (value & _mask(spill)) << (8 - spill)
    return Cursor(index, spill)


def append(
    buffer: bytearray,
    cursor: Cursor,
    bits: int,
    bit_length: int,
    policy: ReservedBytePolicy = DEFAULT_POLICY,
) -> Cursor:
    """Append the low ``bit_length`` bits of ``bits``, most significant first.

    Args:
        buffer: Buffer to write into
        cursor: Position to start writing at
        bits: Unsigned value; higher bits are discarded
        bit_length: Number of bits to write (1-32)
        policy: Reserved-byte strategy

    Returns:
        Cursor following the written field

    Raises:
        ValueError: If bit_length is out of range
        BufferOverflow: If the field does not fit in the buffer

    Example:
        >>> buffer = bytearray(32)
        >>> cursor = append(buffer, Cursor(1), 5, 8)
        >>> buffer[1], cursor
        (5, Cursor(byte_index=2, bit_offset=0))
    """
    if not 1 <= bit_length <= MAX_FIELD_BITS:
        raise ValueError(f"bit_length must be 1-{MAX_FIELD_BITS}, got {bit_length}")

    bits &= _mask(bit_length)
    for value, length in split_chunks(bits, bit_length):
        cursor = append_chunk(buffer, cursor, value, length, policy)
    return cursor


def append_terminator(
    buffer: bytearray,
    cursor: Cursor,
    policy: ReservedBytePolicy = DEFAULT_POLICY,
    value: int = TERMINATOR,
) -> Cursor:
    """Close the current byte and append an 8-bit end-of-data marker.

    A partially filled byte is left as is (its unused low bits are zero) and
    the terminator starts on the next non-reserved byte.
    """
    if cursor.bit_offset:
        cursor = Cursor(policy.skip(cursor.byte_index + 1), 0)
    return append_chunk(buffer, cursor, value, 8, policy)


def extract_chunk(
    buffer: bytes | bytearray,
    cursor: Cursor,
    length: int,
    policy: ReservedBytePolicy = DEFAULT_POLICY,
) -> tuple[int, Cursor]:
    """Read up to 8 bits at ``cursor``; the inverse of append_chunk().

    Raises:
        ValueError: If length is out of range
        IndexError: If the chunk extends past the end of the buffer
    """
    if not 1 <= length <= 8:
        raise ValueError(f"chunk length must be 1-8, got {length}")

    index = policy.skip(cursor.byte_index)
    offset = cursor.bit_offset
    if index >= len(buffer):
        raise IndexError(f"Attempted to read past end of buffer at byte {index}")

    free = 8 - offset
    if length <= free:
        value = (buffer[index] >> (free - length)) & _mask(length)
        offset += length
        if offset == 8:
            return value, Cursor(policy.skip(index + 1), 0)
        return value, Cursor(index, offset)

    spill = length - free
    high = buffer[index] & _mask(free)
    index = policy.skip(index + 1)
    if index >= len(buffer):
        raise IndexError(f"Attempted to read past end of buffer at byte {index}")
    value = (high << spill) | (buffer[index] >> (8 - spill))
    return value, Cursor(index, spill)


def extract(
    buffer: bytes | bytearray,
    cursor: Cursor,
    bit_length: int,
    policy: ReservedBytePolicy = DEFAULT_POLICY,
) -> tuple[int, Cursor]:
    """Read a ``bit_length``-bit field at ``cursor``; the inverse of append().

    Returns:
        Tuple of (unsigned value, cursor following the field)
    """
    if not 1 <= bit_length <= MAX_FIELD_BITS:
        raise ValueError(f"bit_length must be 1-{MAX_FIELD_BITS}, got {bit_length}")

    bits = 0
    for _, length in split_chunks(0, bit_length):
        value, cursor = extract_chunk(buffer, cursor, length, policy)
        bits = (bits << length) | value
    return bits, cursor
