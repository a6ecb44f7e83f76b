"""Per-block TEDS checksums.

Each checksum block reserves its first byte for a checksum chosen so that the
signed sum of all bytes in the block is 0 modulo 256.
"""

from __future__ import annotations

from typing import Iterable

from ..codec.bitpack import DEFAULT_POLICY, ReservedBytePolicy


def _signed(byte: int) -> int:
    return byte - 256 if byte > 127 else byte


def block_checksum(data: Iterable[int]) -> int:
    """Calculate the checksum byte for the non-reserved bytes of a block.

    The bytes are summed as signed 8-bit values, reduced modulo 256 and
    negated (two's complement).

    Example:
        >>> block_checksum([0x05, 0xFF])
        252
    """
    total = sum(_signed(byte) for byte in data) % 256
    return -total % 256


def _blocks_to_check(
    size: int, policy: ReservedBytePolicy, last_index: int | None
) -> list[range]:
    blocks = policy.blocks(size)
    if last_index is None:
        return blocks
    return [block for block in blocks if block.start <= last_index]


def apply_checksums(
    buffer: bytearray,
    policy: ReservedBytePolicy = DEFAULT_POLICY,
    last_index: int | None = None,
) -> bytearray:
    """Write each block's checksum into its reserved byte.

    Args:
        buffer: Buffer to finalize (modified in place)
        policy: Reserved-byte strategy the buffer was packed with
        last_index: Highest byte index holding packed data. Blocks starting
            after it are left untouched. None checksums every block.

    Returns:
        The same buffer
    """
    for block in _blocks_to_check(len(buffer), policy, last_index):
        buffer[block.start] = block_checksum(buffer[i] for i in block[1:])
    return buffer


def invalid_blocks(
    data: bytes | bytearray,
    policy: ReservedBytePolicy = DEFAULT_POLICY,
    last_index: int | None = None,
) -> list[int]:
    """Return the start index of every block whose checksum does not verify."""
    return [
        block.start
        for block in _blocks_to_check(len(data), policy, last_index)
        if sum(_signed(data[i]) for i in block) % 256 != 0
    ]


def verify_checksums(
    data: bytes | bytearray,
    policy: ReservedBytePolicy = DEFAULT_POLICY,
    last_index: int | None = None,
) -> bool:
    """Verify block checksums.

    Returns:
        True if every checked block sums to 0 modulo 256, False otherwise

    Example:
        >>> buffer = apply_checksums(bytearray(b"\\x00\\x05\\xff" + bytes(29)))
        >>> verify_checksums(buffer)
        True
    """
    return not invalid_blocks(data, policy, last_index)
