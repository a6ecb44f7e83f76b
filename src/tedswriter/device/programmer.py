"""Writing encoded TEDS buffers to memory banks."""

from __future__ import annotations

import logging
import time

from ..exceptions import TransportError, VerificationError
from .bank import MemoryBank

logger = logging.getLogger(__name__)


def _verify(bank: MemoryBank, expected: bytes) -> None:
    actual = bank.read(0, len(expected))
    for offset, (wrote, read) in enumerate(zip(expected, actual)):
        if wrote != read:
            raise VerificationError(offset, wrote, read)
    if len(actual) != len(expected):
        raise TransportError(f"Read back {len(actual)} bytes, expected {len(expected)}")


def write_teds(bank: MemoryBank, buffer: bytes | bytearray, verify: bool = True) -> None:
    """Write an encoded buffer to a bank and optionally read it back.

    Args:
        bank: Target memory bank
        buffer: Encoded TEDS buffer; must be exactly ``bank.size`` bytes
        verify: Read the bank back and compare (default True)

    Raises:
        TransportError: If the buffer size does not match the bank, or I/O fails
        VerificationError: If the read-back differs from what was written
    """
    if len(buffer) != bank.size:
        raise TransportError(
            f"Buffer is {len(buffer)} bytes but {bank.description} holds {bank.size}"
        )

    data = bytes(buffer)
    start = time.perf_counter()
    bank.write(0, data)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("Wrote %d bytes to %s in %.1f ms", len(data), bank.description, elapsed_ms)

    if verify:
        _verify(bank, data)
        logger.info("Verified %d bytes", len(data))


def clear_bank(bank: MemoryBank, fill: int = 0x00) -> None:
    """Overwrite the whole bank with ``fill``."""
    if not 0 <= fill <= 0xFF:
        raise ValueError(f"fill must be 0-255, got {fill}")
    bank.write(0, bytes([fill]) * bank.size)
    logger.info("Cleared %s", bank.description)


def read_teds(bank: MemoryBank) -> bytes:
    """Read the whole bank."""
    return bank.read(0, bank.size)
