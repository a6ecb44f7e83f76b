"""In-memory memory bank for testing without hardware.

MockMemoryBank keeps its contents in a bytearray and applies writes page by
page, like a real EEPROM scratchpad copy. It can inject random bit errors so
that read-back verification paths can be exercised.
"""

from __future__ import annotations

import logging
import random

from ..exceptions import TransportError
from .bank import MemoryBank
from .config import MockBankConfig

logger = logging.getLogger(__name__)


class MockMemoryBank(MemoryBank):
    """Simulated memory bank.

    Attributes:
        config: Mock bank configuration
        writes: Number of page writes performed

    Examples:
        ```python
        bank = MockMemoryBank(MockBankConfig(size=32))
        bank.write(0, b"\\xfc\\x05\\xff")
        bank.read(0, 3)  # b"\\xfc\\x05\\xff"
        ```
    """

    def __init__(self, config: MockBankConfig | None = None) -> None:
        """Initialize the bank.

        Args:
            config: Mock bank configuration. If None, uses default config.
        """
        self.config = config if config is not None else MockBankConfig()
        self._memory = bytearray([self.config.initial_byte]) * self.config.size
        self._random = random.Random(self.config.seed)
        self.writes = 0

    @property
    def size(self) -> int:
        return self.config.size

    @property
    def page_size(self) -> int:
        return self.config.page_size

    @property
    def description(self) -> str:
        return self.config.description

    def _check_range(self, offset: int, length: int) -> None:
        if offset < 0 or length < 0 or offset + length > self.size:
            raise TransportError(
                f"Access of {length} bytes at offset {offset} is outside the "
                f"{self.size}-byte bank"
            )

    def write(self, offset: int, data: bytes) -> None:
        """Write ``data`` at ``offset``, one page at a time.

        Raises:
            TransportError: If the data does not fit in the bank
        """
        self._check_range(offset, len(data))
        data = self._inject_bit_errors(bytes(data))

        position = offset
        while position < offset + len(data):
            page_end = (position // self.page_size + 1) * self.page_size
            end = min(page_end, offset + len(data))
            self._memory[position:end] = data[position - offset : end - offset]
            self.writes += 1
            logger.debug("Wrote page %d (%d bytes)", position // self.page_size, end - position)
            position = end

    def read(self, offset: int, length: int) -> bytes:
        """Read ``length`` bytes at ``offset``.

        Raises:
            TransportError: If the range is outside the bank
        """
        self._check_range(offset, length)
        return bytes(self._memory[offset : offset + length])

    def _inject_bit_errors(self, data: bytes) -> bytes:
        """Flip each bit with probability ``bit_error_rate``."""
        if self.config.bit_error_rate == 0:
            return data

        corrupted = bytearray(data)
        num_errors = 0
        for byte_idx in range(len(corrupted)):
            for bit_idx in range(8):
                if self._random.random() < self.config.bit_error_rate:
                    corrupted[byte_idx] ^= 1 << bit_idx
                    num_errors += 1

        if num_errors:
            logger.warning("Injected %d bit errors into %d-byte write", num_errors, len(data))
        return bytes(corrupted)
