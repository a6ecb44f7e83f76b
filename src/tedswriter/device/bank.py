"""Abstract interface for device memory banks.

A memory bank is the page-oriented memory of a sensor identification chip
(for example the main memory of a 1-Wire EEPROM). The encoder's buffer size
matches the bank size; the bank only has to write bytes at an offset and read
them back.

Design Pattern: Strategy Pattern / Adapter Pattern
- MemoryBank: Abstract interface (device-agnostic)
- MockMemoryBank: In-memory implementation (testing without hardware)
- Hardware adapters wrap a vendor API behind the same two calls
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class MemoryBank(ABC):
    """Abstract page-oriented memory bank.

    Examples:
        ```python
        from tedswriter.device import MockMemoryBank, write_teds

        bank = MockMemoryBank()
        write_teds(bank, encode(fields, buffer_size=bank.size))
        ```
    """

    @property
    @abstractmethod
    def size(self) -> int:
        """Bank size in bytes."""

    @property
    @abstractmethod
    def page_size(self) -> int:
        """Page size in bytes."""

    @property
    def description(self) -> str:
        """Human-readable bank description (e.g. "Main Memory")."""
        return type(self).__name__

    @abstractmethod
    def write(self, offset: int, data: bytes) -> None:
        """Write ``data`` starting at ``offset``.

        Raises:
            TransportError: If the write is out of range or fails
        """

    @abstractmethod
    def read(self, offset: int, length: int) -> bytes:
        """Read ``length`` bytes starting at ``offset``.

        Raises:
            TransportError: If the read is out of range or fails
        """
