"""Configuration for mock memory bank simulation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class MockBankConfig:
    """Configuration for an in-memory mock bank.

    Attributes:
        size: Bank size in bytes (default 32, the DS2430A main memory).
        page_size: Page size in bytes (default 32). Writes are applied one
            page at a time.
        description: Bank description reported to callers (default "Main Memory").
        initial_byte: Contents of a fresh bank (default 0x00).
        bit_error_rate: Probability of flipping each written bit (default 0.0).
            Non-zero values make read-back verification fail, for testing.
        seed: Random seed for reproducible bit errors.

    Examples:
        ```python
        config = MockBankConfig(size=128, page_size=8)
        flaky = MockBankConfig(bit_error_rate=0.05, seed=1)
        ```
    """

    size: int = 32
    page_size: int = 32
    description: str = "Main Memory"
    initial_byte: int = 0x00
    bit_error_rate: float = 0.0
    seed: int | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.size <= 0:
            raise ValueError(f"size must be > 0, got {self.size}")

        if self.page_size <= 0:
            raise ValueError(f"page_size must be > 0, got {self.page_size}")

        if self.size % self.page_size:
            raise ValueError(
                f"size must be a multiple of page_size, got {self.size} and {self.page_size}"
            )

        if not 0 <= self.initial_byte <= 0xFF:
            raise ValueError(f"initial_byte must be 0-255, got {self.initial_byte}")

        if not 0.0 <= self.bit_error_rate <= 1.0:
            raise ValueError(f"bit_error_rate must be 0.0-1.0, got {self.bit_error_rate}")
