"""Configuration for TEDS buffer encoding.

This module provides configuration dataclasses that control buffer layout:
its size, which bytes are reserved for checksums, and the pattern the buffer
is filled with before any field is packed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .codec.bitpack import BlockReservedPolicy, FirstByteReservedPolicy, ReservedBytePolicy

RESERVED_BYTE_MODES = ("block", "first")


@dataclass(frozen=True)
class FillPattern:
    """Initial contents of a buffer before encoding.

    Every byte is set to ``fill_byte``, then each block gets the ``markers``
    written at fixed offsets from the block start. Some vendors mark pages in
    use this way; packed fields overwrite any marker they land on.

    Attributes:
        fill_byte: Value for every byte (default 0x00)
        markers: Mapping of offset-within-block to byte value

    Examples:
        ```python
        FillPattern.zero()                          # all 0x00
        FillPattern.erased()                        # all 0xFF, like a blank EPROM
        FillPattern(fill_byte=0x00, markers={31: 0xAA})
        ```
    """

    fill_byte: int = 0x00
    markers: dict[int, int] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        """Validate pattern bytes."""
        if not 0 <= self.fill_byte <= 0xFF:
            raise ValueError(f"fill_byte must be 0-255, got {self.fill_byte}")

        for offset, value in self.markers.items():
            if offset < 0:
                raise ValueError(f"marker offset must be >= 0, got {offset}")
            if not 0 <= value <= 0xFF:
                raise ValueError(f"marker value must be 0-255, got {value}")

    @classmethod
    def zero(cls) -> FillPattern:
        return cls(fill_byte=0x00)

    @classmethod
    def erased(cls) -> FillPattern:
        return cls(fill_byte=0xFF)

    def apply(self, buffer: bytearray, block_size: int) -> bytearray:
        """Fill ``buffer`` in place and return it."""
        buffer[:] = bytes([self.fill_byte]) * len(buffer)
        for start in range(0, len(buffer), block_size):
            for offset, value in self.markers.items():
                if offset < block_size and start + offset < len(buffer):
                    buffer[start + offset] = value
        return buffer


@dataclass(frozen=True)
class EncoderConfig:
    """Configuration for the encoding pipeline.

    Attributes:
        buffer_size: Size of the encoded buffer in bytes (default 32, the main
            memory of a DS2430A-class 1-Wire EEPROM).

        block_size: Checksum block size in bytes (default 32). Only used when
            ``reserved_bytes`` is "block".

        reserved_bytes: Which bytes hold checksums.
            - "block": byte 0 of every ``block_size`` block (default)
            - "first": only byte 0; one checksum covers the whole buffer

        fill: Initialization pattern applied before packing.

        terminator: End-of-data byte appended after the last field (default 0xFF).

        checksum_all_blocks: If True, checksum every block in the buffer; by
            default only blocks holding packed data are checksummed.

    Examples:
        ```python
        from tedswriter import EncoderConfig, FillPattern

        config = EncoderConfig(buffer_size=128, fill=FillPattern.erased())
        ```
    """

    buffer_size: int = 32
    block_size: int = 32
    reserved_bytes: str = "block"
    fill: FillPattern = field(default_factory=FillPattern)
    terminator: int = 0xFF
    checksum_all_blocks: bool = False

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.buffer_size < 2:
            raise ValueError(f"buffer_size must be >= 2, got {self.buffer_size}")

        if self.block_size < 2:
            raise ValueError(f"block_size must be >= 2, got {self.block_size}")

        if self.reserved_bytes not in RESERVED_BYTE_MODES:
            raise ValueError(
                f"reserved_bytes must be one of {RESERVED_BYTE_MODES}, got {self.reserved_bytes!r}"
            )

        if not 0 <= self.terminator <= 0xFF:
            raise ValueError(f"terminator must be 0-255, got {self.terminator}")

    @property
    def policy(self) -> ReservedBytePolicy:
        """Reserved-byte strategy described by this configuration."""
        if self.reserved_bytes == "first":
            return FirstByteReservedPolicy()
        return BlockReservedPolicy(self.block_size)
