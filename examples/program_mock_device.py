"""Programming a simulated TEDS memory without hardware.

MockMemoryBank stands in for the 1-Wire EEPROM of a sensor. With a non-zero
bit error rate the read-back verification catches corrupted writes.

Run this example:
    python examples/program_mock_device.py
"""

from __future__ import annotations

from pathlib import Path

from tedswriter import JsonFieldSource, VerificationError, encode, to_hex
from tedswriter.device import MockBankConfig, MockMemoryBank, clear_bank, read_teds, write_teds

FIELDS_FILE = Path(__file__).with_name("fields.json")


def main() -> None:
    """Write the example fields to a clean bank and to a noisy one."""
    fields = JsonFieldSource(FIELDS_FILE).get_fields()
    buffer = encode(fields, buffer_size=32)

    print("Clean bank")
    print("-" * 70)
    bank = MockMemoryBank(MockBankConfig(page_size=8))
    clear_bank(bank)
    write_teds(bank, buffer)
    print(f"  {bank.description}: {to_hex(read_teds(bank))}")
    print(f"  Page writes: {bank.writes}")
    print()

    print("Noisy bank")
    print("-" * 70)
    noisy = MockMemoryBank(MockBankConfig(bit_error_rate=0.01, seed=7))
    try:
        write_teds(noisy, buffer)
        print("  Verified (no bit errors this time)")
    except VerificationError as e:
        print(f"  {e}")


if __name__ == "__main__":
    main()
