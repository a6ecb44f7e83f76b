#!/usr/bin/env python3
"""Basic usage example for tedswriter.

This example demonstrates:
1. Describing TEDS fields as they appear in a template sheet
2. Encoding them into a 32-byte buffer
3. Inspecting where each field was packed
4. Decoding the buffer back to values
"""

from __future__ import annotations

from tedswriter import RowFieldSource, decode_fields, encode_with_layout, to_hex, verify_checksums
from tedswriter.utils import required_bytes

# (name, bit length, range, type, value)
TEMPLATE = [
    ("Field", "Length", "Range", "Type", "Entry"),
    ("Manufacturer ID", "14", "17 to 16381", "UNINT", "43"),
    ("Model Number", "15", "0 to 32767", "UNINT", "1234"),
    ("Version Letter", "5", "A to Z", "Chr5", "B"),
    ("Version Number", "6", "0 to 63", "UNINT", "2"),
    ("Serial Number", "24", "0 to 16777215", "UNINT", "123456"),
    ("Calibration Date", "16", "", "DATE", "2021-07-07"),
    ("Sensitivity", "16", "1 to 10000 ±0.5%", "ConRelRes", "100"),
    ("Temperature Offset", "9", "-40 to 125 step 0.5", "ConRes", "25"),
    ("Calibration Initials", "15", "", "Chr5", "PJO"),
]


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("tedswriter Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Loading the template...")
    fields = RowFieldSource(TEMPLATE, header=True).get_fields()
    for f in fields:
        print(f"   {f.name}: {f.raw_value} ({f.type_tag}, {f.bit_length} bits)")
    print()

    print("2. Sizing...")
    print(f"   Needs {required_bytes(fields)} bytes including checksum and terminator")
    print()

    print("3. Encoding...")
    result = encode_with_layout(fields, buffer_size=32)
    for packed in result.fields:
        print(
            f"   {packed.name:<22} byte {packed.start.byte_index:>2} "
            f"bit {packed.start.bit_offset}  0x{packed.bits:X}"
        )
    print(f"   Buffer: {to_hex(result.buffer)}")
    print(f"   Checksums valid: {verify_checksums(result.buffer)}")
    print()

    print("4. Decoding...")
    for name, value in decode_fields(result.buffer, fields).items():
        print(f"   {name}: {value}")


if __name__ == "__main__":
    main()
