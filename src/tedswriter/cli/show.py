"""Field listing and encode CLI commands."""

from __future__ import annotations

from pathlib import Path

from ..codec.decoder import decode_fields
from ..codec.encoder import encode_with_layout
from ..config import EncoderConfig
from ..models.record import FieldRecord
from ..source.rows import JsonFieldSource
from ..utils.hexfmt import to_hex


def load_fields(file_path: Path) -> list[FieldRecord]:
    """Load field records from a JSON file."""
    return JsonFieldSource(file_path).get_fields()


def show_fields(fields: list[FieldRecord]) -> None:
    """Print the data to be written, one field per line."""
    print("Data to be Written:")
    width = max((len(f.name) for f in fields), default=0)
    for f in fields:
        print(f"  {f.name.ljust(width)}  {f.raw_value}")
    print()


def encode_fields(fields: list[FieldRecord], config: EncoderConfig, decode: bool = False) -> None:
    """Encode fields and print the layout and hex buffer.

    Args:
        fields: Field records in packing order
        config: Encoder configuration
        decode: Also print the values decoded back from the buffer
    """
    result = encode_with_layout(fields, config=config)

    print(f"{'-' * 28} Layout {'-' * 28}")
    for i, packed in enumerate(result.fields, 1):
        field_desc = f"{i}. {packed.name}"
        position = f"byte {packed.start.byte_index} bit {packed.start.bit_offset}"
        dots = "." * max(1, 40 - len(field_desc))
        print(f"        {field_desc}{dots}{packed.bit_length:>2} bits @ {position}")
    used = result.cursor.last_byte + 1
    print(f"Used {used} of {len(result.buffer)} bytes")
    print()

    print(to_hex(result.buffer))

    if decode:
        print()
        print(f"{'-' * 27} Read-back {'-' * 27}")
        for name, value in decode_fields(result.buffer, fields, config.policy).items():
            print(f"  {name}: {value}")
