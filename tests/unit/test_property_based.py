"""Property-based tests using hypothesis."""

from __future__ import annotations

import struct
from datetime import date, timedelta

from hypothesis import given
from hypothesis import strategies as st

from tedswriter import FieldRecord, encode_with_layout
from tedswriter.codec.bitpack import Cursor, append, extract
from tedswriter.codec.convert import convert, parse_encoding
from tedswriter.codec.decoder import extract_bits, from_bits
from tedswriter.utils.checksum import apply_checksums, verify_checksums

field_specs = st.lists(
    st.integers(min_value=1, max_value=32).flatmap(
        lambda n: st.tuples(st.integers(min_value=0, max_value=(1 << n) - 1), st.just(n))
    ),
    min_size=1,
    max_size=20,
)


class TestPackingProperties:
    """Property-based tests for the bit packer."""

    @given(specs=field_specs, start=st.integers(min_value=1, max_value=31))
    def test_append_extract_roundtrip(self, specs: list[tuple[int, int]], start: int) -> None:
        """Test every field reads back from where it was packed."""
        buffer = bytearray(128)
        cursor = Cursor(start)
        placements = []
        for bits, length in specs:
            placements.append(cursor)
            cursor = append(buffer, cursor, bits, length)

        for (bits, length), at in zip(specs, placements):
            value, _ = extract(buffer, at, length)
            assert value == bits

    @given(specs=field_specs)
    def test_reserved_bytes_untouched(self, specs: list[tuple[int, int]]) -> None:
        """Test no field bit lands on a checksum byte."""
        buffer = bytearray(b"\xa5" * 128)
        cursor = Cursor(1)
        for bits, length in specs:
            cursor = append(buffer, cursor, bits, length)

        assert all(buffer[i] == 0xA5 for i in range(0, 128, 32))

    @given(lengths=st.lists(st.integers(min_value=1, max_value=32), min_size=1, max_size=10))
    def test_byte_boundary_resets_offset(self, lengths: list[int]) -> None:
        """Test the cursor is byte aligned exactly when the bit total is."""
        buffer = bytearray(128)
        cursor = Cursor(1)
        for length in lengths:
            cursor = append(buffer, cursor, 0, length)

        assert (cursor.bit_offset == 0) == (sum(lengths) % 8 == 0)

    @given(specs=field_specs)
    def test_encode_layout_roundtrip(self, specs: list[tuple[int, int]]) -> None:
        """Test encode() followed by extraction reproduces the packed values."""
        fields = [
            FieldRecord(name=f"f{i}", raw_value=str(bits), bit_length=length, type_tag="UNINT")
            for i, (bits, length) in enumerate(specs)
        ]
        result = encode_with_layout(fields, buffer_size=128)

        assert extract_bits(result.buffer, fields) == [bits for bits, _ in specs]
        assert verify_checksums(result.buffer)


class TestChecksumProperties:
    """Property-based tests for block checksums."""

    @given(data=st.binary(min_size=1, max_size=256))
    def test_blocks_sum_to_zero(self, data: bytes) -> None:
        buffer = apply_checksums(bytearray(data))
        for start in range(0, len(buffer), 32):
            block = buffer[start : start + 32]
            assert sum(b - 256 if b > 127 else b for b in block) % 256 == 0

    @given(data=st.binary(min_size=1, max_size=256))
    def test_idempotent(self, data: bytes) -> None:
        once = bytes(apply_checksums(bytearray(data)))
        twice = bytes(apply_checksums(bytearray(once)))
        assert once == twice


class TestConversionProperties:
    """Property-based tests for conversions and their inverses."""

    @given(
        value=st.floats(min_value=-40.0, max_value=125.0),
        step=st.sampled_from([0.01, 0.1, 0.5, 1.0, 2.5]),
    )
    def test_conres_within_half_step(self, value: float, step: float) -> None:
        range_spec = f"-40 to 125 step {step}"
        bits = convert(repr(value), "ConRes", range_spec)
        decoded = from_bits(parse_encoding("0", "ConRes", range_spec), bits, 32)
        assert abs(decoded - value) <= step / 2 + 1e-9

    @given(value=st.floats(min_value=1.0, max_value=10000.0))
    def test_conrelres_within_relative_resolution(self, value: float) -> None:
        range_spec = "1 to 10000 ±0.5%"
        bits = convert(repr(value), "ConRelRes", range_spec)
        decoded = from_bits(parse_encoding("1", "ConRelRes", range_spec), bits, 32)
        assert abs(decoded / value - 1) <= 1.01**0.5 - 1 + 1e-9

    @given(text=st.text(alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZ", min_size=1, max_size=6))
    def test_chr5_roundtrip(self, text: str) -> None:
        bits = convert(text, "Chr5")
        assert from_bits(parse_encoding("", "Chr5"), bits, 5 * len(text)) == text

    @given(offset=st.integers(min_value=-30000, max_value=30000))
    def test_date_roundtrip(self, offset: int) -> None:
        day = date(1998, 1, 1) + timedelta(days=offset)
        bits = convert(day.isoformat(), "DATE")
        assert from_bits(parse_encoding(day.isoformat(), "DATE"), bits, 16) == day

    @given(value=st.floats(width=32, allow_nan=False, allow_infinity=False))
    def test_single_roundtrip(self, value: float) -> None:
        bits = convert(repr(value), "SINGLE")
        assert from_bits(parse_encoding("0", "SINGLE"), bits, 32) == value
        assert struct.pack(">I", bits) == struct.pack(">f", value)
