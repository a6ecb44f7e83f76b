"""Unit tests for field value conversion."""

from __future__ import annotations

import logging
from datetime import date

import pytest

from tedswriter.codec.convert import (
    chr5_encode,
    convert,
    parse_conrelres_range,
    parse_conres_range,
    parse_encoding,
    parse_field,
    round_half_up,
    to_bits,
)
from tedswriter.exceptions import ParseError, UnrecognizedType
from tedswriter.models import (
    Chr5Encoding,
    ConRelResEncoding,
    ConResEncoding,
    DateEncoding,
    FieldRecord,
    SingleEncoding,
    TypeTag,
    UnintEncoding,
)


class TestTypeTag:
    """Test type tag lookup."""

    def test_canonical(self) -> None:
        """Test upper-case names."""
        assert TypeTag.parse("UNINT") is TypeTag.UNINT
        assert TypeTag.parse("SINGLE") is TypeTag.SINGLE

    def test_template_spellings(self) -> None:
        """Test mixed-case spellings and stray whitespace."""
        assert TypeTag.parse("Chr5") is TypeTag.CHR5
        assert TypeTag.parse("ConRes") is TypeTag.CONRES
        assert TypeTag.parse(" Con Rel Res ") is TypeTag.CONRELRES

    def test_unknown(self) -> None:
        """Test unknown tags raise UnrecognizedType."""
        with pytest.raises(UnrecognizedType, match="Unrecognized data type 'Double'") as exc_info:
            TypeTag.parse("Double")
        assert exc_info.value.type_tag == "Double"


class TestUnint:
    """Test UNINT conversion."""

    def test_integer(self) -> None:
        assert convert("5", "UNINT") == 5

    def test_truncates(self) -> None:
        """Test fractional values are truncated toward zero."""
        assert convert("5.9", "UNINT") == 5
        assert convert("43.0", "UNINT") == 43

    def test_negative_is_twos_complement(self) -> None:
        assert convert("-1", "UNINT") == 0xFFFFFFFF

    def test_range_spec_ignored(self) -> None:
        assert convert("7", "UNINT", "0 to 255") == 7

    def test_not_a_number(self) -> None:
        with pytest.raises(ParseError, match="Cannot parse"):
            convert("abc", "UNINT")

    def test_not_finite(self) -> None:
        with pytest.raises(ParseError, match="not finite"):
            convert("nan", "UNINT")


class TestChr5:
    """Test Chr5 conversion."""

    def test_single_character(self) -> None:
        """Test "A".."Z" map to 1..26."""
        assert convert("A", "Chr5") == 1
        assert convert("Z", "Chr5") == 26

    def test_lanes(self) -> None:
        """Test character i occupies bits 5i..5i+4."""
        bits = convert("AB", "Chr5")
        assert bits == 1 | (2 << 5)
        assert bits & 0x1F == 1
        assert (bits >> 5) & 0x1F == 2

    def test_three_characters(self) -> None:
        bits = chr5_encode("PJO")
        assert [(bits >> (5 * i)) & 0x1F for i in range(3)] == [16, 10, 15]

    def test_lower_case_shares_codes(self) -> None:
        assert chr5_encode("ab") == chr5_encode("AB")

    def test_lanes_are_independent(self) -> None:
        """Test characters below "@" do not borrow from neighbouring lanes."""
        bits = chr5_encode(" A")
        assert bits & 0x1F == 0
        assert (bits >> 5) & 0x1F == 1

    def test_truncated_to_32_bits(self) -> None:
        assert chr5_encode("ZZZZZZZ") <= 0xFFFFFFFF

    def test_non_ascii(self) -> None:
        with pytest.raises(ParseError, match="cannot be encoded as Chr5"):
            convert("Ä", "Chr5")


class TestDate:
    """Test DATE conversion."""

    def test_epoch(self) -> None:
        assert convert("1998-01-01", "DATE") == 0

    def test_after_epoch(self) -> None:
        assert convert("1998-01-02", "DATE") == 1
        expected = (date(2021, 7, 7) - date(1998, 1, 1)).days
        assert convert("2021-07-07", "DATE") == expected

    def test_before_epoch(self) -> None:
        """Test earlier dates are negative, stored as two's complement."""
        assert convert("1997-12-31", "DATE") == 0xFFFFFFFF

    def test_time_part_ignored(self) -> None:
        assert convert("1998-01-02 00:00:00", "DATE") == 1
        assert convert("1998-01-02T12:30:00", "DATE") == 1

    def test_bad_date(self) -> None:
        with pytest.raises(ParseError, match="YYYY-MM-DD"):
            convert("07/07/2021", "DATE")


class TestConRes:
    """Test constrained resolution conversion."""

    def test_index(self) -> None:
        assert convert("25", "ConRes", "-40 to 125 step 0.5") == 130

    def test_minimum_is_zero(self) -> None:
        assert convert("-40", "ConRes", "-40 to 125 step 0.5") == 0

    def test_rounds_half_up(self) -> None:
        assert convert("0.25", "ConRes", "0 to 10 step 0.5") == 1
        assert convert("0.24", "ConRes", "0 to 10 step 0.5") == 0

    def test_parse_range(self) -> None:
        assert parse_conres_range("-40 to 125 step 0.5") == (-40.0, 125.0, 0.5)
        assert parse_conres_range("0TO10STEP1") == (0.0, 10.0, 1.0)

    def test_bad_range(self) -> None:
        with pytest.raises(ParseError, match="step"):
            convert("1", "ConRes", "0 - 10")

    def test_zero_step(self) -> None:
        with pytest.raises(ParseError, match="Step must be > 0"):
            convert("1", "ConRes", "0 to 10 step 0")

    def test_index_overflow(self) -> None:
        """Test finite inputs whose table index overflows to infinity."""
        with pytest.raises(ParseError, match="not finite"):
            convert("1e300", "ConRes", "0 to 1 step 1e-300")


class TestConRelRes:
    """Test constrained relative resolution conversion."""

    def test_index(self) -> None:
        """Test ln(100) / ln(1.01) rounds to 463."""
        assert convert("100", "ConRelRes", "1 to 10000 ±0.5%") == 463

    def test_minimum_is_zero(self) -> None:
        assert convert("1", "ConRelRes", "1 to 10000 ±0.5%") == 0

    def test_plus_minus_spelling(self) -> None:
        assert convert("100", "ConRelRes", "1 to 10000 +/-0.5%") == 463

    def test_parse_range(self) -> None:
        assert parse_conrelres_range("0.1 to 1000 ± 2 %") == (0.1, 1000.0, 2.0)

    def test_non_positive_value(self) -> None:
        with pytest.raises(ParseError, match="must be > 0"):
            convert("0", "ConRelRes", "1 to 10000 ±0.5%")

    def test_non_positive_minimum(self) -> None:
        with pytest.raises(ParseError, match="positive minimum"):
            convert("5", "ConRelRes", "0 to 10000 ±0.5%")

    def test_bad_range(self) -> None:
        with pytest.raises(ParseError):
            convert("5", "ConRelRes", "1 to 10000 step 1")

    def test_resolution_too_small(self) -> None:
        """Test a resolution that leaves the table ratio at exactly 1."""
        with pytest.raises(ParseError, match="too small to step the table"):
            convert("5", "ConRelRes", "1 to 10 ±1e-20%")

    def test_ratio_checked_for_built_encodings(self) -> None:
        encoding = ConRelResEncoding(value=5, minimum=1, maximum=10, resolution_percent=1e-20)
        with pytest.raises(ParseError, match="too small to step the table"):
            to_bits(encoding)

    def test_index_overflow(self) -> None:
        with pytest.raises(ParseError, match="not finite"):
            convert("1e300", "ConRelRes", "1e-300 to 1 ±0.5%")


class TestSingle:
    """Test SINGLE conversion."""

    def test_one(self) -> None:
        assert convert("1.0", "SINGLE") == 0x3F800000

    def test_negative(self) -> None:
        assert convert("-2", "SINGLE") == 0xC0000000

    def test_overflow(self) -> None:
        with pytest.raises(ParseError, match="single precision"):
            convert("1e39", "SINGLE")


class TestParseEncoding:
    """Test parsing raw text into encodings."""

    def test_variants(self) -> None:
        assert parse_encoding("5", "UNINT") == UnintEncoding(value=5)
        assert parse_encoding("AB", "Chr5") == Chr5Encoding(text="AB")
        assert parse_encoding("1998-01-01", "DATE") == DateEncoding(day=date(1998, 1, 1))
        assert parse_encoding("1.5", "SINGLE") == SingleEncoding(value=1.5)

    def test_conres_carries_table(self) -> None:
        encoding = parse_encoding("25", "ConRes", "-40 to 125 step 0.5")
        assert isinstance(encoding, ConResEncoding)
        assert (encoding.minimum, encoding.maximum, encoding.step) == (-40.0, 125.0, 0.5)

    def test_conrelres_ratio(self) -> None:
        encoding = parse_encoding("100", "ConRelRes", "1 to 10000 ±0.5%")
        assert isinstance(encoding, ConRelResEncoding)
        assert encoding.ratio == pytest.approx(1.01)

    def test_type_tag_property(self) -> None:
        assert parse_encoding("5", "unint").type_tag is TypeTag.UNINT

    def test_to_bits_matches_convert(self) -> None:
        encoding = parse_encoding("25", "ConRes", "-40 to 125 step 0.5")
        assert to_bits(encoding) == convert("25", "ConRes", "-40 to 125 step 0.5")

    def test_unknown_type(self) -> None:
        with pytest.raises(UnrecognizedType):
            parse_encoding("5", "Double")


class TestParseField:
    """Test turning records into parsed fields."""

    def test_parse_field(self) -> None:
        record = FieldRecord(
            name="Temperature Offset",
            raw_value="25",
            bit_length=9,
            range_spec="-40 to 125 step 0.5",
            type_tag="ConRes",
        )
        teds_field = parse_field(record)

        assert teds_field.name == "Temperature Offset"
        assert teds_field.bit_length == 9
        assert isinstance(teds_field.encoding, ConResEncoding)

    def test_chr5_length_mismatch_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        record = FieldRecord(name="Initials", raw_value="PJ", bit_length=15, type_tag="Chr5")
        with caplog.at_level(logging.WARNING, logger="tedswriter.codec.convert"):
            parse_field(record)

        assert "Initials" in caplog.text
        assert "need 10 bits" in caplog.text


def test_round_half_up() -> None:
    """Test halves round toward positive infinity."""
    assert round_half_up(0.5) == 1
    assert round_half_up(1.5) == 2
    assert round_half_up(2.5) == 3
    assert round_half_up(-0.5) == 0
    assert round_half_up(1.49) == 1


def test_round_half_up_not_finite() -> None:
    with pytest.raises(ParseError, match="not finite"):
        round_half_up(float("inf"))
