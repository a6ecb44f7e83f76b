"""Conversion of TEDS field values to fixed-width unsigned integers.

This module parses a field's raw text (value, type tag and range
specification) into a typed Encoding and maps that encoding to the unsigned
32-bit integer the bit packer consumes. Signed results are stored as 32-bit
two's complement; the packer keeps only the low ``bit_length`` bits.
"""

from __future__ import annotations

import logging
import math
import re
import struct
from datetime import date

from pydantic import ValidationError

from ..exceptions import ParseError
from ..models.encodings import (
    Chr5Encoding,
    ConRelResEncoding,
    ConResEncoding,
    DateEncoding,
    Encoding,
    SingleEncoding,
    TypeTag,
    UnintEncoding,
)
from ..models.record import FieldRecord, TedsField

logger = logging.getLogger(__name__)

TEDS_EPOCH = date(1998, 1, 1)
UINT32_MASK = 0xFFFFFFFF
CHR5_OFFSET = 64
CHR5_BITS = 5

_NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_CONRES_RE = re.compile(
    rf"^\s*(?P<min>{_NUMBER})\s*to\s*(?P<max>{_NUMBER})\s*step\s*(?P<step>{_NUMBER})\s*$",
    re.IGNORECASE,
)
_CONRELRES_RE = re.compile(
    rf"^\s*(?P<min>{_NUMBER})\s*to\s*(?P<max>{_NUMBER})\s*"
    rf"(?:±|\+/-|\+-)\s*(?P<pct>{_NUMBER})\s*%\s*$",
    re.IGNORECASE,
)


def parse_number(text: str, what: str = "value") -> float:
    """Parse a finite decimal number.

    Raises:
        ParseError: If text is not a finite number
    """
    try:
        number = float(str(text).strip())
    except ValueError:
        raise ParseError(f"Cannot parse {what} {text!r} as a number") from None
    if not math.isfinite(number):
        raise ParseError(f"{what.capitalize()} {text!r} is not finite")
    return number


def parse_date(text: str) -> date:
    """Parse an ISO ``YYYY-MM-DD`` date, ignoring any trailing time part."""
    day_part = str(text).strip().split("T")[0].split(" ")[0]
    try:
        return date.fromisoformat(day_part)
    except ValueError:
        raise ParseError(f"Cannot parse {text!r} as a YYYY-MM-DD date") from None


def parse_conres_range(range_spec: str) -> tuple[float, float, float]:
    """Parse ``"<min> to <max> step <step>"`` into (min, max, step)."""
    match = _CONRES_RE.match(range_spec)
    if match is None:
        raise ParseError(f"Range {range_spec!r} is not of the form '<min> to <max> step <step>'")
    minimum = parse_number(match["min"], "range minimum")
    maximum = parse_number(match["max"], "range maximum")
    step = parse_number(match["step"], "step")
    if step <= 0:
        raise ParseError(f"Step must be > 0, got {step}")
    return minimum, maximum, step


def parse_conrelres_range(range_spec: str) -> tuple[float, float, float]:
    """Parse ``"<min> to <max> ±<pct>%"`` into (min, max, pct)."""
    match = _CONRELRES_RE.match(range_spec)
    if match is None:
        raise ParseError(f"Range {range_spec!r} is not of the form '<min> to <max> ±<pct>%'")
    minimum = parse_number(match["min"], "range minimum")
    maximum = parse_number(match["max"], "range maximum")
    pct = parse_number(match["pct"], "resolution")
    if minimum <= 0:
        raise ParseError(f"Relative resolution needs a positive minimum, got {minimum}")
    if pct <= 0:
        raise ParseError(f"Resolution must be > 0%, got {pct}")
    if 1 + 2 * pct / 100 <= 1.0:
        raise ParseError(f"Resolution {pct}% is too small to step the table")
    return minimum, maximum, pct


def round_half_up(number: float) -> int:
    """Round to the nearest integer, rounding halves up.

    Raises:
        ParseError: If number is not finite
    """
    if not math.isfinite(number):
        raise ParseError(f"Table index {number} is not finite")
    return math.floor(number + 0.5)


def chr5_encode(text: str) -> int:
    """Pack a string into 5-bit lanes, first character in the lowest lane.

    Each character maps to ``(ord(c) - 64) & 0x1F``, so "A".."Z" become 1..26
    and lower case letters share the codes of their upper case forms.

    Raises:
        ParseError: If the string contains a non-ASCII character
    """
    bits = 0
    for i, char in enumerate(text):
        code_point = ord(char)
        if code_point > 0x7F:
            raise ParseError(f"Character {char!r} cannot be encoded as Chr5")
        bits |= ((code_point - CHR5_OFFSET) & 0x1F) << (CHR5_BITS * i)
    return bits & UINT32_MASK


def days_since_epoch(day: date) -> int:
    """Signed number of days from 1998-01-01 to ``day``."""
    return (day - TEDS_EPOCH).days


def conres_index(value: float, minimum: float, step: float) -> int:
    return round_half_up((value - minimum) / step)


def conrelres_index(value: float, minimum: float, resolution_percent: float) -> int:
    ratio = 1 + 2 * resolution_percent / 100
    if ratio <= 1.0:
        raise ParseError(f"Resolution {resolution_percent}% is too small to step the table")
    scale = value / minimum
    if scale <= 0:
        raise ParseError(f"Value {value} is too small relative to minimum {minimum}")
    return round_half_up(math.log(scale) / math.log(ratio))


def single_bits(value: float) -> int:
    """IEEE-754 single precision bit pattern of ``value``.

    Values beyond the float32 range are rejected rather than stored as
    infinity, and parse_number() already refuses "inf" and "nan".

    Raises:
        ParseError: If value does not fit in a single precision float
    """
    try:
        packed = struct.pack(">f", value)
    except (OverflowError, struct.error):
        raise ParseError(f"Value {value} does not fit in a single precision float") from None
    return struct.unpack(">I", packed)[0]


def parse_encoding(raw_value: str, type_tag: str | TypeTag, range_spec: str = "") -> Encoding:
    """Parse a field's raw text into a typed Encoding.

    Args:
        raw_value: Field value as text
        type_tag: One of the supported type tags
        range_spec: Range specification (required for CONRES and CONRELRES)

    Returns:
        Encoding variant for the tag

    Raises:
        UnrecognizedType: If type_tag is not supported
        ParseError: If raw_value or range_spec cannot be parsed
    """
    tag = TypeTag.parse(type_tag)
    try:
        if tag is TypeTag.UNINT:
            return UnintEncoding(value=int(parse_number(raw_value)))

        if tag is TypeTag.CHR5:
            return Chr5Encoding(text=str(raw_value))

        if tag is TypeTag.DATE:
            return DateEncoding(day=parse_date(raw_value))

        if tag is TypeTag.CONRES:
            minimum, maximum, step = parse_conres_range(range_spec)
            return ConResEncoding(
                value=parse_number(raw_value), minimum=minimum, maximum=maximum, step=step
            )

        if tag is TypeTag.CONRELRES:
            minimum, maximum, pct = parse_conrelres_range(range_spec)
            value = parse_number(raw_value)
            if value <= 0:
                raise ParseError(f"Relative resolution value must be > 0, got {value}")
            return ConRelResEncoding(
                value=value, minimum=minimum, maximum=maximum, resolution_percent=pct
            )

        return SingleEncoding(value=parse_number(raw_value))
    except ValidationError as err:
        raise ParseError(f"Invalid {tag.value} field: {err}") from err


def to_bits(encoding: Encoding) -> int:
    """Map a parsed encoding to its unsigned 32-bit representation.

    Raises:
        ParseError: If the value cannot be represented (e.g. float32 overflow)
    """
    if isinstance(encoding, UnintEncoding):
        bits = encoding.value
    elif isinstance(encoding, Chr5Encoding):
        bits = chr5_encode(encoding.text)
    elif isinstance(encoding, DateEncoding):
        bits = days_since_epoch(encoding.day)
    elif isinstance(encoding, ConResEncoding):
        bits = conres_index(encoding.value, encoding.minimum, encoding.step)
    elif isinstance(encoding, ConRelResEncoding):
        bits = conrelres_index(encoding.value, encoding.minimum, encoding.resolution_percent)
    else:
        bits = single_bits(encoding.value)
    return bits & UINT32_MASK


def convert(raw_value: str, type_tag: str | TypeTag, range_spec: str = "") -> int:
    """Convert a raw field value to the unsigned integer that gets packed.

    Example:
        >>> convert("5", "UNINT")
        5
        >>> convert("2.5", "ConRes", "0 to 10 step 0.5")
        5
        >>> hex(convert("1.0", "SINGLE"))
        '0x3f800000'
    """
    return to_bits(parse_encoding(raw_value, type_tag, range_spec))


def parse_field(record: FieldRecord) -> TedsField:
    """Parse a FieldRecord into a TedsField, deciding its encoding once."""
    encoding = parse_encoding(record.raw_value, record.type_tag, record.range_spec)
    if isinstance(encoding, Chr5Encoding):
        expected = CHR5_BITS * len(encoding.text)
        if expected != record.bit_length:
            logger.warning(
                "Chr5 field %r: %d characters need %d bits but the field has %d",
                record.name,
                len(encoding.text),
                expected,
                record.bit_length,
            )
    return TedsField(name=record.name, bit_length=record.bit_length, encoding=encoding)
