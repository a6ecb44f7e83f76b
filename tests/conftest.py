"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from tedswriter import FieldRecord

# (name, bit length, range, type, value): the column layout of a TEDS template sheet
TEMPLATE_ROWS = [
    ("Manufacturer ID", "14", "17 to 16381", "UNINT", "43"),
    ("Model Number", "15", "0 to 32767", "UNINT", "1234"),
    ("Version Letter", "5", "A to Z", "Chr5", "B"),
    ("Version Number", "6", "0 to 63", "UNINT", "2"),
    ("Serial Number", "24", "0 to 16777215", "UNINT", "123456"),
    ("Calibration Date", "16", "", "DATE", "2021-07-07"),
    ("Sensitivity", "16", "1 to 10000 ±0.5%", "ConRelRes", "100"),
    ("Temperature Offset", "9", "-40 to 125 step 0.5", "ConRes", "25"),
    ("Reference Frequency", "32", "", "SINGLE", "100.0"),
    ("Calibration Initials", "15", "", "Chr5", "PJO"),
]


@pytest.fixture
def template_rows() -> list[tuple[str, str, str, str, str]]:
    """Rows of a sample TEDS template, without a header row."""
    return list(TEMPLATE_ROWS)


@pytest.fixture
def template_fields() -> list[FieldRecord]:
    """Field records built from the sample template."""
    return [
        FieldRecord(
            name=name,
            raw_value=value,
            bit_length=int(length),
            range_spec=range_spec,
            type_tag=type_tag,
        )
        for name, length, range_spec, type_tag, value in TEMPLATE_ROWS
    ]


@pytest.fixture
def single_field() -> list[FieldRecord]:
    """One 8-bit UNINT field with value 5."""
    return [FieldRecord(name="Model Number", raw_value="5", bit_length=8, type_tag="UNINT")]
