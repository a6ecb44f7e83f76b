"""Sources of TEDS field records.

## Available Sources

- **RowFieldSource**: rows of (name, length, range, type, value) cells
- **JsonFieldSource**: a JSON file with a list of record objects

Custom sources subclass FieldSource and implement ``_load()``.
"""

from __future__ import annotations

from .base import FieldSource, RangeCheck, within_range
from .rows import JsonFieldSource, RowFieldSource

__all__ = [
    "FieldSource",
    "RangeCheck",
    "within_range",
    "RowFieldSource",
    "JsonFieldSource",
]
