"""Field records and typed encodings."""

from __future__ import annotations

from .encodings import (
    Chr5Encoding,
    ConRelResEncoding,
    ConResEncoding,
    DateEncoding,
    Encoding,
    SingleEncoding,
    TypeTag,
    UnintEncoding,
)
from .record import FieldRecord, TedsField

__all__ = [
    "FieldRecord",
    "TedsField",
    "TypeTag",
    "Encoding",
    "UnintEncoding",
    "Chr5Encoding",
    "DateEncoding",
    "ConResEncoding",
    "ConRelResEncoding",
    "SingleEncoding",
]
