"""TEDS field encodings as a closed tagged union.

Each supported type tag has one Pydantic model carrying exactly the parsed data
it needs. A field's raw spreadsheet strings are parsed into one of these once,
when the field is loaded; conversion to bits then never re-parses text.
"""

from __future__ import annotations

import enum
import re
from datetime import date
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import UnrecognizedType


class TypeTag(str, enum.Enum):
    """Supported TEDS data types."""

    UNINT = "UNINT"
    CHR5 = "CHR5"
    DATE = "DATE"
    CONRES = "CONRES"
    CONRELRES = "CONRELRES"
    SINGLE = "SINGLE"

    @classmethod
    def parse(cls, tag: str | TypeTag) -> TypeTag:
        """Look up a tag, ignoring case and whitespace.

        Accepts the spellings used in TEDS templates ("Chr5", "ConRes",
        "ConRelRes") as well as the canonical upper-case names.

        Raises:
            UnrecognizedType: If the tag names no supported type
        """
        if isinstance(tag, TypeTag):
            return tag
        normalized = re.sub(r"\s", "", str(tag)).upper()
        try:
            return cls(normalized)
        except ValueError:
            raise UnrecognizedType(str(tag)) from None


class _Encoding(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def type_tag(self) -> TypeTag:
        return TypeTag(self.kind)  # type: ignore[attr-defined]


class UnintEncoding(_Encoding):
    """Unsigned integer stored as is."""

    kind: Literal["UNINT"] = "UNINT"
    value: int


class Chr5Encoding(_Encoding):
    """Short ASCII string, five bits per character."""

    kind: Literal["CHR5"] = "CHR5"
    text: str


class DateEncoding(_Encoding):
    """Calendar date stored as days since the TEDS epoch."""

    kind: Literal["DATE"] = "DATE"
    day: date


class ConResEncoding(_Encoding):
    """Constrained resolution: index into a linear table ``minimum + step * n``."""

    kind: Literal["CONRES"] = "CONRES"
    value: float
    minimum: float
    maximum: float
    step: float = Field(gt=0)


class ConRelResEncoding(_Encoding):
    """Constrained relative resolution: index into a logarithmic table.

    Consecutive table entries differ by a factor of
    ``1 + 2 * resolution_percent / 100``.
    """

    kind: Literal["CONRELRES"] = "CONRELRES"
    value: float = Field(gt=0)
    minimum: float = Field(gt=0)
    maximum: float
    resolution_percent: float = Field(gt=0)

    @property
    def ratio(self) -> float:
        return 1 + 2 * self.resolution_percent / 100


class SingleEncoding(_Encoding):
    """IEEE-754 single precision float."""

    kind: Literal["SINGLE"] = "SINGLE"
    value: float


Encoding = Annotated[
    Union[
        UnintEncoding,
        Chr5Encoding,
        DateEncoding,
        ConResEncoding,
        ConRelResEncoding,
        SingleEncoding,
    ],
    Field(discriminator="kind"),
]
