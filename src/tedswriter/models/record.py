"""Field records and parsed TEDS fields.

A FieldRecord is one row of input exactly as the field source supplied it: all
values are still text. A TedsField is the same field after its raw value and
range specification have been parsed into a typed Encoding.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .encodings import Encoding, TypeTag


class FieldRecord(BaseModel):
    """One input row describing a TEDS field.

    Example:
        >>> record = FieldRecord(
        ...     name="Manufacturer ID",
        ...     raw_value="43",
        ...     bit_length=14,
        ...     range_spec="17 to 16381",
        ...     type_tag="UNINT",
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    raw_value: str
    bit_length: int = Field(ge=1, le=32)
    range_spec: str = ""
    type_tag: str

    @property
    def tag(self) -> TypeTag:
        """The type tag resolved to a TypeTag (raises UnrecognizedType)."""
        return TypeTag.parse(self.type_tag)


class TedsField(BaseModel):
    """A field ready for conversion: name, width and parsed encoding."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    bit_length: int = Field(ge=1, le=32)
    encoding: Encoding
