"""Exception hierarchy for tedswriter.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from TedsError for easy catching of any tedswriter-specific error.
"""

from __future__ import annotations


class TedsError(Exception):
    """Base exception for all tedswriter errors.

    Errors raised while encoding a field sequence carry the offending field's
    name and position so a failed encode can be traced back to its input row.

    Attributes:
        field_name: Name of the field being processed, if known
        field_index: Position of the field in the input sequence, if known
    """

    def __init__(
        self, message: str, *, field_name: str | None = None, field_index: int | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field_name = field_name
        self.field_index = field_index

    def attach_field(self, field_name: str | None, field_index: int) -> TedsError:
        """Record which field triggered this error (first attachment wins)."""
        if self.field_name is None:
            self.field_name = field_name
        if self.field_index is None:
            self.field_index = field_index
        return self

    def __str__(self) -> str:
        if self.field_name is None and self.field_index is None:
            return self.message
        context = []
        if self.field_index is not None:
            context.append(f"#{self.field_index}")
        if self.field_name is not None:
            context.append(repr(self.field_name))
        return f"field {' '.join(context)}: {self.message}"


class ParseError(TedsError):
    """Raised when a raw value or range specification cannot be parsed.

    Examples:
        - Non-numeric value for a UNINT, CONRES or SINGLE field
        - Malformed date for a DATE field
        - Range spec not of the form "<min> to <max> step <step>"
        - Non-ASCII character in a CHR5 string
    """

    pass


class UnrecognizedType(TedsError):
    """Raised when a field's type tag is not one of the supported kinds."""

    def __init__(self, type_tag: str, **kwargs: object) -> None:
        super().__init__(f"Unrecognized data type {type_tag!r}", **kwargs)  # type: ignore[arg-type]
        self.type_tag = type_tag


class BufferOverflow(TedsError):
    """Raised when packed content would run past the end of the buffer.

    Attributes:
        byte_index: Byte position the packer tried to write
        bit_offset: Bit offset within that byte
        buffer_size: Declared size of the buffer
    """

    def __init__(self, byte_index: int, bit_offset: int, buffer_size: int) -> None:
        super().__init__(
            f"Packing overflows buffer: byte {byte_index} bit {bit_offset} "
            f"is past the end of a {buffer_size}-byte buffer"
        )
        self.byte_index = byte_index
        self.bit_offset = bit_offset
        self.buffer_size = buffer_size


class SourceError(TedsError):
    """Raised when a field source cannot supply its records.

    Examples:
        - Input file missing or unreadable
        - Record with a missing column or invalid bit length
        - Value rejected by the source's range check
    """

    pass


class TransportError(TedsError):
    """Raised when a memory bank read or write fails.

    Examples:
        - Offset or length outside the bank
        - Buffer size does not match the bank size
    """

    pass


class VerificationError(TransportError):
    """Raised when data read back from a bank differs from what was written.

    Attributes:
        offset: First byte offset at which the read-back differs
    """

    def __init__(self, offset: int, expected: int, actual: int) -> None:
        super().__init__(
            f"Read-back mismatch at offset {offset}: wrote 0x{expected:02X}, read 0x{actual:02X}"
        )
        self.offset = offset
        self.expected = expected
        self.actual = actual
