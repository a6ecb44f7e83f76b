"""Abstract interface for TEDS field sources.

A field source supplies the ordered FieldRecord sequence to encode. Where the
records come from (a spreadsheet export, a JSON file, rows built in code) is up
to the implementation; the encoder only needs get_fields().
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from ..exceptions import SourceError
from ..models.record import FieldRecord

RangeCheck = Callable[[str, str], bool]


def within_range(raw_value: str, range_spec: str) -> bool:
    """Check a raw value against its declared range. Accepts everything.

    Per-type range semantics ("0 to 255", "-40 to 125 step 0.5", ...) have not
    been pinned down, so this hook never rejects. Pass a stricter callable to
    FieldSource to enforce ranges.
    """
    return True


class FieldSource(ABC):
    """Abstract source of TEDS field records.

    Records are loaded at most once; later calls to get_fields() return the
    cached sequence.

    Examples:
        ```python
        source = RowFieldSource(rows)
        fields = source.get_fields()   # loads and range-checks
        fields = source.get_fields()   # cached
        ```
    """

    def __init__(self, range_check: RangeCheck = within_range) -> None:
        """Initialize the source.

        Args:
            range_check: Callable(raw_value, range_spec) -> bool applied to every record
        """
        self._range_check = range_check
        self._fields: list[FieldRecord] | None = None

    @abstractmethod
    def _load(self) -> list[FieldRecord]:
        """Read the records from the underlying data.

        Raises:
            SourceError: If the data cannot be read
        """

    def get_fields(self) -> list[FieldRecord]:
        """Return the ordered field records, loading them on first use.

        Raises:
            SourceError: If loading fails or a value is out of its declared range
        """
        if self._fields is None:
            records = self._load()
            for record in records:
                if not self._range_check(record.raw_value, record.range_spec):
                    raise SourceError(
                        f"{record.raw_value} is outside of the range for {record.name}",
                        field_name=record.name,
                    )
            self._fields = records
        return list(self._fields)
