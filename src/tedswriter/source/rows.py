"""Field sources backed by in-memory rows and JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Sequence

from pydantic import ValidationError

from ..exceptions import SourceError
from ..models.record import FieldRecord
from .base import FieldSource, RangeCheck, within_range

# Column order of a TEDS template sheet
ROW_COLUMNS = ("name", "bit_length", "range_spec", "type_tag", "raw_value")


def _cell_text(cell: Any) -> str:
    return "" if cell is None else str(cell).strip()


class RowFieldSource(FieldSource):
    """Field records from rows of cells.

    Each row holds, in order: field name, bit length, range, type and value,
    the column layout of a TEDS template sheet. Rows with an empty name are
    skipped, and a leading header row can be dropped with ``header=True``.
    Bit lengths may be written as floats ("8.0").

    Example:
        >>> source = RowFieldSource([
        ...     ("Field", "Length", "Range", "Type", "Entry"),
        ...     ("Version Letter", "5", "A to Z", "Chr5", "B"),
        ... ], header=True)
        >>> source.get_fields()[0].bit_length
        5
    """

    def __init__(
        self,
        rows: Iterable[Sequence[Any]],
        header: bool = False,
        range_check: RangeCheck = within_range,
    ) -> None:
        super().__init__(range_check)
        self._rows = list(rows)
        self._header = header

    def _load(self) -> list[FieldRecord]:
        rows = self._rows[1:] if self._header else self._rows
        records = []
        for row_number, row in enumerate(rows, start=2 if self._header else 1):
            cells = [_cell_text(cell) for cell in row]
            if not cells or not cells[0]:
                continue
            if len(cells) < len(ROW_COLUMNS):
                raise SourceError(
                    f"Row {row_number} has {len(cells)} columns, expected {len(ROW_COLUMNS)}",
                    field_name=cells[0],
                )
            name, length, range_spec, type_tag, raw_value = cells[: len(ROW_COLUMNS)]
            try:
                bit_length = int(float(length))
            except ValueError:
                raise SourceError(
                    f"Row {row_number}: bit length {length!r} is not a number", field_name=name
                ) from None
            try:
                records.append(
                    FieldRecord(
                        name=name,
                        raw_value=raw_value,
                        bit_length=bit_length,
                        range_spec=range_spec,
                        type_tag=type_tag,
                    )
                )
            except ValidationError as err:
                raise SourceError(f"Row {row_number}: {err}", field_name=name) from err
        return records


class JsonFieldSource(FieldSource):
    """Field records from a JSON file holding a list of record objects.

    Example file:
        ```json
        [
          {"name": "Model Number", "raw_value": "5", "bit_length": 8, "type_tag": "UNINT"},
          {"name": "Sensitivity", "raw_value": "100", "bit_length": 16,
           "range_spec": "0.1 to 1000 ±0.05%", "type_tag": "ConRelRes"}
        ]
        ```
    """

    def __init__(self, path: str | Path, range_check: RangeCheck = within_range) -> None:
        super().__init__(range_check)
        self.path = Path(path)

    def _load(self) -> list[FieldRecord]:
        try:
            entries = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as err:
            raise SourceError(f"Cannot read {self.path}: {err}") from err
        except json.JSONDecodeError as err:
            raise SourceError(f"{self.path} is not valid JSON: {err}") from err

        if not isinstance(entries, list):
            raise SourceError(f"{self.path} must contain a list of field records")

        records = []
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise SourceError(f"{self.path}: entry {index} is not an object")
            # Spreadsheet exports often carry numbers where text is expected
            entry = {
                key: str(value) if key in ("raw_value", "range_spec", "type_tag") else value
                for key, value in entry.items()
            }
            try:
                records.append(FieldRecord(**entry))
            except ValidationError as err:
                raise SourceError(
                    f"{self.path}: entry {index}: {err}", field_name=entry.get("name")
                ) from err
        return records
