from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

from ..models.row_data import ColumnMap, RawRow, field_value, resolve_columns

"""Row handler extension point.

The importer knows nothing about what a row becomes. A host application
passes a RowHandler; the importer calls ``import_row(row, columns)`` once per
data row and only looks at the truthiness of the result.

Two further hooks run before the handler, in this order:

- RowTransform: ``(row, columns) -> row``, may rewrite the row
- RowObserver: ``(row, columns) -> None``, side effects only
"""

__all__ = [
    "CallableRowHandler",
    "DEFAULT_FIELD_MAP",
    "ExampleRowHandler",
    "RowHandler",
    "RowObserver",
    "RowTransform",
    "extract_fields",
]

RowTransform = Callable[[RawRow, ColumnMap], RawRow]
RowObserver = Callable[[RawRow, ColumnMap], None]

# CSV column name -> record key
DEFAULT_FIELD_MAP: dict[str, str] = {
    "post_id": "ID",
    "title": "post_title",
    "content": "post_content",
}


@runtime_checkable
class RowHandler(Protocol):
    def import_row(self, row: RawRow, columns: ColumnMap) -> Any:
        """Import one row; a truthy return counts it as imported."""
        ...


class CallableRowHandler:
    """Adapt a plain function ``(row, columns) -> bool`` to RowHandler."""

    def __init__(self, func: Callable[[RawRow, ColumnMap], Any]) -> None:
        self.func = func

    def import_row(self, row: RawRow, columns: ColumnMap) -> Any:
        return self.func(row, columns)


def extract_fields(
    row: RawRow,
    columns: ColumnMap,
    field_map: Mapping[str, str] = DEFAULT_FIELD_MAP,
) -> dict[str, str]:
    """Build a keyed record from the columns named in ``field_map``.

    Column names match exactly. Columns absent from the header are left out
    of the record; columns present in the header but missing from a short
    row resolve to "".
    """
    record: dict[str, str] = {}
    for name, index in resolve_columns(columns, field_map).items():
        record[field_map[name]] = field_value(row, index)
    return record


class ExampleRowHandler:
    """Scaffolding handler used when the host supplies none.

    Extracts ``DEFAULT_FIELD_MAP`` columns into ``last_record`` and stops
    there. Nothing is persisted, so every row is reported as not imported.
    ``last_record`` is instance state, so one instance serves one run at a
    time.
    """

    def __init__(self, field_map: Mapping[str, str] = DEFAULT_FIELD_MAP) -> None:
        self.field_map = dict(field_map)
        self.last_record: dict[str, str] | None = None

    def import_row(self, row: RawRow, columns: ColumnMap) -> bool:
        self.last_record = extract_fields(row, columns, self.field_map)
        return False
