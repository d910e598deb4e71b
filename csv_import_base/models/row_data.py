from __future__ import annotations

from typing import Mapping

"""Column map and raw row helpers.

A ColumnMap is the header record of a delimited file; a RawRow is any later
record. Index position is the join key between the two. Files in the wild
are often ragged, so binding applies one fixed policy:

- a field missing at the end of a short row resolves to ""
- fields beyond the last header column are ignored
"""

__all__ = [
    "ColumnMap",
    "RawRow",
    "MISSING_FIELD",
    "bind_row",
    "field_value",
    "make_column_map",
    "resolve_columns",
]

ColumnMap = tuple[str, ...]
RawRow = list[str]

MISSING_FIELD = ""


def make_column_map(header: list[str]) -> ColumnMap:
    """Freeze a decoded header record into a ColumnMap."""
    return tuple(header)


def field_value(row: RawRow, index: int) -> str:
    """Value at ``index`` or MISSING_FIELD when the row is too short."""
    if 0 <= index < len(row):
        return row[index]
    return MISSING_FIELD


def bind_row(row: RawRow, columns: ColumnMap) -> dict[str, str]:
    """Map column name -> value for one row.

    Duplicate header names resolve to the last occurrence.
    """
    bound: dict[str, str] = {}
    for index, name in enumerate(columns):
        bound[name] = field_value(row, index)
    return bound


def resolve_columns(columns: ColumnMap, names: Mapping[str, str]) -> dict[str, int]:
    """Position of each wanted column name present in ``columns``.

    A name repeated in the header maps to its last position.
    """
    positions: dict[str, int] = {}
    for index, name in enumerate(columns):
        if name in names:
            positions[name] = index
    return positions
