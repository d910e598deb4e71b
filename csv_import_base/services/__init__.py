"""Import services: the row-streaming importer and its reporting helpers."""

from .importer import CsvImporter
from .messages import render_message, render_messages
from .row_handlers import (
    DEFAULT_FIELD_MAP,
    CallableRowHandler,
    ExampleRowHandler,
    RowHandler,
    RowObserver,
    RowTransform,
    extract_fields,
)
from .summary import render_summary_line

__all__ = [
    "CsvImporter",
    "CallableRowHandler",
    "DEFAULT_FIELD_MAP",
    "ExampleRowHandler",
    "RowHandler",
    "RowObserver",
    "RowTransform",
    "extract_fields",
    "render_message",
    "render_messages",
    "render_summary_line",
]
