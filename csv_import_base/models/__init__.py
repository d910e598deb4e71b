"""Domain models for the CSV import pipeline.

Upload input, row helpers, run outcome, messages and error records.
"""

from .error_record import FILE_LEVEL_ROW, ErrorRecord
from .import_message import ImportMessage, MessageKind, MessageLevel
from .import_outcome import ImportOutcome, ImportStatus
from .row_data import ColumnMap, RawRow, bind_row, field_value, make_column_map
from .uploaded_file import UploadedFile, UploadErrorCode

__all__ = [
    # Input
    "UploadedFile",
    "UploadErrorCode",
    # Rows
    "ColumnMap",
    "RawRow",
    "bind_row",
    "field_value",
    "make_column_map",
    # Outcome
    "ImportOutcome",
    "ImportStatus",
    "ImportMessage",
    "MessageKind",
    "MessageLevel",
    "ErrorRecord",
    "FILE_LEVEL_ROW",
]
