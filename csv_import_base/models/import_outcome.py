from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from .error_record import ErrorRecord
from .import_message import ImportMessage
from .row_data import ColumnMap

"""ImportOutcome model and ImportStatus enum.

An ImportOutcome is created at the start of one import run, owned by that run
only, updated once per data row and finalized when the stream ends or the
run stops early.

State transitions: not_run -> (validation_failed | file_unreadable | completed)
"""

__all__ = [
    "ImportOutcome",
    "ImportStatus",
]


class ImportStatus(Enum):
    """Terminal status of an import run.

    - NOT_RUN: outcome created, run not finished yet
    - VALIDATION_FAILED: upload rejected before any byte was read
    - FILE_UNREADABLE: the stored upload could not be opened or read
    - COMPLETED: the stream was read to the end (possibly with row failures)
    """
    NOT_RUN = "not_run"
    VALIDATION_FAILED = "validation_failed"
    FILE_UNREADABLE = "file_unreadable"
    COMPLETED = "completed"


@dataclass
class ImportOutcome:
    """Running counters and terminal status of one import run.

    ``errors`` holds file-level problems only (rejected upload, unreadable
    file). Per-row failures are counted here and written to the error log,
    never kept in memory for the whole run.
    """
    filename: str = ""
    status: ImportStatus = ImportStatus.NOT_RUN
    rows_imported: int = 0
    rows_failed: int = 0
    columns: ColumnMap = ()
    messages: list[ImportMessage] = field(default_factory=list)
    errors: list[ErrorRecord] = field(default_factory=list)
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    finished_at: datetime | None = None

    @property
    def rows_processed(self) -> int:
        return self.rows_imported + self.rows_failed

    @property
    def elapsed_seconds(self) -> float:
        end = self.finished_at or datetime.now(UTC)
        return (end - self.started_at).total_seconds()

    @property
    def is_finished(self) -> bool:
        return self.status is not ImportStatus.NOT_RUN

    def record_success(self) -> None:
        self.rows_imported += 1

    def record_failure(self) -> None:
        self.rows_failed += 1

    def reset_counts(self) -> None:
        """Drop partial counts; used when the stream breaks after opening."""
        self.rows_imported = 0
        self.rows_failed = 0

    def finish(self, status: ImportStatus, message: ImportMessage) -> ImportOutcome:
        self.status = status
        self.messages.append(message)
        self.finished_at = datetime.now(UTC)
        return self
