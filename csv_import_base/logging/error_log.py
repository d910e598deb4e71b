from __future__ import annotations

import threading
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""JSON Lines error log buffering.

- fixed record schema (see ErrorRecord)
- one file per buffer, ``<logs_dir>/errors-YYYYMMDD-HHMMSS.log`` (UTC),
  named on first access
- records are kept in memory and appended on flush(); one lock guards the
  buffer and the file, so several import runs may share a buffer
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

DEFAULT_LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer for error records. Flush writes JSON Lines."""

    def __init__(self, logs_dir: Path | str = DEFAULT_LOGS_DIR) -> None:
        self.logs_dir = Path(logs_dir)
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None
        self._lock = threading.Lock()

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self.logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        with self._lock:
            self._records.append(record)

    def extend(self, records: Iterable[ErrorRecord]) -> None:
        with self._lock:
            self._records.extend(records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the log file; None if nothing was buffered.

        The buffer is emptied before writing, so a batch that fails with
        OSError is dropped rather than retried.
        """
        with self._lock:
            if not self._records:
                return None
            records, self._records = self._records, []
            fp = self.file_path
            with fp.open("a", encoding="utf-8") as f:
                for r in records:
                    f.write(r.to_json_line() + "\n")
        return fp
