from __future__ import annotations

import csv
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

"""Delimited text reader.

- UTF-8 with BOM removal, undecodable bytes replaced rather than fatal
- one delimiter per run, standard double-quote quoting, no dialect sniffing
- a blank line is a record with one empty field
- a record the csv module rejects is yielded as an error record so the
  caller can count it and carry on with the next one
"""

__all__ = [
    "DecodedRecord",
    "FileUnreadableError",
    "iter_records",
    "open_source",
    "validate_delimiter",
]

SOURCE_ENCODING = "utf-8-sig"
BLANK_FIELD = ""


class FileUnreadableError(Exception):
    """Raised when the stored upload cannot be opened or read."""


@dataclass(frozen=True)
class DecodedRecord:
    line: int  # physical line number the record ends on (1-based)
    fields: list[str]
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def validate_delimiter(value: str) -> str:
    """Return ``value`` if it is usable as a single-character delimiter."""
    if not isinstance(value, str) or len(value) != 1:
        raise ValueError(f"delimiter must be a single character, got {value!r}")
    if value in {'"', "\r", "\n"}:
        raise ValueError(f"delimiter cannot be {value!r}")
    return value


@contextmanager
def open_source(path: Path | str) -> Iterator[TextIO]:
    """Open an uploaded file for decoding; always closed on exit."""
    try:
        handle = Path(path).open("r", encoding=SOURCE_ENCODING, errors="replace", newline="")
    except OSError as e:
        raise FileUnreadableError(f"cannot open {path}: {e}") from e
    try:
        yield handle
    finally:
        handle.close()


def iter_records(handle: TextIO, delimiter: str = ",") -> Iterator[DecodedRecord]:
    """Yield one DecodedRecord per record in ``handle``.

    Raises:
        FileUnreadableError: the underlying stream fails while reading
    """
    reader = csv.reader(handle, delimiter=validate_delimiter(delimiter))
    while True:
        try:
            fields = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            yield DecodedRecord(line=reader.line_num, fields=[], error=str(e))
            continue
        except OSError as e:
            raise FileUnreadableError(f"read failed at line {reader.line_num}: {e}") from e
        if not fields:
            fields = [BLANK_FIELD]
        yield DecodedRecord(line=reader.line_num, fields=fields)
