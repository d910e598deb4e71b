from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TextIO

from ..config.loader import ImporterConfig
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary
from ..models.error_record import FILE_LEVEL_ROW, ErrorRecord
from ..models.import_message import ImportMessage
from ..models.import_outcome import ImportOutcome, ImportStatus
from ..models.row_data import ColumnMap, RawRow, make_column_map
from ..models.uploaded_file import UploadedFile
from ..reader.delimited import DecodedRecord, FileUnreadableError, iter_records, open_source
from ..validation.upload import UploadValidationError, UploadValidator
from .messages import render_message
from .progress import RowProgress
from .row_handlers import ExampleRowHandler, RowHandler, RowObserver, RowTransform
from .summary import render_summary_line

logger = logging.getLogger(__name__)

"""Row-streaming importer.

handle_upload() validates a submission and then calls run(), which owns the
read loop:

1. AwaitingHeader: the first decoded record becomes the ColumnMap (not counted)
2. StreamingRows: every later record goes through transforms, observers and
   the row handler; a truthy result counts as imported, anything else
   (falsy result, exception, undecodable record) counts as failed

Only a rejected upload and a file that cannot be opened or read stop a run
early. Nothing is retried.

Row failures are only counted on the outcome. When an error log is set up,
their ErrorRecords are handed to it in batches of ERROR_LOG_BATCH while the
file streams, so memory stays flat however many rows fail.
"""

__all__ = [
    "CsvImporter",
    "ERROR_LOG_BATCH",
]

ERROR_LOG_BATCH = 500


class CsvImporter:
    """Import pipeline bound to one configuration and one row handler.

    The instance holds no per-run state: each call to run() builds its own
    ColumnMap, ImportOutcome and pending error batch, so one instance may
    serve several uploads, also from several threads. The error log buffer
    is shared and locked. The row handler is shared as well: a handler that
    keeps state (ExampleRowHandler.last_record) must not be used by
    concurrent runs.
    """

    def __init__(
        self,
        config: ImporterConfig | None = None,
        handler: RowHandler | None = None,
        *,
        transforms: Iterable[RowTransform] = (),
        observers: Iterable[RowObserver] = (),
        error_log: ErrorLogBuffer | None = None,
        validator: UploadValidator | None = None,
    ) -> None:
        self.config = config if config is not None else ImporterConfig()
        self.handler: RowHandler = handler if handler is not None else ExampleRowHandler()
        self.transforms = tuple(transforms)
        self.observers = tuple(observers)
        self.validator = (
            validator if validator is not None
            else UploadValidator(self.config.allowed_content_types)
        )
        if error_log is None and self.config.error_log_dir:
            error_log = ErrorLogBuffer(self.config.error_log_dir)
        self.error_log = error_log

    def handle_upload(self, file: UploadedFile) -> ImportOutcome:
        """Validate ``file`` and, if it passes, import it."""
        try:
            self.validator.validate(file)
        except UploadValidationError as e:
            outcome = ImportOutcome(filename=file.display_name)
            logger.error("upload rejected file=%s: %s", outcome.filename, e)
            outcome.errors.append(
                ErrorRecord.create(outcome.filename, FILE_LEVEL_ROW, e.error_type, str(e))
            )
            outcome.finish(ImportStatus.VALIDATION_FAILED, e.to_message())
            self._report(outcome)
            return outcome
        return self.run(file)

    def run(self, file: UploadedFile) -> ImportOutcome:
        """Stream every record of ``file`` through the row handler.

        Does not validate the upload; use handle_upload() for the full pipeline.
        """
        outcome = ImportOutcome(filename=file.display_name)
        pending: list[ErrorRecord] | None = [] if self.error_log is not None else None
        logger.info("importing file=%s delimiter=%r", outcome.filename, self.config.delimiter)
        try:
            with open_source(file.path) as handle:
                self._stream(handle, outcome, pending)
        except FileUnreadableError as e:
            logger.error("file=%s unreadable: %s", outcome.filename, e)
            outcome.reset_counts()
            outcome.errors.append(
                ErrorRecord.create(outcome.filename, FILE_LEVEL_ROW, "FILE_UNREADABLE", str(e))
            )
            outcome.finish(ImportStatus.FILE_UNREADABLE, ImportMessage.cannot_open(outcome.filename))
            self._report(outcome, pending)
            return outcome

        outcome.finish(
            ImportStatus.COMPLETED,
            ImportMessage.imported(outcome.rows_imported, outcome.rows_failed),
        )
        self._report(outcome, pending)
        return outcome

    def _stream(
        self,
        handle: TextIO,
        outcome: ImportOutcome,
        pending: list[ErrorRecord] | None,
    ) -> None:
        columns: ColumnMap | None = None
        with RowProgress(enabled=self.config.show_progress) as progress:
            for record in iter_records(handle, self.config.delimiter):
                if columns is None:
                    if not record.ok:
                        logger.warning(
                            "file=%s line=%d undecodable before header, skipped: %s",
                            outcome.filename, record.line, record.error,
                        )
                        continue
                    columns = make_column_map(record.fields)
                    outcome.columns = columns
                    logger.debug("file=%s columns=%s", outcome.filename, list(columns))
                    continue
                self._process_record(record, columns, outcome, pending)
                progress.advance(imported=outcome.rows_imported, failed=outcome.rows_failed)

    def _process_record(
        self,
        record: DecodedRecord,
        columns: ColumnMap,
        outcome: ImportOutcome,
        pending: list[ErrorRecord] | None,
    ) -> None:
        if not record.ok:
            logger.warning("file=%s line=%d undecodable: %s", outcome.filename, record.line, record.error)
            self._fail(outcome, pending, record.line, "ROW_DECODE_ERROR", record.error or "")
            return
        try:
            imported = self._import_row(list(record.fields), columns)
        except Exception as e:
            logger.warning("file=%s line=%d row handler raised: %s", outcome.filename, record.line, e)
            self._fail(outcome, pending, record.line, "ROW_HANDLER_ERROR", f"{type(e).__name__}: {e}")
            return
        if imported:
            outcome.record_success()
        else:
            self._fail(outcome, pending, record.line, "ROW_REJECTED", "row handler reported failure")

    def _fail(
        self,
        outcome: ImportOutcome,
        pending: list[ErrorRecord] | None,
        line: int,
        error_type: str,
        message: str,
    ) -> None:
        outcome.record_failure()
        if pending is None:
            return
        pending.append(ErrorRecord.create(outcome.filename, line, error_type, message))
        if len(pending) >= ERROR_LOG_BATCH:
            self._write_errors(pending)

    def _import_row(self, row: RawRow, columns: ColumnMap) -> object:
        for transform in self.transforms:
            row = transform(row, columns)
            if row is None:
                raise TypeError(f"row transform {transform!r} returned None")
        for observer in self.observers:
            observer(row, columns)
        return self.handler.import_row(row, columns)

    def _report(self, outcome: ImportOutcome, pending: list[ErrorRecord] | None = None) -> None:
        for message in outcome.messages:
            logger.info("notice level=%s %s", message.level.value, render_message(message))
        log_summary(render_summary_line(outcome)[len("SUMMARY "):])
        if self.error_log is None:
            return
        records = list(pending or ())
        records.extend(outcome.errors)
        if records:
            self._write_errors(records)

    def _write_errors(self, records: list[ErrorRecord]) -> None:
        """Hand ``records`` to the error log, flush it and empty ``records``."""
        count = len(records)
        self.error_log.extend(records)
        records.clear()
        try:
            path = self.error_log.flush()
        except OSError as e:
            logger.warning("error log flush failed, %d errors dropped: %s", count, e)
            return
        logger.info("errors=%d written to %s", count, path)
