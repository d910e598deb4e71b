from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

"""Outcome messages produced by the import pipeline.

Messages are data: a kind, a display level and the parameters needed to
phrase them. Turning them into text (and into HTML, notices, flashes...) is
the caller's job; ``services.messages.render_message`` gives the default
English wording.
"""

__all__ = [
    "ImportMessage",
    "MessageKind",
    "MessageLevel",
]


class MessageKind(Enum):
    UPLOAD_FAILED = "upload_failed"  # params: code
    WRONG_FILETYPE = "wrong_filetype"  # params: content_type
    CANNOT_OPEN = "cannot_open"  # params: filename
    IMPORTED = "imported"  # params: rows_imported, rows_failed


class MessageLevel(Enum):
    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True)
class ImportMessage:
    kind: MessageKind
    level: MessageLevel
    params: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def upload_failed(code: int) -> ImportMessage:
        return ImportMessage(MessageKind.UPLOAD_FAILED, MessageLevel.ERROR, {"code": int(code)})

    @staticmethod
    def wrong_filetype(content_type: str) -> ImportMessage:
        return ImportMessage(
            MessageKind.WRONG_FILETYPE, MessageLevel.ERROR, {"content_type": content_type}
        )

    @staticmethod
    def cannot_open(filename: str) -> ImportMessage:
        return ImportMessage(MessageKind.CANNOT_OPEN, MessageLevel.ERROR, {"filename": filename})

    @staticmethod
    def imported(rows_imported: int, rows_failed: int) -> ImportMessage:
        return ImportMessage(
            MessageKind.IMPORTED,
            MessageLevel.SUCCESS,
            {"rows_imported": rows_imported, "rows_failed": rows_failed},
        )
