from __future__ import annotations

from ..models.import_message import ImportMessage, MessageKind
from ..models.uploaded_file import UploadErrorCode

"""Default English wording for ImportMessage values.

Hosts that translate or style notices render from ``message.kind`` and
``message.params`` themselves; this module is the reference text.
"""

__all__ = [
    "render_message",
    "render_messages",
]

_UPLOAD_FAILED_TEXT = {
    UploadErrorCode.SIZE_EXCEEDED: (
        "The file was larger than your server allows. Please split up the file into "
        "multiple chunks and import separately, or contact your web host to increase "
        "your file upload size."
    ),
    UploadErrorCode.PARTIAL: (
        "The file was only partially uploaded and cannot be processed, please try again."
    ),
    UploadErrorCode.NO_FILE: "No file was uploaded, please try again.",
}


def _upload_failed(code: int) -> str:
    known = UploadErrorCode.classify(code)
    if known in _UPLOAD_FAILED_TEXT:
        return _UPLOAD_FAILED_TEXT[known]
    return (
        f"The file upload has failed (Error: {code}). "
        "Please double check your CSV and try again."
    )


def render_message(message: ImportMessage) -> str:
    """Render one message as a human-readable sentence."""
    p = message.params
    if message.kind is MessageKind.UPLOAD_FAILED:
        return _upload_failed(int(p["code"]))
    if message.kind is MessageKind.WRONG_FILETYPE:
        return (
            f"The file uploaded was presented as the wrong file type ({p['content_type']}), "
            "please double check your file is a CSV (not a XLS/XLSX) and try again."
        )
    if message.kind is MessageKind.CANNOT_OPEN:
        return (
            "The CSV file that was uploaded was not able to be opened from the TMP directory. "
            "Please try again, if the issue continues please contact your web host."
        )
    if message.kind is MessageKind.IMPORTED:
        return (
            f"{p['rows_imported']} rows were successfully imported, "
            f"while {p['rows_failed']} rows failed to import."
        )
    raise ValueError(f"unknown message kind: {message.kind!r}")


def render_messages(messages: list[ImportMessage]) -> list[str]:
    return [render_message(m) for m in messages]
