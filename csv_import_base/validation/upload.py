from __future__ import annotations

from collections.abc import Iterable

from ..models.import_message import ImportMessage
from ..models.uploaded_file import UploadedFile

"""Upload validation: transport error check and content-type allow-list.

Runs to completion before the importer reads any byte of the file. Failures
are raised as UploadValidationError subclasses; the importer turns them into
a VALIDATION_FAILED outcome.
"""

__all__ = [
    "DEFAULT_ALLOWED_CONTENT_TYPES",
    "TransportError",
    "UploadValidationError",
    "UploadValidator",
    "WrongContentTypeError",
    "validate_upload",
]

# Browsers and operating systems disagree on the MIME type of a CSV file, so
# the allow-list is wide on purpose.
DEFAULT_ALLOWED_CONTENT_TYPES: frozenset[str] = frozenset({
    "text/csv",
    "text/plain",
    "application/csv",
    "text/comma-separated-values",
    "application/excel",
    "application/vnd.ms-excel",
    "application/vnd.msexcel",
    "text/anytext",
    "application/octet-stream",
    "application/txt",
})


class UploadValidationError(Exception):
    """Base class for uploads rejected before parsing."""

    error_type = "UPLOAD_VALIDATION_ERROR"

    def to_message(self) -> ImportMessage:  # pragma: no cover (abstract)
        raise NotImplementedError


class TransportError(UploadValidationError):
    """The upload layer reported a non-zero error code."""

    error_type = "TRANSPORT_ERROR"

    def __init__(self, code: int) -> None:
        super().__init__(f"upload failed with transport error code {code}")
        self.code = int(code)

    def to_message(self) -> ImportMessage:
        return ImportMessage.upload_failed(self.code)


class WrongContentTypeError(UploadValidationError):
    """The declared content type is not in the allow-list."""

    error_type = "WRONG_CONTENT_TYPE"

    def __init__(self, actual: str) -> None:
        super().__init__(f"content type not allowed: {actual!r}")
        self.actual = actual

    def to_message(self) -> ImportMessage:
        return ImportMessage.wrong_filetype(self.actual)


def validate_upload(file: UploadedFile, allowed_content_types: Iterable[str]) -> None:
    """Check one submission.

    Raises:
        TransportError: ``file.error`` is non-zero; the file is not inspected further
        WrongContentTypeError: ``file.content_type`` is not allowed
    """
    if file.has_transport_error:
        raise TransportError(file.error)
    if file.content_type not in frozenset(allowed_content_types):
        raise WrongContentTypeError(file.content_type)


class UploadValidator:
    """Reusable validator bound to one allow-list."""

    def __init__(self, allowed_content_types: Iterable[str] = DEFAULT_ALLOWED_CONTENT_TYPES) -> None:
        self.allowed_content_types = frozenset(allowed_content_types)

    def validate(self, file: UploadedFile) -> None:
        validate_upload(file, self.allowed_content_types)
