from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

"""UploadedFile domain model and UploadErrorCode enum.

An UploadedFile is the value the hosting application hands over after a form
submission: where the upload was stored, what content type the client claimed
and the transport error code reported by the upload layer. The core never
mutates it and never owns its storage.
"""

__all__ = [
    "UploadErrorCode",
    "UploadedFile",
]


class UploadErrorCode(IntEnum):
    """Known transport error codes for a file submission.

    Codes outside this enum (2, 5, 6, ...) are grouped as "other" and are
    still reported with their numeric value.
    """
    NONE = 0
    SIZE_EXCEEDED = 1
    PARTIAL = 3
    NO_FILE = 4

    @classmethod
    def classify(cls, code: int) -> UploadErrorCode | None:
        """Return the matching member, or None for an "other" code."""
        try:
            return cls(code)
        except ValueError:
            return None


@dataclass(frozen=True)
class UploadedFile:
    """One submitted file, read-only to the importer."""
    path: Path  # temporary storage location
    content_type: str  # declared by the client, not sniffed
    error: int = UploadErrorCode.NONE  # transport error code, 0 = ok
    filename: str = ""  # original client-side filename

    @property
    def display_name(self) -> str:
        return self.filename or Path(self.path).name

    @property
    def has_transport_error(self) -> bool:
        return int(self.error) > UploadErrorCode.NONE
