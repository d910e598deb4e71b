from .upload import (
    DEFAULT_ALLOWED_CONTENT_TYPES,
    TransportError,
    UploadValidationError,
    UploadValidator,
    WrongContentTypeError,
    validate_upload,
)

__all__ = [
    "DEFAULT_ALLOWED_CONTENT_TYPES",
    "TransportError",
    "UploadValidationError",
    "UploadValidator",
    "WrongContentTypeError",
    "validate_upload",
]
