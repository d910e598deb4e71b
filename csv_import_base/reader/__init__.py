from .delimited import DecodedRecord, FileUnreadableError, iter_records, open_source, validate_delimiter

__all__ = [
    "DecodedRecord",
    "FileUnreadableError",
    "iter_records",
    "open_source",
    "validate_delimiter",
]
