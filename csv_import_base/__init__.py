"""CSV import base: validate an uploaded delimited file and stream its rows
through a pluggable row handler.

Typical host usage::

    from csv_import_base import CsvImporter, ImporterConfig, UploadedFile

    importer = CsvImporter(ImporterConfig(), handler=MyRowHandler())
    outcome = importer.handle_upload(UploadedFile(path, "text/csv"))
"""

from .config.loader import ConfigError, ImporterConfig, load_config
from .models import ImportOutcome, ImportStatus, UploadedFile
from .services.importer import CsvImporter

__all__ = [
    "ConfigError",
    "CsvImporter",
    "ImportOutcome",
    "ImportStatus",
    "ImporterConfig",
    "UploadedFile",
    "load_config",
]

__version__ = "1.0.0"
