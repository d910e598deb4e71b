from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

import jsonschema
import yaml
from dotenv import dotenv_values
from jsonschema.exceptions import ValidationError

from ..reader.delimited import validate_delimiter
from ..validation.upload import DEFAULT_ALLOWED_CONTENT_TYPES

"""Importer configuration loader.

Responsibilities:
- Load a YAML config file (every key optional)
- Validate it against config_schema.json
- Apply defaults (delimiter "," and the permissive CSV content-type list)
- Overlay CSV_IMPORT_* environment variables, optionally read from a .env file
"""

__all__ = [
    "ConfigError",
    "ImporterConfig",
    "SCHEMA_PATH",
    "apply_env_overrides",
    "load_config",
]

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"

ENV_DELIMITER = "CSV_IMPORT_DELIMITER"
ENV_ERROR_LOG_DIR = "CSV_IMPORT_ERROR_LOG_DIR"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ImporterConfig:
    """Settings shared by every import run of one host application."""
    delimiter: str = ","
    allowed_content_types: frozenset[str] = field(default=DEFAULT_ALLOWED_CONTENT_TYPES)
    error_log_dir: str | None = None  # None = no JSON Lines error log file
    show_progress: bool | None = None  # None = progress bar only on a TTY

    def __post_init__(self) -> None:
        try:
            validate_delimiter(self.delimiter)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        if isinstance(self.allowed_content_types, str):
            raise ConfigError("allowed_content_types must be a collection of strings, not a str")
        # accept any iterable of strings, store a frozenset
        object.__setattr__(self, "allowed_content_types", frozenset(self.allowed_content_types))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ImporterConfig:
        """Build a config from already-parsed data (YAML, JSON, a dict literal)."""
        _validate_config_schema(dict(data))
        types = data.get("allowed_content_types")
        return cls(
            delimiter=data.get("delimiter", ","),
            allowed_content_types=(
                frozenset(types) if types is not None else DEFAULT_ALLOWED_CONTENT_TYPES
            ),
            error_log_dir=data.get("error_log_dir"),
            show_progress=data.get("show_progress"),
        )


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or if the
            data violates the schema (unknown keys, wrong types, bad delimiter).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> ImporterConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")
    return ImporterConfig.from_mapping(data)


def apply_env_overrides(config: ImporterConfig, env_file: Path | None = Path(".env")) -> ImporterConfig:
    """Return ``config`` with CSV_IMPORT_* environment variables applied.

    Values from ``env_file`` win over the process environment, which wins over
    the config file. ``os.environ`` itself is left untouched.
    """
    env: dict[str, str | None] = dict(os.environ)
    if env_file is not None and env_file.exists():
        env.update(
            (key, value) for key, value in dotenv_values(env_file).items() if value is not None
        )

    changes: dict[str, Any] = {}
    delimiter = env.get(ENV_DELIMITER)
    if delimiter:
        # allow "\t" to be written literally in a .env file
        changes["delimiter"] = "\t" if delimiter == "\\t" else delimiter
    log_dir = env.get(ENV_ERROR_LOG_DIR)
    if log_dir:
        changes["error_log_dir"] = log_dir
    if not changes:
        return config
    return replace(config, **changes)
