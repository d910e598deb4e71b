from __future__ import annotations
import pytest
import os
from pathlib import Path
from csv_import_base.config.loader import (
    ConfigError,
    ImporterConfig,
    apply_env_overrides,
    load_config,
)
from csv_import_base.validation import DEFAULT_ALLOWED_CONTENT_TYPES


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.delimiter == ";"
    assert cfg.allowed_content_types == frozenset({"text/csv", "text/plain"})
    assert cfg.error_log_dir == "./logs"
    assert cfg.show_progress is False


def test_load_config_defaults_for_empty_file(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "empty.yml"
    cfg_path.write_text("", encoding="utf-8")
    cfg = load_config(cfg_path)
    assert cfg == ImporterConfig()
    assert cfg.delimiter == ","
    assert cfg.allowed_content_types == DEFAULT_ALLOWED_CONTENT_TYPES
    assert cfg.error_log_dir is None
    assert cfg.show_progress is None


def test_load_config_missing_file(temp_workdir: Path):
    missing = temp_workdir / "config" / "not_exists.yml"
    with pytest.raises(ConfigError):
        load_config(missing)


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("delimiter: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "invalid yaml" in str(e.value)


def test_load_config_root_not_mapping(write_config: Path):
    write_config.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(write_config)


def test_load_config_multi_char_delimiter(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace('delimiter: ";"', 'delimiter: ";;"')
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_empty_content_type_list(write_config: Path):
    write_config.write_text("allowed_content_types: []\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(write_config)


def test_importer_config_rejects_bad_delimiter():
    with pytest.raises(ConfigError):
        ImporterConfig(delimiter="")
    with pytest.raises(ConfigError):
        ImporterConfig(delimiter='"')


def test_importer_config_freezes_content_types():
    cfg = ImporterConfig(allowed_content_types=["text/csv", "text/csv"])
    assert cfg.allowed_content_types == frozenset({"text/csv"})


def test_env_overrides_from_dotenv(temp_workdir: Path, monkeypatch):
    monkeypatch.setenv("CSV_IMPORT_DELIMITER", "")
    monkeypatch.setenv("CSV_IMPORT_ERROR_LOG_DIR", "")
    env = temp_workdir / ".env"
    env.write_text("CSV_IMPORT_DELIMITER=|\nCSV_IMPORT_ERROR_LOG_DIR=./errs\n", encoding="utf-8")
    cfg = apply_env_overrides(ImporterConfig(), env_file=env)
    assert cfg.delimiter == "|"
    assert cfg.error_log_dir == "./errs"
    # the default allow-list is untouched
    assert cfg.allowed_content_types == DEFAULT_ALLOWED_CONTENT_TYPES


def test_env_overrides_tab_escape(temp_workdir: Path, monkeypatch):
    monkeypatch.setenv("CSV_IMPORT_DELIMITER", "\\t")
    monkeypatch.setenv("CSV_IMPORT_ERROR_LOG_DIR", "")
    cfg = apply_env_overrides(ImporterConfig(), env_file=None)
    assert cfg.delimiter == "\t"


def test_env_overrides_noop_returns_same_config(temp_workdir: Path, monkeypatch):
    monkeypatch.setenv("CSV_IMPORT_DELIMITER", "")
    monkeypatch.setenv("CSV_IMPORT_ERROR_LOG_DIR", "")
    cfg = ImporterConfig(delimiter=";")
    assert apply_env_overrides(cfg, env_file=temp_workdir / ".env") is cfg


def test_env_overrides_invalid_delimiter(temp_workdir: Path, monkeypatch):
    monkeypatch.setenv("CSV_IMPORT_DELIMITER", "ab")
    with pytest.raises(ConfigError):
        apply_env_overrides(ImporterConfig(), env_file=None)


def test_env_overrides_do_not_touch_process_environment(temp_workdir: Path, monkeypatch):
    monkeypatch.setenv("CSV_IMPORT_DELIMITER", "")
    monkeypatch.delenv("CSV_IMPORT_ERROR_LOG_DIR", raising=False)
    env = temp_workdir / ".env"
    env.write_text("CSV_IMPORT_DELIMITER=;\nCSV_IMPORT_ERROR_LOG_DIR=./errs\n", encoding="utf-8")
    cfg = apply_env_overrides(ImporterConfig(), env_file=env)
    assert (cfg.delimiter, cfg.error_log_dir) == (";", "./errs")
    assert os.environ["CSV_IMPORT_DELIMITER"] == ""
    assert "CSV_IMPORT_ERROR_LOG_DIR" not in os.environ


def test_env_file_wins_over_process_environment(temp_workdir: Path, monkeypatch):
    monkeypatch.setenv("CSV_IMPORT_DELIMITER", "|")
    monkeypatch.setenv("CSV_IMPORT_ERROR_LOG_DIR", "")
    env = temp_workdir / ".env"
    env.write_text("CSV_IMPORT_DELIMITER=;\n", encoding="utf-8")
    assert apply_env_overrides(ImporterConfig(), env_file=env).delimiter == ";"


def test_importer_config_rejects_bare_string_content_types():
    with pytest.raises(ConfigError, match="allowed_content_types"):
        ImporterConfig(allowed_content_types="text/csv")
