# Shared pytest fixtures
from __future__ import annotations
import tempfile
from collections.abc import Callable
from pathlib import Path
import pytest

from csv_import_base.models import UploadedFile


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "uploads").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def write_csv(temp_workdir: Path) -> Callable[..., Path]:
    """Write raw CSV text into the uploads dir and return its path."""
    def _write(text: str, name: str = "upload.csv", encoding: str = "utf-8") -> Path:
        path = temp_workdir / "uploads" / name
        path.write_bytes(text.encode(encoding))
        return path
    return _write


@pytest.fixture()
def make_upload(write_csv) -> Callable[..., UploadedFile]:
    """Build an UploadedFile around freshly written CSV text."""
    def _make(
        text: str,
        *,
        content_type: str = "text/csv",
        error: int = 0,
        filename: str = "posts.csv",
    ) -> UploadedFile:
        path = write_csv(text)
        return UploadedFile(path=path, content_type=content_type, error=error, filename=filename)
    return _make


@pytest.fixture()
def sample_config_yaml() -> str:
    return """delimiter: ";"
allowed_content_types:
  - text/csv
  - text/plain
error_log_dir: ./logs
show_progress: false
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


SAMPLE_POSTS_CSV = (
    "post_id,title,content\n"
    '5,"Hello","World"\n'
    "6,Second,Body two\n"
    '7,"Quoted, title","Line one\nline two"\n'
)


@pytest.fixture()
def sample_posts_csv() -> str:
    return SAMPLE_POSTS_CSV
