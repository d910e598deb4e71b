from __future__ import annotations

from ..models.import_outcome import ImportOutcome

"""SUMMARY line rendering for one import run."""


def _format_number(value: float) -> str:
    # integers without decimals, tiny values without scientific notation
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(value)


def render_summary_line(outcome: ImportOutcome) -> str:
    """Render the SUMMARY line for ``outcome``.

    Format:
    SUMMARY status={status} file={name} imported={n} failed={m} elapsed_sec={s}

    Examples:
        >>> from datetime import datetime, timezone
        >>> from csv_import_base.models import ImportStatus
        >>> o = ImportOutcome(filename="posts.csv", status=ImportStatus.COMPLETED,
        ...     rows_imported=2, rows_failed=1,
        ...     started_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        ...     finished_at=datetime(2024, 1, 1, 0, 0, 2, tzinfo=timezone.utc))
        >>> render_summary_line(o)
        'SUMMARY status=completed file=posts.csv imported=2 failed=1 elapsed_sec=2'
    """
    name = outcome.filename.replace(" ", "_") or "-"
    return (
        f"SUMMARY status={outcome.status.value} "
        f"file={name} "
        f"imported={outcome.rows_imported} "
        f"failed={outcome.rows_failed} "
        f"elapsed_sec={_format_number(outcome.elapsed_seconds)}"
    )
