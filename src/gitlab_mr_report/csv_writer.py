"""Serialize report rows to the merge_requests.csv layout."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .models.report import ReportRow

CSV_HEADER = "Merge Request ID,Merge Request URL,State,Opened Date,Closed Date,Comments"


def format_row(row: ReportRow) -> str:
    # Only the URL is quoted; ids, states and ISO dates never contain commas.
    return ",".join(
        [
            str(row.id),
            f'"{row.url}"',
            row.state,
            row.opened_date,
            row.closed_date,
            str(row.comments),
        ]
    )


def render_csv(rows: Iterable[ReportRow]) -> str:
    """Header line followed by one line per row, without a trailing newline."""
    return CSV_HEADER + "\n" + "\n".join(format_row(row) for row in rows)


def write_csv(rows: Iterable[ReportRow], path: str | Path) -> Path:
    path = Path(path)
    path.write_text(render_csv(rows), encoding="utf-8")
    return path
