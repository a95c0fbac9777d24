"""Tests for CSV serialization."""

from __future__ import annotations

from gitlab_mr_report.csv_writer import CSV_HEADER, format_row, render_csv, write_csv
from gitlab_mr_report.models.report import ReportRow


def _row(**overrides) -> ReportRow:
    fields = {
        "id": 1,
        "url": "https://gitlab.example.com/p/mr/1",
        "state": "merged",
        "opened_date": "2023-04-28T09:12:00Z",
        "closed_date": "2023-05-01T00:00:00Z",
        "comments": 5,
    }
    return ReportRow(**{**fields, **overrides})


def test_header():
    assert CSV_HEADER.split(",") == [
        "Merge Request ID",
        "Merge Request URL",
        "State",
        "Opened Date",
        "Closed Date",
        "Comments",
    ]


def test_url_is_quoted_unchanged():
    line = format_row(_row())
    assert line.split(",")[1] == '"https://gitlab.example.com/p/mr/1"'


def test_format_row():
    assert format_row(_row(closed_date="opened", state="opened", comments=0)) == (
        '1,"https://gitlab.example.com/p/mr/1",opened,2023-04-28T09:12:00Z,opened,0'
    )


def test_render_empty():
    assert render_csv([]) == CSV_HEADER + "\n"


def test_render_rows_have_no_trailing_newline():
    text = render_csv([_row(id=1), _row(id=2)])
    lines = text.split("\n")
    assert lines[0] == CSV_HEADER
    assert [line.split(",")[0] for line in lines[1:]] == ["1", "2"]
    assert not text.endswith("\n")


def test_write_csv_overwrites(tmp_path):
    path = tmp_path / "merge_requests.csv"
    path.write_text("stale content\n" * 10, encoding="utf-8")
    written = write_csv([_row()], path)
    assert written == path
    assert path.read_text(encoding="utf-8") == render_csv([_row()])
