"""Rows and counters produced by the report."""

from __future__ import annotations

from pydantic import computed_field

from .base import ReportModel
from .merge_requests import MergeRequest


class CommentCounts(ReportModel):
    overview_count: int = 0
    discussion_count: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return self.overview_count + self.discussion_count


class ReportRow(ReportModel):
    """One CSV line: a merge request and its user comment count."""

    id: int
    url: str
    state: str
    opened_date: str
    closed_date: str
    comments: int

    @classmethod
    def from_merge_request(cls, mr: MergeRequest, counts: CommentCounts) -> ReportRow:
        return cls(
            id=mr.iid,
            url=mr.web_url,
            state=mr.state,
            opened_date=mr.created_at,
            closed_date=mr.closed_date,
            comments=counts.total,
        )
