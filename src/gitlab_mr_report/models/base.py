"""Base model for GitLab API payloads."""

from __future__ import annotations

from pydantic import BaseModel


class GitLabModel(BaseModel):
    """Read-only view of an API object; unknown fields are dropped."""

    model_config = {"extra": "ignore", "populate_by_name": True, "frozen": True}


class ReportModel(BaseModel):
    """Immutable value derived from API objects while building the report."""

    model_config = {"frozen": True}
