"""Merge request, note and discussion models."""

from __future__ import annotations

from .base import GitLabModel
from .common import User


class MergeRequest(GitLabModel):
    id: int
    iid: int
    title: str = ""
    state: str = ""
    web_url: str = ""
    created_at: str = ""
    closed_at: str | None = None
    merged_at: str | None = None
    author: User | None = None

    @property
    def closed_date(self) -> str:
        """When the MR stopped being open, or ``"opened"`` if it still is."""
        return self.closed_at or self.merged_at or "opened"


class Note(GitLabModel):
    id: int
    body: str = ""
    author: User | None = None
    created_at: str = ""
    system: bool = False


class DiscussionNote(GitLabModel):
    id: int
    body: str = ""
    author: User | None = None
    created_at: str = ""
    system: bool = False


class Discussion(GitLabModel):
    id: str = ""
    individual_note: bool = False
    notes: list[DiscussionNote] = []

    @property
    def user_notes(self) -> list[DiscussionNote]:
        return [note for note in self.notes if not note.system]
