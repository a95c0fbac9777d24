"""Errors raised while talking to the GitLab API."""

from __future__ import annotations


class GitLabError(Exception):
    """Base exception for report extraction failures."""


class GitLabApiError(GitLabError):
    """Raised when the GitLab API answers with a non-success or unusable response."""

    def __init__(self, status_code: int, status_text: str, body: str = "") -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        super().__init__(f"GitLab API Error {status_code} {status_text}: {body}")

    @property
    def payload(self) -> str:
        """Response body when the server sent one, otherwise the error message."""
        return self.body or str(self)


class GitLabAuthError(GitLabApiError):
    """Raised on 401/403, usually a missing or expired GITLAB_TOKEN."""

    def __init__(self, status_code: int, body: str = "") -> None:
        status_text = "Unauthorized" if status_code == 401 else "Forbidden"
        super().__init__(status_code, status_text, body)


class GitLabNotFoundError(GitLabApiError):
    """Raised on 404, typically an unknown project or merge request."""

    def __init__(self, body: str = "") -> None:
        super().__init__(404, "Not Found", body)


class GitLabPageError(GitLabApiError):
    """Raised when a page of a list endpoint is not a JSON array."""

    def __init__(self, path: str, page: int, body: str = "") -> None:
        self.path = path
        self.page = page
        super().__init__(200, f"Expected a list from {path} (page {page})", body)
