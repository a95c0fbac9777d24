"""Report configuration, loaded from environment variables."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

DEFAULT_API_URL = "https://gitlab.com/api/v4"
DEFAULT_OUTPUT = "merge_requests.csv"

# (field, environment variable) for every value the report cannot run without
REQUIRED = (
    ("token", "GITLAB_TOKEN"),
    ("project_id", "GITLAB_PROJECT_ID"),
    ("start_date", "START_DATE"),
    ("end_date", "END_DATE"),
)


def _number_env(name: str, convert: Callable[[str], Any], default: Any) -> Any:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return convert(raw)
    except ValueError:
        msg = f"{name} must be a number, got {raw!r}"
        raise ValueError(msg) from None


@dataclass(frozen=True)
class ReportConfig:
    """Everything one report run needs, built once at startup."""

    token: str = ""
    project_id: str = ""
    start_date: str = ""
    end_date: str = ""
    api_url: str = DEFAULT_API_URL
    output_path: str = DEFAULT_OUTPUT
    max_concurrency: int = 0
    timeout: float | None = None
    ssl_verify: bool = True

    @classmethod
    def from_env(cls) -> ReportConfig:
        api_url = (os.getenv("GITLAB_API_URL") or DEFAULT_API_URL).rstrip("/")
        ssl_verify = os.getenv("GITLAB_SSL_VERIFY", "true").lower() not in (
            "false",
            "0",
            "no",
        )

        return cls(
            token=os.getenv("GITLAB_TOKEN", ""),
            project_id=os.getenv("GITLAB_PROJECT_ID", "").strip(),
            start_date=os.getenv("START_DATE", ""),
            end_date=os.getenv("END_DATE", ""),
            api_url=api_url,
            output_path=os.getenv("REPORT_OUTPUT") or DEFAULT_OUTPUT,
            max_concurrency=_number_env("GITLAB_MAX_CONCURRENCY", int, 0),
            timeout=_number_env("GITLAB_TIMEOUT", float, None),
            ssl_verify=ssl_verify,
        )

    @property
    def bounded(self) -> bool:
        """True when per-merge-request fetches are limited by a semaphore."""
        return self.max_concurrency > 0

    def validate(self) -> None:
        for field_name, env_var in REQUIRED:
            if not getattr(self, field_name):
                msg = f"Please set the {env_var} environment variable"
                raise ValueError(msg)
        if self.max_concurrency < 0:
            msg = "GITLAB_MAX_CONCURRENCY must be 0 (unbounded) or a positive integer"
            raise ValueError(msg)
