"""Shared test fixtures for gitlab-mr-report."""

from __future__ import annotations

import pytest
import respx

from gitlab_mr_report.client import GitLabClient
from gitlab_mr_report.config import ReportConfig

TEST_API_URL = "https://gitlab.example.com/api/v4"
TEST_TOKEN = "test-token"


@pytest.fixture
def config(tmp_path) -> ReportConfig:
    return ReportConfig(
        token=TEST_TOKEN,
        project_id="123",
        start_date="2023-01-01T00:00:00Z",
        end_date="2023-12-31T23:59:59Z",
        api_url=TEST_API_URL,
        output_path=str(tmp_path / "merge_requests.csv"),
    )


@pytest.fixture
async def client(config: ReportConfig) -> GitLabClient:
    async with GitLabClient(config) as c:
        yield c


@pytest.fixture
def mock_api() -> respx.MockRouter:
    with respx.mock(base_url=TEST_API_URL, assert_all_called=False) as router:
        yield router
