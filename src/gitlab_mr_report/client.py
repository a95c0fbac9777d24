"""GitLab API client using httpx."""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from .config import ReportConfig
from .exceptions import GitLabApiError, GitLabAuthError, GitLabNotFoundError, GitLabPageError
from .models.merge_requests import Discussion, MergeRequest, Note

logger = logging.getLogger(__name__)

# Largest page GitLab serves
PER_PAGE = 100


def total_pages(response: httpx.Response) -> int:
    """Page count from the X-Total-Pages header; 1 when absent or garbled."""
    try:
        return max(int(response.headers.get("x-total-pages", "")), 1)
    except ValueError:
        return 1


class GitLabClient:
    """Async read-only client for the merge request endpoints of GitLab REST API v4."""

    def __init__(self, config: ReportConfig | None = None) -> None:
        self.config = config or ReportConfig.from_env()
        self.config.validate()
        self._client = httpx.AsyncClient(
            base_url=self.config.api_url,
            headers={"PRIVATE-TOKEN": self.config.token},
            timeout=self.config.timeout,
            verify=self.config.ssl_verify,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> GitLabClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ── HTTP helpers ──────────────────────────────────────────────

    @staticmethod
    def _encode_id(project_id: str | int) -> str:
        """Encode a project ID. Numeric IDs pass through; paths are URL-encoded."""
        if isinstance(project_id, int):
            return str(project_id)
        try:
            return str(int(project_id))
        except ValueError:
            return quote(project_id, safe="")

    async def _send(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """GET *path*, raising the matching GitLabApiError on failure."""
        resp = await self._client.get(path, params=params)

        if resp.status_code in (401, 403):
            raise GitLabAuthError(resp.status_code, resp.text)
        if resp.status_code == 404:
            raise GitLabNotFoundError(resp.text)
        if not resp.is_success:
            raise GitLabApiError(resp.status_code, resp.reason_phrase or "", resp.text)

        content_type = resp.headers.get("content-type", "")
        if "text/html" in content_type:
            msg = "Unexpected HTML response, check GITLAB_API_URL and GITLAB_TOKEN"
            raise GitLabApiError(resp.status_code, msg, resp.text[:500])
        return resp

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        if not resp.content:
            return None
        try:
            return resp.json()
        except json.JSONDecodeError as e:
            raise GitLabApiError(
                resp.status_code,
                f"JSON parse error: {e}",
                resp.text[:500],
            ) from e

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._json(await self._send(path, params))

    async def get_all_pages(self, path: str, params: dict[str, Any] | None = None) -> list[Any]:
        """Fetch every page of a list endpoint and return the items in server order.

        Pages are requested one after another, starting at 1, until the page
        count reported by the last response is reached.
        """
        items: list[Any] = []
        page = 1
        pages = 1
        while page <= pages:
            resp = await self._send(path, {**(params or {}), "per_page": PER_PAGE, "page": page})
            data = self._json(resp)
            if data is None:
                data = []
            if not isinstance(data, list):
                raise GitLabPageError(path, page, resp.text[:500])
            items.extend(data)
            pages = total_pages(resp)
            logger.debug("GET %s page %d/%d: %d items", path, page, pages, len(data))
            page += 1
        return items

    # ── Merge Requests ────────────────────────────────────────────

    async def list_merge_requests(
        self, project_id: str | int, created_after: str, created_before: str
    ) -> list[MergeRequest]:
        enc = self._encode_id(project_id)
        data = await self.get_all_pages(
            f"/projects/{enc}/merge_requests",
            params={
                "state": "all",
                "created_after": created_after,
                "created_before": created_before,
            },
        )
        return [MergeRequest.model_validate(item) for item in data]

    async def get_merge_request(self, project_id: str | int, mr_iid: int) -> MergeRequest:
        enc = self._encode_id(project_id)
        return MergeRequest.model_validate(await self.get(f"/projects/{enc}/merge_requests/{mr_iid}"))

    # ── MR Notes & Discussions ────────────────────────────────────

    async def list_mr_notes(self, project_id: str | int, mr_iid: int) -> list[Note]:
        enc = self._encode_id(project_id)
        data = await self.get_all_pages(f"/projects/{enc}/merge_requests/{mr_iid}/notes")
        return [Note.model_validate(item) for item in data]

    async def list_mr_discussions(self, project_id: str | int, mr_iid: int) -> list[Discussion]:
        enc = self._encode_id(project_id)
        data = await self.get_all_pages(f"/projects/{enc}/merge_requests/{mr_iid}/discussions")
        return [Discussion.model_validate(item) for item in data]
