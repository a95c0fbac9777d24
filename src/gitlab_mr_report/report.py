"""Merge request comment report: counting, row building and the full pipeline."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Sequence
from pathlib import Path

import click

from .client import GitLabClient
from .config import ReportConfig
from .csv_writer import write_csv
from .exceptions import GitLabApiError
from .models.merge_requests import MergeRequest
from .models.report import CommentCounts, ReportRow

logger = logging.getLogger(__name__)


def _payload(error: Exception) -> str:
    if isinstance(error, GitLabApiError):
        return error.payload
    return str(error)


async def count_comments(
    client: GitLabClient, project_id: str | int, mr_iid: int
) -> CommentCounts:
    """Count user-authored notes on a merge request.

    Overview notes and the notes nested in discussions are counted separately;
    system notes ("assigned to ...", "added 1 commit", ...) are skipped in both.
    The two collections are taken as disjoint, as GitLab returns them.
    """
    try:
        notes = await client.list_mr_notes(project_id, mr_iid)
        discussions = await client.list_mr_discussions(project_id, mr_iid)
    except Exception as e:
        logger.error("Error fetching comments for !%s: %s", mr_iid, _payload(e))
        raise

    return CommentCounts(
        overview_count=sum(1 for note in notes if not note.system),
        discussion_count=sum(len(d.user_notes) for d in discussions),
    )


async def build_report(
    client: GitLabClient, config: ReportConfig, merge_requests: Sequence[MergeRequest]
) -> list[ReportRow]:
    """Count comments for every merge request concurrently and build rows in input order.

    Any single failure fails the whole batch: the remaining fetches are
    cancelled and awaited before the error propagates, so none of them outlive
    the client. With ``config.max_concurrency`` set, at most that many merge
    requests are fetched at once.
    """
    limit = asyncio.Semaphore(config.max_concurrency) if config.bounded else None

    async def row_for(mr: MergeRequest) -> ReportRow:
        async with limit if limit is not None else contextlib.nullcontext():
            counts = await count_comments(client, config.project_id, mr.iid)
        return ReportRow.from_merge_request(mr, counts)

    tasks = [asyncio.ensure_future(row_for(mr)) for mr in merge_requests]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def generate_report(config: ReportConfig) -> list[ReportRow]:
    """Fetch, aggregate and write the CSV report described by *config*."""
    async with GitLabClient(config) as client:
        merge_requests = await client.list_merge_requests(
            config.project_id, config.start_date, config.end_date
        )
        click.echo(f"Fetched {len(merge_requests)} merge requests")

        rows = await build_report(client, config, merge_requests)

    path = write_csv(rows, Path(config.output_path))
    click.echo(f"CSV file generated: {path}")
    return rows
