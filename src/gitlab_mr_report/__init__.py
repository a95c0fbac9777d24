"""Export GitLab merge requests and their comment counts to CSV."""

import asyncio
import logging
import os

import click
import httpx
from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from .exceptions import GitLabError


@click.command()
@click.option("--gitlab-url", envvar="GITLAB_API_URL", help="GitLab API base URL")
@click.option("--gitlab-token", envvar="GITLAB_TOKEN", help="GitLab personal access token")
@click.option("--project-id", envvar="GITLAB_PROJECT_ID", help="Project ID or full path")
@click.option("--start-date", envvar="START_DATE", help="Created after (ISO 8601)")
@click.option("--end-date", envvar="END_DATE", help="Created before (ISO 8601)")
@click.option("-o", "--output", help="CSV file to write (default: merge_requests.csv)")
@click.option(
    "--max-concurrency",
    type=click.IntRange(min=0),
    help="Merge requests fetched at once; 0 means no limit",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Diagnostics written to stderr",
)
def main(
    gitlab_url: str | None,
    gitlab_token: str | None,
    project_id: str | None,
    start_date: str | None,
    end_date: str | None,
    output: str | None,
    max_concurrency: int | None,
    log_level: str,
) -> None:
    """Write merge_requests.csv for one project and a creation-date window."""
    load_dotenv(find_dotenv(usecwd=True))
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides = {
        "GITLAB_API_URL": gitlab_url,
        "GITLAB_TOKEN": gitlab_token,
        "GITLAB_PROJECT_ID": project_id,
        "START_DATE": start_date,
        "END_DATE": end_date,
        "REPORT_OUTPUT": output,
        "GITLAB_MAX_CONCURRENCY": None if max_concurrency is None else str(max_concurrency),
    }
    for name, value in overrides.items():
        if value is not None:
            os.environ[name] = value

    from .config import ReportConfig
    from .report import generate_report

    try:
        config = ReportConfig.from_env()
        config.validate()
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    try:
        asyncio.run(generate_report(config))
    except (GitLabError, httpx.HTTPError, ValidationError, OSError) as e:
        # Reported, not re-raised; the exit status stays 0.
        click.echo(f"Error: {e}", err=True)


if __name__ == "__main__":
    main()
