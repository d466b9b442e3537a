#!/usr/bin/env python3
"""
Create or refresh GitLab webhooks for every repository in a manifest.

Each manifest line is a repository path (``group/sub/repo``) or a whole group
including its subgroups (``group/sub/*``). For every repository any webhook
already pointing at ``WEBHOOK_URL`` is deleted and a new one is created.

Environment variables:
- GITLAB_PAT: GitLab personal access token (required)
- WEBHOOK_URL: destination of the webhooks (required)
- GITLAB_URL: GitLab instance (optional, defaults to https://gitlab.com)
- REPOS_FILE: manifest path (optional, defaults to repos.txt)
- DEBUG: verbose logging (optional)
- REQUEST_TIMEOUT: per-request timeout in seconds (optional)
- LOG_FILE: also log to this rotating file (optional)
"""

import asyncio
import logging
import sys
from typing import Iterable, List, Optional

import aiohttp

from config import Settings, load_settings
from events import RUN_COMPLETED, EventObserver, LoggingObserver
from exceptions import ConfigurationError, WebhookSyncError
from gitlab_api import GitLabClient
from logging_config import setup_logging
from manifest import read_manifest, resolve
from models import Webhook
from reconciler import reconcile

logger = logging.getLogger(__name__)


async def process_repositories(
    lines: Iterable[str],
    destination_url: str,
    client: GitLabClient,
    observer: Optional[EventObserver] = None,
) -> List[Webhook]:
    """Reconcile every repository the manifest resolves to, one at a time.

    The first failure propagates; repositories already handled keep their
    new webhook.
    """
    observer = observer or LoggingObserver()
    created: List[Webhook] = []
    async for ref in resolve(lines, client, observer):
        created.append(await reconcile(ref, destination_url, client, observer))
    observer.on_event(RUN_COMPLETED, {"count": len(created)})
    return created


async def run(settings: Settings, observer: Optional[EventObserver] = None) -> List[Webhook]:
    """Read the manifest and sync webhooks using one HTTP session."""
    lines = read_manifest(settings.repos_file)
    timeout = aiohttp.ClientTimeout(total=settings.request_timeout)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        client = GitLabClient(session, settings.gitlab_pat, settings.api_url)
        return await process_repositories(lines, settings.webhook_url, client, observer)


def main() -> int:
    """Entry point; returns the process exit status."""
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        setup_logging()
        logger.error("Invalid configuration: %s", exc)
        return 1

    setup_logging(debug=settings.debug, log_file=settings.log_file)
    logger.debug("Using GitLab API at %s", settings.api_url)

    try:
        asyncio.run(run(settings))
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1
    except WebhookSyncError as exc:
        logger.error("Error processing repositories: %s", exc)
        return 1
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        logger.exception("Error processing repositories: %s", exc)
        return 1
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
