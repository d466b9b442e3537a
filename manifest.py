"""Read the repository manifest and expand it into concrete repositories."""

import asyncio
from pathlib import Path
from typing import AsyncIterator, Iterable, List, Optional

import aiohttp

from events import ENTRY_STARTED, GROUP_EXPANDED, GROUP_PAGE_FETCHED, EventObserver, NullObserver
from exceptions import CatalogExpansionError, ConfigurationError, GitLabAPIError
from gitlab_api import PAGE_SIZE, CatalogClient
from models import ManifestEntry, RepositoryRef


def read_manifest(path: str) -> List[str]:
    """Return the manifest lines, raising ``ConfigurationError`` if unreadable."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot read repositories file {path}: {exc}") from exc
    return content.split("\n")


async def expand_group(
    group_path: str,
    catalog: CatalogClient,
    observer: Optional[EventObserver] = None,
) -> AsyncIterator[RepositoryRef]:
    """Yield every project under ``group_path`` and its subgroups.

    Pages are requested until one comes back shorter than ``PAGE_SIZE``.
    Each ref is built from the project's own ``path_with_namespace`` since
    projects in subgroups do not live directly under ``group_path``.
    """
    observer = observer or NullObserver()
    page = 1
    total = 0
    while True:
        try:
            projects = await catalog.list_group_projects(group_path, page)
        except (GitLabAPIError, aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise CatalogExpansionError(group_path, exc) from exc
        observer.on_event(
            GROUP_PAGE_FETCHED, {"group": group_path, "page": page, "count": len(projects)}
        )
        for project in projects:
            total += 1
            yield RepositoryRef.from_full_path(project["path_with_namespace"])
        if len(projects) < PAGE_SIZE:
            break
        page += 1
    observer.on_event(GROUP_EXPANDED, {"group": group_path, "count": total})


async def resolve(
    lines: Iterable[str],
    catalog: CatalogClient,
    observer: Optional[EventObserver] = None,
) -> AsyncIterator[RepositoryRef]:
    """Lazily turn manifest lines into repositories, in manifest order.

    Direct entries need no network call. Repositories named by more than one
    line are yielded once per line.
    """
    observer = observer or NullObserver()
    for line in lines:
        line = line.strip()
        if not line:
            continue
        entry = ManifestEntry.parse(line)
        observer.on_event(ENTRY_STARTED, {"entry": entry.raw_path})
        if entry.is_wildcard:
            async for ref in expand_group(entry.group_path, catalog, observer):
                yield ref
        else:
            yield RepositoryRef(group_path=entry.group_path, repo_name=entry.last_segment)
