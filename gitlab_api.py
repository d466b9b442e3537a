"""Thin aiohttp client for the GitLab project, group and hook endpoints."""

import logging
from typing import Any, Dict, List, Protocol
from urllib.parse import quote

import aiohttp

from exceptions import GitLabAPIError
from models import Webhook, WebhookSpec

logger = logging.getLogger(__name__)

GITLAB_API_BASE = "https://gitlab.com/api/v4"
PAGE_SIZE = 100


class CatalogClient(Protocol):
    async def list_group_projects(self, group_path: str, page: int) -> List[Dict[str, Any]]: ...


class WebhookClient(Protocol):
    async def list_webhooks(self, project_path: str) -> List[Webhook]: ...

    async def create_webhook(self, project_path: str, spec: WebhookSpec) -> Webhook: ...

    async def delete_webhook(self, project_path: str, hook_id: int) -> None: ...


def encode_path(path: str) -> str:
    """URL-encode a namespaced path so it can stand in for a numeric id."""
    return quote(path, safe="")


class GitLabClient:
    """Catalog and webhook operations against one GitLab instance.

    Projects and groups are addressed by their encoded full path, so no id
    lookup is needed before touching hooks.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        token: str,
        api_url: str = GITLAB_API_BASE,
    ) -> None:
        self._session = session
        self._api_url = api_url.rstrip("/")
        self._headers = {"PRIVATE-TOKEN": token, "Accept": "application/json"}

    async def _raise_for_status(self, resp, operation: str) -> None:
        if resp.status >= 400:
            body = await resp.text()
            logger.debug("%s -> %s: %s", operation, resp.status, body)
            raise GitLabAPIError(operation, resp.status, body)

    async def list_group_projects(self, group_path: str, page: int) -> List[Dict[str, Any]]:
        """Return one page of projects under ``group_path`` including subgroups."""
        url = f"{self._api_url}/groups/{encode_path(group_path)}/projects"
        params = {
            "include_subgroups": "true",
            "per_page": str(PAGE_SIZE),
            "page": str(page),
        }
        async with self._session.get(url, headers=self._headers, params=params) as resp:
            await self._raise_for_status(resp, f"list projects of group {group_path}")
            return await resp.json()

    async def list_webhooks(self, project_path: str) -> List[Webhook]:
        url = f"{self._api_url}/projects/{encode_path(project_path)}/hooks"
        async with self._session.get(url, headers=self._headers) as resp:
            await self._raise_for_status(resp, f"list webhooks of {project_path}")
            data = await resp.json()
        return [Webhook.from_api(item) for item in data]

    async def create_webhook(self, project_path: str, spec: WebhookSpec) -> Webhook:
        url = f"{self._api_url}/projects/{encode_path(project_path)}/hooks"
        async with self._session.post(url, headers=self._headers, json=spec.to_payload()) as resp:
            await self._raise_for_status(resp, f"create webhook on {project_path}")
            data = await resp.json()
        return Webhook.from_api(data)

    async def delete_webhook(self, project_path: str, hook_id: int) -> None:
        url = f"{self._api_url}/projects/{encode_path(project_path)}/hooks/{hook_id}"
        async with self._session.delete(url, headers=self._headers) as resp:
            await self._raise_for_status(resp, f"delete webhook {hook_id} on {project_path}")
