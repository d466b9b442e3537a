"""Bring one repository's webhook for the destination URL into the desired state."""

import asyncio
from typing import Optional

import aiohttp

from events import WEBHOOK_CREATED, WEBHOOK_DELETED, WEBHOOKS_LISTED, EventObserver, NullObserver
from exceptions import GitLabAPIError, ReconciliationError
from gitlab_api import WebhookClient
from models import RepositoryRef, Webhook, WebhookSpec

_CALL_ERRORS = (GitLabAPIError, aiohttp.ClientError, asyncio.TimeoutError)


async def reconcile(
    ref: RepositoryRef,
    destination_url: str,
    client: WebhookClient,
    observer: Optional[EventObserver] = None,
) -> Webhook:
    """Delete any hook pointing at ``destination_url`` and create a fresh one.

    This is delete-then-recreate, not an atomic upsert: deliveries arriving
    between the two calls are lost. A failed create after a successful delete
    leaves the repository without the hook; re-running the tool restores it.
    """
    observer = observer or NullObserver()
    project_path = ref.full_path

    try:
        existing = await client.list_webhooks(project_path)
    except _CALL_ERRORS as exc:
        raise ReconciliationError(project_path, "list", exc) from exc
    observer.on_event(WEBHOOKS_LISTED, {"repository": project_path, "count": len(existing)})

    match = next((hook for hook in existing if hook.targets(destination_url)), None)
    if match is not None:
        try:
            await client.delete_webhook(project_path, match.id)
        except _CALL_ERRORS as exc:
            raise ReconciliationError(project_path, "delete", exc) from exc
        observer.on_event(WEBHOOK_DELETED, {"repository": project_path, "hook_id": match.id})

    try:
        webhook = await client.create_webhook(project_path, WebhookSpec(url=destination_url))
    except _CALL_ERRORS as exc:
        raise ReconciliationError(project_path, "create", exc) from exc
    observer.on_event(WEBHOOK_CREATED, {"repository": project_path, "hook_id": webhook.id})
    return webhook
