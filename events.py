"""Progress events emitted by the resolver and reconciler."""

import logging
from typing import Any, Dict, Optional, Protocol

logger = logging.getLogger(__name__)

ENTRY_STARTED = "entry_started"
GROUP_PAGE_FETCHED = "group_page_fetched"
GROUP_EXPANDED = "group_expanded"
WEBHOOKS_LISTED = "webhooks_listed"
WEBHOOK_DELETED = "webhook_deleted"
WEBHOOK_CREATED = "webhook_created"
RUN_COMPLETED = "run_completed"


class EventObserver(Protocol):
    def on_event(self, kind: str, details: Dict[str, Any]) -> None: ...


class NullObserver:
    """Observer that ignores everything."""

    def on_event(self, kind: str, details: Dict[str, Any]) -> None:
        return None


class LoggingObserver:
    """Render core events as log lines.

    Page and listing events are only interesting when debugging, so they go
    out at DEBUG level; everything else is INFO.
    """

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._log = log or logger

    def on_event(self, kind: str, details: Dict[str, Any]) -> None:
        if kind == ENTRY_STARTED:
            self._log.info("Processing repository: %s", details["entry"])
        elif kind == GROUP_PAGE_FETCHED:
            self._log.debug(
                "Fetched page %s of group %s (%s projects)",
                details["page"],
                details["group"],
                details["count"],
            )
        elif kind == GROUP_EXPANDED:
            self._log.info(
                "Found %s repositories in group %s", details["count"], details["group"]
            )
        elif kind == WEBHOOKS_LISTED:
            self._log.debug(
                "%s has %s existing webhooks", details["repository"], details["count"]
            )
        elif kind == WEBHOOK_DELETED:
            self._log.info("Deleted existing webhook for %s", details["repository"])
        elif kind == WEBHOOK_CREATED:
            self._log.info("Created new webhook for %s", details["repository"])
        elif kind == RUN_COMPLETED:
            self._log.info(
                "All webhooks have been created successfully (%s repositories)",
                details["count"],
            )
        else:
            self._log.debug("%s: %s", kind, details)
