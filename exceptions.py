"""Exception hierarchy for the webhook sync tool."""

from typing import Optional


class WebhookSyncError(Exception):
    """Base class for every error raised by the tool."""


class ConfigurationError(WebhookSyncError):
    """Missing or invalid settings, or an unreadable manifest."""


class GitLabAPIError(WebhookSyncError):
    """The GitLab API answered a request with an error status."""

    def __init__(self, operation: str, status: int, body: str = "") -> None:
        self.operation = operation
        self.status = status
        self.body = body
        message = f"{operation} failed with HTTP {status}"
        if body:
            message = f"{message}: {body}"
        super().__init__(message)


class CatalogExpansionError(WebhookSyncError):
    """A wildcard group could not be expanded into projects."""

    def __init__(self, group_path: str, cause: Optional[BaseException] = None) -> None:
        self.group_path = group_path
        super().__init__(f"Failed to get repositories for group {group_path}: {cause}")


class ReconciliationError(WebhookSyncError):
    """Listing, deleting or creating a webhook failed for one repository."""

    def __init__(
        self, repository: str, operation: str, cause: Optional[BaseException] = None
    ) -> None:
        self.repository = repository
        self.operation = operation
        super().__init__(
            f"Failed to create/update webhook for {repository} ({operation}): {cause}"
        )
