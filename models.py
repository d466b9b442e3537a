"""Data types shared by the manifest resolver and the webhook reconciler."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

WILDCARD = "*"

# Static token sent with every created webhook; rotating it is a code change.
MASKED_WEBHOOK_PART = "secret-token"


@dataclass(frozen=True)
class ManifestEntry:
    """One non-blank manifest line split into group path and final segment."""

    raw_path: str
    group_path: str
    last_segment: str

    @classmethod
    def parse(cls, line: str) -> "ManifestEntry":
        parts = line.split("/")
        last_segment = parts.pop()
        return cls(raw_path=line, group_path="/".join(parts), last_segment=last_segment)

    @property
    def is_wildcard(self) -> bool:
        return self.last_segment == WILDCARD


@dataclass(frozen=True)
class RepositoryRef:
    """A concrete repository, addressed as ``group_path/repo_name``."""

    group_path: str
    repo_name: str

    @classmethod
    def from_full_path(cls, full_path: str) -> "RepositoryRef":
        """Split a project's ``path_with_namespace`` into group path and name."""
        parts = full_path.split("/")
        repo_name = parts.pop()
        return cls(group_path="/".join(parts), repo_name=repo_name)

    @property
    def full_path(self) -> str:
        return f"{self.group_path}/{self.repo_name}"


@dataclass
class Webhook:
    """A project webhook as returned by the GitLab API.

    Only ``url`` matters when deciding whether two hooks are the same
    subscription.
    """

    id: Optional[int]
    url: str
    push_events: bool = False
    merge_requests_events: bool = False
    issues_events: bool = False
    enable_ssl_verification: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Webhook":
        known = {
            "id",
            "url",
            "push_events",
            "merge_requests_events",
            "issues_events",
            "enable_ssl_verification",
        }
        return cls(
            id=data.get("id"),
            url=data.get("url", ""),
            push_events=bool(data.get("push_events", False)),
            merge_requests_events=bool(data.get("merge_requests_events", False)),
            issues_events=bool(data.get("issues_events", False)),
            enable_ssl_verification=bool(data.get("enable_ssl_verification", False)),
            extra={key: value for key, value in data.items() if key not in known},
        )

    def targets(self, url: str) -> bool:
        """Return ``True`` if this hook delivers to exactly ``url``."""
        return self.url == url


@dataclass(frozen=True)
class WebhookSpec:
    """Desired state of the webhook created for every repository."""

    url: str
    token: str = MASKED_WEBHOOK_PART
    push_events: bool = True
    merge_requests_events: bool = True
    issues_events: bool = True
    enable_ssl_verification: bool = True

    def to_payload(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "token": self.token,
            "push_events": self.push_events,
            "merge_requests_events": self.merge_requests_events,
            "issues_events": self.issues_events,
            "enable_ssl_verification": self.enable_ssl_verification,
        }
