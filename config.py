"""Configuration settings for the GitLab webhook sync tool."""

from typing import Optional
from urllib.parse import urlparse

from pydantic import ConfigDict, ValidationError, field_validator
from pydantic_settings import BaseSettings

from exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # GitLab API
    gitlab_url: str = "https://gitlab.com"
    gitlab_pat: str

    # Webhook destination, used verbatim
    webhook_url: str

    # Manifest of repositories and groups
    repos_file: str = "repos.txt"

    # HTTP
    request_timeout: float = 30.0

    # Logging
    debug: bool = False
    log_file: Optional[str] = None

    model_config = ConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("gitlab_pat")
    @classmethod
    def _require_token(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("GitLab Personal Access Token (PAT) is required")
        return value

    @field_validator("webhook_url")
    @classmethod
    def _validate_webhook_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(
                "Invalid webhook URL format. Please provide a valid URL including "
                "protocol (http:// or https://)"
            )
        return value

    @property
    def api_url(self) -> str:
        """Root of the GitLab REST API."""
        return f"{self.gitlab_url.rstrip('/')}/api/v4"


def load_settings(**overrides) -> Settings:
    """Build the settings once at startup, raising ``ConfigurationError`` on bad input."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']).upper() or 'settings'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(problems) from exc
