"""Server configuration built once from the environment.

The configuration is an immutable pydantic model constructed at startup and
handed to every component that needs it. Missing values never fail startup:
the features that depend on them quietly become no-ops.

Environment Variables:
- CLICKUP_API_TOKEN -> clickup_api_token
- CLICKUP_API_URL -> clickup_api_url
- CLICKUP_DEV_BACKLOG_LIST_ID -> clickup_lists.dev_backlog
- CLICKUP_CODE_REVIEWS_LIST_ID -> clickup_lists.code_reviews
- CLICKUP_TODO_LIST_ID -> clickup_lists.todo
- GITHUB_WEBHOOK_SECRET -> github_webhook_secret
- MAKE_WEBHOOK_SECRET -> make_webhook_secret
- HOST -> host
- PORT -> port
- CORS_ORIGINS -> cors_origins (comma-separated, or "*")
- LOG_LEVEL -> log_level

Usage:
    from immortal_stack_webhooks.config import ServerConfig

    config = ServerConfig.from_env()
    if config.clickup_enabled:
        ...
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_CLICKUP_API_URL = "https://api.clickup.com/api/v2"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "info"

VALID_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")

# Format: (env_var_name, config_path_parts)
ENV_VAR_MAPPINGS: list[tuple[str, tuple[str, ...]]] = [
    ("CLICKUP_API_TOKEN", ("clickup_api_token",)),
    ("CLICKUP_API_URL", ("clickup_api_url",)),
    ("CLICKUP_DEV_BACKLOG_LIST_ID", ("clickup_lists", "dev_backlog")),
    ("CLICKUP_CODE_REVIEWS_LIST_ID", ("clickup_lists", "code_reviews")),
    ("CLICKUP_TODO_LIST_ID", ("clickup_lists", "todo")),
    ("GITHUB_WEBHOOK_SECRET", ("github_webhook_secret",)),
    ("MAKE_WEBHOOK_SECRET", ("make_webhook_secret",)),
    ("HOST", ("host",)),
    ("PORT", ("port",)),
    ("CORS_ORIGINS", ("cors_origins",)),
    ("LOG_LEVEL", ("log_level",)),
]


# =============================================================================
# Models
# =============================================================================


class ClickUpLists(BaseModel):
    """Destination ClickUp list identifiers."""

    model_config = ConfigDict(frozen=True)

    dev_backlog: str | None = None
    code_reviews: str | None = None
    todo: str | None = None


class ServerConfig(BaseModel):
    """Process-wide configuration, immutable for the life of the process.

    Attributes:
        clickup_api_token: Token for the ClickUp API. Task creation is skipped
            when unset.
        clickup_api_url: Base URL of the ClickUp v2 API.
        clickup_lists: Destination lists for each kind of task.
        github_webhook_secret: Shared secret for X-Hub-Signature-256 checks.
            Verification is bypassed when unset.
        make_webhook_secret: Shared secret expected in X-Webhook-Token.
        host: Interface the HTTP server binds to.
        port: Port the HTTP server listens on.
        cors_origins: Allowed CORS origins.
        log_level: Root log level.
    """

    model_config = ConfigDict(frozen=True)

    clickup_api_token: str | None = None
    clickup_api_url: str = DEFAULT_CLICKUP_API_URL
    clickup_lists: ClickUpLists = Field(default_factory=ClickUpLists)
    github_webhook_secret: str | None = None
    make_webhook_secret: str | None = None
    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            if value.strip() == "*":
                return ["*"]
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.lower()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}")
        return level

    @field_validator("clickup_api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def clickup_enabled(self) -> bool:
        """Whether ClickUp task creation can happen at all."""
        return bool(self.clickup_api_token)

    @property
    def signature_verification_enabled(self) -> bool:
        return bool(self.github_webhook_secret)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """Build configuration from environment variables.

        Empty values are treated as unset.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            A validated, frozen ServerConfig.
        """
        source = os.environ if environ is None else environ
        data: dict[str, Any] = {}

        for env_var, path in ENV_VAR_MAPPINGS:
            value = source.get(env_var)
            if value is None or value.strip() == "":
                continue
            target = data
            for part in path[:-1]:
                target = target.setdefault(part, {})
            target[path[-1]] = value.strip()

        return cls.model_validate(data)

    def masked(self) -> dict[str, Any]:
        """Return the configuration as a dict with secrets truncated for display."""
        data = self.model_dump()
        for key in ("clickup_api_token", "github_webhook_secret", "make_webhook_secret"):
            data[key] = mask_secret(data[key])
        return data


def mask_secret(value: str | None) -> str:
    """Truncate a secret for safe display.

    Shows first 4 and last 4 characters with ellipsis in between.

    Example:
        >>> mask_secret("pk_1234567890abcdef")
        'pk_1...cdef'
        >>> mask_secret(None)
        '(not set)'
    """
    if not value:
        return "(not set)"
    if len(value) <= 12:
        return value[:2] + "..." + value[-2:]
    return value[:4] + "..." + value[-4:]
