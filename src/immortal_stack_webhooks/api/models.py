"""Pydantic response models for the webhook endpoints.

Field names follow the JSON the webhook senders and dashboards already
consume (camelCase), exposed through aliases.

Response Models:
- GitHubWebhookResponse: acknowledgement for POST /api/github/webhook
- ScenarioWebhookResponse: acknowledgement for POST /api/webhooks/make/{scenarioId}
- IntegrationHealthResponse: GET /api/github/health
- HealthResponse: GET /health
- ErrorResponse: authentication failures and unhandled errors
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class AckStatus(str, Enum):
    """Status reported back to webhook senders."""

    SUCCESS = "success"
    ERROR = "error"


class _AliasedModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class GitHubWebhookResponse(_AliasedModel):
    status: AckStatus
    message: str
    event_type: str | None = Field(default=None, alias="eventType")
    delivery_id: str | None = Field(default=None, alias="deliveryId")
    timestamp: str = Field(default_factory=utc_timestamp)
    error: str | None = Field(default=None, description="Failure detail, only on errors.")


class ScenarioWebhookResponse(_AliasedModel):
    status: AckStatus
    message: str
    scenario_id: str = Field(alias="scenarioId")
    timestamp: str = Field(default_factory=utc_timestamp)
    error: str | None = Field(default=None, description="Failure detail, only on errors.")


class IntegrationHealthResponse(BaseModel):
    status: str = "ok"
    message: str
    timestamp: str = Field(default_factory=utc_timestamp)


class HealthResponse(BaseModel):
    status: str = "ok"
    uptime: float = Field(..., description="Seconds since the server started.")
    timestamp: str = Field(default_factory=utc_timestamp)


class ErrorResponse(BaseModel):
    status: AckStatus = AckStatus.ERROR
    message: str


def ack_content(model: GitHubWebhookResponse | ScenarioWebhookResponse) -> dict[str, object]:
    """JSON body for an acknowledgement, omitting ``error`` unless set."""
    exclude = {"error"} if model.error is None else None
    return model.model_dump(mode="json", by_alias=True, exclude=exclude)
