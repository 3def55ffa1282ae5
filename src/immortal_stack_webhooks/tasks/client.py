"""Async ClickUp API client for creating tasks.

The integration is optional. Without an API token, or without a destination
list, task creation is logged and skipped. API failures are logged together
with whatever error body ClickUp returned and re-raised as ExternalApiError.
Nothing is retried.

Example:
    >>> client = ClickUpClient(api_token="pk_123")
    >>> task_id = await client.create_task(record)
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from immortal_stack_webhooks.config import DEFAULT_CLICKUP_API_URL, ServerConfig
from immortal_stack_webhooks.errors import ExternalApiError, IntegrationNotConfiguredError
from immortal_stack_webhooks.tasks.models import TaskRecord

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0  # seconds


class TaskClient(Protocol):
    """Anything that can turn a TaskRecord into a task."""

    async def create_task(self, record: TaskRecord) -> str | None: ...


class ClickUpClient:
    """Creates tasks through the ClickUp v2 REST API.

    Attributes:
        api_token: Personal or OAuth token sent in the Authorization header.
        base_url: API base URL, without trailing slash.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        api_token: str | None,
        base_url: str = DEFAULT_CLICKUP_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: ServerConfig) -> ClickUpClient:
        return cls(api_token=config.clickup_api_token, base_url=config.clickup_api_url)

    def _check_configured(self, record: TaskRecord) -> None:
        """Raise IntegrationNotConfiguredError if the record cannot be sent."""
        if not self.api_token:
            raise IntegrationNotConfiguredError(
                "ClickUp integration not configured (missing API token)"
            )
        if not record.list_id:
            raise IntegrationNotConfiguredError("ClickUp list ID not configured")

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": self.api_token or "",
            "Content-Type": "application/json",
        }

    @staticmethod
    def _error_body(response: httpx.Response) -> Any:
        """Best-effort structured error payload from a failed response."""
        try:
            return response.json()
        except ValueError:
            return response.text or None

    async def create_task(self, record: TaskRecord) -> str | None:
        """Create a task in the record's list.

        Args:
            record: The task to create.

        Returns:
            The created task's ID, or None if the integration is not configured.

        Raises:
            ExternalApiError: If ClickUp returns a non-2xx status or the request
                fails in transit.
        """
        try:
            self._check_configured(record)
        except IntegrationNotConfiguredError as e:
            logger.info(str(e))
            return None

        url = f"{self.base_url}/list/{record.list_id}/task"

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    url,
                    json=record.to_payload(),
                    headers=self._headers(),
                    timeout=self.timeout,
                )
        except httpx.RequestError as e:
            logger.error(f"Error creating ClickUp task: {e}")
            raise ExternalApiError(f"ClickUp request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            error_body = self._error_body(response)
            logger.error(f"Error creating ClickUp task: HTTP {response.status_code}")
            if error_body:
                logger.error(f"ClickUp API response: {error_body}")
            raise ExternalApiError(
                f"ClickUp API returned {response.status_code}",
                status_code=response.status_code,
                error_body=error_body,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"ClickUp returned a non-JSON success body: {response.text!r}")
            raise ExternalApiError(
                "ClickUp returned a non-JSON success body",
                status_code=response.status_code,
                error_body=response.text or None,
            ) from e

        task_id = data.get("id") if isinstance(data, dict) else None
        logger.info(f"Created ClickUp task: {task_id} - {record.name}")
        return task_id
