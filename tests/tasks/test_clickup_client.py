"""Tests for the ClickUp task client.

Tests cover:
- Silent no-op when the token or list is not configured
- Request shape (URL, headers, JSON body)
- Returned task ID
- Error handling for API and transport failures
"""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from immortal_stack_webhooks.config import ServerConfig
from immortal_stack_webhooks.errors import ExternalApiError
from immortal_stack_webhooks.tasks.client import ClickUpClient
from immortal_stack_webhooks.tasks.models import TaskRecord


@pytest.fixture
def record() -> TaskRecord:
    return TaskRecord(
        name="TODO from commit: todo: fix bug",
        description="# TODO from GitHub Commit",
        list_id="901",
        tags=("github", "todo", "commit"),
    )


def _response(status_code: int, json_body: object = None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if isinstance(json_body, Exception):
        response.json.side_effect = json_body
    else:
        response.json.return_value = json_body
    return response


# =============================================================================
# Test: TaskRecord
# =============================================================================


class TestTaskRecord:
    """Tests for TaskRecord payload conversion."""

    def test_to_payload(self, record: TaskRecord) -> None:
        assert record.to_payload() == {
            "name": "TODO from commit: todo: fix bug",
            "description": "# TODO from GitHub Commit",
            "tags": ["github", "todo", "commit"],
        }


# =============================================================================
# Test: Not Configured
# =============================================================================


class TestNotConfigured:
    """Task creation without configuration is a silent no-op."""

    @pytest.mark.asyncio
    async def test_no_token_skips_request(
        self, record: TaskRecord, caplog: pytest.LogCaptureFixture
    ) -> None:
        client = ClickUpClient(api_token=None)

        with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
            with caplog.at_level(logging.INFO):
                result = await client.create_task(record)

        assert result is None
        mock_post.assert_not_called()
        assert "missing API token" in caplog.text

    @pytest.mark.asyncio
    async def test_no_list_skips_request(self, record: TaskRecord) -> None:
        client = ClickUpClient(api_token="pk_123")
        unlisted = TaskRecord(name=record.name, description="", list_id=None, tags=record.tags)

        with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
            result = await client.create_task(unlisted)

        assert result is None
        mock_post.assert_not_called()


# =============================================================================
# Test: Create Task
# =============================================================================


class TestCreateTask:
    """Tests for successful task creation."""

    @pytest.mark.asyncio
    async def test_posts_to_list_endpoint(self, record: TaskRecord) -> None:
        client = ClickUpClient(api_token="pk_123")

        with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = _response(200, {"id": "86abc", "name": record.name})
            result = await client.create_task(record)

        assert result == "86abc"
        mock_post.assert_called_once()
        args, kwargs = mock_post.call_args
        assert args[0] == "https://api.clickup.com/api/v2/list/901/task"
        assert kwargs["headers"]["Authorization"] == "pk_123"
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["json"] == record.to_payload()

    @pytest.mark.asyncio
    async def test_custom_base_url_from_config(self, record: TaskRecord) -> None:
        config = ServerConfig(clickup_api_token="pk_123", clickup_api_url="http://clickup.test/v2/")
        client = ClickUpClient.from_config(config)

        with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = _response(200, {"id": "1"})
            await client.create_task(record)

        assert mock_post.call_args.args[0] == "http://clickup.test/v2/list/901/task"


# =============================================================================
# Test: Errors
# =============================================================================


class TestCreateTaskErrors:
    """API failures are logged and propagated."""

    @pytest.mark.asyncio
    async def test_api_error_includes_structured_body(
        self, record: TaskRecord, caplog: pytest.LogCaptureFixture
    ) -> None:
        client = ClickUpClient(api_token="pk_bad")
        error_body = {"err": "Token invalid", "ECODE": "OAUTH_025"}

        with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = _response(401, error_body)
            with caplog.at_level(logging.ERROR):
                with pytest.raises(ExternalApiError) as exc_info:
                    await client.create_task(record)

        assert exc_info.value.status_code == 401
        assert exc_info.value.error_body == error_body
        assert "OAUTH_025" in caplog.text

    @pytest.mark.asyncio
    async def test_non_json_error_body_falls_back_to_text(self, record: TaskRecord) -> None:
        client = ClickUpClient(api_token="pk_123")

        with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = _response(502, ValueError("no json"), text="Bad Gateway")
            with pytest.raises(ExternalApiError) as exc_info:
                await client.create_task(record)

        assert exc_info.value.status_code == 502
        assert exc_info.value.error_body == "Bad Gateway"

    @pytest.mark.asyncio
    async def test_non_json_success_body_raises_api_error(self, record: TaskRecord) -> None:
        client = ClickUpClient(api_token="pk_123")

        with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = httpx.Response(200, text="<html>ok</html>")
            with pytest.raises(ExternalApiError) as exc_info:
                await client.create_task(record)

        assert exc_info.value.status_code == 200
        assert exc_info.value.error_body == "<html>ok</html>"

    def test_error_string_includes_body(self) -> None:
        error = ExternalApiError(
            "ClickUp API returned 401", status_code=401, error_body={"ECODE": "OAUTH_025"}
        )

        assert str(error) == "ClickUp API returned 401 status=401 body={'ECODE': 'OAUTH_025'}"

    @pytest.mark.asyncio
    async def test_transport_error_is_wrapped(self, record: TaskRecord) -> None:
        client = ClickUpClient(api_token="pk_123")

        with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
            mock_post.side_effect = httpx.ConnectError("connection refused")
            with pytest.raises(ExternalApiError) as exc_info:
                await client.create_task(record)

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_not_retried(self, record: TaskRecord) -> None:
        client = ClickUpClient(api_token="pk_123")

        with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = _response(500, {"err": "boom"})
            with pytest.raises(ExternalApiError):
                await client.create_task(record)

        assert mock_post.call_count == 1
