"""Pytest configuration and fixtures for webhook server tests."""

from __future__ import annotations

from typing import Any

import pytest

from immortal_stack_webhooks.config import ClickUpLists, ServerConfig
from immortal_stack_webhooks.storage.event_log import InboundEvent
from immortal_stack_webhooks.tasks.models import TaskRecord

GITHUB_SECRET = "gh-webhook-secret"
MAKE_SECRET = "make-webhook-secret"


# =============================================================================
# Collaborator Fakes
# =============================================================================


class RecordingTaskClient:
    """Task client that keeps every record instead of calling ClickUp."""

    def __init__(self, error: Exception | None = None) -> None:
        self.records: list[TaskRecord] = []
        self.error = error

    async def create_task(self, record: TaskRecord) -> str | None:
        if self.error is not None:
            raise self.error
        self.records.append(record)
        return f"task-{len(self.records)}"


class RecordingEventStore:
    """Event store that keeps every recorded event."""

    def __init__(self) -> None:
        self.events: list[InboundEvent] = []

    async def record(self, event: InboundEvent) -> None:
        self.events.append(event)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def clickup_lists() -> ClickUpLists:
    return ClickUpLists(dev_backlog="list-backlog", code_reviews="list-reviews", todo="list-todo")


@pytest.fixture
def server_config(clickup_lists: ClickUpLists) -> ServerConfig:
    """Fully configured server."""
    return ServerConfig(
        clickup_api_token="pk_test_token_123456",
        clickup_lists=clickup_lists,
        github_webhook_secret=GITHUB_SECRET,
        make_webhook_secret=MAKE_SECRET,
    )


@pytest.fixture
def task_client() -> RecordingTaskClient:
    return RecordingTaskClient()


@pytest.fixture
def event_store() -> RecordingEventStore:
    return RecordingEventStore()


# =============================================================================
# GitHub Payload Fixtures
# =============================================================================


def _commit(message: str, commit_id: str = "abc123") -> dict[str, Any]:
    return {
        "id": commit_id,
        "message": message,
        "author": {"name": "Ada Lovelace", "email": "ada@example.com"},
        "url": f"https://github.com/immortal/stack/commit/{commit_id}",
        "added": ["new.py"],
        "modified": ["app.py", "config.py"],
        "removed": [],
    }


def _push_payload(messages: list[str], ref: str = "refs/heads/main") -> dict[str, Any]:
    return {
        "ref": ref,
        "repository": {"name": "stack", "full_name": "immortal/stack"},
        "commits": [_commit(msg, commit_id=f"c{i}") for i, msg in enumerate(messages)],
        "pusher": {"name": "ada"},
    }


def _pull_request_payload(action: str = "opened", base: str = "main") -> dict[str, Any]:
    return {
        "action": action,
        "number": 42,
        "pull_request": {
            "number": 42,
            "title": "Add webhook receiver",
            "body": "Wires up the GitHub webhook.",
            "user": {"login": "ada"},
            "base": {"ref": base},
            "head": {"ref": "feature/webhooks"},
            "html_url": "https://github.com/immortal/stack/pull/42",
            "changed_files": 3,
            "additions": 120,
            "deletions": 8,
        },
        "repository": {"name": "stack", "full_name": "immortal/stack"},
    }


def _issues_payload(action: str = "opened", labels: list[str] | None = None) -> dict[str, Any]:
    return {
        "action": action,
        "issue": {
            "number": 7,
            "title": "Memory harvest drops entries",
            "body": None,
            "user": {"login": "grace"},
            "labels": [{"name": name} for name in (labels or [])],
            "html_url": "https://github.com/immortal/stack/issues/7",
        },
        "repository": {"name": "stack", "full_name": "immortal/stack"},
    }


@pytest.fixture
def make_push():
    """Factory for push payloads: make_push(["todo: x", "fix y"], ref=...)."""
    return _push_payload


@pytest.fixture
def make_pull_request():
    """Factory for pull_request payloads: make_pull_request(action, base)."""
    return _pull_request_payload


@pytest.fixture
def make_issue():
    """Factory for issues payloads: make_issue(action, labels)."""
    return _issues_payload


@pytest.fixture
def failing_task_client_factory():
    """Build a task client whose create_task raises the given error."""
    return RecordingTaskClient
