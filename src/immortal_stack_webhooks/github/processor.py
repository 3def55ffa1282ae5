"""GitHub event router and handlers.

The processor looks the X-GitHub-Event value up in a dispatch table, lets the
matching handler decide whether the event deserves a ClickUp task, and then
hands the delivery to the event log. Event types without a handler are
logged and acknowledged.

Handler errors (malformed payloads, ClickUp failures) propagate to the
caller; the HTTP route turns them into a 200 acknowledgement.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from immortal_stack_webhooks.config import ClickUpLists
from immortal_stack_webhooks.github import templates
from immortal_stack_webhooks.github.events import (
    GitHubEventType,
    IssuesEvent,
    PullRequestEvent,
    PushEvent,
)
from immortal_stack_webhooks.storage.event_log import EventStore, InboundEvent, LoggingEventStore
from immortal_stack_webhooks.tasks.client import TaskClient
from immortal_stack_webhooks.tasks.models import TaskRecord

logger = logging.getLogger(__name__)

BRANCH_REF_PREFIX = "refs/heads/"
TODO_MARKER = "todo"
TRACKED_ACTIONS = frozenset({"opened", "reopened"})
REVIEWED_BASE_BRANCHES = frozenset({"main", "master"})
STACK_LABELS = frozenset({"stack", "immortal-stack"})

EventHandler = Callable[[dict[str, Any]], Awaitable[None]]


@dataclass
class ProcessingResult:
    """Outcome of processing one GitHub delivery."""

    status: str
    message: str


class GitHubEventProcessor:
    """Routes GitHub events to handlers and creates ClickUp tasks.

    Attributes:
        task_client: Where task records are sent.
        lists: Destination ClickUp lists.
        event_store: Receives every delivery after routing.
    """

    def __init__(
        self,
        task_client: TaskClient,
        lists: ClickUpLists,
        event_store: EventStore | None = None,
    ) -> None:
        self.task_client = task_client
        self.lists = lists
        self.event_store: EventStore = event_store or LoggingEventStore()

        self.event_handlers: dict[GitHubEventType, EventHandler] = {
            GitHubEventType.PUSH: self.handle_push,
            GitHubEventType.PULL_REQUEST: self.handle_pull_request,
            GitHubEventType.ISSUES: self.handle_issues,
        }

    async def process(
        self,
        payload: dict[str, Any],
        event_type: str | None,
        delivery_id: str | None = None,
    ) -> ProcessingResult:
        """Dispatch one delivery to its handler and record it.

        Args:
            payload: Parsed JSON body.
            event_type: Value of the X-GitHub-Event header.
            delivery_id: Value of the X-GitHub-Delivery header.

        Returns:
            ProcessingResult with a success status.

        Raises:
            pydantic.ValidationError: If the payload lacks fields a handler needs.
            ExternalApiError: If ClickUp rejects a task.
        """
        logger.debug(f"Processing GitHub {event_type} event ({delivery_id})")

        handler = self._resolve(event_type)
        if handler is None:
            logger.info(f"Event type {event_type} not configured for processing")
        else:
            await handler(payload)

        await self.event_store.record(
            InboundEvent(
                source="github",
                event_type=event_type,
                delivery_id=delivery_id,
                payload=payload,
            )
        )

        return ProcessingResult(
            status="success",
            message=f"GitHub {event_type} event processed successfully",
        )

    def _resolve(self, event_type: str | None) -> EventHandler | None:
        if event_type is None:
            return None
        try:
            return self.event_handlers[GitHubEventType(event_type)]
        except ValueError:
            return None

    # =========================================================================
    # Handlers
    # =========================================================================

    async def handle_push(self, payload: dict[str, Any]) -> None:
        """Create a TODO task for every commit whose message mentions "todo"."""
        event = PushEvent.model_validate(payload)
        repository = event.repository
        branch = event.ref.removeprefix(BRANCH_REF_PREFIX)

        logger.info(
            f"Push to {repository.full_name} on branch {branch} "
            f"with {len(event.commits)} commits"
        )

        for commit in event.commits:
            if TODO_MARKER not in commit.message.lower():
                continue
            await self.task_client.create_task(
                TaskRecord(
                    name=f"TODO from commit: {commit.summary}",
                    description=templates.commit_todo_description(repository, branch, commit),
                    list_id=self.lists.todo,
                    tags=("github", "todo", "commit"),
                )
            )

    async def handle_pull_request(self, payload: dict[str, Any]) -> None:
        """Create a review task for PRs opened or reopened against main/master."""
        event = PullRequestEvent.model_validate(payload)
        if event.action not in TRACKED_ACTIONS:
            return

        pull_request = event.pull_request
        repository = event.repository

        if pull_request.base.ref not in REVIEWED_BASE_BRANCHES:
            logger.info(
                f"Skipping PR to {pull_request.base.ref} branch (only tracking main/master)"
            )
            return

        logger.info(
            f"New PR #{pull_request.number} in {repository.full_name}: {pull_request.title}"
        )

        await self.task_client.create_task(
            TaskRecord(
                name=f"Review PR #{pull_request.number}: {pull_request.title}",
                description=templates.pull_request_description(repository, pull_request),
                list_id=self.lists.code_reviews,
                tags=("github", "pull-request", repository.name),
            )
        )

    async def handle_issues(self, payload: dict[str, Any]) -> None:
        """Create a backlog task for issues carrying a stack label."""
        event = IssuesEvent.model_validate(payload)
        if event.action not in TRACKED_ACTIONS:
            return

        issue = event.issue
        repository = event.repository

        if not any(label.name.lower() in STACK_LABELS for label in issue.labels):
            logger.info(f"Skipping issue #{issue.number} - no stack label")
            return

        logger.info(f"New issue #{issue.number} in {repository.full_name}: {issue.title}")

        await self.task_client.create_task(
            TaskRecord(
                name=f"GitHub Issue #{issue.number}: {issue.title}",
                description=templates.issue_description(repository, issue),
                list_id=self.lists.dev_backlog,
                tags=("github", "issue", repository.name),
            )
        )
