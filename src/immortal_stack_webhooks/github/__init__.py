"""GitHub event routing and handling.

This module turns GitHub webhook deliveries into ClickUp tasks:
- push: one task per commit mentioning "todo"
- pull_request: one review task for PRs opened against main/master
- issues: one backlog task for issues labelled "stack" or "immortal-stack"
"""

from immortal_stack_webhooks.github.events import (
    GitHubEventType,
    IssuesEvent,
    PullRequestEvent,
    PushEvent,
)
from immortal_stack_webhooks.github.processor import GitHubEventProcessor, ProcessingResult

__all__ = [
    "GitHubEventProcessor",
    "GitHubEventType",
    "IssuesEvent",
    "ProcessingResult",
    "PullRequestEvent",
    "PushEvent",
]
