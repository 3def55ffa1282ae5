"""Scenario handlers for Make.com deliveries.

The server only guarantees that the right handler is invoked with the
payload. What each scenario should do with it is owned by the scenario's
consumer, so the shipped handlers log the invocation and report success.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioResult:
    """Outcome reported by a scenario handler."""

    handled: bool
    detail: str | None = None


class ScenarioHandler(Protocol):
    """Processes the payload of one Make.com scenario."""

    async def handle(self, payload: Any) -> ScenarioResult: ...


class _LoggingScenarioHandler:
    """Base handler that records the invocation and nothing else."""

    label: str = "scenario"

    async def handle(self, payload: Any) -> ScenarioResult:
        keys = sorted(payload) if isinstance(payload, dict) else []
        logger.info(f"{self.label} handler invoked (payload keys: {', '.join(keys) or 'none'})")
        return ScenarioResult(handled=True, detail=f"{self.label} payload received")


class MemoryHarvestHandler(_LoggingScenarioHandler):
    label = "memory-harvest"


class DiscordLogHandler(_LoggingScenarioHandler):
    label = "discord-log"


class ClickUpSyncHandler(_LoggingScenarioHandler):
    label = "clickup-sync"


class NotionUpdateHandler(_LoggingScenarioHandler):
    label = "notion-update"
