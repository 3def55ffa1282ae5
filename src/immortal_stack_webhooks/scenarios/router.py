"""Scenario ID -> handler dispatch table."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from immortal_stack_webhooks.scenarios.handlers import (
    ClickUpSyncHandler,
    DiscordLogHandler,
    MemoryHarvestHandler,
    NotionUpdateHandler,
    ScenarioHandler,
    ScenarioResult,
)

logger = logging.getLogger(__name__)


class ScenarioId(str, Enum):
    """Scenario IDs with a handler."""

    MEMORY_HARVEST = "memory-harvest"
    DISCORD_LOG = "discord-log"
    CLICKUP_SYNC = "clickup-sync"
    NOTION_UPDATE = "notion-update"


def default_scenario_handlers() -> dict[ScenarioId, ScenarioHandler]:
    return {
        ScenarioId.MEMORY_HARVEST: MemoryHarvestHandler(),
        ScenarioId.DISCORD_LOG: DiscordLogHandler(),
        ScenarioId.CLICKUP_SYNC: ClickUpSyncHandler(),
        ScenarioId.NOTION_UPDATE: NotionUpdateHandler(),
    }


class ScenarioRouter:
    """Routes Make.com payloads to scenario handlers.

    Attributes:
        handlers: Handler per scenario ID. Missing IDs are ignored.
    """

    def __init__(self, handlers: Mapping[ScenarioId, ScenarioHandler] | None = None) -> None:
        self.handlers: dict[ScenarioId, ScenarioHandler] = (
            dict(handlers) if handlers is not None else default_scenario_handlers()
        )

    def resolve(self, scenario_id: str) -> ScenarioHandler | None:
        try:
            return self.handlers.get(ScenarioId(scenario_id))
        except ValueError:
            return None

    async def dispatch(self, scenario_id: str, payload: Any) -> ScenarioResult | None:
        """Run the handler for a scenario.

        Args:
            scenario_id: Path segment identifying the scenario.
            payload: Parsed JSON body.

        Returns:
            The handler's result, or None for an unknown scenario.
        """
        handler = self.resolve(scenario_id)
        if handler is None:
            logger.warning(f"Unknown scenario ID: {scenario_id}")
            return None
        return await handler.handle(payload)
