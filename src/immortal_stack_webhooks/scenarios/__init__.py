"""Make.com scenario routing.

Each Make.com scenario posts to /api/webhooks/make/<scenario-id>. The scenario
ID selects a ScenarioHandler; unknown IDs are logged and acknowledged.
"""

from immortal_stack_webhooks.scenarios.handlers import (
    ClickUpSyncHandler,
    DiscordLogHandler,
    MemoryHarvestHandler,
    NotionUpdateHandler,
    ScenarioHandler,
    ScenarioResult,
)
from immortal_stack_webhooks.scenarios.router import (
    ScenarioId,
    ScenarioRouter,
    default_scenario_handlers,
)

__all__ = [
    "ClickUpSyncHandler",
    "DiscordLogHandler",
    "MemoryHarvestHandler",
    "NotionUpdateHandler",
    "ScenarioHandler",
    "ScenarioId",
    "ScenarioResult",
    "ScenarioRouter",
    "default_scenario_handlers",
]
