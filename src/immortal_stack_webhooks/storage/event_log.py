"""Event log collaborator for inbound webhook events.

Every GitHub delivery is handed to an EventStore once routing finishes. The
shipped store only writes a log line. A database-backed store can be swapped
in through ``create_app(event_store=...)`` without touching the handlers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InboundEvent:
    """One webhook delivery as seen by the event log.

    Attributes:
        source: Sender, e.g. "github".
        event_type: Event type header or scenario ID.
        delivery_id: Sender's delivery identifier, if provided.
        payload: Parsed JSON body.
        received_at: When the server received the delivery.
    """

    source: str
    event_type: str | None
    delivery_id: str | None
    payload: dict[str, Any]
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def repository(self) -> str | None:
        """Repository full name, when the payload carries one."""
        repo = self.payload.get("repository")
        if isinstance(repo, dict):
            return repo.get("full_name")
        return None


class EventStore(Protocol):
    """Persistence hook for inbound events."""

    async def record(self, event: InboundEvent) -> None: ...


class LoggingEventStore:
    """EventStore that stores nothing and logs what it would have stored."""

    async def record(self, event: InboundEvent) -> None:
        logger.info(
            f"[event-log] Logging {event.source} {event.event_type} event"
            + (f" for {event.repository}" if event.repository else "")
        )
