"""Task record handed from event handlers to the task client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TaskRecord:
    """A task to create in ClickUp.

    Attributes:
        name: Task title.
        description: Markdown body.
        list_id: Destination ClickUp list. None when the list is not configured.
        tags: Ordered tags applied to the task.
    """

    name: str
    description: str
    list_id: str | None
    tags: tuple[str, ...] = field(default_factory=tuple)

    def to_payload(self) -> dict[str, Any]:
        """Request body for the ClickUp create-task endpoint."""
        return {
            "name": self.name,
            "description": self.description,
            "tags": list(self.tags),
        }
