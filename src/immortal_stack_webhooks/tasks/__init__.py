"""ClickUp task creation.

Usage:
    from immortal_stack_webhooks.tasks import ClickUpClient, TaskRecord

    client = ClickUpClient.from_config(config)
    task_id = await client.create_task(
        TaskRecord(name="Fix it", description="...", list_id="901", tags=("github",))
    )
"""

from immortal_stack_webhooks.tasks.client import ClickUpClient, TaskClient
from immortal_stack_webhooks.tasks.models import TaskRecord

__all__ = [
    "ClickUpClient",
    "TaskClient",
    "TaskRecord",
]
