"""Shared-secret authentication for automation-platform webhooks.

Make.com scenarios send a static token in the X-Webhook-Token header. The
token is checked against MAKE_WEBHOOK_SECRET before any scenario handler runs.

Usage:
    from fastapi import APIRouter, Depends
    from immortal_stack_webhooks.auth import require_webhook_token

    router = APIRouter(dependencies=[Depends(require_webhook_token)])
"""

from immortal_stack_webhooks.auth.dependency import require_webhook_token
from immortal_stack_webhooks.auth.token import HEADER_WEBHOOK_TOKEN, authenticate_token

__all__ = [
    "HEADER_WEBHOOK_TOKEN",
    "authenticate_token",
    "require_webhook_token",
]
