"""FastAPI dependency wrapping the webhook token check."""

from __future__ import annotations

import logging

from fastapi import Request

from immortal_stack_webhooks.auth.token import HEADER_WEBHOOK_TOKEN, authenticate_token
from immortal_stack_webhooks.config import ServerConfig
from immortal_stack_webhooks.errors import AuthenticationInvalidError

logger = logging.getLogger(__name__)


def require_webhook_token(request: Request) -> None:
    """Reject the request unless it carries the configured webhook token.

    The configuration is read from ``app.state.config``. Failures are raised as
    AuthenticationMissingError / AuthenticationInvalidError and rendered by the
    app's exception handler.

    Example:
        router = APIRouter(dependencies=[Depends(require_webhook_token)])
    """
    config: ServerConfig = request.app.state.config
    try:
        authenticate_token(request.headers.get(HEADER_WEBHOOK_TOKEN), config.make_webhook_secret)
    except AuthenticationInvalidError:
        logger.warning(f"Invalid webhook token for {request.method} {request.url.path}")
        raise
