"""Static token check for the X-Webhook-Token header."""

from __future__ import annotations

import logging
import secrets

from immortal_stack_webhooks.errors import AuthenticationInvalidError, AuthenticationMissingError

logger = logging.getLogger(__name__)

HEADER_WEBHOOK_TOKEN = "X-Webhook-Token"


def authenticate_token(provided: str | None, secret: str | None) -> None:
    """Validate a webhook token against the configured secret.

    Uses constant-time comparison.

    Args:
        provided: The header value sent by the caller.
        secret: The configured shared secret.

    Raises:
        AuthenticationMissingError: If no token was sent.
        AuthenticationInvalidError: If the token does not match, or no secret
            is configured to match it against.
    """
    if not provided:
        raise AuthenticationMissingError()

    if not secret:
        logger.warning("Webhook token received but MAKE_WEBHOOK_SECRET is not configured")
        raise AuthenticationInvalidError()

    if not secrets.compare_digest(provided.encode("utf-8"), secret.encode("utf-8")):
        raise AuthenticationInvalidError()
