"""Inbound webhook signature verification.

Usage:
    from immortal_stack_webhooks.webhooks import verify_github_signature

    if not verify_github_signature(body, request.headers.get(HEADER_HUB_SIGNATURE_256), secret):
        raise SignatureInvalidError()
"""

from __future__ import annotations

from immortal_stack_webhooks.webhooks.signature import (
    HEADER_GITHUB_DELIVERY,
    HEADER_GITHUB_EVENT,
    HEADER_HUB_SIGNATURE_256,
    SIGNATURE_PREFIX,
    generate_signature,
    verify_github_signature,
    verify_signature,
)

__all__ = [
    "HEADER_GITHUB_DELIVERY",
    "HEADER_GITHUB_EVENT",
    "HEADER_HUB_SIGNATURE_256",
    "SIGNATURE_PREFIX",
    "generate_signature",
    "verify_github_signature",
    "verify_signature",
]
