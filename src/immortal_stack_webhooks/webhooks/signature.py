"""HMAC-SHA256 signature checks for GitHub webhook deliveries.

GitHub signs every delivery with the webhook's shared secret and sends the
result in the X-Hub-Signature-256 header as ``sha256=<hex digest>``. The
digest covers the exact raw request body, so verification must run on the
bytes received and never on a re-serialized payload.

Security:
    Comparison uses ``hmac.compare_digest`` to avoid leaking timing
    information about how much of the signature matched.
"""

from __future__ import annotations

import hashlib
import hmac
import logging

logger = logging.getLogger(__name__)

# Header names
HEADER_GITHUB_EVENT = "X-GitHub-Event"
HEADER_GITHUB_DELIVERY = "X-GitHub-Delivery"
HEADER_HUB_SIGNATURE_256 = "X-Hub-Signature-256"

SIGNATURE_PREFIX = "sha256="


def generate_signature(payload: bytes, secret: str) -> str:
    """Generate the X-Hub-Signature-256 value for a payload.

    Args:
        payload: The raw payload bytes to sign.
        secret: The shared secret key.

    Returns:
        ``sha256=`` followed by the hex-encoded HMAC-SHA256 digest.

    Example:
        >>> signature = generate_signature(b'{"zen": "Keep it logically awesome."}', "s3cret")
        >>> signature.startswith("sha256=")
        True
    """
    mac = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256)
    return f"{SIGNATURE_PREFIX}{mac.hexdigest()}"


def verify_signature(payload: bytes, secret: str, signature: str | None) -> bool:
    """Verify a ``sha256=`` prefixed signature against a payload.

    Args:
        payload: The raw payload bytes that were signed.
        secret: The shared secret key.
        signature: The signature header value.

    Returns:
        True if the signature is valid, False otherwise.
    """
    if not signature:
        return False

    expected = generate_signature(payload, secret)
    return hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8"))


def verify_github_signature(body: bytes, signature: str | None, secret: str | None) -> bool:
    """Check a GitHub delivery against the configured secret.

    When no secret is configured verification is skipped and the delivery is
    accepted. A configured secret with no signature header is a failure.

    Args:
        body: Raw request body.
        signature: Value of the X-Hub-Signature-256 header, if any.
        secret: Configured GitHub webhook secret, if any.

    Returns:
        True if the delivery should be accepted.
    """
    if not secret:
        logger.warning("GitHub webhook secret not configured - skipping signature verification")
        return True

    if not signature:
        logger.error(f"No {HEADER_HUB_SIGNATURE_256} header in request")
        return False

    return verify_signature(body, secret, signature)
