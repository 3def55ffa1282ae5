"""Webhook Server Exception Classes - All request and integration errors."""

from __future__ import annotations

from typing import Any


class WebhookServerError(Exception):
    """Base exception for webhook server errors.

    Attributes:
        message: Human readable description.
        http_status: HTTP status the error maps to when rendered.
    """

    http_status: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class AuthenticationMissingError(WebhookServerError):
    """Raised when the shared-secret header is absent."""

    http_status = 401

    def __init__(self, message: str = "Authentication token missing") -> None:
        super().__init__(message)


class AuthenticationInvalidError(WebhookServerError):
    """Raised when the shared-secret header does not match."""

    http_status = 403

    def __init__(self, message: str = "Invalid authentication token") -> None:
        super().__init__(message)


class SignatureInvalidError(WebhookServerError):
    """Raised when a GitHub delivery fails HMAC verification."""

    http_status = 401

    def __init__(self, message: str = "Invalid signature") -> None:
        super().__init__(message)


class IntegrationNotConfiguredError(WebhookServerError):
    """An optional integration is missing configuration.

    This is a soft condition: callers log it and carry on.
    """

    pass


class ExternalApiError(WebhookServerError):
    """Raised when the task API rejects a request or cannot be reached.

    Attributes:
        status_code: HTTP status returned by the API, if any.
        error_body: Structured error payload returned by the API, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_body = error_body

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code:
            parts.append(f"status={self.status_code}")
        if self.error_body:
            parts.append(f"body={self.error_body}")
        return " ".join(parts)
