"""HTTP middleware and exception handlers for the webhook server.

- SecurityHeadersMiddleware adds conservative security headers to every
  response.
- Authentication and signature errors render as ``{status, message}`` with
  their own status codes.
- Anything else that escapes a route renders as a generic 500.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from immortal_stack_webhooks.api.models import ErrorResponse
from immortal_stack_webhooks.errors import WebhookServerError

logger = logging.getLogger(__name__)

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds SECURITY_HEADERS to responses that don't already set them."""

    def __init__(self, app: ASGIApp, headers: dict[str, str] | None = None) -> None:
        super().__init__(app)
        self.headers = headers if headers is not None else SECURITY_HEADERS

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            response = await call_next(request)
        except Exception as exc:
            # Rendered here so the generic 500 still carries the headers
            response = await unhandled_error_handler(request, exc)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        return response


async def webhook_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render authentication and signature failures."""
    assert isinstance(exc, WebhookServerError)
    logger.error(f"{exc.message} for {request.method} {request.url.path}")
    return JSONResponse(
        status_code=exc.http_status,
        content=ErrorResponse(message=exc.message).model_dump(mode="json"),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for exceptions no route caught."""
    logger.exception(f"Server error: {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(message="An internal server error occurred").model_dump(
            mode="json"
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WebhookServerError, webhook_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
