"""GitHub webhook routes.

Endpoints:
- POST /api/github/webhook: receive a GitHub delivery
- GET /api/github/health: integration health check

Deliveries with a bad signature are rejected with 401 before any handler
runs. Everything after that is acknowledged with 200, including processing
failures, so GitHub never retries a delivery.
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from immortal_stack_webhooks.api.models import (
    AckStatus,
    ErrorResponse,
    GitHubWebhookResponse,
    IntegrationHealthResponse,
    ack_content,
)
from immortal_stack_webhooks.config import ServerConfig
from immortal_stack_webhooks.errors import SignatureInvalidError
from immortal_stack_webhooks.github.processor import GitHubEventProcessor
from immortal_stack_webhooks.webhooks.signature import (
    HEADER_GITHUB_DELIVERY,
    HEADER_GITHUB_EVENT,
    HEADER_HUB_SIGNATURE_256,
    verify_github_signature,
)

logger = logging.getLogger(__name__)

PROCESSING_FAILED_MESSAGE = "Webhook received but processing failed"


def _ack(model: GitHubWebhookResponse) -> JSONResponse:
    return JSONResponse(status_code=200, content=ack_content(model))


def create_github_router() -> APIRouter:
    """Create router for GitHub endpoints.

    The GitHubEventProcessor and ServerConfig are read from ``app.state``.

    Returns:
        APIRouter configured with the GitHub endpoints.
    """
    router = APIRouter(prefix="/api/github", tags=["GitHub"])

    @router.post(
        "/webhook",
        response_model=GitHubWebhookResponse,
        responses={401: {"model": ErrorResponse, "description": "Invalid signature"}},
        summary="Receive GitHub Webhook",
    )
    async def github_webhook(request: Request) -> JSONResponse:
        """Verify, route and acknowledge a GitHub delivery."""
        config: ServerConfig = request.app.state.config
        processor: GitHubEventProcessor = request.app.state.github_processor

        event_type = request.headers.get(HEADER_GITHUB_EVENT)
        delivery_id = request.headers.get(HEADER_GITHUB_DELIVERY)
        logger.info(f"Received GitHub {event_type} event ({delivery_id})")

        body = await request.body()
        if not verify_github_signature(
            body,
            request.headers.get(HEADER_HUB_SIGNATURE_256),
            config.github_webhook_secret,
        ):
            logger.error("Invalid GitHub webhook signature")
            raise SignatureInvalidError()

        try:
            payload = json.loads(body)
            if not isinstance(payload, dict):
                raise ValueError("GitHub payload must be a JSON object")

            result = await processor.process(payload, event_type, delivery_id)
            return _ack(
                GitHubWebhookResponse(
                    status=AckStatus(result.status),
                    message=result.message,
                    event_type=event_type,
                    delivery_id=delivery_id,
                )
            )
        except Exception as e:
            logger.exception(f"Error processing GitHub webhook: {e}")
            return _ack(
                GitHubWebhookResponse(
                    status=AckStatus.ERROR,
                    message=PROCESSING_FAILED_MESSAGE,
                    event_type=event_type,
                    delivery_id=delivery_id,
                    error=str(e),
                )
            )

    @router.get(
        "/health",
        response_model=IntegrationHealthResponse,
        summary="GitHub Integration Health",
    )
    async def github_health() -> IntegrationHealthResponse:
        return IntegrationHealthResponse(message="GitHub integration is healthy")

    return router
