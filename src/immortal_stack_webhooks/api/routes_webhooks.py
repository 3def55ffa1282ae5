"""Make.com webhook routes.

Endpoints:
- POST /api/webhooks/make/{scenario_id}: receive a scenario delivery

Requests must carry the X-Webhook-Token header. Once authenticated, every
delivery is acknowledged with 200, whether or not the scenario is known and
whether or not its handler succeeded.
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from immortal_stack_webhooks.api.models import (
    AckStatus,
    ErrorResponse,
    ScenarioWebhookResponse,
    ack_content,
)
from immortal_stack_webhooks.auth.dependency import require_webhook_token
from immortal_stack_webhooks.scenarios.router import ScenarioRouter

logger = logging.getLogger(__name__)


def _ack(model: ScenarioWebhookResponse) -> JSONResponse:
    return JSONResponse(status_code=200, content=ack_content(model))


def create_webhooks_router() -> APIRouter:
    """Create router for automation-platform webhooks.

    The ScenarioRouter is read from ``app.state.scenario_router``.

    Returns:
        APIRouter with token authentication applied to every route.
    """
    router = APIRouter(
        prefix="/api/webhooks",
        tags=["Webhooks"],
        dependencies=[Depends(require_webhook_token)],
    )

    @router.post(
        "/make/{scenario_id}",
        response_model=ScenarioWebhookResponse,
        responses={
            401: {"model": ErrorResponse, "description": "Authentication token missing"},
            403: {"model": ErrorResponse, "description": "Invalid authentication token"},
        },
        summary="Receive Make.com Webhook",
    )
    async def make_webhook(scenario_id: str, request: Request) -> JSONResponse:
        """Route a Make.com payload to its scenario handler."""
        scenario_router: ScenarioRouter = request.app.state.scenario_router
        logger.info(f"Received webhook from Make.com scenario: {scenario_id}")

        try:
            payload = json.loads(await request.body())
            logger.debug(f"Payload: {json.dumps(payload, indent=2)}")
            await scenario_router.dispatch(scenario_id, payload)
        except Exception as e:
            logger.exception(f"Error processing webhook: {e}")
            return _ack(
                ScenarioWebhookResponse(
                    status=AckStatus.ERROR,
                    message="Webhook received but processing failed",
                    scenario_id=scenario_id,
                    error=str(e),
                )
            )

        return _ack(
            ScenarioWebhookResponse(
                status=AckStatus.SUCCESS,
                message="Webhook received successfully",
                scenario_id=scenario_id,
            )
        )

    return router
