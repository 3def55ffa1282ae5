"""FastAPI server for the Immortal Stack webhook receiver.

This module provides the application factory and the uvicorn runner.

Key Features:
- App factory pattern with explicit configuration for testability
- Security headers and CORS on every response
- Root and health endpoints
- Lifespan context recording server start time for uptime

Usage:
    from immortal_stack_webhooks.api.server import create_app, run_server
    from immortal_stack_webhooks.config import ServerConfig

    app = create_app(ServerConfig.from_env())
    # or
    run_server(ServerConfig.from_env())
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from immortal_stack_webhooks import __version__
from immortal_stack_webhooks.api.middleware import (
    SecurityHeadersMiddleware,
    register_error_handlers,
)
from immortal_stack_webhooks.api.models import HealthResponse
from immortal_stack_webhooks.api.routes_github import create_github_router
from immortal_stack_webhooks.api.routes_webhooks import create_webhooks_router
from immortal_stack_webhooks.config import ServerConfig, mask_secret
from immortal_stack_webhooks.github.processor import GitHubEventProcessor
from immortal_stack_webhooks.scenarios.handlers import ScenarioHandler
from immortal_stack_webhooks.scenarios.router import ScenarioId, ScenarioRouter
from immortal_stack_webhooks.storage.event_log import EventStore
from immortal_stack_webhooks.tasks.client import ClickUpClient, TaskClient

logger = logging.getLogger(__name__)

ROOT_MESSAGE = "Immortal Stack Webhook Server is running!"


def _log_config(config: ServerConfig) -> None:
    """Log effective configuration at startup, with secrets masked."""
    lists = config.clickup_lists
    logger.info("=" * 50)
    logger.info("Webhook Server Configuration:")
    logger.info(f"  Host: {config.host}")
    logger.info(f"  Port: {config.port}")
    logger.info(f"  CORS Origins: {', '.join(config.cors_origins) or '(none)'}")
    logger.info(f"  ClickUp Token: {mask_secret(config.clickup_api_token)}")
    logger.info(
        f"  ClickUp Lists: dev_backlog={lists.dev_backlog or '-'} "
        f"code_reviews={lists.code_reviews or '-'} todo={lists.todo or '-'}"
    )
    logger.info(f"  GitHub Secret: {mask_secret(config.github_webhook_secret)}")
    logger.info(f"  Make Secret: {mask_secret(config.make_webhook_secret)}")
    logger.info("=" * 50)

    if not config.clickup_enabled:
        logger.warning("ClickUp integration disabled (CLICKUP_API_TOKEN not set)")
    if not config.signature_verification_enabled:
        logger.warning("GitHub signature verification disabled (GITHUB_WEBHOOK_SECRET not set)")


# =============================================================================
# Lifespan Context
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Record start time for uptime reporting and log startup/shutdown."""
    app.state.start_time = time.monotonic()
    logger.info(f"Immortal Stack Webhook Server v{__version__} starting up")

    yield

    logger.info("Immortal Stack Webhook Server shutting down")


# =============================================================================
# CORS Configuration
# =============================================================================


def _configure_cors(app: FastAPI, origins: list[str]) -> None:
    # Credentials cannot be combined with a wildcard origin
    allow_credentials = "*" not in origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    logger.debug(f"CORS configured with origins: {origins}")


# =============================================================================
# App Factory
# =============================================================================


def create_app(
    config: ServerConfig | None = None,
    task_client: TaskClient | None = None,
    event_store: EventStore | None = None,
    scenario_handlers: Mapping[ScenarioId, ScenarioHandler] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Server configuration. Defaults to ``ServerConfig.from_env()``.
        task_client: Task client. Defaults to a ClickUpClient built from config.
        event_store: Event log collaborator. Defaults to a logging-only store.
        scenario_handlers: Make.com scenario handlers. Defaults to the
            built-in handlers.

    Returns:
        Configured FastAPI application instance.

    Example:
        >>> app = create_app(ServerConfig(github_webhook_secret="s3cret"))
    """
    if config is None:
        config = ServerConfig.from_env()

    app = FastAPI(
        title="Immortal Stack Webhook Server",
        description="Receives GitHub and Make.com webhooks and creates ClickUp tasks.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.start_time = time.monotonic()
    app.state.github_processor = GitHubEventProcessor(
        task_client=task_client or ClickUpClient.from_config(config),
        lists=config.clickup_lists,
        event_store=event_store,
    )
    app.state.scenario_router = ScenarioRouter(scenario_handlers)

    # Middleware added first runs last
    _configure_cors(app, config.cors_origins)
    app.add_middleware(SecurityHeadersMiddleware)
    register_error_handlers(app)

    @app.get("/", response_class=PlainTextResponse, tags=["General"])
    async def root() -> str:
        return ROOT_MESSAGE

    @app.get("/health", response_model=HealthResponse, tags=["General"])
    async def health(request: Request) -> HealthResponse:
        """Server liveness and uptime in seconds."""
        uptime = time.monotonic() - request.app.state.start_time
        return HealthResponse(uptime=round(uptime, 3))

    app.include_router(create_github_router())
    app.include_router(create_webhooks_router())

    return app


# =============================================================================
# Server Runner
# =============================================================================


def run_server(config: ServerConfig | None = None) -> None:
    """Run the webhook server with uvicorn.

    Args:
        config: Server configuration. Defaults to ``ServerConfig.from_env()``.
    """
    import uvicorn

    if config is None:
        config = ServerConfig.from_env()

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    _log_config(config)

    app = create_app(config)
    logger.info(f"Server running on port {config.port}")
    logger.info(f"Test the server at http://{config.host}:{config.port}")

    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level)
