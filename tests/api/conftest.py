"""Fixtures for HTTP-level tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from immortal_stack_webhooks.api.server import create_app
from immortal_stack_webhooks.config import ServerConfig
from immortal_stack_webhooks.webhooks.signature import generate_signature


@pytest.fixture
def app(server_config: ServerConfig, task_client, event_store) -> FastAPI:
    return create_app(server_config, task_client=task_client, event_store=event_store)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def github_delivery(server_config: ServerConfig) -> Callable[..., dict[str, Any]]:
    """Build request kwargs for a signed GitHub delivery.

    Usage: client.post("/api/github/webhook", **github_delivery(payload, "push"))
    """

    def build(
        payload: Any,
        event_type: str = "push",
        delivery_id: str = "delivery-1",
        secret: str | None = None,
    ) -> dict[str, Any]:
        body = json.dumps(payload).encode()
        signature = generate_signature(body, secret or server_config.github_webhook_secret or "")
        return {
            "content": body,
            "headers": {
                "Content-Type": "application/json",
                "X-GitHub-Event": event_type,
                "X-GitHub-Delivery": delivery_id,
                "X-Hub-Signature-256": signature,
            },
        }

    return build


@pytest.fixture
def make_headers(server_config: ServerConfig) -> dict[str, str]:
    """Headers carrying the configured Make.com token."""
    return {"X-Webhook-Token": server_config.make_webhook_secret or ""}
