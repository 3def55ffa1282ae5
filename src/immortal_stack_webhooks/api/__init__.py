"""HTTP front door for the webhook server.

Usage:
    from immortal_stack_webhooks.api import create_app

    app = create_app()
    # uvicorn.run(app, host="0.0.0.0", port=3000)
"""

from immortal_stack_webhooks.api.server import create_app, run_server

__all__ = ["create_app", "run_server"]
