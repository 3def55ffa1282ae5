"""Immortal Stack Webhook Server.

Receives GitHub and Make.com webhooks and turns interesting events into
ClickUp tasks.
"""

__version__ = "1.0.0"
