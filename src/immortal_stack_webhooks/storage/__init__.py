"""Event logging hook."""

from immortal_stack_webhooks.storage.event_log import EventStore, InboundEvent, LoggingEventStore

__all__ = ["EventStore", "InboundEvent", "LoggingEventStore"]
