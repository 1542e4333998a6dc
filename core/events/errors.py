"""
Delivery Desk Event Bus — Errors
==================================
Raised at subscription time only. Dispatch itself never raises.
"""


class EventBusError(Exception):
    """Base error for event bus operations."""
    pass


class InvalidEventTypeFormat(EventBusError):
    """Event type does not follow source.subject.action format."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(
            f"Event type '{event_type}' does not follow "
            f"source.subject.action format."
        )


class DuplicateSubscriberError(EventBusError):
    """Same handler already registered for this event type."""

    def __init__(self, event_type: str, handler_name: str):
        self.event_type = event_type
        self.handler_name = handler_name
        super().__init__(
            f"Handler '{handler_name}' already registered "
            f"for event type '{event_type}'."
        )


class SelfSubscriptionError(EventBusError):
    """A component attempted to subscribe to its own events without explicit allow."""

    def __init__(self, source: str, event_type: str):
        self.source = source
        self.event_type = event_type
        super().__init__(
            f"'{source}' cannot subscribe to its own "
            f"event type '{event_type}' without explicit allow."
        )
