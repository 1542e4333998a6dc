"""
Delivery Desk Event Bus — Subscriber Registry
===============================================
Who listens to what.

Event types are dotted `source.subject.action` names
(delivery.invoice.archived, desk.app.ready). A component may not
listen to events of its own source unless it says so explicitly:
the store announces, other components react.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict, List

from core.events.errors import (
    DuplicateSubscriberError,
    EventBusError,
    InvalidEventTypeFormat,
    SelfSubscriptionError,
)

logger = logging.getLogger("desk.events")


@dataclass(frozen=True)
class Subscription:
    event_type: str
    handler: Callable
    subscriber_name: str

    @property
    def handler_name(self) -> str:
        return getattr(self.handler, "__qualname__", repr(self.handler))


def event_source(event_type: str) -> str:
    """First segment of a dotted event type."""
    return event_type.split(".", 1)[0]


def validate_event_type(event_type: str) -> None:
    if not isinstance(event_type, str) or not event_type:
        raise InvalidEventTypeFormat(event_type if isinstance(event_type, str) else "")
    segments = event_type.strip().split(".")
    if len(segments) < 3 or "" in segments:
        raise InvalidEventTypeFormat(event_type)


class SubscriberRegistry:
    """Thread-safe, in-memory map of event type → subscriptions (in registration order)."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._by_type: Dict[str, List[Subscription]] = {}

    def register_subscriber(
        self,
        event_type: str,
        handler: Callable,
        subscriber_name: str,
        allow_self_subscription: bool = False,
    ) -> Subscription:
        """
        Add `handler` to the listeners of `event_type`.

        Raises:
            InvalidEventTypeFormat:   not source.subject.action
            EventBusError:            handler is not callable
            SelfSubscriptionError:    subscriber_name equals the event source
            DuplicateSubscriberError: handler already listens to event_type
        """
        validate_event_type(event_type)
        if not callable(handler):
            raise EventBusError(f"Handler must be callable, got {type(handler).__name__}.")
        if not allow_self_subscription and event_source(event_type) == subscriber_name:
            raise SelfSubscriptionError(subscriber_name, event_type)

        subscription = Subscription(event_type, handler, subscriber_name)
        with self._lock:
            existing = self._by_type.setdefault(event_type, [])
            # bound methods compare equal, not identical
            if any(s.handler == handler for s in existing):
                raise DuplicateSubscriberError(event_type, subscription.handler_name)
            existing.append(subscription)

        logger.info(
            f"{subscriber_name} subscribed {subscription.handler_name} to {event_type}"
        )
        return subscription

    def get_subscribers(self, event_type: str) -> List[Subscription]:
        """Snapshot of the subscriptions for `event_type` (empty if none)."""
        with self._lock:
            return list(self._by_type.get(event_type, ()))

    def has_subscribers(self, event_type: str) -> bool:
        return self.subscriber_count(event_type) > 0

    def subscriber_count(self, event_type: str) -> int:
        with self._lock:
            return len(self._by_type.get(event_type, ()))
