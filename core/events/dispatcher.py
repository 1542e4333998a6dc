"""
Delivery Desk Event Bus — Dispatcher
======================================
Delivers an event that already happened to every subscriber of its type,
in registration order.

A subscriber that raises is logged and counted; the remaining subscribers
still run, and nothing is reported back to the code that caused the event.
A refused storage write therefore never turns a completed archival into a
failed one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.events.models import DomainEvent
from core.events.registry import SubscriberRegistry

logger = logging.getLogger("desk.events")


@dataclass(frozen=True)
class SubscriberFailure:
    handler: str
    subscriber: str
    error: str
    error_type: str


@dataclass(frozen=True)
class DispatchResult:
    event_type: str
    event_id: str
    notified: int = 0
    failures: List[SubscriberFailure] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "event_id": self.event_id,
            "subscribers_notified": self.notified,
            "subscribers_failed": self.failed,
            "failures": [vars(f).copy() for f in self.failures],
        }


def dispatch(event: DomainEvent, registry: Optional[SubscriberRegistry]) -> DispatchResult:
    """Run every subscriber of `event.event_type`. Never raises."""
    subscriptions = registry.get_subscribers(event.event_type) if registry is not None else []
    event_id = str(event.event_id)

    notified = 0
    failures: List[SubscriberFailure] = []
    for subscription in subscriptions:
        try:
            subscription.handler(event)
        except Exception as exc:
            failures.append(SubscriberFailure(
                handler=subscription.handler_name,
                subscriber=subscription.subscriber_name,
                error=str(exc),
                error_type=type(exc).__name__,
            ))
            logger.error(
                f"{subscription.subscriber_name}: {subscription.handler_name} failed "
                f"on {event.event_type} ({event_id}): {exc}",
                exc_info=True,
            )
        else:
            notified += 1

    logger.debug(
        f"Dispatched {event.event_type} ({event_id}): "
        f"{notified} notified, {len(failures)} failed"
    )
    return DispatchResult(
        event_type=event.event_type,
        event_id=event_id,
        notified=notified,
        failures=failures,
    )
