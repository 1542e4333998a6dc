"""
Delivery Desk Event Bus — Public API
======================================
The store mutates first, then announces. Subscribers hear only
what already happened.
"""

from core.events.dispatcher import DispatchResult, SubscriberFailure, dispatch
from core.events.errors import (
    DuplicateSubscriberError,
    EventBusError,
    InvalidEventTypeFormat,
    SelfSubscriptionError,
)
from core.events.models import DomainEvent
from core.events.registry import Subscription, SubscriberRegistry

__all__ = [
    "dispatch",
    "DispatchResult",
    "SubscriberFailure",
    "DomainEvent",
    "Subscription",
    "SubscriberRegistry",
    "EventBusError",
    "InvalidEventTypeFormat",
    "DuplicateSubscriberError",
    "SelfSubscriptionError",
]
