"""
Tests for core.events — subscriber registry and failure-isolated dispatch.
"""

from datetime import datetime, timezone

import pytest

from core.events import (
    DomainEvent,
    DuplicateSubscriberError,
    EventBusError,
    InvalidEventTypeFormat,
    SelfSubscriptionError,
    SubscriberRegistry,
    dispatch,
)


NOW = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)
ARCHIVED = "delivery.invoice.archived"


def _event(event_type: str = ARCHIVED) -> DomainEvent:
    return DomainEvent(event_type=event_type, occurred_at=NOW, payload={"invoice_id": "INV001"})


class TestSubscriberRegistry:
    def test_register_and_count(self):
        registry = SubscriberRegistry()
        registry.register_subscriber(ARCHIVED, lambda e: None, "persistence")
        assert registry.has_subscribers(ARCHIVED)
        assert registry.subscriber_count(ARCHIVED) == 1

    @pytest.mark.parametrize("event_type", ["", "delivery", "delivery.invoice", "delivery..x"])
    def test_invalid_event_type(self, event_type):
        registry = SubscriberRegistry()
        with pytest.raises(InvalidEventTypeFormat):
            registry.register_subscriber(event_type, lambda e: None, "persistence")

    def test_handler_must_be_callable(self):
        with pytest.raises(EventBusError, match="callable"):
            SubscriberRegistry().register_subscriber(ARCHIVED, "nope", "persistence")

    def test_duplicate_handler(self):
        registry = SubscriberRegistry()

        def handler(event):
            return None

        registry.register_subscriber(ARCHIVED, handler, "persistence")
        with pytest.raises(DuplicateSubscriberError):
            registry.register_subscriber(ARCHIVED, handler, "persistence")

    def test_self_subscription_blocked(self):
        with pytest.raises(SelfSubscriptionError):
            SubscriberRegistry().register_subscriber(ARCHIVED, lambda e: None, "delivery")

    def test_self_subscription_allowed_explicitly(self):
        registry = SubscriberRegistry()
        registry.register_subscriber(
            ARCHIVED, lambda e: None, "delivery", allow_self_subscription=True,
        )
        assert registry.subscriber_count(ARCHIVED) == 1


class TestDispatch:
    def test_no_subscribers(self):
        result = dispatch(_event(), SubscriberRegistry())
        assert result.notified == 0
        assert result.ok

    def test_no_registry(self):
        assert dispatch(_event(), None).notified == 0

    def test_handlers_receive_event(self):
        registry = SubscriberRegistry()
        received = []
        registry.register_subscriber(ARCHIVED, received.append, "persistence")
        event = _event()
        dispatch(event, registry)
        assert received == [event]

    def test_failure_is_isolated(self):
        registry = SubscriberRegistry()
        received = []

        def broken(event):
            raise OSError("disk full")

        registry.register_subscriber(ARCHIVED, broken, "persistence")
        registry.register_subscriber(ARCHIVED, received.append, "presentation")

        result = dispatch(_event(), registry)

        assert result.failed == 1
        assert result.notified == 1
        assert result.failures[0].error_type == "OSError"
        assert result.failures[0].subscriber == "persistence"
        assert result.to_dict()["subscribers_failed"] == 1
        assert len(received) == 1

    def test_event_to_dict(self):
        data = _event().to_dict()
        assert data["event_type"] == ARCHIVED
        assert data["occurred_at"] == NOW.isoformat()
        assert data["payload"] == {"invoice_id": "INV001"}
