"""
Delivery Desk — Event Types and Payload Builders
==================================================
Events the Entity Store announces after a mutation has been applied.
Subscribers (archive sync, presentation refresh) react to these;
the store never waits on them.
"""

from __future__ import annotations

from datetime import datetime

from core.events.models import DomainEvent
from engines.delivery.models import Invoice


# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

DELIVERY_INVOICE_CREATED = "delivery.invoice.created"
DELIVERY_INVOICE_STATUS_CHANGED = "delivery.invoice.status_changed"
DELIVERY_INVOICE_ARCHIVED = "delivery.invoice.archived"
DELIVERY_STOCK_QUANTITY_CHANGED = "delivery.stock.quantity_changed"


# ══════════════════════════════════════════════════════════════
# EVENT BUILDERS
# ══════════════════════════════════════════════════════════════

def invoice_created(invoice: Invoice, occurred_at: datetime) -> DomainEvent:
    return DomainEvent(
        event_type=DELIVERY_INVOICE_CREATED,
        occurred_at=occurred_at,
        payload={"invoice_id": invoice.id},
    )


def invoice_status_changed(
    invoice: Invoice, previous_status, occurred_at: datetime
) -> DomainEvent:
    return DomainEvent(
        event_type=DELIVERY_INVOICE_STATUS_CHANGED,
        occurred_at=occurred_at,
        payload={
            "invoice_id": invoice.id,
            "from_status": previous_status.value,
            "to_status": invoice.status.value,
        },
    )


def invoice_archived(invoice: Invoice, occurred_at: datetime) -> DomainEvent:
    return DomainEvent(
        event_type=DELIVERY_INVOICE_ARCHIVED,
        occurred_at=occurred_at,
        payload={"invoice_id": invoice.id},
    )


def stock_quantity_changed(
    item_id: str, previous_quantity, new_quantity, occurred_at: datetime
) -> DomainEvent:
    return DomainEvent(
        event_type=DELIVERY_STOCK_QUANTITY_CHANGED,
        occurred_at=occurred_at,
        payload={
            "item_id": item_id,
            "from_quantity": previous_quantity,
            "to_quantity": new_quantity,
        },
    )
