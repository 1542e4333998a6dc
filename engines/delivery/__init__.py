"""
Delivery Desk — Delivery Engine Public API
============================================
Entity Store and Invoice Lifecycle.
"""

from engines.delivery.lifecycle import (
    DEFAULT_DELAY_THRESHOLD_HOURS,
    STATUS_TRANSITIONS,
    InvoiceLifecycle,
    StatusTransitionPolicy,
)
from engines.delivery.models import Driver, Invoice, InvoiceStatus, StockItem
from engines.delivery.store import (
    KIND_DRIVER,
    KIND_INVOICE,
    KIND_STOCK,
    EntityStore,
    default_numbering_provider,
)

__all__ = [
    "Invoice",
    "InvoiceStatus",
    "Driver",
    "StockItem",
    "EntityStore",
    "default_numbering_provider",
    "KIND_INVOICE",
    "KIND_DRIVER",
    "KIND_STOCK",
    "InvoiceLifecycle",
    "StatusTransitionPolicy",
    "STATUS_TRANSITIONS",
    "DEFAULT_DELAY_THRESHOLD_HOURS",
]
