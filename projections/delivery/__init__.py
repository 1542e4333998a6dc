"""
Delivery Desk Projections — Delivery Read Model
=================================================
Read-only views over the Entity Store for dashboards and tables:

- statistics (invoice counts per status, drivers, stock items)
- recent invoices
- search / filter over live and archived invoices
- low-stock items

Nothing here mutates the store or caches results: every call scans
the current collections.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Union

from engines.delivery.models import Invoice, InvoiceStatus, StockItem
from engines.delivery.store import EntityStore
from projections.delivery.sorting import (
    ASCENDING,
    DESCENDING,
    compare_values,
    sort_table,
)

DEFAULT_RECENT_LIMIT = 10


@dataclass(frozen=True)
class DeliveryStatistics:
    total_invoices: int = 0
    pending_invoices: int = 0
    delivered_invoices: int = 0
    returned_invoices: int = 0
    total_drivers: int = 0
    total_stock_items: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalInvoices": self.total_invoices,
            "pendingInvoices": self.pending_invoices,
            "deliveredInvoices": self.delivered_invoices,
            "returnedInvoices": self.returned_invoices,
            "totalDrivers": self.total_drivers,
            "totalStockItems": self.total_stock_items,
        }


class DeliveryReadModel:
    """Dashboard and table queries over one EntityStore."""

    projection_name = "delivery_read_model"

    def __init__(self, store: EntityStore, *, recent_limit: int = DEFAULT_RECENT_LIMIT) -> None:
        if recent_limit < 0:
            raise ValueError("recent_limit must be >= 0.")
        self._store = store
        self._recent_limit = recent_limit

    def statistics(self) -> DeliveryStatistics:
        invoices = self._store.invoices
        counts = {status: 0 for status in InvoiceStatus}
        for invoice in invoices:
            counts[invoice.status] += 1
        return DeliveryStatistics(
            total_invoices=len(invoices),
            pending_invoices=counts[InvoiceStatus.PENDING_DELIVERY],
            delivered_invoices=counts[InvoiceStatus.DELIVERED],
            returned_invoices=counts[InvoiceStatus.RETURNED],
            total_drivers=len(self._store.drivers),
            total_stock_items=len(self._store.stock),
        )

    def recent_invoices(self, limit: Optional[int] = None) -> List[Invoice]:
        """
        Live invoices with the most recent `date` first, at most `limit`
        (the model's recent_limit when not given).

        Stable: invoices sharing a date keep insertion order.
        Invoices without a date come last.
        """
        if limit is None:
            limit = self._recent_limit
        if limit <= 0:
            return []
        ordered = sorted(
            self._store.invoices,
            key=lambda inv: inv.date or date.min,
            reverse=True,
        )
        return ordered[:limit]

    # ── Search / filter ───────────────────────────────────────

    def search_invoices(self, query: str) -> List[Invoice]:
        """Case-sensitive substring match on customer, id, phone and address."""
        return [
            inv for inv in self._store.invoices
            if _contains(query, inv.customer_name, inv.id, inv.phone_number, inv.address)
        ]

    def search_archived_invoices(self, query: str) -> List[Invoice]:
        """Case-sensitive substring match on customer, id and phone."""
        return [
            inv for inv in self._store.archived_invoices
            if _contains(query, inv.customer_name, inv.id, inv.phone_number)
        ]

    def filter_invoices_by_status(self, status: Union[InvoiceStatus, str]) -> List[Invoice]:
        wanted = InvoiceStatus.parse(status)
        return [inv for inv in self._store.invoices if inv.status is wanted]

    def filter_invoices_by_driver(self, driver_id: Optional[str]) -> List[Invoice]:
        return [inv for inv in self._store.invoices if inv.driver_id == driver_id]

    def driver_invoices(self, driver_id: str) -> List[Invoice]:
        """Live invoices assigned to a driver (driver profile view)."""
        return self.filter_invoices_by_driver(driver_id)

    # ── Stock ─────────────────────────────────────────────────

    def low_stock_items(self) -> List[StockItem]:
        return [item for item in self._store.stock if item.is_low]


def _contains(query: str, *fields: Optional[str]) -> bool:
    return any(isinstance(f, str) and query in f for f in fields)


__all__ = [
    "DeliveryReadModel",
    "DeliveryStatistics",
    "DEFAULT_RECENT_LIMIT",
    "sort_table",
    "compare_values",
    "ASCENDING",
    "DESCENDING",
]
