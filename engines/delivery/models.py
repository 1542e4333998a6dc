"""
Delivery Desk — Domain Records
================================
Invoice, Driver and StockItem as held by the Entity Store, plus the
InvoiceStatus enum.

Wire shape is the camelCase JSON of the seed documents
(customerName, phoneNumber, driverId, lastStatusUpdate, ...).
Fields the store does not interpret are kept in `extra` and written
back unchanged by to_dict(). Status is written as its Arabic label,
the form legacy documents and stored archives use; parse() reads both.

Records are frozen. The store changes one by swapping in a
dataclasses.replace() copy under its lock.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional

from core.time.temporal import ensure_aware


# ══════════════════════════════════════════════════════════════
# INVOICE STATUS
# ══════════════════════════════════════════════════════════════

class InvoiceStatus(Enum):
    """Delivery status of an invoice."""
    PENDING_DELIVERY = "pending_delivery"
    DELIVERED = "delivered"
    RETURNED = "returned"

    @property
    def label(self) -> str:
        """Arabic display label, as found in legacy documents."""
        return _STATUS_LABELS[self]

    @classmethod
    def parse(cls, value: Any) -> "InvoiceStatus":
        """
        Accept an InvoiceStatus, its canonical value or its display label.

        Raises ValueError for anything else.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            for status in cls:
                if text == status.value or text == status.label:
                    return status
        raise ValueError(
            f"Unknown invoice status {value!r}. "
            f"Must be one of: {[s.value for s in cls]}"
        )


_STATUS_LABELS = {
    InvoiceStatus.PENDING_DELIVERY: "قيد التوصيل",
    InvoiceStatus.DELIVERED: "مسلمة",
    InvoiceStatus.RETURNED: "مرتجعة",
}


# ══════════════════════════════════════════════════════════════
# WIRE HELPERS
# ══════════════════════════════════════════════════════════════

def parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_aware(value)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return ensure_aware(datetime.fromisoformat(text))


def parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _extra(data: Dict[str, Any], known: frozenset) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


# ══════════════════════════════════════════════════════════════
# INVOICE
# ══════════════════════════════════════════════════════════════

_INVOICE_KEYS = frozenset({
    "id", "customerName", "phoneNumber", "address", "status",
    "driverId", "date", "lastStatusUpdate", "archivedDate",
})


@dataclass(frozen=True)
class Invoice:
    """
    A delivery invoice.

    `id` and `date` never change after creation. `last_status_update`
    moves forward on every status change. `archived_date` is stamped
    once, when the invoice leaves the live collection.
    """

    id: str
    customer_name: str = ""
    phone_number: str = ""
    address: str = ""
    status: InvoiceStatus = InvoiceStatus.PENDING_DELIVERY
    driver_id: Optional[str] = None
    date: Optional[date] = None
    last_status_update: Optional[datetime] = None
    archived_date: Optional[datetime] = None
    extra: Dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def is_archived(self) -> bool:
        return self.archived_date is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Invoice":
        status = data.get("status")
        return cls(
            id=str(data.get("id", "")),
            customer_name=data.get("customerName", ""),
            phone_number=data.get("phoneNumber", ""),
            address=data.get("address", ""),
            status=(
                InvoiceStatus.PENDING_DELIVERY if status is None
                else InvoiceStatus.parse(status)
            ),
            driver_id=data.get("driverId"),
            date=parse_date(data.get("date")),
            last_status_update=parse_timestamp(data.get("lastStatusUpdate")),
            archived_date=parse_timestamp(data.get("archivedDate")),
            extra=_extra(data, _INVOICE_KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "id": self.id,
            **self.extra,
            "customerName": self.customer_name,
            "phoneNumber": self.phone_number,
            "address": self.address,
            "status": self.status.label,
            "driverId": self.driver_id,
            "date": self.date.isoformat() if self.date is not None else None,
            "lastStatusUpdate": format_timestamp(self.last_status_update),
        }
        if self.archived_date is not None:
            result["archivedDate"] = format_timestamp(self.archived_date)
        return result


# ══════════════════════════════════════════════════════════════
# DRIVER
# ══════════════════════════════════════════════════════════════

_DRIVER_KEYS = frozenset({"id", "name", "phoneNumber", "totalDeliveries", "totalReturns"})


@dataclass(frozen=True)
class Driver:
    """A delivery driver. Counters are never decremented."""

    id: str
    name: str = ""
    phone_number: str = ""
    total_deliveries: int = 0
    total_returns: int = 0
    extra: Dict[str, Any] = field(default_factory=dict, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Driver":
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            phone_number=data.get("phoneNumber", ""),
            total_deliveries=int(data.get("totalDeliveries", 0) or 0),
            total_returns=int(data.get("totalReturns", 0) or 0),
            extra=_extra(data, _DRIVER_KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            **self.extra,
            "name": self.name,
            "phoneNumber": self.phone_number,
            "totalDeliveries": self.total_deliveries,
            "totalReturns": self.total_returns,
        }


# ══════════════════════════════════════════════════════════════
# STOCK ITEM
# ══════════════════════════════════════════════════════════════

_STOCK_KEYS = frozenset({"id", "name", "quantity", "minQuantity"})


@dataclass(frozen=True)
class StockItem:
    """A stock line with a low-stock threshold."""

    id: str
    name: str = ""
    quantity: int = 0
    min_quantity: int = 0
    extra: Dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def is_low(self) -> bool:
        return self.quantity < self.min_quantity

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StockItem":
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            quantity=data.get("quantity", 0),
            min_quantity=data.get("minQuantity", 0),
            extra=_extra(data, _STOCK_KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            **self.extra,
            "name": self.name,
            "quantity": self.quantity,
            "minQuantity": self.min_quantity,
        }
