"""
Delivery Desk — Entity Store
==============================
Authoritative in-memory holder of the four collections:

    invoices            live invoices
    archived_invoices   invoices moved out of the live set
    drivers
    stock

Rules:
- Entities enter only through add_* (or restore() at load time).
- An invoice is in exactly one of invoices / archived_invoices.
- Identifiers come from a monotonic counter per kind, never from
  collection length, so archiving and re-creating cannot reuse an id.
- Lookup misses return False. They are not exceptional.
- Every read-modify-write runs under one re-entrant lock; archive is
  an atomic move across two collections.
- Events are dispatched after the mutation, outside the lock. A failing
  subscriber never changes the result the caller sees.

No validation of caller data beyond the status enum: missing or
malformed profile fields are stored as given.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from typing import Any, Iterable, List, Mapping, Optional, Union

from core.events import SubscriberRegistry, dispatch
from core.events.models import DomainEvent
from core.numbering import InMemoryNumberingProvider, NumberingPolicy, NumberingProvider
from core.time import Clock, SystemClock
from engines.delivery import events as delivery_events
from engines.delivery.models import Driver, Invoice, InvoiceStatus, StockItem

logger = logging.getLogger("desk.store")


# ══════════════════════════════════════════════════════════════
# IDENTIFIER POLICIES
# ══════════════════════════════════════════════════════════════

KIND_INVOICE = "invoice"
KIND_DRIVER = "driver"
KIND_STOCK = "stock"


def default_numbering_provider(padding: int = 3) -> InMemoryNumberingProvider:
    """INV001 / DRIVER001 / STK001 counters."""
    return InMemoryNumberingProvider((
        NumberingPolicy(kind=KIND_INVOICE, prefix="INV", padding=padding),
        NumberingPolicy(kind=KIND_DRIVER, prefix="DRIVER", padding=padding),
        NumberingPolicy(kind=KIND_STOCK, prefix="STK", padding=padding),
    ))


_GENERATED_INVOICE_KEYS = ("id", "date", "lastStatusUpdate", "archivedDate")

RecordInput = Union[Mapping[str, Any], Invoice, Driver, StockItem]


# ══════════════════════════════════════════════════════════════
# ENTITY STORE
# ══════════════════════════════════════════════════════════════

class EntityStore:
    """
    Owned, injectable store for invoices, drivers and stock.

    Args:
        clock:     time source for dates and status timestamps
        numbering: per-kind identifier counters
        events:    subscriber registry notified after mutations (optional)
    """

    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        numbering: Optional[NumberingProvider] = None,
        events: Optional[SubscriberRegistry] = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._numbering = numbering or default_numbering_provider()
        self._events = events
        self._lock = threading.RLock()

        self._invoices: List[Invoice] = []
        self._archived: List[Invoice] = []
        self._drivers: List[Driver] = []
        self._stock: List[StockItem] = []

    @property
    def clock(self) -> Clock:
        return self._clock

    # ── Lifecycle ─────────────────────────────────────────────

    def reset(self) -> None:
        """Drop every collection and return counters to their start."""
        with self._lock:
            self._invoices.clear()
            self._archived.clear()
            self._drivers.clear()
            self._stock.clear()
            self._numbering.reset()
        logger.debug("Entity store reset")

    def restore(
        self,
        *,
        invoices: Iterable[RecordInput] = (),
        drivers: Iterable[RecordInput] = (),
        stock: Iterable[RecordInput] = (),
        archived_invoices: Iterable[RecordInput] = (),
    ) -> None:
        """
        Replace all collections with previously persisted records.

        Records keep their own ids. Counters are moved past every id seen
        (live and archived invoices share one counter). A live invoice whose
        id is already archived is dropped: the archive copy is authoritative.
        """
        live = [_as_invoice(r) for r in invoices]
        archived = [_as_invoice(r) for r in archived_invoices]
        driver_records = [_as_record(Driver, r) for r in drivers]
        stock_records = [_as_record(StockItem, r) for r in stock]

        archived_ids = {inv.id for inv in archived}
        duplicates = [inv.id for inv in live if inv.id in archived_ids]
        if duplicates:
            logger.warning(
                f"Dropping {len(duplicates)} live invoice(s) already archived: "
                f"{', '.join(duplicates)}"
            )
            live = [inv for inv in live if inv.id not in archived_ids]

        with self._lock:
            self._numbering.reset()
            self._invoices = live
            self._archived = archived
            self._drivers = driver_records
            self._stock = stock_records
            self._numbering.observe(
                KIND_INVOICE, [inv.id for inv in live] + [inv.id for inv in archived]
            )
            self._numbering.observe(KIND_DRIVER, [d.id for d in driver_records])
            self._numbering.observe(KIND_STOCK, [s.id for s in stock_records])

        logger.info(
            f"Entity store restored: {len(live)} invoices, "
            f"{len(archived)} archived, {len(driver_records)} drivers, "
            f"{len(stock_records)} stock items"
        )

    # ── Snapshots ─────────────────────────────────────────────

    @property
    def invoices(self) -> List[Invoice]:
        with self._lock:
            return list(self._invoices)

    @property
    def archived_invoices(self) -> List[Invoice]:
        with self._lock:
            return list(self._archived)

    @property
    def drivers(self) -> List[Driver]:
        with self._lock:
            return list(self._drivers)

    @property
    def stock(self) -> List[StockItem]:
        with self._lock:
            return list(self._stock)

    # ── Lookups ───────────────────────────────────────────────

    def get_invoice(self, invoice_id: str) -> Optional[Invoice]:
        """Live invoice by id (archived invoices are not returned)."""
        with self._lock:
            return _find(self._invoices, invoice_id)

    def get_archived_invoice(self, invoice_id: str) -> Optional[Invoice]:
        with self._lock:
            return _find(self._archived, invoice_id)

    def get_driver(self, driver_id: str) -> Optional[Driver]:
        with self._lock:
            return _find(self._drivers, driver_id)

    def get_stock_item(self, item_id: str) -> Optional[StockItem]:
        with self._lock:
            return _find(self._stock, item_id)

    # ── Creation ──────────────────────────────────────────────

    def add_invoice(self, data: Mapping[str, Any]) -> Invoice:
        """
        Create a live invoice from caller data.

        id, date and lastStatusUpdate are always generated; status
        defaults to pending_delivery. Raises ValueError only for an
        unknown status, before an id is consumed.
        """
        fields = {k: v for k, v in dict(data).items() if k not in _GENERATED_INVOICE_KEYS}
        draft = Invoice.from_dict({"id": "", **fields})
        now = self._clock.now_utc()

        with self._lock:
            invoice = dataclasses.replace(
                draft,
                id=self._numbering.next_id(KIND_INVOICE),
                date=now.date(),
                last_status_update=now,
            )
            self._invoices.append(invoice)

        logger.debug(f"Invoice created: {invoice.id} ({invoice.status.value})")
        self._publish(delivery_events.invoice_created(invoice, now))
        return invoice

    def add_driver(self, data: Mapping[str, Any]) -> Driver:
        """Create a driver; delivery/return counters start at zero."""
        fields = {
            k: v for k, v in dict(data).items()
            if k not in ("id", "totalDeliveries", "totalReturns")
        }
        draft = Driver.from_dict({"id": "", **fields})
        with self._lock:
            driver = dataclasses.replace(draft, id=self._numbering.next_id(KIND_DRIVER))
            self._drivers.append(driver)
        logger.debug(f"Driver created: {driver.id}")
        return driver

    def add_stock_item(self, data: Mapping[str, Any]) -> StockItem:
        fields = {k: v for k, v in dict(data).items() if k != "id"}
        draft = StockItem.from_dict({"id": "", **fields})
        with self._lock:
            item = dataclasses.replace(draft, id=self._numbering.next_id(KIND_STOCK))
            self._stock.append(item)
        logger.debug(f"Stock item created: {item.id}")
        return item

    # ── Mutation ──────────────────────────────────────────────

    def update_invoice_status(
        self, invoice_id: str, new_status: Union[InvoiceStatus, str]
    ) -> bool:
        """
        Set the status of a live invoice and refresh last_status_update.

        Any status may follow any other. Returns False, with no side
        effect, when the id is not in the live collection or the status
        is not one of InvoiceStatus.
        """
        try:
            status = InvoiceStatus.parse(new_status)
        except ValueError:
            logger.warning(f"Status update ignored: unknown status {new_status!r} for {invoice_id!r}")
            return False
        now = self._clock.now_utc()

        with self._lock:
            index = _index_of(self._invoices, invoice_id)
            if index is None:
                logger.warning(f"Status update ignored: no live invoice {invoice_id!r}")
                return False
            current = self._invoices[index]
            stamp = current.last_status_update
            if stamp is None or now > stamp:
                stamp = now
            invoice = dataclasses.replace(current, status=status, last_status_update=stamp)
            self._invoices[index] = invoice

        logger.debug(f"Invoice {invoice_id}: {current.status.value} → {status.value}")
        self._publish(delivery_events.invoice_status_changed(invoice, current.status, now))
        return True

    def update_stock_quantity(self, item_id: str, new_quantity: int) -> bool:
        """
        Overwrite the quantity of a stock item.

        No bounds check: negative quantities are stored as given.
        """
        with self._lock:
            index = _index_of(self._stock, item_id)
            if index is None:
                logger.warning(f"Quantity update ignored: no stock item {item_id!r}")
                return False
            previous = self._stock[index].quantity
            self._stock[index] = dataclasses.replace(self._stock[index], quantity=new_quantity)

        self._publish(delivery_events.stock_quantity_changed(
            item_id, previous, new_quantity, self._clock.now_utc(),
        ))
        return True

    def archive_invoice(self, invoice_id: str) -> bool:
        """
        Move a live invoice to the archive, stamping archived_date.

        Returns False if the id is not in the live collection.
        """
        now = self._clock.now_utc()

        with self._lock:
            index = _index_of(self._invoices, invoice_id)
            if index is None:
                logger.warning(f"Archive ignored: no live invoice {invoice_id!r}")
                return False
            invoice = self._invoices.pop(index)
            archived = dataclasses.replace(invoice, archived_date=now)
            self._archived.append(archived)

        logger.info(f"Invoice archived: {invoice_id}")
        self._publish(delivery_events.invoice_archived(archived, now))
        return True

    # ── Internal ──────────────────────────────────────────────

    def _publish(self, event: DomainEvent) -> None:
        if self._events is not None:
            dispatch(event, self._events)


# ══════════════════════════════════════════════════════════════
# HELPERS
# ══════════════════════════════════════════════════════════════

def _find(records: List[Any], record_id: str) -> Optional[Any]:
    for record in records:
        if record.id == record_id:
            return record
    return None


def _index_of(records: List[Any], record_id: str) -> Optional[int]:
    for index, record in enumerate(records):
        if record.id == record_id:
            return index
    return None


def _as_invoice(record: RecordInput) -> Invoice:
    return _as_record(Invoice, record)


def _as_record(record_type, record: RecordInput):
    if isinstance(record, record_type):
        return record
    if isinstance(record, Mapping):
        return record_type.from_dict(dict(record))
    raise TypeError(
        f"Expected {record_type.__name__} or mapping, got {type(record).__name__}."
    )
