"""
Delivery Desk Persistence — Archive Sync
==========================================
Keeps the durable copy of the invoice archive in step with the store.

- load(): reads the archive entry at startup
- save(): writes the full archive as one JSON array
- attach(): subscribes save() to delivery.invoice.archived

The write runs inside event dispatch, so a storage failure is logged
by the dispatcher and never reaches the caller of archive_invoice().
"""

from __future__ import annotations

import json
import logging
import threading
from typing import List

from adapters.persistence.errors import DataLoadError
from adapters.persistence.storage import KeyValueStorage
from core.events import DomainEvent, SubscriberRegistry
from engines.delivery.events import DELIVERY_INVOICE_ARCHIVED
from engines.delivery.models import Invoice
from engines.delivery.store import EntityStore

logger = logging.getLogger("desk.persistence")

DEFAULT_ARCHIVE_KEY = "archivedInvoices"
SUBSCRIBER_NAME = "persistence"


class ArchiveSync:
    def __init__(
        self,
        store: EntityStore,
        storage: KeyValueStorage,
        *,
        key: str = DEFAULT_ARCHIVE_KEY,
    ) -> None:
        self._store = store
        self._storage = storage
        self._key = key
        self._write_lock = threading.Lock()

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> List[Invoice]:
        """
        Read the persisted archive. A missing entry is an empty archive.

        Raises DataLoadError if the entry is not a JSON array of invoices.
        """
        raw = self._storage.get_item(self._key)
        if raw is None or raw == "":
            return []
        try:
            records = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DataLoadError(self._key, f"invalid JSON: {exc}") from exc
        if not isinstance(records, list):
            raise DataLoadError(self._key, f"expected a JSON array, got {type(records).__name__}")
        try:
            return [Invoice.from_dict(record) for record in records]
        except (AttributeError, TypeError, ValueError) as exc:
            raise DataLoadError(self._key, f"malformed invoice record: {exc}") from exc

    def save(self) -> None:
        """
        Write the current archive. Saves are serialized, so the entry
        always ends with the newest snapshot taken.
        """
        with self._write_lock:
            archived = self._store.archived_invoices
            payload = json.dumps([inv.to_dict() for inv in archived], ensure_ascii=False)
            self._storage.set_item(self._key, payload)
        logger.debug(f"Archive synced: {len(archived)} invoices → {self._key}")

    def on_invoice_archived(self, event: DomainEvent) -> None:
        self.save()

    def attach(self, registry: SubscriberRegistry) -> None:
        registry.register_subscriber(
            DELIVERY_INVOICE_ARCHIVED, self.on_invoice_archived, SUBSCRIBER_NAME,
        )
