"""
Delivery Desk Adapter Wiring
==============================
Composes one desk: clock, event bus, store, lifecycle, read model,
durable storage, archive sync and theme preference.

This module is glue only. Consumers receive the composed objects;
nothing here is a module-level singleton.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from adapters.persistence import (
    ArchiveSync,
    JsonFileKeyValueStorage,
    KeyValueStorage,
    ThemePreference,
)
from core.config import DeskSettings
from core.events import SubscriberRegistry
from core.numbering import NumberingProvider
from core.time import Clock, SystemClock
from engines.delivery import EntityStore, InvoiceLifecycle, default_numbering_provider
from projections.delivery import DeliveryReadModel

APP_READY_EVENT = "desk.app.ready"


@dataclass
class DeliveryDesk:
    settings: DeskSettings
    clock: Clock
    events: SubscriberRegistry
    store: EntityStore
    lifecycle: InvoiceLifecycle
    read_model: DeliveryReadModel
    storage: KeyValueStorage
    archive_sync: ArchiveSync
    theme: ThemePreference

    def on_ready(self, handler: Callable, subscriber_name: str = "presentation") -> None:
        """Run `handler(event)` once initialization has succeeded."""
        self.events.register_subscriber(APP_READY_EVENT, handler, subscriber_name)


def build_desk(
    settings: Optional[DeskSettings] = None,
    *,
    clock: Optional[Clock] = None,
    storage: Optional[KeyValueStorage] = None,
    numbering: Optional[NumberingProvider] = None,
) -> DeliveryDesk:
    settings = settings or DeskSettings()
    clock = clock or SystemClock()
    storage = storage if storage is not None else JsonFileKeyValueStorage(settings.storage_dir)
    events = SubscriberRegistry()

    store = EntityStore(
        clock=clock,
        numbering=numbering or default_numbering_provider(settings.id_padding),
        events=events,
    )
    archive_sync = ArchiveSync(store, storage, key=settings.archive_storage_key)
    archive_sync.attach(events)

    return DeliveryDesk(
        settings=settings,
        clock=clock,
        events=events,
        store=store,
        lifecycle=InvoiceLifecycle(
            store, delay_threshold_hours=settings.delay_threshold_hours,
        ),
        read_model=DeliveryReadModel(store, recent_limit=settings.recent_invoices_limit),
        storage=storage,
        archive_sync=archive_sync,
        theme=ThemePreference(
            storage, key=settings.theme_storage_key, default=settings.default_theme,
        ),
    )
