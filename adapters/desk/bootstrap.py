"""
Delivery Desk Bootstrap — Initialization
==========================================
Runs once per session:

1. Fetch invoices, drivers and stock concurrently
2. Read the persisted archive
3. Restore the store (counters seeded past every known id)
4. Load the theme preference
5. Announce desk.app.ready

Any failure in 1–4 leaves the store empty, notifies the user with one
generic message and returns False. No partial data, no retry.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

from adapters.desk.wiring import APP_READY_EVENT, DeliveryDesk
from adapters.persistence import DocumentSource, PersistenceError, document_source_for, load_documents
from core.events import DomainEvent, dispatch

logger = logging.getLogger("desk.bootstrap")

LOAD_FAILURE_MESSAGE = "فشل في تحميل البيانات. يرجى تحديث الصفحة."


class Notifier(Protocol):
    def __call__(self, message: str, level: str = "info") -> None:
        ...  # pragma: no cover


async def initialize(
    desk: DeliveryDesk,
    *,
    source: Optional[DocumentSource] = None,
    notifier: Optional[Notifier] = None,
) -> bool:
    """
    Load all startup data into `desk`. Returns True when the desk is ready.
    """
    source = source or document_source_for(desk.settings.data_source)

    try:
        documents = await load_documents(source)
        archived = desk.archive_sync.load()
        desk.store.restore(
            invoices=documents.invoices,
            drivers=documents.drivers,
            stock=documents.stock,
            archived_invoices=archived,
        )
        desk.theme.load()
    except (PersistenceError, TypeError, ValueError) as exc:
        logger.error(f"Failed to initialize application: {exc}", exc_info=True)
        desk.store.reset()
        if notifier is not None:
            notifier(LOAD_FAILURE_MESSAGE, "error")
        return False

    logger.info("Application initialized successfully")
    dispatch(
        DomainEvent(
            event_type=APP_READY_EVENT,
            occurred_at=desk.clock.now_utc(),
            payload=desk.read_model.statistics().to_dict(),
        ),
        desk.events,
    )
    return True


def initialize_blocking(
    desk: DeliveryDesk,
    *,
    source: Optional[DocumentSource] = None,
    notifier: Optional[Notifier] = None,
) -> bool:
    """initialize() for callers without a running event loop."""
    return asyncio.run(initialize(desk, source=source, notifier=notifier))
