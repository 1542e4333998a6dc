"""
Delivery Desk — Invoice Lifecycle
===================================
Status semantics and time-based alerting for live invoices.

Transition policy:
    pending_delivery ⇄ delivered ⇄ returned, in any direction.
    The table is explicit so a restriction can be introduced in one
    place; today it permits every pair. Each accepted transition
    refreshes last_status_update.

Delayed invoice:
    status == pending_delivery AND now - last_status_update > threshold.
    Recomputed against the clock on every call. Never stored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, FrozenSet, List, Optional, Union

from core.time import is_expired
from engines.delivery.models import Invoice, InvoiceStatus
from engines.delivery.store import EntityStore

logger = logging.getLogger("desk.lifecycle")

DEFAULT_DELAY_THRESHOLD_HOURS = 24.0


# ══════════════════════════════════════════════════════════════
# TRANSITION POLICY
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StatusTransitionPolicy:
    """
    Allowed status moves: {from_status → frozenset(allowed to_status)}.
    """
    transitions: Dict[InvoiceStatus, FrozenSet[InvoiceStatus]]

    def is_valid_transition(self, from_status: InvoiceStatus, to_status: InvoiceStatus) -> bool:
        return to_status in self.transitions.get(from_status, frozenset())

    def allowed_next_states(self, from_status: InvoiceStatus) -> FrozenSet[InvoiceStatus]:
        return self.transitions.get(from_status, frozenset())


STATUS_TRANSITIONS = StatusTransitionPolicy(
    transitions={status: frozenset(InvoiceStatus) for status in InvoiceStatus},
)


# ══════════════════════════════════════════════════════════════
# LIFECYCLE ENGINE
# ══════════════════════════════════════════════════════════════

class InvoiceLifecycle:
    """
    Applies status changes through the transition policy and
    derives delayed-delivery alerts from the store's live invoices.
    """

    def __init__(
        self,
        store: EntityStore,
        *,
        delay_threshold_hours: float = DEFAULT_DELAY_THRESHOLD_HOURS,
        policy: StatusTransitionPolicy = STATUS_TRANSITIONS,
    ) -> None:
        if delay_threshold_hours <= 0:
            raise ValueError("delay_threshold_hours must be positive.")
        self._store = store
        self._threshold_seconds = delay_threshold_hours * 3600
        self._policy = policy

    @property
    def policy(self) -> StatusTransitionPolicy:
        return self._policy

    def can_transition(
        self, from_status: Union[InvoiceStatus, str], to_status: Union[InvoiceStatus, str]
    ) -> bool:
        return self._policy.is_valid_transition(
            InvoiceStatus.parse(from_status), InvoiceStatus.parse(to_status)
        )

    def change_status(self, invoice_id: str, new_status: Union[InvoiceStatus, str]) -> bool:
        """
        Move a live invoice to `new_status`.

        Returns False for an unknown status, a disallowed transition or
        an id that is not live. Never raises.
        """
        try:
            status = InvoiceStatus.parse(new_status)
        except ValueError:
            logger.warning(f"Rejected status {new_status!r} for invoice {invoice_id!r}")
            return False

        invoice = self._store.get_invoice(invoice_id)
        if invoice is None:
            logger.warning(f"Status change ignored: no live invoice {invoice_id!r}")
            return False

        if not self._policy.is_valid_transition(invoice.status, status):
            logger.warning(
                f"Transition {invoice.status.value} → {status.value} "
                f"not allowed for invoice {invoice_id}"
            )
            return False

        return self._store.update_invoice_status(invoice_id, status)

    # ── Alerts ────────────────────────────────────────────────

    def is_delayed(self, invoice: Invoice, now: Optional[datetime] = None) -> bool:
        """An invoice with no recorded status update is never delayed."""
        if invoice.status is not InvoiceStatus.PENDING_DELIVERY:
            return False
        if invoice.last_status_update is None:
            return False
        now = now or self._store.clock.now_utc()
        return is_expired(invoice.last_status_update, self._threshold_seconds, now)

    def delayed_invoices(self) -> List[Invoice]:
        """Live pending invoices whose last status change is older than the threshold."""
        now = self._store.clock.now_utc()
        return [inv for inv in self._store.invoices if self.is_delayed(inv, now)]
