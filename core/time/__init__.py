"""
Delivery Desk Core Time — Public API
======================================
Injectable clock and elapsed-time helpers.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
)
from core.time.temporal import (
    elapsed_seconds,
    ensure_aware,
    is_expired,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "elapsed_seconds",
    "ensure_aware",
    "is_expired",
]
