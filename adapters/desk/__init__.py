"""
Delivery Desk Adapter — Public API
====================================
"""

from adapters.desk.bootstrap import (
    LOAD_FAILURE_MESSAGE,
    Notifier,
    initialize,
    initialize_blocking,
)
from adapters.desk.wiring import APP_READY_EVENT, DeliveryDesk, build_desk

__all__ = [
    "APP_READY_EVENT",
    "DeliveryDesk",
    "build_desk",
    "LOAD_FAILURE_MESSAGE",
    "Notifier",
    "initialize",
    "initialize_blocking",
]
