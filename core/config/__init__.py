"""
Delivery Desk Core Config — Public API
========================================
"""

from core.config.settings import (
    ENV_PREFIX,
    VALID_THEMES,
    DeskSettings,
)

__all__ = [
    "ENV_PREFIX",
    "VALID_THEMES",
    "DeskSettings",
]
