"""
Delivery Desk Core Config — Settings
======================================
One frozen settings object, built from defaults and optionally
overridden by DESK_* environment variables.

Doctrine: no thresholds or storage keys hardcoded in engine logic.
Engines receive the values they need from DeskSettings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "DESK_"

VALID_THEMES = frozenset({"light", "dark"})


@dataclass(frozen=True)
class DeskSettings:
    """
    Runtime configuration for the delivery desk.

    Fields:
        data_source: directory or http(s) base URL holding
            invoices.json, drivers.json and stock.json
        storage_dir: directory for the file-backed key-value storage
        delay_threshold_hours: a pending invoice untouched for longer
            than this is reported as delayed
        recent_invoices_limit: default size of the recent-invoices view
        id_padding: digit width of generated identifiers (INV001)
        archive_storage_key: storage entry holding the archived invoices
        theme_storage_key: storage entry holding the theme preference
        default_theme: theme used when nothing is stored
    """

    data_source: str = "./data"
    storage_dir: str = "./.desk_storage"
    delay_threshold_hours: float = 24.0
    recent_invoices_limit: int = 10
    id_padding: int = 3
    archive_storage_key: str = "archivedInvoices"
    theme_storage_key: str = "theme"
    default_theme: str = "light"

    def __post_init__(self) -> None:
        if not self.data_source:
            raise ValueError("data_source must be non-empty.")
        if self.delay_threshold_hours <= 0:
            raise ValueError(
                f"delay_threshold_hours must be positive, got {self.delay_threshold_hours}."
            )
        if self.recent_invoices_limit < 0:
            raise ValueError("recent_invoices_limit must be >= 0.")
        if self.id_padding < 1:
            raise ValueError("id_padding must be >= 1.")
        if not self.archive_storage_key or not self.theme_storage_key:
            raise ValueError("storage keys must be non-empty.")
        if self.default_theme not in VALID_THEMES:
            raise ValueError(
                f"default_theme '{self.default_theme}' is not valid. "
                f"Must be one of: {sorted(VALID_THEMES)}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DeskSettings":
        """Build settings from DESK_* variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        defaults = cls()

        def _get(name: str, default):
            raw = env.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is None or raw == "":
                return default
            return type(default)(raw)

        return cls(
            data_source=_get("data_source", defaults.data_source),
            storage_dir=_get("storage_dir", defaults.storage_dir),
            delay_threshold_hours=_get("delay_threshold_hours", defaults.delay_threshold_hours),
            recent_invoices_limit=_get("recent_invoices_limit", defaults.recent_invoices_limit),
            id_padding=_get("id_padding", defaults.id_padding),
            archive_storage_key=_get("archive_storage_key", defaults.archive_storage_key),
            theme_storage_key=_get("theme_storage_key", defaults.theme_storage_key),
            default_theme=_get("default_theme", defaults.default_theme),
        )
