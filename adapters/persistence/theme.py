"""
Delivery Desk Persistence — Theme Preference
==============================================
The selected UI theme ("light" | "dark") lives in the same durable
storage as the archive. Applying colours is the presentation layer's job.
"""

from __future__ import annotations

import logging

from adapters.persistence.storage import KeyValueStorage
from core.config import VALID_THEMES

logger = logging.getLogger("desk.persistence")

DEFAULT_THEME_KEY = "theme"
LIGHT = "light"
DARK = "dark"


class ThemePreference:
    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = DEFAULT_THEME_KEY,
        default: str = LIGHT,
    ) -> None:
        if default not in VALID_THEMES:
            raise ValueError(f"Unknown theme {default!r}.")
        self._storage = storage
        self._key = key
        self._current = default

    @property
    def current(self) -> str:
        return self._current

    def load(self) -> str:
        """Adopt the stored theme if there is a valid one."""
        stored = self._storage.get_item(self._key)
        if stored in VALID_THEMES:
            self._current = stored
        elif stored:
            logger.warning(f"Ignoring unknown stored theme {stored!r}")
        return self._current

    def set(self, theme: str) -> str:
        if theme not in VALID_THEMES:
            raise ValueError(
                f"Unknown theme {theme!r}. Must be one of: {sorted(VALID_THEMES)}"
            )
        self._current = theme
        self._storage.set_item(self._key, theme)
        return theme

    def toggle(self) -> str:
        """Flip light/dark and persist the choice."""
        return self.set(DARK if self._current == LIGHT else LIGHT)
