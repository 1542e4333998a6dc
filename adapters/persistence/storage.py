"""
Delivery Desk Persistence — Key-Value Storage
===============================================
Durable string storage with local-storage semantics:
get_item / set_item / remove_item, values are strings (callers
serialize JSON themselves).

Backends:
- InMemoryKeyValueStorage: tests and ephemeral sessions
- JsonFileKeyValueStorage: one `<key>.json` file per key in a directory
"""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from adapters.persistence.errors import StorageReadError, StorageWriteError

logger = logging.getLogger("desk.persistence")


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string, or None if the key is absent."""
        ...  # pragma: no cover

    def set_item(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous value."""
        ...  # pragma: no cover

    def remove_item(self, key: str) -> None:
        """Delete `key`. Absent keys are ignored."""
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IN-MEMORY
# ══════════════════════════════════════════════════════════════

class InMemoryKeyValueStorage:
    """Simple in-memory storage for testing and bootstrap."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Storage values must be str, got {type(value).__name__}.")
        with self._lock:
            self._items[key] = value

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._items)


# ══════════════════════════════════════════════════════════════
# FILE-BACKED
# ══════════════════════════════════════════════════════════════

class JsonFileKeyValueStorage:
    """
    File-per-key storage under `directory`.

    Writes go to a temporary file in the same directory and are moved
    into place, so a crash never leaves a half-written entry.
    """

    def __init__(self, directory: Union[str, Path]) -> None:
        self._directory = Path(directory)
        self._directory.mkdir(parents=True, exist_ok=True)

    @property
    def directory(self) -> Path:
        return self._directory

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key {key!r}.")
        return self._directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageReadError(key, str(exc)) from exc

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Storage values must be str, got {type(value).__name__}.")
        path = self._path(key)
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{key}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except OSError as exc:
            raise StorageWriteError(key, str(exc)) from exc
        logger.debug(f"Stored {key} ({len(value)} chars) in {path}")

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass

    def keys(self) -> List[str]:
        return sorted(p.stem for p in self._directory.glob("*.json"))
