"""
Delivery Desk Numbering — Provider
====================================
Protocol + in-memory implementation holding one monotonic counter
per entity kind.

Doctrine:
- Provider is a dependency injection point (testable, swappable).
- Get-and-advance is atomic per kind.
- Counters are seeded from identifiers already in use, so a restored
  store never re-issues an id that exists in the live or archived set.
"""

from __future__ import annotations

import threading
from typing import Iterable, Protocol

from core.numbering.engine import SequenceState
from core.numbering.models import NumberingPolicy


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------

class NumberingProvider(Protocol):
    def next_id(self, kind: str) -> str:
        """Atomically issue the next identifier for `kind`."""
        ...

    def observe(self, kind: str, identifiers: Iterable[str]) -> None:
        """Move the `kind` counter past every identifier given."""
        ...

    def reset(self) -> None:
        """Return every counter to its policy's start."""
        ...


# ---------------------------------------------------------------------------
# InMemory Provider
# ---------------------------------------------------------------------------

class InMemoryNumberingProvider:
    """
    Thread-safe in-memory numbering provider.

    Policies are registered at construction time.
    """

    def __init__(self, policies: tuple[NumberingPolicy, ...] = ()):
        self._lock = threading.Lock()
        self._states: dict[str, SequenceState] = {}
        for policy in policies:
            self._states[policy.kind] = SequenceState(policy)

    def _state(self, kind: str) -> SequenceState:
        state = self._states.get(kind)
        if state is None:
            raise KeyError(f"No numbering policy registered for kind '{kind}'.")
        return state

    def next_id(self, kind: str) -> str:
        with self._lock:
            identifier, new_state = self._state(kind).next_number()
            self._states[kind] = new_state
            return identifier

    def observe(self, kind: str, identifiers: Iterable[str]) -> None:
        with self._lock:
            self._states[kind] = self._state(kind).observe(identifiers)

    def reset(self) -> None:
        with self._lock:
            for kind, state in self._states.items():
                self._states[kind] = SequenceState(state.policy)
