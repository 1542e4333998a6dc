"""
Delivery Desk Numbering — Sequence State
==========================================
Immutable counter for one policy. Advancing returns a new state;
the provider swaps states under its lock.
"""

from __future__ import annotations

from typing import Iterable

from core.numbering.models import NumberingPolicy


class SequenceState:
    """
    Tracks the next sequence number to issue for one policy.
    """

    def __init__(self, policy: NumberingPolicy, *, next_sequence: int | None = None):
        self._policy = policy
        self._next_sequence = next_sequence if next_sequence is not None else policy.start_at

    @property
    def policy(self) -> NumberingPolicy:
        return self._policy

    @property
    def next_sequence(self) -> int:
        return self._next_sequence

    def next_number(self) -> tuple[str, "SequenceState"]:
        """Return (identifier, new_state)."""
        identifier = self._policy.format_number(self._next_sequence)
        return identifier, SequenceState(self._policy, next_sequence=self._next_sequence + 1)

    def observe(self, identifiers: Iterable[str]) -> "SequenceState":
        """
        Return a state positioned past every identifier already in use.

        The counter only moves forward: observing lower numbers is a no-op.
        """
        highest = self._next_sequence - 1
        for identifier in identifiers:
            sequence = self._policy.parse_sequence(identifier)
            if sequence is not None and sequence > highest:
                highest = sequence
        return SequenceState(self._policy, next_sequence=highest + 1)
