"""
Delivery Desk Numbering — Policy Model
========================================
Declares how identifiers for one entity kind are formatted.

Doctrine:
- Same policy + sequence position → same identifier (deterministic).
- Between resets an identifier is never handed out twice.
  reset() returns counters to start_at; restore() then re-seeds them
  past every identifier already in use.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NumberingPolicy:
    """
    Identifier format for one entity kind.

    Fields:
        kind: entity kind this policy numbers (e.g. "invoice")
        prefix: prepended before the sequence (e.g. "INV", "DRIVER")
        padding: minimum digit width (3 → "007")
        start_at: first sequence number issued (default 1)
    """
    kind: str
    prefix: str
    padding: int = 3
    start_at: int = 1

    def __post_init__(self):
        if not self.kind or not isinstance(self.kind, str):
            raise ValueError("kind must be a non-empty string.")
        if not isinstance(self.prefix, str):
            raise ValueError("prefix must be a string.")
        if not isinstance(self.padding, int) or self.padding < 1:
            raise ValueError("padding must be int >= 1.")
        if not isinstance(self.start_at, int) or self.start_at < 1:
            raise ValueError("start_at must be int >= 1.")

    def format_number(self, sequence: int) -> str:
        """
        Format an identifier from a sequence position.

        Sequences wider than `padding` are not truncated: 1000 → "INV1000".
        """
        if not isinstance(sequence, int) or sequence < 1:
            raise ValueError("sequence must be int >= 1.")
        return f"{self.prefix}{str(sequence).zfill(self.padding)}"

    def parse_sequence(self, identifier: str) -> Optional[int]:
        """
        Recover the sequence number from an identifier of this policy.

        Returns None for identifiers that do not follow the format
        (hand-written ids in seed documents are tolerated, not counted).
        """
        if not isinstance(identifier, str) or not identifier.startswith(self.prefix):
            return None
        digits = identifier[len(self.prefix):]
        if not digits.isdigit():
            return None
        return int(digits)
