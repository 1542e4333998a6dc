"""
Delivery Desk Numbering — Public API
======================================
"""

from core.numbering.engine import SequenceState
from core.numbering.models import NumberingPolicy
from core.numbering.provider import (
    InMemoryNumberingProvider,
    NumberingProvider,
)

__all__ = [
    "NumberingPolicy",
    "SequenceState",
    "NumberingProvider",
    "InMemoryNumberingProvider",
]
