"""
Delivery Desk Core Time — Temporal Helpers
============================================
Pure functions for elapsed-time logic.
All functions take explicit datetime arguments — no hidden clock access.
"""

from __future__ import annotations

from datetime import datetime, timezone


def ensure_aware(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC (legacy documents carry no offset)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def elapsed_seconds(since: datetime, now: datetime) -> float:
    """Seconds between `since` and `now` (negative if `since` is in the future)."""
    return (ensure_aware(now) - ensure_aware(since)).total_seconds()


def is_expired(issued_at: datetime, ttl_seconds: float, now: datetime) -> bool:
    """
    Check if something issued at `issued_at` has outlived its TTL.

    Strictly greater: exactly `ttl_seconds` old is not yet expired.
    """
    return elapsed_seconds(issued_at, now) > ttl_seconds
