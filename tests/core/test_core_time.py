"""
Tests for core.time — Clock implementations and elapsed-time helpers.
"""

import pytest
from datetime import datetime, timezone, timedelta

from core.time import (
    FixedClock,
    SystemClock,
    elapsed_seconds,
    ensure_aware,
    is_expired,
)


T0 = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


# ── Clock Tests ──────────────────────────────────────────────

class TestSystemClock:
    def test_returns_utc_datetime(self):
        dt = SystemClock().now_utc()
        assert dt.tzinfo == timezone.utc

    def test_time_advances(self):
        clock = SystemClock()
        t1 = clock.now_utc()
        t2 = clock.now_utc()
        assert t2 >= t1


class TestFixedClock:
    def test_returns_fixed_time(self):
        clock = FixedClock(T0)
        assert clock.now_utc() == T0
        assert clock.now_utc() == T0

    def test_rejects_naive_datetime(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            FixedClock(datetime(2026, 1, 1))

    def test_advance_seconds(self):
        clock = FixedClock(T0)
        clock.advance(60)
        assert clock.now_utc() == T0 + timedelta(seconds=60)

    def test_advance_hours(self):
        clock = FixedClock(T0)
        clock.advance(hours=25)
        assert clock.now_utc() == T0 + timedelta(hours=25)

    def test_set(self):
        clock = FixedClock(T0)
        later = T0 + timedelta(days=3)
        clock.set(later)
        assert clock.now_utc() == later


# ── Temporal Tests ───────────────────────────────────────────

class TestTemporal:
    def test_naive_treated_as_utc(self):
        assert ensure_aware(datetime(2026, 3, 1, 9)) == T0

    def test_elapsed_mixed_naive_and_aware(self):
        assert elapsed_seconds(datetime(2026, 3, 1, 8), T0) == 3600

    def test_is_expired_strictly_greater(self):
        ttl = 24 * 3600
        assert not is_expired(T0, ttl, T0 + timedelta(hours=24))
        assert is_expired(T0, ttl, T0 + timedelta(hours=24, seconds=1))
