"""
Tests for projections.delivery — statistics, recent invoices,
search / filter, low stock and table sorting.
"""

from datetime import date, datetime, timezone

import pytest

from core.time import FixedClock
from engines.delivery import EntityStore, InvoiceStatus
from projections.delivery import DeliveryReadModel, sort_table
from projections.delivery.sorting import compare_values


NOW = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


def _seeded():
    store = EntityStore(clock=FixedClock(NOW))
    store.restore(
        invoices=[
            {"id": "INV001", "customerName": "أحمد علي", "phoneNumber": "0501111111",
             "address": "الرياض", "status": "pending_delivery", "driverId": "DRIVER001",
             "date": "2026-02-25"},
            {"id": "INV002", "customerName": "سارة محمد", "phoneNumber": "0502222222",
             "address": "جدة", "status": "delivered", "driverId": "DRIVER002",
             "date": "2026-02-28"},
            {"id": "INV003", "customerName": "خالد", "phoneNumber": "0503333333",
             "address": "الدمام", "status": "returned", "driverId": "DRIVER001",
             "date": "2026-02-26"},
        ],
        archived_invoices=[
            {"id": "INV000", "customerName": "نورة", "phoneNumber": "0509999999",
             "address": "مكة", "status": "delivered", "archivedDate": "2026-02-20T00:00:00Z"},
        ],
        drivers=[{"id": "DRIVER001", "name": "فهد"}, {"id": "DRIVER002", "name": "ماجد"}],
        stock=[
            {"id": "STK001", "name": "كرتون", "quantity": 2, "minQuantity": 5},
            {"id": "STK002", "name": "أكياس", "quantity": 50, "minQuantity": 10},
            {"id": "STK003", "name": "شريط", "quantity": 5, "minQuantity": 5},
        ],
    )
    return store, DeliveryReadModel(store)


# ══════════════════════════════════════════════════════════════
# STATISTICS
# ══════════════════════════════════════════════════════════════

class TestStatistics:
    def test_counts(self):
        _, model = _seeded()
        stats = model.statistics()
        assert stats.total_invoices == 3
        assert stats.pending_invoices == 1
        assert stats.delivered_invoices == 1
        assert stats.returned_invoices == 1
        assert stats.total_drivers == 2
        assert stats.total_stock_items == 3

    def test_archived_not_counted(self):
        store, model = _seeded()
        store.archive_invoice("INV002")
        stats = model.statistics()
        assert stats.total_invoices == 2
        assert stats.delivered_invoices == 0

    def test_status_counts_sum_to_total(self):
        store, model = _seeded()
        store.add_invoice({})
        stats = model.statistics()
        assert (
            stats.pending_invoices + stats.delivered_invoices + stats.returned_invoices
            == stats.total_invoices
        )

    def test_to_dict(self):
        _, model = _seeded()
        assert model.statistics().to_dict() == {
            "totalInvoices": 3,
            "pendingInvoices": 1,
            "deliveredInvoices": 1,
            "returnedInvoices": 1,
            "totalDrivers": 2,
            "totalStockItems": 3,
        }

    def test_empty_store(self):
        stats = DeliveryReadModel(EntityStore()).statistics()
        assert stats.total_invoices == 0


# ══════════════════════════════════════════════════════════════
# RECENT INVOICES
# ══════════════════════════════════════════════════════════════

class TestRecentInvoices:
    def test_newest_first(self):
        _, model = _seeded()
        assert [inv.id for inv in model.recent_invoices()] == ["INV002", "INV003", "INV001"]

    def test_limit(self):
        _, model = _seeded()
        assert [inv.id for inv in model.recent_invoices(limit=1)] == ["INV002"]
        assert model.recent_invoices(limit=0) == []

    def test_configured_default_limit(self):
        store, _ = _seeded()
        model = DeliveryReadModel(store, recent_limit=2)
        assert [inv.id for inv in model.recent_invoices()] == ["INV002", "INV003"]
        assert len(model.recent_invoices(limit=3)) == 3

    def test_negative_limit_rejected(self):
        with pytest.raises(ValueError, match="recent_limit"):
            DeliveryReadModel(EntityStore(), recent_limit=-1)

    def test_ties_keep_insertion_order(self):
        store = EntityStore(clock=FixedClock(NOW))
        model = DeliveryReadModel(store)
        for _ in range(3):
            store.add_invoice({})
        assert [inv.id for inv in model.recent_invoices()] == ["INV001", "INV002", "INV003"]

    def test_store_order_untouched(self):
        store, model = _seeded()
        model.recent_invoices()
        assert [inv.id for inv in store.invoices] == ["INV001", "INV002", "INV003"]


# ══════════════════════════════════════════════════════════════
# SEARCH / FILTER
# ══════════════════════════════════════════════════════════════

class TestSearchAndFilter:
    def test_search_by_customer(self):
        _, model = _seeded()
        assert [inv.id for inv in model.search_invoices("سارة")] == ["INV002"]

    def test_search_by_address(self):
        _, model = _seeded()
        assert [inv.id for inv in model.search_invoices("الدمام")] == ["INV003"]

    def test_search_by_id_and_phone(self):
        _, model = _seeded()
        assert [inv.id for inv in model.search_invoices("INV001")] == ["INV001"]
        assert [inv.id for inv in model.search_invoices("0503")] == ["INV003"]

    def test_search_excludes_archived(self):
        _, model = _seeded()
        assert model.search_invoices("نورة") == []

    def test_search_archived(self):
        _, model = _seeded()
        assert [inv.id for inv in model.search_archived_invoices("نورة")] == ["INV000"]
        assert model.search_archived_invoices("مكة") == []

    def test_filter_by_status(self):
        _, model = _seeded()
        assert [inv.id for inv in model.filter_invoices_by_status("returned")] == ["INV003"]
        assert [inv.id for inv in model.filter_invoices_by_status(InvoiceStatus.DELIVERED)] == ["INV002"]

    def test_filter_by_driver(self):
        _, model = _seeded()
        assert [inv.id for inv in model.driver_invoices("DRIVER001")] == ["INV001", "INV003"]
        assert model.filter_invoices_by_driver("DRIVER404") == []


# ══════════════════════════════════════════════════════════════
# LOW STOCK
# ══════════════════════════════════════════════════════════════

class TestLowStock:
    def test_strictly_below_minimum(self):
        _, model = _seeded()
        assert [item.id for item in model.low_stock_items()] == ["STK001"]

    def test_restocking_clears_alert(self):
        store, model = _seeded()
        store.update_stock_quantity("STK001", 6)
        assert model.low_stock_items() == []


# ══════════════════════════════════════════════════════════════
# SORTING
# ══════════════════════════════════════════════════════════════

class TestSortTable:
    def test_case_insensitive_strings(self):
        rows = [{"name": "banana"}, {"name": "Apple"}, {"name": "cherry"}]
        assert [r["name"] for r in sort_table(rows, "name")] == ["Apple", "banana", "cherry"]

    def test_descending(self):
        rows = [{"qty": 3}, {"qty": 10}, {"qty": 1}]
        assert [r["qty"] for r in sort_table(rows, "qty", "desc")] == [10, 3, 1]

    def test_stable_for_ties(self):
        rows = [{"k": 1, "n": "a"}, {"k": 0, "n": "b"}, {"k": 1, "n": "c"}]
        assert [r["n"] for r in sort_table(rows, "k")] == ["b", "a", "c"]
        assert [r["n"] for r in sort_table(rows, "k", "desc")] == ["a", "c", "b"]

    def test_none_last_ascending(self):
        rows = [{"d": None}, {"d": date(2026, 1, 2)}, {"d": date(2026, 1, 1)}]
        assert [r["d"] for r in sort_table(rows, "d")] == [
            date(2026, 1, 1), date(2026, 1, 2), None,
        ]

    def test_sorts_records_by_attribute(self):
        store, _ = _seeded()
        rows = sort_table(store.invoices, "status")
        assert [inv.status.value for inv in rows] == ["delivered", "pending_delivery", "returned"]

    def test_returns_new_list(self):
        rows = [{"n": 2}, {"n": 1}]
        result = sort_table(rows, "n")
        assert result is not rows
        assert [r["n"] for r in rows] == [2, 1]

    def test_invalid_direction(self):
        with pytest.raises(ValueError, match="direction"):
            sort_table([], "n", "sideways")

    def test_compare_values(self):
        assert compare_values("a", "B") == -1
        assert compare_values(2, 2) == 0
        assert compare_values(None, 1) == 1
