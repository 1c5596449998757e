"""Tests for the in-memory document store and the typed repository."""

from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import httpx
import pytest

from society.core.errors import MalformedDocumentError, NotFoundError, StoreError
from society.schemas.bill import Bill, BillStatus
from society.schemas.complaint import Complaint, ComplaintStatus
from society.store import Filter, MemoryDocumentStore, OrderBy, Repository
from society.store.supabase_store import SupabaseDocumentStore


class TestMemoryDocumentStore:
    @pytest.fixture
    def store(self):
        store = MemoryDocumentStore()
        store.set("bills", "b1", {"memberId": "u1", "status": "Pending", "amount": 100})
        store.set("bills", "b2", {"memberId": "u2", "status": "Paid", "amount": 250})
        store.set("bills", "b3", {"memberId": "u1", "status": "Overdue"})
        return store

    def test_query_returns_ids(self, store):
        docs = store.query("bills")
        assert {d["id"] for d in docs} == {"b1", "b2", "b3"}

    def test_query_eq_filter(self, store):
        docs = store.query("bills", [Filter.eq("memberId", "u1")])
        assert {d["id"] for d in docs} == {"b1", "b3"}

    def test_query_in_filter(self, store):
        docs = store.query("bills", [Filter.in_("status", ["Pending", "Overdue"])])
        assert {d["id"] for d in docs} == {"b1", "b3"}

    def test_order_descending_puts_missing_field_last(self, store):
        docs = store.query("bills", order_by=OrderBy("amount", descending=True))
        assert [d["id"] for d in docs] == ["b2", "b1", "b3"]

    def test_order_ascending_puts_missing_field_last(self, store):
        docs = store.query("bills", order_by=OrderBy("amount"))
        assert [d["id"] for d in docs] == ["b1", "b2", "b3"]

    def test_unknown_collection_is_empty(self, store):
        assert store.query("notices") == []
        assert store.get("notices", "missing") is None

    def test_reads_return_copies(self, store):
        doc = store.get("bills", "b1")
        doc["status"] = "Paid"
        assert store.get("bills", "b1")["status"] == "Pending"

    def test_add_assigns_unique_ids(self, store):
        first = store.add("notices", {"title": "AGM"})
        second = store.add("notices", {"title": "AGM"})
        assert first != second
        assert store.get("notices", first)["title"] == "AGM"

    def test_set_ignores_id_in_payload(self, store):
        store.set("bills", "b4", {"id": "other", "amount": 1})
        assert store.get("bills", "b4") == {"amount": 1, "id": "b4"}

    def test_update_merges_fields(self, store):
        store.update("bills", "b1", {"status": "Paid"})
        assert store.get("bills", "b1") == {
            "id": "b1",
            "memberId": "u1",
            "status": "Paid",
            "amount": 100,
        }

    def test_update_missing_raises_not_found(self, store):
        with pytest.raises(NotFoundError):
            store.update("bills", "nope", {"status": "Paid"})

    def test_delete_is_silent_for_missing(self, store):
        store.delete("bills", "b1")
        store.delete("bills", "b1")
        assert store.get("bills", "b1") is None


class TestRepository:
    @pytest.fixture
    def store(self):
        return MemoryDocumentStore()

    @pytest.fixture
    def complaints(self, store):
        return Repository(store, "complaints", Complaint)

    def _complaint(self, **overrides):
        data = dict(
            name="Ravi Kumar",
            description="Leaking tap",
            flatNo="A-101",
            createdBy="u1",
            createdAt=datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc),
        )
        data.update(overrides)
        return Complaint(**data)

    def test_add_returns_record_with_id(self, complaints, store):
        saved = complaints.add(self._complaint())
        assert saved.id
        assert store.get("complaints", saved.id)["status"] == "Pending"

    def test_document_excludes_id_and_none(self, complaints, store):
        saved = complaints.add(self._complaint())
        raw = store.get("complaints", saved.id)
        assert "reply" not in raw
        assert raw["createdAt"].startswith("2026-03-01T09:00:00")

    def test_list_skips_malformed_documents(self, complaints, store, caplog):
        complaints.add(self._complaint())
        store.set("complaints", "bad", {"name": "No description"})
        records = complaints.list()
        assert len(records) == 1
        assert "Skipping" in caplog.text

    def test_get_malformed_raises(self, complaints, store):
        store.set("complaints", "bad", {"name": "No description"})
        with pytest.raises(MalformedDocumentError) as excinfo:
            complaints.get("bad")
        assert excinfo.value.collection == "complaints"
        assert excinfo.value.doc_id == "bad"

    def test_require_missing_raises_not_found(self, complaints):
        with pytest.raises(NotFoundError):
            complaints.require("missing")

    def test_update_serializes_enums_and_dates(self, complaints, store):
        saved = complaints.add(self._complaint())
        complaints.update(
            saved.id,
            status=ComplaintStatus.DONE,
            updatedAt=datetime(2026, 3, 2, tzinfo=timezone.utc),
        )
        raw = store.get("complaints", saved.id)
        assert raw["status"] == "Done"
        assert isinstance(raw["updatedAt"], str)
        assert complaints.require(saved.id).status == ComplaintStatus.DONE

    def test_list_with_filter_and_order(self, store):
        bills = Repository(store, "bills", Bill)
        bills.add(Bill(memberName="A", memberId="u1", amount=10, dueDate=date(2026, 5, 1)))
        bills.add(Bill(memberName="A", memberId="u1", amount=20, dueDate=date(2026, 4, 1)))
        bills.add(Bill(memberName="B", memberId="u2", amount=30, dueDate=date(2026, 3, 1)))
        mine = bills.list(Filter.eq("memberId", "u1"), order_by=OrderBy("dueDate"))
        assert [b.amount for b in mine] == [20, 10]
        assert all(b.status == BillStatus.PENDING for b in mine)


class TestSupabaseDocumentStore:
    @pytest.fixture
    def client(self):
        return MagicMock()

    @pytest.fixture
    def store(self, client):
        return SupabaseDocumentStore(client)

    def test_get_returns_first_row(self, store, client):
        request = client.table.return_value.select.return_value.eq.return_value.limit.return_value
        request.execute.return_value.data = [{"id": "n1", "title": "AGM"}]
        assert store.get("notices", "n1") == {"id": "n1", "title": "AGM"}
        client.table.assert_called_with("notices")

    def test_get_missing_returns_none(self, store, client):
        request = client.table.return_value.select.return_value.eq.return_value.limit.return_value
        request.execute.return_value.data = []
        assert store.get("notices", "n1") is None

    def test_add_returns_inserted_id(self, store, client):
        client.table.return_value.insert.return_value.execute.return_value.data = [{"id": 42}]
        assert store.add("notices", {"title": "AGM"}) == "42"

    def test_update_without_rows_raises_not_found(self, store, client):
        request = client.table.return_value.update.return_value.eq.return_value
        request.execute.return_value.data = []
        with pytest.raises(NotFoundError):
            store.update("bills", "b1", {"status": "Paid"})

    def test_query_applies_filters_and_order(self, store, client):
        select = client.table.return_value.select.return_value
        ordered = select.eq.return_value.in_.return_value.order.return_value
        ordered.execute.return_value.data = [{"id": "c1"}]

        docs = store.query(
            "complaints",
            [Filter.eq("createdBy", "u1"), Filter.in_("status", ["Pending"])],
            OrderBy("createdAt", descending=True),
        )

        assert docs == [{"id": "c1"}]
        select.eq.assert_called_once_with("createdBy", "u1")
        select.eq.return_value.in_.assert_called_once_with("status", ["Pending"])
        select.eq.return_value.in_.return_value.order.assert_called_once_with(
            "createdAt", desc=True
        )

    def test_connection_error_becomes_store_error(self, store, client):
        select = client.table.return_value.select.return_value
        select.execute.side_effect = httpx.ConnectError("boom")
        with pytest.raises(StoreError):
            store.query("complaints")


class TestTimestampOrdering:
    def test_whole_second_sorts_before_fraction(self):
        store = MemoryDocumentStore()
        store.set("notices", "later", {"createdAt": "2026-03-01T09:00:00.123456Z"})
        store.set("notices", "earlier", {"createdAt": "2026-03-01T09:00:00Z"})

        newest = store.query("notices", order_by=OrderBy("createdAt", descending=True))
        assert [d["id"] for d in newest] == ["later", "earlier"]

    def test_repository_orders_by_instant(self):
        store = MemoryDocumentStore()
        complaints = Repository(store, "complaints", Complaint)
        for micro in (0, 500000, 250000):
            complaints.add(
                Complaint(
                    name="Ravi",
                    description=f"at {micro}",
                    flatNo="A-101",
                    createdBy="u1",
                    createdAt=datetime(2026, 3, 1, 9, 0, 0, micro, tzinfo=timezone.utc),
                )
            )
        ordered = complaints.list(order_by=OrderBy("createdAt"))
        assert [c.description for c in ordered] == ["at 0", "at 250000", "at 500000"]
