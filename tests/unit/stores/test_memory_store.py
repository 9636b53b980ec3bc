"""Unit tests for the in-memory store and capability handles."""

import datetime as dt
from decimal import Decimal

import pytest

from project_finance.errors import NotFoundError, ValidationError, ViewUnavailableError
from project_finance.models import LaborDayRecord, LedgerEntry, Project, RoleRate
from project_finance.stores import (
    AdminStore,
    InMemoryStore,
    RestrictedStore,
    restricted,
)


class TestReads:
    """Test ordering and filtering of reads."""

    def test_projects_in_creation_order(self, store):
        store.create_project(
            Project(id="b", name="Later", created_at=dt.datetime(2024, 2, 1))
        )
        store.create_project(
            Project(id="a", name="Earlier", created_at=dt.datetime(2024, 1, 1))
        )

        assert [p.id for p in store.list_projects()] == ["a", "b"]

    def test_ledger_newest_first(self, seeded_store):
        entries = seeded_store.list_ledger_entries("proj-001")

        assert [e.type.value for e in entries] == ["debit", "credit"]

    def test_role_rates_ordered_by_role(self, seeded_store):
        seeded_store.create_role_rate(
            RoleRate(project_id="proj-001", role="AA", cost_per_labor_day=100)
        )

        assert [r.role for r in seeded_store.list_role_rates("proj-001")] == ["AA", "BE"]
        assert seeded_store.list_role_rates("proj-002") == []

    def test_labor_day_filters(self, seeded_store):
        assert len(seeded_store.list_labor_days(project_id="proj-001")) == 1
        assert seeded_store.list_labor_days(month="05") == []
        assert seeded_store.list_labor_days(year="2023") == []

    def test_get_missing_project(self, store):
        with pytest.raises(NotFoundError, match="Project 'missing' not found"):
            store.get_project("missing")

    def test_count_rows(self, seeded_store):
        assert seeded_store.count_rows("projects") == 2
        assert seeded_store.count_rows("ledger") == 2


class TestWrites:
    """Test updates, deletes and upserts."""

    def test_update_project_revalidates(self, seeded_store):
        with pytest.raises(ValidationError):
            seeded_store.update_project("proj-001", {"budget": -5})

        assert seeded_store.get_project("proj-001").budget == Decimal("100000")

    def test_delete_project_removes_labor_days(self, seeded_store):
        seeded_store.delete_project("proj-001")

        with pytest.raises(NotFoundError):
            seeded_store.get_project("proj-001")
        assert seeded_store.list_labor_days(project_id="proj-001") == []

    def test_delete_project_without_labor_days(self, seeded_store):
        seeded_store.delete_project("proj-002")

        with pytest.raises(NotFoundError):
            seeded_store.get_project("proj-002")
        assert [p.id for p in seeded_store.list_projects()] == ["proj-001"]
        assert len(seeded_store.list_labor_days(project_id="proj-001")) == 1

    def test_delete_missing_project(self, store):
        with pytest.raises(NotFoundError):
            store.delete_project("missing")

    def test_update_and_delete_rate(self, seeded_store):
        updated = seeded_store.update_role_rate("rate-be", {"cost_per_labor_day": 550})
        assert updated.cost_per_labor_day == Decimal("550")

        seeded_store.delete_role_rate("rate-be")
        assert seeded_store.list_role_rates("proj-001") == []

        with pytest.raises(NotFoundError):
            seeded_store.delete_role_rate("rate-be")

    def test_upsert_replaces_matching_key(self, seeded_store):
        seeded_store.upsert_labor_day(
            LaborDayRecord(
                project_id="proj-001", role="BE", month="4", year="2024", total_hours=40
            )
        )

        records = seeded_store.list_labor_days(project_id="proj-001")
        assert len(records) == 1
        assert records[0].labor_days == Decimal("5")

    def test_upsert_key_includes_year(self, seeded_store):
        seeded_store.upsert_labor_day(
            LaborDayRecord(
                project_id="proj-001", role="BE", month="04", year="2025", total_hours=8
            )
        )

        assert len(seeded_store.list_labor_days(project_id="proj-001")) == 2


class TestSpendingView:
    """Test the precomputed spending view."""

    def test_view_rows(self, seeded_store):
        view = seeded_store.read_spending_view()

        row = view[0]
        assert row.project_id == "proj-001"
        assert row.labor_day_rows == [("BE", Decimal("10"))]
        assert sorted(row.ledger_rows) == [
            ("credit", "budget", Decimal("100000")),
            ("debit", "budget", Decimal("20000")),
        ]

    def test_view_disabled(self):
        with pytest.raises(ViewUnavailableError):
            InMemoryStore(view_enabled=False).read_spending_view()


class TestRestrictedStore:
    """Test the read-only capability handle."""

    def test_has_no_write_methods(self, seeded_store):
        handle = restricted(seeded_store)

        assert isinstance(handle, RestrictedStore)
        assert not isinstance(handle, AdminStore)
        assert not hasattr(handle, "create_project")
        assert not hasattr(handle, "update_project")

    def test_reads_delegate(self, seeded_store):
        handle = restricted(seeded_store)

        assert [p.id for p in handle.list_projects()] == ["proj-001", "proj-002"]
        assert handle.read_spending_view()[0].project_id == "proj-001"

    def test_restricting_twice_is_noop(self, seeded_store):
        handle = restricted(seeded_store)
        assert restricted(handle) is handle

    def test_ledger_entry_created(self, seeded_store):
        entry = seeded_store.create_ledger_entry(
            LedgerEntry(
                project_id="proj-002", type="credit", category="budget", amount=5
            )
        )
        assert restricted(seeded_store).list_ledger_entries("proj-002") == [entry]
