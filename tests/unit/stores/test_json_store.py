"""Unit tests for the JSON file store."""

import json
from decimal import Decimal
from unittest.mock import patch

import pytest

from project_finance.errors import StoreError
from project_finance.models import LaborDayRecord, LedgerEntry, Project, RoleRate
from project_finance.stores import JsonFileStore


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "data" / "store.json"


class TestJsonFileStore:
    """Test persistence across store instances."""

    def test_missing_file_starts_empty(self, store_path):
        store = JsonFileStore(store_path)

        assert store.list_projects() == []
        assert not store_path.exists()

    def test_round_trip(self, store_path):
        store = JsonFileStore(store_path)
        store.create_project(Project(id="proj-001", name="CRM", budget="100000.50"))
        store.create_ledger_entry(
            LedgerEntry(project_id="proj-001", type="debit", category="budget", amount=5)
        )
        store.create_role_rate(
            RoleRate(project_id="proj-001", role="BE", cost_per_labor_day=500)
        )
        store.upsert_labor_day(
            LaborDayRecord(
                project_id="proj-001", role="BE", month="04", year="2024", total_hours=20
            )
        )

        reopened = JsonFileStore(store_path)

        assert reopened.get_project("proj-001").budget == Decimal("100000.50")
        assert len(reopened.list_ledger_entries("proj-001")) == 1
        assert reopened.list_role_rates()[0].cost_per_labor_day == Decimal("500")
        assert reopened.list_labor_days()[0].labor_days == Decimal("2.5")

    def test_file_layout(self, store_path):
        JsonFileStore(store_path).create_project(Project(name="CRM"))

        payload = json.loads(store_path.read_text(encoding="utf-8"))

        assert payload["version"] == JsonFileStore.FILE_VERSION
        assert "last_updated" in payload
        assert set(payload["tables"]) == {
            "projects",
            "ledger",
            "role_rates",
            "labor_days",
        }
        assert payload["tables"]["projects"][0]["name"] == "CRM"

    def test_delete_persisted(self, store_path):
        store = JsonFileStore(store_path)
        store.create_project(Project(id="proj-001", name="CRM"))
        store.delete_project("proj-001")

        assert JsonFileStore(store_path).list_projects() == []

    def test_no_temp_files_left(self, store_path):
        JsonFileStore(store_path).create_project(Project(name="CRM"))

        assert [p.name for p in store_path.parent.iterdir()] == ["store.json"]

    def test_corrupted_file(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("{not json", encoding="utf-8")

        with pytest.raises(StoreError, match="corrupted") as exc_info:
            JsonFileStore(store_path)
        assert exc_info.value.recovery_hint

    def test_version_mismatch(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps({"version": "0.1", "tables": {}}))

        with pytest.raises(StoreError, match="version mismatch"):
            JsonFileStore(store_path)

    def test_invalid_row(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(
            json.dumps({"version": "1.0", "tables": {"projects": [{"name": ""}]}})
        )

        with pytest.raises(StoreError, match="Invalid projects row"):
            JsonFileStore(store_path)

    def test_write_failure_raises_store_error(self, store_path):
        store = JsonFileStore(store_path)

        with patch(
            "project_finance.stores.json_store.os.replace",
            side_effect=OSError("disk full"),
        ):
            with pytest.raises(StoreError, match="disk full"):
                store.create_project(Project(name="CRM"))

        assert list(store_path.parent.iterdir()) == []

    def test_failed_save_rolls_back_memory(self, store_path):
        store = JsonFileStore(store_path)
        project = store.create_project(Project(name="CRM", budget=1000))

        with patch.object(
            store, "_save_to_disk", side_effect=StoreError("disk full")
        ):
            with pytest.raises(StoreError):
                store.update_project(project.id, {"budget": 5000})
            with pytest.raises(StoreError):
                store.create_project(Project(name="ERP"))
            with pytest.raises(StoreError):
                store.delete_project(project.id)

        assert [p.name for p in store.list_projects()] == ["CRM"]
        assert store.get_project(project.id).budget == Decimal("1000")
        reloaded = JsonFileStore(store_path).get_project(project.id)
        assert reloaded.budget == Decimal("1000")

    def test_failed_upsert_rolls_back_memory(self, store_path):
        store = JsonFileStore(store_path)
        project = store.create_project(Project(name="CRM"))
        record = store.upsert_labor_day(
            LaborDayRecord(
                project_id=project.id, role="BE", month="04", year="2024", total_hours=8
            )
        )

        with patch(
            "project_finance.stores.json_store.os.replace",
            side_effect=OSError("disk full"),
        ):
            with pytest.raises(StoreError, match="disk full"):
                store.upsert_labor_day(
                    LaborDayRecord(
                        project_id=project.id,
                        role="BE",
                        month="04",
                        year="2024",
                        total_hours=80,
                    )
                )

        assert store.list_labor_days() == [record]
