"""Unit tests for labor-day, spending, reconcile, usage and health commands."""

import csv
from decimal import Decimal
from unittest.mock import Mock, patch

from project_finance.cli.commands.health import health
from project_finance.cli.commands.labor_days import labor_days_group
from project_finance.cli.commands.reconcile import reconcile
from project_finance.cli.commands.resource_usage import resource_usage
from project_finance.cli.commands.spending import spending_summary
from project_finance.errors import ImportServiceError, StoreError
from project_finance.services.labor_day_import_service import LaborDayImportService


class TestLaborDaysCommands:
    """Test suite for the labor-days command group."""

    def test_list(self, runner, cli_store):
        result = runner.invoke(labor_days_group, ["list", "proj-001", "--year", "2024"])

        assert result.exit_code == 0
        assert "2024-04" in result.output

    def test_list_invalid_month(self, runner, cli_store):
        result = runner.invoke(labor_days_group, ["list", "all", "--month", "13"])

        assert result.exit_code == 3

    def test_import(self, runner, cli_store, sample_import_rows, tmp_path):
        csv_path = tmp_path / "timesheet.csv"
        csv_path.write_text("Role,Month,TotalDuration\n", encoding="utf-8")
        service = Mock(spec=LaborDayImportService)
        service.upload.return_value = sample_import_rows

        with patch(
            "project_finance.cli.context.open_import_service", return_value=service
        ):
            result = runner.invoke(
                labor_days_group,
                ["import", "proj-001", str(csv_path), "--year", "2024"],
            )

        assert result.exit_code == 0
        assert "Imported 2 labor-day record(s) for 2024" in result.output
        assert "Discarded 2" in result.output

    def test_import_webhook_failure(self, runner, cli_store, tmp_path):
        csv_path = tmp_path / "timesheet.csv"
        csv_path.write_text("Role,Month,TotalDuration\n", encoding="utf-8")
        service = Mock(spec=LaborDayImportService)
        service.upload.side_effect = ImportServiceError(
            "Failed to reach import webhook", recovery_hint="Check IMPORT_WEBHOOK_URL"
        )

        with patch(
            "project_finance.cli.context.open_import_service", return_value=service
        ):
            result = runner.invoke(
                labor_days_group,
                ["import", "proj-001", str(csv_path), "--year", "2024"],
            )

        assert result.exit_code == 2
        assert "Import Error" in result.output
        assert "IMPORT_WEBHOOK_URL" in result.output


class TestSpendingSummaryCommand:
    """Test suite for spending-summary."""

    def test_all_projects(self, runner, cli_store):
        result = runner.invoke(spending_summary, [])

        assert result.exit_code == 0
        assert "Rp 25,000" in result.output
        assert "25.0%" in result.output
        assert "Source: view" in result.output
        assert "Portfolio" in result.output

    def test_no_view(self, runner, cli_store):
        result = runner.invoke(spending_summary, ["--no-view"])

        assert result.exit_code == 0
        assert "Source: table join" in result.output

    def test_single_project(self, runner, cli_store):
        result = runner.invoke(spending_summary, ["--project", "proj-001"])

        assert result.exit_code == 0
        assert "Portfolio" not in result.output

    def test_unknown_project(self, runner, cli_store):
        result = runner.invoke(spending_summary, ["--project", "missing"])

        assert result.exit_code == 7


class TestReconcileCommand:
    """Test suite for reconcile."""

    def test_with_ledger(self, runner, cli_store):
        result = runner.invoke(reconcile, ["proj-001"])

        assert result.exit_code == 0
        assert "Budget Rp 100,000, spent Rp 20,000" in result.output
        assert cli_store.get_project("proj-001").spent == Decimal("20000")

    def test_labor_days(self, runner, cli_store):
        result = runner.invoke(reconcile, ["proj-001", "--labor-days"])

        assert result.exit_code == 0
        assert "Labor-days consumed set to 10" in result.output

    def test_all(self, runner, cli_store):
        result = runner.invoke(reconcile, ["--all"])

        assert result.exit_code == 0
        assert "Reconciled 2 project(s)" in result.output

    def test_all_with_failure(self, runner, cli_store):
        original = cli_store.list_ledger_entries

        def flaky(project_id):
            if project_id == "proj-002":
                raise StoreError("ledger unavailable")
            return original(project_id)

        with patch.object(cli_store, "list_ledger_entries", side_effect=flaky):
            result = runner.invoke(reconcile, ["--all"])

        assert result.exit_code == 1
        assert "proj-002: ledger unavailable" in result.output

    def test_requires_target(self, runner, cli_store):
        result = runner.invoke(reconcile, [])

        assert result.exit_code == 3
        assert "PROJECT_ID or --all" in result.output


class TestResourceUsageCommand:
    """Test suite for resource-usage."""

    def test_table(self, runner, cli_store):
        result = runner.invoke(resource_usage, ["proj-001", "--year", "2024"])

        assert result.exit_code == 0
        assert "TOTAL" in result.output
        assert "Rp 5,000" in result.output

    def test_csv_output(self, runner, cli_store, tmp_path):
        output = tmp_path / "usage.csv"

        result = runner.invoke(
            resource_usage, ["all", "--year", "2024", "--output", str(output)]
        )

        assert result.exit_code == 0
        with open(output, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert [row["Role"] for row in rows] == ["BE", "TOTAL"]
        assert Decimal(rows[0]["Apr"]) == Decimal("10")

    def test_no_records(self, runner, cli_store):
        result = runner.invoke(resource_usage, ["proj-001", "--year", "2023"])

        assert result.exit_code == 0
        assert "No labor-day records for 2023" in result.output

    def test_invalid_year(self, runner, cli_store):
        result = runner.invoke(resource_usage, ["proj-001", "--year", "24"])

        assert result.exit_code == 3


class TestHealthCommand:
    """Test suite for health."""

    def test_healthy(self, runner, cli_store):
        result = runner.invoke(health, [])

        assert result.exit_code == 0
        assert "Store connection successful" in result.output
        assert "role_rates" in result.output

    def test_table_failure(self, runner, cli_store):
        with patch.object(
            cli_store, "list_role_rates", side_effect=StoreError("no access")
        ):
            result = runner.invoke(health, [])

        assert result.exit_code == 1
        assert "no access" in result.output
