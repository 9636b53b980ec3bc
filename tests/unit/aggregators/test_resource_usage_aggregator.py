"""Unit tests for resource usage aggregation."""

from decimal import Decimal

import pytest

from project_finance.aggregators.resource_usage_aggregator import (
    TOTAL_ROW_LABEL,
    ResourceUsageAggregator,
)
from project_finance.errors import NotFoundError
from project_finance.models import LaborDayRecord, Project, RoleRate


@pytest.fixture
def usage_store(seeded_store):
    """Seeded store with QA work in two months and a second project."""
    seeded_store.create_role_rate(
        RoleRate(project_id="proj-001", role="QA", cost_per_labor_day=300)
    )
    for month, hours in [("04", 16), ("05", 24)]:
        seeded_store.upsert_labor_day(
            LaborDayRecord(
                project_id="proj-001",
                role="QA",
                month=month,
                year="2024",
                total_hours=hours,
            )
        )
    seeded_store.upsert_labor_day(
        LaborDayRecord(
            project_id="proj-002", role="BE", month="05", year="2024", total_hours=8
        )
    )
    # Different year, excluded from 2024 reports
    seeded_store.upsert_labor_day(
        LaborDayRecord(
            project_id="proj-001", role="BE", month="04", year="2023", total_hours=800
        )
    )
    return seeded_store


class TestBuildTable:
    """Test the annual per-role usage table."""

    def test_rows_per_role(self, usage_store):
        table = ResourceUsageAggregator(usage_store).build_table("proj-001", "2024")

        assert [row.role for row in table.rows] == ["BE", "QA"]
        be, qa = table.rows
        assert be.monthly_labor_days[3] == Decimal("10")
        assert be.total_labor_days == Decimal("10")
        assert be.total_cost == Decimal("5000")
        assert qa.monthly_labor_days[3:5] == [Decimal("2"), Decimal("3")]
        assert qa.total_cost == Decimal("1500")

    def test_total_row(self, usage_store):
        table = ResourceUsageAggregator(usage_store).build_table("proj-001", 2024)

        assert table.total.role == TOTAL_ROW_LABEL
        assert table.total.monthly_labor_days[3] == Decimal("12")
        assert table.total.total_labor_days == Decimal("15")
        assert table.total.total_cost == Decimal("6500")

    def test_all_projects(self, usage_store):
        table = ResourceUsageAggregator(usage_store).build_table("all", "2024")

        be = table.rows[0]
        assert be.monthly_labor_days[4] == Decimal("1")
        assert be.total_labor_days == Decimal("11")

    def test_role_without_rate(self, store):
        store.create_project(Project(id="p", name="No rates"))
        store.upsert_labor_day(
            LaborDayRecord(project_id="p", role="PM", month="01", year="2024", total_hours=8)
        )

        table = ResourceUsageAggregator(store).build_table("p", "2024")

        assert table.rows[0].rate == Decimal("0")
        assert table.rows[0].total_cost == Decimal("0")

    def test_unknown_project(self, usage_store):
        with pytest.raises(NotFoundError):
            ResourceUsageAggregator(usage_store).build_table("missing", "2024")

    def test_to_dataframe(self, usage_store):
        table = ResourceUsageAggregator(usage_store).build_table("proj-001", "2024")

        df = table.to_dataframe()

        assert df.columns.tolist()[:3] == ["Role", "Jan", "Feb"]
        assert df.columns.tolist()[-3:] == ["Total Labor-Days", "Rate", "Total Cost"]
        assert df["Role"].tolist() == ["BE", "QA", TOTAL_ROW_LABEL]


class TestUsageViews:
    """Test the monthly and per-role views."""

    def test_monthly_usage(self, usage_store):
        usage = ResourceUsageAggregator(usage_store).monthly_usage("proj-001", "2024")

        assert len(usage) == 12
        assert usage[3] == {"month": "Apr", "labor_days": Decimal("12")}
        assert usage[4] == {"month": "May", "labor_days": Decimal("3")}
        assert usage[0]["labor_days"] == Decimal("0")

    def test_role_breakdown_sorted_descending(self, usage_store):
        breakdown = ResourceUsageAggregator(usage_store).role_breakdown(
            "proj-001", "4", "2024"
        )

        assert breakdown == [
            {"role": "BE", "labor_days": Decimal("10")},
            {"role": "QA", "labor_days": Decimal("2")},
        ]
