"""Unit tests for labor-day records, role rates and month/year helpers."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from project_finance.models.labor_day import (
    LaborDayRecord,
    hours_to_labor_days,
    normalize_month,
    normalize_year,
)
from project_finance.models.role_rate import RoleRate


class TestHelpers:
    """Test month, year and hour conversions."""

    @pytest.mark.parametrize("value,expected", [("4", "04"), (12, "12"), ("4.0", "04")])
    def test_normalize_month(self, value, expected):
        assert normalize_month(value) == expected

    @pytest.mark.parametrize("value", ["0", "13", "April", ""])
    def test_normalize_month_invalid(self, value):
        with pytest.raises(ValueError, match="Invalid month"):
            normalize_month(value)

    def test_normalize_year(self):
        assert normalize_year(2024) == "2024"
        assert normalize_year("2024.0") == "2024"

    def test_normalize_year_invalid(self):
        with pytest.raises(ValueError, match="Invalid year"):
            normalize_year("24")

    def test_hours_to_labor_days(self):
        assert hours_to_labor_days("23.38") == Decimal("2.9225")


class TestLaborDayRecord:
    """Test labor-day derivation from hours."""

    def test_labor_days_derived(self):
        record = LaborDayRecord(
            project_id="proj-001", role="BE", month="4", year="2024", total_hours=80
        )

        assert record.month == "04"
        assert record.labor_days == Decimal("10")
        assert record.upsert_key == ("proj-001", "BE", "04", "2024")

    def test_matching_labor_days_accepted(self):
        record = LaborDayRecord(
            project_id="proj-001",
            role="BE",
            month="04",
            year="2024",
            total_hours="12",
            labor_days="1.5",
        )
        assert record.labor_days == Decimal("1.5")

    def test_mismatched_labor_days_rejected(self):
        with pytest.raises(ValidationError, match="does not match"):
            LaborDayRecord(
                project_id="proj-001",
                role="BE",
                month="04",
                year="2024",
                total_hours=80,
                labor_days=12,
            )

    def test_negative_hours_rejected(self):
        with pytest.raises(ValidationError):
            LaborDayRecord(
                project_id="proj-001", role="BE", month="04", year="2024", total_hours=-8
            )


class TestRoleRate:
    """Test role rate validation."""

    def test_legacy_field_name_accepted(self):
        rate = RoleRate(project_id="proj-001", role=" QA ", cost_per_manday="350")

        assert rate.role == "QA"
        assert rate.cost_per_labor_day == Decimal("350")

    def test_rate_must_be_positive(self):
        with pytest.raises(ValidationError):
            RoleRate(project_id="proj-001", role="QA", cost_per_labor_day=0)
