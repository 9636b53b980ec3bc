"""Labor-day record data model.

One record holds the hours a role spent on a project in a given month.
Labor-days are always derived from hours at write time
(``labor_days = total_hours / 8``); a record that supplies a labor-day
figure disagreeing with its hours is rejected.
"""

import datetime as dt
from decimal import Decimal
from typing import Any

from pydantic import Field, field_validator, model_validator

from project_finance.models.base import BaseDataModel, new_id, to_decimal, utc_now

HOURS_PER_LABOR_DAY = Decimal("8")

MONTH_LABELS = [
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
]

MONTHS = [f"{number:02d}" for number in range(1, 13)]


def hours_to_labor_days(total_hours: Any) -> Decimal:
    """Convert worked hours to labor-days (8 hours = 1 labor-day).

    Example:
        >>> hours_to_labor_days("23.38")
        Decimal('2.9225')
    """
    return to_decimal(total_hours) / HOURS_PER_LABOR_DAY


def normalize_month(value: Any) -> str:
    """Normalize a month to its two-digit form ("4" -> "04").

    Raises:
        ValueError: If the value is not a month number between 1 and 12
    """
    text = str(value).strip()
    # Spreadsheet cells can hand back 4.0 for "04"
    if text.endswith(".0"):
        text = text[:-2]
    if not text.isdigit() or not 1 <= int(text) <= 12:
        raise ValueError(f"Invalid month '{value}'. Must be 01-12")
    return f"{int(text):02d}"


def normalize_year(value: Any) -> str:
    """Normalize a year to its four-digit string form.

    Raises:
        ValueError: If the value is not a four-digit year
    """
    text = str(value).strip()
    if text.endswith(".0"):
        text = text[:-2]
    if len(text) != 4 or not text.isdigit():
        raise ValueError(f"Invalid year '{value}'. Must be a 4-digit year")
    return text


class LaborDayRecord(BaseDataModel):
    """Labor-days consumed by one role on one project in one month.

    Attributes:
        id: Unique record identifier
        project_id: Owning project
        role: Role label, matched against RoleRate.role
        month: Two-digit month "01".."12"
        year: Four-digit year
        total_hours: Hours worked
        labor_days: total_hours / 8, derived when not supplied
        created_at: Creation timestamp

    Example:
        >>> record = LaborDayRecord(
        ...     project_id="proj-001", role="BE", month="4", year="2024", total_hours=80
        ... )
        >>> (record.month, record.labor_days)
        ('04', Decimal('10'))
    """

    id: str = Field(default_factory=new_id, min_length=1)
    project_id: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    month: str
    year: str
    total_hours: Decimal = Field(..., ge=0)
    labor_days: Decimal = Field(..., ge=0)
    created_at: dt.datetime = Field(default_factory=utc_now)

    @model_validator(mode="before")
    @classmethod
    def derive_labor_days(cls, data: Any) -> Any:
        """Fill labor_days from total_hours, rejecting inconsistent input."""
        if not isinstance(data, dict):
            return data
        hours = data.get("total_hours")
        if hours is None or (isinstance(hours, str) and not hours.strip()):
            return data
        try:
            derived = hours_to_labor_days(hours)
        except ValueError:
            # Let the field validator report the bad hours value
            return data

        supplied = data.get("labor_days")
        if supplied is None or (isinstance(supplied, str) and not supplied.strip()):
            return {**data, "labor_days": derived}

        if to_decimal(supplied) != derived:
            raise ValueError(
                f"labor_days ({supplied}) does not match total_hours / "
                f"{HOURS_PER_LABOR_DAY} ({derived})"
            )
        return data

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("role cannot be empty or whitespace")
        return v.strip()

    @field_validator("month", mode="before")
    @classmethod
    def parse_month(cls, v: Any) -> str:
        return normalize_month(v)

    @field_validator("year", mode="before")
    @classmethod
    def parse_year(cls, v: Any) -> str:
        return normalize_year(v)

    @field_validator("total_hours", "labor_days", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Any) -> Decimal:
        return to_decimal(v)

    @property
    def upsert_key(self) -> tuple:
        """Identity used by bulk import: (project_id, role, month, year)."""
        return (self.project_id, self.role, self.month, self.year)
