"""Project data model.

A project carries its budget and a set of denormalized financial totals
(spent, burn rate, labor-days allocated/consumed). Those totals are a
materialized view over the ledger and labor-day rows: they are only
accurate right after reconciliation, and the ``*_stale`` flags record
whether a write has happened since.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator, model_validator

from project_finance.models.base import BaseDataModel, new_id, to_decimal, utc_now


class ProjectStatus(str, Enum):
    """Lifecycle status of a project."""

    ACTIVE = "active"
    ON_HOLD = "on-hold"
    AT_RISK = "at-risk"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value: Any) -> "ProjectStatus":
        """Parse a status, accepting display forms like "On hold" or "AT_RISK".

        Raises:
            ValueError: If the value is not a known status
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("_", "-").replace(" ", "-")
        for status in cls:
            if status.value == normalized:
                return status
        valid = ", ".join(s.value for s in cls)
        raise ValueError(f"Invalid project status '{value}'. Must be one of: {valid}")

    @property
    def label(self) -> str:
        """Human readable label, e.g. 'On hold'."""
        return self.value.replace("-", " ").capitalize()


class Project(BaseDataModel):
    """Represents a tracked project.

    Attributes:
        id: Unique project identifier
        name: Project name
        status: Lifecycle status
        budget: Budget in currency units
        spent: Denormalized total spend (see module docstring)
        burn_rate: Denormalized spend / budget fraction
        labor_days_allocated: Labor-days credited to the project
        labor_days_consumed: Denormalized labor-days used
        department: Owning department
        start_date: Optional start date
        end_date: Optional end date, not before start_date
        description: Free text description
        created_at: Creation timestamp, used for ordering
        ledger_totals_stale: Ledger changed since the last ledger reconciliation
        labor_days_stale: Labor-days changed since the last labor-day reconciliation
        totals_reconciled_at: When any reconciliation last wrote totals

    Example:
        >>> project = Project(name="Website Redesign", budget=75000)
        >>> project.status
        <ProjectStatus.ACTIVE: 'active'>
        >>> project.budget
        Decimal('75000')
    """

    id: str = Field(default_factory=new_id, min_length=1)
    name: str = Field(..., min_length=1, description="Project name")
    status: ProjectStatus = ProjectStatus.ACTIVE
    budget: Decimal = Field(default=Decimal("0"), ge=0)
    spent: Decimal = Field(default=Decimal("0"), ge=0)
    burn_rate: Decimal = Field(default=Decimal("0"))
    labor_days_allocated: Decimal = Field(default=Decimal("0"), ge=0)
    labor_days_consumed: Decimal = Field(default=Decimal("0"), ge=0)
    department: str = ""
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    description: str = ""
    created_at: dt.datetime = Field(default_factory=utc_now)
    ledger_totals_stale: bool = False
    labor_days_stale: bool = False
    totals_reconciled_at: Optional[dt.datetime] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that the name is not empty or whitespace only."""
        if not v or not v.strip():
            raise ValueError("name cannot be empty or whitespace")
        return v.strip()

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, v: Any) -> ProjectStatus:
        return ProjectStatus.parse(v)

    @field_validator(
        "budget",
        "spent",
        "burn_rate",
        "labor_days_allocated",
        "labor_days_consumed",
        mode="before",
    )
    @classmethod
    def convert_to_decimal(cls, v: Any) -> Decimal:
        """Convert numeric values to Decimal; blank values count as zero."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return Decimal("0")
        return to_decimal(v)

    @field_validator("department", "description", mode="before")
    @classmethod
    def blank_to_empty(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def blank_date_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def validate_date_range(self) -> "Project":
        """Validate that the project does not end before it starts."""
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError(
                f"end_date ({self.end_date}) must not be before "
                f"start_date ({self.start_date})"
            )
        return self

    @property
    def totals_stale(self) -> bool:
        """Whether any stored total may be out of date."""
        return self.ledger_totals_stale or self.labor_days_stale
