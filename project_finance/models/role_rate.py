"""Role rate data model.

A role rate prices one labor-day of a given role on a given project. Rates
are expected to be unique per (project, role) but nothing enforces it;
lookups keep the last rate seen for a role.
"""

from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from project_finance.models.base import BaseDataModel, new_id, to_decimal


class RoleRate(BaseDataModel):
    """Cost of one labor-day of a role on a project.

    Attributes:
        id: Unique rate identifier
        project_id: Owning project
        role: Free-text role label (e.g. "BE", "QA")
        cost_per_labor_day: Positive currency cost per labor-day

    Example:
        >>> rate = RoleRate(project_id="proj-001", role="BE", cost_per_labor_day=500)
        >>> rate.cost_per_labor_day
        Decimal('500')
    """

    id: str = Field(default_factory=new_id, min_length=1)
    project_id: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    cost_per_labor_day: Decimal = Field(
        ...,
        gt=0,
        validation_alias=AliasChoices("cost_per_labor_day", "cost_per_manday"),
    )

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("role cannot be empty or whitespace")
        return v.strip()

    @field_validator("cost_per_labor_day", mode="before")
    @classmethod
    def convert_rate(cls, v: Any) -> Decimal:
        return to_decimal(v)
