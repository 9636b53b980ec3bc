"""Ledger entry data model.

Ledger entries are append-only credits and debits against either a
project's currency budget or its labor-day allocation.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import ConfigDict, Field, field_validator

from project_finance.models.base import BaseDataModel, new_id, to_decimal, utc_now


class EntryType(str, Enum):
    """Direction of a ledger movement."""

    CREDIT = "credit"
    DEBIT = "debit"

    @classmethod
    def parse(cls, value: Any) -> "EntryType":
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for entry_type in cls:
            if entry_type.value == normalized:
                return entry_type
        raise ValueError(f"Invalid entry type '{value}'. Must be credit or debit")


class EntryCategory(str, Enum):
    """What a ledger entry moves: currency budget or labor-days."""

    BUDGET = "budget"
    LABOR_DAYS = "labor_days"

    @classmethod
    def parse(cls, value: Any) -> "EntryCategory":
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        if normalized in ("mandays", "manday", "labor_day"):
            return cls.LABOR_DAYS
        for category in cls:
            if category.value == normalized:
                return category
        raise ValueError(
            f"Invalid entry category '{value}'. Must be budget or labor_days"
        )


class LedgerEntry(BaseDataModel):
    """A single immutable ledger transaction.

    Attributes:
        id: Unique entry identifier
        project_id: Owning project
        type: credit or debit
        category: budget (currency) or labor_days
        amount: Positive amount in currency units or labor-days
        notes: Optional free text
        created_at: Creation timestamp; listings are newest first

    Example:
        >>> entry = LedgerEntry(
        ...     project_id="proj-001", type="debit", category="budget", amount=20000
        ... )
        >>> entry.is_budget_debit
        True
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id, min_length=1)
    project_id: str = Field(..., min_length=1)
    type: EntryType
    category: EntryCategory
    amount: Decimal = Field(..., gt=0)
    notes: Optional[str] = None
    created_at: dt.datetime = Field(default_factory=utc_now)

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, v: Any) -> EntryType:
        return EntryType.parse(v)

    @field_validator("category", mode="before")
    @classmethod
    def parse_category(cls, v: Any) -> EntryCategory:
        return EntryCategory.parse(v)

    @field_validator("amount", mode="before")
    @classmethod
    def convert_amount(cls, v: Any) -> Decimal:
        return to_decimal(v)

    @field_validator("notes", mode="before")
    @classmethod
    def blank_notes_to_none(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @property
    def is_budget_debit(self) -> bool:
        """Whether this entry counts as direct currency spend."""
        return (
            self.type == EntryType.DEBIT and self.category == EntryCategory.BUDGET
        )
