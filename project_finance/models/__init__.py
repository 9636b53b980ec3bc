"""Data models for the project finance tracker.

This package contains Pydantic models for all business entities:
- BaseDataModel: Base class with common configuration
- Project / ProjectStatus: Project record with denormalized totals
- LedgerEntry / EntryType / EntryCategory: Append-only ledger transactions
- RoleRate: Cost of one labor-day per role and project
- LaborDayRecord: Monthly labor-day consumption per role and project
"""

from project_finance.models.base import BaseDataModel
from project_finance.models.labor_day import (
    HOURS_PER_LABOR_DAY,
    LaborDayRecord,
    hours_to_labor_days,
)
from project_finance.models.ledger import EntryCategory, EntryType, LedgerEntry
from project_finance.models.project import Project, ProjectStatus
from project_finance.models.role_rate import RoleRate

__all__ = [
    "BaseDataModel",
    "EntryCategory",
    "EntryType",
    "HOURS_PER_LABOR_DAY",
    "LaborDayRecord",
    "LedgerEntry",
    "Project",
    "ProjectStatus",
    "RoleRate",
    "hours_to_labor_days",
]
