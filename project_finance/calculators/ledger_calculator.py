"""Ledger and labor-day totals used by reconciliation."""

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable

from project_finance.models.labor_day import LaborDayRecord
from project_finance.models.ledger import EntryCategory, EntryType, LedgerEntry


@dataclass
class LedgerTotals:
    """Project totals derived from its ledger.

    Attributes:
        budget: Sum of budget credits
        spent: Sum of budget debits
        labor_days_allocated: Sum of labor-day credits
        labor_days_consumed: Sum of labor-day debits
    """

    budget: Decimal = Decimal("0")
    spent: Decimal = Decimal("0")
    labor_days_allocated: Decimal = Decimal("0")
    labor_days_consumed: Decimal = Decimal("0")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# (type, category) -> LedgerTotals field
_BUCKETS = {
    (EntryType.CREDIT, EntryCategory.BUDGET): "budget",
    (EntryType.DEBIT, EntryCategory.BUDGET): "spent",
    (EntryType.CREDIT, EntryCategory.LABOR_DAYS): "labor_days_allocated",
    (EntryType.DEBIT, EntryCategory.LABOR_DAYS): "labor_days_consumed",
}


def calculate_ledger_totals(entries: Iterable[LedgerEntry]) -> LedgerTotals:
    """Split ledger amounts into the four project total buckets.

    Example:
        >>> totals = calculate_ledger_totals([
        ...     LedgerEntry(project_id="p", type="credit", category="budget", amount=100000),
        ...     LedgerEntry(project_id="p", type="debit", category="budget", amount=20000),
        ...     LedgerEntry(project_id="p", type="credit", category="labor_days", amount=120),
        ... ])
        >>> (totals.budget, totals.spent, totals.labor_days_allocated)
        (Decimal('100000'), Decimal('20000'), Decimal('120'))
    """
    totals = LedgerTotals()
    for entry in entries:
        bucket = _BUCKETS[(entry.type, entry.category)]
        setattr(totals, bucket, getattr(totals, bucket) + entry.amount)
    return totals


def sum_labor_days(records: Iterable[LaborDayRecord]) -> Decimal:
    """Total labor-days across labor-day records."""
    return sum((record.labor_days for record in records), Decimal("0"))
