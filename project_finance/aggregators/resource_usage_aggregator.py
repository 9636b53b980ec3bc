"""Resource usage aggregation over monthly labor-day records.

Builds the annual per-role usage table (twelve monthly labor-day totals,
yearly total, unit rate and cost) plus the two smaller views used by the
dashboard: labor-days per month and labor-days per role.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List

import pandas as pd

from project_finance.models.labor_day import MONTH_LABELS, MONTHS, normalize_month
from project_finance.stores.base import ReadOnlyStore
from project_finance.utils.logging_utils import log_calls

logger = logging.getLogger(__name__)

ALL_PROJECTS = "all"
TOTAL_ROW_LABEL = "TOTAL"
ZERO = Decimal("0")


def _zero_months() -> List[Decimal]:
    return [ZERO] * len(MONTHS)


@dataclass
class ResourceUsageRow:
    """One role's labor-day usage over a year.

    Attributes:
        role: Role label (or TOTAL for the summary row)
        monthly_labor_days: Twelve monthly totals, January first
        total_labor_days: Sum of the monthly totals
        rate: Cost per labor-day (0 when unset, and on the TOTAL row)
        total_cost: total_labor_days x rate
    """

    role: str
    monthly_labor_days: List[Decimal] = field(default_factory=_zero_months)
    total_labor_days: Decimal = ZERO
    rate: Decimal = ZERO
    total_cost: Decimal = ZERO

    def to_dict(self) -> Dict[str, Any]:
        row: Dict[str, Any] = {"Role": self.role}
        row.update(zip(MONTH_LABELS, self.monthly_labor_days))
        row["Total Labor-Days"] = self.total_labor_days
        row["Rate"] = self.rate
        row["Total Cost"] = self.total_cost
        return row


@dataclass
class ResourceUsageTable:
    """Annual resource usage for a project (or every project).

    Attributes:
        project_id: Project identifier or "all"
        year: Four-digit year
        rows: One row per role, sorted by role
        total: Synthetic TOTAL row summing every column
    """

    project_id: str
    year: str
    rows: List[ResourceUsageRow]
    total: ResourceUsageRow

    def to_dataframe(self) -> pd.DataFrame:
        """Render the table, TOTAL row last.

        Example:
            >>> table.to_dataframe().columns.tolist()[:3]
            ['Role', 'Jan', 'Feb']
        """
        records = [row.to_dict() for row in self.rows]
        records.append(self.total.to_dict())
        columns = ["Role", *MONTH_LABELS, "Total Labor-Days", "Rate", "Total Cost"]
        return pd.DataFrame(records, columns=columns)


class ResourceUsageAggregator:
    """Aggregates labor-day records into resource usage views.

    Example:
        >>> aggregator = ResourceUsageAggregator(restricted(store))
        >>> table = aggregator.build_table("proj-001", "2024")
        >>> [row.role for row in table.rows]
        ['BE', 'QA']
    """

    def __init__(self, store: ReadOnlyStore):
        self.store = store

    @log_calls()
    def build_table(self, project_id: str, year: str) -> ResourceUsageTable:
        """Build the annual per-role usage table.

        Args:
            project_id: Project identifier, or "all" to cover every project
            year: Year to report on

        Returns:
            ResourceUsageTable with one row per role and a TOTAL row

        Raises:
            NotFoundError: If project_id names a project that does not exist
        """
        scope = self._scope(project_id)
        records = self.store.list_labor_days(project_id=scope, year=str(year))
        rates = self._rates_by_role(scope)

        monthly: Dict[str, List[Decimal]] = defaultdict(_zero_months)
        for record in records:
            monthly[record.role][MONTHS.index(record.month)] += record.labor_days

        rows = []
        for role in sorted(monthly):
            months = monthly[role]
            total_labor_days = sum(months, ZERO)
            rate = rates.get(role, ZERO)
            rows.append(
                ResourceUsageRow(
                    role=role,
                    monthly_labor_days=months,
                    total_labor_days=total_labor_days,
                    rate=rate,
                    total_cost=total_labor_days * rate,
                )
            )

        logger.info(
            f"Built resource usage table for {project_id}/{year}: {len(rows)} roles"
        )
        return ResourceUsageTable(
            project_id=project_id,
            year=str(year),
            rows=rows,
            total=self._total_row(rows),
        )

    def monthly_usage(self, project_id: str, year: str) -> List[Dict[str, Any]]:
        """Labor-days per calendar month, Jan through Dec.

        Example:
            >>> aggregator.monthly_usage("proj-001", "2024")[3]
            {'month': 'Apr', 'labor_days': Decimal('10')}
        """
        scope = self._scope(project_id)
        totals = _zero_months()
        for record in self.store.list_labor_days(project_id=scope, year=str(year)):
            totals[MONTHS.index(record.month)] += record.labor_days

        return [
            {"month": label, "labor_days": total}
            for label, total in zip(MONTH_LABELS, totals)
        ]

    def role_breakdown(
        self, project_id: str, month: Any, year: str
    ) -> List[Dict[str, Any]]:
        """Labor-days per role for one month, largest first."""
        scope = self._scope(project_id)
        totals: Dict[str, Decimal] = defaultdict(lambda: ZERO)
        for record in self.store.list_labor_days(
            project_id=scope, month=normalize_month(month), year=str(year)
        ):
            totals[record.role] += record.labor_days

        breakdown = [
            {"role": role, "labor_days": labor_days}
            for role, labor_days in totals.items()
        ]
        return sorted(breakdown, key=lambda item: item["labor_days"], reverse=True)

    def _scope(self, project_id: str):
        """Store filter for a project id; None means every project."""
        if project_id == ALL_PROJECTS:
            return None
        self.store.get_project(project_id)
        return project_id

    def _rates_by_role(self, scope) -> Dict[str, Decimal]:
        """First rate found per role within the scope."""
        rates: Dict[str, Decimal] = {}
        for rate in self.store.list_role_rates(scope):
            rates.setdefault(rate.role, rate.cost_per_labor_day)
        return rates

    @staticmethod
    def _total_row(rows: List[ResourceUsageRow]) -> ResourceUsageRow:
        total = ResourceUsageRow(role=TOTAL_ROW_LABEL)
        for row in rows:
            total.monthly_labor_days = [
                a + b for a, b in zip(total.monthly_labor_days, row.monthly_labor_days)
            ]
            total.total_labor_days += row.total_labor_days
            total.total_cost += row.total_cost
        return total
