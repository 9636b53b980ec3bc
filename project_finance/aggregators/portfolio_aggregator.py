"""Portfolio-level totals across every project."""

import logging
from dataclasses import asdict, dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List

from project_finance.calculators.spending_calculator import SpendingSummary
from project_finance.models.project import Project, ProjectStatus

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass
class PortfolioSummary:
    """Headline figures for the whole portfolio.

    Attributes:
        project_count: Number of projects
        total_budget: Sum of project budgets
        total_spent: Sum of aggregated spend (not the stored spent field)
        average_burn_rate: Mean of per-project burn rates, 2 decimals
        total_labor_days_consumed: Sum of stored labor-days consumed
        spend_percentage: total_spent / total_budget x 100, 1 decimal (0 without budget)
        status_counts: Projects per status value
    """

    project_count: int
    total_budget: Decimal
    total_spent: Decimal
    average_burn_rate: Decimal
    total_labor_days_consumed: Decimal
    spend_percentage: Decimal
    status_counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class PortfolioAggregator:
    """Roll per-project records and spending summaries up to portfolio totals.

    Example:
        >>> projects = store.list_projects()
        >>> summaries = SpendingAggregator(store).summarize()
        >>> portfolio = PortfolioAggregator().summarize(projects, summaries)
        >>> portfolio.status_counts["active"]
        3
    """

    def summarize(
        self, projects: List[Project], summaries: List[SpendingSummary]
    ) -> PortfolioSummary:
        total_budget = sum((p.budget for p in projects), ZERO)
        total_spent = sum((s.total_spent for s in summaries), ZERO)
        total_labor_days = sum((p.labor_days_consumed for p in projects), ZERO)

        if summaries:
            average_burn_rate = sum((s.burn_rate for s in summaries), ZERO) / len(
                summaries
            )
        else:
            average_burn_rate = ZERO

        if total_budget > ZERO:
            spend_percentage = total_spent / total_budget * 100
        else:
            spend_percentage = ZERO

        status_counts = {status.value: 0 for status in ProjectStatus}
        for project in projects:
            status_counts[project.status.value] += 1

        logger.debug(
            f"Portfolio of {len(projects)} projects: budget={total_budget} "
            f"spent={total_spent}"
        )
        return PortfolioSummary(
            project_count=len(projects),
            total_budget=total_budget,
            total_spent=total_spent,
            average_burn_rate=average_burn_rate.quantize(
                Decimal("0.01"), rounding=ROUND_HALF_UP
            ),
            total_labor_days_consumed=total_labor_days,
            spend_percentage=spend_percentage.quantize(
                Decimal("0.1"), rounding=ROUND_HALF_UP
            ),
            status_counts=status_counts,
        )
