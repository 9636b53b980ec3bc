"""Spending handlers: spend summaries, resource usage and portfolio totals."""

import logging
from typing import Any, Dict, List, Optional

from project_finance.aggregators.portfolio_aggregator import (
    PortfolioAggregator,
    PortfolioSummary,
)
from project_finance.aggregators.resource_usage_aggregator import (
    ResourceUsageAggregator,
    ResourceUsageTable,
)
from project_finance.aggregators.spending_aggregator import SpendingAggregator
from project_finance.calculators.spending_calculator import SpendingSummary
from project_finance.errors import ValidationError
from project_finance.handlers.validation import require_fields
from project_finance.models.labor_day import normalize_year
from project_finance.stores.base import ReadOnlyStore, restricted

logger = logging.getLogger(__name__)


def _year(value: Any) -> str:
    require_fields({"year": value}, "year")
    try:
        return normalize_year(value)
    except ValueError as e:
        raise ValidationError(str(e), field="year") from e


def spending_summary(
    store: ReadOnlyStore, project_id: Optional[str] = None, use_view: bool = True
) -> List[SpendingSummary]:
    """Per-project total spend and burn rate.

    Raises:
        NotFoundError: If project_id is given and does not exist
    """
    aggregator = SpendingAggregator(restricted(store), use_view=use_view)
    return aggregator.summarize(project_id)


def spending_summary_payload(
    store: ReadOnlyStore, project_id: Optional[str] = None
) -> List[Dict[str, Any]]:
    """Spending summary in the response shape: id, name, spend, burn rate."""
    return [
        {
            "project_id": summary.project_id,
            "project_name": summary.project_name,
            "total_spent": summary.total_spent,
            "burn_rate": summary.burn_rate,
        }
        for summary in spending_summary(store, project_id)
    ]


def resource_usage(
    store: ReadOnlyStore, project_id: str, year: Any
) -> ResourceUsageTable:
    """Annual per-role usage table for a project or "all".

    Raises:
        ValidationError: If project_id or year is missing or malformed
        NotFoundError: If the project does not exist
    """
    require_fields({"project_id": project_id}, "project_id")
    return ResourceUsageAggregator(restricted(store)).build_table(
        project_id, _year(year)
    )


def portfolio_summary(store: ReadOnlyStore) -> PortfolioSummary:
    """Portfolio totals over every project."""
    handle = restricted(store)
    projects = handle.list_projects()
    summaries = SpendingAggregator(handle).summarize()
    return PortfolioAggregator().summarize(projects, summaries)
