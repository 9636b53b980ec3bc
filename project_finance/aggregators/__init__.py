"""Aggregators module for spending, resource usage and portfolio views.

This module provides functionality to aggregate project cost rows, monthly
labor-day records and per-project summaries.
"""

from project_finance.aggregators.portfolio_aggregator import (
    PortfolioAggregator,
    PortfolioSummary,
)
from project_finance.aggregators.resource_usage_aggregator import (
    ResourceUsageAggregator,
    ResourceUsageRow,
    ResourceUsageTable,
)
from project_finance.aggregators.spending_aggregator import SpendingAggregator
from project_finance.aggregators.spending_sources import (
    PendingProject,
    SpendingSource,
    SpendingViewSource,
    TableJoinSource,
)

__all__ = [
    "PendingProject",
    "PortfolioAggregator",
    "PortfolioSummary",
    "ResourceUsageAggregator",
    "ResourceUsageRow",
    "ResourceUsageTable",
    "SpendingAggregator",
    "SpendingSource",
    "SpendingViewSource",
    "TableJoinSource",
]
