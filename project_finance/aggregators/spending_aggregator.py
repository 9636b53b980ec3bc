"""Spending aggregator producing per-project spend and burn rate.

This module combines rate x labor-day costs with direct ledger debits into
one total spend and burn-rate figure per project. Rows come from the
precomputed view when the store has one, otherwise from a table join; both
feed the same calculation, rounding and per-project error isolation.
"""

import logging
from typing import List, Optional

from project_finance.aggregators.spending_sources import (
    PendingProject,
    SpendingSource,
    SpendingViewSource,
    TableJoinSource,
)
from project_finance.calculators.spending_calculator import (
    SpendingSummary,
    calculate_spending,
)
from project_finance.errors import StoreError, ViewUnavailableError
from project_finance.stores.base import ReadOnlyStore

logger = logging.getLogger(__name__)


class SpendingAggregator:
    """Summarizes spending for one project or every project.

    The aggregator:
    1. Asks the primary source (the precomputed view) for pending projects
    2. Falls back to the table join when the view is unavailable
    3. Loads each project's rows and runs the spending calculation
    4. Reports a project whose rows fail to load with zeros and moves on

    Attributes:
        store: Read-only store handle
        primary_source: Preferred row source (None to always join)
        fallback_source: Source used when the primary is unavailable
        last_source: Name of the source that served the latest summarize()

    Example:
        >>> aggregator = SpendingAggregator(restricted(store))
        >>> summaries = aggregator.summarize()
        >>> summaries[0].total_spent, summaries[0].burn_rate
        (Decimal('25000'), Decimal('0.2500'))
    """

    def __init__(
        self,
        store: ReadOnlyStore,
        use_view: bool = True,
        primary_source: Optional[SpendingSource] = None,
        fallback_source: Optional[SpendingSource] = None,
    ):
        """Initialize the spending aggregator.

        Args:
            store: Store handle; read access is all that is needed
            use_view: Try the precomputed view before joining tables
            primary_source: Override for the preferred source
            fallback_source: Override for the fallback source
        """
        self.store = store
        if primary_source is None and use_view:
            primary_source = SpendingViewSource(store)
        self.primary_source = primary_source
        self.fallback_source = fallback_source or TableJoinSource(store)
        self.last_source: Optional[str] = None

    def summarize(self, project_id: Optional[str] = None) -> List[SpendingSummary]:
        """Summarize spending in project creation order.

        Args:
            project_id: Restrict the summary to one project

        Returns:
            One SpendingSummary per project

        Raises:
            NotFoundError: If project_id is given and does not exist
        """
        if project_id is not None:
            self.store.get_project(project_id)

        pending = self._pending_projects(project_id)
        summaries = [self._summarize_project(project) for project in pending]

        failed = sum(1 for summary in summaries if summary.error)
        logger.info(
            f"Summarized spending for {len(summaries)} projects "
            f"via {self.last_source} ({failed} failed)"
        )
        return summaries

    def _pending_projects(self, project_id: Optional[str]) -> List[PendingProject]:
        if self.primary_source is not None:
            try:
                pending = self.primary_source.pending_projects(project_id)
                self.last_source = self.primary_source.name
                return pending
            except ViewUnavailableError as e:
                logger.warning(
                    f"Spending {self.primary_source.name} unavailable, "
                    f"falling back to {self.fallback_source.name}: {e}"
                )

        pending = self.fallback_source.pending_projects(project_id)
        self.last_source = self.fallback_source.name
        return pending

    def _summarize_project(self, project: PendingProject) -> SpendingSummary:
        try:
            inputs = project.load()
        except StoreError as e:
            logger.error(
                f"Failed to load spending rows for project {project.project_id}: {e}"
            )
            return SpendingSummary.failed(
                project.project_id, project.project_name, str(e)
            )
        except Exception as e:
            logger.exception(
                f"Unexpected error loading spending rows for project "
                f"{project.project_id}: {e}"
            )
            return SpendingSummary.failed(
                project.project_id, project.project_name, str(e)
            )

        result = calculate_spending(inputs)
        logger.debug(
            f"Project {project.project_id}: manday={result.manday_costs} "
            f"ledger={result.ledger_costs} total={result.total_spent}"
        )
        return SpendingSummary.from_result(
            project.project_id, project.project_name, result
        )
