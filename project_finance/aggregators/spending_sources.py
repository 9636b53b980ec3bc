"""Row sources for the spending aggregator.

A source decides where a project's raw cost rows come from. Both sources
yield the same CostInputs shape, so the aggregator runs one arithmetic path
regardless of which one is used:

- SpendingViewSource reads the store's precomputed per-project view.
- TableJoinSource joins role rates, labor-days and ledger entries itself.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional

from project_finance.calculators.spending_calculator import CostInputs
from project_finance.stores.base import ReadOnlyStore

logger = logging.getLogger(__name__)


@dataclass
class PendingProject:
    """A project whose cost rows are loaded on demand.

    Loading is deferred so a failure for one project can be isolated by the
    aggregator without affecting the others.

    Attributes:
        project_id: Project identifier
        project_name: Project name
        load: Callable returning the project's CostInputs; may raise StoreError
    """

    project_id: str
    project_name: str
    load: Callable[[], CostInputs]


class SpendingSource(ABC):
    """Supplies per-project cost rows in project creation order."""

    name = "abstract"

    def __init__(self, store: ReadOnlyStore):
        self.store = store

    @abstractmethod
    def pending_projects(
        self, project_id: Optional[str] = None
    ) -> List[PendingProject]:
        """List the projects to aggregate, optionally narrowed to one.

        Raises:
            ViewUnavailableError: If the source cannot serve rows at all
        """


class SpendingViewSource(SpendingSource):
    """Rows from the store's precomputed spending view."""

    name = "view"

    def pending_projects(
        self, project_id: Optional[str] = None
    ) -> List[PendingProject]:
        view = self.store.read_spending_view()
        logger.debug(f"Spending view returned {len(view)} project rows")
        return [
            PendingProject(
                project_id=row.project_id,
                project_name=row.project_name,
                load=(lambda row=row: row),
            )
            for row in view
            if project_id is None or row.project_id == project_id
        ]


class TableJoinSource(SpendingSource):
    """Rows joined from the role-rate, labor-day and ledger tables.

    Example:
        >>> source = TableJoinSource(store)
        >>> pending = source.pending_projects("proj-001")
        >>> pending[0].load().rate_rows
        [('BE', Decimal('500'))]
    """

    name = "table join"

    def pending_projects(
        self, project_id: Optional[str] = None
    ) -> List[PendingProject]:
        if project_id is not None:
            projects = [self.store.get_project(project_id)]
        else:
            projects = self.store.list_projects()

        return [
            PendingProject(
                project_id=project.id,
                project_name=project.name,
                load=(lambda project=project: self._load(project)),
            )
            for project in projects
        ]

    def _load(self, project) -> CostInputs:
        rates = self.store.list_role_rates(project.id)
        labor_days = self.store.list_labor_days(project_id=project.id)
        ledger = self.store.list_ledger_entries(project.id)

        return CostInputs(
            project_id=project.id,
            project_name=project.name,
            budget=project.budget,
            rate_rows=[(rate.role, rate.cost_per_labor_day) for rate in rates],
            labor_day_rows=[(record.role, record.labor_days) for record in labor_days],
            ledger_rows=[
                (entry.type.value, entry.category.value, entry.amount)
                for entry in ledger
            ],
        )
