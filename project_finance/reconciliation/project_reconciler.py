"""Reconciliation of a project's stored totals with its source rows.

A project's budget, spent and labor-day fields are denormalized copies of
what its ledger entries and labor-day records say. Reconciliation recomputes
them and overwrites the project in a single update. It runs on demand only.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict

from project_finance.calculators.ledger_calculator import (
    LedgerTotals,
    calculate_ledger_totals,
    sum_labor_days,
)
from project_finance.errors import FinanceTrackerError
from project_finance.models.base import utc_now
from project_finance.stores.base import AdminStore
from project_finance.utils.logging_utils import batch_context, project_context

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationReport:
    """Outcome of reconciling every project.

    Attributes:
        reconciled: Totals written, by project id
        failures: Error message, by project id
    """

    reconciled: Dict[str, LedgerTotals] = field(default_factory=dict)
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.failures


class ProjectReconciler:
    """Recompute and overwrite a project's denormalized totals.

    Both variants are idempotent: with no intervening writes, running one
    twice leaves the project's totals unchanged.

    Example:
        >>> reconciler = ProjectReconciler(store)
        >>> totals = reconciler.reconcile_with_ledger("proj-001")
        >>> totals.budget, totals.spent
        (Decimal('100000'), Decimal('20000'))
    """

    def __init__(self, store: AdminStore):
        self.store = store

    def reconcile_with_ledger(self, project_id: str) -> LedgerTotals:
        """Overwrite budget, spent and labor-day totals from the ledger.

        Args:
            project_id: Project to reconcile

        Returns:
            The totals that were written

        Raises:
            NotFoundError: If the project does not exist
            StoreError: If reading the ledger or updating the project fails
        """
        with project_context(project_id, "reconcile_ledger"):
            self.store.get_project(project_id)
            totals = calculate_ledger_totals(self.store.list_ledger_entries(project_id))

            self.store.update_project(
                project_id,
                {
                    "budget": totals.budget,
                    "spent": totals.spent,
                    "labor_days_allocated": totals.labor_days_allocated,
                    "labor_days_consumed": totals.labor_days_consumed,
                    "ledger_totals_stale": False,
                    "totals_reconciled_at": utc_now(),
                },
            )
            logger.info(
                f"Reconciled project {project_id} with ledger: "
                f"budget={totals.budget} spent={totals.spent} "
                f"allocated={totals.labor_days_allocated} "
                f"consumed={totals.labor_days_consumed}"
            )
            return totals

    def reconcile_labor_days(self, project_id: str) -> Decimal:
        """Overwrite labor_days_consumed with the sum of labor-day records.

        Raises:
            NotFoundError: If the project does not exist
            StoreError: If reading records or updating the project fails
        """
        with project_context(project_id, "reconcile_labor_days"):
            self.store.get_project(project_id)
            total = sum_labor_days(self.store.list_labor_days(project_id=project_id))

            self.store.update_project(
                project_id,
                {
                    "labor_days_consumed": total,
                    "labor_days_stale": False,
                    "totals_reconciled_at": utc_now(),
                },
            )
            logger.info(f"Reconciled project {project_id} labor-days: {total}")
            return total

    def reconcile_all(self) -> ReconciliationReport:
        """Reconcile every project with its ledger, collecting failures."""
        report = ReconciliationReport()
        with batch_context("reconcile_all"):
            for project in self.store.list_projects():
                try:
                    totals = self.reconcile_with_ledger(project.id)
                    report.reconciled[project.id] = totals
                except FinanceTrackerError as e:
                    logger.error(f"Failed to reconcile project {project.id}: {e}")
                    report.failures[project.id] = str(e)

            logger.info(
                f"Reconciled {len(report.reconciled)} projects, "
                f"{len(report.failures)} failed"
            )
        return report
