"""Reconciliation of stored project totals with ledger and labor-day rows."""

from project_finance.reconciliation.project_reconciler import (
    ProjectReconciler,
    ReconciliationReport,
)

__all__ = ["ProjectReconciler", "ReconciliationReport"]
