"""CLI commands."""

from project_finance.cli.commands.health import health
from project_finance.cli.commands.labor_days import labor_days_group
from project_finance.cli.commands.ledger import ledger_group
from project_finance.cli.commands.projects import projects_group
from project_finance.cli.commands.rates import rates_group
from project_finance.cli.commands.reconcile import reconcile
from project_finance.cli.commands.resource_usage import resource_usage
from project_finance.cli.commands.spending import spending_summary

__all__ = [
    "health",
    "labor_days_group",
    "ledger_group",
    "projects_group",
    "rates_group",
    "reconcile",
    "resource_usage",
    "spending_summary",
]
