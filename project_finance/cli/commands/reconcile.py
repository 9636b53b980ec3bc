"""Reconcile command: refresh stored project totals."""

from typing import Optional

import click

from project_finance.cli import context
from project_finance.cli.error_handlers import with_error_handling
from project_finance.cli.utils.formatters import (
    format_error,
    format_money,
    format_quantity,
    format_success,
)
from project_finance.errors import ValidationError
from project_finance.reconciliation.project_reconciler import ProjectReconciler


@click.command(name="reconcile")
@click.argument("project_id", required=False)
@click.option(
    "--labor-days",
    "labor_days",
    is_flag=True,
    help="Recompute labor-days consumed from labor-day records instead of the ledger",
)
@click.option("--all", "all_projects", is_flag=True, help="Reconcile every project")
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def reconcile(
    project_id: Optional[str], labor_days: bool, all_projects: bool, debug: bool
):
    """Recompute a project's stored totals and overwrite them.

    By default budget, spent and labor-day totals are rebuilt from the
    ledger. With --labor-days only labor-days consumed is rebuilt, from the
    monthly labor-day records.

    Example:
        project-finance reconcile proj-001
        project-finance reconcile proj-001 --labor-days
        project-finance reconcile --all
    """
    with with_error_handling(debug):
        if all_projects == bool(project_id):
            raise ValidationError(
                "Pass either a PROJECT_ID or --all",
                recovery_hint="Example: project-finance reconcile --all",
            )
        if all_projects and labor_days:
            raise ValidationError("--labor-days reconciles one project at a time")

        reconciler = ProjectReconciler(context.open_store(admin=True))
        label = context.currency_label()

        if all_projects:
            report = reconciler.reconcile_all()
            click.echo(
                format_success(f"Reconciled {len(report.reconciled)} project(s)")
            )
            for failed_id, message in report.failures.items():
                click.echo(format_error(f"{failed_id}: {message}"))
            if not report.success:
                raise click.exceptions.Exit(1)
            return

        if labor_days:
            total = reconciler.reconcile_labor_days(project_id)
            click.echo(
                format_success(f"Labor-days consumed set to {format_quantity(total)}")
            )
            return

        totals = reconciler.reconcile_with_ledger(project_id)
        click.echo(
            format_success(
                f"Budget {format_money(totals.budget, label)}, "
                f"spent {format_money(totals.spent, label)}, "
                f"labor-days {format_quantity(totals.labor_days_consumed)}"
                f"/{format_quantity(totals.labor_days_allocated)}"
            )
        )
