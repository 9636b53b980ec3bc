"""Role rate commands: list, add, update and delete role rates."""

from typing import Optional

import click

from project_finance.cli import context
from project_finance.cli.error_handlers import with_error_handling
from project_finance.cli.utils.formatters import (
    format_info,
    format_money,
    format_success,
    format_table,
)
from project_finance.handlers import role_rates as rate_handlers


@click.group(name="rates")
def rates_group():
    """Manage cost per labor-day by role."""


@rates_group.command(name="list")
@click.option("--project", "project_id", default=None, help="Only this project's rates")
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def list_rates(project_id: Optional[str], debug: bool):
    """List role rates ordered by role."""
    with with_error_handling(debug):
        store = context.open_store()
        label = context.currency_label()
        if project_id:
            store.get_project(project_id)
        rates = rate_handlers.list_rates(store, project_id)

        if not rates:
            click.echo(format_info("No role rates found."))
            return

        rows = [
            [
                rate.id,
                rate.project_id,
                rate.role,
                format_money(rate.cost_per_labor_day, label),
            ]
            for rate in rates
        ]
        click.echo(format_table(["ID", "Project", "Role", "Cost / Labor-Day"], rows))


@rates_group.command(name="add")
@click.argument("project_id")
@click.argument("role")
@click.argument("cost")
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def add_rate(project_id: str, role: str, cost: str, debug: bool):
    """Add a rate: COST per labor-day of ROLE on PROJECT_ID.

    Example:
        project-finance rates add proj-001 BE 500
    """
    with with_error_handling(debug):
        store = context.open_store(admin=True)
        rate = rate_handlers.add_rate(
            store,
            {"project_id": project_id, "role": role, "cost_per_labor_day": cost},
        )
        click.echo(format_success(f"Added rate for {rate.role} ({rate.id})"))


@rates_group.command(name="update")
@click.argument("rate_id")
@click.option("--role", default=None, help="New role label")
@click.option("--cost", default=None, help="New cost per labor-day")
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def update_rate(rate_id: str, role: Optional[str], cost: Optional[str], debug: bool):
    """Change a rate's role and/or cost."""
    with with_error_handling(debug):
        store = context.open_store(admin=True)
        payload = {}
        if role is not None:
            payload["role"] = role
        if cost is not None:
            payload["cost_per_labor_day"] = cost
        rate = rate_handlers.update_rate(store, rate_id, payload)
        click.echo(
            format_success(
                f"Updated rate {rate.id}: {rate.role} at {rate.cost_per_labor_day}"
            )
        )


@rates_group.command(name="delete")
@click.argument("rate_id")
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def delete_rate(rate_id: str, debug: bool):
    """Delete a role rate."""
    with with_error_handling(debug):
        store = context.open_store(admin=True)
        rate_handlers.delete_rate(store, rate_id)
        click.echo(format_success(f"Deleted rate {rate_id}"))
