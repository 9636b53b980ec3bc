"""Project commands: list, show, create and delete projects."""

from typing import Optional

import click

from project_finance.cli import context
from project_finance.cli.error_handlers import with_error_handling
from project_finance.cli.utils.formatters import (
    format_info,
    format_money,
    format_percentage,
    format_quantity,
    format_success,
    format_table,
    format_warning,
)
from project_finance.handlers import projects as project_handlers

STATUS_CHOICES = ["active", "on-hold", "at-risk", "completed"]


@click.group(name="projects")
def projects_group():
    """Manage projects."""


@projects_group.command(name="list")
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def list_projects(debug: bool):
    """List projects in creation order.

    Stored totals that changed since the last reconciliation are marked
    with an asterisk.

    Example:
        project-finance projects list
    """
    with with_error_handling(debug):
        store = context.open_store()
        label = context.currency_label()
        projects = project_handlers.list_projects(store)

        if not projects:
            click.echo(format_info("No projects found."))
            return

        headers = ["ID", "Name", "Status", "Budget", "Spent", "Burn", "Labor-Days"]
        rows = []
        for project in projects:
            stale = "*" if project.totals_stale else ""
            rows.append(
                [
                    project.id,
                    project.name,
                    project.status.label,
                    format_money(project.budget, label),
                    format_money(project.spent, label) + stale,
                    format_percentage(project.burn_rate),
                    f"{format_quantity(project.labor_days_consumed)}"
                    f"/{format_quantity(project.labor_days_allocated)}{stale}",
                ]
            )

        click.echo(format_table(headers, rows))
        click.echo()
        click.echo(format_success(f"Found {len(projects)} project(s)"))
        if any(project.totals_stale for project in projects):
            click.echo(
                format_warning(
                    "* totals changed since last reconciliation; "
                    "run 'project-finance reconcile --all'"
                )
            )


@projects_group.command(name="show")
@click.argument("project_id")
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def show_project(project_id: str, debug: bool):
    """Show one project's details."""
    with with_error_handling(debug):
        store = context.open_store()
        label = context.currency_label()
        project = project_handlers.get_project(store, project_id)

        details = [
            ["Name", project.name],
            ["Status", project.status.label],
            ["Department", project.department or "-"],
            ["Budget", format_money(project.budget, label)],
            ["Spent", format_money(project.spent, label)],
            ["Burn rate", format_percentage(project.burn_rate)],
            ["Labor-days allocated", format_quantity(project.labor_days_allocated)],
            ["Labor-days consumed", format_quantity(project.labor_days_consumed)],
            ["Start date", project.start_date or "-"],
            ["End date", project.end_date or "-"],
            ["Last reconciled", project.totals_reconciled_at or "never"],
        ]
        click.echo(format_table(["Field", "Value"], details))
        if project.description:
            click.echo()
            click.echo(project.description)
        if project.totals_stale:
            click.echo()
            click.echo(
                format_warning(
                    f"Totals are stale; run 'project-finance reconcile {project.id}'"
                )
            )


@projects_group.command(name="create")
@click.option("--name", required=True, help="Project name")
@click.option("--budget", type=str, default="0", help="Budget in currency units")
@click.option(
    "--status",
    type=click.Choice(STATUS_CHOICES, case_sensitive=False),
    default="active",
    show_default=True,
)
@click.option("--department", default="", help="Owning department")
@click.option("--description", default="", help="Free text description")
@click.option("--start-date", default=None, help="Start date (YYYY-MM-DD)")
@click.option("--end-date", default=None, help="End date (YYYY-MM-DD)")
@click.option(
    "--labor-days-allocated", type=str, default="0", help="Labor-days allocated"
)
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def create_project(
    name: str,
    budget: str,
    status: str,
    department: str,
    description: str,
    start_date: Optional[str],
    end_date: Optional[str],
    labor_days_allocated: str,
    debug: bool,
):
    """Create a project.

    Example:
        project-finance projects create --name "ERP Upgrade" --budget 250000
    """
    with with_error_handling(debug):
        store = context.open_store(admin=True)
        project = project_handlers.create_project(
            store,
            {
                "name": name,
                "budget": budget,
                "status": status,
                "department": department,
                "description": description,
                "start_date": start_date,
                "end_date": end_date,
                "labor_days_allocated": labor_days_allocated,
            },
        )
        click.echo(format_success(f"Created project '{project.name}' ({project.id})"))


@projects_group.command(name="delete")
@click.argument("project_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def delete_project(project_id: str, yes: bool, debug: bool):
    """Delete a project and its labor-day records."""
    with with_error_handling(debug):
        store = context.open_store(admin=True)
        project = project_handlers.get_project(store, project_id)
        if not yes:
            click.confirm(
                f"Delete project '{project.name}' and its labor-day records?",
                abort=True,
            )
        project_handlers.delete_project(store, project_id)
        click.echo(format_success(f"Deleted project '{project.name}'"))
