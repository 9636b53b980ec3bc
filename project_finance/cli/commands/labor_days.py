"""Labor-day commands: list records and bulk-import a timesheet CSV."""

from typing import Optional

import click

from project_finance.cli import context
from project_finance.cli.error_handlers import with_error_handling
from project_finance.cli.utils.formatters import (
    format_info,
    format_quantity,
    format_success,
    format_table,
    format_warning,
)
from project_finance.handlers import labor_days as labor_day_handlers


@click.group(name="labor-days")
def labor_days_group():
    """Inspect and import monthly labor-day records."""


@labor_days_group.command(name="list")
@click.argument("project_id")
@click.option("--month", default=None, help="Month 1-12")
@click.option("--year", default=None, help="Four-digit year")
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def list_labor_days(
    project_id: str, month: Optional[str], year: Optional[str], debug: bool
):
    """List labor-day records of PROJECT_ID ("all" for every project)."""
    with with_error_handling(debug):
        store = context.open_store()
        records = labor_day_handlers.list_labor_days(store, project_id, month, year)

        if not records:
            click.echo(format_info("No labor-day records found."))
            return

        rows = [
            [
                record.project_id,
                record.role,
                f"{record.year}-{record.month}",
                format_quantity(record.total_hours),
                format_quantity(record.labor_days),
            ]
            for record in sorted(records, key=lambda r: (r.year, r.month, r.role))
        ]
        click.echo(
            format_table(["Project", "Role", "Month", "Hours", "Labor-Days"], rows)
        )


@labor_days_group.command(name="import")
@click.argument("project_id")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--year", required=True, help="Year the timesheet covers")
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def import_labor_days(project_id: str, csv_file: str, year: str, debug: bool):
    """Upload CSV_FILE to the import webhook and store the returned rows.

    Rows are upserted by (project, role, month, year); rows missing Role,
    Month or TotalDuration are discarded.

    Example:
        project-finance labor-days import proj-001 timesheet.csv --year 2024
    """
    with with_error_handling(debug):
        store = context.open_store(admin=True)
        import_service = context.open_import_service()

        click.echo(format_info(f"Uploading {csv_file}..."))
        summary = labor_day_handlers.import_labor_days(
            store, import_service, csv_file, project_id, year
        )

        click.echo(
            format_success(
                f"Imported {summary.upserted} labor-day record(s) for {summary.year}"
            )
        )
        if summary.discarded:
            click.echo(
                format_warning(f"Discarded {summary.discarded} incomplete row(s)")
            )
