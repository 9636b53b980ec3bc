"""Resource usage command: annual labor-day matrix by role."""

from typing import Optional

import click

from project_finance.cli import context
from project_finance.cli.error_handlers import with_error_handling
from project_finance.cli.utils.formatters import (
    format_info,
    format_money,
    format_quantity,
    format_success,
    format_table,
)
from project_finance.handlers import spending as spending_handlers
from project_finance.models.labor_day import MONTH_LABELS


@click.command(name="resource-usage")
@click.argument("project_id")
@click.option("--year", required=True, help="Four-digit year")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Also write the table to this CSV file",
)
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def resource_usage(project_id: str, year: str, output: Optional[str], debug: bool):
    """Show labor-days per role and month for PROJECT_ID ("all" for every project).

    Example:
        project-finance resource-usage proj-001 --year 2024
        project-finance resource-usage all --year 2024 --output usage.csv
    """
    with with_error_handling(debug):
        store = context.open_store()
        label = context.currency_label()
        table = spending_handlers.resource_usage(store, project_id, year)

        if not table.rows:
            click.echo(format_info(f"No labor-day records for {table.year}."))
            return

        rows = []
        for row in [*table.rows, table.total]:
            rows.append(
                [
                    row.role,
                    *(format_quantity(value) for value in row.monthly_labor_days),
                    format_quantity(row.total_labor_days),
                    format_money(row.rate, label) if row.rate else "-",
                    format_money(row.total_cost, label),
                ]
            )
        headers = ["Role", *MONTH_LABELS, "Total", "Rate", "Cost"]
        click.echo(format_table(headers, rows))

        if output:
            table.to_dataframe().to_csv(output, index=False)
            click.echo(format_success(f"Wrote {output}"))
