"""Spending summary command."""

from typing import Optional

import click

from project_finance.aggregators.portfolio_aggregator import PortfolioAggregator
from project_finance.aggregators.spending_aggregator import SpendingAggregator
from project_finance.cli import context
from project_finance.cli.error_handlers import with_error_handling
from project_finance.cli.utils.formatters import (
    format_info,
    format_money,
    format_percentage,
    format_table,
    format_warning,
)
from project_finance.stores.base import restricted


@click.command(name="spending-summary")
@click.option("--project", "project_id", default=None, help="Only this project")
@click.option(
    "--no-view",
    is_flag=True,
    help="Join the tables directly instead of reading the precomputed view",
)
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def spending_summary(project_id: Optional[str], no_view: bool, debug: bool):
    """Show total spend and burn rate per project.

    Spend is labor-days x role rate plus direct budget debits; burn rate is
    spend / budget.

    Example:
        project-finance spending-summary
        project-finance spending-summary --project proj-001
    """
    with with_error_handling(debug):
        store = restricted(context.open_store())
        label = context.currency_label()

        aggregator = SpendingAggregator(store, use_view=not no_view)
        summaries = aggregator.summarize(project_id)
        if not summaries:
            click.echo(format_info("No projects found."))
            return

        rows = [
            [
                summary.project_name,
                format_money(summary.manday_costs, label),
                format_money(summary.ledger_costs, label),
                format_money(summary.total_spent, label),
                format_percentage(summary.burn_rate),
            ]
            for summary in summaries
        ]
        click.echo(
            format_table(
                ["Project", "Labor Cost", "Direct Cost", "Total Spent", "Burn"], rows
            )
        )
        click.echo(format_info(f"Source: {aggregator.last_source}"))

        for summary in summaries:
            if summary.error:
                click.echo(
                    format_warning(
                        f"{summary.project_name}: could not load rows ({summary.error})"
                    )
                )

        if project_id is None:
            projects = store.list_projects()
            portfolio = PortfolioAggregator().summarize(projects, summaries)
            click.echo()
            click.echo(
                format_info(
                    f"Portfolio: {format_money(portfolio.total_spent, label)} of "
                    f"{format_money(portfolio.total_budget, label)} spent "
                    f"({portfolio.spend_percentage}%), "
                    f"average burn {format_percentage(portfolio.average_burn_rate)}"
                )
            )
            counts = ", ".join(
                f"{count} {status}" for status, count in portfolio.status_counts.items()
            )
            click.echo(format_info(f"Status: {counts}"))
