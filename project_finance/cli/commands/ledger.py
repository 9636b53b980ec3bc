"""Ledger commands: list and add ledger entries."""

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
from project_finance.handlers import ledger as ledger_handlers
from project_finance.models.ledger import EntryCategory


@click.group(name="ledger")
def ledger_group():
    """Record and inspect ledger transactions."""


@ledger_group.command(name="list")
@click.argument("project_id")
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def list_entries(project_id: str, debug: bool):
    """List a project's ledger entries, newest first."""
    with with_error_handling(debug):
        store = context.open_store()
        label = context.currency_label()
        entries = ledger_handlers.list_entries(store, project_id)

        if not entries:
            click.echo(format_info("No ledger entries for this project."))
            return

        rows = []
        for entry in entries:
            if entry.category == EntryCategory.BUDGET:
                amount = format_money(entry.amount, label)
            else:
                amount = f"{format_quantity(entry.amount)} labor-days"
            rows.append(
                [
                    entry.created_at.strftime("%Y-%m-%d %H:%M"),
                    entry.type.value,
                    entry.category.value,
                    amount,
                    entry.notes or "",
                ]
            )

        click.echo(format_table(["Date", "Type", "Category", "Amount", "Notes"], rows))
        click.echo()
        click.echo(format_success(f"Found {len(entries)} entr(ies)"))


@ledger_group.command(name="add")
@click.argument("project_id")
@click.option(
    "--type",
    "entry_type",
    type=click.Choice(["credit", "debit"], case_sensitive=False),
    required=True,
)
@click.option(
    "--category",
    type=click.Choice(["budget", "labor_days"], case_sensitive=False),
    required=True,
)
@click.option("--amount", type=str, required=True, help="Positive amount")
@click.option("--notes", default=None, help="Optional note")
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def add_entry(
    project_id: str,
    entry_type: str,
    category: str,
    amount: str,
    notes: Optional[str],
    debug: bool,
):
    """Append a credit or debit to a project's ledger.

    Example:
        project-finance ledger add proj-001 --type debit --category budget --amount 20000
    """
    with with_error_handling(debug):
        store = context.open_store(admin=True)
        entry = ledger_handlers.add_entry(
            store,
            {
                "project_id": project_id,
                "type": entry_type,
                "category": category,
                "amount": amount,
                "notes": notes,
            },
        )
        click.echo(
            format_success(
                f"Recorded {entry.type.value} of {entry.amount} "
                f"({entry.category.value})"
            )
        )
        click.echo(
            format_info(
                "Project totals are now stale; "
                f"run 'project-finance reconcile {project_id}' to refresh them"
            )
        )
