"""Health command: check the store connection and table access."""

import click

from project_finance.cli import context
from project_finance.cli.error_handlers import with_error_handling
from project_finance.cli.utils.formatters import (
    format_error,
    format_success,
    format_table,
)
from project_finance.handlers import health as health_handlers


@click.command(name="health")
@click.option("--debug", is_flag=True, help="Show full stack traces on error")
def health(debug: bool):
    """Check that the configured store is reachable and every table readable.

    Exits with status 1 when any check fails.
    """
    with with_error_handling(debug):
        store = context.open_store()

        status = health_handlers.check_health(store)
        if status["status"] == "ok":
            click.echo(
                format_success(
                    f"{status['message']} ({status['backend']}, "
                    f"{status['project_count']} projects)"
                )
            )
        else:
            click.echo(format_error(f"Store check failed: {status['error']}"))

        access = health_handlers.check_table_access(store)
        rows = [
            [
                table,
                "yes" if result.success else "no",
                "yes" if result.has_data else "no",
                result.error or "",
            ]
            for table, result in access.items()
        ]
        click.echo(format_table(["Table", "Readable", "Has Data", "Error"], rows))

        if status["status"] != "ok" or not all(r.success for r in access.values()):
            raise click.exceptions.Exit(1)
