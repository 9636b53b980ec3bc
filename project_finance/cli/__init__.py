"""Project Finance CLI.

This module provides a command-line interface for the project finance
tracker: managing projects, ledger entries, role rates and labor-days, and
reporting spend, burn rate and resource usage.
"""

import sys

import click
from pydantic import ValidationError as PydanticValidationError

from project_finance import __version__
from project_finance.cli.commands import (
    health,
    labor_days_group,
    ledger_group,
    projects_group,
    rates_group,
    reconcile,
    resource_usage,
    spending_summary,
)
from project_finance.cli.error_handlers import handle_cli_error
from project_finance.config.logging_config import LoggingConfig, configure_logging
from project_finance.config.settings import get_config


@click.group(
    help="Project Finance CLI - Track budgets, labor-days and spend per project"
)
@click.version_option(version=__version__)
def cli():
    """Project Finance CLI main entry point."""
    pass


# Register commands
cli.add_command(projects_group)
cli.add_command(ledger_group)
cli.add_command(rates_group)
cli.add_command(labor_days_group)
cli.add_command(spending_summary)
cli.add_command(reconcile)
cli.add_command(resource_usage)
cli.add_command(health)


def main():
    """Main entry point for the CLI.

    Settings load first (reading .env) so LOG_LEVEL and DEBUG apply to
    logging before any command runs.
    """
    try:
        settings = get_config()
    except PydanticValidationError as e:
        sys.exit(handle_cli_error(e))
    configure_logging(LoggingConfig.from_settings(settings))
    cli()


if __name__ == "__main__":
    main()
