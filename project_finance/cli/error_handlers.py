"""Error handling for CLI commands.

Maps the finance tracker's error taxonomy (and the Google API errors that
surface through the sheets store) to a message, a recovery hint and an
exit code.
"""

import sys
import traceback
from typing import Optional

import click
from googleapiclient.errors import HttpError
from pydantic import ValidationError as PydanticValidationError

from project_finance.cli.utils.formatters import format_error, format_warning
from project_finance.errors import (
    FinanceTrackerError,
    ImportServiceError,
    NotFoundError,
    StoreError,
    ValidationError,
)

EXIT_CONFIGURATION = 1
EXIT_IMPORT_SERVICE = 2
EXIT_VALIDATION = 3
EXIT_STORE = 4
EXIT_NOT_FOUND = 7
EXIT_CANCELLED = 130
EXIT_UNEXPECTED = 255


def _echo_error(title: str, message: str, recovery_hint: Optional[str]) -> None:
    click.echo(format_error(f"{title}: {message}"))
    if recovery_hint:
        click.echo(format_warning(f"Hint: {recovery_hint}"))


def handle_http_error(error: HttpError) -> int:
    """Report a Google API HTTP error; returns exit codes 5-9."""
    status_code = error.resp.status

    if status_code == 401:
        click.echo(format_error("Authentication Failed"))
        click.echo(
            format_warning(
                "Hint: Check your service account credentials in the .env file"
            )
        )
        return 5

    if status_code == 403:
        click.echo(format_error("Permission Denied"))
        click.echo(
            format_warning(
                "Hint: Share the spreadsheet with the service account's email"
            )
        )
        return 6

    if status_code == 404:
        click.echo(format_error("Spreadsheet Not Found"))
        click.echo(format_warning("Hint: Verify SPREADSHEET_ID in your configuration"))
        return 7

    if status_code == 429:
        click.echo(format_error("Rate Limit Exceeded"))
        click.echo(format_warning("Hint: Wait a few minutes before running again"))
        return 8

    click.echo(format_error(f"Google API Error (HTTP {status_code})"))
    click.echo(format_warning(f"Details: {str(error)}"))
    return 9


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """
    Handle CLI errors with user-friendly messages.

    Args:
        error: The exception that occurred
        debug: Whether to show full stack trace

    Returns:
        Exit code (see the EXIT_* constants; 5-9 for Google API errors)
    """
    if isinstance(error, ValidationError):
        _echo_error("Validation Error", error.message, error.recovery_hint)
        return EXIT_VALIDATION

    if isinstance(error, NotFoundError):
        _echo_error("Not Found", error.message, error.recovery_hint)
        return EXIT_NOT_FOUND

    if isinstance(error, ImportServiceError):
        _echo_error("Import Error", error.message, error.recovery_hint)
        return EXIT_IMPORT_SERVICE

    if isinstance(error, StoreError):
        if isinstance(error.__cause__, HttpError):
            return handle_http_error(error.__cause__)
        _echo_error("Store Error", error.message, error.recovery_hint)
        return EXIT_STORE

    if isinstance(error, FinanceTrackerError):
        _echo_error("Error", error.message, error.recovery_hint)
        return EXIT_STORE

    # Settings failed to load from the environment / .env
    if isinstance(error, PydanticValidationError):
        _echo_error(
            "Configuration Error",
            str(error),
            "Check the values in your .env file",
        )
        return EXIT_CONFIGURATION

    if isinstance(error, HttpError):
        return handle_http_error(error)

    if isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"))
        return EXIT_CANCELLED

    click.echo(format_error(f"Unexpected Error: {type(error).__name__}"))
    click.echo(str(error))

    if debug:
        click.echo("\nFull stack trace:")
        click.echo(
            "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
        )
    else:
        click.echo(format_warning("\nRun with --debug flag for full stack trace"))

    return EXIT_UNEXPECTED


class ErrorHandler:
    """Context manager that reports an escaping exception and exits."""

    def __init__(self, show_debug: bool):
        self.show_debug = show_debug

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_val is not None and not isinstance(exc_val, click.exceptions.Exit):
            exit_code = handle_cli_error(exc_val, self.show_debug)
            sys.exit(exit_code)
        return False


def with_error_handling(debug: bool = False) -> ErrorHandler:
    """
    Standardized error handling for CLI commands.

    Example:
        @click.command()
        @click.option('--debug', is_flag=True)
        def my_command(debug):
            with with_error_handling(debug):
                # Command implementation
                pass
    """
    return ErrorHandler(debug)
