"""CLI utility functions."""

from project_finance.cli.utils.formatters import (
    format_error,
    format_info,
    format_money,
    format_percentage,
    format_quantity,
    format_success,
    format_table,
    format_warning,
)

__all__ = [
    "format_error",
    "format_info",
    "format_money",
    "format_percentage",
    "format_quantity",
    "format_success",
    "format_table",
    "format_warning",
]
