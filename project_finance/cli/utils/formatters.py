"""Output formatting utilities for the CLI."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, List, Sequence

import click


def format_success(message: str) -> str:
    """Format a success message in green."""
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    """Format an error message in red."""
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    """Format a warning message in yellow."""
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    """Format an info message in blue."""
    return click.style(f"ℹ {message}", fg="blue")


def format_money(value: Any, currency_label: str = "") -> str:
    """Format a currency amount with thousands separators.

    Example:
        >>> format_money(Decimal("25000"), "Rp")
        'Rp 25,000'
        >>> format_money(Decimal("1234.5"))
        '1,234.50'
    """
    amount = Decimal(str(value))
    if amount == amount.to_integral_value():
        text = f"{amount:,.0f}"
    else:
        text = f"{amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):,}"
    return f"{currency_label} {text}" if currency_label else text


def format_quantity(value: Any) -> str:
    """Format a labor-day quantity without trailing zeros (10.50 -> 10.5)."""
    amount = Decimal(str(value))
    if amount == amount.to_integral_value():
        return str(amount.quantize(Decimal("1")))
    return format(amount.normalize(), "f")


def format_percentage(rate: Any) -> str:
    """Format a fraction as a percentage with one decimal (0.25 -> 25.0%)."""
    percent = (Decimal(str(rate)) * 100).quantize(
        Decimal("0.1"), rounding=ROUND_HALF_UP
    )
    return f"{percent}%"


def format_table(
    headers: List[str], rows: Sequence[Sequence[Any]], max_width: int = 80
) -> str:
    """Format data as a boxed table.

    Args:
        headers: Column headers
        rows: Data rows (each a sequence of cell values)
        max_width: Maximum width for each column; longer cells are truncated

    Returns:
        Formatted table as a string
    """
    if not headers:
        return ""

    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row[: len(col_widths)]):
            col_widths[i] = max(col_widths[i], len(str(cell)))
    col_widths = [min(w, max_width) for w in col_widths]

    separator = "+" + "+".join("-" * (w + 2) for w in col_widths) + "+"

    def render(cells: Sequence[Any]) -> str:
        formatted = [
            f" {str(cell)[:width]:<{width}} " for cell, width in zip(cells, col_widths)
        ]
        return "|" + "|".join(formatted) + "|"

    lines = [separator, render(headers), separator]
    if rows:
        lines.extend(render(row) for row in rows)
        lines.append(separator)
    return "\n".join(lines)
