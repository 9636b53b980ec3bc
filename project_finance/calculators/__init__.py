"""Calculator modules for the project finance tracker."""

from project_finance.calculators.ledger_calculator import (
    LedgerTotals,
    calculate_ledger_totals,
    sum_labor_days,
)
from project_finance.calculators.spending_calculator import (
    CostInputs,
    SpendingResult,
    SpendingSummary,
    calculate_burn_rate,
    calculate_ledger_costs,
    calculate_manday_costs,
    calculate_spending,
    round_burn_rate,
    round_currency,
)

__all__ = [
    # ledger_calculator
    "LedgerTotals",
    "calculate_ledger_totals",
    "sum_labor_days",
    # spending_calculator
    "CostInputs",
    "SpendingResult",
    "SpendingSummary",
    "calculate_burn_rate",
    "calculate_ledger_costs",
    "calculate_manday_costs",
    "calculate_spending",
    "round_burn_rate",
    "round_currency",
]
