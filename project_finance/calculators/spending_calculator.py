"""Spending calculator for project cost aggregation.

This module implements the spend and burn-rate arithmetic shared by every
aggregation path:
- Labor-day costs (labor-days x role rate, matched by role)
- Direct ledger costs (currency debits)
- Total spend and burn rate against budget
- Output rounding for reports

The functions are pure: the rows they operate on come from a
SpendingSource, which decides whether they were read from a precomputed
view or joined from the underlying tables.
"""

from dataclasses import asdict, dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple

from project_finance.models.ledger import EntryCategory, EntryType

CURRENCY_QUANTUM = Decimal("1")
BURN_RATE_QUANTUM = Decimal("0.0001")
ZERO = Decimal("0")

RateRow = Tuple[str, Any]
LaborDayRow = Tuple[str, Any]
LedgerRow = Tuple[Any, Any, Any]


@dataclass
class CostInputs:
    """Raw rows needed to compute one project's spend.

    Attributes:
        project_id: Project identifier
        project_name: Project name, carried into the summary
        budget: Project budget as stored (may be missing or non-numeric)
        rate_rows: (role, cost_per_labor_day) pairs
        labor_day_rows: (role, labor_days) pairs
        ledger_rows: (type, category, amount) triples

    Example:
        >>> inputs = CostInputs(
        ...     project_id="proj-001",
        ...     project_name="Website Redesign",
        ...     budget=Decimal("100000"),
        ...     rate_rows=[("BE", Decimal("500"))],
        ...     labor_day_rows=[("BE", Decimal("10"))],
        ...     ledger_rows=[("debit", "budget", Decimal("20000"))],
        ... )
        >>> calculate_spending(inputs).total_spent
        Decimal('25000')
    """

    project_id: str
    project_name: str
    budget: Any = None
    rate_rows: List[RateRow] = field(default_factory=list)
    labor_day_rows: List[LaborDayRow] = field(default_factory=list)
    ledger_rows: List[LedgerRow] = field(default_factory=list)


@dataclass
class SpendingResult:
    """Unrounded spend breakdown for one project.

    Attributes:
        budget: Budget used as the burn-rate denominator
        manday_costs: Sum of labor-days x role rate
        ledger_costs: Sum of currency debits
        total_spent: manday_costs + ledger_costs
        burn_rate: total_spent / budget, or 0 when budget <= 0
    """

    budget: Decimal
    manday_costs: Decimal
    ledger_costs: Decimal
    total_spent: Decimal
    burn_rate: Decimal


@dataclass
class SpendingSummary:
    """Per-project spending report row.

    total_spent is rounded to a whole currency unit and burn_rate to four
    decimal places. A project whose rows could not be loaded is reported
    with zeros and the error message.
    """

    project_id: str
    project_name: str
    total_spent: Decimal
    burn_rate: Decimal
    manday_costs: Decimal = ZERO
    ledger_costs: Decimal = ZERO
    error: Optional[str] = None

    @classmethod
    def from_result(
        cls, project_id: str, project_name: str, result: SpendingResult
    ) -> "SpendingSummary":
        return cls(
            project_id=project_id,
            project_name=project_name,
            total_spent=round_currency(result.total_spent),
            burn_rate=round_burn_rate(result.burn_rate),
            manday_costs=result.manday_costs,
            ledger_costs=result.ledger_costs,
        )

    @classmethod
    def failed(
        cls, project_id: str, project_name: str, error: str
    ) -> "SpendingSummary":
        return cls(
            project_id=project_id,
            project_name=project_name,
            total_spent=ZERO,
            burn_rate=ZERO,
            error=error,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def safe_decimal(value: Any) -> Decimal:
    """Coerce a stored numeric value to Decimal, treating junk as zero.

    Example:
        >>> safe_decimal("1500.50")
        Decimal('1500.50')
        >>> safe_decimal(None)
        Decimal('0')
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return ZERO
    return result if result.is_finite() else ZERO


def build_rate_map(rate_rows: List[RateRow]) -> Dict[str, Decimal]:
    """Map each role to its cost per labor-day.

    Duplicate roles are not expected; when present the last row wins.
    """
    return {role: safe_decimal(cost) for role, cost in rate_rows}


def calculate_manday_costs(
    rate_rows: List[RateRow], labor_day_rows: List[LaborDayRow]
) -> Decimal:
    """Calculate labor-day costs: sum of labor_days x rate of the row's role.

    Roles without a rate contribute 0. Either input being empty yields 0.

    Example:
        >>> calculate_manday_costs(
        ...     [("BE", Decimal("500"))],
        ...     [("BE", Decimal("10")), ("QA", Decimal("4"))],
        ... )
        Decimal('5000')
    """
    if not rate_rows or not labor_day_rows:
        return ZERO

    rate_map = build_rate_map(rate_rows)
    return sum(
        (
            safe_decimal(labor_days) * rate_map.get(role, ZERO)
            for role, labor_days in labor_day_rows
        ),
        ZERO,
    )


def calculate_ledger_costs(ledger_rows: List[LedgerRow]) -> Decimal:
    """Sum currency debits; credits and labor-day movements are excluded.

    Example:
        >>> calculate_ledger_costs([
        ...     ("debit", "budget", Decimal("20000")),
        ...     ("credit", "budget", Decimal("100000")),
        ...     ("debit", "labor_days", Decimal("5")),
        ... ])
        Decimal('20000')
    """
    total = ZERO
    for entry_type, category, amount in ledger_rows:
        if _is_budget_debit(entry_type, category):
            total += safe_decimal(amount)
    return total


def calculate_burn_rate(total_spent: Decimal, budget: Decimal) -> Decimal:
    """Burn rate as a fraction of budget; 0 whenever budget <= 0."""
    if budget <= ZERO:
        return ZERO
    return total_spent / budget


def calculate_spending(inputs: CostInputs) -> SpendingResult:
    """Calculate the complete spend breakdown for one project.

    Args:
        inputs: Raw rows for the project

    Returns:
        SpendingResult with unrounded figures
    """
    budget = safe_decimal(inputs.budget)
    manday_costs = calculate_manday_costs(inputs.rate_rows, inputs.labor_day_rows)
    ledger_costs = calculate_ledger_costs(inputs.ledger_rows)
    total_spent = manday_costs + ledger_costs

    return SpendingResult(
        budget=budget,
        manday_costs=manday_costs,
        ledger_costs=ledger_costs,
        total_spent=total_spent,
        burn_rate=calculate_burn_rate(total_spent, budget),
    )


def round_currency(value: Decimal) -> Decimal:
    """Round to the nearest whole currency unit (halves round up)."""
    return value.quantize(CURRENCY_QUANTUM, rounding=ROUND_HALF_UP)


def round_burn_rate(value: Decimal) -> Decimal:
    """Round a burn rate to four decimal places."""
    return value.quantize(BURN_RATE_QUANTUM, rounding=ROUND_HALF_UP)


def _is_budget_debit(entry_type: Any, category: Any) -> bool:
    try:
        return (
            EntryType.parse(entry_type) == EntryType.DEBIT
            and EntryCategory.parse(category) == EntryCategory.BUDGET
        )
    except ValueError:
        return False
