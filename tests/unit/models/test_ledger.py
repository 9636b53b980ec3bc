"""Unit tests for the LedgerEntry model."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from project_finance.models.ledger import EntryCategory, EntryType, LedgerEntry


class TestLedgerEntry:
    """Test ledger entry parsing and validation."""

    def test_budget_debit(self):
        entry = LedgerEntry(
            project_id="proj-001", type="DEBIT", category="budget", amount="20000"
        )

        assert entry.type == EntryType.DEBIT
        assert entry.amount == Decimal("20000")
        assert entry.is_budget_debit is True

    @pytest.mark.parametrize("category", ["mandays", "labor-days", "Labor Days"])
    def test_labor_day_category_aliases(self, category):
        entry = LedgerEntry(
            project_id="proj-001", type="credit", category=category, amount=10
        )
        assert entry.category == EntryCategory.LABOR_DAYS
        assert entry.is_budget_debit is False

    @pytest.mark.parametrize("amount", [0, -5])
    def test_amount_must_be_positive(self, amount):
        with pytest.raises(ValidationError):
            LedgerEntry(
                project_id="proj-001", type="debit", category="budget", amount=amount
            )

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError, match="credit or debit"):
            LedgerEntry(
                project_id="proj-001", type="refund", category="budget", amount=1
            )

    def test_blank_notes_become_none(self):
        entry = LedgerEntry(
            project_id="proj-001", type="debit", category="budget", amount=1, notes=" "
        )
        assert entry.notes is None

    def test_entries_are_immutable(self):
        entry = LedgerEntry(
            project_id="proj-001", type="debit", category="budget", amount=1
        )
        with pytest.raises(ValidationError):
            entry.amount = Decimal("2")
