"""Tests for budget categories, expenses, settings and reserve items."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from hoa_ledger import LedgerEngine
from hoa_ledger.exceptions import RecordNotFoundError
from hoa_ledger.ledger import EntrySource

DAY = date(2026, 5, 1)


class TestExpenses:
    """Tests for BudgetService.add_expense()."""

    def test_mapped_category_posts_to_its_account(self, engine: LedgerEngine) -> None:
        """Categories with a mapped account post there."""
        engine.budget.add_category("Maintenance", 8000, "cat1")
        expense = engine.budget.add_expense(
            "cat1", "Gate repair", 350, "Acme", "INV-77", on=DAY
        )

        (entry,) = engine.state.ledger
        assert (entry.debit_account, entry.credit_account) == ("5010", "1010")
        assert entry.source == EntrySource.EXPENSE
        assert entry.source_id == "INV-77"
        assert entry.memo == "Gate repair - Acme"
        assert engine.budget.get("cat1").expenses == [expense]

    def test_unmapped_category_posts_to_administrative(self, engine: LedgerEngine) -> None:
        """Categories without an account fall back to Administrative."""
        category = engine.budget.add_category("Social events", 500)
        expense = engine.budget.add_expense(category.id, "BBQ supplies", 120, on=DAY)

        (entry,) = engine.state.ledger
        assert entry.debit_account == "5070"
        assert entry.source_id == expense.id
        assert entry.memo == "BBQ supplies"
        assert engine.budget.category_spent(category.id) == Decimal(120)

    def test_mapped_spend_comes_from_ledger(self, engine: LedgerEngine) -> None:
        """A mapped category's actual includes postings made outside the budget."""
        engine.budget.add_category("Maintenance", 8000, "cat1")
        engine.budget.add_expense("cat1", "Gate repair", 350, on=DAY)
        engine.journal.post(DAY, "Manual repair", "5010", "1010", 100, EntrySource.EXPENSE)

        assert engine.budget.category_spent("cat1") == Decimal(450)
        assert engine.budget.get("cat1").spent == Decimal(350)

    def test_expenses_sorted_newest_first(self, engine: LedgerEngine) -> None:
        """Expense detail is kept newest first."""
        engine.budget.add_category("Maintenance", 8000, "cat1")
        engine.budget.add_expense("cat1", "old", 10, on=date(2026, 1, 1))
        engine.budget.add_expense("cat1", "new", 10, on=date(2026, 3, 1))
        assert [e.description for e in engine.budget.get("cat1").expenses] == ["new", "old"]

    def test_unknown_category(self, engine: LedgerEngine) -> None:
        """Expenses need an existing category and post nothing otherwise."""
        with pytest.raises(RecordNotFoundError):
            engine.budget.add_expense("nope", "x", 10)
        assert len(engine.state.ledger) == 0

    def test_delete_expense_keeps_ledger(self, engine: LedgerEngine) -> None:
        """Deleting detail leaves the posting, which reconciliation then flags."""
        engine.budget.add_category("Maintenance", 8000, "cat1")
        expense = engine.budget.add_expense("cat1", "Gate repair", 350, on=DAY)

        engine.budget.delete_expense("cat1", expense.id)

        assert engine.budget.get("cat1").expenses == []
        assert len(engine.state.ledger) == 1
        (row,) = engine.reports.reconcile_budget()
        assert not row.consistent
        assert row.difference == Decimal(350)

    def test_delete_unknown_expense(self, engine: LedgerEngine) -> None:
        """Unknown expense ids are not found."""
        engine.budget.add_category("Maintenance", 8000, "cat1")
        with pytest.raises(RecordNotFoundError):
            engine.budget.delete_expense("cat1", "exp-missing")


class TestCategories:
    """Tests for category management."""

    def test_update_category(self, engine: LedgerEngine) -> None:
        """Name and budget can be changed independently."""
        engine.budget.add_category("Maintenance", 8000, "cat1")
        updated = engine.budget.update_category("cat1", budgeted="9000")
        assert updated.name == "Maintenance"
        assert updated.budgeted == Decimal(9000)

    def test_delete_category(self, engine: LedgerEngine) -> None:
        """Deleted categories leave their postings in place."""
        engine.budget.add_category("Maintenance", 8000, "cat1")
        engine.budget.add_expense("cat1", "Gate repair", 350, on=DAY)
        engine.budget.delete_category("cat1")
        assert engine.budget.list_categories() == []
        assert engine.state.balance_of("5010") == Decimal(350)

    def test_zero_budget_has_no_percent(self, engine: LedgerEngine) -> None:
        """Variance percent is undefined without a budget."""
        engine.budget.add_category("Unplanned", 0)
        (row,) = engine.reports.budget_variance()
        assert row.pct is None
        assert row.account_number is None


class TestSettings:
    """Tests for tenant financial settings."""

    def test_defaults(self, engine: LedgerEngine) -> None:
        """New tenants start with the 15th and a 12,000 contribution."""
        assert engine.budget.settings.due_day == 15
        assert engine.budget.settings.annual_reserve_contribution == Decimal(12000)

    def test_invalid_due_day_rejected(self, engine: LedgerEngine) -> None:
        """Due days run from 1 to 28."""
        with pytest.raises(ValidationError):
            engine.budget.set_due_day(31)
        assert engine.budget.settings.due_day == 15

    def test_update_contribution_and_processor(self, engine: LedgerEngine) -> None:
        """Settings changes persist on the state."""
        engine.budget.set_annual_reserve_contribution("15000")
        engine.budget.set_payment_processor("acct_123", True)
        settings = engine.state.settings
        assert settings.annual_reserve_contribution == Decimal(15000)
        assert settings.payment_processor_account_id == "acct_123"
        assert settings.payment_processor_onboarded


class TestReserveItems:
    """Tests for reserve study items."""

    def test_add_and_update_item(self, engine: LedgerEngine) -> None:
        """Items are validated on update like new ones."""
        item = engine.reserves.add_item(
            "Roof", 85000, current_funding=45000, useful_life=25, years_remaining=8
        )
        updated = engine.reserves.update_item(item.id, current_funding=Decimal(50000))

        assert updated.gap == Decimal(35000)
        assert engine.reserves.get(item.id).current_funding == Decimal(50000)

    def test_update_rejects_bad_value(self, engine: LedgerEngine) -> None:
        """Invalid values leave the item unchanged."""
        item = engine.reserves.add_item("Roof", 85000, item_id="res1")
        with pytest.raises(ValidationError):
            engine.reserves.update_item("res1", estimated_cost="lots")
        assert engine.reserves.get(item.id).estimated_cost == Decimal(85000)

    def test_delete_item(self, engine: LedgerEngine) -> None:
        """Deleted items disappear from the funding report."""
        engine.reserves.add_item("Roof", 85000, item_id="res1")
        engine.reserves.delete_item("res1")
        assert engine.reserves.list_items() == []
        assert engine.reports.reserve_funding_status() == []
