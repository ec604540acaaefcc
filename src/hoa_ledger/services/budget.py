"""Operating budget categories, expenses and financial settings."""

import logging
from datetime import date
from decimal import Decimal
from uuid import uuid4

from hoa_ledger.exceptions import RecordNotFoundError
from hoa_ledger.ledger.chart import ADMINISTRATIVE_EXPENSE, OPERATING_CASH
from hoa_ledger.ledger.models import EntrySource, to_money
from hoa_ledger.models import BudgetCategory, Expense, FinancialSettings
from hoa_ledger.reports.core import category_actual
from hoa_ledger.services.base import BaseService
from hoa_ledger.sync.records import SyncTable

logger = logging.getLogger(__name__)

SETTINGS_KEY = "settings"


class BudgetService(BaseService):
    """Budget lines, their expense detail, and tenant financial settings.

    Expenses are paid from operating cash and posted to the expense
    account mapped to their category, or to Administrative when the
    category has no mapped account.
    """

    def get(self, category_id: str) -> BudgetCategory:
        return self.state.budget_category(category_id)

    def list_categories(self) -> list[BudgetCategory]:
        return list(self.state.budget_categories.values())

    def add_category(
        self, name: str, budgeted: Decimal | int | str, category_id: str | None = None
    ) -> BudgetCategory:
        with self._engine.transaction() as state:
            category = BudgetCategory(
                id=category_id or f"cat-{uuid4().hex[:8]}",
                name=name,
                budgeted=to_money(budgeted),
            )
            state.budget_categories[category.id] = category
            self._engine.touch(SyncTable.BUDGET_CATEGORIES, category.id)
        return category

    def update_category(
        self,
        category_id: str,
        *,
        name: str | None = None,
        budgeted: Decimal | int | str | None = None,
    ) -> BudgetCategory:
        with self._engine.transaction() as state:
            category = state.budget_category(category_id)
            if name is not None:
                category.name = name
            if budgeted is not None:
                category.budgeted = to_money(budgeted)
            self._engine.touch(SyncTable.BUDGET_CATEGORIES, category_id)
        return category

    def delete_category(self, category_id: str) -> BudgetCategory:
        """Remove a category. Expenses already posted stay in the ledger."""
        with self._engine.transaction() as state:
            category = state.budget_category(category_id)
            del state.budget_categories[category_id]
            self._engine.touch(SyncTable.BUDGET_CATEGORIES, category_id)
        return category

    def add_expense(
        self,
        category_id: str,
        description: str,
        amount: Decimal | int | str,
        vendor: str = "",
        invoice: str = "",
        *,
        on: date | None = None,
    ) -> Expense:
        """Record and post a paid expense.

        Posts Dr mapped expense account (Administrative if unmapped) /
        Cr operating cash with the invoice reference as source id.
        """
        on = on or date.today()
        with self._engine.transaction() as state:
            category = state.budget_category(category_id)
            mapped = state.chart.for_budget_category(category_id)
            expense = Expense(
                id=f"exp-{uuid4().hex[:8]}",
                date=on,
                description=description,
                amount=to_money(amount),
                vendor=vendor,
                invoice=invoice,
            )
            self._post(
                on,
                f"{description} - {vendor}" if vendor else description,
                mapped.number if mapped else ADMINISTRATIVE_EXPENSE,
                OPERATING_CASH,
                expense.amount,
                EntrySource.EXPENSE,
                invoice or expense.id,
            )
            category.expenses.append(expense)
            category.expenses.sort(key=lambda e: e.date, reverse=True)
            self._engine.touch(SyncTable.BUDGET_CATEGORIES, category_id)
        logger.info("Recorded expense %s in %s: %s", expense.id, category.name, expense.amount)
        return expense

    def delete_expense(self, category_id: str, expense_id: str) -> Expense:
        """Drop an expense from the category's detail.

        The ledger entry posted for it is not touched; correct the ledger
        with a reversal if the expense itself was wrong.
        """
        with self._engine.transaction() as state:
            category = state.budget_category(category_id)
            for index, expense in enumerate(category.expenses):
                if expense.id == expense_id:
                    del category.expenses[index]
                    break
            else:
                raise RecordNotFoundError("expense", expense_id)
            self._engine.touch(SyncTable.BUDGET_CATEGORIES, category_id)
        return expense

    def category_spent(self, category_id: str) -> Decimal:
        """Actual spend: the mapped account balance, else the expense total."""
        return category_actual(self.state, self.state.budget_category(category_id))

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    @property
    def settings(self) -> FinancialSettings:
        return self.state.settings

    def set_annual_reserve_contribution(self, amount: Decimal | int | str) -> FinancialSettings:
        with self._engine.transaction() as state:
            state.settings.annual_reserve_contribution = to_money(amount)
            self._engine.touch(SyncTable.FINANCIAL_SETTINGS, SETTINGS_KEY)
        return state.settings

    def set_due_day(self, day: int) -> FinancialSettings:
        """Change the monthly due day (1-28).

        Raises:
            pydantic.ValidationError: If the day is out of range
        """
        with self._engine.transaction() as state:
            state.settings.due_day = day
            self._engine.touch(SyncTable.FINANCIAL_SETTINGS, SETTINGS_KEY)
        return state.settings

    def set_payment_processor(self, account_id: str | None, onboarded: bool) -> FinancialSettings:
        with self._engine.transaction() as state:
            state.settings.payment_processor_account_id = account_id
            state.settings.payment_processor_onboarded = onboarded
            self._engine.touch(SyncTable.FINANCIAL_SETTINGS, SETTINGS_KEY)
        return state.settings
