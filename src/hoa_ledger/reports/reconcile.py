"""Checks between denormalized records and the ledger.

Units and budget categories keep their own running figures next to the
ledger. These reports show where the two disagree; nothing is corrected
automatically.
"""

from decimal import Decimal

from hoa_ledger.ledger.chart import RECEIVABLE_ACCOUNTS
from hoa_ledger.reports.models import ZERO, BudgetReconciliation, UnitReconciliation
from hoa_ledger.state import LedgerState


def ledger_receivable(state: LedgerState, unit_number: str) -> Decimal:
    """Net receivable postings for a unit and its invoices."""
    keys = {unit_number}
    keys.update(i.id for i in state.invoices.values() if i.unit_number == unit_number)
    total = ZERO
    for entry in state.ledger:
        if entry.source_id not in keys:
            continue
        if entry.debit_account in RECEIVABLE_ACCOUNTS:
            total += entry.amount
        if entry.credit_account in RECEIVABLE_ACCOUNTS:
            total -= entry.amount
    return total


def reconcile_units(state: LedgerState) -> list[UnitReconciliation]:
    rows = []
    for unit in state.units.values():
        derived = unit.derived_balance()
        receivable = ledger_receivable(state, unit.number)
        rows.append(
            UnitReconciliation(
                unit_number=unit.number,
                stored_balance=unit.balance,
                derived_balance=derived,
                ledger_receivable=receivable,
                consistent=unit.balance == derived,
                ledger_difference=receivable - unit.balance,
            )
        )
    return rows


def reconcile_budget(state: LedgerState) -> list[BudgetReconciliation]:
    """Compare each category's expense list with its mapped account.

    Unmapped categories have nothing to compare against and are always
    consistent.
    """
    rows = []
    for category in state.budget_categories.values():
        account = state.chart.for_budget_category(category.id)
        row = BudgetReconciliation(
            category_id=category.id, name=category.name, expense_total=category.spent
        )
        if account is not None:
            row.account_number = account.number
            row.account_balance = state.balance_of(account.number)
            row.difference = row.account_balance - row.expense_total
            row.consistent = not row.difference
        rows.append(row)
    return rows
