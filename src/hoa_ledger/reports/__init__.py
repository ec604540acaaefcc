"""Read-side financial reports."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from hoa_ledger.reports.core import (
    balance_sheet,
    budget_variance,
    category_actual,
    delinquency_aging,
    income_metrics,
    income_statement,
    operating_budget,
    recommended_annual_reserve,
    reserve_funding_status,
    trial_balance,
)
from hoa_ledger.reports.funding import analyze_funding, funding_context
from hoa_ledger.reports.models import (
    BalanceSheet,
    BudgetReconciliation,
    BudgetVarianceRow,
    DelinquencyAging,
    FundingAnalysis,
    FundingContext,
    IncomeMetrics,
    IncomeStatement,
    OperatingBudget,
    ReserveStatusRow,
    TrialBalance,
    UnitReconciliation,
)
from hoa_ledger.reports.reconcile import reconcile_budget, reconcile_units

if TYPE_CHECKING:
    from hoa_ledger.engine import LedgerEngine


class Reports:
    """Report functions bound to an engine's current state."""

    def __init__(self, engine: LedgerEngine) -> None:
        self._engine = engine

    def balance_sheet(self, as_of: date | None = None) -> BalanceSheet:
        return balance_sheet(self._engine.state, as_of)

    def income_statement(
        self, start: date | None = None, end: date | None = None
    ) -> IncomeStatement:
        """Income statement for a window, year to date by default."""
        end = end or date.today()
        start = start or date(end.year, 1, 1)
        return income_statement(self._engine.state, start, end)

    def budget_variance(self) -> list[BudgetVarianceRow]:
        return budget_variance(self._engine.state)

    def delinquency_aging(self) -> DelinquencyAging:
        return delinquency_aging(self._engine.state)

    def reserve_funding_status(self) -> list[ReserveStatusRow]:
        return reserve_funding_status(self._engine.state)

    def recommended_annual_reserve(self) -> Decimal:
        return recommended_annual_reserve(self._engine.state)

    def income_metrics(self) -> IncomeMetrics:
        return income_metrics(self._engine.state)

    def operating_budget(self) -> OperatingBudget:
        return operating_budget(self._engine.state)

    def funding_context(self) -> FundingContext:
        return funding_context(self._engine.state)

    def analyze_funding(self, amount: Decimal | int | str) -> FundingAnalysis:
        return analyze_funding(amount, funding_context(self._engine.state))

    def reconcile_units(self) -> list[UnitReconciliation]:
        return reconcile_units(self._engine.state)

    def reconcile_budget(self) -> list[BudgetReconciliation]:
        return reconcile_budget(self._engine.state)

    def trial_balance(self) -> TrialBalance:
        return trial_balance(self._engine.state)


__all__ = [
    "Reports",
    "analyze_funding",
    "balance_sheet",
    "budget_variance",
    "category_actual",
    "delinquency_aging",
    "funding_context",
    "income_metrics",
    "income_statement",
    "operating_budget",
    "recommended_annual_reserve",
    "reconcile_budget",
    "reconcile_units",
    "reserve_funding_status",
    "trial_balance",
]
