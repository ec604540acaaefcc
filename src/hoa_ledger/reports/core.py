"""Financial statements and operating reports.

Every function here is a pure read of a LedgerState: calling one twice
on unchanged state returns equal results, and nothing is mutated.
Account figures come from hoa_ledger.ledger.balances so the sign
convention lives in one place.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from hoa_ledger.ledger import chart as coa
from hoa_ledger.ledger.balances import balances_by_account, raw_balance
from hoa_ledger.ledger.models import AccountType, to_money
from hoa_ledger.models import BudgetCategory
from hoa_ledger.reports.models import (
    ZERO,
    AgingRow,
    AssetSection,
    BalanceSheet,
    BudgetVarianceRow,
    DelinquencyAging,
    EquitySection,
    IncomeMetrics,
    IncomeStatement,
    LiabilitySection,
    OperatingBudget,
    ReserveStatusRow,
    StatementLine,
    TrialBalance,
    TrialBalanceRow,
)
from hoa_ledger.state import LedgerState

_NAMED_ASSETS = {
    coa.OPERATING_CASH: "operating",
    coa.RESERVE_CASH: "reserves",
    coa.PETTY_CASH: "petty_cash",
    coa.ASSESSMENTS_RECEIVABLE: "assessments_ar",
    coa.SPECIAL_ASSESSMENTS_RECEIVABLE: "special_ar",
    coa.LATE_FEES_RECEIVABLE: "late_fees_ar",
    coa.INSURANCE_RECEIVABLE: "insurance_ar",
    coa.PREPAID_EXPENSES: "prepaid",
}
_NAMED_LIABILITIES = {
    coa.ACCOUNTS_PAYABLE: "payable",
    coa.PREPAID_ASSESSMENTS: "prepaid_assessments",
    coa.SECURITY_DEPOSITS: "deposits",
    coa.ACCRUED_EXPENSES: "accrued",
}
_NAMED_EQUITY = {
    coa.OPERATING_FUND: "operating_fund",
    coa.RESERVE_FUND: "reserve_fund",
    coa.RETAINED_SURPLUS: "retained",
}


def whole_percent(part: Decimal, whole: Decimal) -> int:
    """part / whole * 100 rounded half up to an integer."""
    return int((part / whole * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def round_whole(value: Decimal) -> Decimal:
    return value.quantize(Decimal(1), rounding=ROUND_HALF_UP)


# =============================================================================
# Statements
# =============================================================================


def _section_figures(
    state: LedgerState,
    balances: dict[str, Decimal],
    account_type: AccountType,
    named: dict[str, str],
) -> tuple[dict[str, Decimal], list[StatementLine], Decimal]:
    """Named line values, other non-zero lines and the total for one type."""
    figures = {field: balances.get(number, ZERO) for number, field in named.items()}
    other: list[StatementLine] = []
    total = ZERO
    for account in state.chart:
        if account.account_type != account_type:
            continue
        amount = balances[account.number]
        total += amount
        if account.number not in named and amount:
            other.append(
                StatementLine(account_number=account.number, name=account.name, amount=amount)
            )
    return figures, other, total


def balance_sheet(state: LedgerState, as_of: date | None = None) -> BalanceSheet:
    """Balance sheet over postings dated on or before `as_of` (all postings if None).

    Section totals cover every account of the section's type, and
    equity carries income less expenses as the current surplus, so
    assets always equal liabilities plus equity.
    """
    entries = state.ledger.through(as_of) if as_of else state.ledger
    balances = balances_by_account(state.chart, entries)

    figures, other, total = _section_figures(state, balances, AccountType.ASSET, _NAMED_ASSETS)
    assets = AssetSection(**figures, other=other, total=total)
    assets.total_current = assets.operating + assets.reserves + assets.petty_cash
    assets.total_receivable = (
        assets.assessments_ar + assets.special_ar + assets.late_fees_ar + assets.insurance_ar
    )

    figures, other, total = _section_figures(
        state, balances, AccountType.LIABILITY, _NAMED_LIABILITIES
    )
    liabilities = LiabilitySection(**figures, other=other, total=total)

    income = sum(
        (balances[a.number] for a in state.chart if a.account_type == AccountType.INCOME), ZERO
    )
    expenses = sum(
        (balances[a.number] for a in state.chart if a.account_type == AccountType.EXPENSE), ZERO
    )
    figures, other, total = _section_figures(state, balances, AccountType.EQUITY, _NAMED_EQUITY)
    surplus = income - expenses
    equity = EquitySection(**figures, other=other, current_surplus=surplus, total=total + surplus)

    return BalanceSheet(
        as_of=as_of or date.today(), assets=assets, liabilities=liabilities, equity=equity
    )


def income_statement(state: LedgerState, start: date, end: date) -> IncomeStatement:
    """Income and expense activity between start and end, both inclusive.

    Accounts with no net activity in the window are left out.
    """
    entries = state.ledger.between(start, end)
    statement = IncomeStatement(start=start, end=end)
    for account in state.chart:
        if account.account_type not in (AccountType.INCOME, AccountType.EXPENSE):
            continue
        raw = raw_balance(entries, account.number)
        if not raw:
            continue
        if account.account_type == AccountType.INCOME:
            statement.income.append(
                StatementLine(account_number=account.number, name=account.name, amount=-raw)
            )
        else:
            statement.expenses.append(
                StatementLine(account_number=account.number, name=account.name, amount=raw)
            )
    statement.total_income = sum((line.amount for line in statement.income), ZERO)
    statement.total_expenses = sum((line.amount for line in statement.expenses), ZERO)
    statement.net_income = statement.total_income - statement.total_expenses
    return statement


def trial_balance(state: LedgerState) -> TrialBalance:
    """Debit and credit totals for every account with activity."""
    debits: dict[str, Decimal] = {}
    credits: dict[str, Decimal] = {}
    for entry in state.ledger:
        debits[entry.debit_account] = debits.get(entry.debit_account, ZERO) + entry.amount
        credits[entry.credit_account] = credits.get(entry.credit_account, ZERO) + entry.amount

    report = TrialBalance()
    for account in state.chart:
        dr = debits.get(account.number, ZERO)
        cr = credits.get(account.number, ZERO)
        if not dr and not cr:
            continue
        report.rows.append(
            TrialBalanceRow(
                account_number=account.number,
                name=account.name,
                account_type=str(account.account_type),
                debits=dr,
                credits=cr,
                balance=dr - cr if account.increases_with_debit() else cr - dr,
            )
        )
    report.total_debits = sum((r.debits for r in report.rows), ZERO)
    report.total_credits = sum((r.credits for r in report.rows), ZERO)
    return report


# =============================================================================
# Budget
# =============================================================================


def category_actual(state: LedgerState, category: BudgetCategory) -> Decimal:
    """Actual spend of a category.

    The balance of the expense account mapped to the category when there
    is one, otherwise the total of the category's own expense list.
    """
    account = state.chart.for_budget_category(category.id)
    if account is not None:
        return state.balance_of(account.number)
    return category.spent


def budget_variance(state: LedgerState) -> list[BudgetVarianceRow]:
    rows = []
    for category in state.budget_categories.values():
        account = state.chart.for_budget_category(category.id)
        actual = category_actual(state, category)
        rows.append(
            BudgetVarianceRow(
                id=category.id,
                name=category.name,
                budgeted=category.budgeted,
                actual=actual,
                variance=category.budgeted - actual,
                pct=whole_percent(actual, category.budgeted) if category.budgeted else None,
                account_number=account.number if account else None,
            )
        )
    return rows


def operating_budget(state: LedgerState) -> OperatingBudget:
    """Annual fee revenue split between reserves and the operating budget."""
    annual_revenue = sum((u.monthly_fee for u in state.units.values()), ZERO) * 12
    contribution = state.settings.annual_reserve_contribution
    budget = annual_revenue - contribution
    allocated = sum((c.budgeted for c in state.budget_categories.values()), ZERO)
    return OperatingBudget(
        annual_revenue=annual_revenue,
        reserve_contribution=contribution,
        operating_budget=budget,
        total_allocated=allocated,
        unallocated=budget - allocated,
        over_allocated=allocated > budget,
    )


# =============================================================================
# Receivables
# =============================================================================


def delinquency_aging(state: LedgerState) -> DelinquencyAging:
    """Bucket units with a balance by multiples of their monthly fee.

    Up to one month's fee is current, up to two is 30 days, up to three
    is 60 days and anything more is 90+. A unit with no monthly fee and a
    balance lands in 90+.
    """
    report = DelinquencyAging()
    for unit in state.units.values():
        if unit.balance <= 0:
            continue
        row = AgingRow(
            unit_number=unit.number,
            owner=unit.owner,
            balance=unit.balance,
            monthly_fee=unit.monthly_fee,
        )
        fee = unit.monthly_fee
        if unit.balance <= fee:
            report.current.append(row)
        elif unit.balance <= fee * 2:
            report.days30.append(row)
        elif unit.balance <= fee * 3:
            report.days60.append(row)
        else:
            report.days90plus.append(row)
        report.total_outstanding += unit.balance
    return report


def income_metrics(state: LedgerState) -> IncomeMetrics:
    units = list(state.units.values())
    expected = sum((u.monthly_fee for u in units), ZERO)
    outstanding = sum((u.balance for u in units), ZERO)
    collected = expected - outstanding
    return IncomeMetrics(
        total_units=len(units),
        occupied_units=sum(1 for u in units if u.is_occupied),
        current_units=sum(1 for u in units if u.balance == 0),
        delinquent_units=sum(1 for u in units if u.balance > 0),
        monthly_expected=expected,
        monthly_collected=collected,
        total_outstanding=outstanding,
        collection_rate=whole_percent(collected, expected) if expected else 0,
        annual_expected=expected * 12,
        annual_collected=collected * 12,
    )


# =============================================================================
# Reserves
# =============================================================================


def reserve_funding_status(state: LedgerState) -> list[ReserveStatusRow]:
    """Funding gap, percent funded and yearly contribution needed per item."""
    rows = []
    for item in state.reserve_items.values():
        gap = item.gap
        rows.append(
            ReserveStatusRow(
                id=item.id,
                name=item.name,
                estimated_cost=item.estimated_cost,
                current_funding=item.current_funding,
                years_remaining=item.years_remaining,
                is_contingency=item.is_contingency,
                gap=gap,
                pct=(
                    whole_percent(item.current_funding, item.estimated_cost)
                    if item.estimated_cost > 0
                    else 100
                ),
                annual_needed=(
                    round_whole(gap / item.years_remaining) if item.years_remaining > 0 else ZERO
                ),
            )
        )
    return rows


def recommended_annual_reserve(state: LedgerState) -> Decimal:
    """Yearly contribution that closes every non-contingency gap on schedule."""
    items = [
        i for i in state.reserve_items.values() if not i.is_contingency and i.years_remaining > 0
    ]
    return to_money(sum((i.gap / i.years_remaining for i in items), ZERO))
