"""Funding analysis for a proposed expenditure."""

from decimal import Decimal

from hoa_ledger.ledger.chart import OPERATING_CASH, RESERVE_CASH
from hoa_ledger.ledger.models import to_money
from hoa_ledger.reports.core import budget_variance, whole_percent
from hoa_ledger.reports.models import (
    ZERO,
    FundingAnalysis,
    FundingContext,
    FundingOption,
    FundingSource,
)
from hoa_ledger.state import LedgerState

# Board spending authority without an owner vote
BOARD_AUTHORITY_LIMIT = Decimal(5000)
OPERATING_RECOMMENDED_LIMIT = Decimal(10000)
FINANCING_THRESHOLD = Decimal(25000)
LARGE_PROJECT_THRESHOLD = Decimal(50000)

# Reserve percent-funded levels
HEALTHY_RESERVES = 50
LOW_RESERVES = 40
CRITICAL_RESERVES = 30


def _fmt(value: Decimal) -> str:
    return f"${value:,.0f}"


def funding_context(state: LedgerState) -> FundingContext:
    """Cash, reserve adequacy and remaining budget of the association."""
    reserve_balance = state.balance_of(RESERVE_CASH)
    total_needed = sum((i.estimated_cost for i in state.reserve_items.values()), ZERO)
    variance = budget_variance(state)
    total_budgeted = sum((row.budgeted for row in variance), ZERO)
    total_spent = sum((row.actual for row in variance), ZERO)
    return FundingContext(
        operating_balance=state.balance_of(OPERATING_CASH),
        reserve_balance=reserve_balance,
        total_reserve_needed=total_needed,
        reserve_pct_funded=(
            whole_percent(reserve_balance, total_needed) if total_needed > 0 else 100
        ),
        total_units=len(state.units),
        budget_remaining=total_budgeted - total_spent,
        total_budgeted=total_budgeted,
        total_spent=total_spent,
    )


def _reserve_pct_after(amount: Decimal, ctx: FundingContext) -> int:
    if ctx.reserve_balance <= 0:
        return 0
    base = ctx.total_reserve_needed if ctx.total_reserve_needed > 0 else ctx.reserve_balance
    return whole_percent(ctx.reserve_balance - amount, base)


def analyze_funding(amount: Decimal | int | str, ctx: FundingContext) -> FundingAnalysis:
    """Weigh the ways to pay for `amount` and recommend one.

    Options are the operating budget, the reserve fund, a special
    assessment split across units, an insurance claim and a loan.
    """
    amount = to_money(amount)
    units = ctx.total_units
    per_unit = to_money(amount / units) if units else amount

    can_operating = ctx.budget_remaining >= amount
    can_reserve = ctx.reserve_balance >= amount
    after_pct = _reserve_pct_after(amount, ctx)

    if can_operating:
        op_pct = whole_percent(amount, ctx.budget_remaining) if ctx.budget_remaining > 0 else 999
        op_impact = (
            f"Uses {op_pct}% of remaining operating budget "
            f"({_fmt(ctx.budget_remaining)} left)"
        )
    else:
        op_impact = (
            f"Short by {_fmt(amount - ctx.budget_remaining)}; "
            "operating budget can't cover this"
        )

    if can_reserve:
        if after_pct < CRITICAL_RESERVES:
            outlook = "CRITICALLY LOW, may trigger special assessment later"
        elif after_pct < HEALTHY_RESERVES:
            outlook = "below recommended level"
        else:
            outlook = "still healthy"
        reserve_impact = (
            f"Reserves drop from {ctx.reserve_pct_funded}% to ~{max(0, after_pct)}% funded; "
            f"{outlook}"
        )
    else:
        reserve_impact = (
            f"Reserves only have {_fmt(ctx.reserve_balance)}; can't cover {_fmt(amount)}"
        )

    if per_unit > 2000:
        burden = "consider installment plan (3-12 months) to ease impact"
    elif per_unit > 500:
        burden = "moderate per-unit cost"
    else:
        burden = "minor per-unit cost"

    financed = amount >= FINANCING_THRESHOLD
    if financed:
        loan_impact = (
            f"Spread cost over 3-10 years; estimated {_fmt(amount / 60)} to "
            f"{_fmt(amount / 36)}/month added to assessments. Avoids large one-time hit."
        )
    else:
        loan_impact = (
            f"Financing typically makes sense for projects over {_fmt(FINANCING_THRESHOLD)}; "
            f"this is {_fmt(amount)}."
        )

    options = [
        FundingOption(
            source=FundingSource.OPERATING,
            label="Operating Budget",
            available=can_operating,
            impact=op_impact,
            recommended=can_operating and amount <= OPERATING_RECOMMENDED_LIMIT,
        ),
        FundingOption(
            source=FundingSource.RESERVES,
            label="Reserve Fund",
            available=can_reserve,
            impact=reserve_impact,
            recommended=can_reserve and after_pct >= HEALTHY_RESERVES,
        ),
        FundingOption(
            source=FundingSource.SPECIAL_ASSESSMENT,
            label="Special Assessment",
            available=True,
            impact=f"Each unit pays {_fmt(per_unit)}; {burden}",
            per_unit=per_unit,
            recommended=not can_operating and (not can_reserve or after_pct < CRITICAL_RESERVES),
        ),
        FundingOption(
            source=FundingSource.INSURANCE,
            label="Insurance Claim",
            available=True,
            impact=(
                "File claim with carrier; HOA pays deductible only if approved. "
                "Best option when damage is from a covered peril."
            ),
        ),
        FundingOption(
            source=FundingSource.LOAN,
            label="HOA Loan / Financing",
            available=True,
            impact=loan_impact,
            per_unit=to_money(amount / 60 / units) if financed and units else ZERO,
            recommended=(
                amount >= LARGE_PROJECT_THRESHOLD and (not can_reserve or after_pct < LOW_RESERVES)
            ),
        ),
    ]

    return FundingAnalysis(
        amount=amount,
        options=options,
        recommendation=_recommend(amount, per_unit, can_operating, can_reserve, after_pct, options),
    )


def _recommend(
    amount: Decimal,
    per_unit: Decimal,
    can_operating: bool,
    can_reserve: bool,
    after_pct: int,
    options: list[FundingOption],
) -> str:
    if amount <= BOARD_AUTHORITY_LIMIT and can_operating:
        return (
            "This is within typical board spending authority. Fund from operating budget; "
            "no owner vote likely needed."
        )
    if can_reserve and after_pct >= HEALTHY_RESERVES:
        return (
            "Reserves can cover this and stay above 50% funded. This is the cleanest option "
            "with no impact on unit owners."
        )
    if can_reserve and after_pct >= CRITICAL_RESERVES:
        return (
            "Reserves can cover this, but funding drops below 50%. Consider a partial reserve "
            "draw plus an increased reserve contribution next budget cycle."
        )
    if amount >= LARGE_PROJECT_THRESHOLD:
        return (
            "For a project this size, consider phasing the work across fiscal years, using "
            "reserves for Phase 1, or financing to spread the cost. A special assessment of "
            f"{_fmt(per_unit)}/unit is significant; installment plans reduce owner hardship."
        )
    if not can_operating and not can_reserve:
        return (
            "Neither operating budget nor reserves can cover this. A special assessment is "
            f"needed at {_fmt(per_unit)} per unit. Consider payment plans for amounts over "
            "$1,000/unit."
        )
    recommended = next((o for o in options if o.recommended), None)
    if recommended is not None:
        return recommended.impact
    return "Review the funding options to find the best fit."
