"""Report result models."""

from datetime import date
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, Field

ZERO = Decimal(0)


class StatementLine(BaseModel):
    """One account's figure on a statement."""

    account_number: str = Field(alias="acctNum")
    name: str
    amount: Decimal

    model_config = {"populate_by_name": True}


# =============================================================================
# Balance sheet
# =============================================================================


class AssetSection(BaseModel):
    """Assets side of the balance sheet.

    Named lines cover the standard accounts; `other` lists every other
    asset account with a balance, so `total` accounts for all of them.
    """

    operating: Decimal = ZERO
    reserves: Decimal = ZERO
    petty_cash: Decimal = Field(default=ZERO, alias="pettyCash")
    assessments_ar: Decimal = Field(default=ZERO, alias="assessmentsAR")
    special_ar: Decimal = Field(default=ZERO, alias="specialAR")
    late_fees_ar: Decimal = Field(default=ZERO, alias="lateFeesAR")
    insurance_ar: Decimal = Field(default=ZERO, alias="insuranceAR")
    prepaid: Decimal = ZERO
    other: list[StatementLine] = Field(default_factory=list)
    total_current: Decimal = Field(default=ZERO, alias="totalCurrent")
    total_receivable: Decimal = Field(default=ZERO, alias="totalReceivable")
    total: Decimal = ZERO

    model_config = {"populate_by_name": True}


class LiabilitySection(BaseModel):
    payable: Decimal = ZERO
    prepaid_assessments: Decimal = Field(default=ZERO, alias="prepaidAssessments")
    deposits: Decimal = ZERO
    accrued: Decimal = ZERO
    other: list[StatementLine] = Field(default_factory=list)
    total: Decimal = ZERO

    model_config = {"populate_by_name": True}


class EquitySection(BaseModel):
    """Fund balances plus the not-yet-closed surplus (income less expenses)."""

    operating_fund: Decimal = Field(default=ZERO, alias="operatingFund")
    reserve_fund: Decimal = Field(default=ZERO, alias="reserveFund")
    retained: Decimal = ZERO
    other: list[StatementLine] = Field(default_factory=list)
    current_surplus: Decimal = Field(default=ZERO, alias="currentSurplus")
    total: Decimal = ZERO

    model_config = {"populate_by_name": True}


class BalanceSheet(BaseModel):
    as_of: date = Field(alias="asOf")
    assets: AssetSection
    liabilities: LiabilitySection
    equity: EquitySection

    model_config = {"populate_by_name": True}

    @property
    def is_balanced(self) -> bool:
        """Return True if assets equal liabilities plus equity."""
        return self.assets.total == self.liabilities.total + self.equity.total


# =============================================================================
# Income statement and budget
# =============================================================================


class IncomeStatement(BaseModel):
    """Activity of income and expense accounts within an inclusive window."""

    start: date
    end: date
    income: list[StatementLine] = Field(default_factory=list)
    expenses: list[StatementLine] = Field(default_factory=list)
    total_income: Decimal = Field(default=ZERO, alias="totalIncome")
    total_expenses: Decimal = Field(default=ZERO, alias="totalExpenses")
    net_income: Decimal = Field(default=ZERO, alias="netIncome")

    model_config = {"populate_by_name": True}


class BudgetVarianceRow(BaseModel):
    """Budget vs. actual for one category.

    `pct` is actual as a whole-number percentage of budget, or None when
    nothing was budgeted.
    """

    id: str
    name: str
    budgeted: Decimal
    actual: Decimal
    variance: Decimal
    pct: int | None = None
    account_number: str | None = Field(default=None, alias="acctNum")

    model_config = {"populate_by_name": True}


class OperatingBudget(BaseModel):
    annual_revenue: Decimal = Field(alias="annualRevenue")
    reserve_contribution: Decimal = Field(alias="reserveContribution")
    operating_budget: Decimal = Field(alias="operatingBudget")
    total_allocated: Decimal = Field(alias="totalAllocated")
    unallocated: Decimal
    over_allocated: bool = Field(alias="overAllocated")

    model_config = {"populate_by_name": True}


# =============================================================================
# Receivables
# =============================================================================


class AgingRow(BaseModel):
    unit_number: str = Field(alias="unitNumber")
    owner: str = ""
    balance: Decimal
    monthly_fee: Decimal = Field(alias="monthlyFee")

    model_config = {"populate_by_name": True}


class DelinquencyAging(BaseModel):
    """Delinquent units bucketed by how many monthly fees they owe.

    This approximates age from the size of the balance; it does not look
    at when charges were billed.
    """

    current: list[AgingRow] = Field(default_factory=list)
    days30: list[AgingRow] = Field(default_factory=list)
    days60: list[AgingRow] = Field(default_factory=list)
    days90plus: list[AgingRow] = Field(default_factory=list)
    total_outstanding: Decimal = Field(default=ZERO, alias="totalOutstanding")

    model_config = {"populate_by_name": True}


class IncomeMetrics(BaseModel):
    total_units: int = Field(alias="totalUnits")
    occupied_units: int = Field(alias="occupiedUnits")
    current_units: int = Field(alias="currentUnits")
    delinquent_units: int = Field(alias="delinquentUnits")
    monthly_expected: Decimal = Field(alias="monthlyExpected")
    monthly_collected: Decimal = Field(alias="monthlyCollected")
    total_outstanding: Decimal = Field(alias="totalOutstanding")
    collection_rate: int = Field(alias="collectionRate")
    annual_expected: Decimal = Field(alias="annualExpected")
    annual_collected: Decimal = Field(alias="annualCollected")

    model_config = {"populate_by_name": True}


# =============================================================================
# Reserves and funding
# =============================================================================


class ReserveStatusRow(BaseModel):
    id: str
    name: str
    estimated_cost: Decimal = Field(alias="estimatedCost")
    current_funding: Decimal = Field(alias="currentFunding")
    years_remaining: Decimal = Field(alias="yearsRemaining")
    is_contingency: bool = Field(default=False, alias="isContingency")
    gap: Decimal
    pct: int
    annual_needed: Decimal = Field(alias="annualNeeded")

    model_config = {"populate_by_name": True}


class FundingSource(StrEnum):
    OPERATING = "operating"
    RESERVES = "reserves"
    SPECIAL_ASSESSMENT = "special_assessment"
    INSURANCE = "insurance"
    LOAN = "loan"


class FundingContext(BaseModel):
    """Financial position used to weigh how to pay for a project."""

    operating_balance: Decimal = Field(alias="operatingBalance")
    reserve_balance: Decimal = Field(alias="reserveBalance")
    total_reserve_needed: Decimal = Field(alias="totalReserveNeeded")
    reserve_pct_funded: int = Field(alias="reservePctFunded")
    total_units: int = Field(alias="totalUnits")
    budget_remaining: Decimal = Field(alias="budgetRemaining")
    total_budgeted: Decimal = Field(alias="totalBudgeted")
    total_spent: Decimal = Field(alias="totalSpent")

    model_config = {"populate_by_name": True}


class FundingOption(BaseModel):
    source: FundingSource
    label: str
    available: bool
    impact: str
    per_unit: Decimal = Field(default=ZERO, alias="perUnit")
    recommended: bool = False

    model_config = {"populate_by_name": True}


class FundingAnalysis(BaseModel):
    amount: Decimal
    options: list[FundingOption]
    recommendation: str


# =============================================================================
# Reconciliation and trial balance
# =============================================================================


class UnitReconciliation(BaseModel):
    """Stored unit balance against its history and the ledger.

    `consistent` compares the stored balance with the balance replayed
    from the unit's records. `ledger_difference` is informational: waived
    late fees and overpayments legitimately leave the ledger receivable
    apart from the unit balance.
    """

    unit_number: str = Field(alias="unitNumber")
    stored_balance: Decimal = Field(alias="storedBalance")
    derived_balance: Decimal = Field(alias="derivedBalance")
    ledger_receivable: Decimal = Field(alias="ledgerReceivable")
    consistent: bool
    ledger_difference: Decimal = Field(alias="ledgerDifference")

    model_config = {"populate_by_name": True}


class BudgetReconciliation(BaseModel):
    """Category expense detail against its mapped ledger account."""

    category_id: str = Field(alias="categoryId")
    name: str
    expense_total: Decimal = Field(alias="expenseTotal")
    account_number: str | None = Field(default=None, alias="acctNum")
    account_balance: Decimal | None = Field(default=None, alias="accountBalance")
    difference: Decimal = ZERO
    consistent: bool = True

    model_config = {"populate_by_name": True}


class TrialBalanceRow(BaseModel):
    account_number: str = Field(alias="acctNum")
    name: str
    account_type: str = Field(alias="type")
    debits: Decimal
    credits: Decimal
    balance: Decimal

    model_config = {"populate_by_name": True}


class TrialBalance(BaseModel):
    rows: list[TrialBalanceRow] = Field(default_factory=list)
    total_debits: Decimal = Field(default=ZERO, alias="totalDebits")
    total_credits: Decimal = Field(default=ZERO, alias="totalCredits")

    model_config = {"populate_by_name": True}

    @property
    def is_balanced(self) -> bool:
        return self.total_debits == self.total_credits
