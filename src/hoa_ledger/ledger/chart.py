"""Chart of accounts for HOA double-entry bookkeeping."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import replace

from hoa_ledger.exceptions import ChartStructureError, UnknownAccountError
from hoa_ledger.ledger.models import HEADER, Account, AccountType

logger = logging.getLogger(__name__)

# =============================================================================
# STANDARD ACCOUNT NUMBERS
# =============================================================================
# Subsidiary operations post against these accounts. They are created by
# default_chart() and must exist in any tenant chart that uses the unit,
# invoice and work order services.
# =============================================================================

# Assets (debit increases)
OPERATING_CASH = "1010"
RESERVE_CASH = "1020"
PETTY_CASH = "1030"
ASSESSMENTS_RECEIVABLE = "1110"
SPECIAL_ASSESSMENTS_RECEIVABLE = "1120"
LATE_FEES_RECEIVABLE = "1130"
INSURANCE_RECEIVABLE = "1140"
PREPAID_EXPENSES = "1200"

# Liabilities (credit increases)
ACCOUNTS_PAYABLE = "2010"
PREPAID_ASSESSMENTS = "2020"
SECURITY_DEPOSITS = "2030"
ACCRUED_EXPENSES = "2040"

# Equity (credit increases)
OPERATING_FUND = "3010"
RESERVE_FUND = "3020"
RETAINED_SURPLUS = "3030"

# Income (credit increases)
ASSESSMENT_INCOME = "4010"
SPECIAL_ASSESSMENT_INCOME = "4020"
LATE_FEE_INCOME = "4030"

# Expenses (debit increases)
ADMINISTRATIVE_EXPENSE = "5070"

RECEIVABLE_ACCOUNTS = (
    ASSESSMENTS_RECEIVABLE,
    SPECIAL_ASSESSMENTS_RECEIVABLE,
    LATE_FEES_RECEIVABLE,
)


class ChartOfAccounts:
    """Hierarchical catalog of accounts keyed by account number.

    The chart is a tree: every non-root account points at an existing
    header, and parents can't change after creation, so cycles can't be
    introduced through the public operations. Charts loaded from storage
    go through from_accounts(), which checks the same rules.

    Children are found by scanning for parent equality, which is fine at
    the size of an association's chart.
    """

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}

    @classmethod
    def from_accounts(cls, accounts: Iterable[Account]) -> ChartOfAccounts:
        """Build a chart from existing accounts, validating its structure.

        Raises:
            ChartStructureError: On duplicate numbers, parents that are missing
                or not headers, or parent cycles
        """
        chart = cls()
        for account in accounts:
            if account.number in chart._accounts:
                raise ChartStructureError(f"Duplicate account number: {account.number}")
            chart._accounts[account.number] = account

        for account in chart._accounts.values():
            if account.parent is None:
                continue
            parent = chart._accounts.get(account.parent)
            if parent is None:
                raise ChartStructureError(
                    f"Account {account.number} references missing parent {account.parent}"
                )
            if not parent.is_header:
                raise ChartStructureError(
                    f"Account {account.number} has non-header parent {account.parent}"
                )

        for account in chart._accounts.values():
            chart._check_acyclic(account.number)

        chart._sort()
        return chart

    def _check_acyclic(self, number: str) -> None:
        seen: set[str] = set()
        current: str | None = number
        while current is not None:
            if current in seen:
                raise ChartStructureError(f"Cycle in chart of accounts at {current}")
            seen.add(current)
            current = self._accounts[current].parent

    def _sort(self) -> None:
        self._accounts = dict(sorted(self._accounts.items()))

    def __contains__(self, number: object) -> bool:
        return number in self._accounts

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts.values())

    def __len__(self) -> int:
        return len(self._accounts)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get(self, number: str) -> Account:
        """Get an account by exact number.

        Raises:
            UnknownAccountError: If no account has this number
        """
        try:
            return self._accounts[number]
        except KeyError:
            raise UnknownAccountError(number) from None

    def find(self, number: str) -> Account | None:
        return self._accounts.get(number)

    def children(self, number: str) -> list[Account]:
        """Direct children of an account, in number order."""
        return [a for a in self._accounts.values() if a.parent == number]

    def roots(self) -> list[Account]:
        return [a for a in self._accounts.values() if a.parent is None]

    def by_type(self, account_type: AccountType) -> list[Account]:
        """Detail (non-header) accounts of a type."""
        return [
            a for a in self._accounts.values() if a.account_type == account_type and not a.is_header
        ]

    def leaf_descendants(self, number: str) -> list[Account]:
        """All accounts under `number` that have no children of their own."""
        kids = self.children(number)
        if not kids:
            return [self.get(number)]
        leaves: list[Account] = []
        for child in kids:
            leaves.extend(self.leaf_descendants(child.number))
        return leaves

    def for_budget_category(self, category_id: str) -> Account | None:
        """Account mapped to a budget category, if any."""
        for account in self._accounts.values():
            if account.budget_category == category_id:
                return account
        return None

    def nearest_header(self, number: str) -> Account | None:
        """Walk up from `number` (inclusive) to the first header."""
        account = self._accounts.get(number)
        while account is not None and not account.is_header:
            account = self._accounts.get(account.parent) if account.parent else None
        return account

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_section(self, number: str, name: str, account_type: AccountType) -> Account:
        """Create a root header account.

        Raises:
            ChartStructureError: If the number is already used
        """
        self._ensure_unused(number)
        account = Account(
            number=number,
            name=name,
            account_type=AccountType(account_type),
            sub=HEADER,
            parent=None,
        )
        self._accounts[number] = account
        self._sort()
        logger.info("Added section %s (%s)", account.display_name, account.account_type)
        return account

    def add_account(
        self,
        number: str,
        name: str,
        parent_number: str,
        sub: str = "detail",
        *,
        budget_category: str | None = None,
        reserve_item: str | None = None,
    ) -> Account:
        """Create an account under an existing header.

        The account type is inherited from the nearest header ancestor.
        A sub of "header" creates a nested group.

        Raises:
            ChartStructureError: If the number is taken or the parent isn't a header
            UnknownAccountError: If the parent doesn't exist
        """
        self._ensure_unused(number)
        parent = self.get(parent_number)
        if not parent.is_header:
            raise ChartStructureError(
                f"Parent {parent_number} is not a header account; cannot add {number} under it"
            )
        account = Account(
            number=number,
            name=name,
            account_type=parent.account_type,
            sub=sub,
            parent=parent_number,
            budget_category=budget_category,
            reserve_item=reserve_item,
        )
        self._accounts[number] = account
        self._sort()
        logger.info("Added account %s under %s", account.display_name, parent_number)
        return account

    def rename(self, number: str, name: str) -> Account:
        return self._replace(number, name=name)

    def set_active(self, number: str, active: bool) -> Account:
        return self._replace(number, active=active)

    def update(self, number: str, name: str, active: bool) -> Account:
        """Rename and (de)activate in one step."""
        return self._replace(number, name=name, active=active)

    def remove(self, number: str) -> Account:
        """Drop an account from the chart.

        Callers must check ledger references first; see
        AccountsService.delete().
        """
        account = self.get(number)
        del self._accounts[number]
        logger.info("Deleted account %s", account.display_name)
        return account

    def _replace(self, number: str, **changes: object) -> Account:
        account = replace(self.get(number), **changes)
        self._accounts[number] = account
        return account

    def _ensure_unused(self, number: str) -> None:
        if number in self._accounts:
            raise ChartStructureError(f"Account number already exists: {number}")


def default_chart() -> ChartOfAccounts:
    """Standard chart for a homeowners association.

    Operating expense accounts 5010-5060 are mapped to the default budget
    categories (cat1-cat6) and reserve expense accounts 6010-6050 to the
    default reserve items (res1-res5).
    """
    chart = ChartOfAccounts()

    chart.add_section("1000", "Assets", AccountType.ASSET)
    chart.add_account(OPERATING_CASH, "Operating Checking", "1000", "bank")
    chart.add_account(RESERVE_CASH, "Reserve Savings", "1000", "bank")
    chart.add_account(PETTY_CASH, "Petty Cash", "1000", "bank")
    chart.add_account("1100", "Accounts Receivable", "1000", HEADER)
    chart.add_account(ASSESSMENTS_RECEIVABLE, "Assessments Receivable", "1100", "receivable")
    chart.add_account(
        SPECIAL_ASSESSMENTS_RECEIVABLE, "Special Assessments Receivable", "1100", "receivable"
    )
    chart.add_account(LATE_FEES_RECEIVABLE, "Late Fees Receivable", "1100", "receivable")
    chart.add_account(INSURANCE_RECEIVABLE, "Insurance Claims Receivable", "1100", "receivable")
    chart.add_account(PREPAID_EXPENSES, "Prepaid Expenses", "1000", "prepaid")

    chart.add_section("2000", "Liabilities", AccountType.LIABILITY)
    chart.add_account(ACCOUNTS_PAYABLE, "Accounts Payable", "2000", "payable")
    chart.add_account(PREPAID_ASSESSMENTS, "Prepaid Assessments", "2000", "deferred")
    chart.add_account(SECURITY_DEPOSITS, "Security Deposits Held", "2000", "deposit")
    chart.add_account(ACCRUED_EXPENSES, "Accrued Expenses", "2000", "accrued")

    chart.add_section("3000", "Equity", AccountType.EQUITY)
    chart.add_account(OPERATING_FUND, "Operating Fund Balance", "3000", "fund")
    chart.add_account(RESERVE_FUND, "Reserve Fund Balance", "3000", "fund")
    chart.add_account(RETAINED_SURPLUS, "Retained Surplus / (Deficit)", "3000", "retained")

    chart.add_section("4000", "Income", AccountType.INCOME)
    chart.add_account(ASSESSMENT_INCOME, "Regular Assessments", "4000", "assessment")
    chart.add_account(SPECIAL_ASSESSMENT_INCOME, "Special Assessments", "4000", "assessment")
    chart.add_account(LATE_FEE_INCOME, "Late Fees", "4000", "fee")
    chart.add_account("4040", "Interest Income", "4000", "interest")
    chart.add_account("4050", "Move-In/Move-Out Fees", "4000", "fee")
    chart.add_account("4060", "Amenity Rental Income", "4000", "fee")
    chart.add_account("4070", "Fines & Penalties", "4000", "fee")
    chart.add_account("4080", "Insurance Proceeds", "4000", "other")
    chart.add_account("4090", "Other Income", "4000", "other")

    chart.add_section("5000", "Operating Expenses", AccountType.EXPENSE)
    operating = [
        ("5010", "Maintenance & Repairs", "cat1"),
        ("5020", "Utilities", "cat2"),
        ("5030", "Landscaping", "cat3"),
        ("5040", "Insurance", "cat4"),
        ("5050", "Management Fees", "cat5"),
        ("5060", "Legal & Professional", "cat6"),
        (ADMINISTRATIVE_EXPENSE, "Administrative", None),
        ("5080", "Security", None),
        ("5090", "Cleaning & Janitorial", None),
        ("5100", "Pest Control", None),
    ]
    for number, name, category in operating:
        chart.add_account(number, name, "5000", "operating", budget_category=category)

    chart.add_section("6000", "Reserve Expenses", AccountType.EXPENSE)
    reserve = [
        ("6010", "Roof Replacement", "res1"),
        ("6020", "HVAC System", "res2"),
        ("6030", "Elevator Modernization", "res3"),
        ("6040", "Parking Lot Resurfacing", "res4"),
        ("6050", "Contingency", "res5"),
    ]
    for number, name, item in reserve:
        chart.add_account(number, name, "6000", "reserve", reserve_item=item)

    return chart
