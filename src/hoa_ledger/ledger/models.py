"""Double-entry bookkeeping models."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum

CENT = Decimal("0.01")


def to_money(value: Decimal | int | float | str) -> Decimal:
    """Coerce a numeric value to a two-decimal currency amount."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


class AccountType(StrEnum):
    """Classification of accounts in double-entry bookkeeping.

    Debit increases: ASSET, EXPENSE
    Credit increases: LIABILITY, EQUITY, INCOME
    """

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def is_debit_normal(self) -> bool:
        """Return True if debits increase accounts of this type."""
        return self in (AccountType.ASSET, AccountType.EXPENSE)


HEADER = "header"


@dataclass(frozen=True)
class Account:
    """A ledger account in the chart of accounts.

    Attributes:
        number: Unique sortable key (e.g., "1010"); hierarchy lives in `parent`
        name: Human-readable name
        account_type: The type classification (asset, liability, etc.)
        sub: "header" for grouping accounts, otherwise a detail kind
            such as "bank", "receivable" or "operating"
        parent: Number of the parent header, or None for roots
        active: Inactive accounts stay in reports but accept no postings
        budget_category: Budget category id whose actuals come from this account
        reserve_item: Reserve item id this account tracks spending for

    The numbering convention groups accounts by thousands:
        1000 Assets        1010 Operating Checking
        4000 Income        4030 Late Fees
        5000 Operating     5010 Maintenance & Repairs
    """

    number: str
    name: str
    account_type: AccountType
    sub: str = "detail"
    parent: str | None = None
    active: bool = True
    budget_category: str | None = None
    reserve_item: str | None = None

    @property
    def is_header(self) -> bool:
        """Return True if this account groups other accounts."""
        return self.sub == HEADER

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def display_name(self) -> str:
        return f"{self.number} · {self.name}"

    def increases_with_debit(self) -> bool:
        """Return True if debits increase this account's balance."""
        return self.account_type.is_debit_normal


class EntrySource(StrEnum):
    """What caused a ledger posting."""

    ASSESSMENT = "assessment"
    PAYMENT = "payment"
    FEE = "fee"
    EXPENSE = "expense"
    TRANSFER = "transfer"
    MANUAL = "manual"
    CASE = "case"


class EntryStatus(StrEnum):
    POSTED = "posted"


@dataclass(frozen=True)
class LedgerEntry:
    """A single balanced posting moving an amount between two accounts.

    Entries are immutable. Corrections are new entries; a reversal
    carries the id of the entry it offsets in `reverses`.

    Attributes:
        id: Ledger-unique id ("GL1000", "GL1001", ...)
        date: Accounting date of the movement
        memo: Description shown in the journal
        debit_account: Account number debited
        credit_account: Account number credited
        amount: Positive two-decimal amount
        source: What caused the posting
        source_id: Back-reference to the subsidiary record (unit number,
            invoice id, work order id, ...)
        posted_at: When the entry was appended
        status: Always POSTED
        reverses: Id of the entry this one offsets, if any
    """

    id: str
    date: date
    memo: str
    debit_account: str
    credit_account: str
    amount: Decimal
    source: EntrySource
    source_id: str | None = None
    posted_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    status: EntryStatus = EntryStatus.POSTED
    reverses: str | None = None

    def touches(self, account_number: str) -> bool:
        """Return True if the account is on either side of this entry."""
        return account_number in (self.debit_account, self.credit_account)

    def signed_amount(self, account_number: str) -> Decimal:
        """Debit-minus-credit effect of this entry on one account."""
        if self.debit_account == account_number:
            return self.amount
        if self.credit_account == account_number:
            return -self.amount
        return Decimal(0)
