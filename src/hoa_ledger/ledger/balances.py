"""Account balances derived from ledger history.

Balances are never stored. Every figure here is recomputed from the
entries, and the debit-normal / credit-normal sign convention is applied
in exactly one place, balance_of(). Reports call these functions rather
than summing entries themselves.
"""

from collections.abc import Iterable
from decimal import Decimal

from hoa_ledger.ledger.chart import ChartOfAccounts
from hoa_ledger.ledger.models import Account, AccountType, LedgerEntry


def raw_balance(entries: Iterable[LedgerEntry], account_number: str) -> Decimal:
    """Debits minus credits for one account."""
    total = Decimal(0)
    for entry in entries:
        if entry.debit_account == account_number:
            total += entry.amount
        if entry.credit_account == account_number:
            total -= entry.amount
    return total


def normalize(account: Account, raw: Decimal) -> Decimal:
    """Apply the account's normal-balance sign to a debit-minus-credit figure."""
    return raw if account.increases_with_debit() else -raw


def balance_of(
    chart: ChartOfAccounts, entries: Iterable[LedgerEntry], account_number: str
) -> Decimal:
    """Balance of a single account in its natural sign.

    Asset and expense accounts report debits minus credits; liability,
    equity and income accounts report credits minus debits.

    Raises:
        UnknownAccountError: If the account isn't in the chart
    """
    account = chart.get(account_number)
    return normalize(account, raw_balance(entries, account_number))


def group_balance_of(
    chart: ChartOfAccounts, entries: Iterable[LedgerEntry], account_number: str
) -> Decimal:
    """Rollup balance of an account and everything beneath it.

    An account without children reports its own balance; otherwise the
    result is the sum of its children's group balances, at any depth.
    """
    entries = list(entries)
    children = chart.children(account_number)
    if not children:
        return balance_of(chart, entries, account_number)
    return sum(
        (group_balance_of(chart, entries, child.number) for child in children),
        Decimal(0),
    )


def type_total(
    chart: ChartOfAccounts, entries: Iterable[LedgerEntry], account_type: AccountType
) -> Decimal:
    """Sum of balance_of over every account of a type, headers included.

    Unlike a rollup, this also counts postings made directly to a header.
    """
    entries = list(entries)
    return sum(
        (balance_of(chart, entries, a.number) for a in chart if a.account_type == account_type),
        Decimal(0),
    )


def balances_by_account(
    chart: ChartOfAccounts, entries: Iterable[LedgerEntry]
) -> dict[str, Decimal]:
    """Natural-sign balance of every account in one pass over the entries."""
    raw: dict[str, Decimal] = {a.number: Decimal(0) for a in chart}
    for entry in entries:
        if entry.debit_account in raw:
            raw[entry.debit_account] += entry.amount
        if entry.credit_account in raw:
            raw[entry.credit_account] -= entry.amount
    return {number: normalize(chart.get(number), value) for number, value in raw.items()}
