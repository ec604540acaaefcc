"""Chart of accounts, posting engine and balance derivation."""

from hoa_ledger.ledger.balances import (
    balance_of,
    balances_by_account,
    group_balance_of,
    raw_balance,
    type_total,
)
from hoa_ledger.ledger.chart import ChartOfAccounts, default_chart
from hoa_ledger.ledger.journal import Ledger
from hoa_ledger.ledger.models import (
    Account,
    AccountType,
    EntrySource,
    EntryStatus,
    LedgerEntry,
    to_money,
)

__all__ = [
    "Account",
    "AccountType",
    "ChartOfAccounts",
    "EntrySource",
    "EntryStatus",
    "Ledger",
    "LedgerEntry",
    "balance_of",
    "balances_by_account",
    "default_chart",
    "group_balance_of",
    "raw_balance",
    "to_money",
    "type_total",
]
