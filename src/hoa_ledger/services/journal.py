"""Direct ledger postings."""

from datetime import date
from decimal import Decimal

from hoa_ledger.exceptions import InvalidTransitionError
from hoa_ledger.ledger.models import EntrySource, LedgerEntry, to_money
from hoa_ledger.services.base import BaseService
from hoa_ledger.sync.records import SyncTable

# Entries these sources post with a source id belong to a unit, invoice,
# work order or expense record and are only changed through that record.
RECORD_SOURCES = frozenset(
    {
        EntrySource.ASSESSMENT,
        EntrySource.PAYMENT,
        EntrySource.FEE,
        EntrySource.EXPENSE,
        EntrySource.CASE,
    }
)


class JournalService(BaseService):
    """Posting, transfers and reversals against the general ledger."""

    def post(
        self,
        entry_date: date,
        memo: str,
        debit_account: str,
        credit_account: str,
        amount: Decimal | int | str,
        source: EntrySource = EntrySource.MANUAL,
        source_id: str | None = None,
    ) -> LedgerEntry:
        """Append one balanced entry.

        Raises:
            UnbalancedPostingError: If debit == credit or amount <= 0
            UnknownAccountError: If either account doesn't exist
            InactiveAccountError: If either account is deactivated
        """
        with self._engine.transaction():
            return self._post(
                entry_date, memo, debit_account, credit_account, to_money(amount), source, source_id
            )

    def post_manual_entry(
        self,
        entry_date: date,
        memo: str,
        debit_account: str,
        credit_account: str,
        amount: Decimal | int | str,
    ) -> LedgerEntry:
        return self.post(
            entry_date, memo, debit_account, credit_account, amount, EntrySource.MANUAL
        )

    def post_transfer(
        self,
        entry_date: date,
        memo: str,
        from_account: str,
        to_account: str,
        amount: Decimal | int | str,
    ) -> LedgerEntry:
        """Move money between accounts (e.g. operating to reserve savings)."""
        return self.post(entry_date, memo, to_account, from_account, amount, EntrySource.TRANSFER)

    def reverse(
        self, entry_id: str, entry_date: date | None = None, memo: str | None = None
    ) -> LedgerEntry:
        """Post an entry offsetting `entry_id`; the original stays in the ledger.

        Raises:
            RecordNotFoundError: If the entry doesn't exist
            InvalidTransitionError: If it is already reversed, is a reversal, or
                was posted by a unit, invoice, work order or budget expense
        """
        with self._engine.transaction() as state:
            original = state.ledger.get(entry_id)
            if original.source in RECORD_SOURCES and original.source_id:
                raise InvalidTransitionError(
                    entry_id,
                    current=f"owned by {original.source} record {original.source_id}",
                    requested="reverse",
                )
            entry = state.ledger.reverse(entry_id, entry_date or date.today(), memo)
            self._engine.touch(SyncTable.GENERAL_LEDGER, entry.id)
        return entry

    def get(self, entry_id: str) -> LedgerEntry:
        return self.state.ledger.get(entry_id)

    def list_entries(
        self,
        *,
        account: str | None = None,
        source: EntrySource | None = None,
        search: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[LedgerEntry]:
        """Filter the ledger by account, source, memo text and date range."""
        entries = list(self.state.ledger)
        if account:
            entries = [e for e in entries if e.touches(account)]
        if source:
            entries = [e for e in entries if e.source == source]
        if search:
            needle = search.lower()
            entries = [
                e
                for e in entries
                if needle in e.memo.lower() or needle in (e.source_id or "").lower()
            ]
        if start:
            entries = [e for e in entries if e.date >= start]
        if end:
            entries = [e for e in entries if e.date <= end]
        return entries
