"""Append-only general ledger (posting engine)."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from datetime import UTC, date, datetime
from decimal import Decimal

from hoa_ledger.exceptions import (
    InactiveAccountError,
    InvalidTransitionError,
    LedgerError,
    RecordNotFoundError,
    UnbalancedPostingError,
)
from hoa_ledger.ledger.chart import ChartOfAccounts
from hoa_ledger.ledger.models import EntrySource, LedgerEntry, to_money

logger = logging.getLogger(__name__)

ENTRY_ID_PREFIX = "GL"
FIRST_ENTRY_NUMBER = 1000


def entry_number(entry_id: str) -> int | None:
    """Numeric part of an entry id ("GL1017" -> 1017), None if malformed."""
    if not entry_id.startswith(ENTRY_ID_PREFIX):
        return None
    try:
        return int(entry_id[len(ENTRY_ID_PREFIX) :])
    except ValueError:
        return None


class Ledger:
    """Append-only sequence of balanced entries.

    post() is the only way money movement enters the system. Each entry
    moves one positive amount from a credit account to a different debit
    account, so total debits always equal total credits.

    Usage:
        ledger = Ledger(chart)
        entry = ledger.post(
            date(2026, 1, 1), "Assessment - Unit 101 (Jan)",
            "1110", "4010", Decimal("450"), EntrySource.ASSESSMENT, "101",
        )
        ledger.reverse(entry.id, date(2026, 1, 2))
    """

    def __init__(
        self,
        chart: ChartOfAccounts,
        entries: Iterable[LedgerEntry] = (),
        *,
        next_number: int | None = None,
    ) -> None:
        self.chart = chart
        self._entries: list[LedgerEntry] = list(entries)
        self._by_id: dict[str, LedgerEntry] = {e.id: e for e in self._entries}
        self._reversed: set[str] = {e.reverses for e in self._entries if e.reverses}

        # Keep ids monotonic even when the stored counter lags behind the entries
        highest = max(
            (n for n in (entry_number(e.id) for e in self._entries) if n is not None),
            default=FIRST_ENTRY_NUMBER - 1,
        )
        self._next_number = max(next_number or FIRST_ENTRY_NUMBER, highest + 1)

    def __iter__(self) -> Iterator[LedgerEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[LedgerEntry, ...]:
        return tuple(self._entries)

    @property
    def next_number(self) -> int:
        return self._next_number

    # -------------------------------------------------------------------------
    # Posting
    # -------------------------------------------------------------------------

    def post(
        self,
        entry_date: date,
        memo: str,
        debit_account: str,
        credit_account: str,
        amount: Decimal | int | float | str,
        source: EntrySource,
        source_id: str | None = None,
        *,
        reverses: str | None = None,
    ) -> LedgerEntry:
        """Append a new balanced entry.

        Raises:
            UnbalancedPostingError: If debit == credit or amount <= 0
            UnknownAccountError: If either account is missing from the chart
            InactiveAccountError: If either account is deactivated
        """
        amount = to_money(amount)
        if debit_account == credit_account:
            raise UnbalancedPostingError(
                f"Debit and credit account are both {debit_account}",
                debit_account=debit_account,
                credit_account=credit_account,
                amount=amount,
            )
        if amount <= 0:
            raise UnbalancedPostingError(
                f"Posting amount must be positive, got {amount}",
                debit_account=debit_account,
                credit_account=credit_account,
                amount=amount,
            )
        for number in (debit_account, credit_account):
            if not self.chart.get(number).active:
                raise InactiveAccountError(number)

        entry = LedgerEntry(
            id=f"{ENTRY_ID_PREFIX}{self._next_number}",
            date=entry_date,
            memo=memo,
            debit_account=debit_account,
            credit_account=credit_account,
            amount=amount,
            source=EntrySource(source),
            source_id=source_id,
            posted_at=datetime.now(UTC),
            reverses=reverses,
        )
        self._append(entry)
        logger.info(
            "Posted %s: Dr %s / Cr %s %s (%s)",
            entry.id,
            debit_account,
            credit_account,
            amount,
            entry.source,
        )
        return entry

    def reverse(self, entry_id: str, entry_date: date, memo: str | None = None) -> LedgerEntry:
        """Post an offsetting entry for `entry_id`.

        History is never edited: the original stays, and a new entry with
        debit and credit swapped cancels its effect on both accounts.

        Raises:
            RecordNotFoundError: If the entry doesn't exist
            InvalidTransitionError: If the entry is already reversed or is
                itself a reversal
        """
        original = self.get(entry_id)
        if original.reverses is not None:
            raise InvalidTransitionError(entry_id, current="reversal entry", requested="reverse")
        if entry_id in self._reversed:
            raise InvalidTransitionError(entry_id, current="reversed", requested="reverse")

        return self.post(
            entry_date,
            memo or f"Reversal of {entry_id}: {original.memo}",
            original.credit_account,
            original.debit_account,
            original.amount,
            original.source,
            original.source_id,
            reverses=entry_id,
        )

    def _append(self, entry: LedgerEntry) -> None:
        if entry.id in self._by_id:
            raise LedgerError(f"Duplicate ledger entry id: {entry.id}")
        self._entries.append(entry)
        self._by_id[entry.id] = entry
        if entry.reverses:
            self._reversed.add(entry.reverses)
        self._next_number += 1

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, entry_id: str) -> LedgerEntry:
        try:
            return self._by_id[entry_id]
        except KeyError:
            raise RecordNotFoundError("ledger entry", entry_id) from None

    def for_source_id(self, source_id: str) -> list[LedgerEntry]:
        return [e for e in self._entries if e.source_id == source_id]

    def between(self, start: date, end: date) -> list[LedgerEntry]:
        """Entries dated within [start, end], inclusive."""
        return [e for e in self._entries if start <= e.date <= end]

    def through(self, on: date) -> list[LedgerEntry]:
        """Entries dated on or before `on`."""
        return [e for e in self._entries if e.date <= on]

    def references(self, account_number: str) -> int:
        """Number of entries using the account on either side."""
        return sum(1 for e in self._entries if e.touches(account_number))

