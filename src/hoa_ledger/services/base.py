"""Base service with common functionality."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from hoa_ledger.ledger.models import EntrySource, LedgerEntry
from hoa_ledger.sync.records import SyncTable

if TYPE_CHECKING:
    from hoa_ledger.engine import LedgerEngine
    from hoa_ledger.state import LedgerState


class BaseService:
    """Base class for engine services.

    Services hold a reference to the engine rather than to the state,
    because a rolled-back transaction swaps the engine's state object.
    """

    def __init__(self, engine: LedgerEngine) -> None:
        self._engine = engine

    @property
    def state(self) -> LedgerState:
        return self._engine.state

    def _post(
        self,
        entry_date: date,
        memo: str,
        debit_account: str,
        credit_account: str,
        amount: Decimal,
        source: EntrySource,
        source_id: str | None,
    ) -> LedgerEntry:
        """Post through the ledger and queue the entry for the mirror."""
        entry = self.state.ledger.post(
            entry_date, memo, debit_account, credit_account, amount, source, source_id
        )
        self._engine.touch(SyncTable.GENERAL_LEDGER, entry.id)
        return entry
