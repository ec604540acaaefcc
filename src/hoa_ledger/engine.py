"""Main ledger engine."""

import copy
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from hoa_ledger.config import LedgerConfig
from hoa_ledger.reports import Reports
from hoa_ledger.services import (
    AccountsService,
    BudgetService,
    InvoicesService,
    JournalService,
    ReservesService,
    UnitsService,
    WorkOrdersService,
)
from hoa_ledger.state import LedgerState
from hoa_ledger.store import JsonFileStore, Snapshot
from hoa_ledger.store.snapshot import AccountRecord, EntryRecord
from hoa_ledger.sync.records import SyncRecord, SyncTable

logger = logging.getLogger(__name__)


class LedgerEngine:
    """Owned financial state of one tenant plus the operations on it.

    The engine is a single-writer, synchronous state machine. Operations
    are grouped into services sharing the same state:

        engine.accounts      chart of accounts management
        engine.journal       posting, transfers, reversals
        engine.units         payments, late fees, special assessments, billing
        engine.invoices      unit invoices
        engine.work_orders   vendor work order lifecycle
        engine.budget        budget categories and expenses
        engine.reserves      reserve study items
        engine.reports       read-side reports (pure)

    Usage (in memory):
        engine = LedgerEngine()
        engine.units.add_unit(Unit(number="101", monthly_fee=Decimal("450")))
        engine.units.bill_monthly_assessment("101", date(2026, 1, 1))
        engine.units.record_payment("101", Decimal("450"), "ACH")
        sheet = engine.reports.balance_sheet()

    Usage (persisted):
        engine = LedgerEngine.open(LedgerConfig.load())
        engine.journal.post_manual_entry(...)  # snapshot written before returning

    Every mutation runs inside transaction(): the denormalized record
    update, its ledger posting and the snapshot write either all happen
    or, if anything raises, the in-memory state is restored to what it
    was before the operation.
    """

    def __init__(
        self,
        state: LedgerState | None = None,
        *,
        store: JsonFileStore | None = None,
        track_sync: bool = False,
        outbox: list[SyncRecord] | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            state: Existing state (a fresh standard chart if not provided)
            store: Optional durable store written on every committed mutation
            track_sync: Queue changed rows in the outbox for the remote mirror
            outbox: Previously queued rows that haven't been pushed yet
        """
        self.state = state or LedgerState.new()
        self.store = store
        self.track_sync = track_sync
        self.outbox: list[SyncRecord] = list(outbox or [])

        self._depth = 0
        self._touched: dict[tuple[SyncTable, str], None] = {}

        # Initialize service modules
        self.accounts = AccountsService(self)
        self.journal = JournalService(self)
        self.units = UnitsService(self)
        self.invoices = InvoicesService(self)
        self.work_orders = WorkOrdersService(self)
        self.budget = BudgetService(self)
        self.reserves = ReservesService(self)
        self.reports = Reports(self)

    @classmethod
    def from_snapshot(
        cls,
        snapshot: Snapshot,
        *,
        store: JsonFileStore | None = None,
        track_sync: bool = False,
    ) -> "LedgerEngine":
        return cls(
            LedgerState.from_snapshot(snapshot),
            store=store,
            track_sync=track_sync,
            outbox=snapshot.outbox,
        )

    @classmethod
    def open(cls, config: LedgerConfig) -> "LedgerEngine":
        """Load the tenant's engine from its store, or start a new one.

        A new engine gets the standard chart and is saved immediately.
        """
        store = JsonFileStore(config.store_path)
        snapshot = store.load()
        if snapshot is not None:
            logger.debug("Loaded tenant %s from %s", config.tenant_id, store.path)
            return cls.from_snapshot(snapshot, store=store, track_sync=config.sync_enabled)

        engine = cls(
            LedgerState.new(tenant_id=config.tenant_id),
            store=store,
            track_sync=config.sync_enabled,
        )
        engine.save()
        return engine

    @property
    def tenant_id(self) -> str:
        return self.state.tenant_id

    # -------------------------------------------------------------------------
    # Transactions and persistence
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[LedgerState]:
        """Run a mutation atomically.

        Nested transactions join the outermost one. On success the touched
        rows are queued for the mirror and the snapshot is saved; on any
        exception the state and outbox are restored and the error re-raised.
        """
        if self._depth:
            self._depth += 1
            try:
                yield self.state
            finally:
                self._depth -= 1
            return

        saved_state, saved_outbox = copy.deepcopy((self.state, self.outbox))
        self._depth = 1
        try:
            yield self.state
            self._queue_touched()
            if self.store is not None:
                self.store.save(self.snapshot())
        except Exception:
            logger.warning("Operation failed, restoring tenant %s state", self.tenant_id)
            self.state = saved_state
            self.outbox = saved_outbox
            raise
        finally:
            self._depth = 0
            self._touched.clear()

    def touch(self, table: SyncTable, key: str) -> None:
        """Mark a row as changed in the current transaction."""
        self._touched[(table, key)] = None

    def snapshot(self) -> Snapshot:
        """Persisted shape of the current state, including the outbox."""
        snapshot = self.state.to_snapshot()
        snapshot.outbox = [r.model_copy(deep=True) for r in self.outbox]
        return snapshot

    def save(self) -> None:
        """Write the current state to the store, if one is attached."""
        if self.store is not None:
            self.store.save(self.snapshot())

    def drain_outbox(self, pushed: list[SyncRecord]) -> None:
        """Drop rows the mirror accepted and persist the shorter outbox."""
        accepted = {id(r) for r in pushed}
        self.outbox = [r for r in self.outbox if id(r) not in accepted]
        self.save()

    def _queue_touched(self) -> None:
        if not self.track_sync:
            return
        for table, key in self._touched:
            self.outbox.append(SyncRecord(table=table, key=key, payload=self._row(table, key)))

    def _row(self, table: SyncTable, key: str) -> dict[str, Any] | None:
        """Current payload of a row, or None if it was deleted."""
        state = self.state
        match table:
            case SyncTable.CHART_OF_ACCOUNTS:
                account = state.chart.find(key)
                return _dump(AccountRecord.from_account(account)) if account else None
            case SyncTable.GENERAL_LEDGER:
                return _dump(EntryRecord.from_entry(state.ledger.get(key)))
            case SyncTable.UNITS:
                unit = state.units.get(key)
                return _dump(unit) if unit else None
            case SyncTable.UNIT_INVOICES:
                invoice = state.invoices.get(key)
                return _dump(invoice) if invoice else None
            case SyncTable.WORK_ORDERS:
                work_order = state.work_orders.get(key)
                return _dump(work_order) if work_order else None
            case SyncTable.BUDGET_CATEGORIES:
                category = state.budget_categories.get(key)
                return _dump(category) if category else None
            case SyncTable.RESERVE_ITEMS:
                item = state.reserve_items.get(key)
                return _dump(item) if item else None
            case SyncTable.FINANCIAL_SETTINGS:
                return _dump(state.settings)


def _dump(model: Any) -> dict[str, Any]:
    result: dict[str, Any] = model.model_dump(mode="json", by_alias=True)
    return result
