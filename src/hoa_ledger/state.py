"""In-memory financial state of one tenant."""

from dataclasses import dataclass, field
from decimal import Decimal

from hoa_ledger.exceptions import RecordNotFoundError
from hoa_ledger.ledger import (
    ChartOfAccounts,
    Ledger,
    balance_of,
    default_chart,
    group_balance_of,
)
from hoa_ledger.models import (
    BudgetCategory,
    FinancialSettings,
    ReserveItem,
    Unit,
    UnitInvoice,
    WorkOrder,
)
from hoa_ledger.store.snapshot import AccountRecord, EntryRecord, Snapshot


@dataclass
class LedgerState:
    """Everything the engine owns: chart, ledger and subsidiary records.

    Records are keyed by id (units by number) and kept in insertion order.
    """

    chart: ChartOfAccounts
    ledger: Ledger
    tenant_id: str = "default"
    units: dict[str, Unit] = field(default_factory=dict)
    budget_categories: dict[str, BudgetCategory] = field(default_factory=dict)
    reserve_items: dict[str, ReserveItem] = field(default_factory=dict)
    work_orders: dict[str, WorkOrder] = field(default_factory=dict)
    invoices: dict[str, UnitInvoice] = field(default_factory=dict)
    settings: FinancialSettings = field(default_factory=FinancialSettings)
    work_order_seq: int = 0

    @classmethod
    def new(
        cls, chart: ChartOfAccounts | None = None, *, tenant_id: str = "default"
    ) -> "LedgerState":
        """Empty state over the given chart (the standard HOA chart by default)."""
        chart = chart or default_chart()
        return cls(chart=chart, ledger=Ledger(chart), tenant_id=tenant_id)

    # -------------------------------------------------------------------------
    # Balances
    # -------------------------------------------------------------------------

    def balance_of(self, account_number: str) -> Decimal:
        return balance_of(self.chart, self.ledger, account_number)

    def group_balance_of(self, account_number: str) -> Decimal:
        return group_balance_of(self.chart, self.ledger, account_number)

    # -------------------------------------------------------------------------
    # Record lookups
    # -------------------------------------------------------------------------

    def unit(self, number: str) -> Unit:
        try:
            return self.units[number]
        except KeyError:
            raise RecordNotFoundError("unit", number) from None

    def invoice(self, invoice_id: str) -> UnitInvoice:
        try:
            return self.invoices[invoice_id]
        except KeyError:
            raise RecordNotFoundError("invoice", invoice_id) from None

    def work_order(self, work_order_id: str) -> WorkOrder:
        try:
            return self.work_orders[work_order_id]
        except KeyError:
            raise RecordNotFoundError("work order", work_order_id) from None

    def budget_category(self, category_id: str) -> BudgetCategory:
        try:
            return self.budget_categories[category_id]
        except KeyError:
            raise RecordNotFoundError("budget category", category_id) from None

    def reserve_item(self, item_id: str) -> ReserveItem:
        try:
            return self.reserve_items[item_id]
        except KeyError:
            raise RecordNotFoundError("reserve item", item_id) from None

    # -------------------------------------------------------------------------
    # Snapshot conversion
    # -------------------------------------------------------------------------

    def to_snapshot(self) -> Snapshot:
        """Detached copy of the state in its persisted shape."""
        return Snapshot(
            tenant_id=self.tenant_id,
            accounts=[AccountRecord.from_account(a) for a in self.chart],
            entries=[EntryRecord.from_entry(e) for e in self.ledger],
            next_entry_number=self.ledger.next_number,
            budget_categories=[c.model_copy(deep=True) for c in self.budget_categories.values()],
            reserve_items=[i.model_copy(deep=True) for i in self.reserve_items.values()],
            units=[u.model_copy(deep=True) for u in self.units.values()],
            work_orders=[w.model_copy(deep=True) for w in self.work_orders.values()],
            work_order_seq=self.work_order_seq,
            unit_invoices=[i.model_copy(deep=True) for i in self.invoices.values()],
            settings=self.settings.model_copy(deep=True),
        )

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> "LedgerState":
        """Rebuild state from a snapshot.

        Raises:
            ChartStructureError: If the stored chart isn't a valid tree
        """
        chart = ChartOfAccounts.from_accounts(r.to_account() for r in snapshot.accounts)
        ledger = Ledger(
            chart,
            (r.to_entry() for r in snapshot.entries),
            next_number=snapshot.next_entry_number,
        )
        return cls(
            chart=chart,
            ledger=ledger,
            tenant_id=snapshot.tenant_id,
            units={u.number: u.model_copy(deep=True) for u in snapshot.units},
            budget_categories={
                c.id: c.model_copy(deep=True) for c in snapshot.budget_categories
            },
            reserve_items={i.id: i.model_copy(deep=True) for i in snapshot.reserve_items},
            work_orders={w.id: w.model_copy(deep=True) for w in snapshot.work_orders},
            invoices={i.id: i.model_copy(deep=True) for i in snapshot.unit_invoices},
            settings=snapshot.settings.model_copy(deep=True),
            work_order_seq=snapshot.work_order_seq,
        )
