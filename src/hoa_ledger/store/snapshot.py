"""Persisted shape of a tenant's financial state."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from hoa_ledger.ledger.journal import FIRST_ENTRY_NUMBER
from hoa_ledger.ledger.models import Account, AccountType, EntrySource, EntryStatus, LedgerEntry
from hoa_ledger.models import (
    BudgetCategory,
    FinancialSettings,
    ReserveItem,
    Unit,
    UnitInvoice,
    WorkOrder,
)
from hoa_ledger.sync.records import SyncRecord


class AccountRecord(BaseModel):
    """Chart of accounts row."""

    number: str = Field(alias="num")
    name: str
    type: AccountType
    sub: str
    parent: str | None = Field(default=None)
    active: bool = True
    budget_category: str | None = Field(default=None, alias="budgetCat")
    reserve_item: str | None = Field(default=None, alias="reserveItem")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_account(cls, account: Account) -> "AccountRecord":
        return cls(
            number=account.number,
            name=account.name,
            type=account.account_type,
            sub=account.sub,
            parent=account.parent,
            active=account.active,
            budget_category=account.budget_category,
            reserve_item=account.reserve_item,
        )

    def to_account(self) -> Account:
        return Account(
            number=self.number,
            name=self.name,
            account_type=self.type,
            sub=self.sub,
            parent=self.parent,
            active=self.active,
            budget_category=self.budget_category,
            reserve_item=self.reserve_item,
        )


class EntryRecord(BaseModel):
    """General ledger row."""

    id: str
    date: date
    memo: str
    debit_account: str = Field(alias="debitAcct")
    credit_account: str = Field(alias="creditAcct")
    amount: Decimal
    source: EntrySource
    source_id: str | None = Field(default=None, alias="sourceId")
    posted_at: datetime = Field(alias="posted")
    status: EntryStatus = EntryStatus.POSTED
    reverses: str | None = Field(default=None)

    model_config = {"populate_by_name": True}

    @classmethod
    def from_entry(cls, entry: LedgerEntry) -> "EntryRecord":
        return cls(
            id=entry.id,
            date=entry.date,
            memo=entry.memo,
            debit_account=entry.debit_account,
            credit_account=entry.credit_account,
            amount=entry.amount,
            source=entry.source,
            source_id=entry.source_id,
            posted_at=entry.posted_at,
            status=entry.status,
            reverses=entry.reverses,
        )

    def to_entry(self) -> LedgerEntry:
        return LedgerEntry(
            id=self.id,
            date=self.date,
            memo=self.memo,
            debit_account=self.debit_account,
            credit_account=self.credit_account,
            amount=self.amount,
            source=self.source,
            source_id=self.source_id,
            posted_at=self.posted_at,
            status=self.status,
            reverses=self.reverses,
        )


class Snapshot(BaseModel):
    """Everything needed to rebuild a LedgerEngine.

    Back-references survive the round trip: entries keep their
    `sourceId`, invoices and work orders keep the ids of the entries
    they caused.
    """

    tenant_id: str = Field(default="default", alias="tenantId")
    accounts: list[AccountRecord] = Field(default_factory=list)
    entries: list[EntryRecord] = Field(default_factory=list)
    next_entry_number: int = Field(default=FIRST_ENTRY_NUMBER, alias="glNextId")
    budget_categories: list[BudgetCategory] = Field(default_factory=list, alias="budgetCategories")
    reserve_items: list[ReserveItem] = Field(default_factory=list, alias="reserveItems")
    units: list[Unit] = Field(default_factory=list)
    work_orders: list[WorkOrder] = Field(default_factory=list, alias="workOrders")
    work_order_seq: int = Field(default=0, alias="workOrderSeq")
    unit_invoices: list[UnitInvoice] = Field(default_factory=list, alias="unitInvoices")
    settings: FinancialSettings = Field(default_factory=FinancialSettings)
    outbox: list[SyncRecord] = Field(default_factory=list)

    model_config = {"populate_by_name": True}
