"""Outbox rows queued for the remote mirror."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class SyncTable(StrEnum):
    """Remote tables mirrored from the engine."""

    CHART_OF_ACCOUNTS = "chart_of_accounts"
    GENERAL_LEDGER = "general_ledger"
    UNITS = "units"
    UNIT_INVOICES = "unit_invoices"
    WORK_ORDERS = "work_orders"
    BUDGET_CATEGORIES = "budget_categories"
    RESERVE_ITEMS = "reserve_items"
    FINANCIAL_SETTINGS = "financial_settings"


class SyncRecord(BaseModel):
    """One row to upsert (or delete, when payload is None) remotely."""

    table: SyncTable
    key: str
    payload: dict[str, Any] | None = Field(default=None)
    queued_at: datetime = Field(default_factory=lambda: datetime.now(UTC), alias="queuedAt")

    model_config = {"populate_by_name": True}

    @property
    def is_delete(self) -> bool:
        return self.payload is None


class SyncReport(BaseModel):
    """Outcome of one flush of the outbox."""

    pushed: int = 0
    failed: int = 0
    errors: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed == 0
