"""Vendor work order models."""

from datetime import date
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, Field


class WorkOrderStatus(StrEnum):
    """Work order lifecycle: draft -> approved -> invoiced -> paid."""

    DRAFT = "draft"
    APPROVED = "approved"
    INVOICED = "invoiced"
    PAID = "paid"


class WorkOrder(BaseModel):
    """Vendor job tracked from approval through payment.

    Only the final payment posts to the ledger; `gl_entry_id` records
    that entry.
    """

    id: str
    title: str
    vendor: str
    description: str = ""
    account_number: str = Field(alias="acctNum")
    amount: Decimal
    status: WorkOrderStatus = WorkOrderStatus.DRAFT
    case_id: str | None = Field(default=None, alias="caseId")
    created_date: date = Field(alias="createdDate")
    approved_date: date | None = Field(default=None, alias="approvedDate")
    invoice_number: str | None = Field(default=None, alias="invoiceNum")
    invoice_date: date | None = Field(default=None, alias="invoiceDate")
    paid_date: date | None = Field(default=None, alias="paidDate")
    gl_entry_id: str | None = Field(default=None, alias="glEntryId")

    model_config = {"populate_by_name": True}
