"""Unit invoice models."""

from datetime import date
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, Field


class InvoiceType(StrEnum):
    FEE = "fee"
    SPECIAL_ASSESSMENT = "special_assessment"


class InvoiceStatus(StrEnum):
    SENT = "sent"
    PAID = "paid"


class UnitInvoice(BaseModel):
    """Invoice issued to a unit owner.

    `gl_entry_id` points at the issuance entry and `payment_gl_entry_id`
    at the payment entry once paid.
    """

    id: str
    unit_number: str = Field(alias="unitNumber")
    type: InvoiceType
    description: str = ""
    amount: Decimal
    status: InvoiceStatus = InvoiceStatus.SENT
    created_date: date = Field(alias="createdDate")
    due_date: date = Field(alias="dueDate")
    paid_date: date | None = Field(default=None, alias="paidDate")
    paid_amount: Decimal | None = Field(default=None, alias="paidAmount")
    payment_method: str | None = Field(default=None, alias="paymentMethod")
    gl_entry_id: str | None = Field(default=None, alias="glEntryId")
    payment_gl_entry_id: str | None = Field(default=None, alias="paymentGlEntryId")
    case_id: str | None = Field(default=None, alias="caseId")

    model_config = {"populate_by_name": True}

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID
