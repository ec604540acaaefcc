"""Invoices issued to unit owners."""

import logging
from datetime import date, timedelta
from decimal import Decimal
from uuid import uuid4

from hoa_ledger.exceptions import InvalidTransitionError
from hoa_ledger.ledger.chart import (
    LATE_FEE_INCOME,
    LATE_FEES_RECEIVABLE,
    OPERATING_CASH,
    SPECIAL_ASSESSMENT_INCOME,
    SPECIAL_ASSESSMENTS_RECEIVABLE,
)
from hoa_ledger.ledger.models import EntrySource, to_money
from hoa_ledger.models import (
    Charge,
    ChargeKind,
    InvoiceStatus,
    InvoiceType,
    Payment,
    UnitInvoice,
)
from hoa_ledger.services.base import BaseService
from hoa_ledger.sync.records import SyncTable

logger = logging.getLogger(__name__)

PAYMENT_TERMS = timedelta(days=30)

# Invoice type -> (receivable, income, entry source, unit charge kind)
_POSTING_RULES: dict[InvoiceType, tuple[str, str, EntrySource, ChargeKind]] = {
    InvoiceType.FEE: (LATE_FEES_RECEIVABLE, LATE_FEE_INCOME, EntrySource.FEE, ChargeKind.FEE),
    InvoiceType.SPECIAL_ASSESSMENT: (
        SPECIAL_ASSESSMENTS_RECEIVABLE,
        SPECIAL_ASSESSMENT_INCOME,
        EntrySource.ASSESSMENT,
        ChargeKind.SPECIAL_ASSESSMENT,
    ),
}


class InvoicesService(BaseService):
    """Issue and collect unit invoices.

    Issuing posts Dr receivable / Cr income for the invoice type; paying
    posts Dr operating cash / Cr the same receivable. Both sides keep the
    unit's balance and charge history in step.
    """

    def get(self, invoice_id: str) -> UnitInvoice:
        return self.state.invoice(invoice_id)

    def list_invoices(
        self, *, unit_number: str | None = None, status: InvoiceStatus | None = None
    ) -> list[UnitInvoice]:
        """Invoices newest first, optionally for one unit or status."""
        invoices = list(self.state.invoices.values())
        if unit_number:
            invoices = [i for i in invoices if i.unit_number == unit_number]
        if status:
            invoices = [i for i in invoices if i.status == status]
        return sorted(invoices, key=lambda i: i.created_date, reverse=True)

    def create(
        self,
        unit_number: str,
        invoice_type: InvoiceType,
        amount: Decimal | int | str,
        description: str,
        case_id: str | None = None,
        *,
        on: date | None = None,
    ) -> UnitInvoice:
        """Issue an invoice due PAYMENT_TERMS after today (or `on`)."""
        on = on or date.today()
        invoice_type = InvoiceType(invoice_type)
        receivable, income, source, kind = _POSTING_RULES[invoice_type]
        invoice_id = f"INV-U{uuid4().hex[:10].upper()}"

        with self._engine.transaction() as state:
            unit = state.unit(unit_number)
            entry = self._post(
                on,
                f"Invoice {invoice_id} - Unit {unit_number}: {description}",
                receivable,
                income,
                to_money(amount),
                source,
                invoice_id,
            )
            invoice = UnitInvoice(
                id=invoice_id,
                unit_number=unit_number,
                type=invoice_type,
                description=description,
                amount=entry.amount,
                created_date=on,
                due_date=on + PAYMENT_TERMS,
                gl_entry_id=entry.id,
                case_id=case_id,
            )
            state.invoices[invoice_id] = invoice
            unit.charges.append(
                Charge(
                    date=on,
                    amount=entry.amount,
                    kind=kind,
                    reference=invoice_id,
                    seq=unit.next_seq(),
                )
            )
            unit.increase_balance(entry.amount)
            self._engine.touch(SyncTable.UNIT_INVOICES, invoice_id)
            self._engine.touch(SyncTable.UNITS, unit_number)

        logger.info("Issued invoice %s to unit %s for %s", invoice_id, unit_number, entry.amount)
        return invoice

    def pay(self, invoice_id: str, method: str, *, on: date | None = None) -> UnitInvoice:
        """Collect an invoice in full.

        Raises:
            RecordNotFoundError: If the invoice or its unit doesn't exist
            InvalidTransitionError: If the invoice is already paid
        """
        on = on or date.today()
        with self._engine.transaction() as state:
            invoice = state.invoice(invoice_id)
            if invoice.is_paid:
                raise InvalidTransitionError(invoice_id, current="paid", requested="pay")
            unit = state.unit(invoice.unit_number)
            receivable = _POSTING_RULES[invoice.type][0]
            entry = self._post(
                on,
                f"Invoice {invoice_id} paid - Unit {unit.number}",
                OPERATING_CASH,
                receivable,
                invoice.amount,
                EntrySource.PAYMENT,
                invoice_id,
            )
            invoice.status = InvoiceStatus.PAID
            invoice.paid_date = on
            invoice.paid_amount = invoice.amount
            invoice.payment_method = method
            invoice.payment_gl_entry_id = entry.id

            unit.payments.append(
                Payment(
                    date=on,
                    amount=invoice.amount,
                    applied=min(invoice.amount, unit.balance),
                    method=method,
                    note=f"Invoice {invoice_id}",
                    seq=unit.next_seq(),
                )
            )
            unit.decrease_balance(invoice.amount)
            self._engine.touch(SyncTable.UNIT_INVOICES, invoice_id)
            self._engine.touch(SyncTable.UNITS, unit.number)

        logger.info("Invoice %s paid by %s", invoice_id, method)
        return invoice
