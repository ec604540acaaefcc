"""Tests for unit invoices."""

from datetime import date
from decimal import Decimal

import pytest

from hoa_ledger import LedgerEngine
from hoa_ledger.exceptions import InvalidTransitionError, RecordNotFoundError
from hoa_ledger.ledger import EntrySource
from hoa_ledger.models import InvoiceStatus, InvoiceType

ISSUED = date(2026, 3, 1)


class TestCreateInvoice:
    """Tests for InvoicesService.create()."""

    def test_fee_invoice(self, unit_engine: LedgerEngine) -> None:
        """Fee invoices post to the late fee accounts and bill the unit."""
        invoice = unit_engine.invoices.create(
            "101", InvoiceType.FEE, 150, "Pool key replacement", on=ISSUED
        )

        assert invoice.id.startswith("INV-U")
        assert invoice.status == InvoiceStatus.SENT
        assert invoice.due_date == date(2026, 3, 31)
        entry = unit_engine.state.ledger.get(invoice.gl_entry_id)
        assert (entry.debit_account, entry.credit_account) == ("1130", "4030")
        assert entry.source == EntrySource.FEE
        assert entry.source_id == invoice.id

        unit = unit_engine.units.get("101")
        assert unit.balance == Decimal(150)
        assert unit.charges[-1].reference == invoice.id

    def test_special_assessment_invoice(self, unit_engine: LedgerEngine) -> None:
        """Special assessment invoices use the special receivable."""
        invoice = unit_engine.invoices.create(
            "101", "special_assessment", "750.00", "Elevator", "case-7", on=ISSUED
        )
        entry = unit_engine.state.ledger.get(invoice.gl_entry_id)
        assert (entry.debit_account, entry.credit_account) == ("1120", "4020")
        assert invoice.case_id == "case-7"

    def test_unknown_unit_posts_nothing(self, engine: LedgerEngine) -> None:
        """Invoices need an existing unit."""
        with pytest.raises(RecordNotFoundError):
            engine.invoices.create("999", InvoiceType.FEE, 10, "x")
        assert len(engine.state.ledger) == 0
        assert engine.state.invoices == {}


class TestPayInvoice:
    """Tests for InvoicesService.pay()."""

    def test_pay_clears_receivable(self, unit_engine: LedgerEngine) -> None:
        """Paying moves the amount from the receivable to cash."""
        invoice = unit_engine.invoices.create("101", InvoiceType.FEE, 150, "Keys", on=ISSUED)
        paid = unit_engine.invoices.pay(invoice.id, "Check", on=date(2026, 3, 15))

        assert paid.status == InvoiceStatus.PAID
        assert paid.paid_amount == Decimal(150)
        entry = unit_engine.state.ledger.get(paid.payment_gl_entry_id)
        assert (entry.debit_account, entry.credit_account) == ("1010", "1130")
        assert unit_engine.state.balance_of("1130") == 0
        assert unit_engine.units.get("101").balance == 0
        assert unit_engine.reports.reconcile_units()[0].ledger_difference == 0

    def test_pay_twice_rejected(self, unit_engine: LedgerEngine) -> None:
        """An invoice is paid once."""
        invoice = unit_engine.invoices.create("101", InvoiceType.FEE, 150, "Keys", on=ISSUED)
        unit_engine.invoices.pay(invoice.id, "Check", on=ISSUED)
        with pytest.raises(InvalidTransitionError):
            unit_engine.invoices.pay(invoice.id, "Check", on=ISSUED)
        assert len(unit_engine.state.ledger) == 2

    def test_list_filters(self, unit_engine: LedgerEngine) -> None:
        """Listing filters by unit and status, newest first."""
        first = unit_engine.invoices.create("101", InvoiceType.FEE, 10, "a", on=ISSUED)
        second = unit_engine.invoices.create(
            "101", InvoiceType.FEE, 20, "b", on=date(2026, 4, 1)
        )
        unit_engine.invoices.pay(first.id, "ACH", on=ISSUED)

        assert [i.id for i in unit_engine.invoices.list_invoices()] == [second.id, first.id]
        sent = unit_engine.invoices.list_invoices(status=InvoiceStatus.SENT)
        assert [i.id for i in sent] == [second.id]
        assert unit_engine.invoices.list_invoices(unit_number="202") == []
