"""Vendor work order lifecycle."""

import logging
from datetime import date
from decimal import Decimal

from hoa_ledger.exceptions import InvalidTransitionError, LedgerError
from hoa_ledger.ledger.chart import OPERATING_CASH
from hoa_ledger.ledger.models import AccountType, EntrySource, to_money
from hoa_ledger.models import WorkOrder, WorkOrderStatus
from hoa_ledger.services.base import BaseService
from hoa_ledger.sync.records import SyncTable

logger = logging.getLogger(__name__)


class WorkOrdersService(BaseService):
    """Track vendor jobs: draft -> approved -> invoiced -> paid.

    Nothing reaches the ledger until payment, which posts
    Dr <work order expense account> / Cr operating cash.
    """

    def get(self, work_order_id: str) -> WorkOrder:
        return self.state.work_order(work_order_id)

    def list_work_orders(self, status: WorkOrderStatus | None = None) -> list[WorkOrder]:
        orders = list(self.state.work_orders.values())
        if status is not None:
            orders = [w for w in orders if w.status == status]
        return orders

    def create(
        self,
        title: str,
        vendor: str,
        amount: Decimal | int | str,
        account_number: str,
        case_id: str | None = None,
        description: str = "",
        *,
        on: date | None = None,
    ) -> WorkOrder:
        """Open a draft work order charged to an expense account.

        Raises:
            UnknownAccountError: If the account doesn't exist
            LedgerError: If the account isn't a detail expense account
        """
        with self._engine.transaction() as state:
            account = state.chart.get(account_number)
            if account.account_type != AccountType.EXPENSE or account.is_header:
                raise LedgerError(
                    f"Work orders must be charged to an expense account, not {account.display_name}"
                )
            state.work_order_seq += 1
            work_order = WorkOrder(
                id=f"WO-{state.work_order_seq:03d}",
                title=title,
                vendor=vendor,
                description=description,
                account_number=account_number,
                amount=to_money(amount),
                case_id=case_id,
                created_date=on or date.today(),
            )
            state.work_orders[work_order.id] = work_order
            self._engine.touch(SyncTable.WORK_ORDERS, work_order.id)
        logger.info("Created work order %s for %s", work_order.id, vendor)
        return work_order

    def approve(self, work_order_id: str, *, on: date | None = None) -> WorkOrder:
        with self._engine.transaction() as state:
            work_order = state.work_order(work_order_id)
            _require(work_order, WorkOrderStatus.DRAFT, "approve")
            work_order.status = WorkOrderStatus.APPROVED
            work_order.approved_date = on or date.today()
            self._engine.touch(SyncTable.WORK_ORDERS, work_order_id)
        logger.info("Approved work order %s", work_order_id)
        return work_order

    def receive_invoice(
        self,
        work_order_id: str,
        invoice_number: str,
        amount: Decimal | int | str | None = None,
        *,
        on: date | None = None,
    ) -> WorkOrder:
        """Record the vendor's invoice; the amount may differ from the estimate."""
        with self._engine.transaction() as state:
            work_order = state.work_order(work_order_id)
            _require(work_order, WorkOrderStatus.APPROVED, "invoice")
            if amount is not None:
                amount = to_money(amount)
                if amount <= 0:
                    raise LedgerError(f"Invoice amount must be positive, got {amount}")
                work_order.amount = amount
            work_order.status = WorkOrderStatus.INVOICED
            work_order.invoice_number = invoice_number
            work_order.invoice_date = on or date.today()
            self._engine.touch(SyncTable.WORK_ORDERS, work_order_id)
        logger.info("Work order %s invoiced as %s", work_order_id, invoice_number)
        return work_order

    def pay(self, work_order_id: str, *, on: date | None = None) -> WorkOrder:
        """Pay the vendor and post the expense.

        Raises:
            InvalidTransitionError: If the work order hasn't been invoiced
        """
        on = on or date.today()
        with self._engine.transaction() as state:
            work_order = state.work_order(work_order_id)
            _require(work_order, WorkOrderStatus.INVOICED, "pay")
            memo = f"{work_order.title} - {work_order.vendor}"
            if work_order.case_id:
                memo += f" ({work_order.case_id})"
            entry = self._post(
                on,
                memo,
                work_order.account_number,
                OPERATING_CASH,
                work_order.amount,
                EntrySource.CASE if work_order.case_id else EntrySource.EXPENSE,
                work_order.id,
            )
            work_order.status = WorkOrderStatus.PAID
            work_order.paid_date = on
            work_order.gl_entry_id = entry.id
            self._engine.touch(SyncTable.WORK_ORDERS, work_order_id)
        logger.info("Paid work order %s (%s)", work_order_id, entry.id)
        return work_order


def _require(work_order: WorkOrder, status: WorkOrderStatus, action: str) -> None:
    if work_order.status != status:
        raise InvalidTransitionError(work_order.id, current=work_order.status, requested=action)
