"""Unit receivables: billing, payments, late fees and special assessments."""

import logging
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import uuid4

from hoa_ledger.exceptions import InvalidTransitionError, LedgerError, RecordNotFoundError
from hoa_ledger.ledger.chart import (
    ASSESSMENT_INCOME,
    ASSESSMENTS_RECEIVABLE,
    LATE_FEE_INCOME,
    LATE_FEES_RECEIVABLE,
    OPERATING_CASH,
    OPERATING_FUND,
    SPECIAL_ASSESSMENT_INCOME,
    SPECIAL_ASSESSMENTS_RECEIVABLE,
)
from hoa_ledger.ledger.models import EntrySource, LedgerEntry, to_money
from hoa_ledger.models import (
    Charge,
    ChargeKind,
    LateFee,
    Payment,
    SpecialAssessment,
    Unit,
)
from hoa_ledger.services.base import BaseService
from hoa_ledger.sync.records import SyncTable

logger = logging.getLogger(__name__)

# Profile fields callers may change; the balance and history are never set directly
EDITABLE_FIELDS = frozenset(
    {
        "owner",
        "email",
        "phone",
        "monthly_fee",
        "voting_pct",
        "status",
        "move_in",
        "sqft",
        "bedrooms",
        "parking",
        "payment_customer_id",
    }
)


class UnitsService(BaseService):
    """Operations on unit owner accounts.

    Each operation that changes a unit's balance also posts exactly one
    ledger entry moving the same amount between the unit's receivable
    account and cash or income, inside one transaction.
    """

    def get(self, number: str) -> Unit:
        return self.state.unit(number)

    def list_units(self) -> list[Unit]:
        return sorted(self.state.units.values(), key=lambda u: u.number)

    # -------------------------------------------------------------------------
    # Unit records
    # -------------------------------------------------------------------------

    def add_unit(self, unit: Unit, *, on: date | None = None) -> Unit:
        """Register a unit.

        A unit arriving with a balance and no history gets that balance as
        its opening balance, recognized in the ledger as an assessments
        receivable against the operating fund.

        Raises:
            LedgerError: If a unit with the same number exists
        """
        with self._engine.transaction() as state:
            if unit.number in state.units:
                raise LedgerError(f"Unit already exists: {unit.number}")
            unit = unit.model_copy(deep=True)
            unit.balance = to_money(unit.balance)
            if unit.balance > 0 and not unit.opening_balance:
                unit.opening_balance = unit.balance
            if unit.opening_balance > 0:
                self._post(
                    on or date.today(),
                    f"Opening balance - Unit {unit.number}",
                    ASSESSMENTS_RECEIVABLE,
                    OPERATING_FUND,
                    unit.opening_balance,
                    EntrySource.MANUAL,
                    unit.number,
                )
            state.units[unit.number] = unit
            self._engine.touch(SyncTable.UNITS, unit.number)
        logger.info("Added unit %s", unit.number)
        return unit

    def update_unit(self, number: str, **changes: Any) -> Unit:
        """Change profile fields of a unit.

        Raises:
            ValueError: If a field isn't editable (balance and history
                change only through the financial operations)
        """
        invalid = set(changes) - EDITABLE_FIELDS
        if invalid:
            raise ValueError(f"Fields cannot be updated directly: {', '.join(sorted(invalid))}")

        with self._engine.transaction() as state:
            unit = state.unit(number)
            updated = unit.model_validate({**unit.model_dump(), **changes})
            state.units[number] = updated
            self._engine.touch(SyncTable.UNITS, number)
        return updated

    def remove_unit(self, number: str) -> Unit:
        """Remove a unit with no outstanding balance. Its ledger history stays.

        Raises:
            InvalidTransitionError: If the unit still owes money
        """
        with self._engine.transaction() as state:
            unit = state.unit(number)
            if unit.balance > 0:
                raise InvalidTransitionError(
                    f"Unit {number}", current=f"owing {unit.balance}", requested="remove"
                )
            del state.units[number]
            self._engine.touch(SyncTable.UNITS, number)
        logger.info("Removed unit %s", number)
        return unit

    # -------------------------------------------------------------------------
    # Billing
    # -------------------------------------------------------------------------

    def bill_monthly_assessment(self, number: str, period: date | None = None) -> LedgerEntry:
        """Charge one month's fee: Dr assessments receivable / Cr assessment income."""
        period = period or date.today()
        with self._engine.transaction() as state:
            unit = state.unit(number)
            entry = self._post(
                period,
                f"Assessment - Unit {number} ({period:%b %Y})",
                ASSESSMENTS_RECEIVABLE,
                ASSESSMENT_INCOME,
                unit.monthly_fee,
                EntrySource.ASSESSMENT,
                number,
            )
            unit.charges.append(
                Charge(
                    date=period,
                    amount=entry.amount,
                    kind=ChargeKind.ASSESSMENT,
                    reference=entry.id,
                    seq=unit.next_seq(),
                )
            )
            unit.increase_balance(entry.amount)
            self._engine.touch(SyncTable.UNITS, number)
        return entry

    def bill_all_occupied(self, period: date | None = None) -> list[LedgerEntry]:
        """Bill the monthly fee to every occupied unit with a fee."""
        with self._engine.transaction() as state:
            return [
                self.bill_monthly_assessment(unit.number, period)
                for unit in sorted(state.units.values(), key=lambda u: u.number)
                if unit.is_occupied and unit.monthly_fee > 0
            ]

    # -------------------------------------------------------------------------
    # Payments and fees
    # -------------------------------------------------------------------------

    def record_payment(
        self,
        number: str,
        amount: Decimal | int | str,
        method: str,
        note: str | None = None,
        *,
        on: date | None = None,
    ) -> LedgerEntry:
        """Record money received: Dr operating cash / Cr assessments receivable.

        The unit balance drops by the amount, floored at zero.
        """
        on = on or date.today()
        with self._engine.transaction() as state:
            unit = state.unit(number)
            entry = self._post(
                on,
                f"Payment received - Unit {number}",
                OPERATING_CASH,
                ASSESSMENTS_RECEIVABLE,
                to_money(amount),
                EntrySource.PAYMENT,
                number,
            )
            unit.payments.append(
                Payment(
                    date=on,
                    amount=entry.amount,
                    applied=min(entry.amount, unit.balance),
                    method=method,
                    note=note if note is not None else f"Payment via {method}",
                    seq=unit.next_seq(),
                )
            )
            unit.decrease_balance(entry.amount)
            self._engine.touch(SyncTable.UNITS, number)
        return entry

    def impose_late_fee(
        self,
        number: str,
        amount: Decimal | int | str,
        reason: str,
        *,
        on: date | None = None,
    ) -> LedgerEntry:
        """Charge a late fee: Dr late fees receivable / Cr late fee income."""
        on = on or date.today()
        with self._engine.transaction() as state:
            unit = state.unit(number)
            entry = self._post(
                on,
                f"Late fee assessed - Unit {number}",
                LATE_FEES_RECEIVABLE,
                LATE_FEE_INCOME,
                to_money(amount),
                EntrySource.FEE,
                number,
            )
            unit.late_fees.append(
                LateFee(date=on, amount=entry.amount, reason=reason, seq=unit.next_seq())
            )
            unit.increase_balance(entry.amount)
            self._engine.touch(SyncTable.UNITS, number)
        return entry

    def waive_late_fee(self, number: str, fee_index: int) -> LateFee:
        """Waive a late fee.

        The fee is written off the unit's balance only; nothing is posted,
        so the income recognized when the fee was imposed stays in the
        ledger.

        Raises:
            RecordNotFoundError: If there is no fee at that index
            InvalidTransitionError: If the fee is already waived
        """
        with self._engine.transaction() as state:
            unit = state.unit(number)
            if not 0 <= fee_index < len(unit.late_fees):
                raise RecordNotFoundError("late fee", f"{number}#{fee_index}")
            fee = unit.late_fees[fee_index]
            if fee.waived:
                raise InvalidTransitionError(
                    f"Late fee {number}#{fee_index}", current="waived", requested="waive"
                )
            fee.waived = True
            fee.waived_seq = unit.next_seq()
            unit.decrease_balance(fee.amount)
            self._engine.touch(SyncTable.UNITS, number)
        logger.info("Waived late fee %s on unit %s", fee.amount, number)
        return fee

    def add_special_assessment(
        self,
        number: str,
        amount: Decimal | int | str,
        reason: str,
        *,
        on: date | None = None,
    ) -> SpecialAssessment:
        """Levy a special assessment: Dr special receivable / Cr special income."""
        on = on or date.today()
        with self._engine.transaction() as state:
            unit = state.unit(number)
            entry = self._post(
                on,
                f"Special assessment - Unit {number}: {reason}",
                SPECIAL_ASSESSMENTS_RECEIVABLE,
                SPECIAL_ASSESSMENT_INCOME,
                to_money(amount),
                EntrySource.ASSESSMENT,
                number,
            )
            assessment = SpecialAssessment(
                id=f"sa-{uuid4().hex[:8]}",
                date=on,
                amount=entry.amount,
                reason=reason,
                seq=unit.next_seq(),
            )
            unit.special_assessments.append(assessment)
            unit.increase_balance(entry.amount)
            self._engine.touch(SyncTable.UNITS, number)
        return assessment

    def mark_special_assessment_paid(
        self, number: str, assessment_id: str, *, on: date | None = None
    ) -> LedgerEntry:
        """Record payment of a special assessment: Dr cash / Cr special receivable.

        Raises:
            RecordNotFoundError: If the unit has no such assessment
            InvalidTransitionError: If it is already paid
        """
        on = on or date.today()
        with self._engine.transaction() as state:
            unit = state.unit(number)
            assessment = unit.find_special_assessment(assessment_id)
            if assessment is None:
                raise RecordNotFoundError("special assessment", assessment_id)
            if assessment.paid:
                raise InvalidTransitionError(assessment_id, current="paid", requested="pay")
            entry = self._post(
                on,
                f"Special assessment payment - Unit {number}",
                OPERATING_CASH,
                SPECIAL_ASSESSMENTS_RECEIVABLE,
                assessment.amount,
                EntrySource.PAYMENT,
                number,
            )
            assessment.paid = True
            assessment.paid_date = on
            assessment.paid_seq = unit.next_seq()
            unit.decrease_balance(assessment.amount)
            self._engine.touch(SyncTable.UNITS, number)
        return entry
