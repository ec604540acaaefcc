"""Unit (owner receivable) models."""

from datetime import date
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, Field

from hoa_ledger.ledger.models import to_money


class UnitStatus(StrEnum):
    """Occupancy status of a unit."""

    OCCUPIED = "occupied"
    VACANT = "vacant"


class ChargeKind(StrEnum):
    """What a unit charge was billed for."""

    ASSESSMENT = "assessment"
    FEE = "fee"
    SPECIAL_ASSESSMENT = "special_assessment"


class Payment(BaseModel):
    """Money received from the unit owner.

    `applied` is the part of the amount that reduced the balance; the
    rest arrived while nothing was owed.
    """

    date: date
    amount: Decimal
    applied: Decimal | None = Field(default=None)
    method: str
    note: str = ""
    seq: int = 0

    model_config = {"populate_by_name": True}


class LateFee(BaseModel):
    """Late fee imposed on a unit. Waived fees stay on record."""

    date: date
    amount: Decimal
    reason: str
    waived: bool = False
    seq: int = 0
    waived_seq: int | None = Field(default=None, alias="waivedSeq")

    model_config = {"populate_by_name": True}


class SpecialAssessment(BaseModel):
    """One-off assessment levied on a unit."""

    id: str
    date: date
    amount: Decimal
    reason: str
    paid: bool = False
    paid_date: date | None = Field(default=None, alias="paidDate")
    seq: int = 0
    paid_seq: int | None = Field(default=None, alias="paidSeq")

    model_config = {"populate_by_name": True}


class Charge(BaseModel):
    """A billed amount: a monthly assessment or an invoice."""

    date: date
    amount: Decimal
    kind: ChargeKind = ChargeKind.ASSESSMENT
    reference: str | None = Field(default=None)
    seq: int = 0

    model_config = {"populate_by_name": True}


class Unit(BaseModel):
    """A unit and its owner's receivable history.

    `balance` is a denormalized total kept up to date by every unit
    operation. derived_balance() recomputes it from the sub-records so
    the two can be reconciled.
    """

    number: str
    owner: str = ""
    email: str = ""
    phone: str = ""
    monthly_fee: Decimal = Field(alias="monthlyFee")
    voting_pct: Decimal = Field(default=Decimal(0), alias="votingPct")
    status: UnitStatus = UnitStatus.OCCUPIED
    balance: Decimal = Decimal(0)
    opening_balance: Decimal = Field(default=Decimal(0), alias="openingBalance")
    move_in: date | None = Field(default=None, alias="moveIn")
    sqft: int = 0
    bedrooms: int = 0
    parking: str | None = Field(default=None)
    payment_customer_id: str | None = Field(default=None, alias="paymentCustomerId")
    payments: list[Payment] = Field(default_factory=list)
    late_fees: list[LateFee] = Field(default_factory=list, alias="lateFees")
    special_assessments: list[SpecialAssessment] = Field(
        default_factory=list, alias="specialAssessments"
    )
    charges: list[Charge] = Field(default_factory=list)
    activity_seq: int = Field(default=0, alias="activitySeq")

    model_config = {"populate_by_name": True}

    @property
    def is_occupied(self) -> bool:
        return self.status == UnitStatus.OCCUPIED

    @property
    def is_delinquent(self) -> bool:
        return self.balance > 0

    def next_seq(self) -> int:
        """Allocate the next activity sequence number for this unit."""
        self.activity_seq += 1
        return self.activity_seq

    def increase_balance(self, amount: Decimal) -> None:
        self.balance = to_money(self.balance + amount)

    def decrease_balance(self, amount: Decimal) -> None:
        """Reduce the balance, never below zero."""
        self.balance = to_money(max(Decimal(0), self.balance - amount))

    def derived_balance(self) -> Decimal:
        """Replay the unit's sub-records to recompute its balance.

        Charges, late fees and special assessments add to the balance when
        recorded. Payments, fee waivers and paid assessments subtract, in
        activity order, floored at zero exactly as the live operations do.
        """
        events: list[tuple[int, Decimal]] = []
        for charge in self.charges:
            events.append((charge.seq, charge.amount))
        for fee in self.late_fees:
            events.append((fee.seq, fee.amount))
            if fee.waived:
                events.append((fee.waived_seq or fee.seq, -fee.amount))
        for assessment in self.special_assessments:
            events.append((assessment.seq, assessment.amount))
            if assessment.paid:
                events.append((assessment.paid_seq or assessment.seq, -assessment.amount))
        for payment in self.payments:
            events.append((payment.seq, -payment.amount))

        balance = self.opening_balance
        # Stable sort keeps an increase ahead of its own reversal on equal seq
        for _, delta in sorted(events, key=lambda e: e[0]):
            balance = balance + delta if delta > 0 else max(Decimal(0), balance + delta)
        return to_money(balance)

    def unwaived_late_fees(self) -> Decimal:
        return sum((f.amount for f in self.late_fees if not f.waived), Decimal(0))

    def unpaid_special_assessments(self) -> Decimal:
        return sum((a.amount for a in self.special_assessments if not a.paid), Decimal(0))

    def find_special_assessment(self, assessment_id: str) -> SpecialAssessment | None:
        for assessment in self.special_assessments:
            if assessment.id == assessment_id:
                return assessment
        return None
