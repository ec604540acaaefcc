"""Tenant financial settings."""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class FinancialSettings(BaseModel):
    """Per-tenant settings persisted with the ledger."""

    due_day: int = Field(default=15, alias="hoaDueDay")
    annual_reserve_contribution: Decimal = Field(
        default=Decimal(12000), alias="annualReserveContribution"
    )
    payment_processor_account_id: str | None = Field(
        default=None, alias="paymentProcessorAccountId"
    )
    payment_processor_onboarded: bool = Field(default=False, alias="paymentProcessorOnboarded")

    model_config = {"populate_by_name": True, "validate_assignment": True}

    @field_validator("due_day")
    @classmethod
    def _check_due_day(cls, value: int) -> int:
        if not 1 <= value <= 28:
            raise ValueError("due day must be between 1 and 28")
        return value
