"""Reserve study models."""

from decimal import Decimal

from pydantic import BaseModel, Field


class ReserveItem(BaseModel):
    """Long-term capital component tracked for funding adequacy.

    Contingency items are excluded from amortization.
    """

    id: str
    name: str
    estimated_cost: Decimal = Field(alias="estimatedCost")
    current_funding: Decimal = Field(default=Decimal(0), alias="currentFunding")
    useful_life: int = Field(default=0, alias="usefulLife")
    last_replaced: str | None = Field(default=None, alias="lastReplaced")
    years_remaining: Decimal = Field(default=Decimal(0), alias="yearsRemaining")
    is_contingency: bool = Field(default=False, alias="isContingency")

    model_config = {"populate_by_name": True}

    @property
    def gap(self) -> Decimal:
        return self.estimated_cost - self.current_funding
