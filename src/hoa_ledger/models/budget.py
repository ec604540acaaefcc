"""Operating budget models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


class Expense(BaseModel):
    """A single paid expense recorded against a budget category."""

    id: str
    date: date
    description: str
    amount: Decimal
    vendor: str = ""
    invoice: str = ""

    model_config = {"populate_by_name": True}


class BudgetCategory(BaseModel):
    """Annual budget line with its expense detail."""

    id: str
    name: str
    budgeted: Decimal
    expenses: list[Expense] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @property
    def spent(self) -> Decimal:
        """Total of the category's own expense list."""
        return sum((e.amount for e in self.expenses), Decimal(0))
