"""Pydantic models for subsidiary ledger records."""

from hoa_ledger.models.budget import BudgetCategory, Expense
from hoa_ledger.models.invoices import InvoiceStatus, InvoiceType, UnitInvoice
from hoa_ledger.models.reserves import ReserveItem
from hoa_ledger.models.settings import FinancialSettings
from hoa_ledger.models.units import (
    Charge,
    ChargeKind,
    LateFee,
    Payment,
    SpecialAssessment,
    Unit,
    UnitStatus,
)
from hoa_ledger.models.work_orders import WorkOrder, WorkOrderStatus

__all__ = [
    # Budget
    "BudgetCategory",
    "Expense",
    # Invoices
    "InvoiceStatus",
    "InvoiceType",
    "UnitInvoice",
    # Reserves
    "ReserveItem",
    # Settings
    "FinancialSettings",
    # Units
    "Charge",
    "ChargeKind",
    "LateFee",
    "Payment",
    "SpecialAssessment",
    "Unit",
    "UnitStatus",
    # Work orders
    "WorkOrder",
    "WorkOrderStatus",
]
