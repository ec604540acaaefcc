"""Engine services, one per area of the financial state."""

from hoa_ledger.services.accounts import AccountsService
from hoa_ledger.services.base import BaseService
from hoa_ledger.services.budget import BudgetService
from hoa_ledger.services.invoices import InvoicesService
from hoa_ledger.services.journal import JournalService
from hoa_ledger.services.reserves import ReservesService
from hoa_ledger.services.units import UnitsService
from hoa_ledger.services.work_orders import WorkOrdersService

__all__ = [
    "AccountsService",
    "BaseService",
    "BudgetService",
    "InvoicesService",
    "JournalService",
    "ReservesService",
    "UnitsService",
    "WorkOrdersService",
]
