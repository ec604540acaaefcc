"""Double-entry general ledger and financial reporting for homeowners associations.

Example:
    from datetime import date
    from decimal import Decimal

    from hoa_ledger import LedgerConfig, LedgerEngine
    from hoa_ledger.models import Unit

    # In memory, standard HOA chart of accounts
    engine = LedgerEngine()

    # Or persisted per tenant under the XDG data dir
    engine = LedgerEngine.open(LedgerConfig.load())

    engine.units.add_unit(Unit(number="101", monthly_fee=Decimal("450")))
    engine.units.bill_monthly_assessment("101", date(2026, 1, 1))
    engine.units.record_payment("101", "450", "ACH")

    sheet = engine.reports.balance_sheet()
    assert sheet.is_balanced

    # Push queued changes to the remote mirror
    async with RemoteMirror(config) as mirror:
        report = await mirror.flush(engine)
"""

from hoa_ledger.config import LedgerConfig
from hoa_ledger.engine import LedgerEngine
from hoa_ledger.exceptions import (
    ChartStructureError,
    ConfigError,
    InactiveAccountError,
    InvalidTransitionError,
    LedgerError,
    RecordNotFoundError,
    ReferentialIntegrityError,
    RetryableSyncError,
    SyncError,
    UnbalancedPostingError,
    UnknownAccountError,
)
from hoa_ledger.ledger import Account, AccountType, EntrySource, LedgerEntry
from hoa_ledger.sync import RemoteMirror

__version__ = "0.1.0"

__all__ = [
    # Engine
    "LedgerConfig",
    "LedgerEngine",
    "RemoteMirror",
    # Ledger types
    "Account",
    "AccountType",
    "EntrySource",
    "LedgerEntry",
    # Exceptions
    "ChartStructureError",
    "ConfigError",
    "InactiveAccountError",
    "InvalidTransitionError",
    "LedgerError",
    "RecordNotFoundError",
    "ReferentialIntegrityError",
    "RetryableSyncError",
    "SyncError",
    "UnbalancedPostingError",
    "UnknownAccountError",
]
