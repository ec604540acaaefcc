"""Typed exceptions for the HOA ledger engine."""


class LedgerError(Exception):
    """Base exception for all ledger engine errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnknownAccountError(LedgerError):
    """Account number not present in the chart of accounts."""

    def __init__(self, account_number: str, message: str | None = None) -> None:
        self.account_number = account_number
        super().__init__(message or f"Unknown account: {account_number}")


class InactiveAccountError(LedgerError):
    """Posting attempted against a deactivated account."""

    def __init__(self, account_number: str) -> None:
        self.account_number = account_number
        super().__init__(f"Account {account_number} is inactive")


class UnbalancedPostingError(LedgerError):
    """Posting rejected before it reaches the ledger.

    Raised when the debit and credit accounts are the same, or the
    amount is zero or negative.
    """

    def __init__(
        self,
        message: str,
        *,
        debit_account: str | None = None,
        credit_account: str | None = None,
        amount: object = None,
    ) -> None:
        self.debit_account = debit_account
        self.credit_account = credit_account
        self.amount = amount
        super().__init__(message)


class ReferentialIntegrityError(LedgerError):
    """Account cannot be removed while something still references it."""

    def __init__(
        self,
        account_number: str,
        *,
        entry_count: int = 0,
        child_count: int = 0,
        message: str | None = None,
    ) -> None:
        self.account_number = account_number
        self.entry_count = entry_count
        self.child_count = child_count
        if message is None and entry_count:
            message = f"Account {account_number} is referenced by {entry_count} ledger entries"
        elif message is None:
            message = f"Account {account_number} still has {child_count} child accounts"
        super().__init__(message)


class InvalidTransitionError(LedgerError):
    """Operation not allowed from the record's current status."""

    def __init__(self, record_id: str, *, current: str, requested: str) -> None:
        self.record_id = record_id
        self.current = current
        self.requested = requested
        super().__init__(f"{record_id}: cannot {requested} while {current}")


class ChartStructureError(LedgerError):
    """Chart of accounts would stop being a well-formed tree."""


class RecordNotFoundError(LedgerError):
    """Subsidiary record or ledger entry lookup failed."""

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} not found: {key}")


class ConfigError(LedgerError):
    """Missing or malformed configuration or stored state."""


class SyncError(LedgerError):
    """Remote mirror request failed."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class RetryableSyncError(SyncError):
    """Transient mirror failure (rate limit, 5xx, transport error) - safe to retry."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        retry_after: int | None = None,
    ) -> None:
        self.retry_after = retry_after
        super().__init__(message, status_code=status_code)
