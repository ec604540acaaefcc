"""Chart of accounts management."""

from hoa_ledger.exceptions import ReferentialIntegrityError
from hoa_ledger.ledger.models import Account, AccountType
from hoa_ledger.models import WorkOrderStatus
from hoa_ledger.services.base import BaseService
from hoa_ledger.sync.records import SyncTable


class AccountsService(BaseService):
    """Create, rename, (de)activate and delete accounts.

    Accounts are set up once per tenant and rarely change afterwards.
    Deleting is refused once the ledger references the account.
    """

    def get(self, number: str) -> Account:
        return self.state.chart.get(number)

    def list_accounts(self, account_type: AccountType | None = None) -> list[Account]:
        """All accounts in number order, optionally of one type."""
        accounts = list(self.state.chart)
        if account_type is not None:
            accounts = [a for a in accounts if a.account_type == account_type]
        return accounts

    def add_section(self, number: str, name: str, account_type: AccountType) -> Account:
        """Create a top-level header account."""
        with self._engine.transaction() as state:
            account = state.chart.add_section(number, name, account_type)
            self._engine.touch(SyncTable.CHART_OF_ACCOUNTS, number)
        return account

    def add_account(
        self,
        number: str,
        name: str,
        parent_number: str,
        sub: str = "detail",
        *,
        budget_category: str | None = None,
        reserve_item: str | None = None,
    ) -> Account:
        """Create an account under a header; its type comes from the header."""
        with self._engine.transaction() as state:
            account = state.chart.add_account(
                number,
                name,
                parent_number,
                sub,
                budget_category=budget_category,
                reserve_item=reserve_item,
            )
            self._engine.touch(SyncTable.CHART_OF_ACCOUNTS, number)
        return account

    def rename(self, number: str, name: str) -> Account:
        with self._engine.transaction() as state:
            account = state.chart.rename(number, name)
            self._engine.touch(SyncTable.CHART_OF_ACCOUNTS, number)
        return account

    def set_active(self, number: str, active: bool) -> Account:
        with self._engine.transaction() as state:
            account = state.chart.set_active(number, active)
            self._engine.touch(SyncTable.CHART_OF_ACCOUNTS, number)
        return account

    def update(self, number: str, name: str, active: bool) -> Account:
        with self._engine.transaction() as state:
            account = state.chart.update(number, name, active)
            self._engine.touch(SyncTable.CHART_OF_ACCOUNTS, number)
        return account

    def delete(self, number: str) -> Account:
        """Remove an account that nothing references.

        Raises:
            UnknownAccountError: If the account doesn't exist
            ReferentialIntegrityError: If any ledger entry uses the account,
                it still has child accounts, an unpaid work order is charged
                to it, or a budget category takes its actuals from it
        """
        with self._engine.transaction() as state:
            account = state.chart.get(number)
            entry_count = state.ledger.references(number)
            if entry_count:
                raise ReferentialIntegrityError(number, entry_count=entry_count)
            children = state.chart.children(number)
            if children:
                raise ReferentialIntegrityError(number, child_count=len(children))
            open_orders = [
                w.id
                for w in state.work_orders.values()
                if w.account_number == number and w.status != WorkOrderStatus.PAID
            ]
            if open_orders:
                raise ReferentialIntegrityError(
                    number,
                    message=f"Account {number} is charged by open work orders: "
                    f"{', '.join(open_orders)}",
                )
            if account.budget_category in state.budget_categories:
                raise ReferentialIntegrityError(
                    number,
                    message=f"Account {number} holds the actuals of budget category "
                    f"{account.budget_category}",
                )
            account = state.chart.remove(number)
            self._engine.touch(SyncTable.CHART_OF_ACCOUNTS, number)
        return account
