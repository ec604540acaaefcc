"""Reserve study items."""

from decimal import Decimal
from typing import Any
from uuid import uuid4

from hoa_ledger.ledger.models import to_money
from hoa_ledger.models import ReserveItem
from hoa_ledger.services.base import BaseService
from hoa_ledger.sync.records import SyncTable


class ReservesService(BaseService):
    """Maintain the reserve study components used by funding reports."""

    def get(self, item_id: str) -> ReserveItem:
        return self.state.reserve_item(item_id)

    def list_items(self) -> list[ReserveItem]:
        return list(self.state.reserve_items.values())

    def add_item(
        self,
        name: str,
        estimated_cost: Decimal | int | str,
        *,
        current_funding: Decimal | int | str = 0,
        useful_life: int = 0,
        years_remaining: Decimal | int | str = 0,
        last_replaced: str | None = None,
        is_contingency: bool = False,
        item_id: str | None = None,
    ) -> ReserveItem:
        with self._engine.transaction() as state:
            item = ReserveItem(
                id=item_id or f"res-{uuid4().hex[:8]}",
                name=name,
                estimated_cost=to_money(estimated_cost),
                current_funding=to_money(current_funding),
                useful_life=useful_life,
                years_remaining=Decimal(str(years_remaining)),
                last_replaced=last_replaced,
                is_contingency=is_contingency,
            )
            state.reserve_items[item.id] = item
            self._engine.touch(SyncTable.RESERVE_ITEMS, item.id)
        return item

    def update_item(self, item_id: str, **changes: Any) -> ReserveItem:
        """Replace fields of an item; values are validated like a new item."""
        with self._engine.transaction() as state:
            item = state.reserve_item(item_id)
            updated = ReserveItem.model_validate({**item.model_dump(), **changes, "id": item_id})
            state.reserve_items[item_id] = updated
            self._engine.touch(SyncTable.RESERVE_ITEMS, item_id)
        return updated

    def delete_item(self, item_id: str) -> ReserveItem:
        with self._engine.transaction() as state:
            item = state.reserve_item(item_id)
            del state.reserve_items[item_id]
            self._engine.touch(SyncTable.RESERVE_ITEMS, item_id)
        return item
