"""Budget item repository protocol."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from ...models.budget import BudgetItem, BudgetItemType


class BudgetItemRepository(Protocol):
    """Repository for budget line items."""

    def get_by_id(self, entity_id: int, *, user_id: int) -> Optional[BudgetItem]:
        ...

    def list_all(self, *, user_id: int) -> list[BudgetItem]:
        ...

    def list_by_type(self, item_type: BudgetItemType, *, user_id: int) -> list[BudgetItem]:
        ...

    def create(self, item: BudgetItem, *, user_id: int) -> BudgetItem:
        ...

    def update(self, entity_id: int, *, user_id: int, **changes: Any) -> Optional[BudgetItem]:
        ...

    def delete(self, entity_id: int, *, user_id: int) -> bool:
        ...
