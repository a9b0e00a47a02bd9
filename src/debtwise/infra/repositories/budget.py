"""SQLModel implementation of the BudgetItem repository."""

from __future__ import annotations

from ...models.budget import BudgetItem, BudgetItemType
from .base import OwnedRepository, owned_query


class SQLModelBudgetItemRepository(OwnedRepository[BudgetItem]):
    """Budget line items scoped to their owning user."""

    model = BudgetItem
    mutable_fields = frozenset(
        {"name", "amount", "category", "item_type", "is_essential", "is_fixed", "is_protected"}
    )

    def create(self, item: BudgetItem, *, user_id: int) -> BudgetItem:
        """Create a new budget item."""
        return self._insert(item, user_id=user_id)

    def list_by_type(self, item_type: BudgetItemType, *, user_id: int) -> list[BudgetItem]:
        """Income or expense items only."""
        with self.session_factory() as session:
            statement = (
                owned_query(BudgetItem, user_id=user_id)
                .where(BudgetItem.item_type == item_type)
                .order_by(BudgetItem.id)
            )
            items = list(session.exec(statement).all())
            session.expunge_all()
            return items
