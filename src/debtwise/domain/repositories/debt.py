"""Debt repository protocol."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from ...models.debt import Debt
from ...models.payment import Payment


class DebtRepository(Protocol):
    """Repository for debts owned by a user."""

    def get_by_id(self, entity_id: int, *, user_id: int) -> Optional[Debt]:
        """Retrieve an owned debt; ``None`` if missing or owned by someone else."""
        ...

    def list_all(self, *, user_id: int) -> list[Debt]:
        """List the user's debts."""
        ...

    def list_with_payments(self, *, user_id: int) -> list[tuple[Debt, list[Payment]]]:
        """List debts paired with their payments."""
        ...

    def create(self, debt: Debt, *, user_id: int) -> Debt:
        """Persist a new debt for the user."""
        ...

    def update(self, entity_id: int, *, user_id: int, **changes: Any) -> Optional[Debt]:
        """Update an owned debt."""
        ...

    def delete(self, entity_id: int, *, user_id: int) -> bool:
        """Delete an owned debt and its payments."""
        ...
