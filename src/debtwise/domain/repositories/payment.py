"""Payment repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.payment import Payment


class PaymentRepository(Protocol):
    """Append-only repository for payments."""

    def get_by_id(self, entity_id: int, *, user_id: int) -> Optional[Payment]:
        ...

    def list_all(self, *, user_id: int) -> list[Payment]:
        ...

    def list_for_debt(self, debt_id: int, *, user_id: int) -> list[Payment]:
        ...

    def create(self, payment: Payment, *, user_id: int) -> Payment:
        """Record a payment; raises ``NotFoundError`` if the debt is not owned."""
        ...

    def delete(self, entity_id: int, *, user_id: int) -> bool:
        ...
