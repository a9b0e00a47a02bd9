"""SQLModel implementation of the Payment repository."""

from __future__ import annotations

from ...errors import ImmutableRecordError, NotFoundError
from ...models.debt import Debt
from ...models.payment import Payment
from .base import OwnedRepository, fetch_owned, owned_query


class SQLModelPaymentRepository(OwnedRepository[Payment]):
    """Payments are append-only: create, list and delete, never update."""

    model = Payment

    def list_for_debt(self, debt_id: int, *, user_id: int) -> list[Payment]:
        """Payments for one owned debt, oldest first."""
        with self.session_factory() as session:
            statement = (
                owned_query(Payment, user_id=user_id)
                .where(Payment.debt_id == debt_id)
                .order_by(Payment.payment_date, Payment.id)
            )
            payments = list(session.exec(statement).all())
            session.expunge_all()
            return payments

    def create(self, payment: Payment, *, user_id: int) -> Payment:
        """Record a payment against a debt owned by the same user."""
        with self.session_factory() as session:
            if fetch_owned(session, Debt, payment.debt_id, user_id=user_id) is None:
                raise NotFoundError(f"Debt {payment.debt_id} not found")
        return self._insert(payment, user_id=user_id)

    def update(self, entity_id: int, *, user_id: int, **changes) -> None:
        raise ImmutableRecordError("Payments are immutable; delete and re-create instead.")
