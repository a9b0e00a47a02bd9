"""SQLModel implementation of the Debt repository."""

from __future__ import annotations

from collections import defaultdict

from sqlmodel import Session

from ...models.debt import Debt
from ...models.payment import Payment
from .base import OwnedRepository, owned_query


class SQLModelDebtRepository(OwnedRepository[Debt]):
    """Debts scoped to their owning user; deleting a debt removes its payments."""

    model = Debt
    mutable_fields = frozenset(
        {
            "name",
            "balance",
            "interest_rate",
            "minimum_payment",
            "due_day",
            "debt_type",
            "payment_frequency",
        }
    )

    def create(self, debt: Debt, *, user_id: int) -> Debt:
        """Create a new debt."""
        return self._insert(debt, user_id=user_id)

    def list_with_payments(self, *, user_id: int) -> list[tuple[Debt, list[Payment]]]:
        """Return each debt with its payments, read in one session."""
        with self.session_factory() as session:
            debts = list(
                session.exec(owned_query(Debt, user_id=user_id).order_by(Debt.id)).all()
            )
            payments = session.exec(
                owned_query(Payment, user_id=user_id).order_by(Payment.payment_date, Payment.id)
            ).all()
            session.expunge_all()

        grouped: dict[int, list[Payment]] = defaultdict(list)
        for payment in payments:
            grouped[payment.debt_id].append(payment)
        return [(debt, grouped.get(debt.id, [])) for debt in debts]

    def _before_delete(self, session: Session, row: Debt, *, user_id: int) -> None:
        statement = owned_query(Payment, user_id=user_id).where(Payment.debt_id == row.id)
        for payment in session.exec(statement).all():
            session.delete(payment)
        session.flush()
