"""Per-debt views derived from payment history, plus due-date reminders."""

from __future__ import annotations

from calendar import monthrange
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from ..errors import InvariantViolation
from ..logging_config import get_logger
from ..models.debt import Debt, DebtType
from ..models.payment import Payment

logger = get_logger(__name__)

ZERO = Decimal("0.00")
UPCOMING_WINDOW_DAYS = 7


@dataclass(frozen=True, slots=True)
class DebtView:
    """A debt together with its payments and derived balance figures."""

    debt: Debt
    payments: tuple[Payment, ...]
    total_paid: Decimal
    remaining_balance: Decimal

    @property
    def debt_id(self) -> int | None:
        return self.debt.id

    @property
    def interest_rate(self) -> Decimal:
        return self.debt.interest_rate

    @property
    def minimum_payment(self) -> Decimal:
        return self.debt.minimum_payment

    @property
    def is_paid_off(self) -> bool:
        return self.remaining_balance == 0

    @property
    def percent_paid(self) -> int:
        """Share of the original balance already repaid, 0-100."""
        if self.total_paid >= self.debt.balance:
            return 100
        ratio = self.total_paid / self.debt.balance * 100
        return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def require_money(value: object, *, field: str, allow_zero: bool = False) -> Decimal:
    """Assert a pre-validated monetary value; raise ``InvariantViolation`` otherwise."""

    if not isinstance(value, Decimal) or not value.is_finite():
        raise InvariantViolation(f"{field} must be a finite Decimal, got {value!r}")
    if value < 0 or (value == 0 and not allow_zero):
        raise InvariantViolation(f"{field} must be positive, got {value}")
    return value


def _check_debt(debt: Debt) -> None:
    require_money(debt.balance, field="balance")
    require_money(debt.minimum_payment, field="minimum_payment")
    rate = require_money(debt.interest_rate, field="interest_rate", allow_zero=True)
    if rate > 100:
        raise InvariantViolation(f"interest_rate must be within [0, 100], got {rate}")
    if not isinstance(debt.due_day, int) or not 1 <= debt.due_day <= 31:
        raise InvariantViolation(f"due_day must be within [1, 31], got {debt.due_day!r}")


def build_debt_view(debt: Debt, payments: Iterable[Payment]) -> DebtView:
    """Sum a debt's payments and derive its remaining balance.

    Over-payment clamps the remaining balance to zero; there is no credit
    balance, so ``total_paid + remaining_balance`` exceeds ``balance`` only in
    that case.
    """

    _check_debt(debt)
    owned = tuple(payments)
    total_paid = ZERO
    for payment in owned:
        if payment.debt_id != debt.id or payment.user_id != debt.user_id:
            raise InvariantViolation(
                f"payment {payment.id} does not belong to debt {debt.id}"
            )
        total_paid += require_money(payment.amount, field="payment.amount")

    remaining = max(ZERO, debt.balance - total_paid)
    return DebtView(
        debt=debt,
        payments=owned,
        total_paid=total_paid,
        remaining_balance=remaining,
    )


def build_debt_views(debts: Iterable[Debt], payments: Iterable[Payment]) -> list[DebtView]:
    """Group a flat payment list by debt and build one view per debt."""

    by_debt: dict[int | None, list[Payment]] = defaultdict(list)
    for payment in payments:
        by_debt[payment.debt_id].append(payment)

    views = [build_debt_view(debt, by_debt.pop(debt.id, [])) for debt in debts]
    if by_debt:
        orphaned = sorted(str(debt_id) for debt_id in by_debt)
        raise InvariantViolation(f"payments reference unknown debts: {', '.join(orphaned)}")
    logger.debug("Built debt views", extra={"debt_count": len(views)})
    return views


def remaining_by_type(views: Iterable[DebtView]) -> dict[DebtType, Decimal]:
    """Total remaining balance per debt type, largest first."""

    totals: dict[DebtType, Decimal] = defaultdict(lambda: ZERO)
    for view in views:
        totals[DebtType(view.debt.debt_type)] += view.remaining_balance
    return dict(sorted(totals.items(), key=lambda item: (-item[1], item[0].value)))


@dataclass(frozen=True, slots=True)
class DueReminder:
    """When a debt's payment falls due in a given month."""

    debt_id: int | None
    name: str
    minimum_payment: Decimal
    due_date: date
    days_until_due: int

    @property
    def is_overdue(self) -> bool:
        return self.days_until_due < 0

    @property
    def is_upcoming(self) -> bool:
        return 0 <= self.days_until_due <= UPCOMING_WINDOW_DAYS


def due_date_for(due_day: int, *, year: int, month: int) -> date:
    """Return the due date in the given month, clamping 29-31 to the month end."""

    last_day = monthrange(year, month)[1]
    return date(year, month, min(due_day, last_day))


def upcoming_payments(
    views: Sequence[DebtView], *, today: date | None = None
) -> list[DueReminder]:
    """Due dates for the current month of every debt that still has a balance."""

    current = today or date.today()
    reminders = []
    for view in views:
        if view.is_paid_off:
            continue
        due = due_date_for(view.debt.due_day, year=current.year, month=current.month)
        reminders.append(
            DueReminder(
                debt_id=view.debt_id,
                name=view.debt.name,
                minimum_payment=view.minimum_payment,
                due_date=due,
                days_until_due=(due - current).days,
            )
        )
    return sorted(reminders, key=lambda r: (r.days_until_due, r.name))


__all__ = [
    "DebtView",
    "DueReminder",
    "build_debt_view",
    "build_debt_views",
    "due_date_for",
    "remaining_by_type",
    "require_money",
    "upcoming_payments",
]
