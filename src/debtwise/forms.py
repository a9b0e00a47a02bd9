"""Input forms validating raw user data before it reaches the ledger.

Each form collects per-field error messages from ``validate()`` and only
builds a model row once the input is clean.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, List, TypeVar

from .errors import ValidationError
from .models.budget import BudgetItem, BudgetItemType
from .models.debt import Debt, DebtType, PaymentFrequency
from .models.payment import Payment, PaymentKind
from .services.currency import parse_amount, parse_due_day, parse_interest_rate

EnumT = TypeVar("EnumT", bound=Enum)


@dataclass(slots=True)
class _Form:
    errors: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def _add_error(self, name: str, message: str) -> None:
        self.errors.setdefault(name, []).append(message)

    def _required_text(self, name: str, value: str | None, *, max_length: int) -> str:
        text = (value or "").strip()
        if not text:
            self._add_error(name, "This field is required.")
        elif len(text) > max_length:
            self._add_error(name, f"Keep this under {max_length} characters.")
        return text

    def _choice(self, name: str, value: object, enum: type[EnumT]) -> EnumT | None:
        try:
            return enum(value)
        except ValueError:
            choices = ", ".join(member.value for member in enum)
            self._add_error(name, f"Choose one of: {choices}.")
            return None

    def _parsed(self, name: str, parser, value: object):
        try:
            return parser(value, field=name)
        except ValidationError as exc:
            self._add_error(name, exc.message)
            return None

    def _require_valid(self) -> None:
        if not self.validate():
            name, messages = next(iter(self.errors.items()))
            raise ValidationError(name, messages[0])

    def validate(self) -> bool:  # pragma: no cover - overridden
        raise NotImplementedError

    @property
    def error_messages(self) -> Iterable[str]:
        """Flattened iterable of error strings for summaries."""

        for messages in self.errors.values():
            yield from messages


@dataclass(slots=True)
class DebtForm(_Form):
    """Raw debt input as typed by the user."""

    name: str = ""
    balance: Decimal | str | None = None
    interest_rate: Decimal | str | None = None
    minimum_payment: Decimal | str | None = None
    due_day: int | str | None = None
    debt_type: str = DebtType.CREDIT_CARD.value
    payment_frequency: str = PaymentFrequency.MONTHLY.value

    def validate(self) -> bool:
        """Return True when every field is acceptable."""

        self.errors.clear()
        self.name = self._required_text("name", self.name, max_length=80)
        balance = self._parsed("balance", parse_amount, self.balance)
        minimum = self._parsed("minimum_payment", parse_amount, self.minimum_payment)
        self._parsed("interest_rate", parse_interest_rate, self.interest_rate)
        self._parsed("due_day", parse_due_day, self.due_day)
        self._choice("debt_type", self.debt_type, DebtType)
        self._choice("payment_frequency", self.payment_frequency, PaymentFrequency)

        if balance is not None and minimum is not None and minimum > balance:
            self._add_error("minimum_payment", "Minimum payment cannot be greater than the balance.")
        return not self.errors

    def to_model(self, *, user_id: int) -> Debt:
        self._require_valid()
        return Debt(
            user_id=user_id,
            name=self.name,
            balance=parse_amount(self.balance, field="balance"),
            interest_rate=parse_interest_rate(self.interest_rate),
            minimum_payment=parse_amount(self.minimum_payment, field="minimum_payment"),
            due_day=parse_due_day(self.due_day),
            debt_type=DebtType(self.debt_type),
            payment_frequency=PaymentFrequency(self.payment_frequency),
        )


@dataclass(slots=True)
class BudgetItemForm(_Form):
    """Raw budget line input."""

    name: str = ""
    amount: Decimal | str | None = None
    category: str = ""
    item_type: str = BudgetItemType.EXPENSE.value
    is_essential: bool = False
    is_fixed: bool = False
    is_protected: bool = False

    def validate(self) -> bool:
        self.errors.clear()
        self.name = self._required_text("name", self.name, max_length=80)
        self.category = self._required_text("category", self.category, max_length=64).lower()
        self._parsed("amount", parse_amount, self.amount)
        item_type = self._choice("item_type", self.item_type, BudgetItemType)
        if item_type is BudgetItemType.INCOME and self.is_protected:
            self._add_error("is_protected", "Only expenses can be protected.")
        return not self.errors

    def to_model(self, *, user_id: int) -> BudgetItem:
        self._require_valid()
        return BudgetItem(
            user_id=user_id,
            name=self.name,
            amount=parse_amount(self.amount),
            category=self.category,
            item_type=BudgetItemType(self.item_type),
            is_essential=bool(self.is_essential),
            is_fixed=bool(self.is_fixed),
            is_protected=bool(self.is_protected),
        )


@dataclass(slots=True)
class PaymentForm(_Form):
    """Raw payment input; the date defaults to now."""

    debt_id: int | str | None = None
    amount: Decimal | str | None = None
    payment_date: datetime | date | str | None = None
    payment_type: str = PaymentKind.MINIMUM.value

    def _parse_debt_id(self) -> int | None:
        try:
            debt_id = int(str(self.debt_id))
        except (TypeError, ValueError):
            self._add_error("debt_id", "Choose a debt.")
            return None
        if debt_id <= 0:
            self._add_error("debt_id", "Choose a debt.")
            return None
        return debt_id

    def _parse_date(self) -> datetime | None:
        value = self.payment_date
        if value is None or value == "":
            return datetime.now(timezone.utc)
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime.combine(value, time.min)
        else:
            try:
                parsed = datetime.fromisoformat(str(value).strip())
            except ValueError:
                self._add_error("payment_date", "Use the YYYY-MM-DD format.")
                return None
        # Naive input is read as UTC
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    def validate(self) -> bool:
        self.errors.clear()
        self._parse_debt_id()
        self._parsed("amount", parse_amount, self.amount)
        self._parse_date()
        self._choice("payment_type", self.payment_type, PaymentKind)
        return not self.errors

    def to_model(self, *, user_id: int) -> Payment:
        self._require_valid()
        return Payment(
            user_id=user_id,
            debt_id=int(str(self.debt_id)),
            amount=parse_amount(self.amount),
            payment_date=self._parse_date(),
            payment_type=PaymentKind(self.payment_type),
        )


__all__ = ["BudgetItemForm", "DebtForm", "PaymentForm"]
