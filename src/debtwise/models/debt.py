"""Debt entities and their enumerations."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class DebtType(str, Enum):
    CREDIT_CARD = "credit_card"
    AUTO_LOAN = "auto_loan"
    MORTGAGE = "mortgage"
    STUDENT_LOAN = "student_loan"
    PERSONAL_LOAN = "personal_loan"
    MEDICAL_BILL = "medical_bill"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Human-readable name, e.g. ``credit_card`` -> ``Credit Card``."""
        return self.value.replace("_", " ").title()


class PaymentFrequency(str, Enum):
    MONTHLY = "monthly"
    BIWEEKLY = "biweekly"
    WEEKLY = "weekly"


class Debt(SQLModel, table=True):
    """Installment or revolving debt tracked for a user.

    ``balance`` is the original balance; the outstanding amount is derived
    from the payment history and never written back.
    """

    __tablename__: ClassVar[str] = "debt"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=80, index=True)
    balance: Decimal = Field(nullable=False, max_digits=12, decimal_places=2)
    interest_rate: Decimal = Field(
        default=Decimal("0.00"), nullable=False, max_digits=5, decimal_places=2
    )
    minimum_payment: Decimal = Field(nullable=False, max_digits=12, decimal_places=2)
    due_day: int = Field(default=1, ge=1, le=31)
    debt_type: DebtType = Field(default=DebtType.OTHER, nullable=False)
    payment_frequency: PaymentFrequency = Field(
        default=PaymentFrequency.MONTHLY, nullable=False
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
