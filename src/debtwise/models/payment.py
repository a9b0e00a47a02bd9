"""Repayment events recorded against a debt."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class PaymentKind(str, Enum):
    MINIMUM = "minimum"
    EXTRA = "extra"
    FULL = "full"


class Payment(SQLModel, table=True):
    """A single payment toward a debt. Rows are never updated in place."""

    __tablename__: ClassVar[str] = "payment"

    id: Optional[int] = Field(default=None, primary_key=True)
    debt_id: int = Field(foreign_key="debt.id", nullable=False, index=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    amount: Decimal = Field(nullable=False, max_digits=12, decimal_places=2)
    payment_date: datetime = Field(nullable=False, index=True)
    payment_type: PaymentKind = Field(default=PaymentKind.MINIMUM, nullable=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
