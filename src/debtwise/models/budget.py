"""Monthly budget line items."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class BudgetItemType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class BudgetItem(SQLModel, table=True):
    """Recurring monthly income or expense.

    ``is_protected`` marks expenses (conventionally food) that are never cut
    to free money for debt payments.
    """

    __tablename__: ClassVar[str] = "budget_item"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=80)
    amount: Decimal = Field(nullable=False, max_digits=12, decimal_places=2)
    category: str = Field(nullable=False, max_length=64, index=True)
    item_type: BudgetItemType = Field(nullable=False)
    is_essential: bool = Field(default=False, nullable=False)
    is_fixed: bool = Field(default=False, nullable=False)
    is_protected: bool = Field(default=False, nullable=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
