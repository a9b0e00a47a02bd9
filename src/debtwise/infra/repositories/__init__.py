"""Concrete repository implementations using SQLModel."""

from .base import OwnedRepository
from .budget import SQLModelBudgetItemRepository
from .debt import SQLModelDebtRepository
from .payment import SQLModelPaymentRepository
from .user import SQLModelUserRepository

__all__ = [
    "OwnedRepository",
    "SQLModelBudgetItemRepository",
    "SQLModelDebtRepository",
    "SQLModelPaymentRepository",
    "SQLModelUserRepository",
]
