"""Repository protocol definitions for domain layer."""

from .budget import BudgetItemRepository
from .debt import DebtRepository
from .payment import PaymentRepository
from .user import UserRepository

__all__ = [
    "BudgetItemRepository",
    "DebtRepository",
    "PaymentRepository",
    "UserRepository",
]
