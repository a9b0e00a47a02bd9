"""SQLModel table exports."""

from .budget import BudgetItem, BudgetItemType
from .debt import Debt, DebtType, PaymentFrequency
from .payment import Payment, PaymentKind
from .user import User

__all__ = [
    "BudgetItem",
    "BudgetItemType",
    "Debt",
    "DebtType",
    "Payment",
    "PaymentFrequency",
    "PaymentKind",
    "User",
]
