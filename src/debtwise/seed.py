"""Demo data seeding."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from .context import AppContext
from .logging_config import get_logger
from .models.budget import BudgetItem, BudgetItemType
from .models.debt import Debt, DebtType
from .models.payment import Payment, PaymentKind
from .models.user import User
from .services.auth import register_user

logger = get_logger(__name__)

DEMO_USERNAME = "juan"
DEMO_PASSWORD = "password123"

_DEMO_DEBTS = [
    ("BPI Credit Card", "45000.00", "36.00", "2250.00", 15, DebtType.CREDIT_CARD),
    ("Car Loan", "380000.00", "9.50", "12500.00", 5, DebtType.AUTO_LOAN),
    ("SSS Salary Loan", "24000.00", "10.00", "1100.00", 28, DebtType.PERSONAL_LOAN),
]

_DEMO_BUDGET = [
    ("Salary", "65000.00", "salary", BudgetItemType.INCOME, False, False, False),
    ("Freelance", "8000.00", "side-income", BudgetItemType.INCOME, False, False, False),
    ("Groceries", "9000.00", "food", BudgetItemType.EXPENSE, True, False, True),
    ("Rent", "15000.00", "housing", BudgetItemType.EXPENSE, True, True, False),
    ("Electricity & Water", "3500.00", "utilities", BudgetItemType.EXPENSE, True, False, False),
    ("Internet", "1700.00", "utilities", BudgetItemType.EXPENSE, False, True, False),
    ("Transport", "4000.00", "transportation", BudgetItemType.EXPENSE, True, False, False),
]


def seed_demo_data(app: AppContext) -> User:
    """Create the demo user and sample records; existing demo data is left alone."""

    existing = app.user_repo.get_by_username(DEMO_USERNAME)
    if existing is not None:
        logger.info("Demo user already present", extra={"user_id": existing.id})
        return existing

    user = register_user(
        username=DEMO_USERNAME,
        password=DEMO_PASSWORD,
        full_name="Juan dela Cruz",
        users=app.user_repo,
    )
    user_id = user.id

    now = datetime.now(timezone.utc)
    for name, balance, rate, minimum, due_day, debt_type in _DEMO_DEBTS:
        debt = app.debt_repo.create(
            Debt(
                user_id=user_id,
                name=name,
                balance=Decimal(balance),
                interest_rate=Decimal(rate),
                minimum_payment=Decimal(minimum),
                due_day=due_day,
                debt_type=debt_type,
            ),
            user_id=user_id,
        )
        for months_ago in (2, 1):
            app.payment_repo.create(
                Payment(
                    user_id=user_id,
                    debt_id=debt.id,
                    amount=debt.minimum_payment,
                    payment_date=now - timedelta(days=30 * months_ago),
                    payment_type=PaymentKind.MINIMUM,
                ),
                user_id=user_id,
            )

    for name, amount, category, item_type, essential, fixed, protected in _DEMO_BUDGET:
        app.budget_repo.create(
            BudgetItem(
                user_id=user_id,
                name=name,
                amount=Decimal(amount),
                category=category,
                item_type=item_type,
                is_essential=essential,
                is_fixed=fixed,
                is_protected=protected,
            ),
            user_id=user_id,
        )

    logger.info("Demo data seeded", extra={"user_id": user_id})
    return user
