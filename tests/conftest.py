"""Pytest configuration and shared fixtures for DebtWise tests.

Provides a throwaway SQLite database, repositories bound to it, and factories
for in-memory debts, payments and budget items used by the service tests.
"""

from __future__ import annotations

import itertools
import tempfile
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from debtwise.config import TestConfig
from debtwise.context import create_app_context
from debtwise.infra.database import create_session_factory
from debtwise.infra.repositories import (
    SQLModelBudgetItemRepository,
    SQLModelDebtRepository,
    SQLModelPaymentRepository,
    SQLModelUserRepository,
)
from debtwise.models import (
    BudgetItem,
    BudgetItemType,
    Debt,
    DebtType,
    Payment,
    PaymentKind,
    User,
)
from debtwise.services.liabilities import build_debt_view

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Transactional session scopes bound to the test database."""
    return create_session_factory(db_engine)


@pytest.fixture
def user_repo(session_factory):
    return SQLModelUserRepository(session_factory)


@pytest.fixture
def debt_repo(session_factory):
    return SQLModelDebtRepository(session_factory)


@pytest.fixture
def payment_repo(session_factory):
    return SQLModelPaymentRepository(session_factory)


@pytest.fixture
def budget_repo(session_factory):
    return SQLModelBudgetItemRepository(session_factory)


@pytest.fixture
def user(user_repo) -> User:
    """Persisted default user for scoping data."""
    return user_repo.create(User(username="tester", password_hash="dummy-hash", full_name="Test User"))


@pytest.fixture
def other_user(user_repo) -> User:
    """A second user whose records must stay invisible to ``user``."""
    return user_repo.create(User(username="intruder", password_hash="dummy-hash"))


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    """Keep the SQLite file and logs of every test inside its tmp_path."""
    monkeypatch.setenv("DEBTWISE_DATA_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def app_context():
    """Fully wired application context on an in-memory database."""
    return create_app_context(TestConfig())


# =============================================================================
# In-memory record factories
# =============================================================================


@pytest.fixture
def make_debt():
    """Factory for unsaved Debt rows with sequential ids."""

    ids = itertools.count(1)

    def _make_debt(
        *,
        balance: str = "1000.00",
        interest_rate: str = "18.00",
        minimum_payment: str = "50.00",
        name: str | None = None,
        due_day: int = 15,
        debt_type: DebtType = DebtType.CREDIT_CARD,
        debt_id: int | None = None,
        user_id: int = 1,
    ) -> Debt:
        debt_id = debt_id if debt_id is not None else next(ids)
        return Debt(
            id=debt_id,
            user_id=user_id,
            name=name or f"Debt {debt_id}",
            balance=Decimal(balance),
            interest_rate=Decimal(interest_rate),
            minimum_payment=Decimal(minimum_payment),
            due_day=due_day,
            debt_type=debt_type,
        )

    return _make_debt


@pytest.fixture
def make_payment():
    """Factory for unsaved Payment rows attached to a debt."""

    ids = itertools.count(1)

    def _make_payment(debt: Debt, amount: str, *, kind: PaymentKind = PaymentKind.MINIMUM) -> Payment:
        return Payment(
            id=next(ids),
            debt_id=debt.id,
            user_id=debt.user_id,
            amount=Decimal(amount),
            payment_date=datetime(2024, 1, 15, tzinfo=timezone.utc),
            payment_type=kind,
        )

    return _make_payment


@pytest.fixture
def make_view(make_debt, make_payment):
    """Build a DebtView from debt kwargs plus a list of payment amounts."""

    def _make_view(*, paid: tuple[str, ...] = (), **debt_kwargs):
        debt = make_debt(**debt_kwargs)
        return build_debt_view(debt, [make_payment(debt, amount) for amount in paid])

    return _make_view


@pytest.fixture
def make_budget_item():
    """Factory for unsaved BudgetItem rows."""

    ids = itertools.count(1)

    def _make_item(
        amount: str,
        *,
        item_type: BudgetItemType = BudgetItemType.EXPENSE,
        category: str = "misc",
        name: str | None = None,
        is_protected: bool = False,
        is_essential: bool = False,
        is_fixed: bool = False,
    ) -> BudgetItem:
        item_id = next(ids)
        return BudgetItem(
            id=item_id,
            user_id=1,
            name=name or f"Item {item_id}",
            amount=Decimal(amount),
            category=category,
            item_type=item_type,
            is_protected=is_protected,
            is_essential=is_essential,
            is_fixed=is_fixed,
        )

    return _make_item
