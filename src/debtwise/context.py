"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .config import BaseConfig
from .errors import AuthenticationError
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelBudgetItemRepository,
    SQLModelDebtRepository,
    SQLModelPaymentRepository,
    SQLModelUserRepository,
)
from .models.user import User


@dataclass
class AppContext:
    """Configuration, repositories and the signed-in user."""

    config: BaseConfig
    session_factory: SessionFactory

    user_repo: SQLModelUserRepository
    debt_repo: SQLModelDebtRepository
    payment_repo: SQLModelPaymentRepository
    budget_repo: SQLModelBudgetItemRepository

    current_user: Optional[User] = field(default=None)

    def require_user_id(self) -> int:
        """Return the current user id or raise if nobody is signed in."""

        if self.current_user is None or self.current_user.id is None:
            raise AuthenticationError("User is not authenticated")
        return self.current_user.id


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the engine, ensure the schema and wire repositories."""

    config = config or BaseConfig()
    _engine, session_factory = bootstrap_database(config)
    return AppContext(
        config=config,
        session_factory=session_factory,
        user_repo=SQLModelUserRepository(session_factory),
        debt_repo=SQLModelDebtRepository(session_factory),
        payment_repo=SQLModelPaymentRepository(session_factory),
        budget_repo=SQLModelBudgetItemRepository(session_factory),
    )
