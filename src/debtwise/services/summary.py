"""Dashboard summary composition."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Sequence

from ..domain.repositories import BudgetItemRepository, DebtRepository
from ..logging_config import get_logger
from ..models.budget import BudgetItem
from .budgeting import BudgetSummary, budget_health, summarize_budget
from .liabilities import DebtView, build_debt_view

logger = get_logger(__name__)

ZERO = Decimal("0.00")


@dataclass(frozen=True, slots=True)
class DashboardSummary:
    """Figures shown on the dashboard."""

    total_debt: Decimal
    monthly_payments: Decimal
    total_income: Decimal
    total_expenses: Decimal
    available_for_debt: Decimal
    protected_amount: Decimal
    debt_count: int
    budget_health: int

    def to_dict(self) -> dict[str, Any]:
        """Plain data for JSON output; money as two-decimal strings."""
        return {
            "total_debt": f"{self.total_debt:.2f}",
            "monthly_payments": f"{self.monthly_payments:.2f}",
            "total_income": f"{self.total_income:.2f}",
            "total_expenses": f"{self.total_expenses:.2f}",
            "available_for_debt": f"{self.available_for_debt:.2f}",
            "protected_amount": f"{self.protected_amount:.2f}",
            "debt_count": self.debt_count,
            "budget_health": self.budget_health,
        }


@dataclass(frozen=True, slots=True)
class LedgerSnapshot:
    """One user's debts and budget as read at a single point in time."""

    views: list[DebtView]
    budget: BudgetSummary
    budget_items: list[BudgetItem]


def compose_summary(views: Sequence[DebtView], budget: BudgetSummary) -> DashboardSummary:
    """Combine per-debt views and the budget summary."""

    return DashboardSummary(
        total_debt=sum((v.remaining_balance for v in views), ZERO),
        monthly_payments=sum((v.minimum_payment for v in views), ZERO),
        total_income=budget.total_income,
        total_expenses=budget.total_expenses,
        available_for_debt=budget.available_for_debt,
        protected_amount=budget.protected_amount,
        debt_count=len(views),
        budget_health=budget_health(budget),
    )


def load_snapshot(
    *, debts: DebtRepository, budget_items: BudgetItemRepository, user_id: int
) -> LedgerSnapshot:
    """Fetch and aggregate everything the summary and projections need."""

    views = [
        build_debt_view(debt, payments)
        for debt, payments in debts.list_with_payments(user_id=user_id)
    ]
    items = budget_items.list_all(user_id=user_id)
    return LedgerSnapshot(views=views, budget=summarize_budget(items), budget_items=items)


def build_dashboard(
    *, debts: DebtRepository, budget_items: BudgetItemRepository, user_id: int
) -> DashboardSummary:
    """Load the user's records and compose the dashboard summary."""

    snapshot = load_snapshot(debts=debts, budget_items=budget_items, user_id=user_id)
    summary = compose_summary(snapshot.views, snapshot.budget)
    logger.info(
        "Dashboard summary composed",
        extra={"user_id": user_id, "debt_count": summary.debt_count},
    )
    return summary


__all__ = [
    "DashboardSummary",
    "LedgerSnapshot",
    "build_dashboard",
    "compose_summary",
    "load_snapshot",
]
