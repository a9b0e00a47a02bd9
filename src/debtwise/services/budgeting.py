"""Budgeting domain services."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from typing import Iterable

from ..errors import InvariantViolation
from ..logging_config import get_logger
from ..models.budget import BudgetItem, BudgetItemType
from .liabilities import require_money

logger = get_logger(__name__)

ZERO = Decimal("0.00")


@dataclass(frozen=True, slots=True)
class BudgetSummary:
    """Monthly income/expense totals for one user.

    ``available_for_debt`` is negative when expenses exceed income; callers
    treat that as a deficit signal rather than an error.
    """

    total_income: Decimal
    total_expenses: Decimal
    protected_amount: Decimal
    essential_amount: Decimal
    fixed_amount: Decimal

    @property
    def available_for_debt(self) -> Decimal:
        return self.total_income - self.total_expenses

    @property
    def is_deficit(self) -> bool:
        return self.available_for_debt < 0


@dataclass(frozen=True, slots=True)
class CategoryBreakdown:
    """Expense total for one category and its share of income."""

    category: str
    amount: Decimal
    is_protected: bool
    percentage_of_income: Decimal


def _item_type(item: BudgetItem) -> BudgetItemType:
    try:
        return BudgetItemType(item.item_type)
    except ValueError as exc:
        raise InvariantViolation(f"unknown budget item type {item.item_type!r}") from exc


def summarize_budget(items: Iterable[BudgetItem]) -> BudgetSummary:
    """Partition items into income and expenses and total them."""

    income = ZERO
    expenses = ZERO
    protected = ZERO
    essential = ZERO
    fixed = ZERO
    for item in items:
        amount = require_money(item.amount, field="budget_item.amount")
        if _item_type(item) is BudgetItemType.INCOME:
            income += amount
            continue
        expenses += amount
        if item.is_protected:
            protected += amount
        if item.is_essential:
            essential += amount
        if item.is_fixed:
            fixed += amount

    summary = BudgetSummary(
        total_income=income,
        total_expenses=expenses,
        protected_amount=protected,
        essential_amount=essential,
        fixed_amount=fixed,
    )
    if summary.is_deficit:
        logger.info(
            "Budget deficit detected",
            extra={"income": income, "expenses": expenses},
        )
    return summary


def budget_health(summary: BudgetSummary) -> int:
    """Percentage of income left for debt service.

    Rounds half toward positive infinity and is not clamped: it goes negative
    on a deficit. Zero income yields 0.
    """

    if summary.total_income <= 0:
        return 0
    ratio = summary.available_for_debt / summary.total_income * 100
    return int((ratio + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


def category_breakdown(
    items: Iterable[BudgetItem], *, total_income: Decimal
) -> list[CategoryBreakdown]:
    """Expense totals per category, largest first."""

    amounts: dict[str, Decimal] = defaultdict(lambda: ZERO)
    protected: dict[str, bool] = defaultdict(bool)
    for item in items:
        if _item_type(item) is not BudgetItemType.EXPENSE:
            continue
        amounts[item.category] += require_money(item.amount, field="budget_item.amount")
        protected[item.category] = protected[item.category] or bool(item.is_protected)

    rows = []
    for category, amount in amounts.items():
        if total_income > 0:
            share = (amount / total_income * 100).quantize(Decimal("0.01"))
        else:
            share = ZERO
        rows.append(
            CategoryBreakdown(
                category=category,
                amount=amount,
                is_protected=protected[category],
                percentage_of_income=share,
            )
        )
    return sorted(rows, key=lambda row: (-row.amount, row.category))


__all__ = [
    "BudgetSummary",
    "CategoryBreakdown",
    "budget_health",
    "category_breakdown",
    "summarize_budget",
]
