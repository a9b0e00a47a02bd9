"""Budget aggregation tests."""

from decimal import Decimal

import pytest

from debtwise.errors import InvariantViolation
from debtwise.models import BudgetItemType
from debtwise.services.budgeting import budget_health, category_breakdown, summarize_budget

INCOME = BudgetItemType.INCOME


def test_income_and_expense_totals(make_budget_item):
    items = [
        make_budget_item("50000.00", item_type=INCOME, category="salary"),
        make_budget_item("8000.00", category="food", is_protected=True),
        make_budget_item("15000.00", category="rent"),
    ]

    summary = summarize_budget(items)

    assert summary.total_income == Decimal("50000.00")
    assert summary.total_expenses == Decimal("23000.00")
    assert summary.protected_amount == Decimal("8000.00")
    assert summary.available_for_debt == Decimal("27000.00")
    assert budget_health(summary) == 54


def test_essential_and_fixed_subtotals(make_budget_item):
    items = [
        make_budget_item("10000.00", item_type=INCOME, is_essential=True),
        make_budget_item("3000.00", is_essential=True, is_fixed=True),
        make_budget_item("1200.00", is_fixed=True),
        make_budget_item("800.00"),
    ]

    summary = summarize_budget(items)

    assert summary.essential_amount == Decimal("3000.00")
    assert summary.fixed_amount == Decimal("4200.00")
    assert summary.protected_amount <= summary.total_expenses


def test_zero_income_gives_zero_health(make_budget_item):
    summary = summarize_budget([make_budget_item("1500.00"), make_budget_item("250.25")])

    assert summary.total_income == 0
    assert summary.available_for_debt == Decimal("-1750.25")
    assert summary.is_deficit
    assert budget_health(summary) == 0


def test_empty_budget():
    summary = summarize_budget([])

    assert summary.available_for_debt == 0
    assert not summary.is_deficit
    assert budget_health(summary) == 0


def test_deficit_health_is_negative(make_budget_item):
    summary = summarize_budget(
        [make_budget_item("1000.00", item_type=INCOME), make_budget_item("1255.00")]
    )

    # -25.5 rounds half up toward positive infinity
    assert budget_health(summary) == -25


@pytest.mark.parametrize(
    ("expenses", "expected"),
    [("995.00", 1), ("1005.00", 0), ("0.01", 100), ("334.00", 67)],
)
def test_health_rounding(make_budget_item, expenses, expected):
    # 1000 income: 0.5 -> 1, -0.5 -> 0, 99.999 -> 100, 66.6 -> 67
    summary = summarize_budget(
        [make_budget_item("1000.00", item_type=INCOME), make_budget_item(expenses)]
    )

    assert budget_health(summary) == expected


def test_available_is_exact_difference(make_budget_item):
    items = [
        make_budget_item("0.10", item_type=INCOME),
        make_budget_item("0.20", item_type=INCOME),
        make_budget_item("0.30"),
    ]

    summary = summarize_budget(items)

    assert summary.available_for_debt == Decimal("0.00")
    assert summary.total_income - summary.total_expenses == summary.available_for_debt


def test_rejects_invalid_amount(make_budget_item):
    item = make_budget_item("100.00")
    item.amount = Decimal("-5")

    with pytest.raises(InvariantViolation):
        summarize_budget([item])


def test_category_breakdown(make_budget_item):
    items = [
        make_budget_item("20000.00", item_type=INCOME, category="salary"),
        make_budget_item("3000.00", category="food", is_protected=True),
        make_budget_item("1000.00", category="food"),
        make_budget_item("5000.00", category="housing"),
        make_budget_item("1000.00", category="fun"),
    ]

    rows = category_breakdown(items, total_income=Decimal("20000.00"))

    assert [row.category for row in rows] == ["housing", "food", "fun"]
    food = rows[1]
    assert food.amount == Decimal("4000.00")
    assert food.is_protected
    assert food.percentage_of_income == Decimal("20.00")
    assert not rows[2].is_protected


def test_category_breakdown_without_income(make_budget_item):
    rows = category_breakdown([make_budget_item("100.00")], total_income=Decimal("0"))

    assert rows[0].percentage_of_income == 0
