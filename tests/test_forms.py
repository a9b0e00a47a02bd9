"""Boundary validation for debt, budget and payment input."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from debtwise.errors import ValidationError
from debtwise.forms import BudgetItemForm, DebtForm, PaymentForm
from debtwise.models import BudgetItemType, DebtType, PaymentFrequency, PaymentKind


def _debt_form(**overrides):
    data = {
        "name": "  BPI Credit Card ",
        "balance": "₱45,000.00",
        "interest_rate": "36",
        "minimum_payment": "2,250",
        "due_day": "15",
        "debt_type": "credit_card",
    }
    data.update(overrides)
    return DebtForm(**data)


class TestDebtForm:
    def test_valid_input_builds_model(self):
        form = _debt_form(payment_frequency="biweekly")

        assert form.validate()
        debt = form.to_model(user_id=3)
        assert debt.user_id == 3
        assert debt.name == "BPI Credit Card"
        assert debt.balance == Decimal("45000.00")
        assert debt.interest_rate == Decimal("36.00")
        assert debt.minimum_payment == Decimal("2250.00")
        assert debt.due_day == 15
        assert debt.debt_type is DebtType.CREDIT_CARD
        assert debt.payment_frequency is PaymentFrequency.BIWEEKLY

    def test_collects_every_field_error(self):
        form = DebtForm(
            name="",
            balance="abc",
            interest_rate="120",
            minimum_payment="-5",
            due_day="32",
            debt_type="loan-shark",
        )

        assert not form.validate()
        assert set(form.errors) == {
            "name",
            "balance",
            "interest_rate",
            "minimum_payment",
            "due_day",
            "debt_type",
        }
        assert "Choose one of" in form.errors["debt_type"][0]
        assert len(list(form.error_messages)) == 6

    def test_minimum_above_balance_rejected(self):
        form = _debt_form(balance="1000", minimum_payment="1000.01")

        assert not form.validate()
        assert form.errors == {
            "minimum_payment": ["Minimum payment cannot be greater than the balance."]
        }

    def test_name_length_limit(self):
        form = _debt_form(name="x" * 81)

        assert not form.validate()
        assert "name" in form.errors

    def test_to_model_raises_first_error(self):
        form = _debt_form(due_day="0")

        with pytest.raises(ValidationError) as excinfo:
            form.to_model(user_id=1)

        assert excinfo.value.field == "due_day"

    def test_revalidation_clears_old_errors(self):
        form = _debt_form(balance="")
        assert not form.validate()

        form.balance = "5000"
        assert form.validate()
        assert form.errors == {}


class TestBudgetItemForm:
    def test_valid_expense(self):
        form = BudgetItemForm(
            name="Groceries", amount="8,000", category=" Food ", is_protected=True, is_essential=True
        )

        item = form.to_model(user_id=2)

        assert item.category == "food"
        assert item.amount == Decimal("8000.00")
        assert item.item_type is BudgetItemType.EXPENSE
        assert item.is_protected and item.is_essential and not item.is_fixed

    def test_income_cannot_be_protected(self):
        form = BudgetItemForm(
            name="Salary", amount="50000", category="salary", item_type="income", is_protected=True
        )

        assert not form.validate()
        assert form.errors["is_protected"] == ["Only expenses can be protected."]

    def test_unknown_type_and_missing_category(self):
        form = BudgetItemForm(name="Mystery", amount="10", category="", item_type="gift")

        assert not form.validate()
        assert set(form.errors) == {"category", "item_type"}


class TestPaymentForm:
    def test_valid_payment(self):
        form = PaymentForm(debt_id="4", amount="1,500.50", payment_date="2024-03-01", payment_type="extra")

        payment = form.to_model(user_id=9)

        assert payment.debt_id == 4
        assert payment.user_id == 9
        assert payment.amount == Decimal("1500.50")
        assert payment.payment_date == datetime(2024, 3, 1, tzinfo=timezone.utc)
        assert payment.payment_date.tzinfo is not None
        assert payment.payment_type is PaymentKind.EXTRA

    def test_date_object_becomes_utc_midnight(self):
        payment = PaymentForm(debt_id=1, amount="10", payment_date=date(2024, 5, 2)).to_model(user_id=1)

        assert payment.payment_date == datetime(2024, 5, 2, tzinfo=timezone.utc)

    def test_naive_datetime_is_read_as_utc(self):
        payment = PaymentForm(debt_id=1, amount="10", payment_date=datetime(2024, 5, 2, 9, 30)).to_model(user_id=1)

        assert payment.payment_date == datetime(2024, 5, 2, 9, 30, tzinfo=timezone.utc)

    def test_explicit_offset_is_kept(self):
        payment = PaymentForm(debt_id=1, amount="10", payment_date="2024-05-02T08:00:00+08:00").to_model(user_id=1)

        assert payment.payment_date.utcoffset() == timedelta(hours=8)

    def test_missing_date_defaults_to_now(self):
        before = datetime.now(timezone.utc)
        payment = PaymentForm(debt_id=1, amount="10").to_model(user_id=1)

        assert payment.payment_date >= before

    @pytest.mark.parametrize(
        ("overrides", "field"),
        [
            ({"debt_id": None}, "debt_id"),
            ({"debt_id": "0"}, "debt_id"),
            ({"amount": "0"}, "amount"),
            ({"amount": "12.345"}, "amount"),
            ({"payment_date": "03/01/2024"}, "payment_date"),
            ({"payment_type": "partial"}, "payment_type"),
        ],
    )
    def test_rejects_bad_input(self, overrides, field):
        data = {"debt_id": 1, "amount": "100", "payment_date": "2024-01-01"}
        data.update(overrides)
        form = PaymentForm(**data)

        assert not form.validate()
        assert list(form.errors) == [field]
