"""End-to-end tests of the command line interface."""

import json

import pytest
from click.testing import CliRunner

from debtwise.cli import cli

AUTH = ["--user", "maria", "--password", "longenough"]


@pytest.fixture
def invoke(app_context):
    runner = CliRunner()

    def _invoke(*args):
        return runner.invoke(cli, list(args), obj=app_context)

    return _invoke


@pytest.fixture
def registered(invoke):
    result = invoke("register", "--username", "maria", "--full-name", "Maria Santos", "--password", "longenough")
    assert result.exit_code == 0, result.output
    return result


def test_init_db(invoke):
    result = invoke("init-db")

    assert result.exit_code == 0
    assert "sqlite://" in result.output


def test_register(registered):
    assert "Registered maria (id 1)" in registered.output


def test_register_duplicate_fails(invoke, registered):
    result = invoke("register", "--username", "maria", "--password", "longenough")

    assert result.exit_code == 1
    assert "Username already exists." in result.output


def test_full_workflow(invoke, registered, tmp_path):
    added = invoke(
        "add-debt", *AUTH, "--name", "Card", "--balance", "10,000", "--rate", "24",
        "--minimum", "500", "--due-day", "15",
    )
    assert added.exit_code == 0, added.output
    assert "Added debt 1: Card (₱10,000.00)" in added.output

    paid = invoke("add-payment", *AUTH, "--debt-id", "1", "--amount", "1000", "--date", "2024-01-15")
    assert "Recorded payment 1: ₱1,000.00" in paid.output

    invoke("add-budget-item", *AUTH, "--name", "Salary", "--amount", "20000", "--category", "salary", "--type", "income")
    rent = invoke("add-budget-item", *AUTH, "--name", "Rent", "--amount", "8000", "--category", "Housing", "--protected")
    assert "Added expense 2: Rent (₱8,000.00)" in rent.output

    summary = json.loads(invoke("summary", *AUTH).stdout)
    assert summary["total_debt"] == "9000.00"
    assert summary["monthly_payments"] == "500.00"
    assert summary["available_for_debt"] == "12000.00"
    assert summary["protected_amount"] == "8000.00"
    assert summary["budget_health"] == 60
    assert summary["categories"] == [
        {"category": "housing", "amount": "8000.00", "protected": True, "percentage_of_income": "40.00"}
    ]

    chart_path = tmp_path / "payoff.png"
    projection = invoke("project", *AUTH, "--horizon", "12", "--chart", str(chart_path))
    assert projection.exit_code == 0, projection.output
    payload = json.loads(projection.stdout)
    assert payload["extra_pool"] == "11500.00"
    assert payload["points"] == [
        {"month": 0, "total_remaining": "9000.00"},
        {"month": 1, "total_remaining": "0.00"},
    ]
    assert payload["payoff_months"] == {"1": 1}
    assert chart_path.exists()

    listing = invoke("debts", *AUTH)
    assert "[1] Card: ₱9,000.00 left of ₱10,000.00 (10% paid, 24.00% APR, medium priority)" in listing.output
    assert "Focus extra payments on Card" in listing.output

    savings = invoke("savings", *AUTH, "--strategy", "snowball")
    assert savings.exit_code == 0, savings.output
    assert "Estimated interest saved" in savings.output

    donut = invoke("chart", *AUTH, "--output", str(tmp_path / "types.png"))
    assert donut.exit_code == 0
    assert (tmp_path / "types.png").exists()


def test_wrong_password_rejected(invoke, registered):
    result = invoke("summary", "--user", "maria", "--password", "not-my-password")

    assert result.exit_code == 1
    assert "Invalid credentials" in result.output


def test_invalid_debt_input_reported(invoke, registered):
    result = invoke(
        "add-debt", *AUTH, "--name", "Card", "--balance", "lots", "--rate", "24",
        "--minimum", "500", "--due-day", "15",
    )

    assert result.exit_code == 1
    assert "balance: Enter a valid number." in result.output


def test_payment_for_unknown_debt(invoke, registered):
    result = invoke("add-payment", *AUTH, "--debt-id", "99", "--amount", "10")

    assert result.exit_code == 1
    assert "Debt 99 not found" in result.output


def test_debts_empty(invoke, registered):
    result = invoke("debts", *AUTH)

    assert "No debts recorded." in result.output


def test_seed_demo_is_repeatable(invoke):
    first = invoke("seed-demo")
    second = invoke("seed-demo")

    assert first.exit_code == 0, first.output
    assert second.exit_code == 0
    assert "Demo data ready for juan" in second.output

    summary = json.loads(invoke("summary", "--user", "juan", "--password", "password123").stdout)
    assert summary["debt_count"] == 3
    assert summary["total_income"] == "73000.00"
    assert summary["total_expenses"] == "33200.00"
    assert summary["protected_amount"] == "9000.00"
