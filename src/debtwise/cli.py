"""Command line interface for DebtWise."""

from __future__ import annotations

import functools
import json
from pathlib import Path
from typing import Any, Callable

import click

from .config import BaseConfig
from .context import AppContext, create_app_context
from .errors import DebtWiseError
from .forms import BudgetItemForm, DebtForm, PaymentForm
from .logging_config import setup_logging
from .models.budget import BudgetItemType
from .models.debt import DebtType, PaymentFrequency
from .models.payment import PaymentKind
from .services import reports
from .services.auth import authenticate, register_user
from .services.budgeting import category_breakdown
from .services.currency import format_php
from .services.debts import (
    Allocation,
    Strategy,
    estimate_interest_savings,
    extra_payment_pool,
    focus_debt,
    payoff_months,
    priority_tier,
    project_payoff,
)
from .services.liabilities import remaining_by_type, upcoming_payments
from .services.summary import compose_summary, load_snapshot


def _echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, default=str))


def _handle_errors(func: Callable) -> Callable:
    """Turn domain errors into clean CLI failures."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DebtWiseError as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper


def _user_options(func: Callable) -> Callable:
    func = click.option(
        "--password",
        envvar="DEBTWISE_PASSWORD",
        prompt=True,
        hide_input=True,
        help="Password (or DEBTWISE_PASSWORD).",
    )(func)
    func = click.option(
        "--user", "username", envvar="DEBTWISE_USER", required=True, help="Username (or DEBTWISE_USER)."
    )(func)
    return func


def _sign_in(app: AppContext, username: str, password: str) -> int:
    app.current_user = authenticate(username=username, password=password, users=app.user_repo)
    return app.require_user_id()


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Track debts and budgets, and project payoff."""

    if ctx.obj is None:
        config = BaseConfig()
        setup_logging(config)
        ctx.obj = create_app_context(config)


@cli.command("init-db")
@click.pass_obj
def init_db(app: AppContext) -> None:
    """Create the database schema."""
    click.echo(f"Database ready: {app.config.DATABASE_URL}")


@cli.command("register")
@click.option("--username", required=True)
@click.option("--full-name", default="")
@click.password_option()
@click.pass_obj
@_handle_errors
def register(app: AppContext, username: str, full_name: str, password: str) -> None:
    """Create a user account."""
    user = register_user(
        username=username, password=password, full_name=full_name, users=app.user_repo
    )
    click.echo(f"Registered {user.username} (id {user.id})")


@cli.command("add-debt")
@_user_options
@click.option("--name", required=True)
@click.option("--balance", required=True)
@click.option("--rate", "interest_rate", required=True, help="Annual interest rate in percent.")
@click.option("--minimum", "minimum_payment", required=True)
@click.option("--due-day", required=True)
@click.option(
    "--type", "debt_type", type=click.Choice([t.value for t in DebtType]), default=DebtType.CREDIT_CARD.value
)
@click.option(
    "--frequency",
    type=click.Choice([f.value for f in PaymentFrequency]),
    default=PaymentFrequency.MONTHLY.value,
)
@click.pass_obj
@_handle_errors
def add_debt(app: AppContext, username: str, password: str, frequency: str, **fields: Any) -> None:
    """Record a debt."""
    user_id = _sign_in(app, username, password)
    form = DebtForm(payment_frequency=frequency, **fields)
    debt = app.debt_repo.create(form.to_model(user_id=user_id), user_id=user_id)
    click.echo(f"Added debt {debt.id}: {debt.name} ({format_php(debt.balance)})")


@cli.command("add-payment")
@_user_options
@click.option("--debt-id", required=True, type=int)
@click.option("--amount", required=True)
@click.option("--date", "payment_date", default=None, help="YYYY-MM-DD, defaults to now.")
@click.option("--kind", "payment_type", type=click.Choice([k.value for k in PaymentKind]), default="minimum")
@click.pass_obj
@_handle_errors
def add_payment(app: AppContext, username: str, password: str, **fields: Any) -> None:
    """Record a payment toward a debt."""
    user_id = _sign_in(app, username, password)
    form = PaymentForm(**fields)
    payment = app.payment_repo.create(form.to_model(user_id=user_id), user_id=user_id)
    click.echo(f"Recorded payment {payment.id}: {format_php(payment.amount)}")


@cli.command("add-budget-item")
@_user_options
@click.option("--name", required=True)
@click.option("--amount", required=True)
@click.option("--category", required=True)
@click.option("--type", "item_type", type=click.Choice([t.value for t in BudgetItemType]), default="expense")
@click.option("--essential", "is_essential", is_flag=True)
@click.option("--fixed", "is_fixed", is_flag=True)
@click.option("--protected", "is_protected", is_flag=True)
@click.pass_obj
@_handle_errors
def add_budget_item(app: AppContext, username: str, password: str, **fields: Any) -> None:
    """Record a monthly income or expense."""
    user_id = _sign_in(app, username, password)
    form = BudgetItemForm(**fields)
    item = app.budget_repo.create(form.to_model(user_id=user_id), user_id=user_id)
    click.echo(f"Added {BudgetItemType(item.item_type).value} {item.id}: {item.name} ({format_php(item.amount)})")


@cli.command("summary")
@_user_options
@click.pass_obj
@_handle_errors
def summary(app: AppContext, username: str, password: str) -> None:
    """Print the dashboard summary as JSON."""
    user_id = _sign_in(app, username, password)
    snapshot = load_snapshot(debts=app.debt_repo, budget_items=app.budget_repo, user_id=user_id)
    payload = compose_summary(snapshot.views, snapshot.budget).to_dict()
    payload["categories"] = [
        {
            "category": row.category,
            "amount": f"{row.amount:.2f}",
            "protected": row.is_protected,
            "percentage_of_income": f"{row.percentage_of_income:.2f}",
        }
        for row in category_breakdown(snapshot.budget_items, total_income=snapshot.budget.total_income)
    ]
    _echo_json(payload)


@cli.command("debts")
@_user_options
@click.pass_obj
@_handle_errors
def list_debts(app: AppContext, username: str, password: str) -> None:
    """List debts with remaining balances, priority and due dates."""
    user_id = _sign_in(app, username, password)
    snapshot = load_snapshot(debts=app.debt_repo, budget_items=app.budget_repo, user_id=user_id)
    if not snapshot.views:
        click.echo("No debts recorded.")
        return
    for view in snapshot.views:
        click.echo(
            f"[{view.debt_id}] {view.debt.name}: {format_php(view.remaining_balance)} left "
            f"of {format_php(view.debt.balance)} ({view.percent_paid}% paid, "
            f"{view.interest_rate}% APR, {priority_tier(view.interest_rate).value} priority)"
        )
    for reminder in upcoming_payments(snapshot.views):
        status = "OVERDUE" if reminder.is_overdue else f"in {reminder.days_until_due} days"
        click.echo(f"  due {reminder.due_date.isoformat()} {reminder.name}: {status}")
    target = focus_debt(snapshot.views)
    if target is not None:
        click.echo(f"Focus extra payments on {target.debt.name} ({target.interest_rate}% APR).")


@cli.command("project")
@_user_options
@click.option("--strategy", type=click.Choice([s.value for s in Strategy]), default="avalanche")
@click.option("--allocation", type=click.Choice([a.value for a in Allocation]), default="even")
@click.option("--horizon", type=click.IntRange(min=0), default=None, help="Months to simulate.")
@click.option("--chart", "chart_path", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.pass_obj
@_handle_errors
def project(
    app: AppContext,
    username: str,
    password: str,
    strategy: str,
    allocation: str,
    horizon: int | None,
    chart_path: Path | None,
) -> None:
    """Simulate month-by-month payoff and print the trajectory as JSON."""
    user_id = _sign_in(app, username, password)
    snapshot = load_snapshot(debts=app.debt_repo, budget_items=app.budget_repo, user_id=user_id)
    dashboard = compose_summary(snapshot.views, snapshot.budget)
    pool = extra_payment_pool(dashboard.available_for_debt, dashboard.monthly_payments)
    points = project_payoff(
        snapshot.views,
        extra_pool=pool,
        strategy=strategy,
        allocation=allocation,
        horizon=app.config.PROJECTION_HORIZON if horizon is None else horizon,
    )
    _echo_json(
        {
            "strategy": strategy,
            "allocation": allocation,
            "extra_pool": f"{pool:.2f}",
            "points": [{"month": p.month, "total_remaining": f"{p.total_remaining:.2f}"} for p in points],
            "payoff_months": {str(k): v for k, v in payoff_months(points).items()},
        }
    )
    if chart_path is not None:
        reports.export_png(reports.build_payoff_chart(points), chart_path)
        click.echo(f"Chart written: {chart_path}", err=True)


@cli.command("savings")
@_user_options
@click.option("--strategy", type=click.Choice([s.value for s in Strategy]), default="avalanche")
@click.pass_obj
@_handle_errors
def savings(app: AppContext, username: str, password: str, strategy: str) -> None:
    """Rough estimate of interest and time saved versus minimum payments."""
    user_id = _sign_in(app, username, password)
    snapshot = load_snapshot(debts=app.debt_repo, budget_items=app.budget_repo, user_id=user_id)
    dashboard = compose_summary(snapshot.views, snapshot.budget)
    estimate = estimate_interest_savings(
        snapshot.views,
        extra_pool=extra_payment_pool(dashboard.available_for_debt, dashboard.monthly_payments),
        strategy=strategy,
    )
    click.echo(f"Estimated interest saved: {format_php(estimate.interest_saved)} (approximate)")
    click.echo(f"Estimated months saved: {estimate.months_saved}")
    if not estimate.converged:
        click.echo("Balances remain after the comparison horizon; figures understate the gap.")


@cli.command("chart")
@_user_options
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), required=True)
@click.pass_obj
@_handle_errors
def chart(app: AppContext, username: str, password: str, output: Path) -> None:
    """Export a donut chart of remaining debt by type."""
    user_id = _sign_in(app, username, password)
    snapshot = load_snapshot(debts=app.debt_repo, budget_items=app.budget_repo, user_id=user_id)
    path = reports.export_png(reports.build_debt_type_chart(remaining_by_type(snapshot.views)), output)
    click.echo(f"Chart written: {path}")


@cli.command("seed-demo")
@click.pass_obj
@_handle_errors
def seed_demo(app: AppContext) -> None:
    """Create the demo user with sample debts, payments and budget."""
    from .seed import seed_demo_data

    user = seed_demo_data(app)
    click.echo(f"Demo data ready for {user.username}")


def main() -> None:  # pragma: no cover - console script entry
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
