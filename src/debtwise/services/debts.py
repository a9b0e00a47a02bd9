"""Debt payoff ranking and projection.

- Avalanche: highest interest rate first (ties: larger balance, then id).
- Snowball: smallest remaining balance first (ties: higher rate, then id).
- ``project_payoff`` simulates month-by-month balance reduction from minimums
  plus a fixed extra pool, without interest.
- ``estimate_interest_savings`` is a rough heuristic comparing minimum-only
  repayment with the chosen strategy. Advisory only.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Iterable, Mapping, Sequence

from ..errors import InvariantViolation
from ..logging_config import get_logger
from .currency import CENTS
from .liabilities import DebtView, require_money

logger = get_logger(__name__)

ZERO = Decimal("0.00")
DEFAULT_HORIZON_MONTHS = 60
DEFAULT_COMPARISON_HORIZON_MONTHS = 360
HIGH_PRIORITY_RATE = Decimal("25")
MEDIUM_PRIORITY_RATE = Decimal("10")


class Strategy(str, Enum):
    AVALANCHE = "avalanche"
    SNOWBALL = "snowball"


class Allocation(str, Enum):
    """How the monthly extra pool is spread across active debts."""

    EVEN = "even"
    TARGETED = "targeted"


class PriorityTier(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True, slots=True)
class ProjectionPoint:
    """Total remaining balance after ``month`` months (0 = starting snapshot)."""

    month: int
    total_remaining: Decimal
    balances: Mapping[int, Decimal]


@dataclass(frozen=True, slots=True)
class InterestSavingsEstimate:
    """Heuristic comparison of a strategy against paying minimums only.

    Interest is simple monthly accrual (rate / 1200) on the running balance;
    fees, compounding rules and rate changes are ignored. ``converged`` is
    False when either run hit the horizon with balance left, in which case the
    figures understate the difference.
    """

    strategy: Strategy
    interest_saved: Decimal
    months_saved: int
    baseline_interest: Decimal
    strategy_interest: Decimal
    baseline_months: int
    strategy_months: int
    converged: bool
    advisory: bool = True


def _debt_key(view: DebtView) -> int:
    if view.debt_id is None:
        raise InvariantViolation(f"debt {view.debt.name!r} has no id")
    return view.debt_id


def rank_avalanche(views: Iterable[DebtView]) -> list[DebtView]:
    """Order debts by descending interest rate."""
    return sorted(
        views, key=lambda v: (-v.interest_rate, -v.remaining_balance, _debt_key(v))
    )


def rank_snowball(views: Iterable[DebtView]) -> list[DebtView]:
    """Order debts by ascending remaining balance."""
    return sorted(
        views, key=lambda v: (v.remaining_balance, -v.interest_rate, _debt_key(v))
    )


def rank_debts(views: Iterable[DebtView], strategy: Strategy | str) -> list[DebtView]:
    """Dispatch to the ranking for ``strategy``."""

    try:
        resolved = Strategy(strategy)
    except ValueError as exc:
        raise ValueError("Invalid debt payoff strategy.") from exc
    if resolved is Strategy.AVALANCHE:
        return rank_avalanche(views)
    return rank_snowball(views)


def extra_payment_pool(available_for_debt: Decimal, monthly_minimums: Decimal) -> Decimal:
    """Money left each month after all minimum payments, never negative."""

    return max(ZERO, available_for_debt - monthly_minimums)


def _active_balances(ordered: Sequence[DebtView]) -> dict[int, Decimal]:
    balances: dict[int, Decimal] = {}
    for view in ordered:
        key = _debt_key(view)
        if key in balances:
            raise InvariantViolation(f"duplicate debt id {key}")
        if view.remaining_balance > 0:
            balances[key] = view.remaining_balance
    return balances


def _snapshot(month: int, balances: Mapping[int, Decimal]) -> ProjectionPoint:
    return ProjectionPoint(
        month=month,
        total_remaining=sum(balances.values(), ZERO),
        balances=dict(balances),
    )


def project_payoff(
    views: Sequence[DebtView],
    *,
    extra_pool: Decimal = ZERO,
    strategy: Strategy | str = Strategy.AVALANCHE,
    allocation: Allocation | str = Allocation.EVEN,
    horizon: int = DEFAULT_HORIZON_MONTHS,
) -> list[ProjectionPoint]:
    """Simulate payoff month by month, ignoring interest.

    Each month every active debt is reduced by its minimum payment (clamped at
    zero), then the extra pool is applied:

    - ``even``: split into equal cent shares (rounded down) across the debts
      that were active at the start of the month;
    - ``targeted``: applied to the debts in strategy order, each taking what
      it still owes until the pool runs out.

    Paid-off debts leave the active set. The result has one point per month
    starting with month 0 and stops once nothing is owed or ``horizon``
    months have been simulated.
    """

    if horizon < 0:
        raise InvariantViolation(f"horizon must not be negative, got {horizon}")
    pool = require_money(extra_pool, field="extra_pool", allow_zero=True)
    mode = Allocation(allocation)
    ordered = rank_debts(views, strategy)
    minimums = {_debt_key(v): require_money(v.minimum_payment, field="minimum_payment") for v in ordered}
    balances = _active_balances(ordered)

    points = [_snapshot(0, balances)]
    month = 0
    while balances and month < horizon:
        month += 1
        active = list(balances)
        for key in active:
            balances[key] = max(ZERO, balances[key] - minimums[key])

        if pool > 0:
            if mode is Allocation.EVEN:
                share = (pool / len(active)).quantize(CENTS, rounding=ROUND_DOWN)
                for key in active:
                    balances[key] = max(ZERO, balances[key] - share)
            else:
                left = pool
                for key in active:
                    if left <= 0:
                        break
                    applied = min(left, balances[key])
                    balances[key] -= applied
                    left -= applied

        balances = {key: balance for key, balance in balances.items() if balance > 0}
        points.append(_snapshot(month, balances))

    logger.debug(
        "Projected payoff",
        extra={
            "strategy": Strategy(strategy).value,
            "allocation": mode.value,
            "months": month,
            "cleared": not balances,
        },
    )
    return points


def payoff_months(points: Sequence[ProjectionPoint]) -> dict[int, int | None]:
    """Month in which each starting debt reaches zero; ``None`` if past the horizon."""

    if not points:
        return {}
    result: dict[int, int | None] = {key: None for key in points[0].balances}
    for point in points[1:]:
        for key, month in result.items():
            if month is None and key not in point.balances:
                result[key] = point.month
    return result


def _simulate_with_interest(
    ordered: Sequence[DebtView],
    *,
    extra_pool: Decimal,
    roll_over_minimums: bool,
    horizon: int,
) -> tuple[int, Decimal, bool]:
    """Return (months, total_interest, cleared) for a simple interest-accruing payoff."""

    balances = _active_balances(ordered)
    rates = {_debt_key(v): v.interest_rate for v in ordered}
    minimums = {_debt_key(v): v.minimum_payment for v in ordered}
    rolled_minimums = ZERO
    total_interest = ZERO
    months = 0

    while balances and months < horizon:
        months += 1
        pool = extra_pool + rolled_minimums
        for key in list(balances):
            balance = balances[key]
            interest = (balance * rates[key] / Decimal(1200)).quantize(
                CENTS, rounding=ROUND_HALF_UP
            )
            total_interest += interest

            # Surplus goes to the first active debt in strategy order
            payment = minimums[key]
            if pool > 0:
                payment += pool
                pool = ZERO
            # Every payment must reduce principal
            payment = max(payment, interest + Decimal("1.00"))

            new_balance = balance + interest - payment
            if new_balance <= 0:
                pool += -new_balance
                del balances[key]
                if roll_over_minimums:
                    rolled_minimums += minimums[key]
            else:
                balances[key] = new_balance

    return months, total_interest, not balances


def estimate_interest_savings(
    views: Sequence[DebtView],
    *,
    extra_pool: Decimal,
    strategy: Strategy | str = Strategy.AVALANCHE,
    horizon: int = DEFAULT_COMPARISON_HORIZON_MONTHS,
) -> InterestSavingsEstimate:
    """Estimate interest and months saved versus paying minimums only.

    This is an advisory figure, not a financial calculation.
    """

    pool = require_money(extra_pool, field="extra_pool", allow_zero=True)
    resolved = Strategy(strategy)
    ordered = rank_debts(views, resolved)

    base_months, base_interest, base_cleared = _simulate_with_interest(
        ordered, extra_pool=ZERO, roll_over_minimums=False, horizon=horizon
    )
    plan_months, plan_interest, plan_cleared = _simulate_with_interest(
        ordered, extra_pool=pool, roll_over_minimums=True, horizon=horizon
    )
    return InterestSavingsEstimate(
        strategy=resolved,
        interest_saved=max(ZERO, base_interest - plan_interest),
        months_saved=max(0, base_months - plan_months),
        baseline_interest=base_interest,
        strategy_interest=plan_interest,
        baseline_months=base_months,
        strategy_months=plan_months,
        converged=base_cleared and plan_cleared,
    )


def priority_tier(interest_rate: Decimal) -> PriorityTier:
    """Classify a debt by rate: high (>=25%), medium (>=10%), low."""

    if interest_rate >= HIGH_PRIORITY_RATE:
        return PriorityTier.HIGH
    if interest_rate >= MEDIUM_PRIORITY_RATE:
        return PriorityTier.MEDIUM
    return PriorityTier.LOW


def focus_debt(views: Iterable[DebtView]) -> DebtView | None:
    """The debt that should receive extra payments first under avalanche."""

    ranked = rank_avalanche(v for v in views if not v.is_paid_off)
    return ranked[0] if ranked else None


__all__ = [
    "Allocation",
    "InterestSavingsEstimate",
    "PriorityTier",
    "ProjectionPoint",
    "Strategy",
    "estimate_interest_savings",
    "extra_payment_pool",
    "focus_debt",
    "payoff_months",
    "priority_tier",
    "project_payoff",
    "rank_avalanche",
    "rank_debts",
    "rank_snowball",
]
