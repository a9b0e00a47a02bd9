"""Peso amount parsing, validation and formatting.

Everything that turns user input into money goes through here, so the
aggregation services only ever see two-digit ``Decimal`` values.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ..errors import ValidationError

CENTS = Decimal("0.01")
MIN_AMOUNT = Decimal("0.01")
MAX_AMOUNT = Decimal("999999999.99")
MAX_RATE = Decimal("100")
CURRENCY_SYMBOL = "₱"

_STRIP_PATTERN = re.compile(r"[₱,\s]")


def _to_decimal(value: object, *, field: str) -> Decimal:
    """Coerce raw input into a finite ``Decimal`` or raise ``ValidationError``."""

    if value is None or isinstance(value, bool):
        raise ValidationError(field, "This field is required.")
    if isinstance(value, Decimal):
        number = value
    else:
        text = _STRIP_PATTERN.sub("", str(value))
        if not text:
            raise ValidationError(field, "This field is required.")
        try:
            number = Decimal(text)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(field, "Enter a valid number.") from exc
    if not number.is_finite():
        raise ValidationError(field, "Enter a valid number.")
    return number


def _check_precision(number: Decimal, *, field: str) -> None:
    exponent = number.normalize().as_tuple().exponent
    if isinstance(exponent, int) and exponent < -2:
        raise ValidationError(field, "Use at most two decimal places.")


def to_money(value: Decimal) -> Decimal:
    """Quantize an already-valid amount to cents."""

    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_amount(
    value: object,
    *,
    field: str = "amount",
    minimum: Decimal = MIN_AMOUNT,
    maximum: Decimal = MAX_AMOUNT,
) -> Decimal:
    """Parse a monetary input such as ``"₱12,500.50"`` into ``Decimal("12500.50")``."""

    number = _to_decimal(value, field=field)
    _check_precision(number, field=field)
    if number < minimum:
        if minimum > 0:
            raise ValidationError(field, "Amount must be greater than zero.")
        raise ValidationError(field, "Amount must be at least zero.")
    if number > maximum:
        raise ValidationError(field, f"Amount must not exceed {format_php(maximum)}.")
    return to_money(number)


def parse_interest_rate(value: object, *, field: str = "interest_rate") -> Decimal:
    """Parse an annual percentage rate between 0 and 100."""

    number = _to_decimal(value, field=field)
    _check_precision(number, field=field)
    if number < 0 or number > MAX_RATE:
        raise ValidationError(field, "Interest rate must be between 0 and 100 percent.")
    return to_money(number)


def parse_due_day(value: object, *, field: str = "due_day") -> int:
    """Parse a day of month between 1 and 31."""

    number = _to_decimal(value, field=field)
    if number != number.to_integral_value():
        raise ValidationError(field, "Due day must be a whole number.")
    day = int(number)
    if day < 1 or day > 31:
        raise ValidationError(field, "Due day must be between 1 and 31.")
    return day


def format_php(amount: Decimal | int | str) -> str:
    """Format as Philippine pesos, e.g. ``₱1,234.56``."""

    try:
        number = to_money(Decimal(str(amount)))
    except (InvalidOperation, ValueError):
        number = Decimal("0.00")
    sign = "-" if number < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(number):,.2f}"


def format_php_compact(amount: Decimal | int | str) -> str:
    """Short form for dashboard tiles: ``₱1.2M``, ``₱12.5K``."""

    try:
        number = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        return f"{CURRENCY_SYMBOL}0"
    if number >= 1_000_000:
        return f"{CURRENCY_SYMBOL}{number / 1_000_000:.1f}M"
    if number >= 1_000:
        return f"{CURRENCY_SYMBOL}{number / 1_000:.1f}K"
    return format_php(number)


__all__ = [
    "CENTS",
    "format_php",
    "format_php_compact",
    "parse_amount",
    "parse_due_day",
    "parse_interest_rate",
    "to_money",
]
