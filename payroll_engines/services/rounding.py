"""Decimal conversion and rounding shared by the calculators."""

from decimal import ROUND_HALF_UP, Decimal

from payroll_engines.exceptions import ValidationError

WON = Decimal("1")
HOURS = Decimal("0.01")
PERCENT = Decimal("0.01")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    # str() first so floats like 0.1 keep their printed value
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_won(amount: Decimal) -> Decimal:
    return amount.quantize(WON, rounding=ROUND_HALF_UP)


def round_hours(hours: Decimal) -> Decimal:
    return hours.quantize(HOURS, rounding=ROUND_HALF_UP)


def require_non_negative(value: Decimal | int | float | str, field: str) -> Decimal:
    """Convert to Decimal, raising ValidationError for negative amounts."""
    amount = to_decimal(value)
    if amount < 0:
        raise ValidationError(f"{field} must not be negative, got {amount}", field=field)
    return amount
