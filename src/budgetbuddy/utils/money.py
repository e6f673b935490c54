"""Currency helpers. A single implied currency unit, no conversion."""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without binary float artefacts.

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except InvalidOperation as e:
            raise ValueError(f"Not a number: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def round_money(value: Number) -> Decimal:
    """Round to cents, half away from zero."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def signed_amount(amount: Number, outflow: bool) -> Decimal:
    """Apply the ledger sign convention.

    Outflows (expenses) are stored non-positive; income, savings and goal
    contributions are stored non-negative.
    """
    magnitude = abs(to_decimal(amount))
    return -magnitude if outflow else magnitude


def format_currency(amount: Number) -> str:
    """Format an amount for messages, e.g. ``$1,234.50`` or ``-$12.00``."""
    value = round_money(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"
