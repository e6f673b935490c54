"""Field validation for data entering the ledger.

Each validator collects every problem into a field -> message mapping and
raises a single ValidationError, so nothing is written on bad input.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta

from budgetbuddy.domain.entities import GOAL_CATEGORY_PREFIX, Frequency
from budgetbuddy.domain.errors import ValidationError
from budgetbuddy.utils.money import to_decimal

MAX_DESCRIPTION_LENGTH = 200
MAX_CATEGORY_LENGTH = 50
# Goal names must fit the "Goal: {name}" contribution category
MAX_GOAL_NAME_LENGTH = MAX_CATEGORY_LENGTH - len(GOAL_CATEGORY_PREFIX)
MAX_TRANSACTION_AMOUNT = Decimal("10000000")
MAX_RULE_AMOUNT = Decimal("1000000")
MAX_GOAL_TARGET = Decimal("100000000")
MIN_TRANSACTION_DATE = date(1900, 1, 1)

CALENDAR_FREQUENCIES = (Frequency.MONTHLY, Frequency.QUARTERLY, Frequency.YEARLY)


def _check_text(
    errors: dict[str, str], field: str, value: Optional[str], label: str, max_length: int
) -> None:
    if not value or not value.strip():
        errors[field] = f"{label} is required"
    elif len(value) > max_length:
        errors[field] = f"{label} must be at most {max_length} characters"


def _check_amount(
    errors: dict[str, str], field: str, value, maximum: Decimal
) -> Optional[Decimal]:
    if value is None:
        errors[field] = "Amount is required"
        return None
    try:
        amount = to_decimal(value)
    except ValueError:
        errors[field] = "Amount must be a valid number"
        return None
    if amount == 0:
        errors[field] = "Amount cannot be zero"
    elif abs(amount) > maximum:
        errors[field] = f"Amount exceeds maximum ({maximum:,})"
    return amount


def validate_transaction(
    description: Optional[str],
    amount,
    txn_date: Optional[date],
    category: Optional[str],
    today: Optional[date] = None,
) -> None:
    """Validate manual transaction fields.

    Raises:
        ValidationError: If any field is invalid
    """
    errors: dict[str, str] = {}
    today = today or date.today()

    _check_text(errors, "description", description, "Description", MAX_DESCRIPTION_LENGTH)
    _check_amount(errors, "amount", amount, MAX_TRANSACTION_AMOUNT)

    if txn_date is None:
        errors["date"] = "Date is required"
    elif txn_date < MIN_TRANSACTION_DATE:
        errors["date"] = "Date is too far in the past"
    elif txn_date > today + relativedelta(years=1):
        errors["date"] = "Date cannot be more than 1 year in the future"

    _check_text(errors, "category", category, "Category", MAX_CATEGORY_LENGTH)

    if errors:
        raise ValidationError(errors)


def validate_goal(
    name: Optional[str],
    target_amount,
    current_amount=None,
    deadline: Optional[date] = None,
    today: Optional[date] = None,
) -> None:
    """Validate goal fields.

    Raises:
        ValidationError: If any field is invalid
    """
    errors: dict[str, str] = {}
    today = today or date.today()

    _check_text(errors, "name", name, "Goal name", MAX_GOAL_NAME_LENGTH)

    try:
        target = to_decimal(target_amount) if target_amount is not None else None
    except ValueError:
        target = None
    if target is None or target <= 0:
        errors["target_amount"] = "Target amount must be positive"
    elif target > MAX_GOAL_TARGET:
        errors["target_amount"] = "Target amount too large"

    if current_amount is not None:
        try:
            current = to_decimal(current_amount)
        except ValueError:
            current = None
        if current is None or current < 0:
            errors["current_amount"] = "Current amount must be non-negative"
        elif current > MAX_TRANSACTION_AMOUNT:
            errors["current_amount"] = f"Amount exceeds maximum ({MAX_TRANSACTION_AMOUNT:,})"

    if deadline is not None and deadline < today:
        errors["deadline"] = "Deadline cannot be in the past"

    if errors:
        raise ValidationError(errors)


def validate_recurring_rule(
    description: Optional[str],
    amount,
    category: Optional[str],
    frequency: Optional[str],
    recur_day: Optional[int],
    start_date: Optional[date],
) -> None:
    """Validate recurring rule fields.

    Calendar frequencies (monthly, quarterly, yearly) need a day of month;
    fixed-interval frequencies take their weekday from ``start_date``.

    Raises:
        ValidationError: If any field is invalid
    """
    errors: dict[str, str] = {}

    _check_text(errors, "description", description, "Description", MAX_DESCRIPTION_LENGTH)
    _check_amount(errors, "amount", amount, MAX_RULE_AMOUNT)
    _check_text(errors, "category", category, "Category", MAX_CATEGORY_LENGTH)

    parsed = Frequency.parse(frequency) if frequency else None
    if parsed is None:
        errors["frequency"] = "Invalid frequency"
    elif parsed in CALENDAR_FREQUENCIES:
        if recur_day is None:
            errors["recur_day"] = f"Day of month is required for {parsed.value} frequency"
        elif not 1 <= recur_day <= 31:
            errors["recur_day"] = "Day must be between 1-31"

    if start_date is None:
        errors["start_date"] = "Start date is required"

    if errors:
        raise ValidationError(errors)
