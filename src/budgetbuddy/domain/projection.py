"""Annual projection of recurring rules."""

from decimal import Decimal
from typing import Iterable

from budgetbuddy.domain.entities import (
    INCOME_CATEGORY,
    Frequency,
    Projection,
    RecurringRule,
)
from budgetbuddy.utils.money import to_decimal

ANNUAL_MULTIPLIERS = {
    Frequency.DAILY: 365,
    Frequency.WEEKLY: 52,
    Frequency.BIWEEKLY: 26,
    Frequency.MONTHLY: 12,
    Frequency.QUARTERLY: 4,
    Frequency.YEARLY: 1,
}

MONTHS_PER_YEAR = Decimal(12)


def annual_multiplier(frequency: str) -> int:
    """Occurrences per year; unknown frequencies count as monthly."""
    parsed = Frequency.parse(frequency) if frequency else None
    return ANNUAL_MULTIPLIERS[parsed or Frequency.MONTHLY]


def annual_amount(rule: RecurringRule) -> Decimal:
    """Yearly total of a single rule, ignoring its active flag."""
    return abs(to_decimal(rule.amount)) * annual_multiplier(rule.frequency)


def project(rules: Iterable[RecurringRule]) -> Projection:
    """Annualize active rules into income and expense totals.

    Rules in the Income category count as income; every other category
    (expenses, savings, goal contributions) counts as outflow.
    """
    annual_income = Decimal("0")
    annual_expenses = Decimal("0")

    for rule in rules or ():
        if not rule.is_active:
            continue
        if rule.category == INCOME_CATEGORY:
            annual_income += annual_amount(rule)
        else:
            annual_expenses += annual_amount(rule)

    return Projection(
        annual_income=annual_income,
        annual_expenses=annual_expenses,
        net_annual=annual_income - annual_expenses,
        monthly_income=annual_income / MONTHS_PER_YEAR,
        monthly_expenses=annual_expenses / MONTHS_PER_YEAR,
    )
