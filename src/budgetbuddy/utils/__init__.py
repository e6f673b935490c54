"""Utility functions for budgetbuddy."""

from budgetbuddy.utils.date_parser import parse_date
from budgetbuddy.utils.amount_parser import parse_amount
from budgetbuddy.utils.dates import add_months, clamp_day, last_day_of_month
from budgetbuddy.utils.money import format_currency, round_money, signed_amount, to_decimal

__all__ = [
    "parse_date",
    "parse_amount",
    "add_months",
    "clamp_day",
    "last_day_of_month",
    "format_currency",
    "round_money",
    "signed_amount",
    "to_decimal",
]
