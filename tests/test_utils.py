"""Tests for date, money and parsing helpers."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from budgetbuddy.utils.amount_parser import parse_amount
from budgetbuddy.utils.date_parser import parse_date
from budgetbuddy.utils.dates import add_months, as_date, clamp_day, last_day_of_month
from budgetbuddy.utils.money import format_currency, round_money, signed_amount, to_decimal

TODAY = date(2026, 3, 31)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("today", TODAY),
        ("yesterday", date(2026, 3, 30)),
        ("tomorrow", date(2026, 4, 1)),
        ("this month", date(2026, 3, 1)),
        ("last month", date(2026, 2, 1)),
        ("next month", date(2026, 4, 1)),
        ("2026-01-15", date(2026, 1, 15)),
        ("January 15, 2026", date(2026, 1, 15)),
    ],
)
def test_parse_date(text, expected):
    assert parse_date(text, today=TODAY) == expected


def test_parse_date_invalid():
    with pytest.raises(ValueError):
        parse_date("not a date")


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("$1,234.56", Decimal("1234.56")),
        ("-$12", Decimal("-12")),
        ("(50.00)", Decimal("-50.00")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "NaN"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_last_day_of_month():
    assert last_day_of_month(2026, 2) == 28
    assert last_day_of_month(2028, 2) == 29
    assert last_day_of_month(2026, 4) == 30


def test_clamp_day():
    assert clamp_day(2026, 2, 31) == date(2026, 2, 28)
    assert clamp_day(2026, 1, 0) == date(2026, 1, 1)


def test_add_months():
    assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
    assert add_months(date(2026, 2, 28), 1, day=31) == date(2026, 3, 31)
    assert add_months(date(2026, 11, 15), 3) == date(2027, 2, 15)
    assert add_months(date(2026, 3, 31), -1) == date(2026, 2, 28)


def test_as_date():
    assert as_date(datetime(2026, 1, 1, 12, 30)) == date(2026, 1, 1)
    assert as_date(date(2026, 1, 1)) == date(2026, 1, 1)


def test_money_helpers():
    assert to_decimal(0.1) == Decimal("0.1")
    assert round_money("2.345") == Decimal("2.35")
    assert round_money("-2.345") == Decimal("-2.35")
    assert signed_amount(Decimal("10"), outflow=True) == Decimal("-10")
    assert signed_amount(Decimal("-10"), outflow=False) == Decimal("10")
    with pytest.raises(ValueError):
        to_decimal("inf")


@pytest.mark.parametrize(
    "amount,text",
    [(1234.5, "$1,234.50"), (Decimal("-12"), "-$12.00"), (0, "$0.00")],
)
def test_format_currency(amount, text):
    assert format_currency(amount) == text
