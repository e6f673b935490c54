"""Tests for the annual projection of recurring rules."""

from decimal import Decimal

import pytest

from budgetbuddy.domain.projection import ANNUAL_MULTIPLIERS, annual_multiplier, project


def test_monthly_rent_projects_to_18000(make_rule):
    projection = project([make_rule(amount=Decimal("1500"), category="Expenses")])

    assert projection.annual_expenses == Decimal("18000")
    assert projection.monthly_expenses == Decimal("1500")
    assert projection.annual_income == 0
    assert projection.net_annual == Decimal("-18000")


@pytest.mark.parametrize("frequency,multiplier", [(f.value, m) for f, m in ANNUAL_MULTIPLIERS.items()])
def test_multiplier_per_frequency(make_rule, frequency, multiplier):
    projection = project(
        [make_rule(frequency=frequency, amount=Decimal("10"), category="Income")]
    )
    assert projection.annual_income == Decimal("10") * multiplier


def test_income_and_outflows_are_separated(make_rule):
    rules = [
        make_rule(id=1, category="Income", amount=Decimal("2000"), frequency="biweekly"),
        make_rule(id=2, category="Expenses", amount=Decimal("100"), frequency="weekly"),
        make_rule(id=3, category="Savings", amount=Decimal("500"), frequency="monthly"),
        make_rule(id=4, category="Goal: Car", amount=Decimal("1200"), frequency="yearly"),
    ]

    projection = project(rules)

    assert projection.annual_income == Decimal("52000")
    assert projection.annual_expenses == Decimal("5200") + Decimal("6000") + Decimal("1200")
    assert projection.net_annual == projection.annual_income - projection.annual_expenses


def test_inactive_rules_contribute_nothing(make_rule):
    projection = project([make_rule(is_active=False)])
    assert projection.annual_expenses == 0
    assert projection.monthly_expenses == 0


def test_negative_amounts_use_magnitude(make_rule):
    projection = project([make_rule(amount=Decimal("-1500"))])
    assert projection.annual_expenses == Decimal("18000")


def test_unknown_frequency_counts_as_monthly(make_rule):
    assert annual_multiplier("fortnightly") == 12
    assert annual_multiplier("") == 12
    projection = project([make_rule(frequency="fortnightly", amount=Decimal("100"))])
    assert projection.annual_expenses == Decimal("1200")


def test_project_is_repeatable(make_rule):
    rules = [make_rule(id=1), make_rule(id=2, category="Income", amount=Decimal("4000"))]
    assert project(rules) == project(rules)


def test_empty_rules():
    projection = project([])
    assert projection.annual_income == 0
    assert projection.net_annual == 0
