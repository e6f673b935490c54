"""Tests for the monthly wealth projection."""

import pytest

from budgetbuddy.domain.wealth import project_wealth


def test_without_returns_balance_equals_contributions():
    result = project_wealth(1000, 5000, savings_rate_percent=20, annual_return_percent=0, years=1)

    assert result.monthly_savings == pytest.approx(1000)
    assert len(result.points) == 13
    assert result.points[0].balance == 1000
    assert result.final_balance == pytest.approx(13000)
    assert result.total_contributions == pytest.approx(13000)
    assert result.total_returns == pytest.approx(0)


def test_monthly_compounding():
    result = project_wealth(1000, 5000, savings_rate_percent=20, annual_return_percent=12, years=1)

    assert result.points[1].balance == pytest.approx(1000 * 1.01 + 1000)
    assert result.total_returns > 0


def test_point_years():
    result = project_wealth(0, 1000, years=2)
    assert result.points[-1].year == 2.0
    assert result.points[6].year == 0.5


def test_zero_years_keeps_starting_point():
    result = project_wealth(500, 1000, years=0)
    assert len(result.points) == 1
    assert result.final_balance == 500


def test_negative_income_saves_nothing():
    result = project_wealth(0, -100, annual_return_percent=0, years=1)
    assert result.monthly_savings == 0
    assert result.final_balance == 0
