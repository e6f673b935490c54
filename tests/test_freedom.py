"""Tests for the freedom simulation engine."""

import pytest

from budgetbuddy.domain.entities import ExpenseBreakdown, FreedomInputs
from budgetbuddy.domain.freedom import (
    NEVER,
    annuity_future_value,
    benchmark_bucket,
    freedom_score,
    freedom_status,
    ideal_balance,
    net_worth_percentile,
    opportunity_cost,
    simulate,
    years_until_free,
)


def _inputs(age=28, savings=15000.0, income=5000.0, housing=1500.0, lifestyle=900.0, transport=450.0):
    return FreedomInputs(
        age=age,
        current_savings=savings,
        monthly_income=income,
        expenses=ExpenseBreakdown(housing=housing, lifestyle=lifestyle, transport=transport),
    )


def test_typical_saver_reaches_freedom():
    result = simulate(_inputs())

    assert result.monthly_savings == pytest.approx(2150)
    assert result.total_expenses == pytest.approx(2850)
    assert result.freedom_number == 2850 * 12 * 25
    assert result.freedom_age < NEVER
    assert result.freedom_age == 28 + result.years_to_freedom
    assert 0 <= result.freedom_score <= 100
    assert result.final_freedom_number >= result.freedom_number


def test_negative_savings_never_reaches_freedom():
    result = simulate(_inputs(income=2000, housing=1500, lifestyle=700, transport=300))

    assert result.years_to_freedom == NEVER
    assert result.freedom_age == NEVER
    assert result.years_behind == NEVER
    assert 0 <= result.freedom_score <= 100


def test_zero_income_resolves_to_sentinels():
    result = simulate(_inputs(income=0, savings=0, housing=0, lifestyle=0, transport=0))

    assert result.freedom_age == NEVER
    assert result.actual_progress == 100.0
    assert result.risk_indicators.expense_ratio_percent == 100


def test_negative_savings_balance_does_not_raise():
    result = simulate(_inputs(savings=-5000))
    assert 0 <= result.freedom_score <= 100
    assert result.percentile >= 1


def test_already_free():
    result = simulate(_inputs(age=40, savings=1_000_000, income=5000, housing=1000, lifestyle=0, transport=0))

    assert result.years_to_freedom == 0
    assert result.freedom_age == 40
    assert result.actual_progress == pytest.approx(333.3)
    assert result.years_behind == 0


def test_years_until_free_caps_at_fifty():
    years, _ = years_until_free(0, 1, 1_000_000)
    assert years == 50


def test_annuity_future_value():
    assert annuity_future_value(1000, 1) == pytest.approx(1000)
    assert annuity_future_value(1000, 2) == pytest.approx(2070)
    assert annuity_future_value(1000, 0) == 0
    assert annuity_future_value(0, 10) == 0


def test_ideal_balance_and_opportunity_cost_start_at_22():
    assert ideal_balance(22, 5000) == 0
    assert opportunity_cost(20, 5000) == 0
    annual = 5000 * 12 * 0.2
    assert ideal_balance(23, 5000) == pytest.approx(annual)
    assert opportunity_cost(23, 5000) == pytest.approx(annual * 1.07)


def test_years_behind_against_ideal_saver():
    result = simulate(_inputs(age=32, savings=0))
    expected = ideal_balance(32, 5000) / (2150 * 12)
    assert result.years_behind == pytest.approx(round(expected, 1))


@pytest.mark.parametrize(
    "age,bucket", [(18, 25), (25, 25), (27, 25), (28, 30), (33, 35), (49, 50), (70, 50)]
)
def test_benchmark_bucket(age, bucket):
    assert benchmark_bucket(age) == bucket


def test_percentile_breakpoints():
    assert net_worth_percentile(30, 0) == 1
    assert net_worth_percentile(30, 15000) == pytest.approx(10)
    assert net_worth_percentile(30, 70000) == pytest.approx(50)
    assert net_worth_percentile(30, 280000) == pytest.approx(90)
    assert net_worth_percentile(30, 10_000_000) == 99


@pytest.mark.parametrize("age", [22, 30, 41, 55])
def test_percentile_is_monotonic_in_savings(age):
    values = [net_worth_percentile(age, savings) for savings in range(0, 3_000_000, 2500)]
    assert all(a <= b for a, b in zip(values, values[1:]))


def test_freedom_score_components_are_capped():
    assert freedom_score(10**9, 1, 10**6, 1, 0) == 100
    assert freedom_score(0, 100000, 0, 0, 99) == 0


def test_freedom_score_without_expenses_gets_full_progress():
    assert freedom_score(0, 0, 0, 0, 99) == 40


def test_risk_indicators():
    result = simulate(_inputs(age=28, savings=1000))
    risks = result.risk_indicators

    assert risks.rent_at_40 == int(1500 * 1.03**12)
    assert risks.emergency_fund_short
    assert risks.expense_ratio_percent == 57
    assert risks.working_years_left == result.freedom_age - 28


@pytest.mark.parametrize(
    "score,label", [(80, "excellent"), (60, "good"), (40, "needs work"), (39, "critical")]
)
def test_freedom_status(score, label):
    assert freedom_status(score) == label
