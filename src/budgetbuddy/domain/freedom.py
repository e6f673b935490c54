"""Freedom calculator: retirement-age simulation and peer ranking.

An advisory estimator. Degenerate inputs (no income, negative savings,
no expenses) resolve to the sentinel values 0 and 99 instead of raising.
"""

import math

from budgetbuddy.domain.entities import (
    ExpenseBreakdown,
    FreedomInputs,
    FreedomResult,
    RiskIndicators,
)

RETURN_RATE = 0.07
INFLATION_RATE = 0.03
FREEDOM_MULTIPLIER = 25
IDEAL_START_AGE = 22
IDEAL_SAVINGS_RATE = 0.20
MAX_SIMULATION_YEARS = 50
NEVER = 99
TARGET_RETIREMENT_AGE = 65
EMERGENCY_FUND_MONTHS = 6

# Net-worth quantiles by age bucket.
BENCHMARKS = {
    25: {"p10": 5000, "p25": 15000, "p50": 30000, "p75": 60000, "p90": 120000},
    30: {"p10": 15000, "p25": 35000, "p50": 70000, "p75": 140000, "p90": 280000},
    35: {"p10": 30000, "p25": 70000, "p50": 140000, "p75": 280000, "p90": 500000},
    40: {"p10": 50000, "p25": 120000, "p50": 250000, "p75": 500000, "p90": 900000},
    45: {"p10": 80000, "p25": 180000, "p50": 380000, "p75": 760000, "p90": 1400000},
    50: {"p10": 120000, "p25": 280000, "p50": 580000, "p75": 1150000, "p90": 2000000},
}

# (lower quantile key, upper quantile key, lower percentile, upper percentile)
_BRACKETS = (
    ("p75", "p90", 75, 90),
    ("p50", "p75", 50, 75),
    ("p25", "p50", 25, 50),
    ("p10", "p25", 10, 25),
)


def annuity_future_value(payment: float, years: int, rate: float = RETURN_RATE) -> float:
    """Future value of ``payment`` contributed at the end of each year."""
    if years <= 0 or payment <= 0:
        return 0.0
    return payment * ((1 + rate) ** years - 1) / rate


def ideal_balance(age: int, monthly_income: float) -> float:
    """Balance of someone saving 20% of income every year since age 22."""
    years_investing = max(0, age - IDEAL_START_AGE)
    annual_ideal_savings = max(0.0, monthly_income) * 12 * IDEAL_SAVINGS_RATE
    return annuity_future_value(annual_ideal_savings, years_investing)


def opportunity_cost(age: int, monthly_income: float) -> float:
    """Value forgone by not saving 20% of income from age 22.

    Contributions are made at the start of each year, so the annuity value
    earns one extra year of return.
    """
    years_lost = max(0, age - IDEAL_START_AGE)
    annual_ideal_savings = max(0.0, monthly_income) * 12 * IDEAL_SAVINGS_RATE
    return annuity_future_value(annual_ideal_savings, years_lost) * (1 + RETURN_RATE)


def benchmark_bucket(age: int) -> int:
    """Nearest five-year benchmark age, clamped to the table."""
    nearest = int(math.floor(age / 5 + 0.5)) * 5
    return max(min(BENCHMARKS), min(max(BENCHMARKS), nearest))


def net_worth_percentile(age: int, savings: float) -> float:
    """Estimate the savings percentile among peers of the same age.

    Interpolates linearly between the bracketing quantiles. Above p90 the
    estimate is extrapolated and capped at 99; below p10 it scales from 1
    to 10.
    """
    bench = BENCHMARKS[benchmark_bucket(age)]

    if savings >= bench["p90"]:
        return min(99.0, 90 + (savings - bench["p90"]) / bench["p90"] * 9)
    for low_key, high_key, low_pct, high_pct in _BRACKETS:
        low, high = bench[low_key], bench[high_key]
        if savings >= low:
            return low_pct + (savings - low) / (high - low) * (high_pct - low_pct)
    return max(1.0, min(10.0, savings / bench["p10"] * 10))


def years_until_free(
    current_savings: float, annual_savings: float, annual_expenses: float
) -> tuple[int, float]:
    """Run the yearly compounding loop.

    Each year the balance grows by ``RETURN_RATE`` plus that year's savings,
    and expenses grow with inflation. Stops once the balance covers the
    inflated freedom number, or after ``MAX_SIMULATION_YEARS``.

    Returns:
        Tuple of (years simulated, inflated annual expenses at the end)
    """
    balance = current_savings
    future_expenses = annual_expenses
    years = 0
    while (
        balance < future_expenses * FREEDOM_MULTIPLIER and years < MAX_SIMULATION_YEARS
    ):
        balance = balance * (1 + RETURN_RATE) + annual_savings
        future_expenses *= 1 + INFLATION_RATE
        years += 1
    return years, future_expenses


def freedom_score(
    current_savings: float,
    freedom_number: float,
    monthly_savings: float,
    monthly_income: float,
    freedom_age: float,
) -> int:
    """Composite 0-100 score: progress (40), savings rate (30), time (30)."""
    if freedom_number > 0:
        progress_ratio = current_savings / freedom_number
    else:
        progress_ratio = 1.0
    progress = min(40.0, max(0.0, progress_ratio * 100 * 0.4))

    if monthly_savings > 0 and monthly_income > 0:
        savings_rate = min(30.0, monthly_savings / monthly_income * 100 * 0.3)
    else:
        savings_rate = 0.0

    time_left = min(30.0, max(0.0, (TARGET_RETIREMENT_AGE - freedom_age) / 45 * 30))
    return int(max(0, min(100, math.floor(progress + savings_rate + time_left))))


def _risk_indicators(
    inputs: FreedomInputs, total_expenses: float, freedom_age: int
) -> RiskIndicators:
    age = inputs.age
    inflation_adjusted = inputs.current_savings / (1 + INFLATION_RATE) ** max(
        0, age - IDEAL_START_AGE
    )
    if inputs.monthly_income > 0:
        expense_ratio = round(total_expenses / inputs.monthly_income * 100)
    else:
        expense_ratio = 100
    return RiskIndicators(
        rent_at_40=math.floor(
            inputs.expenses.housing * (1 + INFLATION_RATE) ** max(0, 40 - age)
        ),
        still_working_at_70=freedom_age > 70,
        emergency_fund_short=inputs.current_savings < total_expenses * EMERGENCY_FUND_MONTHS,
        inflation_loss=math.floor(inputs.current_savings - inflation_adjusted),
        working_years_left=max(0, freedom_age - age),
        expense_ratio_percent=int(expense_ratio),
    )


def simulate(inputs: FreedomInputs) -> FreedomResult:
    """Estimate freedom age, score, peer percentile and opportunity cost.

    Args:
        inputs: Age, current savings, monthly income and monthly expenses

    Returns:
        FreedomResult; ``freedom_age`` and ``years_to_freedom`` are 99 when
        the user saves nothing
    """
    expenses = inputs.expenses or ExpenseBreakdown()
    total_expenses = expenses.total
    monthly_savings = inputs.monthly_income - total_expenses
    annual_savings = monthly_savings * 12
    annual_expenses = total_expenses * 12
    initial_freedom_number = annual_expenses * FREEDOM_MULTIPLIER

    if monthly_savings <= 0:
        years_to_freedom = NEVER
        future_expenses = annual_expenses
    else:
        years_to_freedom, future_expenses = years_until_free(
            inputs.current_savings, annual_savings, annual_expenses
        )

    raw_freedom_age = inputs.age + years_to_freedom
    freedom_age = min(NEVER, raw_freedom_age)

    ideal = ideal_balance(inputs.age, inputs.monthly_income)
    if monthly_savings <= 0:
        years_behind = float(NEVER)
    elif ideal > inputs.current_savings:
        years_behind = max(0.0, (ideal - inputs.current_savings) / annual_savings)
    else:
        years_behind = 0.0

    if initial_freedom_number > 0:
        actual_progress = inputs.current_savings / initial_freedom_number * 100
    else:
        actual_progress = 100.0

    return FreedomResult(
        freedom_score=freedom_score(
            inputs.current_savings,
            initial_freedom_number,
            monthly_savings,
            inputs.monthly_income,
            raw_freedom_age,
        ),
        freedom_age=int(freedom_age),
        years_to_freedom=years_to_freedom,
        years_behind=round(years_behind, 1),
        opportunity_cost=math.floor(opportunity_cost(inputs.age, inputs.monthly_income)),
        percentile=math.floor(net_worth_percentile(inputs.age, inputs.current_savings)),
        monthly_savings=monthly_savings,
        total_expenses=total_expenses,
        freedom_number=math.floor(initial_freedom_number),
        final_freedom_number=math.floor(future_expenses * FREEDOM_MULTIPLIER),
        ideal_balance=ideal,
        actual_progress=round(actual_progress, 1),
        risk_indicators=_risk_indicators(inputs, total_expenses, int(freedom_age)),
    )


def freedom_status(score: int) -> str:
    """Label a freedom score for display."""
    if score >= 80:
        return "excellent"
    if score >= 60:
        return "good"
    if score >= 40:
        return "needs work"
    return "critical"
