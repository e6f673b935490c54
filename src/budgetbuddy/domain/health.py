"""Dashboard health score and insights.

Blends actual ledger totals with the annualized recurring projection into a
single 0-100 score, a prioritized list of shortcomings and a list of
recommendations. Deterministic: identical inputs give identical output.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence

from budgetbuddy.domain.entities import (
    EXPENSE_CATEGORY,
    INCOME_CATEGORY,
    SAVINGS_CATEGORY,
    Goal,
    HealthResult,
    HealthSubScores,
    KeyMetrics,
    Projection,
    Recommendation,
    RecurringRule,
    Severity,
    Shortcoming,
    Transaction,
    is_goal_category,
)
from budgetbuddy.domain.projection import project
from budgetbuddy.utils.money import format_currency, to_decimal

TARGET_SAVINGS_RATE = 20.0
LOW_SAVINGS_RATE = 10.0
TARGET_RUNWAY_MONTHS = 6.0
LOW_RUNWAY_MONTHS = 3.0

# A 20% savings rate and a six month runway each score 100.
SAVINGS_RATE_POINTS = 5.0
RUNWAY_POINTS = 16.67


@dataclass(frozen=True)
class LedgerSummary:
    income: Decimal
    expenses: Decimal
    savings: Decimal


def calculate_summaries(transactions: Iterable[Transaction]) -> LedgerSummary:
    """Sum income, expenses and savings over the ledger.

    Savings include both the Savings category and every goal contribution.
    """
    income = Decimal("0")
    expenses = Decimal("0")
    savings = Decimal("0")

    for txn in transactions or ():
        amount = to_decimal(txn.amount)
        if txn.category == INCOME_CATEGORY:
            income += amount
        elif txn.category == EXPENSE_CATEGORY:
            expenses += abs(amount)
        elif txn.category == SAVINGS_CATEGORY or is_goal_category(txn.category):
            savings += abs(amount)

    return LedgerSummary(income=income, expenses=expenses, savings=savings)


def active_goals(goals: Iterable[Goal]) -> list[Goal]:
    """Goals that still have something left to save."""
    return [
        goal
        for goal in goals or ()
        if goal.target_amount > 0 and (goal.current_amount or 0) < goal.target_amount
    ]


def _goal_ratio(goal: Goal) -> Decimal:
    return to_decimal(goal.current_amount or 0) / to_decimal(goal.target_amount)


def average_goal_progress(goals: Sequence[Goal]) -> float:
    """Mean completion percent of active goals; 100 when there are none."""
    if not goals:
        return 100.0
    total = sum(float(_goal_ratio(goal)) * 100 for goal in goals)
    return total / len(goals)


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def score_components(
    savings_rate: float,
    net_cash_flow: Decimal,
    goal_progress: float,
    monthly_runway: float,
) -> HealthSubScores:
    return HealthSubScores(
        savings=_clamp(savings_rate * SAVINGS_RATE_POINTS),
        cash_flow=100.0 if net_cash_flow > 0 else 0.0,
        goals=_clamp(goal_progress),
        runway=_clamp(monthly_runway * RUNWAY_POINTS),
    )


def combine_scores(sub_scores: HealthSubScores) -> int:
    """Average the four components, rounding half up."""
    total = (
        sub_scores.savings + sub_scores.cash_flow + sub_scores.goals + sub_scores.runway
    ) / 4
    return int(_clamp(math.floor(total + 0.5)))


def find_shortcomings(
    net_cash_flow: Decimal,
    savings_rate: float,
    monthly_income: Decimal,
    monthly_savings: Decimal,
    monthly_expenses: Decimal,
    monthly_runway: float,
) -> list[Shortcoming]:
    """Shortcomings in fixed priority order; the first one is the headline."""
    shortcomings = []

    if net_cash_flow < 0:
        shortcomings.append(
            Shortcoming(
                severity=Severity.CRITICAL,
                message=f"Spending {format_currency(abs(net_cash_flow))} more than you earn",
                action="Reduce expenses or increase income",
            )
        )

    if savings_rate < LOW_SAVINGS_RATE and monthly_income > 0:
        gap = monthly_income * Decimal("0.20") - monthly_savings
        shortcomings.append(
            Shortcoming(
                severity=Severity.WARNING,
                message=f"Low savings rate: {savings_rate:.1f}% (target: 20%+)",
                action=f"Save {format_currency(gap)} more per month",
            )
        )

    if 0 < monthly_runway < LOW_RUNWAY_MONTHS:
        shortcomings.append(
            Shortcoming(
                severity=Severity.WARNING,
                message=f"Only {monthly_runway:.1f} months emergency fund",
                action=f"Build to {format_currency(monthly_expenses * 3)}",
            )
        )

    return shortcomings


def build_recommendations(
    net_cash_flow: Decimal,
    goals: Sequence[Goal],
    projections: Projection,
    savings_rate: float,
    monthly_runway: float,
) -> list[Recommendation]:
    """Positive suggestions, only offered when cash flow is not negative."""
    if net_cash_flow < 0:
        return []

    recommendations = []

    if net_cash_flow > 0 and goals:
        lowest_goal = min(goals, key=_goal_ratio)
        recommendations.append(
            Recommendation(
                message=(
                    f"Allocate {format_currency(net_cash_flow)} surplus to "
                    f'"{lowest_goal.name}"'
                )
            )
        )

    if projections.net_annual > 0:
        recommendations.append(
            Recommendation(
                message=f"Annual surplus projected: {format_currency(projections.net_annual)}"
            )
        )

    if savings_rate >= TARGET_SAVINGS_RATE and monthly_runway >= TARGET_RUNWAY_MONTHS:
        recommendations.append(
            Recommendation(
                message="Excellent financial health! Consider investing excess savings"
            )
        )

    return recommendations


def evaluate(
    transactions: Iterable[Transaction],
    goals: Iterable[Goal],
    recurring_rules: Iterable[RecurringRule],
) -> HealthResult:
    """Compute the dashboard health score, metrics and insights.

    Args:
        transactions: Ledger snapshot
        goals: Goal snapshot (``current_amount`` already reconciled)
        recurring_rules: Rule snapshot; inactive rules are ignored

    Returns:
        HealthResult with an integer score in [0, 100]
    """
    summary = calculate_summaries(transactions)
    projections = project(recurring_rules)

    monthly_income = summary.income + projections.monthly_income
    monthly_expenses = summary.expenses + projections.monthly_expenses
    net_cash_flow = monthly_income - monthly_expenses
    savings_rate = (
        float(summary.savings / monthly_income * 100) if monthly_income > 0 else 0.0
    )
    monthly_runway = (
        float(summary.savings / monthly_expenses) if monthly_expenses > 0 else 0.0
    )

    open_goals = active_goals(goals)
    sub_scores = score_components(
        savings_rate, net_cash_flow, average_goal_progress(open_goals), monthly_runway
    )

    shortcomings = find_shortcomings(
        net_cash_flow,
        savings_rate,
        monthly_income,
        summary.savings,
        monthly_expenses,
        monthly_runway,
    )
    recommendations = build_recommendations(
        net_cash_flow, open_goals, projections, savings_rate, monthly_runway
    )

    return HealthResult(
        health_score=combine_scores(sub_scores),
        key_metrics=KeyMetrics(
            monthly_income=monthly_income,
            monthly_expenses=monthly_expenses,
            monthly_savings=summary.savings,
            net_cash_flow=net_cash_flow,
            savings_rate=savings_rate,
            monthly_runway=monthly_runway,
            active_goals_count=len(open_goals),
        ),
        shortcomings=tuple(shortcomings),
        recommendations=tuple(recommendations),
        projections=projections,
        sub_scores=sub_scores,
    )


def health_status(score: int) -> str:
    """Label a health score for display."""
    if score >= 85:
        return "excellent"
    if score >= 70:
        return "good"
    if score >= 50:
        return "fair"
    return "poor"
