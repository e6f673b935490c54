"""Tests for DashboardService."""

from datetime import date
from decimal import Decimal

TODAY = date(2026, 1, 15)


def test_empty_dashboard(dashboard_service, user_id):
    result = dashboard_service.get_health(user_id)
    assert result.health_score == 25
    assert result.key_metrics.savings_rate == 0


def test_health_uses_ledger_goals_and_rules(
    dashboard_service, transaction_service, recurring_service, goal_service, user_id
):
    transaction_service.create_transaction(
        user_id, TODAY, Decimal("4000"), "Salary", "Income", today=TODAY
    )
    transaction_service.create_transaction(
        user_id, TODAY, Decimal("1000"), "Groceries", "Expenses", today=TODAY
    )
    goal_service.create_goal(
        user_id, "Car", Decimal("2000"), initial_amount=Decimal("500"), today=TODAY
    )
    recurring_service.create_rule(
        user_id, "Rent", Decimal("1200"), "Expenses", "monthly", TODAY, recur_day=1
    )

    result = dashboard_service.get_health(user_id)

    metrics = result.key_metrics
    assert metrics.monthly_income == Decimal("4000")
    assert metrics.monthly_expenses == Decimal("2200")
    assert metrics.monthly_savings == Decimal("500")
    assert metrics.active_goals_count == 1
    assert result.sub_scores.goals == 25
    assert result.projections.annual_expenses == Decimal("14400")


def test_health_reconciles_stale_goal_cache(dashboard_service, goal_service, temp_db, user_id):
    goal = goal_service.create_goal(
        user_id, "Car", Decimal("1000"), initial_amount=Decimal("100"), today=TODAY
    )
    temp_db.update_goal(goal.id, current_amount=Decimal("1000"))

    result = dashboard_service.get_health(user_id)

    assert result.key_metrics.active_goals_count == 1
    assert result.sub_scores.goals == 10


def test_projection(dashboard_service, recurring_service, user_id):
    recurring_service.create_rule(
        user_id, "Rent", Decimal("1500"), "Expenses", "monthly", date(2026, 1, 1), recur_day=1
    )
    rule = recurring_service.create_rule(
        user_id, "Gym", Decimal("40"), "Expenses", "monthly", date(2026, 1, 1), recur_day=5
    )
    recurring_service.deactivate_rule(user_id, rule.id)

    projection = dashboard_service.get_projection(user_id)

    assert projection.annual_expenses == Decimal("18000")
    assert projection.monthly_expenses == Decimal("1500")
