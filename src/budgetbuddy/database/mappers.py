"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the engines never see ORM
objects.
"""

from decimal import Decimal

from budgetbuddy.domain import entities as domain
from budgetbuddy.database.models import (
    Goal as ORMGoal,
    RecurringRule as ORMRecurringRule,
    Transaction as ORMTransaction,
)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        user_id=orm_transaction.user_id,
        date=orm_transaction.date,
        amount=Decimal(orm_transaction.amount),
        description=orm_transaction.description,
        category=orm_transaction.category,
        is_recurring=orm_transaction.is_recurring,
        recurring_rule_id=orm_transaction.recurring_rule_id,
        created_at=orm_transaction.created_at,
    )


def recurring_rule_to_domain(orm_rule: ORMRecurringRule) -> domain.RecurringRule:
    """Convert SQLAlchemy RecurringRule model to domain RecurringRule entity."""
    return domain.RecurringRule(
        id=orm_rule.id,
        user_id=orm_rule.user_id,
        description=orm_rule.description,
        amount=Decimal(orm_rule.amount),
        category=orm_rule.category,
        frequency=orm_rule.frequency,
        recur_day=orm_rule.recur_day,
        next_run_date=orm_rule.next_run_date,
        is_active=orm_rule.is_active,
        created_at=orm_rule.created_at,
    )


def goal_to_domain(orm_goal: ORMGoal) -> domain.Goal:
    """Convert SQLAlchemy Goal model to domain Goal entity."""
    return domain.Goal(
        id=orm_goal.id,
        user_id=orm_goal.user_id,
        name=orm_goal.name,
        target_amount=Decimal(orm_goal.target_amount),
        current_amount=Decimal(orm_goal.current_amount or 0),
        deadline=orm_goal.deadline,
        category=orm_goal.category,
        color=orm_goal.color,
        created_at=orm_goal.created_at,
    )


def draft_to_orm(draft: domain.TransactionDraft) -> ORMTransaction:
    """Build an unsaved SQLAlchemy Transaction from a draft."""
    return ORMTransaction(
        user_id=draft.user_id,
        date=draft.date,
        amount=draft.amount,
        description=draft.description,
        category=draft.category,
        is_recurring=draft.is_recurring,
        recurring_rule_id=draft.recurring_rule_id,
    )
