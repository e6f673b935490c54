"""Tests for the SQLAlchemy store behind the Database interface."""

from datetime import date
from decimal import Decimal

import pytest

from budgetbuddy.database.base import Database, GoalStore, LedgerStore
from budgetbuddy.database.sqlalchemy_db import SQLAlchemyDatabase
from budgetbuddy.domain.entities import Transaction, TransactionDraft
from budgetbuddy.domain.errors import ConflictError, NotFoundError


def _draft(user_id="alice", **overrides):
    fields = {
        "user_id": user_id,
        "date": date(2026, 1, 1),
        "amount": Decimal("-12.50"),
        "description": "Lunch",
        "category": "Expenses",
    }
    fields.update(overrides)
    return TransactionDraft(**fields)


def _rule(db, user_id="alice", next_run_date=date(2026, 1, 1)):
    return db.insert_recurring_rule(
        user_id=user_id,
        description="Rent",
        amount=Decimal("1500"),
        category="Expenses",
        frequency="monthly",
        recur_day=1,
        next_run_date=next_run_date,
    )


def test_sqlalchemy_database_implements_both_stores(temp_db):
    assert isinstance(temp_db, SQLAlchemyDatabase)
    assert isinstance(temp_db, Database)
    assert isinstance(temp_db, LedgerStore)
    assert isinstance(temp_db, GoalStore)


def test_insert_and_get_transaction(temp_db):
    txn = temp_db.insert_transaction(_draft())

    assert isinstance(txn, Transaction)
    assert txn.id is not None
    assert txn.amount == Decimal("-12.50")
    assert txn.created_at is not None
    assert temp_db.get_transaction("alice", txn.id) == txn
    assert temp_db.get_transaction("bob", txn.id) is None


def test_manual_transactions_may_share_a_date(temp_db):
    temp_db.insert_transaction(_draft())
    temp_db.insert_transaction(_draft())
    assert len(temp_db.list_transactions("alice")) == 2


def test_duplicate_rule_period_is_rejected(temp_db):
    rule = _rule(temp_db)
    draft = _draft(recurring_rule_id=rule.id, is_recurring=True)
    temp_db.insert_transaction(draft)

    with pytest.raises(ConflictError):
        temp_db.insert_transaction(draft)


def test_update_and_delete_transaction(temp_db):
    txn = temp_db.insert_transaction(_draft())

    updated = temp_db.update_transaction(txn.id, category="Savings", amount=Decimal("12.50"))
    assert updated.category == "Savings"
    assert updated.description == "Lunch"

    temp_db.delete_transaction(txn.id)
    assert temp_db.get_transaction("alice", txn.id) is None
    with pytest.raises(NotFoundError):
        temp_db.delete_transaction(txn.id)


def test_record_materialization_advances_cursor(temp_db):
    rule = _rule(temp_db)
    draft = _draft(recurring_rule_id=rule.id, is_recurring=True)

    txn = temp_db.record_materialization(
        draft,
        rule_id=rule.id,
        expected_next_run_date=date(2026, 1, 1),
        next_run_date=date(2026, 2, 1),
    )

    assert txn.recurring_rule_id == rule.id
    assert temp_db.get_recurring_rule("alice", rule.id).next_run_date == date(2026, 2, 1)


def test_list_recurring_rules(temp_db):
    later = _rule(temp_db, next_run_date=date(2026, 3, 1))
    sooner = _rule(temp_db, next_run_date=date(2026, 2, 1))
    temp_db.update_recurring_rule(later.id, is_active=False)

    assert [r.id for r in temp_db.list_recurring_rules("alice")] == [sooner.id, later.id]
    assert [r.id for r in temp_db.list_recurring_rules("alice", active_only=True)] == [sooner.id]
    assert temp_db.list_recurring_rules("bob") == []


def test_update_missing_rule(temp_db):
    with pytest.raises(NotFoundError):
        temp_db.update_recurring_rule(999, is_active=False)


def test_goal_crud(temp_db):
    goal = temp_db.insert_goal(user_id="alice", name="Car", target_amount=Decimal("5000"))
    assert goal.current_amount == 0

    updated = temp_db.update_goal(goal.id, current_amount=Decimal("250"))
    assert updated.current_amount == Decimal("250")
    assert temp_db.list_goals("alice") == [updated]

    with pytest.raises(ConflictError):
        temp_db.insert_goal(user_id="alice", name="Car", target_amount=Decimal("1"))

    temp_db.delete_goal(goal.id)
    assert temp_db.get_goal("alice", goal.id) is None
    with pytest.raises(NotFoundError):
        temp_db.update_goal(goal.id, current_amount=Decimal("1"))
