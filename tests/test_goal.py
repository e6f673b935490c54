"""Tests for GoalService and derived goal progress."""

from datetime import date
from decimal import Decimal

import pytest

from budgetbuddy.domain.entities import Goal, Transaction
from budgetbuddy.domain.errors import ConflictError, NotFoundError, ValidationError
from budgetbuddy.domain.goal import goal_contributions

TODAY = date(2026, 1, 15)


def test_goal_contributions_fold():
    goals = [
        Goal(id=1, user_id="alice", name="Car", target_amount=Decimal("5000")),
        Goal(id=2, user_id="alice", name="Trip", target_amount=Decimal("800")),
    ]
    txns = [
        Transaction(1, "alice", TODAY, Decimal("100"), "a", "Goal: Car"),
        Transaction(2, "alice", TODAY, Decimal("-50"), "b", "Goal: Car"),
        Transaction(3, "alice", TODAY, Decimal("900"), "c", "Income"),
    ]

    assert goal_contributions(goals, txns) == {1: Decimal("150"), 2: Decimal("0")}


def test_create_goal(goal_service, user_id):
    goal = goal_service.create_goal(user_id, "Vacation", Decimal("3000"), today=TODAY)

    assert goal.id is not None
    assert goal.current_amount == 0
    assert goal.category == "🎯"
    assert goal_service.list_goals(user_id) == [goal]


def test_initial_amount_is_recorded_in_ledger(goal_service, temp_db, user_id):
    goal = goal_service.create_goal(
        user_id, "Vacation", Decimal("3000"), initial_amount=Decimal("500"), today=TODAY
    )

    assert goal.current_amount == Decimal("500")
    txns = temp_db.list_transactions(user_id, category="Goal: Vacation")
    assert len(txns) == 1
    assert txns[0].amount == Decimal("500")


def test_duplicate_name_conflicts(goal_service, user_id):
    goal_service.create_goal(user_id, "Car", Decimal("5000"), today=TODAY)
    with pytest.raises(ConflictError):
        goal_service.create_goal(user_id, "Car", Decimal("100"), today=TODAY)


def test_same_name_for_another_user(goal_service, user_id):
    goal_service.create_goal(user_id, "Car", Decimal("5000"), today=TODAY)
    other = goal_service.create_goal("bob", "Car", Decimal("5000"), today=TODAY)
    assert other.user_id == "bob"


@pytest.mark.parametrize(
    "kwargs,field",
    [
        ({"name": "", "target_amount": Decimal("10")}, "name"),
        ({"name": "Car", "target_amount": Decimal("0")}, "target_amount"),
        ({"name": "Car", "target_amount": Decimal("1000000000")}, "target_amount"),
        ({"name": "Car", "target_amount": Decimal("10"), "initial_amount": Decimal("-1")}, "current_amount"),
        ({"name": "Car", "target_amount": Decimal("10"), "deadline": date(2025, 1, 1)}, "deadline"),
    ],
)
def test_invalid_goal(goal_service, user_id, kwargs, field):
    with pytest.raises(ValidationError) as exc_info:
        goal_service.create_goal(user_id, today=TODAY, **kwargs)
    assert field in exc_info.value.errors


def test_contribute_updates_progress(goal_service, user_id):
    goal = goal_service.create_goal(user_id, "Trip", Decimal("800"), today=TODAY)

    updated = goal_service.contribute(user_id, goal.id, Decimal("200"), txn_date=TODAY)
    assert updated.current_amount == Decimal("200")
    assert updated.progress_percent == pytest.approx(25.0)

    updated = goal_service.contribute(user_id, goal.id, Decimal("600"), txn_date=TODAY)
    assert updated.is_complete
    assert updated.remaining_amount == 0


def test_contribute_rejects_non_positive(goal_service, user_id):
    goal = goal_service.create_goal(user_id, "Trip", Decimal("800"), today=TODAY)
    with pytest.raises(ValidationError):
        goal_service.contribute(user_id, goal.id, Decimal("0"))


def test_contribute_to_missing_goal(goal_service, user_id):
    with pytest.raises(NotFoundError):
        goal_service.contribute(user_id, 42, Decimal("10"))


def test_recalculate_repairs_stale_cache(goal_service, temp_db, user_id):
    goal = goal_service.create_goal(
        user_id, "Trip", Decimal("800"), initial_amount=Decimal("100"), today=TODAY
    )
    temp_db.update_goal(goal.id, current_amount=Decimal("9999"))

    goals = goal_service.recalculate_goal_amounts(user_id)

    assert [g.current_amount for g in goals] == [Decimal("100")]
    assert goal_service.get_goal(user_id, goal.id).current_amount == Decimal("100")


def test_recalculate_without_goals(goal_service, user_id):
    assert goal_service.recalculate_goal_amounts(user_id) == []


def test_delete_goal_keeps_contributions(goal_service, temp_db, user_id):
    goal = goal_service.create_goal(
        user_id, "Trip", Decimal("800"), initial_amount=Decimal("100"), today=TODAY
    )

    goal_service.delete_goal(user_id, goal.id)

    assert goal_service.get_goal(user_id, goal.id) is None
    assert len(temp_db.list_transactions(user_id)) == 1
    with pytest.raises(NotFoundError):
        goal_service.delete_goal(user_id, goal.id)


def test_goal_name_must_fit_contribution_category(goal_service, user_id):
    with pytest.raises(ValidationError) as exc_info:
        goal_service.create_goal(
            user_id, "Emergency fund for the house renovation project", Decimal("5000"),
            today=TODAY,
        )
    assert "name" in exc_info.value.errors


def test_longest_goal_name_contributions_stay_editable(
    goal_service, transaction_service, user_id
):
    name = "x" * 44
    goal = goal_service.create_goal(user_id, name, Decimal("5000"), today=TODAY)
    goal_service.contribute(user_id, goal.id, Decimal("100"), txn_date=TODAY)
    txn = transaction_service.list_transactions(user_id)[0]

    assert len(txn.category) == 50
    edited = transaction_service.update_transaction(user_id, txn.id, description="Fix")
    assert edited.description == "Fix"
    transaction_service.create_transaction(
        user_id, TODAY, Decimal("25"), "Manual top-up", txn.category, today=TODAY
    )
    assert goal_service.get_goal(user_id, goal.id).current_amount == Decimal("125")


def test_initial_amount_is_bounded(goal_service, user_id):
    with pytest.raises(ValidationError) as exc_info:
        goal_service.create_goal(
            user_id, "House", Decimal("50000000"), initial_amount=Decimal("10000001"),
            today=TODAY,
        )
    assert "current_amount" in exc_info.value.errors
    assert goal_service.list_goals(user_id) == []


class BrokenLedgerStore:
    """Delegates to a real store but cannot write transactions."""

    def __init__(self, db):
        self._db = db

    def insert_transaction(self, draft):
        raise RuntimeError("ledger unavailable")

    def __getattr__(self, name):
        return getattr(self._db, name)


def test_failed_initial_contribution_removes_goal(temp_db, user_id):
    from budgetbuddy.domain.goal import GoalService

    service = GoalService(BrokenLedgerStore(temp_db))

    with pytest.raises(RuntimeError):
        service.create_goal(
            user_id, "Trip", Decimal("800"), initial_amount=Decimal("100"), today=TODAY
        )

    assert temp_db.list_goals(user_id) == []
    assert temp_db.list_transactions(user_id) == []
