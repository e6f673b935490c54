"""Goal domain service.

A goal's ``current_amount`` is a cache of the ledger: the sum of
``abs(amount)`` over transactions in the ``Goal: {name}`` category. It is
recomputed from transactions, never incremented in place.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from budgetbuddy.database.base import Database
from budgetbuddy.domain.entities import (
    Goal as GoalEntity,
    Transaction,
    TransactionDraft,
    goal_category,
    is_goal_category,
)
from budgetbuddy.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_goal_name,
    goal_not_found,
)
from budgetbuddy.domain.validation import validate_goal
from budgetbuddy.log import get_logger
from budgetbuddy.utils.money import round_money, to_decimal

logger = get_logger(__name__)


def goal_contributions(
    goals: Iterable[GoalEntity], transactions: Iterable[Transaction]
) -> dict[int, Decimal]:
    """Fold the ledger into the contributed total for each goal."""
    totals_by_category: dict[str, Decimal] = defaultdict(Decimal)
    for txn in transactions:
        if is_goal_category(txn.category):
            totals_by_category[txn.category] += abs(to_decimal(txn.amount))

    return {
        goal.id: totals_by_category.get(goal_category(goal.name), Decimal("0"))
        for goal in goals
    }


class GoalService:
    """Service for managing goals and their derived progress."""

    def __init__(self, db: Database):
        """Initialize goal service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_goal(
        self,
        user_id: str,
        name: str,
        target_amount: Decimal,
        initial_amount: Decimal = Decimal("0"),
        deadline: Optional[date] = None,
        category: str = "🎯",
        color: str = "#10b981",
        today: Optional[date] = None,
    ) -> GoalEntity:
        """Create a goal.

        A non-zero ``initial_amount`` is recorded as a contribution
        transaction, so the ledger stays the source of truth. If that
        transaction cannot be stored the goal is removed again.

        Args:
            user_id: Owner
            name: Goal name, unique per user
            target_amount: Amount to reach
            initial_amount: Amount already saved
            deadline: Optional target date
            category: Display icon
            color: Display color
            today: Reference date for validation (defaults to today)

        Returns:
            Goal entity with reconciled progress

        Raises:
            ValidationError: If any field is invalid
            ConflictError: If the user already has a goal with this name
        """
        today = today or date.today()
        name = (name or "").strip()
        validate_goal(name, target_amount, initial_amount, deadline, today=today)

        for existing in self.db.list_goals(user_id):
            if existing.name == name:
                raise ConflictError(duplicate_goal_name(name))

        goal = self.db.insert_goal(
            user_id=user_id,
            name=name,
            target_amount=round_money(target_amount),
            deadline=deadline,
            category=category,
            color=color,
        )
        logger.info("goal_created", user_id=user_id, goal_id=goal.id, name=name)

        if to_decimal(initial_amount) > 0:
            try:
                self.db.insert_transaction(
                    TransactionDraft(
                        user_id=user_id,
                        date=today,
                        amount=round_money(initial_amount),
                        description=f"Initial contribution to {name}",
                        category=goal_category(name),
                    )
                )
            except Exception:
                logger.error("initial_contribution_failed", user_id=user_id, goal_id=goal.id)
                self.db.delete_goal(goal.id)
                raise
            return self._reconcile_goal(goal)
        return goal

    def get_goal(self, user_id: str, goal_id: int) -> Optional[GoalEntity]:
        """Get goal by ID.

        Args:
            user_id: Owner
            goal_id: Goal ID

        Returns:
            Goal entity or None if not found
        """
        return self.db.get_goal(user_id, goal_id)

    def list_goals(self, user_id: str) -> list[GoalEntity]:
        """List a user's goals."""
        return self.db.list_goals(user_id)

    def contribute(
        self,
        user_id: str,
        goal_id: int,
        amount: Decimal,
        txn_date: Optional[date] = None,
        description: Optional[str] = None,
    ) -> GoalEntity:
        """Record a contribution and return the goal with updated progress.

        Raises:
            NotFoundError: If the goal doesn't exist
            ValidationError: If the amount is not positive
        """
        goal = self.db.get_goal(user_id, goal_id)
        if goal is None:
            raise NotFoundError(goal_not_found(goal_id))

        amount = to_decimal(amount)
        if amount <= 0:
            raise ValidationError({"amount": "Contribution must be positive"})

        self.db.insert_transaction(
            TransactionDraft(
                user_id=user_id,
                date=txn_date or date.today(),
                amount=round_money(amount),
                description=description or f"Contribution to {goal.name}",
                category=goal_category(goal.name),
            )
        )
        updated = self._reconcile_goal(goal)
        if updated.is_complete and not goal.is_complete:
            logger.info("goal_completed", user_id=user_id, goal_id=goal_id, name=goal.name)
        return updated

    def delete_goal(self, user_id: str, goal_id: int) -> None:
        """Delete a goal. Its contribution transactions stay in the ledger.

        Raises:
            NotFoundError: If the goal doesn't exist
        """
        if self.db.get_goal(user_id, goal_id) is None:
            raise NotFoundError(goal_not_found(goal_id))
        self.db.delete_goal(goal_id)

    def recalculate_goal_amounts(self, user_id: str) -> list[GoalEntity]:
        """Recompute every goal's cached progress from the ledger.

        Only goals whose cached value changed are written back.

        Returns:
            The user's goals with reconciled ``current_amount``
        """
        goals = self.db.list_goals(user_id)
        if not goals:
            return []

        totals = goal_contributions(goals, self.db.list_transactions(user_id))
        reconciled = []
        for goal in goals:
            total = totals[goal.id]
            if total != goal.current_amount:
                logger.info(
                    "goal_amount_reconciled",
                    user_id=user_id,
                    goal_id=goal.id,
                    previous=str(goal.current_amount),
                    current=str(total),
                )
                goal = self.db.update_goal(goal.id, current_amount=total)
            reconciled.append(goal)
        return reconciled

    def _reconcile_goal(self, goal: GoalEntity) -> GoalEntity:
        transactions = self.db.list_transactions(
            goal.user_id, category=goal_category(goal.name)
        )
        total = goal_contributions([goal], transactions)[goal.id]
        if total == goal.current_amount:
            return goal
        return self.db.update_goal(goal.id, current_amount=total)
