"""Transaction domain service."""

from typing import Optional
from datetime import date
from decimal import Decimal

from budgetbuddy.database.base import Database
from budgetbuddy.domain.entities import (
    Transaction as TransactionEntity,
    TransactionDraft,
    is_expense_category,
    is_goal_category,
)
from budgetbuddy.domain.errors import NotFoundError, transaction_not_found
from budgetbuddy.domain.goal import GoalService
from budgetbuddy.domain.validation import validate_transaction
from budgetbuddy.utils.money import round_money, signed_amount


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db
        self.goals = GoalService(db)

    def create_transaction(
        self,
        user_id: str,
        date: date,
        amount: Decimal,
        description: str,
        category: str,
        today: Optional[date] = None,
    ) -> TransactionEntity:
        """Create a manual transaction.

        The amount's sign is normalized for the category: expenses are stored
        non-positive, everything else non-negative.

        Args:
            user_id: Owner
            date: Transaction date
            amount: Transaction amount
            description: Description
            category: Category (Income, Expenses, Savings or "Goal: <name>")
            today: Reference date for validation (defaults to today)

        Returns:
            Created transaction entity

        Raises:
            ValidationError: If any field is invalid
        """
        description = (description or "").strip()
        category = (category or "").strip()
        validate_transaction(description, amount, date, category, today=today)

        txn = self.db.insert_transaction(
            TransactionDraft(
                user_id=user_id,
                date=date,
                amount=signed_amount(round_money(amount), is_expense_category(category)),
                description=description,
                category=category,
            )
        )
        if is_goal_category(category):
            self.goals.recalculate_goal_amounts(user_id)
        return txn

    def get_transaction(self, user_id: str, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            user_id: Owner
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(user_id, transaction_id)

    def list_transactions(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters, newest first."""
        return self.db.list_transactions(
            user_id, start_date=start_date, end_date=end_date, category=category
        )

    def update_category(
        self, user_id: str, transaction_id: int, category: str
    ) -> TransactionEntity:
        """Recategorize a transaction.

        The stored sign follows the new category, and goal progress is
        reconciled when either the old or the new category is a goal.

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If the category is invalid
        """
        txn = self._require(user_id, transaction_id)
        category = (category or "").strip()
        validate_transaction(txn.description, txn.amount, txn.date, category)

        updated = self.db.update_transaction(
            transaction_id,
            category=category,
            amount=signed_amount(txn.amount, is_expense_category(category)),
        )
        if is_goal_category(txn.category) or is_goal_category(category):
            self.goals.recalculate_goal_amounts(user_id)
        return updated

    def update_transaction(
        self,
        user_id: str,
        transaction_id: int,
        date: Optional[date] = None,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
    ) -> TransactionEntity:
        """Update transaction fields.

        Args:
            user_id: Owner
            transaction_id: Transaction ID to update
            date: Optional new date
            amount: Optional new amount
            description: Optional new description
            category: Optional new category

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If the resulting transaction is invalid
        """
        txn = self._require(user_id, transaction_id)

        new_category = category.strip() if category is not None else txn.category
        new_amount = round_money(amount) if amount is not None else txn.amount
        new_description = description.strip() if description is not None else txn.description
        new_date = date if date is not None else txn.date
        validate_transaction(new_description, new_amount, new_date, new_category)

        updated = self.db.update_transaction(
            transaction_id,
            date=new_date,
            amount=signed_amount(new_amount, is_expense_category(new_category)),
            description=new_description,
            category=new_category,
        )
        if is_goal_category(txn.category) or is_goal_category(new_category):
            self.goals.recalculate_goal_amounts(user_id)
        return updated

    def delete_transaction(self, user_id: str, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        txn = self._require(user_id, transaction_id)
        self.db.delete_transaction(transaction_id)
        if is_goal_category(txn.category):
            self.goals.recalculate_goal_amounts(user_id)

    def _require(self, user_id: str, transaction_id: int) -> TransactionEntity:
        txn = self.db.get_transaction(user_id, transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn
