"""Abstract store interfaces.

The engines never perform I/O. Services reach storage only through these
interfaces, keyed by user.
"""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from budgetbuddy.domain.entities import (
    Goal,
    RecurringRule,
    Transaction,
    TransactionDraft,
)


class LedgerStore(ABC):
    """Transactions and recurring rules."""

    # Transaction operations
    @abstractmethod
    def insert_transaction(self, draft: TransactionDraft) -> Transaction:
        """Insert a transaction.

        Raises:
            ConflictError: If a transaction for the same
                ``(recurring_rule_id, date)`` already exists
        """
        pass

    @abstractmethod
    def get_transaction(self, user_id: str, transaction_id: int) -> Optional[Transaction]:
        """Get a user's transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
    ) -> list[Transaction]:
        """List a user's transactions, newest first, with optional filters."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        date: Optional[date] = None,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Transaction:
        """Update transaction fields. ``None`` leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    # Recurring rule operations
    @abstractmethod
    def insert_recurring_rule(
        self,
        user_id: str,
        description: str,
        amount: Decimal,
        category: str,
        frequency: str,
        recur_day: Optional[int],
        next_run_date: date,
    ) -> RecurringRule:
        """Insert a recurring rule."""
        pass

    @abstractmethod
    def get_recurring_rule(self, user_id: str, rule_id: int) -> Optional[RecurringRule]:
        """Get a user's recurring rule by ID."""
        pass

    @abstractmethod
    def list_recurring_rules(
        self, user_id: str, active_only: bool = False
    ) -> list[RecurringRule]:
        """List a user's recurring rules."""
        pass

    @abstractmethod
    def update_recurring_rule(
        self,
        rule_id: int,
        next_run_date: Optional[date] = None,
        is_active: Optional[bool] = None,
    ) -> RecurringRule:
        """Update the cursor or the active flag of a rule."""
        pass

    @abstractmethod
    def delete_recurring_rule(self, rule_id: int) -> None:
        """Delete a recurring rule. Materialized transactions are kept."""
        pass

    @abstractmethod
    def record_materialization(
        self,
        draft: TransactionDraft,
        rule_id: int,
        expected_next_run_date: date,
        next_run_date: date,
    ) -> Transaction:
        """Insert a rule's transaction and advance its cursor atomically.

        The cursor only moves if it still equals ``expected_next_run_date``.
        Either both writes happen or neither does.

        Raises:
            ConflictError: If the cursor moved or the period already exists
        """
        pass


class GoalStore(ABC):
    """Savings goals."""

    @abstractmethod
    def insert_goal(
        self,
        user_id: str,
        name: str,
        target_amount: Decimal,
        current_amount: Decimal = Decimal("0"),
        deadline: Optional[date] = None,
        category: str = "🎯",
        color: str = "#10b981",
    ) -> Goal:
        """Insert a goal."""
        pass

    @abstractmethod
    def get_goal(self, user_id: str, goal_id: int) -> Optional[Goal]:
        """Get a user's goal by ID."""
        pass

    @abstractmethod
    def list_goals(self, user_id: str) -> list[Goal]:
        """List a user's goals, newest first."""
        pass

    @abstractmethod
    def update_goal(self, goal_id: int, current_amount: Decimal) -> Goal:
        """Persist a recomputed ``current_amount`` cache."""
        pass

    @abstractmethod
    def delete_goal(self, goal_id: int) -> None:
        """Delete a goal."""
        pass


class Database(LedgerStore, GoalStore):
    """Combined store with connection lifecycle."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass
