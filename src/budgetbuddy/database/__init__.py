"""Database layer for budgetbuddy application."""

from budgetbuddy.database.base import Database, GoalStore, LedgerStore
from budgetbuddy.database.factories import create_sqlite_database

__all__ = ["Database", "GoalStore", "LedgerStore", "create_sqlite_database"]
