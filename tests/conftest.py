"""Shared pytest fixtures for budgetbuddy tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from budgetbuddy.database.factories import create_sqlite_database
from budgetbuddy.domain.dashboard import DashboardService
from budgetbuddy.domain.entities import RecurringRule
from budgetbuddy.domain.goal import GoalService
from budgetbuddy.domain.recurring import RecurringRuleService
from budgetbuddy.domain.transaction import TransactionService

USER = "alice"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_id():
    """Default owner for test data."""
    return USER


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def recurring_service(temp_db):
    """Create a RecurringRuleService with a temporary database."""
    return RecurringRuleService(temp_db)


@pytest.fixture
def goal_service(temp_db):
    """Create a GoalService with a temporary database."""
    return GoalService(temp_db)


@pytest.fixture
def dashboard_service(temp_db):
    """Create a DashboardService with a temporary database."""
    return DashboardService(temp_db)


@pytest.fixture
def make_rule():
    """Build an in-memory recurring rule snapshot."""

    def _make_rule(**overrides):
        fields = {
            "id": 1,
            "user_id": USER,
            "description": "Rent",
            "amount": Decimal("1500"),
            "category": "Expenses",
            "frequency": "monthly",
            "recur_day": 1,
            "next_run_date": date(2026, 1, 1),
            "is_active": True,
        }
        fields.update(overrides)
        return RecurringRule(**fields)

    return _make_rule


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
