"""Dashboard domain service."""

from budgetbuddy.database.base import Database
from budgetbuddy.domain.entities import HealthResult, Projection
from budgetbuddy.domain.goal import GoalService
from budgetbuddy.domain.health import evaluate
from budgetbuddy.domain.projection import project


class DashboardService:
    """Loads a user's snapshot and runs the pure health and projection engines."""

    def __init__(self, db: Database):
        """Initialize dashboard service.

        Args:
            db: Database instance
        """
        self.db = db
        self.goals = GoalService(db)

    def get_health(self, user_id: str) -> HealthResult:
        """Evaluate the user's financial health.

        Goal caches are reconciled with the ledger first, so the goal
        sub-score never reads a stale ``current_amount``.
        """
        goals = self.goals.recalculate_goal_amounts(user_id)
        return evaluate(
            self.db.list_transactions(user_id),
            goals,
            self.db.list_recurring_rules(user_id),
        )

    def get_projection(self, user_id: str) -> Projection:
        """Annualize the user's active recurring rules."""
        return project(self.db.list_recurring_rules(user_id))
