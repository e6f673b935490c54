"""Domain layer for budgetbuddy application."""

import importlib

# Services import the database layer, which imports domain.entities, so
# exports are resolved lazily to avoid circular imports.
_EXPORTS = {
    "TransactionService": "budgetbuddy.domain.transaction",
    "RecurringRuleService": "budgetbuddy.domain.recurring",
    "GoalService": "budgetbuddy.domain.goal",
    "DashboardService": "budgetbuddy.domain.dashboard",
    "compute_first_run_date": "budgetbuddy.domain.scheduler",
    "materialize": "budgetbuddy.domain.scheduler",
    "step_once": "budgetbuddy.domain.scheduler",
    "project": "budgetbuddy.domain.projection",
    "evaluate": "budgetbuddy.domain.health",
    "simulate": "budgetbuddy.domain.freedom",
    "project_wealth": "budgetbuddy.domain.wealth",
}

__all__ = list(_EXPORTS)


def __getattr__(name):
    if name in _EXPORTS:
        return getattr(importlib.import_module(_EXPORTS[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
