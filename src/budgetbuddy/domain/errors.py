"""Shared domain error messages and error types."""

from datetime import date
from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic.

    ``errors`` maps field names to messages so callers can report every
    problem at once.
    """

    def __init__(self, errors: dict[str, str], message: Optional[str] = None):
        self.errors = dict(errors)
        if message is None:
            message = "Validation failed: " + ", ".join(
                f"{name}: {text}" for name, text in self.errors.items()
            )
        super().__init__(message)


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def rule_not_found(rule_id: int) -> str:
    """Return message for missing recurring rule."""
    return f"Recurring rule {rule_id} not found"


def goal_not_found(goal_id: int) -> str:
    """Return message for missing goal."""
    return f"Goal {goal_id} not found"


def duplicate_materialization(rule_id: int, run_date: date) -> str:
    """Return message for a period that was already materialized."""
    return f"Transaction for rule {rule_id} on {run_date.isoformat()} already exists"


def stale_rule_cursor(rule_id: int, expected: date) -> str:
    """Return message when a rule cursor moved under a writer."""
    return (
        f"Recurring rule {rule_id} is no longer due on {expected.isoformat()}; "
        "another writer advanced it"
    )


def duplicate_goal_name(name: str) -> str:
    """Return message for duplicate goal name."""
    return f"Goal with name '{name}' already exists"
