"""Recurring rule domain service."""

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from budgetbuddy.database.base import Database
from budgetbuddy.domain.entities import (
    BatchMaterialization,
    Frequency,
    MaterializationError,
    RecurringRule as RecurringRuleEntity,
    Transaction,
    is_goal_category,
)
from budgetbuddy.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    rule_not_found,
)
from budgetbuddy.domain.goal import GoalService
from budgetbuddy.domain.scheduler import (
    FIXED_INTERVALS,
    MAX_PERIODS_PER_RUN,
    build_transaction,
    compute_first_run_date,
    iter_due_periods,
)
from budgetbuddy.domain.validation import validate_recurring_rule
from budgetbuddy.log import get_logger
from budgetbuddy.utils.dates import as_date
from budgetbuddy.utils.money import round_money

logger = get_logger(__name__)


class RecurringRuleService:
    """Service for managing recurring rules and materializing due periods."""

    def __init__(self, db: Database):
        """Initialize recurring rule service.

        Args:
            db: Database instance
        """
        self.db = db
        self.goals = GoalService(db)

    def create_rule(
        self,
        user_id: str,
        description: str,
        amount: Decimal,
        category: str,
        frequency: str,
        start_date: date,
        recur_day: Optional[int] = None,
    ) -> RecurringRuleEntity:
        """Create a recurring rule.

        Args:
            user_id: Owner
            description: Description copied onto every transaction
            amount: Amount per period; stored unsigned
            category: Category copied onto every transaction
            frequency: One of daily, weekly, biweekly, monthly, quarterly, yearly
            start_date: First eligible date; fixes the weekday of
                fixed-interval rules
            recur_day: Day of month (1-31) for calendar frequencies

        Returns:
            Created rule with its first ``next_run_date``

        Raises:
            ValidationError: If any field is invalid
        """
        description = (description or "").strip()
        category = (category or "").strip()
        validate_recurring_rule(description, amount, category, frequency, recur_day, start_date)

        freq = Frequency.parse(frequency)
        if freq in FIXED_INTERVALS:
            recur_day = None

        rule = self.db.insert_recurring_rule(
            user_id=user_id,
            description=description,
            amount=abs(round_money(amount)),
            category=category,
            frequency=freq.value,
            recur_day=recur_day,
            next_run_date=compute_first_run_date(freq.value, recur_day, start_date),
        )
        logger.info(
            "recurring_rule_created",
            user_id=user_id,
            rule_id=rule.id,
            frequency=rule.frequency,
            next_run_date=rule.next_run_date.isoformat(),
        )
        return rule

    def get_rule(self, user_id: str, rule_id: int) -> Optional[RecurringRuleEntity]:
        """Get rule by ID.

        Args:
            user_id: Owner
            rule_id: Rule ID

        Returns:
            Rule entity or None if not found
        """
        return self.db.get_recurring_rule(user_id, rule_id)

    def list_rules(self, user_id: str, active_only: bool = False) -> list[RecurringRuleEntity]:
        """List a user's rules ordered by next run date."""
        return self.db.list_recurring_rules(user_id, active_only=active_only)

    def deactivate_rule(self, user_id: str, rule_id: int) -> RecurringRuleEntity:
        """Stop a rule from producing transactions. Its cursor is kept.

        Raises:
            NotFoundError: If the rule doesn't exist
        """
        self._require(user_id, rule_id)
        return self.db.update_recurring_rule(rule_id, is_active=False)

    def delete_rule(self, user_id: str, rule_id: int) -> None:
        """Delete a rule. Transactions it produced stay in the ledger.

        Raises:
            NotFoundError: If the rule doesn't exist
        """
        self._require(user_id, rule_id)
        self.db.delete_recurring_rule(rule_id)

    def process_due_rules(
        self, user_id: str, now: Union[date, datetime, None] = None
    ) -> BatchMaterialization:
        """Materialize every period owed by the user's active rules.

        Each period is stored together with its cursor advance, so a failed
        insert leaves the cursor on that period and the next run retries it.
        A failure in one rule is recorded and does not stop the others.

        Args:
            user_id: Owner
            now: Reference instant (defaults to today)

        Returns:
            BatchMaterialization with created transactions, the rules' state
            after processing and any per-rule errors
        """
        today = as_date(now or date.today())
        created: list[Transaction] = []
        rules: list[RecurringRuleEntity] = []
        errors: list[MaterializationError] = []
        review_rule_ids: list[int] = []

        for rule in self.db.list_recurring_rules(user_id, active_only=True):
            if rule.next_run_date > today:
                rules.append(rule)
                continue

            rule_txns, rule, error, needs_review = self._materialize_rule(rule, today)
            created.extend(rule_txns)
            rules.append(rule)
            if error is not None:
                errors.append(error)
            if needs_review:
                review_rule_ids.append(rule.id)

        if any(is_goal_category(txn.category) for txn in created):
            self.goals.recalculate_goal_amounts(user_id)

        return BatchMaterialization(
            transactions=tuple(created),
            rules=tuple(rules),
            errors=tuple(errors),
            review_rule_ids=tuple(review_rule_ids),
        )

    def _materialize_rule(
        self, rule: RecurringRuleEntity, today: date
    ) -> tuple[
        list[Transaction], RecurringRuleEntity, Optional[MaterializationError], bool
    ]:
        created: list[Transaction] = []
        cursor = rule.next_run_date
        try:
            for run_date, following in iter_due_periods(rule, today):
                try:
                    txn = self.db.record_materialization(
                        build_transaction(rule, run_date),
                        rule_id=rule.id,
                        expected_next_run_date=cursor,
                        next_run_date=following,
                    )
                except ConflictError as e:
                    # Another writer already owns this period
                    logger.info(
                        "materialization_conflict",
                        rule_id=rule.id,
                        run_date=run_date.isoformat(),
                        reason=str(e),
                    )
                    current = self.db.get_recurring_rule(rule.user_id, rule.id)
                    return created, current or replace(rule, next_run_date=cursor), None, False
                except Exception as e:
                    # Storage failures are isolated to the rule that hit them
                    logger.exception(
                        "materialization_failed",
                        rule_id=rule.id,
                        run_date=run_date.isoformat(),
                    )
                    error = MaterializationError(
                        rule_id=rule.id, message=str(e), run_date=run_date
                    )
                    return created, replace(rule, next_run_date=cursor), error, False

                logger.debug(
                    "period_materialized",
                    rule_id=rule.id,
                    run_date=run_date.isoformat(),
                    next_run_date=following.isoformat(),
                )
                created.append(txn)
                cursor = following
        except ValidationError as e:
            logger.error("invalid_recurring_rule", rule_id=rule.id, reason=str(e))
            error = MaterializationError(rule_id=rule.id, message=str(e), run_date=cursor)
            return created, replace(rule, next_run_date=cursor), error, False

        updated = replace(rule, next_run_date=cursor)
        if cursor <= today:
            logger.warning(
                "materialization_cap_reached",
                rule_id=rule.id,
                periods=MAX_PERIODS_PER_RUN,
                next_run_date=cursor.isoformat(),
            )
            error = MaterializationError(
                rule_id=rule.id,
                message=f"Stopped after {MAX_PERIODS_PER_RUN} periods; rule needs manual review",
                run_date=cursor,
            )
            return created, updated, error, True
        return created, updated, None, False

    def _require(self, user_id: str, rule_id: int) -> RecurringRuleEntity:
        rule = self.db.get_recurring_rule(user_id, rule_id)
        if rule is None:
            raise NotFoundError(rule_not_found(rule_id))
        return rule
