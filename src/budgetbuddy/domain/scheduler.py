"""Recurring rule scheduler.

Turns a recurring rule into dated transactions. The rule's ``next_run_date``
is the authoritative cursor: every period strictly before it has been
materialized, and it never moves backward.

Everything here is pure. Persisting the produced transactions together with
the cursor advance is the caller's job (see ``RecurringRuleService``).
"""

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union

from budgetbuddy.domain.entities import (
    Frequency,
    MaterializationError,
    MaterializationResult,
    RecurringRule,
    TransactionDraft,
    is_expense_category,
)
from budgetbuddy.domain.errors import ValidationError
from budgetbuddy.utils.dates import add_months, as_date, clamp_day
from budgetbuddy.utils.money import signed_amount

# Upper bound on periods produced for one rule in one invocation. Ten years
# of a daily rule would need more; such a rule is flagged for review.
MAX_PERIODS_PER_RUN = 1000

FIXED_INTERVALS = {
    Frequency.DAILY: timedelta(days=1),
    Frequency.WEEKLY: timedelta(days=7),
    Frequency.BIWEEKLY: timedelta(days=14),
}

MONTH_STEPS = {
    Frequency.MONTHLY: 1,
    Frequency.QUARTERLY: 3,
    Frequency.YEARLY: 12,
}


def _frequency_or_raise(frequency: str) -> Frequency:
    parsed = Frequency.parse(frequency)
    if parsed is None:
        raise ValidationError({"frequency": f"Unknown frequency '{frequency}'"})
    return parsed


def _normalize_recur_day(recur_day: Optional[int], fallback: int) -> int:
    if recur_day is None:
        return fallback
    return max(1, min(31, int(recur_day)))


def next_occurrence(frequency: str, recur_day: Optional[int], current: date) -> date:
    """Return the run date following ``current`` for the given cadence.

    Calendar frequencies (monthly, quarterly, yearly) land on ``recur_day``
    clamped to the length of the target month. Fixed-interval frequencies
    (daily, weekly, biweekly) add their interval, so the weekday chosen at
    creation is preserved.

    Raises:
        ValidationError: If the frequency is unknown
    """
    freq = _frequency_or_raise(frequency)
    if freq in FIXED_INTERVALS:
        return current + FIXED_INTERVALS[freq]
    day = _normalize_recur_day(recur_day, current.day)
    return add_months(current, MONTH_STEPS[freq], day=day)


def step_once(rule: RecurringRule) -> date:
    """Return the cursor value that follows ``rule.next_run_date``."""
    return next_occurrence(rule.frequency, rule.recur_day, rule.next_run_date)


def compute_first_run_date(
    frequency: str, recur_day: Optional[int], start_date: date
) -> date:
    """Compute the first run date for a new rule.

    For calendar frequencies this is the first date on or after
    ``start_date`` falling on ``recur_day`` (clamped to the month length).
    For fixed-interval frequencies the start date itself is the first run,
    which fixes the weekday for the rule's lifetime.

    Raises:
        ValidationError: If the frequency is unknown
    """
    freq = _frequency_or_raise(frequency)
    if freq in FIXED_INTERVALS:
        return start_date

    day = _normalize_recur_day(recur_day, start_date.day)
    candidate = clamp_day(start_date.year, start_date.month, day)
    if candidate < start_date:
        candidate = add_months(candidate, 1, day=day)
    return candidate


def iter_due_periods(
    rule: RecurringRule, now: Union[date, datetime]
) -> Iterator[tuple[date, date]]:
    """Yield ``(run_date, following_run_date)`` for each period due by ``now``.

    Stops after ``MAX_PERIODS_PER_RUN`` periods.

    Raises:
        ValidationError: If the rule's frequency is unknown
    """
    today = as_date(now)
    cursor = rule.next_run_date
    produced = 0
    while cursor <= today and produced < MAX_PERIODS_PER_RUN:
        following = next_occurrence(rule.frequency, rule.recur_day, cursor)
        if following <= cursor:
            raise ValidationError(
                {"next_run_date": f"Rule {rule.id} does not advance past {cursor}"}
            )
        yield cursor, following
        cursor = following
        produced += 1


def build_transaction(rule: RecurringRule, run_date: date) -> TransactionDraft:
    """Create the transaction a rule owes for ``run_date``."""
    return TransactionDraft(
        user_id=rule.user_id,
        date=run_date,
        amount=signed_amount(rule.amount, is_expense_category(rule.category)),
        description=rule.description,
        category=rule.category,
        is_recurring=True,
        recurring_rule_id=rule.id,
    )


def materialize(rule: RecurringRule, now: Union[date, datetime]) -> MaterializationResult:
    """Emit every transaction ``rule`` owes up to ``now``.

    Returns the transactions and the rule with its cursor at the first date
    strictly after ``now``. Inactive rules produce nothing. A malformed rule
    is returned unchanged with an error; a rule that hits the iteration cap
    keeps the periods produced so far and is flagged ``needs_review``.
    """
    if not rule.is_active:
        return MaterializationResult(transactions=(), updated_rule=rule)

    transactions: list[TransactionDraft] = []
    cursor = rule.next_run_date
    try:
        for run_date, following in iter_due_periods(rule, now):
            transactions.append(build_transaction(rule, run_date))
            cursor = following
    except ValidationError as e:
        return MaterializationResult(
            transactions=(),
            updated_rule=rule,
            errors=(MaterializationError(rule_id=rule.id, message=str(e), run_date=cursor),),
        )

    updated = replace(rule, next_run_date=cursor)
    if cursor <= as_date(now):
        return MaterializationResult(
            transactions=tuple(transactions),
            updated_rule=updated,
            errors=(
                MaterializationError(
                    rule_id=rule.id,
                    message=(
                        f"Stopped after {MAX_PERIODS_PER_RUN} periods; "
                        "rule needs manual review"
                    ),
                    run_date=cursor,
                ),
            ),
            needs_review=True,
        )
    return MaterializationResult(transactions=tuple(transactions), updated_rule=updated)
