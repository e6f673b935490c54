"""Domain model entities for budgetbuddy.

These are pure data classes representing business concepts, independent of
database schema. The engines consume and return these snapshots and never
talk to the store themselves.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


INCOME_CATEGORY = "Income"
EXPENSE_CATEGORY = "Expenses"
SAVINGS_CATEGORY = "Savings"
GOAL_CATEGORY_PREFIX = "Goal: "

DEFAULT_CATEGORIES = (INCOME_CATEGORY, EXPENSE_CATEGORY, SAVINGS_CATEGORY)


class Frequency(str, Enum):
    """Cadence of a recurring rule."""

    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: str) -> Optional["Frequency"]:
        """Return the matching frequency or None for unknown values."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


def goal_category(goal_name: str) -> str:
    """Return the transaction category used for contributions to a goal."""
    return f"{GOAL_CATEGORY_PREFIX}{goal_name}"


def is_goal_category(category: Optional[str]) -> bool:
    """Check whether a category records a goal contribution."""
    return bool(category) and category.startswith(GOAL_CATEGORY_PREFIX)


def is_expense_category(category: Optional[str]) -> bool:
    """Expenses are the only category stored with a negative sign."""
    return category == EXPENSE_CATEGORY


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    user_id: str
    date: date
    amount: Decimal
    description: str
    category: str
    is_recurring: bool = False
    recurring_rule_id: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class TransactionDraft:
    """A transaction that has not been persisted yet."""

    user_id: str
    date: date
    amount: Decimal
    description: str
    category: str
    is_recurring: bool = False
    recurring_rule_id: Optional[int] = None


@dataclass(frozen=True)
class RecurringRule:
    """Recurring-obligation template.

    ``amount`` is unsigned; the sign of materialized transactions is derived
    from ``category``. ``next_run_date`` is the cursor: the next date at which
    the rule owes a transaction.
    """

    id: int
    user_id: str
    description: str
    amount: Decimal
    category: str
    frequency: str
    recur_day: Optional[int]
    next_run_date: date
    is_active: bool = True
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Goal:
    """Savings goal. ``current_amount`` is a cache derived from the ledger."""

    id: int
    user_id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal = Decimal("0")
    deadline: Optional[date] = None
    category: str = "🎯"
    color: str = "#10b981"
    created_at: Optional[datetime] = None

    @property
    def progress_percent(self) -> float:
        if self.target_amount <= 0:
            return 0.0
        return min(100.0, float(self.current_amount / self.target_amount * 100))

    @property
    def remaining_amount(self) -> Decimal:
        return max(Decimal("0"), self.target_amount - self.current_amount)

    @property
    def is_complete(self) -> bool:
        return self.current_amount >= self.target_amount


@dataclass(frozen=True)
class Projection:
    """Annualized view of the active recurring rules. Never persisted."""

    annual_income: Decimal
    annual_expenses: Decimal
    net_annual: Decimal
    monthly_income: Decimal
    monthly_expenses: Decimal


@dataclass(frozen=True)
class MaterializationError:
    """A rule that could not be (fully) materialized."""

    rule_id: int
    message: str
    run_date: Optional[date] = None


@dataclass(frozen=True)
class MaterializationResult:
    """Outcome of materializing one rule against a reference date."""

    transactions: tuple[TransactionDraft, ...]
    updated_rule: RecurringRule
    errors: tuple[MaterializationError, ...] = ()
    needs_review: bool = False


@dataclass(frozen=True)
class BatchMaterialization:
    """Outcome of processing every due rule for a user."""

    transactions: tuple[Transaction, ...]
    rules: tuple[RecurringRule, ...]
    errors: tuple[MaterializationError, ...]
    review_rule_ids: tuple[int, ...] = ()


class Severity(str, Enum):
    """Severity of a dashboard shortcoming."""

    CRITICAL = "critical"
    WARNING = "warning"


@dataclass(frozen=True)
class Shortcoming:
    severity: Severity
    message: str
    action: str


@dataclass(frozen=True)
class Recommendation:
    message: str


@dataclass(frozen=True)
class KeyMetrics:
    monthly_income: Decimal
    monthly_expenses: Decimal
    monthly_savings: Decimal
    net_cash_flow: Decimal
    savings_rate: float
    monthly_runway: float
    active_goals_count: int


@dataclass(frozen=True)
class HealthSubScores:
    """The four equally weighted 0-100 components of the health score."""

    savings: float
    cash_flow: float
    goals: float
    runway: float


@dataclass(frozen=True)
class HealthResult:
    health_score: int
    key_metrics: KeyMetrics
    shortcomings: tuple[Shortcoming, ...]
    recommendations: tuple[Recommendation, ...]
    projections: Projection
    sub_scores: HealthSubScores

    @property
    def headline(self) -> Optional[Shortcoming]:
        """The shortcoming presented first, if any."""
        return self.shortcomings[0] if self.shortcomings else None


@dataclass(frozen=True)
class ExpenseBreakdown:
    housing: float = 0.0
    lifestyle: float = 0.0
    transport: float = 0.0

    @property
    def total(self) -> float:
        return self.housing + self.lifestyle + self.transport


@dataclass(frozen=True)
class FreedomInputs:
    age: int
    current_savings: float
    monthly_income: float
    expenses: ExpenseBreakdown = field(default_factory=ExpenseBreakdown)


@dataclass(frozen=True)
class RiskIndicators:
    rent_at_40: int
    still_working_at_70: bool
    emergency_fund_short: bool
    inflation_loss: int
    working_years_left: int
    expense_ratio_percent: int


@dataclass(frozen=True)
class FreedomResult:
    freedom_score: int
    freedom_age: int
    years_to_freedom: int
    years_behind: float
    opportunity_cost: int
    percentile: int
    monthly_savings: float
    total_expenses: float
    freedom_number: int
    final_freedom_number: int
    ideal_balance: float
    actual_progress: float
    risk_indicators: RiskIndicators


@dataclass(frozen=True)
class WealthPoint:
    month: int
    balance: float
    contributions: float

    @property
    def year(self) -> float:
        return round(self.month / 12, 1)


@dataclass(frozen=True)
class WealthProjection:
    points: tuple[WealthPoint, ...]
    monthly_savings: float

    @property
    def final_balance(self) -> float:
        return self.points[-1].balance if self.points else 0.0

    @property
    def total_contributions(self) -> float:
        return self.points[-1].contributions if self.points else 0.0

    @property
    def total_returns(self) -> float:
        return self.final_balance - self.total_contributions
