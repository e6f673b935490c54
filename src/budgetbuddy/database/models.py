"""SQLAlchemy models for budgetbuddy database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class RecurringRule(Base):
    """Recurring rule model."""

    __tablename__ = "recurring_rules"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    description = Column(String(200), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String(50), nullable=False)
    frequency = Column(String(16), nullable=False)
    recur_day = Column(Integer, nullable=True)
    next_run_date = Column(Date, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="recurring_rule")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String(200), nullable=False)
    category = Column(String(50), nullable=False)
    is_recurring = Column(Boolean, default=False, nullable=False)
    recurring_rule_id = Column(
        Integer, ForeignKey("recurring_rules.id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # One transaction per rule period; manual entries (NULL rule) are unconstrained
    __table_args__ = (
        UniqueConstraint("recurring_rule_id", "date", name="uq_rule_period"),
        Index("ix_transactions_user_date", "user_id", "date"),
    )

    # Relationships
    recurring_rule = relationship("RecurringRule", back_populates="transactions")


class Goal(Base):
    """Savings goal model."""

    __tablename__ = "goals"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    target_amount = Column(Numeric(14, 2), nullable=False)
    current_amount = Column(Numeric(14, 2), default=0, nullable=False)
    deadline = Column(Date, nullable=True)
    category = Column(String, default="🎯", nullable=False)
    color = Column(String, default="#10b981", nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_user_goal_name"),)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
