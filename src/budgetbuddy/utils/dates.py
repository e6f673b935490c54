"""Calendar arithmetic shared by the scheduler and the services."""

import calendar
from datetime import date, datetime
from typing import Union

from dateutil.relativedelta import relativedelta


def last_day_of_month(year: int, month: int) -> int:
    """Return the number of days in the given month."""
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date, clamping ``day`` to the last valid day of the month.

    Requesting day 31 in February yields the 28th (29th in a leap year).
    """
    day = max(1, min(day, last_day_of_month(year, month)))
    return date(year, month, day)


def add_months(d: date, months: int, day: int | None = None) -> date:
    """Move ``d`` by ``months`` calendar months.

    Args:
        d: Starting date
        months: Number of months to move (may be negative)
        day: Preferred day of month in the target month; defaults to ``d.day``.
            Clamped to the month length.

    Returns:
        Date in the target month
    """
    target = d.replace(day=1) + relativedelta(months=months)
    return clamp_day(target.year, target.month, day if day is not None else d.day)


def as_date(value: Union[date, datetime]) -> date:
    """Normalize a date or datetime reference instant to a date."""
    if isinstance(value, datetime):
        return value.date()
    return value
