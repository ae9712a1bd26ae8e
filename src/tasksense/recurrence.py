"""
Recurrence rollover.

Computes the next due instant of a recurring task from the due instant of
the occurrence that was just completed:

- daily: add ``interval`` days
- weekly: add ``interval`` weeks (weekday is preserved)
- monthly: add ``interval`` months, keeping the day of month when the target
  month has it and clipping to the target month's last day otherwise
  (Jan 31 -> Feb 29 in leap years, Feb 28 otherwise)

Time of day and tzinfo carry over unchanged; a date-only due stays a date.
Only the last due instant is known, so a clipped monthly task keeps its
clipped day afterwards (Jan 31 -> Feb 29 -> Mar 29).
"""

from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

from .errors import InvalidIntervalError
from .models.recurrence import RecurrenceSpec, RecurrenceType


def add_months(value: date, months: int) -> date:
    """Shift a date by whole months, clipping the day to the target month."""
    return value + relativedelta(months=months)


def next_occurrence(last_due: date | datetime, spec: RecurrenceSpec) -> date | datetime:
    """
    Next due instant after ``last_due``.

    Args:
        last_due: Due date (date-only task) or due datetime of the completed occurrence
        spec: Recurrence type and interval

    Returns:
        Same type as ``last_due``

    Raises:
        InvalidIntervalError: If the interval is not a positive integer
    """
    # Specs built with model_construct() skip validation
    interval = spec.interval
    if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
        raise InvalidIntervalError(interval, context={'type': getattr(spec.type, 'value', spec.type)})

    if spec.type == RecurrenceType.DAILY:
        return last_due + timedelta(days=interval)
    if spec.type == RecurrenceType.WEEKLY:
        return last_due + timedelta(weeks=interval)
    return add_months(last_due, interval)
