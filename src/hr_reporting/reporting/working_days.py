"""Working-day counting used as the denominator of every rate."""

from __future__ import annotations

from datetime import date, datetime, timedelta

# Monday is 0; Saturday and Sunday are not working days.
WEEKEND_DAYS = frozenset({5, 6})


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def is_working_day(day: date | datetime) -> bool:
    """Check if a calendar day is a weekday."""
    return _as_date(day).weekday() not in WEEKEND_DAYS


def get_working_days(
    start: date | datetime | None,
    end: date | datetime | None,
) -> int:
    """Count weekdays in [start, end], both calendar days inclusive.

    Returns 0 when either bound is missing or the window is empty.
    """
    if start is None or end is None:
        return 0

    first = _as_date(start)
    last = _as_date(end)
    if last < first:
        return 0

    total_days = (last - first).days + 1
    full_weeks, remainder = divmod(total_days, 7)
    count = full_weeks * 5

    day = first + timedelta(days=full_weeks * 7)
    for _ in range(remainder):
        if day.weekday() not in WEEKEND_DAYS:
            count += 1
        day += timedelta(days=1)

    return count
