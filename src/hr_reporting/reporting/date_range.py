"""Date-range resolution for report selectors.

A report request names its window with an optional month, year and period.
That loosely typed triple is parsed once at the API boundary into one of four
selector variants, and every report resolves the variant against an
employee's join date and the current time.

Precedence when parsing (first match wins):
1. month and year -> SpecificMonth
2. year           -> FullYear
3. period "ytd"   -> YearToDate
4. period "allTime" -> AllTime
Nothing at all yields ``None``; range resolution treats that as AllTime.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Union
from uuid import UUID

if TYPE_CHECKING:
    from hr_reporting.models import Employee
    from hr_reporting.stores import EmployeeStore


PERIOD_YTD = "ytd"
PERIOD_ALL_TIME = "allTime"


class ReportingError(Exception):
    """Base class for errors raised while building reports."""


class EmployeeNotFoundError(ReportingError):
    """Raised when an employee or their join date cannot be found."""

    def __init__(self, employee_id: UUID | None = None):
        self.employee_id = employee_id
        super().__init__("Employee join date not found.")


class InvalidPeriodError(ReportingError):
    """Raised when a period value is not one of the known periods."""

    def __init__(self, period: str):
        self.period = period
        super().__init__(
            f"Invalid period '{period}', expected '{PERIOD_YTD}' or '{PERIOD_ALL_TIME}'"
        )


@dataclass(frozen=True)
class SpecificMonth:
    """A single calendar month."""

    month: int
    year: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be between 1 and 12, got {self.month}")


@dataclass(frozen=True)
class FullYear:
    """A whole calendar year, clamped to the join date and to now."""

    year: int


@dataclass(frozen=True)
class YearToDate:
    """January 1 of the current year (or the join date) until now."""


@dataclass(frozen=True)
class AllTime:
    """The join date until now."""


DateSelector = Union[SpecificMonth, FullYear, YearToDate, AllTime]


@dataclass(frozen=True)
class DateRange:
    """Inclusive window of time a report covers."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        """Check if a moment falls inside the window."""
        return self.start <= moment <= self.end


def parse_selector(
    month: int | None = None,
    year: int | None = None,
    period: str | None = None,
) -> DateSelector | None:
    """Build a selector from raw query values.

    A period is only inspected when neither month+year nor year decided the
    selector, so callers sending both get month/year behavior.
    """
    if month is not None and year is not None:
        return SpecificMonth(month=month, year=year)
    if year is not None:
        return FullYear(year=year)
    if period == PERIOD_YTD:
        return YearToDate()
    if period == PERIOD_ALL_TIME:
        return AllTime()
    if period:
        raise InvalidPeriodError(period)
    return None


def end_of_month(year: int, month: int) -> datetime:
    """Last millisecond of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return datetime(year, month, last_day, 23, 59, 59, 999000)


def month_range(year: int, month: int) -> DateRange:
    """Full calendar month window."""
    return DateRange(start=datetime(year, month, 1), end=end_of_month(year, month))


def year_range(year: int) -> DateRange:
    """Full calendar year window."""
    return DateRange(start=datetime(year, 1, 1), end=end_of_month(year, 12))


def resolve_range(
    selector: DateSelector | None,
    join_date: datetime | None,
    now: datetime,
    employee_id: UUID | None = None,
) -> DateRange:
    """Resolve a selector into a concrete window for one employee.

    Raises:
        EmployeeNotFoundError: If the employee has no join date
    """
    if join_date is None:
        raise EmployeeNotFoundError(employee_id)

    if isinstance(selector, SpecificMonth):
        return month_range(selector.year, selector.month)

    if isinstance(selector, FullYear):
        window = year_range(selector.year)
        start = join_date if join_date > window.start else window.start
        end = now if window.end > now else window.end
        return DateRange(start=start, end=end)

    if isinstance(selector, YearToDate):
        start_of_year = datetime(now.year, 1, 1)
        return DateRange(start=max(join_date, start_of_year), end=now)

    # AllTime, or no selector at all
    return DateRange(start=join_date, end=now)


def resolve_calendar_range(
    selector: DateSelector | None, now: datetime
) -> DateRange | None:
    """Resolve a selector without an employee; None means unbounded."""
    if isinstance(selector, SpecificMonth):
        return month_range(selector.year, selector.month)
    if isinstance(selector, FullYear):
        return year_range(selector.year)
    if isinstance(selector, YearToDate):
        return DateRange(start=datetime(now.year, 1, 1), end=now)
    return None


def selector_month(selector: DateSelector | None, now: datetime) -> tuple[int, int]:
    """Calendar (year, month) a selector points at, defaulting to now.

    Month and year default independently, so a FullYear selector points at
    the current month of that year. Every other selector points at the
    current month.
    """
    if isinstance(selector, SpecificMonth):
        return selector.year, selector.month
    if isinstance(selector, FullYear):
        return selector.year, now.month
    return now.year, now.month


class DateRangeResolver:
    """Resolves selectors against employees from the directory."""

    def __init__(
        self,
        employees: EmployeeStore,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.employees = employees
        self.clock = clock

    async def resolve(
        self, employee_id: UUID, selector: DateSelector | None
    ) -> DateRange:
        """Resolve a selector for an employee looked up by ID.

        Raises:
            EmployeeNotFoundError: If the employee or their join date is missing
        """
        employee = await self.employees.find_employee_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return self.resolve_for(employee, selector)

    def resolve_for(self, employee: Employee, selector: DateSelector | None) -> DateRange:
        """Resolve a selector for an already loaded employee."""
        return resolve_range(
            selector, employee.join_date, self.clock(), employee.employee_id
        )
