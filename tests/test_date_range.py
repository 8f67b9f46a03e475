"""Tests for report selector parsing and range resolution."""

from datetime import datetime
from uuid import uuid4

import pytest

from hr_reporting.reporting.date_range import (
    AllTime,
    DateRange,
    DateRangeResolver,
    EmployeeNotFoundError,
    FullYear,
    InvalidPeriodError,
    SpecificMonth,
    YearToDate,
    end_of_month,
    parse_selector,
    resolve_calendar_range,
    resolve_range,
    selector_month,
)

NOW = datetime(2024, 3, 15, 10, 0)
JOINED = datetime(2020, 6, 1, 9, 0)


class TestParseSelector:
    """Test selector precedence."""

    def test_month_and_year(self):
        assert parse_selector(3, 2024) == SpecificMonth(month=3, year=2024)

    def test_month_and_year_win_over_period(self):
        """An explicit month is never overridden by a period."""
        assert parse_selector(3, 2024, "ytd") == SpecificMonth(month=3, year=2024)
        assert parse_selector(None, 2024, "allTime") == FullYear(year=2024)

    def test_year_only(self):
        assert parse_selector(year=2023) == FullYear(year=2023)

    def test_periods(self):
        assert parse_selector(period="ytd") == YearToDate()
        assert parse_selector(period="allTime") == AllTime()

    def test_month_without_year_is_ignored(self):
        assert parse_selector(month=3) is None

    def test_nothing_given(self):
        assert parse_selector() is None

    def test_unknown_period_rejected(self):
        with pytest.raises(InvalidPeriodError) as exc_info:
            parse_selector(period="weekly")

        assert exc_info.value.period == "weekly"

    def test_month_out_of_range(self):
        with pytest.raises(ValueError):
            SpecificMonth(month=13, year=2024)


class TestResolveRange:
    """Test window resolution against join date and now."""

    def test_specific_month_covers_whole_month(self):
        window = resolve_range(SpecificMonth(month=3, year=2024), JOINED, NOW)

        assert window.start == datetime(2024, 3, 1)
        assert window.end == datetime(2024, 3, 31, 23, 59, 59, 999000)

    def test_specific_month_not_clamped_to_join_date(self):
        joined = datetime(2024, 3, 10)
        window = resolve_range(SpecificMonth(month=3, year=2024), joined, NOW)

        assert window.start == datetime(2024, 3, 1)

    def test_full_past_year(self):
        window = resolve_range(FullYear(year=2023), JOINED, NOW)

        assert window.start == datetime(2023, 1, 1)
        assert window.end == datetime(2023, 12, 31, 23, 59, 59, 999000)

    def test_full_year_clamped_to_join_date_and_now(self):
        joined = datetime(2024, 2, 10)
        window = resolve_range(FullYear(year=2024), joined, NOW)

        assert window == DateRange(start=joined, end=NOW)

    def test_year_to_date(self):
        window = resolve_range(YearToDate(), JOINED, NOW)

        assert window == DateRange(start=datetime(2024, 1, 1), end=NOW)

    def test_year_to_date_starts_at_later_join(self):
        joined = datetime(2024, 2, 1)
        window = resolve_range(YearToDate(), joined, NOW)

        assert window.start == joined

    def test_all_time_and_no_selector(self):
        expected = DateRange(start=JOINED, end=NOW)

        assert resolve_range(AllTime(), JOINED, NOW) == expected
        assert resolve_range(None, JOINED, NOW) == expected

    def test_missing_join_date(self):
        employee_id = uuid4()
        with pytest.raises(EmployeeNotFoundError) as exc_info:
            resolve_range(AllTime(), None, NOW, employee_id)

        assert exc_info.value.employee_id == employee_id
        assert str(exc_info.value) == "Employee join date not found."


class TestCalendarRange:
    """Test employee-independent windows."""

    def test_unbounded_for_all_time(self):
        assert resolve_calendar_range(AllTime(), NOW) is None
        assert resolve_calendar_range(None, NOW) is None

    def test_year_to_date(self):
        window = resolve_calendar_range(YearToDate(), NOW)

        assert window == DateRange(start=datetime(2024, 1, 1), end=NOW)

    def test_full_year_not_clamped(self):
        window = resolve_calendar_range(FullYear(year=2024), NOW)

        assert window.end == datetime(2024, 12, 31, 23, 59, 59, 999000)

    def test_leap_february(self):
        assert end_of_month(2024, 2).day == 29
        assert end_of_month(2023, 2).day == 28

    def test_selector_month(self):
        assert selector_month(SpecificMonth(month=7, year=2022), NOW) == (2022, 7)
        assert selector_month(FullYear(year=2022), NOW) == (2022, 3)
        assert selector_month(AllTime(), NOW) == (2024, 3)
        assert selector_month(None, NOW) == (2024, 3)


class _Employee:
    def __init__(self, employee_id, join_date):
        self.employee_id = employee_id
        self.join_date = join_date


class _Directory:
    def __init__(self, *employees):
        self.by_id = {e.employee_id: e for e in employees}

    async def find_employee_by_id(self, employee_id):
        return self.by_id.get(employee_id)


class TestDateRangeResolver:
    """Test resolution through the employee directory."""

    async def test_resolves_by_id(self):
        employee = _Employee(uuid4(), JOINED)
        resolver = DateRangeResolver(_Directory(employee), clock=lambda: NOW)

        window = await resolver.resolve(employee.employee_id, YearToDate())

        assert window == DateRange(start=datetime(2024, 1, 1), end=NOW)

    async def test_unknown_employee(self):
        resolver = DateRangeResolver(_Directory(), clock=lambda: NOW)

        with pytest.raises(EmployeeNotFoundError):
            await resolver.resolve(uuid4(), AllTime())

    async def test_employee_without_join_date(self):
        employee = _Employee(uuid4(), None)
        resolver = DateRangeResolver(_Directory(employee), clock=lambda: NOW)

        with pytest.raises(EmployeeNotFoundError):
            await resolver.resolve(employee.employee_id, SpecificMonth(month=1, year=2024))
