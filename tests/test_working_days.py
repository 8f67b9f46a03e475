"""Tests for working-day counting."""

from datetime import date, datetime, timedelta

import pytest

from hr_reporting.reporting.working_days import get_working_days, is_working_day


def naive_count(start: date, end: date) -> int:
    count = 0
    day = start
    while day <= end:
        if day.weekday() < 5:
            count += 1
        day += timedelta(days=1)
    return count


class TestWorkingDays:
    """Test weekday counts over inclusive windows."""

    def test_one_week(self):
        # Monday to Sunday
        assert get_working_days(date(2024, 1, 1), date(2024, 1, 7)) == 5

    def test_first_quarter_2024(self):
        assert get_working_days(date(2024, 1, 1), date(2024, 3, 31)) == 65

    def test_february_2023(self):
        assert get_working_days(date(2023, 2, 1), date(2023, 2, 28)) == 20

    def test_single_days(self):
        assert get_working_days(date(2024, 1, 6), date(2024, 1, 6)) == 0
        assert get_working_days(date(2024, 1, 8), date(2024, 1, 8)) == 1

    def test_missing_bounds(self):
        assert get_working_days(None, date(2024, 1, 1)) == 0
        assert get_working_days(date(2024, 1, 1), None) == 0

    def test_reversed_window(self):
        assert get_working_days(date(2024, 1, 7), date(2024, 1, 1)) == 0

    def test_time_of_day_ignored(self):
        start = datetime(2024, 1, 1, 23, 0)
        end = datetime(2024, 1, 2, 1, 0)

        assert get_working_days(start, end) == 2

    @pytest.mark.parametrize("offset", range(7))
    def test_matches_day_by_day_count(self, offset):
        start = date(2024, 1, 1) + timedelta(days=offset)
        for length in range(0, 40):
            end = start + timedelta(days=length)
            assert get_working_days(start, end) == naive_count(start, end)


def test_is_working_day():
    assert is_working_day(date(2024, 3, 15)) is True
    assert is_working_day(datetime(2024, 3, 16, 10, 0)) is False
    assert is_working_day(date(2024, 3, 17)) is False
