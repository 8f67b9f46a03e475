"""Tests for rounding helpers and report value types."""

from decimal import Decimal
from uuid import uuid4

import pytest

from hr_reporting.reporting.rates import (
    format2,
    format_rate,
    pct,
    percentage,
    round2,
    round_whole,
)
from hr_reporting.reporting.types import (
    EmployeeAttendanceStats,
    EmployeeOutcome,
    StatusCounts,
    SubmissionStats,
    partition_outcomes,
)


class TestRounding:
    """Test half-up rounding."""

    def test_round2_half_up(self):
        assert round2(2.675) == 2.68
        assert round2(Decimal("1.005")) == 1.01
        assert round2(3) == 3.0

    def test_format2(self):
        assert format2(75) == "75.00"
        assert format2(Decimal("1.005")) == "1.01"
        assert format2(33.333333) == "33.33"

    def test_round_whole(self):
        assert round_whole(2.5) == 3
        assert round_whole(2.49) == 2


class TestRates:
    """Test percentage helpers."""

    def test_format_rate(self):
        assert format_rate(15, 20) == "75.00"
        assert format_rate(1, 3) == "33.33"
        assert format_rate(2, 3) == "66.67"

    def test_format_rate_empty_total(self):
        assert format_rate(0, 0) == "0.00"
        assert format_rate(5, 0) == "0.00"

    def test_percentage(self):
        assert percentage(1, 3) == 33.33
        assert percentage(0, 0) == 0.0

    def test_pct(self):
        assert pct(0, 0) == 0
        assert pct(3, 4) == 75
        assert pct(1, 3) == 33
        assert pct(2, 3) == 67
        assert pct(1, 8) == 13


class TestEmployeeAttendanceStats:
    """Test per-employee tallies."""

    def test_attendance_rate_counts_late_as_attended(self):
        stats = EmployeeAttendanceStats(present=12, late=3, days_worked=15, total_work_days=20)

        assert stats.attendance_rate == "75.00"

    def test_implicit_absences(self):
        stats = EmployeeAttendanceStats(
            present=14, absent=1, days_worked=15, total_work_days=20
        )

        adjusted = stats.with_implicit_absences()

        assert adjusted.absent == 6
        assert adjusted.days_worked == 15
        assert stats.absent == 1

    def test_no_working_days(self):
        assert EmployeeAttendanceStats().attendance_rate == "0.00"


class TestSubmissionCounts:
    """Test submission status counters."""

    def test_rates(self):
        counts = StatusCounts(pending=1, approved=2, rejected=1)

        assert counts.total == 4
        assert counts.pending_rate == 25
        assert counts.approved_rate == 50
        assert counts.rejected_rate == 25

    def test_empty_rates(self):
        assert StatusCounts().approved_rate == 0

    def test_totals_across_types(self):
        stats = SubmissionStats()
        stats.add("leave", "pending", 2)
        stats.add("resignation", "approved", 1)
        stats.add("leave", "approved", 3)

        assert stats.total == StatusCounts(pending=2, approved=4, rejected=0)

    def test_unknown_values_rejected(self):
        stats = SubmissionStats()

        with pytest.raises(ValueError):
            stats.add("sabbatical", "pending", 1)
        with pytest.raises(ValueError):
            stats.add("leave", "withdrawn", 1)


def test_partition_outcomes_keeps_order():
    first, second, third = uuid4(), uuid4(), uuid4()
    outcomes = [
        EmployeeOutcome(first, value=1),
        EmployeeOutcome(second, error=ValueError("bad")),
        EmployeeOutcome(third, value=3),
    ]

    successes, failures = partition_outcomes(outcomes)

    assert [o.employee_id for o in successes] == [first, third]
    assert [o.employee_id for o in failures] == [second]
