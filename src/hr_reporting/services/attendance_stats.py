"""Attendance statistics: per employee, organization, department, ranking, trend."""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime
from typing import Callable, Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hr_reporting.models import AttendanceStatus, Employee
from hr_reporting.reporting.buckets import plan_buckets
from hr_reporting.reporting.date_range import (
    AllTime,
    DateRange,
    DateRangeResolver,
    DateSelector,
    ReportingError,
    month_range,
    selector_month,
)
from hr_reporting.reporting.rates import format2, format_rate, percentage, round_whole
from hr_reporting.reporting.types import (
    AggregateAttendanceReport,
    AggregateAttendanceStats,
    AttendanceBreakdown,
    AttendanceTotals,
    AttendanceTrendPoint,
    DepartmentStats,
    EmployeeAttendanceStats,
    EmployeeOutcome,
    EmployeeReportRow,
    PerformanceEntry,
    PerformanceRanking,
    partition_outcomes,
)
from hr_reporting.reporting.working_days import get_working_days
from hr_reporting.stores import AttendanceStore, EmployeeStore, SubmissionStore

logger = logging.getLogger(__name__)

# Errors that skip one employee instead of failing a whole report
EMPLOYEE_ERRORS = (ReportingError, ValueError, TypeError)

DEFAULT_RANKING_LIMIT = 5


class AttendanceStatsService:
    """Computes attendance reports from attendance records.

    Reports:
    - employee_stats: tallies and rate for one employee
    - compute_all_employee_stats: organization aggregate with implicit absences
    - compute_department_stats: per-department breakdown and turnover
    - rank_performance: best and worst attendance rates
    - attendance_trend: monthly rate series

    Aggregate reports iterate employees one at a time. An employee whose
    stats cannot be computed is logged and left out; the report still
    completes for everybody else.
    """

    def __init__(
        self,
        session: AsyncSession,
        clock: Callable[[], datetime] = datetime.now,
        ranking_limit: int = DEFAULT_RANKING_LIMIT,
    ):
        self.session = session
        self.clock = clock
        self.ranking_limit = ranking_limit
        self.employees = EmployeeStore(session)
        self.attendance = AttendanceStore(session)
        self.submissions = SubmissionStore(session)
        self.resolver = DateRangeResolver(self.employees, clock)

    async def compute_employee_stats(
        self, employee_id: UUID, date_range: DateRange
    ) -> EmployeeAttendanceStats:
        """Tally the records an employee created inside a window."""
        records = await self.attendance.find_attendance_in_range(
            employee_id, date_range.start, date_range.end
        )
        counts = Counter(record.status for record in records)

        return EmployeeAttendanceStats(
            present=counts[AttendanceStatus.PRESENT.value],
            absent=counts[AttendanceStatus.ABSENT.value],
            leave=counts[AttendanceStatus.LEAVE.value],
            late=counts[AttendanceStatus.LATE.value],
            sick=counts[AttendanceStatus.SICK.value],
            days_worked=len(records),
            total_work_days=get_working_days(date_range.start, date_range.end),
        )

    async def employee_stats(
        self, employee_id: UUID, selector: DateSelector | None
    ) -> EmployeeAttendanceStats:
        """Stats of one employee for a selector.

        Raises:
            EmployeeNotFoundError: If the employee or their join date is missing
        """
        date_range = await self.resolver.resolve(employee_id, selector)
        return await self.compute_employee_stats(employee_id, date_range)

    async def compute_all_employee_stats(
        self, selector: DateSelector | None
    ) -> AggregateAttendanceReport:
        """Organization-wide attendance over active employees.

        Working days without any record count as absences here.
        """
        employees = await self.employees.find_employees_by_role("employee")
        successes = await self._collect(employees, selector, implicit_absences=True)
        by_id = {employee.employee_id: employee for employee in employees}

        totals = AttendanceTotals()
        rows: list[EmployeeReportRow] = []
        for outcome in successes:
            employee = by_id[outcome.employee_id]
            totals.add(outcome.value)
            rows.append(
                EmployeeReportRow(
                    employee_id=employee.employee_id,
                    name=employee.name,
                    department=employee.department,
                    position=employee.position,
                    stats=outcome.value,
                )
            )

        count = len(rows)
        if count:
            avg_rate = format2(
                sum(float(row.stats.attendance_rate) for row in rows) / count
            )
            avg_days = str(round_whole(totals.days_worked / count))
        else:
            avg_rate = "0.00"
            avg_days = "0"

        twd = totals.total_work_days
        return AggregateAttendanceReport(
            total_employees=count,
            aggregate_stats=AggregateAttendanceStats(
                total_work_days=twd,
                present_rate=format_rate(totals.present, twd),
                absence_rate=format_rate(totals.absent, twd),
                leave_rate=format_rate(totals.leave, twd),
                late_rate=format_rate(totals.late, twd),
                sick_rate=format_rate(totals.sick, twd),
                avg_attendance_rate=avg_rate,
                avg_days_worked_per_employee=avg_days,
            ),
            stats=rows,
        )

    async def compute_department_stats(
        self, selector: DateSelector | None
    ) -> list[DepartmentStats]:
        """Attendance and turnover per department.

        Leave and resignation counts always use the calendar month the
        selector points at (the current month when it names none), not the
        per-employee window used for attendance. They cover every member of
        the department, so staff deactivated by an approved resignation
        still count toward turnover.
        """
        year, month = selector_month(selector, self.clock())
        window = month_range(year, month)

        results = []
        for department in await self.employees.distinct_departments():
            employees = await self.employees.find_employees_by_department(department)
            successes = await self._collect(employees, selector, implicit_absences=True)

            totals = AttendanceTotals()
            for outcome in successes:
                totals.add(outcome.value)

            members = await self.employees.find_employees_by_department(
                department, status=None
            )
            employee_ids = [member.employee_id for member in members]
            leave_requests = await self.submissions.count_submissions(
                type="leave",
                employee_ids=employee_ids,
                start=window.start,
                end=window.end,
            )
            resignations = await self.submissions.count_submissions(
                type="resignation",
                employee_ids=employee_ids,
                start=window.start,
                end=window.end,
            )

            twd = totals.total_work_days
            results.append(
                DepartmentStats(
                    department=department,
                    employees=len(successes),
                    attendance_rate=format_rate(totals.present + totals.late, twd),
                    turnover_rate=format_rate(resignations, len(successes)),
                    leave_requests=leave_requests,
                    resignations=resignations,
                    attendance_breakdown=AttendanceBreakdown(
                        present=format_rate(totals.present, twd),
                        late=format_rate(totals.late, twd),
                        leave=format_rate(totals.leave, twd),
                        sick=format_rate(totals.sick, twd),
                        absent=format_rate(totals.absent, twd),
                    ),
                )
            )
        return results

    async def rank_performance(
        self, selector: DateSelector | None, limit: int | None = None
    ) -> PerformanceRanking:
        """Best and worst attendance rates among active employees.

        Rates here use recorded days only; missing days are not counted as
        absences. Equal rates keep directory order.
        """
        if limit is None:
            limit = self.ranking_limit

        employees = await self.employees.find_employees_by_role("employee")
        successes = await self._collect(employees, selector, implicit_absences=False)
        by_id = {employee.employee_id: employee for employee in employees}

        entries = []
        for outcome in successes:
            employee = by_id[outcome.employee_id]
            stats = outcome.value
            entries.append(
                PerformanceEntry(
                    employee_id=employee.employee_id,
                    name=employee.name,
                    department=employee.department,
                    position=employee.position,
                    attendance_rate=percentage(
                        stats.present + stats.late, stats.total_work_days
                    ),
                )
            )

        return PerformanceRanking(
            top_performers=sorted(
                entries, key=lambda e: e.attendance_rate, reverse=True
            )[:limit],
            attendance_concerns=sorted(entries, key=lambda e: e.attendance_rate)[:limit],
        )

    async def attendance_trend(
        self, selector: DateSelector | None
    ) -> list[AttendanceTrendPoint]:
        """Monthly attendance rates across active employees.

        Each employee contributes the working days between the later of the
        month start and their join date, and the earlier of the month end and
        now. Missing days count as absences.
        """
        now = self.clock()
        discovered: list[tuple[int, int]] = []
        if isinstance(selector, AllTime):
            discovered = await self.attendance.distinct_months()
        plan = plan_buckets(selector, now, discovered)

        employees = []
        for employee in await self.employees.find_employees_by_role("employee"):
            if employee.join_date is None:
                logger.warning(
                    "Skipping employee %s in attendance trend: no join date",
                    employee.employee_id,
                )
                continue
            employees.append(employee)

        points = []
        for bucket in plan.buckets:
            window = bucket.range
            totals = AttendanceTotals()
            records = 0

            for employee in employees:
                if employee.join_date > window.end:
                    continue
                start = max(window.start, employee.join_date)
                end = min(window.end, now)
                if end < start:
                    continue
                try:
                    stats = await self.compute_employee_stats(
                        employee.employee_id, DateRange(start=start, end=end)
                    )
                except EMPLOYEE_ERRORS:
                    logger.exception(
                        "Skipping employee %s in attendance trend for %d-%02d",
                        employee.employee_id,
                        bucket.year,
                        bucket.month,
                    )
                    continue
                records += stats.days_worked
                totals.add(stats.with_implicit_absences())

            if plan.drop_empty and records == 0:
                continue

            twd = totals.total_work_days
            points.append(
                AttendanceTrendPoint(
                    year=bucket.year,
                    month=bucket.month,
                    present_rate=percentage(totals.present, twd),
                    absence_rate=percentage(totals.absent, twd),
                    leave_rate=percentage(totals.leave, twd),
                    late_rate=percentage(totals.late, twd),
                    sick_rate=percentage(totals.sick, twd),
                )
            )
        return points

    async def _collect(
        self,
        employees: Iterable[Employee],
        selector: DateSelector | None,
        implicit_absences: bool,
    ) -> list[EmployeeOutcome[EmployeeAttendanceStats]]:
        """Compute stats per employee, returning only the successes."""
        outcomes: list[EmployeeOutcome[EmployeeAttendanceStats]] = []
        for employee in employees:
            try:
                date_range = self.resolver.resolve_for(employee, selector)
                stats = await self.compute_employee_stats(
                    employee.employee_id, date_range
                )
            except EMPLOYEE_ERRORS as exc:
                logger.exception(
                    "Skipping employee %s in attendance report", employee.employee_id
                )
                outcomes.append(EmployeeOutcome(employee.employee_id, error=exc))
                continue

            if implicit_absences:
                stats = stats.with_implicit_absences()
            outcomes.append(EmployeeOutcome(employee.employee_id, value=stats))

        successes, _ = partition_outcomes(outcomes)
        return successes
