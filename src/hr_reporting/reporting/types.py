"""Type definitions for report results."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Generic, TypeVar
from uuid import UUID

from hr_reporting.reporting.rates import format_rate, pct

T = TypeVar("T")


@dataclass(frozen=True)
class EmployeeAttendanceStats:
    """Attendance tallies for one employee over one window."""

    present: int = 0
    absent: int = 0
    leave: int = 0
    late: int = 0
    sick: int = 0
    days_worked: int = 0
    total_work_days: int = 0

    @property
    def attendance_rate(self) -> str:
        """(present + late) / total_work_days as a 2-decimal percent string."""
        return format_rate(self.present + self.late, self.total_work_days)

    @property
    def missing_days(self) -> int:
        """Working days without any record."""
        return self.total_work_days - self.days_worked

    def with_implicit_absences(self) -> EmployeeAttendanceStats:
        """Count every working day without a record as an absence."""
        return replace(self, absent=self.absent + self.missing_days)


@dataclass
class AttendanceTotals:
    """Running sums of attendance tallies across employees."""

    present: int = 0
    absent: int = 0
    leave: int = 0
    late: int = 0
    sick: int = 0
    days_worked: int = 0
    total_work_days: int = 0

    def add(self, stats: EmployeeAttendanceStats) -> None:
        """Add one employee's tallies."""
        self.present += stats.present
        self.absent += stats.absent
        self.leave += stats.leave
        self.late += stats.late
        self.sick += stats.sick
        self.days_worked += stats.days_worked
        self.total_work_days += stats.total_work_days


@dataclass
class EmployeeOutcome(Generic[T]):
    """Result of computing something for one employee: a value or an error."""

    employee_id: UUID
    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def partition_outcomes(
    outcomes: list[EmployeeOutcome[T]],
) -> tuple[list[EmployeeOutcome[T]], list[EmployeeOutcome[T]]]:
    """Split outcomes into (successes, failures), keeping input order."""
    successes = [o for o in outcomes if o.ok]
    failures = [o for o in outcomes if not o.ok]
    return successes, failures


@dataclass(frozen=True)
class EmployeeReportRow:
    """Per-employee line of the organization attendance report."""

    employee_id: UUID
    name: str
    department: str | None
    position: str | None
    stats: EmployeeAttendanceStats


@dataclass(frozen=True)
class AggregateAttendanceStats:
    """Organization-wide attendance rates."""

    total_work_days: int
    present_rate: str
    absence_rate: str
    leave_rate: str
    late_rate: str
    sick_rate: str
    avg_attendance_rate: str
    avg_days_worked_per_employee: str


@dataclass(frozen=True)
class AggregateAttendanceReport:
    """Organization attendance report."""

    total_employees: int
    aggregate_stats: AggregateAttendanceStats
    stats: list[EmployeeReportRow] = field(default_factory=list)


@dataclass(frozen=True)
class AttendanceBreakdown:
    """Share of working days per attendance category, in percent."""

    present: str
    late: str
    leave: str
    sick: str
    absent: str


@dataclass(frozen=True)
class DepartmentStats:
    """Attendance and turnover figures for one department."""

    department: str
    employees: int
    attendance_rate: str
    turnover_rate: str
    leave_requests: int
    resignations: int
    attendance_breakdown: AttendanceBreakdown


@dataclass(frozen=True)
class PerformanceEntry:
    """One employee in a performance ranking."""

    employee_id: UUID
    name: str
    department: str | None
    position: str | None
    attendance_rate: float


@dataclass(frozen=True)
class PerformanceRanking:
    """Best and worst attendance rates."""

    top_performers: list[PerformanceEntry]
    attendance_concerns: list[PerformanceEntry]


@dataclass(frozen=True)
class AttendanceTrendPoint:
    """Attendance rates for one month."""

    year: int
    month: int
    present_rate: float
    absence_rate: float
    leave_rate: float
    late_rate: float
    sick_rate: float


@dataclass(frozen=True)
class PayrollTrendPoint:
    """Payroll sums for one month."""

    year: int
    month: int
    total_payroll: float = 0.0
    total_base_salary: float = 0.0
    total_bonus: float = 0.0
    total_deductions: float = 0.0
    total_tax: float = 0.0
    count: int = 0


@dataclass(frozen=True)
class PayrollTotals:
    """Summed payroll amounts."""

    base_salary: float = 0.0
    deductions: float = 0.0
    bonus: float = 0.0
    tax: float = 0.0
    total_amount: float = 0.0


@dataclass(frozen=True)
class PayrollStats:
    """Payroll summary for a window."""

    count: int
    payroll_totals: PayrollTotals
    avg_base_salary: float
    avg_bonus: float
    avg_deductions: float
    avg_tax: float
    avg_total_amount: float
    highest_salary: float
    lowest_salary: float
    employees_with_bonus: int
    employees_with_deductions: int
    bonus_to_salary_ratio: float
    paid_count: int
    unpaid_count: int


@dataclass
class StatusCounts:
    """Submission counts by status."""

    pending: int = 0
    approved: int = 0
    rejected: int = 0

    @property
    def total(self) -> int:
        return self.pending + self.approved + self.rejected

    @property
    def pending_rate(self) -> int:
        return pct(self.pending, self.total)

    @property
    def approved_rate(self) -> int:
        return pct(self.approved, self.total)

    @property
    def rejected_rate(self) -> int:
        return pct(self.rejected, self.total)

    def add(self, status: str, count: int) -> None:
        """Add count submissions in status."""
        if status not in ("pending", "approved", "rejected"):
            raise ValueError(f"Unknown submission status '{status}'")
        setattr(self, status, getattr(self, status) + count)


@dataclass
class SubmissionStats:
    """Submission counts by type and status."""

    leave: StatusCounts = field(default_factory=StatusCounts)
    resignation: StatusCounts = field(default_factory=StatusCounts)

    @property
    def total(self) -> StatusCounts:
        return StatusCounts(
            pending=self.leave.pending + self.resignation.pending,
            approved=self.leave.approved + self.resignation.approved,
            rejected=self.leave.rejected + self.resignation.rejected,
        )

    def add(self, type_: str, status: str, count: int) -> None:
        """Add count submissions of a type in a status."""
        if type_ not in ("leave", "resignation"):
            raise ValueError(f"Unknown submission type '{type_}'")
        getattr(self, type_).add(status, count)


@dataclass(frozen=True)
class SubmissionTrendPoint:
    """Submission counts for one month."""

    year: int
    month: int
    stats: SubmissionStats
