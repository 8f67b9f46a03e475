"""Pydantic schemas for API request/response models.

Wire names are camelCase; Python attributes stay snake_case.
"""

from datetime import date, datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

AttendanceStatusValue = Literal["present", "absent", "leave", "late", "sick", "weekend"]
SubmissionTypeValue = Literal["leave", "resignation"]
SubmissionStatusValue = Literal["pending", "approved", "rejected"]
PaymentMethodValue = Literal["bank", "cash", "check"]


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str
    code: str | None = None
    context: dict[str, Any] | None = None


class EmployeeSummary(CamelModel):
    """Employee fields embedded in other records."""

    employee_id: UUID
    name: str
    email: str
    department: str | None = None
    position: str | None = None
    base_salary: float


# ============================================================================
# Attendance schemas
# ============================================================================


class AttendanceCreate(CamelModel):
    """Self-service attendance for today."""

    status: AttendanceStatusValue
    note: str | None = Field(default=None, max_length=500)


class AdminAttendanceCreate(CamelModel):
    """Attendance entered by an admin for any employee and day."""

    employee_id: UUID
    date: date
    status: AttendanceStatusValue
    note: str | None = Field(default=None, max_length=500)


class AttendanceUpdate(CamelModel):
    """Attendance changes; omitted fields are kept."""

    status: AttendanceStatusValue | None = None
    note: str | None = Field(default=None, max_length=500)


class AttendanceResponse(CamelModel):
    """Schema for attendance record response."""

    attendance_id: UUID
    employee_id: UUID
    date: datetime
    status: str
    note: str | None = None
    created_at: datetime
    updated_at: datetime


class AttendanceDetailResponse(AttendanceResponse):
    """Attendance record with its employee."""

    employee: EmployeeSummary


# ============================================================================
# Attendance statistics schemas
# ============================================================================


class EmployeeStatsResponse(CamelModel):
    """Attendance tallies for one employee."""

    present: int
    absent: int
    leave: int
    late: int
    sick: int
    days_worked: int
    total_work_days: int
    attendance_rate: str


class EmployeeStatsRow(EmployeeStatsResponse):
    """Per-employee line of the organization report."""

    employee_id: UUID
    name: str
    department: str | None = None
    position: str | None = None


class AggregateStats(CamelModel):
    """Organization-wide rates."""

    total_work_days: int
    present_rate: str
    absence_rate: str
    leave_rate: str
    late_rate: str
    sick_rate: str
    avg_attendance_rate: str
    avg_days_worked_per_employee: str


class AggregateStatsResponse(CamelModel):
    """Organization attendance report."""

    total_employees: int
    aggregate_stats: AggregateStats
    stats: list[EmployeeStatsRow]


class AttendanceBreakdown(CamelModel):
    """Share of working days per category."""

    present: str
    late: str
    leave: str
    sick: str
    absent: str


class DepartmentStatsItem(CamelModel):
    """Figures for one department."""

    department: str
    employees: int
    attendance_rate: str
    turnover_rate: str
    leave_requests: int
    resignations: int
    attendance_breakdown: AttendanceBreakdown


class DepartmentStatsResponse(CamelModel):
    """Per-department report."""

    count: int
    stats: list[DepartmentStatsItem]


class PerformanceItem(CamelModel):
    """One employee in a ranking."""

    employee_id: UUID
    name: str
    department: str | None = None
    position: str | None = None
    attendance_rate: float


class PerformanceResponse(CamelModel):
    """Best and worst attendance."""

    top_performers: list[PerformanceItem]
    attendance_concerns: list[PerformanceItem]


class AttendanceTrendItem(CamelModel):
    """Attendance rates for one month."""

    year: int
    month: int
    present_rate: float
    absence_rate: float
    leave_rate: float
    late_rate: float
    sick_rate: float


class AttendanceTrendResponse(CamelModel):
    """Monthly attendance series."""

    trend: list[AttendanceTrendItem]


# ============================================================================
# Submission schemas
# ============================================================================


class SubmissionCreate(CamelModel):
    """Schema for filing a submission."""

    type: SubmissionTypeValue
    reason: str = Field(min_length=1)
    start_date: datetime | None = None
    end_date: datetime | None = None
    file_url: str | None = None


class SubmissionStatusUpdate(CamelModel):
    """Review decision."""

    status: SubmissionStatusValue
    admin_notes: str | None = None


class SubmissionResponse(CamelModel):
    """Schema for submission response."""

    submission_id: UUID
    employee_id: UUID
    type: str
    reason: str
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: str
    file_url: str | None = None
    admin_notes: str
    created_at: datetime
    updated_at: datetime


class SubmissionDetailResponse(SubmissionResponse):
    """Submission with its employee."""

    employee: EmployeeSummary


class StatusCountsModel(CamelModel):
    """Submission counts by status."""

    pending: int
    approved: int
    rejected: int
    total: int


class SubmissionStatsResponse(CamelModel):
    """Submission counts by type and status."""

    leave: StatusCountsModel
    resignation: StatusCountsModel
    total: StatusCountsModel


class StatusTrendCounts(StatusCountsModel):
    """Counts with whole-number shares of the type's total."""

    pending_rate: int
    approved_rate: int
    rejected_rate: int


class SubmissionTrendItem(CamelModel):
    """Submission counts for one month."""

    year: int
    month: int
    total: int
    leave: StatusTrendCounts
    resignation: StatusTrendCounts


class SubmissionTrendResponse(CamelModel):
    """Monthly submission series."""

    trend: list[SubmissionTrendItem]


# ============================================================================
# Payroll schemas
# ============================================================================


class PayrollResponse(CamelModel):
    """Schema for payroll record response."""

    payroll_id: UUID
    employee_id: UUID
    month: int
    year: int
    deductions: float
    bonus: float
    tax: float
    total_amount: float
    status: str
    payment_method: str | None = None
    payment_reference: str | None = None
    payment_date: datetime | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime
    employee: EmployeeSummary


class PayrollUpdate(CamelModel):
    """Adjustments and payment details; omitted fields are kept."""

    deductions: float | None = Field(default=None, ge=0)
    bonus: float | None = Field(default=None, ge=0)
    tax: float | None = Field(default=None, ge=0)
    payment_method: PaymentMethodValue | None = None
    payment_reference: str | None = None
    payment_date: datetime | None = None
    notes: str | None = None


class PaymentRequest(CamelModel):
    """Payment status change or payment details."""

    status: Literal["paid", "unpaid"] | None = None
    payment_method: PaymentMethodValue | None = None
    payment_reference: str | None = None
    payment_date: datetime | None = None
    notes: str | None = None


class PaymentResponse(CamelModel):
    """Result of a payment update."""

    message: str
    payroll: PayrollResponse


class PayrollTotals(CamelModel):
    """Summed payroll amounts."""

    base_salary: float
    deductions: float
    bonus: float
    tax: float
    total_amount: float


class PayrollStatsResponse(CamelModel):
    """Payroll summary."""

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


class PayrollTrendItem(CamelModel):
    """Payroll sums for one month."""

    year: int
    month: int
    total_payroll: float
    total_base_salary: float
    total_bonus: float
    total_deductions: float
    total_tax: float
    count: int


class PayrollTrendResponse(CamelModel):
    """Monthly payroll series."""

    trend: list[PayrollTrendItem]
