"""ORM models for the HR reporting service."""

from hr_reporting.models.attendance import AttendanceRecord, AttendanceStatus
from hr_reporting.models.base import Base, TimestampMixin, UpdatedAtMixin
from hr_reporting.models.employee import Employee
from hr_reporting.models.payroll import PayrollRecord
from hr_reporting.models.submission import SubmissionRecord, SubmissionType

__all__ = [
    "AttendanceRecord",
    "AttendanceStatus",
    "Base",
    "Employee",
    "PayrollRecord",
    "SubmissionRecord",
    "SubmissionType",
    "TimestampMixin",
    "UpdatedAtMixin",
]
