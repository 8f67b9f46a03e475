"""Business logic services."""

from hr_reporting.services.access import Caller, NotAuthorizedError
from hr_reporting.services.attendance_service import (
    AttendanceNotFoundError,
    AttendanceService,
    AttendanceValidationError,
    AttendanceWindowError,
    DuplicateAttendanceError,
)
from hr_reporting.services.attendance_stats import AttendanceStatsService
from hr_reporting.services.payroll_service import (
    PaymentValidationError,
    PayrollNotFoundError,
    PayrollService,
)
from hr_reporting.services.payroll_stats import PayrollStatsService
from hr_reporting.services.state_machine import (
    InvalidTransitionError,
    PayrollStateMachine,
    PayrollStatus,
    SubmissionStateMachine,
    SubmissionStatus,
)
from hr_reporting.services.submission_service import (
    SubmissionNotFoundError,
    SubmissionService,
    SubmissionValidationError,
)
from hr_reporting.services.submission_stats import SubmissionStatsService

__all__ = [
    "AttendanceNotFoundError",
    "AttendanceService",
    "AttendanceStatsService",
    "AttendanceValidationError",
    "AttendanceWindowError",
    "Caller",
    "DuplicateAttendanceError",
    "InvalidTransitionError",
    "NotAuthorizedError",
    "PaymentValidationError",
    "PayrollNotFoundError",
    "PayrollService",
    "PayrollStateMachine",
    "PayrollStatsService",
    "PayrollStatus",
    "SubmissionNotFoundError",
    "SubmissionService",
    "SubmissionStateMachine",
    "SubmissionStatsService",
    "SubmissionStatus",
    "SubmissionValidationError",
]
