"""Data-store collaborators used by the services."""

from hr_reporting.stores.attendance import AttendanceStore
from hr_reporting.stores.employees import EmployeeStore
from hr_reporting.stores.payroll import PayrollMonthGroup, PayrollStore
from hr_reporting.stores.submissions import SubmissionGroup, SubmissionStore

__all__ = [
    "AttendanceStore",
    "EmployeeStore",
    "PayrollMonthGroup",
    "PayrollStore",
    "SubmissionGroup",
    "SubmissionStore",
]
