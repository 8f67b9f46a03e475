"""API routes."""

from hr_reporting.api.routes.attendance import router as attendance_router
from hr_reporting.api.routes.health import router as health_router
from hr_reporting.api.routes.payroll import router as payroll_router
from hr_reporting.api.routes.submissions import router as submissions_router

__all__ = ["attendance_router", "health_router", "payroll_router", "submissions_router"]
