"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator, Callable
from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from hr_reporting.config import Settings, get_settings
from hr_reporting.database import get_session
from hr_reporting.reporting.date_range import DateSelector, InvalidPeriodError, parse_selector
from hr_reporting.services import (
    AttendanceService,
    AttendanceStatsService,
    Caller,
    PayrollService,
    PayrollStatsService,
    SubmissionService,
    SubmissionStatsService,
)
from hr_reporting.services.access import ROLES


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency; commits when the request succeeds."""
    async with get_session() as session:
        yield session


def get_clock() -> Callable[[], datetime]:
    """Source of the current local time."""
    return datetime.now


async def get_caller(
    x_user_id: Annotated[str | None, Header()] = None,
    x_user_role: Annotated[str | None, Header()] = None,
) -> Caller:
    """Extract the calling user from headers."""
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-ID header is required",
        )
    try:
        user_id = UUID(x_user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid X-User-ID format",
        )

    role = (x_user_role or "employee").lower()
    if role not in ROLES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid X-User-Role '{x_user_role}'",
        )
    return Caller(user_id=user_id, role=role)


async def get_admin(caller: Annotated[Caller, Depends(get_caller)]) -> Caller:
    """Require an admin caller."""
    if not caller.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized as admin",
        )
    return caller


async def get_selector(
    month: Annotated[int | None, Query(ge=1, le=12)] = None,
    year: Annotated[int | None, Query(ge=1900, le=9999)] = None,
    period: Annotated[str | None, Query()] = None,
) -> DateSelector | None:
    """Parse month/year/period query values into a report selector."""
    try:
        return parse_selector(month, year, period)
    except InvalidPeriodError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
Clock = Annotated[Callable[[], datetime], Depends(get_clock)]
AppSettings = Annotated[Settings, Depends(get_settings)]
CurrentUser = Annotated[Caller, Depends(get_caller)]
AdminUser = Annotated[Caller, Depends(get_admin)]
Selector = Annotated[DateSelector | None, Depends(get_selector)]


def get_attendance_service(
    db: DbSession, clock: Clock, settings: AppSettings
) -> AttendanceService:
    return AttendanceService(
        db,
        clock=clock,
        open_hour=settings.attendance_open_hour,
        close_hour=settings.attendance_close_hour,
    )


def get_attendance_stats_service(
    db: DbSession, clock: Clock, settings: AppSettings
) -> AttendanceStatsService:
    return AttendanceStatsService(db, clock=clock, ranking_limit=settings.ranking_limit)


def get_submission_service(db: DbSession, clock: Clock) -> SubmissionService:
    return SubmissionService(db, clock=clock)


def get_submission_stats_service(db: DbSession, clock: Clock) -> SubmissionStatsService:
    return SubmissionStatsService(db, clock=clock)


def get_payroll_service(db: DbSession, clock: Clock) -> PayrollService:
    return PayrollService(db, clock=clock)


def get_payroll_stats_service(db: DbSession, clock: Clock) -> PayrollStatsService:
    return PayrollStatsService(db, clock=clock)


AttendanceSvc = Annotated[AttendanceService, Depends(get_attendance_service)]
AttendanceStatsSvc = Annotated[AttendanceStatsService, Depends(get_attendance_stats_service)]
SubmissionSvc = Annotated[SubmissionService, Depends(get_submission_service)]
SubmissionStatsSvc = Annotated[SubmissionStatsService, Depends(get_submission_stats_service)]
PayrollSvc = Annotated[PayrollService, Depends(get_payroll_service)]
PayrollStatsSvc = Annotated[PayrollStatsService, Depends(get_payroll_stats_service)]
