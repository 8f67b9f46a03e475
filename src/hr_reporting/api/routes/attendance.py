"""Attendance API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query, status

from hr_reporting.api.dependencies import (
    AdminUser,
    AttendanceStatsSvc,
    AttendanceSvc,
    CurrentUser,
    Selector,
)
from hr_reporting.api.schemas import (
    AdminAttendanceCreate,
    AggregateStats,
    AggregateStatsResponse,
    AttendanceCreate,
    AttendanceDetailResponse,
    AttendanceResponse,
    AttendanceTrendItem,
    AttendanceTrendResponse,
    AttendanceUpdate,
    DepartmentStatsItem,
    DepartmentStatsResponse,
    EmployeeStatsResponse,
    EmployeeStatsRow,
    ErrorResponse,
    PerformanceItem,
    PerformanceResponse,
)
from hr_reporting.services.access import require_owner_or_admin

router = APIRouter(prefix="/attendance", tags=["attendance"])


# ============================================================================
# Attendance records
# ============================================================================


@router.post(
    "",
    response_model=AttendanceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def submit_attendance(
    service: AttendanceSvc,
    caller: CurrentUser,
    payload: AttendanceCreate,
) -> AttendanceResponse:
    """Record the caller's attendance for today."""
    record = await service.submit_attendance(caller.user_id, payload.status, payload.note)
    return AttendanceResponse.model_validate(record)


@router.get("", response_model=list[AttendanceResponse])
async def list_my_attendance(
    service: AttendanceSvc,
    caller: CurrentUser,
) -> list[AttendanceResponse]:
    """The caller's 30 most recent records."""
    records = await service.list_recent(caller.user_id)
    return [AttendanceResponse.model_validate(r) for r in records]


@router.get("/all", response_model=list[AttendanceDetailResponse])
async def list_all_attendance(
    service: AttendanceSvc,
    admin: AdminUser,
) -> list[AttendanceDetailResponse]:
    """Every record with its employee, newest first."""
    records = await service.list_all()
    return [AttendanceDetailResponse.model_validate(r) for r in records]


@router.post(
    "/admin",
    response_model=AttendanceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def record_attendance(
    service: AttendanceSvc,
    admin: AdminUser,
    payload: AdminAttendanceCreate,
) -> AttendanceResponse:
    """Record attendance for any employee and day."""
    record = await service.record_attendance(
        payload.employee_id, payload.date, payload.status, payload.note
    )
    return AttendanceResponse.model_validate(record)


# ============================================================================
# Attendance reports
# ============================================================================


@router.get("/trend", response_model=AttendanceTrendResponse)
async def attendance_trend(
    service: AttendanceStatsSvc,
    admin: AdminUser,
    selector: Selector,
) -> AttendanceTrendResponse:
    """Monthly attendance rates."""
    points = await service.attendance_trend(selector)
    return AttendanceTrendResponse(
        trend=[AttendanceTrendItem.model_validate(p) for p in points]
    )


@router.get(
    "/stats/employee/{employee_id}",
    response_model=EmployeeStatsResponse,
    responses={403: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def employee_attendance_stats(
    service: AttendanceStatsSvc,
    caller: CurrentUser,
    selector: Selector,
    employee_id: Annotated[UUID, Path()],
) -> EmployeeStatsResponse:
    """Attendance tallies of one employee."""
    require_owner_or_admin(
        caller, employee_id, "Not authorized to view these attendance statistics"
    )
    stats = await service.employee_stats(employee_id, selector)
    return EmployeeStatsResponse.model_validate(stats)


@router.get("/stats/all", response_model=AggregateStatsResponse)
async def all_attendance_stats(
    service: AttendanceStatsSvc,
    admin: AdminUser,
    selector: Selector,
) -> AggregateStatsResponse:
    """Organization-wide attendance with per-employee lines."""
    report = await service.compute_all_employee_stats(selector)
    rows = []
    for row in report.stats:
        stats = EmployeeStatsResponse.model_validate(row.stats)
        rows.append(
            EmployeeStatsRow(
                employee_id=row.employee_id,
                name=row.name,
                department=row.department,
                position=row.position,
                **stats.model_dump(),
            )
        )
    return AggregateStatsResponse(
        total_employees=report.total_employees,
        aggregate_stats=AggregateStats.model_validate(report.aggregate_stats),
        stats=rows,
    )


@router.get("/stats/department", response_model=DepartmentStatsResponse)
async def department_attendance_stats(
    service: AttendanceStatsSvc,
    admin: AdminUser,
    selector: Selector,
) -> DepartmentStatsResponse:
    """Attendance and turnover per department."""
    departments = await service.compute_department_stats(selector)
    return DepartmentStatsResponse(
        count=len(departments),
        stats=[DepartmentStatsItem.model_validate(d) for d in departments],
    )


@router.get("/stats/employee-performance", response_model=PerformanceResponse)
async def employee_performance(
    service: AttendanceStatsSvc,
    admin: AdminUser,
    selector: Selector,
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> PerformanceResponse:
    """Best and worst attendance rates."""
    ranking = await service.rank_performance(selector, limit)
    return PerformanceResponse(
        top_performers=[PerformanceItem.model_validate(e) for e in ranking.top_performers],
        attendance_concerns=[
            PerformanceItem.model_validate(e) for e in ranking.attendance_concerns
        ],
    )


@router.get("/employee/{employee_id}", response_model=list[AttendanceResponse])
async def list_employee_attendance(
    service: AttendanceSvc,
    admin: AdminUser,
    employee_id: Annotated[UUID, Path()],
    month: Annotated[int | None, Query(ge=1, le=12)] = None,
    year: Annotated[int | None, Query(ge=1900, le=9999)] = None,
) -> list[AttendanceResponse]:
    """Records of an employee in a month, a year, or all time."""
    records = await service.list_for_employee(employee_id, month, year)
    return [AttendanceResponse.model_validate(r) for r in records]


# ============================================================================
# Single record
# ============================================================================


@router.get(
    "/{attendance_id}",
    response_model=AttendanceResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_attendance(
    service: AttendanceSvc,
    caller: CurrentUser,
    attendance_id: Annotated[UUID, Path()],
) -> AttendanceResponse:
    """Get one attendance record."""
    record = await service.get_attendance(attendance_id)
    return AttendanceResponse.model_validate(record)


@router.put(
    "/{attendance_id}",
    response_model=AttendanceResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def update_attendance(
    service: AttendanceSvc,
    caller: CurrentUser,
    attendance_id: Annotated[UUID, Path()],
    payload: AttendanceUpdate,
) -> AttendanceResponse:
    """Change status or note of a record."""
    record = await service.update_attendance(
        attendance_id, caller, payload.model_dump(exclude_unset=True)
    )
    return AttendanceResponse.model_validate(record)
