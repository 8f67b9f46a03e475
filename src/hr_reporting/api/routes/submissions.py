"""Submission API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query, status

from hr_reporting.api.dependencies import (
    AdminUser,
    CurrentUser,
    Selector,
    SubmissionStatsSvc,
    SubmissionSvc,
)
from hr_reporting.api.schemas import (
    ErrorResponse,
    StatusCountsModel,
    StatusTrendCounts,
    SubmissionCreate,
    SubmissionDetailResponse,
    SubmissionResponse,
    SubmissionStatsResponse,
    SubmissionStatusUpdate,
    SubmissionStatusValue,
    SubmissionTrendItem,
    SubmissionTrendResponse,
    SubmissionTypeValue,
)

router = APIRouter(prefix="/submissions", tags=["submissions"])


@router.post(
    "",
    response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_submission(
    service: SubmissionSvc,
    caller: CurrentUser,
    payload: SubmissionCreate,
) -> SubmissionResponse:
    """File a leave request or resignation."""
    submission = await service.create_submission(
        caller.user_id,
        type=payload.type,
        reason=payload.reason,
        start_date=payload.start_date,
        end_date=payload.end_date,
        file_url=payload.file_url,
    )
    return SubmissionResponse.model_validate(submission)


@router.get("", response_model=list[SubmissionDetailResponse])
async def list_submissions(
    service: SubmissionSvc,
    admin: AdminUser,
    type_filter: Annotated[SubmissionTypeValue | None, Query(alias="type")] = None,
    status_filter: Annotated[SubmissionStatusValue | None, Query(alias="status")] = None,
    employee_id: Annotated[UUID | None, Query(alias="employeeId")] = None,
) -> list[SubmissionDetailResponse]:
    """Every submission matching the filters, newest first."""
    submissions = await service.list_submissions(
        type=type_filter, status=status_filter, employee_id=employee_id
    )
    return [SubmissionDetailResponse.model_validate(s) for s in submissions]


@router.get("/employee", response_model=list[SubmissionDetailResponse])
async def list_my_submissions(
    service: SubmissionSvc,
    caller: CurrentUser,
) -> list[SubmissionDetailResponse]:
    """The caller's submissions, newest first."""
    submissions = await service.list_for_employee(caller.user_id)
    return [SubmissionDetailResponse.model_validate(s) for s in submissions]


@router.get("/stats", response_model=SubmissionStatsResponse)
async def submission_stats(
    service: SubmissionStatsSvc,
    admin: AdminUser,
    selector: Selector,
) -> SubmissionStatsResponse:
    """Counts by type and status."""
    stats = await service.submission_stats(selector)
    return SubmissionStatsResponse(
        leave=StatusCountsModel.model_validate(stats.leave),
        resignation=StatusCountsModel.model_validate(stats.resignation),
        total=StatusCountsModel.model_validate(stats.total),
    )


@router.get("/trend", response_model=SubmissionTrendResponse)
async def submission_trend(
    service: SubmissionStatsSvc,
    admin: AdminUser,
    selector: Selector,
) -> SubmissionTrendResponse:
    """Monthly counts by type and status."""
    points = await service.submission_trend(selector)
    return SubmissionTrendResponse(
        trend=[
            SubmissionTrendItem(
                year=p.year,
                month=p.month,
                total=p.stats.total.total,
                leave=StatusTrendCounts.model_validate(p.stats.leave),
                resignation=StatusTrendCounts.model_validate(p.stats.resignation),
            )
            for p in points
        ]
    )


@router.get(
    "/{submission_id}",
    response_model=SubmissionDetailResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_submission(
    service: SubmissionSvc,
    caller: CurrentUser,
    submission_id: Annotated[UUID, Path()],
) -> SubmissionDetailResponse:
    """Get one submission; owners and admins only."""
    submission = await service.get_submission(submission_id, caller)
    return SubmissionDetailResponse.model_validate(submission)


@router.put(
    "/{submission_id}",
    response_model=SubmissionDetailResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_submission_status(
    service: SubmissionSvc,
    admin: AdminUser,
    submission_id: Annotated[UUID, Path()],
    payload: SubmissionStatusUpdate,
) -> SubmissionDetailResponse:
    """Approve or reject a pending submission."""
    submission = await service.update_status(
        submission_id, payload.status, payload.admin_notes
    )
    return SubmissionDetailResponse.model_validate(submission)
