"""Payroll API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Path, Query, status

from hr_reporting.api.dependencies import (
    AdminUser,
    CurrentUser,
    PayrollStatsSvc,
    PayrollSvc,
    Selector,
)
from hr_reporting.api.schemas import (
    ErrorResponse,
    PaymentRequest,
    PaymentResponse,
    PayrollResponse,
    PayrollStatsResponse,
    PayrollTrendItem,
    PayrollTrendResponse,
    PayrollUpdate,
)
from hr_reporting.services.access import require_owner_or_admin

router = APIRouter(prefix="/payroll", tags=["payroll"])


@router.get(
    "",
    response_model=list[PayrollResponse],
    responses={400: {"model": ErrorResponse}},
)
async def list_payroll(
    service: PayrollSvc,
    admin: AdminUser,
    month: Annotated[int | None, Query(ge=1, le=12)] = None,
    year: Annotated[int | None, Query(ge=1900, le=9999)] = None,
) -> list[PayrollResponse]:
    """Payroll of every employee for one month."""
    if month is None or year is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Month and year are required",
        )
    records = await service.list_for_period(month, year)
    return [PayrollResponse.model_validate(r) for r in records]


@router.get("/stats", response_model=PayrollStatsResponse)
async def payroll_stats(
    service: PayrollStatsSvc,
    admin: AdminUser,
    selector: Selector,
) -> PayrollStatsResponse:
    """Totals, averages and extremes of payroll."""
    stats = await service.payroll_stats(selector)
    return PayrollStatsResponse.model_validate(stats)


@router.get("/trend", response_model=PayrollTrendResponse)
async def payroll_trend(
    service: PayrollStatsSvc,
    admin: AdminUser,
    selector: Selector,
) -> PayrollTrendResponse:
    """Monthly payroll sums."""
    points = await service.payroll_trend(selector)
    return PayrollTrendResponse(trend=[PayrollTrendItem.model_validate(p) for p in points])


@router.get(
    "/employee/{employee_id}",
    response_model=list[PayrollResponse],
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def list_employee_payroll(
    service: PayrollSvc,
    caller: CurrentUser,
    employee_id: Annotated[UUID, Path()],
) -> list[PayrollResponse]:
    """Payroll history of an employee."""
    require_owner_or_admin(caller, employee_id, "Not authorized to view this payroll")
    records = await service.list_for_employee(employee_id)
    return [PayrollResponse.model_validate(r) for r in records]


@router.get(
    "/{payroll_id}",
    response_model=PayrollResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_payroll(
    service: PayrollSvc,
    caller: CurrentUser,
    payroll_id: Annotated[UUID, Path()],
) -> PayrollResponse:
    """Get one payroll record."""
    record = await service.get_payroll(payroll_id)
    require_owner_or_admin(caller, record.employee_id, "Not authorized to view this payroll")
    return PayrollResponse.model_validate(record)


@router.put(
    "/{payroll_id}",
    response_model=PayrollResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_payroll(
    service: PayrollSvc,
    admin: AdminUser,
    payroll_id: Annotated[UUID, Path()],
    payload: PayrollUpdate,
) -> PayrollResponse:
    """Adjust a payroll record; the total is recomputed."""
    record = await service.update_payroll(payroll_id, payload.model_dump(exclude_unset=True))
    return PayrollResponse.model_validate(record)


@router.patch(
    "/{payroll_id}/payment",
    response_model=PaymentResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def process_payment(
    service: PayrollSvc,
    admin: AdminUser,
    payroll_id: Annotated[UUID, Path()],
    payload: PaymentRequest,
) -> PaymentResponse:
    """Mark a payroll paid or unpaid, or amend payment details."""
    record = await service.process_payment(
        payroll_id,
        status=payload.status,
        payment_method=payload.payment_method,
        payment_reference=payload.payment_reference,
        payment_date=payload.payment_date,
        notes=payload.notes,
    )
    return PaymentResponse(
        message="Payroll record updated successfully",
        payroll=PayrollResponse.model_validate(record),
    )
