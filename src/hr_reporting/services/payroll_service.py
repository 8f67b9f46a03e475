"""Payroll records: listing, adjustments, payments and monthly generation."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hr_reporting.models import AttendanceStatus, Employee, PayrollRecord
from hr_reporting.reporting.buckets import shift_month
from hr_reporting.reporting.date_range import DateRange, month_range
from hr_reporting.reporting.working_days import get_working_days
from hr_reporting.services.state_machine import PayrollStateMachine, PayrollStatus
from hr_reporting.stores import AttendanceStore, EmployeeStore, PayrollStore

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
BONUS_RATE = Decimal("0.20")
TAX_RATE = Decimal("0.05")
LATE_PENALTY = Decimal("0.5")
# Bonus needs more valid days than the month's working days minus this
BONUS_SLACK_DAYS = 2

ADJUSTMENT_FIELDS = ("deductions", "bonus", "tax")
PAYMENT_FIELDS = ("payment_method", "payment_reference", "payment_date", "notes")


class PayrollNotFoundError(Exception):
    """Raised when a payroll record does not exist."""

    def __init__(self, payroll_id: UUID | None = None, employee_id: UUID | None = None):
        self.payroll_id = payroll_id
        self.employee_id = employee_id
        super().__init__("Payroll not found")


class PaymentValidationError(Exception):
    """Raised when payment details are missing or invalid."""


def _money(value: Decimal | float | int) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def compute_payroll_amounts(
    base_salary: Decimal,
    working_days: int,
    present: int,
    absent: int,
    late: int,
    sick: int,
    leave: int,
) -> dict[str, Decimal]:
    """Derive deductions, bonus, tax and total from a month of attendance.

    Absent days (including days without any record) cost a full day's pay,
    late days half a day's pay. Staff with more valid days (present, sick or
    leave) than the working days minus two get a 20% bonus. Tax is 5% of the
    base salary.
    """
    base = Decimal(base_salary)
    if working_days > 0:
        daily = base / working_days
        deductions = daily * absent + LATE_PENALTY * daily * late
    else:
        deductions = Decimal("0")

    valid_days = present + sick + leave
    bonus = base * BONUS_RATE if valid_days > working_days - BONUS_SLACK_DAYS else Decimal("0")
    tax = base * TAX_RATE

    deductions, bonus, tax = _money(deductions), _money(bonus), _money(tax)
    return {
        "deductions": deductions,
        "bonus": bonus,
        "tax": tax,
        "total_amount": _money(base - deductions + bonus - tax),
    }


class PayrollService:
    """Manages monthly payroll records.

    ``total_amount`` is recomputed whenever deductions, bonus or tax change.
    Payment status moves between unpaid and paid; reverting a payment clears
    its details.
    """

    def __init__(
        self,
        session: AsyncSession,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.session = session
        self.clock = clock
        self.payroll = PayrollStore(session)
        self.employees = EmployeeStore(session)
        self.attendance = AttendanceStore(session)

    async def list_for_period(self, month: int, year: int) -> list[PayrollRecord]:
        """Payroll of every employee for a month."""
        return await self.payroll.find_payroll(month=month, year=year)

    async def list_for_employee(self, employee_id: UUID) -> list[PayrollRecord]:
        """Payroll history of an employee.

        Raises:
            PayrollNotFoundError: If the employee has no payroll at all
        """
        records = await self.payroll.find_payroll(employee_id=employee_id)
        if not records:
            raise PayrollNotFoundError(employee_id=employee_id)
        return records

    async def get_payroll(self, payroll_id: UUID) -> PayrollRecord:
        """Get one payroll record.

        Raises:
            PayrollNotFoundError: If no such record exists
        """
        record = await self.payroll.get(payroll_id)
        if record is None:
            raise PayrollNotFoundError(payroll_id=payroll_id)
        return record

    async def update_payroll(
        self, payroll_id: UUID, changes: dict[str, Any]
    ) -> PayrollRecord:
        """Apply adjustments and payment details to a payroll record."""
        record = await self.get_payroll(payroll_id)

        adjusted = False
        for field in ADJUSTMENT_FIELDS:
            if changes.get(field) is not None:
                setattr(record, field, _money(changes[field]))
                adjusted = True

        if changes.get("payment_method") is not None:
            _validate_method(changes["payment_method"])
        for field in PAYMENT_FIELDS:
            if field in changes:
                setattr(record, field, changes[field])

        if adjusted:
            record.recompute_total(record.employee.base_salary)
        record.updated_at = self.clock()

        await self.session.flush()
        return record

    async def process_payment(
        self,
        payroll_id: UUID,
        status: str | None = None,
        payment_method: str | None = None,
        payment_reference: str | None = None,
        payment_date: datetime | None = None,
        notes: str | None = None,
    ) -> PayrollRecord:
        """Mark a payroll paid or unpaid, or amend its payment details.

        Raises:
            PayrollNotFoundError: If no such record exists
            InvalidTransitionError: If the status change is not allowed
            PaymentValidationError: If a payment lacks method or date
        """
        record = await self.get_payroll(payroll_id)

        if status is not None and status not in {s.value for s in PayrollStatus}:
            raise PaymentValidationError(f"Invalid status value '{status}'")
        if status is not None and status != record.status:
            PayrollStateMachine.validate_transition(record.status, status)

        if status == PayrollStatus.UNPAID.value:
            record.status = status
            record.payment_method = None
            record.payment_reference = None
            record.payment_date = None
            record.notes = None
        else:
            if payment_method:
                _validate_method(payment_method)
                record.payment_method = payment_method
            if payment_reference:
                record.payment_reference = payment_reference
            if payment_date:
                record.payment_date = payment_date
            if notes:
                record.notes = notes
            if status == PayrollStatus.PAID.value:
                if not record.payment_method or record.payment_date is None:
                    raise PaymentValidationError(
                        "Payment method and payment date are required to mark as paid"
                    )
                record.status = status

        record.updated_at = self.clock()
        await self.session.flush()
        return record

    async def generate_monthly_payroll(
        self, as_of: datetime | None = None
    ) -> list[PayrollRecord]:
        """Create this month's payroll from last month's attendance.

        Employees that already have a record for the month are left alone.
        Returns the records created.
        """
        now = as_of or self.clock()
        prev_year, prev_month = shift_month(now.year, now.month, -1)
        window = month_range(prev_year, prev_month)
        working_days = get_working_days(window.start, window.end)

        created = []
        for employee in await self.employees.find_employees_by_role("employee"):
            existing = await self.payroll.find_for_employee_period(
                employee.employee_id, now.month, now.year
            )
            if existing is not None:
                continue

            record = await self._build_record(employee, now, window, working_days)
            created.append(await self.payroll.add(record))

        logger.info(
            "Generated %d payroll record(s) for %d-%02d from %d-%02d attendance",
            len(created),
            now.year,
            now.month,
            prev_year,
            prev_month,
        )
        return created

    async def _build_record(
        self,
        employee: Employee,
        now: datetime,
        window: DateRange,
        working_days: int,
    ) -> PayrollRecord:
        records = await self.attendance.find_attendance_in_range(
            employee.employee_id, window.start, window.end
        )
        counts = {status.value: 0 for status in AttendanceStatus}
        for record in records:
            counts[record.status] = counts.get(record.status, 0) + 1
        missing = working_days - len(records)

        amounts = compute_payroll_amounts(
            employee.base_salary,
            working_days,
            present=counts[AttendanceStatus.PRESENT.value],
            absent=counts[AttendanceStatus.ABSENT.value] + missing,
            late=counts[AttendanceStatus.LATE.value],
            sick=counts[AttendanceStatus.SICK.value],
            leave=counts[AttendanceStatus.LEAVE.value],
        )
        return PayrollRecord(
            employee_id=employee.employee_id,
            month=now.month,
            year=now.year,
            status=PayrollStatus.UNPAID.value,
            created_at=now,
            updated_at=now,
            **amounts,
        )


def _validate_method(method: str) -> None:
    if method not in PayrollStateMachine.PAYMENT_METHODS:
        raise PaymentValidationError(
            f"Invalid payment method '{method}', expected one of "
            f"{sorted(PayrollStateMachine.PAYMENT_METHODS)}"
        )
