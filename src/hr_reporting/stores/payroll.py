"""Payroll queries."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_reporting.models import Employee, PayrollRecord


@dataclass(frozen=True)
class PayrollMonthGroup:
    """Payroll sums of one (year, month)."""

    year: int
    month: int
    base_salary: Decimal
    bonus: Decimal
    deductions: Decimal
    tax: Decimal
    total_amount: Decimal
    count: int


class PayrollStore:
    """Queries over payroll records.

    Only payroll of directory entries with role ``employee`` is visible.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_payroll(
        self,
        month: int | None = None,
        year: int | None = None,
        employee_id: UUID | None = None,
        max_month: int | None = None,
    ) -> list[PayrollRecord]:
        """Payroll rows with their employees loaded."""
        query = (
            select(PayrollRecord)
            .join(Employee, PayrollRecord.employee_id == Employee.employee_id)
            .where(Employee.role == "employee")
            .options(selectinload(PayrollRecord.employee))
        )
        if month is not None:
            query = query.where(PayrollRecord.month == month)
        if year is not None:
            query = query.where(PayrollRecord.year == year)
        if max_month is not None:
            query = query.where(PayrollRecord.month <= max_month)
        if employee_id is not None:
            query = query.where(PayrollRecord.employee_id == employee_id)

        query = query.order_by(PayrollRecord.year, PayrollRecord.month, Employee.name)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def aggregate_payroll_by_month(
        self,
        year: int | None = None,
        max_month: int | None = None,
    ) -> list[PayrollMonthGroup]:
        """Payroll sums grouped by (year, month), oldest first."""
        query = (
            select(
                PayrollRecord.year,
                PayrollRecord.month,
                func.coalesce(func.sum(Employee.base_salary), 0),
                func.coalesce(func.sum(PayrollRecord.bonus), 0),
                func.coalesce(func.sum(PayrollRecord.deductions), 0),
                func.coalesce(func.sum(PayrollRecord.tax), 0),
                func.coalesce(func.sum(PayrollRecord.total_amount), 0),
                func.count(),
            )
            .join(Employee, PayrollRecord.employee_id == Employee.employee_id)
            .where(Employee.role == "employee")
            .group_by(PayrollRecord.year, PayrollRecord.month)
            .order_by(PayrollRecord.year, PayrollRecord.month)
        )
        if year is not None:
            query = query.where(PayrollRecord.year == year)
        if max_month is not None:
            query = query.where(PayrollRecord.month <= max_month)

        result = await self.session.execute(query)
        return [
            PayrollMonthGroup(
                year=int(y),
                month=int(m),
                base_salary=Decimal(str(base)),
                bonus=Decimal(str(bonus)),
                deductions=Decimal(str(deductions)),
                tax=Decimal(str(tax)),
                total_amount=Decimal(str(total)),
                count=int(count),
            )
            for y, m, base, bonus, deductions, tax, total, count in result.all()
        ]

    async def find_for_employee_period(
        self, employee_id: UUID, month: int, year: int
    ) -> PayrollRecord | None:
        """The payroll of an employee for a month, if any."""
        result = await self.session.execute(
            select(PayrollRecord).where(
                PayrollRecord.employee_id == employee_id,
                PayrollRecord.month == month,
                PayrollRecord.year == year,
            )
        )
        return result.scalar_one_or_none()

    async def get(self, payroll_id: UUID) -> PayrollRecord | None:
        """Get one payroll record with its employee."""
        result = await self.session.execute(
            select(PayrollRecord)
            .where(PayrollRecord.payroll_id == payroll_id)
            .options(selectinload(PayrollRecord.employee))
        )
        return result.scalar_one_or_none()

    async def add(self, payroll: PayrollRecord) -> PayrollRecord:
        """Persist a new payroll record."""
        self.session.add(payroll)
        await self.session.flush()
        return payroll
