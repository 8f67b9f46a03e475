"""Attendance record queries."""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import extract, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_reporting.models import AttendanceRecord


class AttendanceStore:
    """Queries over attendance records.

    Report windows select records by ``created_at``; the per-day uniqueness
    guard uses the record's calendar ``day``.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_attendance_in_range(
        self,
        employee_id: UUID,
        start: datetime,
        end: datetime,
    ) -> list[AttendanceRecord]:
        """Records of an employee created within [start, end]."""
        result = await self.session.execute(
            select(AttendanceRecord).where(
                AttendanceRecord.employee_id == employee_id,
                AttendanceRecord.created_at >= start,
                AttendanceRecord.created_at <= end,
            )
        )
        return list(result.scalars().all())

    async def find_attendance_on_day(
        self, employee_id: UUID, day: date
    ) -> AttendanceRecord | None:
        """The record of an employee for a calendar day, if any."""
        result = await self.session.execute(
            select(AttendanceRecord).where(
                AttendanceRecord.employee_id == employee_id,
                AttendanceRecord.day == day,
            )
        )
        return result.scalar_one_or_none()

    async def find_attendance_today(
        self, employee_id: UUID, now: datetime
    ) -> AttendanceRecord | None:
        """The record of an employee for today, if any."""
        return await self.find_attendance_on_day(employee_id, now.date())

    async def distinct_months(self) -> list[tuple[int, int]]:
        """(year, month) pairs that hold at least one record."""
        year_col = extract("year", AttendanceRecord.created_at)
        month_col = extract("month", AttendanceRecord.created_at)
        result = await self.session.execute(
            select(year_col, month_col).distinct().order_by(year_col, month_col)
        )
        return [(int(y), int(m)) for y, m in result.all()]

    async def list_recent(
        self, employee_id: UUID, limit: int = 30
    ) -> list[AttendanceRecord]:
        """Most recent records of an employee, newest first."""
        result = await self.session.execute(
            select(AttendanceRecord)
            .where(AttendanceRecord.employee_id == employee_id)
            .order_by(AttendanceRecord.date.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def list_all(self) -> list[AttendanceRecord]:
        """Every record with its employee, newest first."""
        result = await self.session.execute(
            select(AttendanceRecord)
            .options(selectinload(AttendanceRecord.employee))
            .order_by(AttendanceRecord.date.desc())
        )
        return list(result.scalars().all())

    async def list_for_employee(
        self,
        employee_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[AttendanceRecord]:
        """Records of an employee, optionally within a created_at window."""
        query = select(AttendanceRecord).where(
            AttendanceRecord.employee_id == employee_id
        )
        if start is not None:
            query = query.where(AttendanceRecord.created_at >= start)
        if end is not None:
            query = query.where(AttendanceRecord.created_at <= end)

        result = await self.session.execute(query.order_by(AttendanceRecord.date))
        return list(result.scalars().all())

    async def get(self, attendance_id: UUID) -> AttendanceRecord | None:
        """Get one record."""
        return await self.session.get(AttendanceRecord, attendance_id)

    async def add(self, record: AttendanceRecord) -> AttendanceRecord:
        """Persist a new record."""
        self.session.add(record)
        await self.session.flush()
        return record
