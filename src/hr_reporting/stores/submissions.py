"""Submission queries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable
from uuid import UUID

from sqlalchemy import extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_reporting.models import SubmissionRecord


@dataclass(frozen=True)
class SubmissionGroup:
    """Count of submissions sharing a month, type and status."""

    year: int
    month: int
    type: str
    status: str
    count: int


class SubmissionStore:
    """Queries over leave and resignation submissions."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def count_submissions(
        self,
        type: str | None = None,
        status: str | None = None,
        employee_ids: Iterable[UUID] | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> int:
        """Count submissions matching every given filter."""
        query = select(func.count()).select_from(SubmissionRecord)
        if type is not None:
            query = query.where(SubmissionRecord.type == type)
        if status is not None:
            query = query.where(SubmissionRecord.status == status)
        if employee_ids is not None:
            ids = list(employee_ids)
            if not ids:
                return 0
            query = query.where(SubmissionRecord.employee_id.in_(ids))
        if start is not None:
            query = query.where(SubmissionRecord.created_at >= start)
        if end is not None:
            query = query.where(SubmissionRecord.created_at <= end)

        return await self.session.scalar(query) or 0

    async def aggregate_submissions_by_type_status(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[tuple[str, str, int]]:
        """(type, status, count) groups within an optional window."""
        query = select(
            SubmissionRecord.type,
            SubmissionRecord.status,
            func.count(),
        ).group_by(SubmissionRecord.type, SubmissionRecord.status)
        if start is not None:
            query = query.where(SubmissionRecord.created_at >= start)
        if end is not None:
            query = query.where(SubmissionRecord.created_at <= end)

        result = await self.session.execute(query)
        return [(t, s, int(c)) for t, s, c in result.all()]

    async def aggregate_submissions_by_month_type(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[SubmissionGroup]:
        """Submission counts grouped by (year, month, type, status)."""
        year_col = extract("year", SubmissionRecord.created_at)
        month_col = extract("month", SubmissionRecord.created_at)
        query = select(
            year_col,
            month_col,
            SubmissionRecord.type,
            SubmissionRecord.status,
            func.count(),
        ).group_by(year_col, month_col, SubmissionRecord.type, SubmissionRecord.status)
        if start is not None:
            query = query.where(SubmissionRecord.created_at >= start)
        if end is not None:
            query = query.where(SubmissionRecord.created_at <= end)

        result = await self.session.execute(query.order_by(year_col, month_col))
        return [
            SubmissionGroup(
                year=int(y), month=int(m), type=t, status=s, count=int(c)
            )
            for y, m, t, s, c in result.all()
        ]

    async def list_submissions(
        self,
        type: str | None = None,
        status: str | None = None,
        employee_id: UUID | None = None,
    ) -> list[SubmissionRecord]:
        """Submissions with their employees, newest first."""
        query = select(SubmissionRecord).options(selectinload(SubmissionRecord.employee))
        if type is not None:
            query = query.where(SubmissionRecord.type == type)
        if status is not None:
            query = query.where(SubmissionRecord.status == status)
        if employee_id is not None:
            query = query.where(SubmissionRecord.employee_id == employee_id)

        result = await self.session.execute(query.order_by(SubmissionRecord.created_at.desc()))
        return list(result.scalars().all())

    async def get(self, submission_id: UUID) -> SubmissionRecord | None:
        """Get one submission with its employee."""
        result = await self.session.execute(
            select(SubmissionRecord)
            .where(SubmissionRecord.submission_id == submission_id)
            .options(selectinload(SubmissionRecord.employee))
        )
        return result.scalar_one_or_none()

    async def add(self, submission: SubmissionRecord) -> SubmissionRecord:
        """Persist a new submission."""
        self.session.add(submission)
        await self.session.flush()
        return submission
