"""Submission statistics and monthly submission trend."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from hr_reporting.reporting.buckets import plan_buckets
from hr_reporting.reporting.date_range import (
    AllTime,
    DateSelector,
    resolve_calendar_range,
)
from hr_reporting.reporting.types import SubmissionStats, SubmissionTrendPoint
from hr_reporting.stores import SubmissionStore


class SubmissionStatsService:
    """Counts leave and resignation submissions by status."""

    def __init__(
        self,
        session: AsyncSession,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.session = session
        self.clock = clock
        self.submissions = SubmissionStore(session)

    async def submission_stats(self, selector: DateSelector | None) -> SubmissionStats:
        """Counts by type and status within the selector's calendar window."""
        window = resolve_calendar_range(selector, self.clock())
        start, end = (window.start, window.end) if window else (None, None)

        stats = SubmissionStats()
        for type_, status, count in await self.submissions.aggregate_submissions_by_type_status(
            start, end
        ):
            stats.add(type_, status, count)
        return stats

    async def submission_trend(
        self, selector: DateSelector | None
    ) -> list[SubmissionTrendPoint]:
        """Monthly counts by type and status."""
        now = self.clock()

        if isinstance(selector, AllTime):
            groups = await self.submissions.aggregate_submissions_by_month_type()
            plan = plan_buckets(selector, now, [(g.year, g.month) for g in groups])
        else:
            plan = plan_buckets(selector, now)
            window = plan.window
            groups = await self.submissions.aggregate_submissions_by_month_type(
                window.start, window.end
            )

        by_month: dict[tuple[int, int], SubmissionStats] = {}
        for group in groups:
            stats = by_month.setdefault((group.year, group.month), SubmissionStats())
            stats.add(group.type, group.status, group.count)

        points = []
        for bucket in plan.buckets:
            stats = by_month.get((bucket.year, bucket.month))
            if stats is None:
                if plan.drop_empty:
                    continue
                stats = SubmissionStats()
            points.append(
                SubmissionTrendPoint(year=bucket.year, month=bucket.month, stats=stats)
            )
        return points
