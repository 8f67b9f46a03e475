"""Payroll statistics and monthly payroll trend."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from hr_reporting.reporting.buckets import BucketPlan, plan_buckets
from hr_reporting.reporting.date_range import (
    AllTime,
    DateSelector,
    FullYear,
    SpecificMonth,
    YearToDate,
)
from hr_reporting.reporting.rates import round2
from hr_reporting.reporting.types import PayrollStats, PayrollTotals, PayrollTrendPoint
from hr_reporting.stores import PayrollMonthGroup, PayrollStore

ZERO = Decimal("0")


class PayrollStatsService:
    """Summaries over payroll records of role ``employee`` staff."""

    def __init__(
        self,
        session: AsyncSession,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.session = session
        self.clock = clock
        self.payroll = PayrollStore(session)

    async def payroll_stats(self, selector: DateSelector | None) -> PayrollStats:
        """Totals, averages and extremes of payroll rows in a window.

        Specific month: that month. Full year: that year. Year to date: the
        current year up to the current month. Otherwise every row.
        """
        now = self.clock()
        if isinstance(selector, SpecificMonth):
            records = await self.payroll.find_payroll(
                month=selector.month, year=selector.year
            )
        elif isinstance(selector, FullYear):
            records = await self.payroll.find_payroll(year=selector.year)
        elif isinstance(selector, YearToDate):
            records = await self.payroll.find_payroll(year=now.year, max_month=now.month)
        else:
            records = await self.payroll.find_payroll()

        base = sum((r.employee.base_salary for r in records), ZERO)
        deductions = sum((r.deductions for r in records), ZERO)
        bonus = sum((r.bonus for r in records), ZERO)
        tax = sum((r.tax for r in records), ZERO)
        total = sum((r.total_amount for r in records), ZERO)
        count = len(records)

        def avg(value: Decimal) -> float:
            return round2(value / count) if count else 0.0

        amounts = [r.total_amount for r in records]
        return PayrollStats(
            count=count,
            payroll_totals=PayrollTotals(
                base_salary=round2(base),
                deductions=round2(deductions),
                bonus=round2(bonus),
                tax=round2(tax),
                total_amount=round2(total),
            ),
            avg_base_salary=avg(base),
            avg_bonus=avg(bonus),
            avg_deductions=avg(deductions),
            avg_tax=avg(tax),
            avg_total_amount=avg(total),
            highest_salary=round2(max(amounts)) if amounts else 0.0,
            lowest_salary=round2(min(amounts)) if amounts else 0.0,
            employees_with_bonus=sum(1 for r in records if r.bonus > 0),
            employees_with_deductions=sum(1 for r in records if r.deductions > 0),
            bonus_to_salary_ratio=round(float(bonus / base), 4) if base else 0.0,
            paid_count=sum(1 for r in records if r.status == "paid"),
            unpaid_count=sum(1 for r in records if r.status == "unpaid"),
        )

    async def payroll_trend(self, selector: DateSelector | None) -> list[PayrollTrendPoint]:
        """Monthly payroll sums.

        All time, year to date and full year read grouped sums in one query;
        a specific month and the default window fetch each month's rows.
        """
        now = self.clock()

        if isinstance(selector, (AllTime, YearToDate, FullYear)):
            if isinstance(selector, YearToDate):
                groups = await self.payroll.aggregate_payroll_by_month(
                    year=now.year, max_month=now.month
                )
            elif isinstance(selector, FullYear):
                groups = await self.payroll.aggregate_payroll_by_month(year=selector.year)
            else:
                groups = await self.payroll.aggregate_payroll_by_month()

            plan = plan_buckets(selector, now, [(g.year, g.month) for g in groups])
            return self._from_groups(plan, groups)

        plan = plan_buckets(selector, now)
        points = []
        for bucket in plan.buckets:
            records = await self.payroll.find_payroll(month=bucket.month, year=bucket.year)
            points.append(
                PayrollTrendPoint(
                    year=bucket.year,
                    month=bucket.month,
                    total_payroll=round2(sum((r.total_amount for r in records), ZERO)),
                    total_base_salary=round2(
                        sum((r.employee.base_salary for r in records), ZERO)
                    ),
                    total_bonus=round2(sum((r.bonus for r in records), ZERO)),
                    total_deductions=round2(sum((r.deductions for r in records), ZERO)),
                    total_tax=round2(sum((r.tax for r in records), ZERO)),
                    count=len(records),
                )
            )
        return points

    @staticmethod
    def _from_groups(
        plan: BucketPlan, groups: list[PayrollMonthGroup]
    ) -> list[PayrollTrendPoint]:
        by_month = {(g.year, g.month): g for g in groups}
        points = []
        for bucket in plan.buckets:
            group = by_month.get((bucket.year, bucket.month))
            if group is None:
                if plan.drop_empty:
                    continue
                points.append(PayrollTrendPoint(year=bucket.year, month=bucket.month))
                continue
            points.append(
                PayrollTrendPoint(
                    year=group.year,
                    month=group.month,
                    total_payroll=round2(group.total_amount),
                    total_base_salary=round2(group.base_salary),
                    total_bonus=round2(group.bonus),
                    total_deductions=round2(group.deductions),
                    total_tax=round2(group.tax),
                    count=group.count,
                )
            )
        return points
