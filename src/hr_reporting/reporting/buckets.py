"""Month bucket planning for trend series.

Every trend generator turns a selector into a list of (year, month)
buckets:

- AllTime: the months that actually hold records, oldest first. Months
  without activity are dropped. With no records at all, the trailing six
  months ending now are used instead and zero-filled.
- YearToDate: January through the current month of the current year.
- SpecificMonth: the six months ending at and including the target month.
- FullYear: all twelve months of the year.
- no selector: the trailing six months ending at the current month.

Every plan except a discovered AllTime plan is zero-filled.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from hr_reporting.reporting.date_range import (
    AllTime,
    DateRange,
    DateSelector,
    FullYear,
    SpecificMonth,
    YearToDate,
    month_range,
)

TRAILING_MONTHS = 6


@dataclass(frozen=True, order=True)
class MonthBucket:
    """One calendar month of a trend series."""

    year: int
    month: int

    @property
    def range(self) -> DateRange:
        """Full calendar window of the month."""
        return month_range(self.year, self.month)


@dataclass(frozen=True)
class BucketPlan:
    """Buckets to emit and whether empty ones are dropped."""

    buckets: list[MonthBucket]
    drop_empty: bool = False

    @property
    def window(self) -> DateRange | None:
        """Window spanning every bucket, or None for an empty plan."""
        if not self.buckets:
            return None
        return DateRange(
            start=self.buckets[0].range.start,
            end=self.buckets[-1].range.end,
        )


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move a (year, month) pair by delta months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def trailing_months(year: int, month: int, count: int = TRAILING_MONTHS) -> list[MonthBucket]:
    """The count months ending at and including (year, month)."""
    buckets = []
    for offset in range(count - 1, -1, -1):
        y, m = shift_month(year, month, -offset)
        buckets.append(MonthBucket(year=y, month=m))
    return buckets


def plan_buckets(
    selector: DateSelector | None,
    now: datetime,
    discovered: Iterable[tuple[int, int]] = (),
) -> BucketPlan:
    """Plan the month buckets of a trend series.

    Args:
        selector: Parsed report selector, or None when none was given
        now: Current time
        discovered: (year, month) pairs present in the data; only used for
            AllTime
    """
    if isinstance(selector, AllTime):
        months = sorted({MonthBucket(year=int(y), month=int(m)) for y, m in discovered})
        if months:
            return BucketPlan(buckets=months, drop_empty=True)
        return BucketPlan(buckets=trailing_months(now.year, now.month))

    if isinstance(selector, YearToDate):
        return BucketPlan(
            buckets=[MonthBucket(year=now.year, month=m) for m in range(1, now.month + 1)]
        )

    if isinstance(selector, SpecificMonth):
        return BucketPlan(buckets=trailing_months(selector.year, selector.month))

    if isinstance(selector, FullYear):
        return BucketPlan(
            buckets=[MonthBucket(year=selector.year, month=m) for m in range(1, 13)]
        )

    return BucketPlan(buckets=trailing_months(now.year, now.month))
