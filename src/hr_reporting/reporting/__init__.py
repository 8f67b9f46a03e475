"""Date-range statistics engine."""

from hr_reporting.reporting.buckets import BucketPlan, MonthBucket, plan_buckets
from hr_reporting.reporting.date_range import (
    AllTime,
    DateRange,
    DateRangeResolver,
    DateSelector,
    EmployeeNotFoundError,
    FullYear,
    InvalidPeriodError,
    ReportingError,
    SpecificMonth,
    YearToDate,
    parse_selector,
    resolve_calendar_range,
    resolve_range,
)
from hr_reporting.reporting.rates import (
    format2,
    format_rate,
    pct,
    percentage,
    round2,
    round_whole,
)
from hr_reporting.reporting.working_days import get_working_days

__all__ = [
    "AllTime",
    "BucketPlan",
    "DateRange",
    "DateRangeResolver",
    "DateSelector",
    "EmployeeNotFoundError",
    "FullYear",
    "InvalidPeriodError",
    "MonthBucket",
    "ReportingError",
    "SpecificMonth",
    "YearToDate",
    "format2",
    "format_rate",
    "get_working_days",
    "parse_selector",
    "pct",
    "percentage",
    "plan_buckets",
    "resolve_calendar_range",
    "resolve_range",
    "round2",
    "round_whole",
]
