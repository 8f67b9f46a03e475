"""Rounding and percentage helpers shared by the reports."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

TWO_PLACES = Decimal("0.01")
WHOLE = Decimal("1")


def _to_decimal(value: float | int | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(repr(value)) if isinstance(value, float) else Decimal(value)


def round2(value: float | int | Decimal) -> float:
    """Round to 2 decimal places, half-up."""
    return float(_to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def format2(value: float | int | Decimal) -> str:
    """Format with exactly 2 decimal places, half-up."""
    return str(_to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def ratio_percent(part: float | int | Decimal, total: float | int | Decimal) -> float:
    """part / total * 100 without rounding; 0 for an empty total."""
    if not total:
        return 0.0
    return float(part) / float(total) * 100


def percentage(part: float | int | Decimal, total: float | int | Decimal) -> float:
    """part / total * 100 rounded to 2 decimal places; 0 for an empty total."""
    return round2(ratio_percent(part, total))


def format_rate(part: float | int | Decimal, total: float | int | Decimal) -> str:
    """part / total * 100 as a 2-decimal string; "0.00" for an empty total."""
    if not total or total <= 0:
        return "0.00"
    return format2(ratio_percent(part, total))


def pct(part: int, total: int) -> int:
    """Whole-number percentage of total, half-up; 0 for an empty total."""
    if total == 0:
        return 0
    return round_whole(part / total * 100)


def round_whole(value: float | int | Decimal) -> int:
    """Round to the nearest integer, half-up."""
    return int(_to_decimal(value).quantize(WHOLE, rounding=ROUND_HALF_UP))
