from __future__ import annotations

import math
from datetime import date
from typing import Any

from core.exceptions import ValidationError

MONEY_TOLERANCE = 0.01


def normalize_currency(value: str | None, fallback: str | None) -> str:
    code = (value or "").strip().upper()
    if code:
        return code
    return (fallback or "").strip().upper()


def amounts_match(lhs: float, rhs: float, tolerance: float = MONEY_TOLERANCE) -> bool:
    # a difference of exactly one cent passes despite float noise
    return abs(float(lhs) - float(rhs)) <= tolerance + 1e-9


def exceeds(amount: float, limit: float) -> bool:
    # sums of floats drift in the last bits; anything past a micro-unit is a real overrun
    return float(amount) - float(limit) > 1e-6


def as_amount(value: Any, *, field: str) -> float:
    if value is None or value == "":
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number.", code="NOT_A_NUMBER", field=field)
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a finite number.", code="NOT_A_NUMBER", field=field)
    return number


def as_date(value: Any, *, field: str) -> date | None:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"{field} must be a valid date.", code="INVALID_DATE", field=field)


def month_key(day: date) -> str:
    return f"{day.year}-{day.month:02d}"


def iter_month_starts(start: date, finish: date) -> list[date]:
    """First day of every calendar month touched by [start, finish]; empty when start > finish."""
    if start > finish:
        return []
    current = date(start.year, start.month, 1)
    months: list[date] = []
    while current <= finish:
        months.append(current)
        if current.month == 12:
            current = date(current.year + 1, 1, 1)
        else:
            current = date(current.year, current.month + 1, 1)
    return months


def fmt_amount(value: float) -> str:
    return f"{float(value):,.2f}"


__all__ = [
    "MONEY_TOLERANCE",
    "normalize_currency",
    "amounts_match",
    "exceeds",
    "as_amount",
    "as_date",
    "month_key",
    "iter_month_starts",
    "fmt_amount",
]
