from __future__ import annotations

import calendar
from datetime import date, datetime

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def parse_month(value: str) -> date:
    """Parse a YYYY-MM month key into the first day of that month."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m").date()
    except ValueError:
        raise ValidationError(f"Invalid month: {value!r} (expected YYYY-MM)")


def month_key(day: date) -> str:
    return day.strftime("%Y-%m")


def month_label(day: date) -> str:
    return day.strftime("%B %Y")


def month_bounds(month: str) -> tuple[date, date]:
    """First and last calendar day of the month, both inclusive."""
    first = parse_month(month)
    last_day = calendar.monthrange(first.year, first.month)[1]
    return first, first.replace(day=last_day)


def is_current_month(month: str, today: date) -> bool:
    first = parse_month(month)
    return (first.year, first.month) == (today.year, today.month)


def recent_months(today: date, count: int) -> list[tuple[str, str]]:
    """(key, label) pairs for the last ``count`` months, newest first."""
    out: list[tuple[str, str]] = []
    year, month = today.year, today.month
    for _ in range(int(count)):
        first = date(year, month, 1)
        out.append((month_key(first), month_label(first)))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return out
