"""
Calendar Primitives

Day-granularity date arithmetic shared by the occurrence generator and the
inventory simulator.

DESIGN DECISION: Everything is computed on ``datetime.date`` values.
Aware datetimes are converted to UTC before their day is taken, so no local
timezone offset can shift a result by one day. Months are addressed by
explicit ``(year, month_index)`` integer pairs with a zero-based index.
"""

import calendar
import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator, NamedTuple, Optional, Union

from dateutil.relativedelta import relativedelta

from src.errors import InvalidArgumentError


DateLike = Union[date, datetime]

_MONTH_ISO = re.compile(r"^(\d{4})-(\d{1,2})$")


class BusinessDayRange(NamedTuple):
    start: date
    end: date


def to_day(value: DateLike) -> date:
    """Normalize a date or datetime to its calendar day (UTC for aware values)."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def start_of_day(value: DateLike) -> datetime:
    """Midnight at the start of the value's day, keeping its tzinfo."""
    if isinstance(value, datetime):
        return value.replace(hour=0, minute=0, second=0, microsecond=0)
    return datetime.combine(value, time.min)


def end_of_day(value: DateLike) -> datetime:
    """Last representable instant of the value's day, keeping its tzinfo."""
    if isinstance(value, datetime):
        return value.replace(hour=23, minute=59, second=59, microsecond=999999)
    return datetime.combine(value, time.max)


def add_days(value: DateLike, days: int) -> DateLike:
    """Calendar-day addition; ``days`` may be negative."""
    return value + timedelta(days=days)


def difference_in_days(a: DateLike, b: DateLike) -> int:
    """Whole days from ``b`` to ``a`` (negative when ``a`` is earlier)."""
    return (to_day(a) - to_day(b)).days


def _check_month_index(month_index: int) -> None:
    if not 0 <= month_index <= 11:
        raise InvalidArgumentError(
            f"month index must be between 0 and 11, got {month_index}",
            field="month_index",
        )


def last_day_of_month(year: int, month_index: int) -> int:
    _check_month_index(month_index)
    return calendar.monthrange(year, month_index + 1)[1]


def clamp_day_of_month(year: int, month_index: int, day: int) -> date:
    """
    Resolve ``day`` inside a month, clamped to ``[1, last day]``.

    Day 31 in February gives Feb 28 (or 29 in a leap year).
    """
    last_day = last_day_of_month(year, month_index)
    return date(year, month_index + 1, min(max(day, 1), last_day))


def is_business_day(value: DateLike) -> bool:
    """Monday to Friday. No holiday calendar is modeled."""
    return to_day(value).weekday() < 5


def find_nth_business_day(year: int, month_index: int, nth: int) -> Optional[date]:
    """
    Return the n-th business day of the month, or None if the month has fewer.

    The scan never looks past the month's last day.
    """
    if nth <= 0:
        raise InvalidArgumentError(
            "nth business day must be positive", field="nth_business_day"
        )

    counted = 0
    for day in range(1, last_day_of_month(year, month_index) + 1):
        current = date(year, month_index + 1, day)
        if is_business_day(current):
            counted += 1
            if counted == nth:
                return current
    return None


def get_nth_business_day(year: int, month_index: int, nth: int) -> date:
    """Return the n-th business day of the month or raise InvalidArgumentError."""
    found = find_nth_business_day(year, month_index, nth)
    if found is None:
        raise InvalidArgumentError(
            f"{year}-{month_index + 1:02d} has fewer than {nth} business days",
            field="nth_business_day",
        )
    return found


def get_business_day_range(
    year: int,
    month_index: int,
    start_nth: int,
    end_nth: int,
) -> BusinessDayRange:
    """Return the start and end business days of an ordinal span."""
    if start_nth > end_nth:
        raise InvalidArgumentError(
            "start business day must be before or equal to end",
            field="business_day_range_start",
        )
    return BusinessDayRange(
        start=get_nth_business_day(year, month_index, start_nth),
        end=get_nth_business_day(year, month_index, end_nth),
    )


def month_range_from_iso(month_iso: str) -> tuple[datetime, datetime]:
    """
    Parse ``"YYYY-MM"`` into half-open UTC bounds ``[start, end)``.

    ``"2024-02"`` gives 2024-02-01T00:00Z and 2024-03-01T00:00Z.
    """
    match = _MONTH_ISO.match(month_iso.strip()) if isinstance(month_iso, str) else None
    if match is None:
        raise InvalidArgumentError("Month must be in YYYY-MM format", field="month")

    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidArgumentError(f"Invalid month provided: {month_iso}", field="month")

    start = datetime(year, month, 1, tzinfo=timezone.utc)
    return start, start + relativedelta(months=1)


def iter_months(start: DateLike, end: DateLike) -> Iterator[tuple[int, int]]:
    """Yield ``(year, month_index)`` from the month of ``start`` through that of ``end``."""
    first, last = to_day(start), to_day(end)
    index = first.year * 12 + first.month - 1
    stop = last.year * 12 + last.month - 1
    while index <= stop:
        yield divmod(index, 12)
        index += 1
