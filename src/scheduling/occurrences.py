"""
Occurrence Generator

Expands a ScheduleConfig into the concrete dates it falls on inside an
inclusive window. One candidate is computed per calendar month; months are
walked as ``(year, month_index)`` pairs so no date object is ever mutated.

A range occurrence (DATE_RANGE, BUSINESS_DAY_RANGE) is kept when its span
overlaps the window, even if it starts before the window does.
"""

from typing import Optional

from src.errors import ScheduleValidationError
from src.models.schedule import (
    ScheduleConfig,
    ScheduleOccurrence,
    ScheduleType,
    assert_exhaustive,
)
from src.scheduling.calendar import (
    DateLike,
    clamp_day_of_month,
    find_nth_business_day,
    iter_months,
    to_day,
)


def _required(config: ScheduleConfig, field: str) -> int:
    value = getattr(config, field)
    if value is None:
        raise ScheduleValidationError(
            field,
            f"Missing required field {field} for schedule type {config.schedule_type.value}",
        )
    return value


def occurrence_for_month(
    config: ScheduleConfig,
    year: int,
    month_index: int,
) -> Optional[ScheduleOccurrence]:
    """
    The single occurrence of ``config`` in one month.

    Returns None when a business-day ordinal does not exist in that month
    (e.g. the 23rd business day of a February).
    """
    schedule_type = config.schedule_type

    if schedule_type is ScheduleType.FIXED_DATE:
        day = _required(config, "day_of_month")
        return ScheduleOccurrence(date=clamp_day_of_month(year, month_index, day))

    elif schedule_type is ScheduleType.BUSINESS_DAY:
        nth = _required(config, "nth_business_day")
        found = find_nth_business_day(year, month_index, nth)
        return ScheduleOccurrence(date=found) if found else None

    elif schedule_type is ScheduleType.DATE_RANGE:
        start = _required(config, "month_day_range_start")
        end = _required(config, "month_day_range_end")
        return ScheduleOccurrence(
            date=clamp_day_of_month(year, month_index, start),
            end_date=clamp_day_of_month(year, month_index, end),
        )

    elif schedule_type is ScheduleType.BUSINESS_DAY_RANGE:
        start_nth = _required(config, "business_day_range_start")
        end_nth = _required(config, "business_day_range_end")
        if start_nth > end_nth:
            raise ScheduleValidationError(
                "business_day_range_start",
                "business_day_range_start must be less than or equal to business_day_range_end",
            )
        start = find_nth_business_day(year, month_index, start_nth)
        end = find_nth_business_day(year, month_index, end_nth)
        if start is None or end is None:
            return None
        return ScheduleOccurrence(date=start, end_date=end)

    else:
        assert_exhaustive(schedule_type)


def generate_occurrences(
    config: ScheduleConfig,
    window_start: DateLike,
    window_end: DateLike,
) -> list[ScheduleOccurrence]:
    """
    Every occurrence of ``config`` that falls in or overlaps
    ``[window_start, window_end]``, ascending by date.

    An inverted window yields an empty list. The result depends only on the
    arguments, so repeated calls return identical lists.
    """
    start = to_day(window_start)
    end = to_day(window_end)
    if end < start:
        return []

    occurrences = []
    for year, month_index in iter_months(start, end):
        if not config.is_month_active(month_index + 1):
            continue

        occurrence = occurrence_for_month(config, year, month_index)
        if occurrence is None:
            continue

        last_day = occurrence.end_date or occurrence.date
        if last_day >= start and occurrence.date <= end:
            occurrences.append(occurrence)

    # sorted() is stable: ties keep generation order
    return sorted(occurrences, key=lambda occurrence: occurrence.date)
