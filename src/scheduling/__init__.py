"""Schedule calendar, validation and occurrence generation package."""

from src.scheduling.calendar import (
    BusinessDayRange,
    add_days,
    clamp_day_of_month,
    difference_in_days,
    end_of_day,
    get_business_day_range,
    get_nth_business_day,
    is_business_day,
    month_range_from_iso,
    start_of_day,
    to_day,
)
from src.scheduling.occurrences import generate_occurrences
from src.scheduling.validator import ScheduleValidator, validate_schedule_config

__all__ = [
    "BusinessDayRange",
    "ScheduleValidator",
    "add_days",
    "clamp_day_of_month",
    "difference_in_days",
    "end_of_day",
    "generate_occurrences",
    "get_business_day_range",
    "get_nth_business_day",
    "is_business_day",
    "month_range_from_iso",
    "start_of_day",
    "to_day",
    "validate_schedule_config",
]
