"""
Tests for the calendar primitives.

All expected weekdays were checked against a printed calendar:
2024-01-01 Monday, 2024-06-01 Saturday, 2021-02-01 Monday.
"""

import pytest
from datetime import date, datetime, timedelta, timezone

from src.errors import InvalidArgumentError
from src.scheduling.calendar import (
    BusinessDayRange,
    add_days,
    clamp_day_of_month,
    difference_in_days,
    end_of_day,
    find_nth_business_day,
    get_business_day_range,
    get_nth_business_day,
    is_business_day,
    iter_months,
    last_day_of_month,
    month_range_from_iso,
    start_of_day,
    to_day,
)


class TestDayNormalization:
    """Tests for start/end of day and to_day."""

    def test_start_of_day(self):
        value = datetime(2024, 3, 5, 17, 42, 9, 123456)
        assert start_of_day(value) == datetime(2024, 3, 5)

    def test_end_of_day(self):
        value = datetime(2024, 3, 5, 1, 2, 3)
        assert end_of_day(value) == datetime(2024, 3, 5, 23, 59, 59, 999999)

    def test_start_of_day_keeps_tzinfo(self):
        value = datetime(2024, 3, 5, 17, 0, tzinfo=timezone.utc)
        assert start_of_day(value).tzinfo is timezone.utc

    def test_start_of_day_accepts_date(self):
        assert start_of_day(date(2024, 3, 5)) == datetime(2024, 3, 5, 0, 0)

    def test_to_day_uses_utc_for_aware_datetimes(self):
        """23:30 at UTC-5 is already the next day in UTC."""
        eastern = timezone(timedelta(hours=-5))
        value = datetime(2024, 1, 1, 23, 30, tzinfo=eastern)
        assert to_day(value) == date(2024, 1, 2)

    def test_to_day_naive_datetime(self):
        assert to_day(datetime(2024, 1, 1, 23, 30)) == date(2024, 1, 1)

    def test_to_day_passes_dates_through(self):
        assert to_day(date(2024, 1, 1)) == date(2024, 1, 1)


class TestDayArithmetic:
    """Tests for add_days and difference_in_days."""

    def test_add_days_crosses_month(self):
        assert add_days(date(2024, 1, 30), 3) == date(2024, 2, 2)

    def test_add_negative_days(self):
        assert add_days(date(2024, 3, 1), -1) == date(2024, 2, 29)

    def test_difference_in_days(self):
        assert difference_in_days(date(2024, 3, 1), date(2024, 2, 1)) == 29

    def test_difference_ignores_time_of_day(self):
        a = datetime(2024, 1, 2, 0, 5)
        b = datetime(2024, 1, 1, 23, 55)
        assert difference_in_days(a, b) == 1

    def test_difference_is_negative_backwards(self):
        assert difference_in_days(date(2024, 1, 1), date(2024, 1, 4)) == -3


class TestClampDayOfMonth:
    """Tests for month-length clamping."""

    def test_february_non_leap(self):
        assert clamp_day_of_month(2021, 1, 31) == date(2021, 2, 28)

    def test_february_leap(self):
        assert clamp_day_of_month(2020, 1, 31) == date(2020, 2, 29)

    def test_thirty_day_month(self):
        assert clamp_day_of_month(2024, 3, 31) == date(2024, 4, 30)

    def test_day_in_range_untouched(self):
        assert clamp_day_of_month(2024, 0, 15) == date(2024, 1, 15)

    def test_day_below_one_clamps_to_first(self):
        assert clamp_day_of_month(2024, 0, 0) == date(2024, 1, 1)

    def test_invalid_month_index(self):
        with pytest.raises(InvalidArgumentError, match="month index"):
            clamp_day_of_month(2024, 12, 1)

    def test_last_day_of_month(self):
        assert last_day_of_month(2024, 1) == 29
        assert last_day_of_month(2023, 1) == 28
        assert last_day_of_month(2024, 11) == 31


class TestBusinessDays:
    """Tests for business day predicate and counting."""

    def test_weekdays_are_business_days(self):
        for day in range(1, 6):
            assert is_business_day(date(2024, 1, day)) is True

    def test_weekend_is_not(self):
        assert is_business_day(date(2024, 1, 6)) is False
        assert is_business_day(date(2024, 1, 7)) is False

    def test_first_business_day_is_monday_jan_1_2024(self):
        assert get_nth_business_day(2024, 0, 1) == date(2024, 1, 1)

    def test_first_business_day_skips_weekend(self):
        assert get_nth_business_day(2024, 5, 1) == date(2024, 6, 3)

    def test_sixth_business_day_crosses_weekend(self):
        assert get_nth_business_day(2024, 0, 6) == date(2024, 1, 8)

    def test_last_business_day_of_january_2024(self):
        assert get_nth_business_day(2024, 0, 23) == date(2024, 1, 31)

    @pytest.mark.parametrize("nth", [0, -1])
    def test_non_positive_nth_rejected(self, nth):
        with pytest.raises(InvalidArgumentError, match="must be positive"):
            get_nth_business_day(2024, 0, nth)

    def test_nth_beyond_month_fails_instead_of_looping(self):
        """February 2021 has exactly 20 business days."""
        assert get_nth_business_day(2021, 1, 20) == date(2021, 2, 26)
        with pytest.raises(InvalidArgumentError, match="fewer than 21 business days"):
            get_nth_business_day(2021, 1, 21)

    def test_find_returns_none_beyond_month(self):
        assert find_nth_business_day(2021, 1, 21) is None

    def test_business_day_range(self):
        result = get_business_day_range(2024, 0, 1, 5)
        assert result == BusinessDayRange(start=date(2024, 1, 1), end=date(2024, 1, 5))
        assert result.end == date(2024, 1, 5)

    def test_business_day_range_rejects_inverted(self):
        with pytest.raises(InvalidArgumentError, match="before or equal to end"):
            get_business_day_range(2024, 0, 5, 1)


class TestMonthRangeFromIso:
    """Tests for YYYY-MM parsing."""

    def test_parses_month(self):
        start, end = month_range_from_iso("2024-02")
        assert start == datetime(2024, 2, 1, tzinfo=timezone.utc)
        assert end == datetime(2024, 3, 1, tzinfo=timezone.utc)

    def test_december_rolls_into_next_year(self):
        start, end = month_range_from_iso("2023-12")
        assert end == datetime(2024, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", ["2024", "2024-", "24-01", "2024/01", "abcd-ef", ""])
    def test_malformed_rejected(self, value):
        with pytest.raises(InvalidArgumentError, match="YYYY-MM"):
            month_range_from_iso(value)

    @pytest.mark.parametrize("value", ["2024-00", "2024-13"])
    def test_month_out_of_range_rejected(self, value):
        with pytest.raises(InvalidArgumentError, match="Invalid month"):
            month_range_from_iso(value)


class TestIterMonths:
    """Tests for month pair iteration."""

    def test_spans_year_boundary(self):
        months = list(iter_months(date(2023, 11, 20), date(2024, 2, 1)))
        assert months == [(2023, 10), (2023, 11), (2024, 0), (2024, 1)]

    def test_single_month(self):
        assert list(iter_months(date(2024, 5, 1), date(2024, 5, 31))) == [(2024, 4)]
