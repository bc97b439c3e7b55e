# backend/tests/utils/test_date_utils.py
"""
Tests for date utility functions.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from investflow.utils.date_utils import days_back, to_calendar_day


class TestToCalendarDay:
    """Tests for to_calendar_day."""

    def test_date_unchanged(self):
        assert to_calendar_day(date(2024, 3, 1)) == date(2024, 3, 1)

    def test_datetime_drops_time(self):
        assert to_calendar_day(datetime(2024, 3, 1, 23, 59, 59)) == date(2024, 3, 1)

    def test_aware_datetime_keeps_local_day(self):
        value = datetime(2024, 3, 1, 23, 30, tzinfo=timezone(timedelta(hours=2)))

        assert to_calendar_day(value) == date(2024, 3, 1)

    def test_iso_string_with_offset(self):
        assert to_calendar_day("2024-03-01T23:30:00+02:00") == date(2024, 3, 1)

    def test_plain_iso_string(self):
        assert to_calendar_day(" 2024-12-31 ") == date(2024, 12, 31)

    def test_invalid_string(self):
        with pytest.raises(ValueError):
            to_calendar_day("yesterday")


class TestDaysBack:
    """Tests for days_back."""

    def test_zero_is_reference(self):
        assert days_back(date(2024, 6, 15), 0) == date(2024, 6, 15)

    def test_crosses_month_and_leap_day(self):
        assert days_back(date(2024, 3, 1), 1) == date(2024, 2, 29)
