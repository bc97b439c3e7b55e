# backend/investflow/utils/date_utils.py
"""
Date utility functions for InvestFlow.

This module provides shared date manipulation functions used across
multiple services. Centralizing these prevents code duplication and
ensures consistent behavior.

Usage:
    from investflow.utils.date_utils import to_calendar_day, days_back

    day = to_calendar_day(transaction.date)
"""

from datetime import date, datetime, timedelta


def to_calendar_day(value: date | datetime | str) -> date:
    """
    Truncate a date-like value to a calendar day.

    The time component and any timezone are dropped rather than converted,
    so a transaction recorded as "2024-03-01T23:30:00+02:00" stays on
    2024-03-01 instead of drifting to the neighbouring day.

    Args:
        value: A date, datetime or ISO 8601 string

    Returns:
        The calendar day as a plain date

    Raises:
        ValueError: If a string cannot be parsed as an ISO date

    Example:
        >>> to_calendar_day(datetime(2024, 3, 1, 23, 59))
        datetime.date(2024, 3, 1)
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # ISO strings: keep only the YYYY-MM-DD prefix
    return date.fromisoformat(value.strip()[:10])


def days_back(reference: date, days: int) -> date:
    """
    Get the date a number of calendar days before a reference date.

    Args:
        reference: Anchor date (usually today)
        days: Number of days to step back

    Returns:
        reference - days
    """
    return reference - timedelta(days=days)


