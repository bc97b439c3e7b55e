# backend/investflow/services/valuation/replay.py
"""
Transaction bucketing for reverse replay.

The history engine walks backward one calendar day at a time and needs the
transactions of each day in O(1). bucket_by_date builds that lookup once.

Ordering within a day is log order. Same-day ordering does not change the
cumulative totals being undone, so entries are never re-sorted.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Iterable

from investflow.models import Transaction
from investflow.utils.date_utils import to_calendar_day

logger = logging.getLogger(__name__)


def bucket_by_date(transactions: Iterable[Transaction]) -> dict[date, list[Transaction]]:
    """
    Group transactions by calendar day.

    Dates are truncated to the day before grouping, so datetimes with any
    time-of-day land in the same bucket as a plain date.

    Args:
        transactions: Transaction log in log order (not modified)

    Returns:
        Mapping of day to that day's transactions, in log order
    """
    buckets: dict[date, list[Transaction]] = defaultdict(list)

    for txn in transactions:
        buckets[to_calendar_day(txn.date)].append(txn)

    logger.debug(f"Bucketed transactions into {len(buckets)} days")
    return dict(buckets)


def earliest_transaction_date(transactions: Iterable[Transaction]) -> date | None:
    """Earliest calendar day in the log, or None if the log is empty."""
    days = [to_calendar_day(txn.date) for txn in transactions]
    return min(days) if days else None
