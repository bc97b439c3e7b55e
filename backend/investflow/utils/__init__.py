# backend/investflow/utils/__init__.py
"""
Utility modules for the InvestFlow API.

This package contains cross-cutting utilities:
- logging: Root logger setup with correlation ID stamping
- context: Request context (correlation ID)
- date_utils: Calendar-day helpers for history reconstruction

Usage:
    from investflow.utils import setup_logging
    from investflow.utils import get_correlation_id, set_correlation_id
    from investflow.utils.date_utils import to_calendar_day
"""

from investflow.utils.context import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from investflow.utils.logging import setup_logging

__all__ = [
    # Logging
    "setup_logging",
    # Context
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
]
