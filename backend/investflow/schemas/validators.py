# backend/investflow/schemas/validators.py
"""
Reusable validation functions for Pydantic schemas.

This module provides:
- Currency code validation (ISO 4217)
- Symbol normalization
- Calendar-day coercion for transaction dates

These validators ensure consistent input handling across all schemas.
"""

import re
from datetime import date, datetime

from investflow.utils.date_utils import to_calendar_day

# =============================================================================
# CONSTANTS
# =============================================================================

# Currency: ISO 4217 format (3 uppercase letters)
CURRENCY_PATTERN = re.compile(r'^[A-Z]{3}$')

SYMBOL_MAX_LENGTH = 20


# =============================================================================
# CURRENCY VALIDATION
# =============================================================================

def validate_currency(value: str) -> str:
    """
    Validate and normalize a currency code.

    Args:
        value: Raw currency input (e.g., "usd", "EUR")

    Returns:
        Normalized currency (uppercase, trimmed)

    Raises:
        ValueError: If currency format is invalid
    """
    if not value:
        raise ValueError("Currency cannot be empty")

    normalized = value.strip().upper()

    if not CURRENCY_PATTERN.match(normalized):
        raise ValueError(
            f"Invalid currency format: '{normalized}'. "
            "Currency must be a 3-letter ISO code (e.g., USD, EUR)"
        )

    return normalized


# =============================================================================
# SYMBOL VALIDATION
# =============================================================================

def normalize_symbol(value: str) -> str:
    """
    Trim and uppercase a ticker / asset symbol.

    Raises:
        ValueError: If the symbol is empty or too long
    """
    normalized = value.strip().upper() if value else ""

    if not normalized:
        raise ValueError("Symbol cannot be empty")
    if len(normalized) > SYMBOL_MAX_LENGTH:
        raise ValueError(f"Symbol cannot exceed {SYMBOL_MAX_LENGTH} characters")

    return normalized


# =============================================================================
# DATE VALIDATION
# =============================================================================

def coerce_calendar_day(value: date | datetime | str) -> date:
    """
    Accept a date, a datetime or an ISO 8601 string and keep only the day.

    Transactions recorded with a time of day ("2024-03-01T15:30:00Z") are
    bucketed with every other trade of that calendar day.

    Raises:
        ValueError: If the value cannot be parsed as a date
    """
    if isinstance(value, (date, datetime, str)):
        return to_calendar_day(value)
    raise ValueError(f"Invalid date: {value!r}")
