# backend/investflow/services/constants.py
"""
Centralized constants for the InvestFlow services.

This module provides a single source of truth for the business constants
used by the valuation and analytics engines. Centralizing these values:

1. Prevents inconsistencies from duplicate definitions
2. Makes it easy to tune parameters in one place
3. Documents the meaning and units of each constant

Usage:
    from investflow.services.constants import (
        CRYPTO_VOLATILITY,
        TOP_HOLDINGS_LIMIT,
        RANGE_DAYS,
    )
"""

from decimal import Decimal


# =============================================================================
# HISTORY RECONSTRUCTION
# =============================================================================

# Day counts looked back from today for each fixed history range.
# "ALL" is resolved from the transaction log and is not listed here.
RANGE_DAYS: dict[str, int] = {
    "1W": 7,
    "1M": 30,
    "3M": 90,
    "6M": 180,
    "1Y": 365,
}

# Buffer before the earliest transaction when resolving the "ALL" range
ALL_RANGE_BUFFER_DAYS: int = 7

# Lookback for "ALL" when there are no transactions at all
ALL_RANGE_DEFAULT_DAYS: int = 365

# Daily noise coefficient when any holding is crypto (noisier curve)
CRYPTO_VOLATILITY: Decimal = Decimal("0.02")

# Daily noise coefficient for every other portfolio
DEFAULT_VOLATILITY: Decimal = Decimal("0.008")

# Centre of the uniform [0, 1) draw; draws above it raise yesterday's value
NOISE_MIDPOINT: Decimal = Decimal("0.5")


# =============================================================================
# CROSS-SECTIONAL AGGREGATION
# =============================================================================

# Number of holdings shown in the top holdings (value vs cost) view
TOP_HOLDINGS_LIMIT: int = 6

# Number of entries in the P&L ranking and worst performers views
PNL_RANKING_LIMIT: int = 8


# =============================================================================
# NUMERIC PRECISION
# =============================================================================

# Percentages are reported with 4 decimal places (e.g. 12.3456%)
PERCENT_QUANTIZE: Decimal = Decimal("0.0001")

HUNDRED: Decimal = Decimal("100")
ZERO: Decimal = Decimal("0")


# =============================================================================
# RATE LIMITING (requests per time window, slowapi notation)
# =============================================================================

RATE_LIMIT_DEFAULT: str = "100/minute"
RATE_LIMIT_HEALTH: str = "300/minute"
RATE_LIMIT_VALUATION: str = "60/minute"
RATE_LIMIT_ANALYTICS: str = "60/minute"
