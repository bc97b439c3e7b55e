# backend/investflow/schemas/valuation.py
"""
Pydantic schemas for Portfolio Valuation.

These schemas handle:
- Today's snapshot (net worth, cost basis, unrealized P&L)
- Reconstructed valuation history (time series for charts)
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field


# =============================================================================
# SNAPSHOT SCHEMAS
# =============================================================================

class ValuationSnapshotResponse(BaseModel):
    """Today's portfolio totals in the base currency."""

    base_currency: str = Field(..., description="Currency of every amount")
    net_worth: Decimal = Field(..., description="Assets minus liabilities")
    cost_basis: Decimal = Field(..., description="Invested capital minus liability cost")
    unrealized_pnl: Decimal = Field(..., description="net_worth - cost_basis")
    unrealized_pnl_percent: Decimal = Field(
        ...,
        description="unrealized_pnl / cost_basis × 100 (0 when cost basis is 0)"
    )
    asset_count: int = Field(..., ge=0, description="Number of assets valued")


# =============================================================================
# HISTORY SCHEMAS
# =============================================================================

class ValuationHistoryPoint(BaseModel):
    """Single point in the reconstructed time series."""

    date: dt.date
    value: Decimal = Field(..., description="Net worth on that day")
    cost: Decimal = Field(..., description="Cost basis on that day")
    pnl: Decimal = Field(..., description="value - cost")
    pnl_percent: Decimal = Field(..., description="pnl / cost × 100 (0 when cost is 0)")


class HistoryTrendSummary(BaseModel):
    """Change between the first and last points of the series."""

    period_change: Decimal = Field(..., description="Last value - first value")
    period_change_percent: Decimal = Field(..., description="Change relative to first value")
    is_profitable: bool = Field(..., description="Last point's P&L is non-negative")


class PortfolioHistoryResponse(BaseModel):
    """
    Reconstructed daily valuation history.

    Only the last point is exact: earlier points replay the transaction log
    backward from today and add bounded market noise.
    """

    base_currency: str
    range: str = Field(..., description="Requested range (1W, 1M, 3M, 6M, 1Y, ALL)")
    start_date: dt.date = Field(..., description="Oldest date in the series")
    end_date: dt.date = Field(..., description="Most recent date (today)")
    volatility: Decimal = Field(..., description="Noise coefficient used")
    total_points: int = Field(..., ge=0)
    data: list[ValuationHistoryPoint] = Field(..., description="Daily points, oldest first")
    summary: HistoryTrendSummary
    warnings: list[str] = Field(default_factory=list, description="Data quality notes")
