# backend/investflow/schemas/analytics.py
"""
Pydantic schemas for Portfolio Analytics.

These schemas handle the cross-sectional views of the current holdings:
- Allocation by asset class
- Liabilities and balance sheet
- Risk buckets
- Top holdings and P&L rankings

All amounts are in the request's base currency.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from investflow.models import AssetClass


# =============================================================================
# ALLOCATION SCHEMAS
# =============================================================================

class CategoryAmountResponse(BaseModel):
    """Value held in one asset class."""

    category: AssetClass
    value: Decimal


class LiabilityAmountResponse(BaseModel):
    """One liability and its outstanding value."""

    asset_id: str
    name: str = Field(..., description="Liability name (falls back to symbol)")
    value: Decimal


# =============================================================================
# BALANCE SHEET SCHEMAS
# =============================================================================

class BalanceSheetResponse(BaseModel):
    """Assets versus liabilities."""

    total_assets: Decimal
    total_liabilities: Decimal
    net_worth: Decimal = Field(..., description="total_assets - total_liabilities")
    debt_ratio: Decimal = Field(
        ...,
        description="total_liabilities / total_assets × 100 (0 when there are no assets)"
    )


# =============================================================================
# RISK SCHEMAS
# =============================================================================

class RiskBucketResponse(BaseModel):
    """Value held in one risk tier."""

    tier: str = Field(..., description="HIGH, MEDIUM or LOW")
    label: str = Field(..., description="Display label, e.g. 'High (Crypto)'")
    value: Decimal


# =============================================================================
# RANKING SCHEMAS
# =============================================================================

class HoldingComparisonResponse(BaseModel):
    """Value next to cost for one holding."""

    asset_id: str
    name: str
    value: Decimal
    cost: Decimal
    pnl: Decimal


class PnLEntryResponse(BaseModel):
    """Unrealized P&L for one holding."""

    asset_id: str
    name: str
    pnl: Decimal


# =============================================================================
# COMBINED RESPONSE
# =============================================================================

class PortfolioExposureResponse(BaseModel):
    """Every cross-sectional view, each list sorted for display."""

    base_currency: str
    is_empty: bool = Field(..., description="True when the portfolio has no assets")
    allocation: list[CategoryAmountResponse]
    liabilities: list[LiabilityAmountResponse]
    balance_sheet: BalanceSheetResponse
    risk_buckets: list[RiskBucketResponse]
    top_holdings: list[HoldingComparisonResponse]
    pnl_ranking: list[PnLEntryResponse]
    worst_performers: list[PnLEntryResponse]
