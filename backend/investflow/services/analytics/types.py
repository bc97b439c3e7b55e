# backend/investflow/services/analytics/types.py
"""
Data types for the Analytics Service.

This module defines the cross-sectional views computed from the current
asset list (no time dimension). All amounts are Decimal in the base
currency.

Architecture:
    - CategoryAmount: Value aggregated per asset class
    - LiabilityAmount: A single debt and its value
    - BalanceSheet: Assets vs liabilities and the debt ratio
    - RiskBucket: Value held in one risk tier
    - HoldingComparison: Value vs cost for one holding
    - PnLEntry: Unrealized P&L for one holding
    - PortfolioAnalytics: Combined result from all views
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from investflow.models import AssetClass


class RiskTier(str, Enum):
    """
    Fixed mapping of asset classes to exposure tiers.

    Attributes:
        HIGH: Crypto
        MEDIUM: Stocks
        LOW: Funds, cash and real estate
    """
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def label(self) -> str:
        return RISK_TIER_LABELS[self]


RISK_TIER_LABELS: dict[RiskTier, str] = {
    RiskTier.HIGH: "High (Crypto)",
    RiskTier.MEDIUM: "Medium (Stocks)",
    RiskTier.LOW: "Low (Cash/Real Estate)",
}


# =============================================================================
# ALLOCATION
# =============================================================================

@dataclass(frozen=True)
class CategoryAmount:
    """
    Base-currency value aggregated for one asset class.

    Attributes:
        category: Asset class tag
        value: Sum of quantity × current price for the class
    """
    category: AssetClass
    value: Decimal


@dataclass(frozen=True)
class LiabilityAmount:
    """
    One liability and its outstanding value.

    Attributes:
        asset_id: ID of the liability asset
        name: Display name (falls back to the symbol)
        value: Outstanding amount as a positive magnitude
    """
    asset_id: str
    name: str
    value: Decimal


# =============================================================================
# BALANCE SHEET
# =============================================================================

@dataclass(frozen=True)
class BalanceSheet:
    """
    Assets versus liabilities.

    Attributes:
        total_assets: Value of all non-liability holdings
        total_liabilities: Value of all liabilities (positive magnitude)
        debt_ratio: total_liabilities / total_assets × 100, or 0 when
                    total_assets is 0 (including the 0/0 case)
    """
    total_assets: Decimal
    total_liabilities: Decimal
    debt_ratio: Decimal

    @property
    def net_worth(self) -> Decimal:
        return self.total_assets - self.total_liabilities


# =============================================================================
# RISK
# =============================================================================

@dataclass(frozen=True)
class RiskBucket:
    """
    Value held in one risk tier.

    Attributes:
        tier: Risk tier
        value: Sum of holdings mapped to the tier
    """
    tier: RiskTier
    value: Decimal

    @property
    def label(self) -> str:
        return self.tier.label


# =============================================================================
# RANKINGS
# =============================================================================

@dataclass(frozen=True)
class HoldingComparison:
    """
    Current value next to cost for one holding.

    Attributes:
        asset_id: ID of the asset
        name: Symbol shown in charts
        value: Current value in base currency
        cost: Cost basis in base currency
    """
    asset_id: str
    name: str
    value: Decimal
    cost: Decimal

    @property
    def pnl(self) -> Decimal:
        return self.value - self.cost


@dataclass(frozen=True)
class PnLEntry:
    """
    Unrealized P&L for one holding.

    Attributes:
        asset_id: ID of the asset
        name: Symbol shown in charts
        pnl: value - cost in base currency
    """
    asset_id: str
    name: str
    pnl: Decimal


# =============================================================================
# COMBINED RESULT
# =============================================================================

@dataclass
class PortfolioAnalytics:
    """
    All cross-sectional views for one portfolio snapshot.

    Every list is already sorted for display. All lists are empty (and the
    balance sheet all zeros) when the portfolio has no assets.
    """
    base_currency: str
    allocation: list[CategoryAmount] = field(default_factory=list)
    liabilities: list[LiabilityAmount] = field(default_factory=list)
    balance_sheet: BalanceSheet = field(
        default_factory=lambda: BalanceSheet(Decimal("0"), Decimal("0"), Decimal("0"))
    )
    risk_buckets: list[RiskBucket] = field(default_factory=list)
    top_holdings: list[HoldingComparison] = field(default_factory=list)
    pnl_ranking: list[PnLEntry] = field(default_factory=list)
    worst_performers: list[PnLEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.allocation or self.liabilities)
