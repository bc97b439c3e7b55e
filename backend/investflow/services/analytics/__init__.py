# backend/investflow/services/analytics/__init__.py
"""
Analytics Service Package.

Cross-sectional views over the current holdings:
- Allocation by asset class
- Liability breakdown and balance sheet (debt ratio)
- Risk buckets (High / Medium / Low)
- Top holdings (value vs cost)
- P&L ranking and worst performers

Usage:
    from investflow.services.analytics import AnalyticsService

    analytics = AnalyticsService().get_analytics(assets, "USD", rates)

Architecture:
    analytics/
    ├── __init__.py     # This file - package exports
    ├── types.py        # Result data classes
    ├── exposure.py     # Pure calculation functions
    └── service.py      # AnalyticsService (orchestrator)
"""

from investflow.services.analytics.exposure import (
    allocation_by_class,
    balance_sheet,
    liability_breakdown,
    pnl_ranking,
    rank_by_pnl,
    risk_buckets,
    risk_tier_for,
    top_holdings,
    worst_performers,
)
from investflow.services.analytics.service import AnalyticsService
from investflow.services.analytics.types import (
    BalanceSheet,
    CategoryAmount,
    HoldingComparison,
    LiabilityAmount,
    PnLEntry,
    PortfolioAnalytics,
    RiskBucket,
    RiskTier,
)

__all__ = [
    # Service
    "AnalyticsService",

    # Types
    "PortfolioAnalytics",
    "CategoryAmount",
    "LiabilityAmount",
    "BalanceSheet",
    "RiskTier",
    "RiskBucket",
    "HoldingComparison",
    "PnLEntry",

    # Calculations
    "allocation_by_class",
    "liability_breakdown",
    "balance_sheet",
    "risk_buckets",
    "risk_tier_for",
    "top_holdings",
    "rank_by_pnl",
    "pnl_ranking",
    "worst_performers",
]
