# backend/investflow/routers/analytics.py
"""
Portfolio analytics endpoints.

- POST /analytics/exposure - Allocation, debt, risk and ranking views

The views only look at current holdings; the transaction log in the request
body is ignored here.
"""

from fastapi import APIRouter, Depends, Request

from investflow.config import settings
from investflow.dependencies import get_analytics_service
from investflow.middleware.rate_limit import RATE_LIMIT_ANALYTICS, limiter
from investflow.schemas.analytics import (
    BalanceSheetResponse,
    CategoryAmountResponse,
    HoldingComparisonResponse,
    LiabilityAmountResponse,
    PnLEntryResponse,
    PortfolioExposureResponse,
    RiskBucketResponse,
)
from investflow.schemas.portfolio import PortfolioSnapshotRequest
from investflow.services.analytics import AnalyticsService, PnLEntry, PortfolioAnalytics

# =============================================================================
# ROUTER SETUP
# =============================================================================

router = APIRouter(
    prefix="/analytics",
    tags=["Analytics"],
)


# =============================================================================
# MAPPER FUNCTIONS (Internal Types -> Pydantic Schemas)
# =============================================================================

def _map_pnl_entry(entry: PnLEntry) -> PnLEntryResponse:
    return PnLEntryResponse(asset_id=entry.asset_id, name=entry.name, pnl=entry.pnl)


def _map_analytics(analytics: PortfolioAnalytics) -> PortfolioExposureResponse:
    sheet = analytics.balance_sheet
    return PortfolioExposureResponse(
        base_currency=analytics.base_currency,
        is_empty=analytics.is_empty,
        allocation=[
            CategoryAmountResponse(category=a.category, value=a.value)
            for a in analytics.allocation
        ],
        liabilities=[
            LiabilityAmountResponse(asset_id=d.asset_id, name=d.name, value=d.value)
            for d in analytics.liabilities
        ],
        balance_sheet=BalanceSheetResponse(
            total_assets=sheet.total_assets,
            total_liabilities=sheet.total_liabilities,
            net_worth=sheet.net_worth,
            debt_ratio=sheet.debt_ratio,
        ),
        risk_buckets=[
            RiskBucketResponse(tier=b.tier.value, label=b.label, value=b.value)
            for b in analytics.risk_buckets
        ],
        top_holdings=[
            HoldingComparisonResponse(
                asset_id=h.asset_id,
                name=h.name,
                value=h.value,
                cost=h.cost,
                pnl=h.pnl,
            )
            for h in analytics.top_holdings
        ],
        pnl_ranking=[_map_pnl_entry(e) for e in analytics.pnl_ranking],
        worst_performers=[_map_pnl_entry(e) for e in analytics.worst_performers],
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post(
    "/exposure",
    response_model=PortfolioExposureResponse,
    summary="Get portfolio exposure views",
)
@limiter.limit(RATE_LIMIT_ANALYTICS)
def get_portfolio_exposure(
        request: Request,
        payload: PortfolioSnapshotRequest,
        service: AnalyticsService = Depends(get_analytics_service),
) -> PortfolioExposureResponse:
    """
    Break down current holdings by class, risk tier and P&L.

    Returns:
    - **allocation**: Value per asset class (liabilities excluded)
    - **liabilities** / **balance_sheet**: Debts and the debt ratio
    - **risk_buckets**: High (crypto), Medium (stocks), Low (everything else)
    - **top_holdings**, **pnl_ranking**, **worst_performers**

    An empty asset list returns empty views, not an error.
    """
    analytics = service.get_analytics(
        assets=payload.to_assets(),
        base_currency=payload.base_currency or settings.default_base_currency,
        rates=payload.to_exchange_rates(),
    )
    return _map_analytics(analytics)
