# backend/investflow/routers/valuation.py
"""
Portfolio valuation endpoints.

- POST /valuation/snapshot - Today's net worth and cost basis
- POST /valuation/history  - Reconstructed daily history for charts

The portfolio (assets, transactions, exchange rates) travels in the request
body. Service errors (missing FX rate, unknown range) propagate to the
global exception handlers in main.py.
"""

from fastapi import APIRouter, Depends, Query, Request

from investflow.config import settings
from investflow.dependencies import get_valuation_service
from investflow.middleware.rate_limit import RATE_LIMIT_VALUATION, limiter
from investflow.schemas.portfolio import PortfolioSnapshotRequest
from investflow.schemas.valuation import (
    HistoryTrendSummary,
    PortfolioHistoryResponse,
    ValuationHistoryPoint,
    ValuationSnapshotResponse,
)
from investflow.services.valuation import (
    DailyPoint,
    PortfolioHistory,
    ValuationService,
    ValuationSnapshot,
)

# =============================================================================
# ROUTER SETUP
# =============================================================================

router = APIRouter(
    prefix="/valuation",
    tags=["Valuation"],
)


# =============================================================================
# MAPPER FUNCTIONS (Internal Types -> Pydantic Schemas)
# =============================================================================

def _map_snapshot(snapshot: ValuationSnapshot) -> ValuationSnapshotResponse:
    return ValuationSnapshotResponse(
        base_currency=snapshot.base_currency,
        net_worth=snapshot.net_worth,
        cost_basis=snapshot.cost_basis,
        unrealized_pnl=snapshot.unrealized_pnl,
        unrealized_pnl_percent=snapshot.unrealized_pnl_percent,
        asset_count=snapshot.asset_count,
    )


def _map_history_point(point: DailyPoint) -> ValuationHistoryPoint:
    return ValuationHistoryPoint(
        date=point.date,
        value=point.value,
        cost=point.cost,
        pnl=point.pnl,
        pnl_percent=point.pnl_percent,
    )


def _map_history(history: PortfolioHistory) -> PortfolioHistoryResponse:
    return PortfolioHistoryResponse(
        base_currency=history.base_currency,
        range=history.history_range.value,
        start_date=history.start_date,
        end_date=history.end_date,
        volatility=history.volatility,
        total_points=history.total_points,
        data=[_map_history_point(p) for p in history.data],
        summary=HistoryTrendSummary(
            period_change=history.period_change,
            period_change_percent=history.period_change_percent,
            is_profitable=history.is_profitable,
        ),
        warnings=history.warnings,
    )


def _base_currency(payload: PortfolioSnapshotRequest) -> str:
    return payload.base_currency or settings.default_base_currency


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post(
    "/snapshot",
    response_model=ValuationSnapshotResponse,
    summary="Get today's portfolio valuation",
)
@limiter.limit(RATE_LIMIT_VALUATION)
def get_valuation_snapshot(
        request: Request,
        payload: PortfolioSnapshotRequest,
        service: ValuationService = Depends(get_valuation_service),
) -> ValuationSnapshotResponse:
    """
    Value the current holdings in the base currency.

    Liabilities are subtracted from both net worth and cost basis.

    Raises **422** if an asset currency has no conversion path.
    """
    snapshot = service.get_snapshot(
        assets=payload.to_assets(),
        base_currency=_base_currency(payload),
        rates=payload.to_exchange_rates(),
    )
    return _map_snapshot(snapshot)


@router.post(
    "/history",
    response_model=PortfolioHistoryResponse,
    summary="Get reconstructed valuation history",
    response_description="Daily net worth and cost basis, oldest first",
)
@limiter.limit(RATE_LIMIT_VALUATION)
def get_valuation_history(
        request: Request,
        payload: PortfolioSnapshotRequest,
        history_range: str = Query(
            default="1M",
            alias="range",
            description="History range: 1W, 1M, 3M, 6M, 1Y or ALL",
        ),
        service: ValuationService = Depends(get_valuation_service),
) -> PortfolioHistoryResponse:
    """
    Rebuild one point per day from today back to the start of the range.

    The last point equals today's snapshot. Earlier points undo each day's
    transactions and add bounded market noise (stronger when the portfolio
    holds crypto), so they are an approximation, not historical prices.

    Raises **400** for an unknown range and **422** if a currency has no
    conversion path.
    """
    history = service.get_history(
        assets=payload.to_assets(),
        transactions=payload.to_transactions(),
        history_range=history_range,
        base_currency=_base_currency(payload),
        rates=payload.to_exchange_rates(),
    )
    return _map_history(history)
