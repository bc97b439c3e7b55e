# backend/investflow/dependencies.py
"""
Dependency injection module for FastAPI services.

The engines keep no per-request state, so one instance of each service is
shared across all requests. Services are lazily initialized on first use
to avoid import-time side effects, and take their tuning from settings.

Usage in routers:
    from investflow.dependencies import get_valuation_service

    @router.post("/history")
    def get_history(
        service: ValuationService = Depends(get_valuation_service),
    ):
        ...

Tests can swap a service with app.dependency_overrides.
"""

import logging
from functools import lru_cache

from investflow.config import settings
from investflow.services.analytics import AnalyticsService
from investflow.services.valuation import ValuationService

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON SERVICE INSTANCES
# =============================================================================

@lru_cache(maxsize=1)
def get_valuation_service() -> ValuationService:
    """Get the singleton valuation service (snapshot + history)."""
    logger.debug(
        f"Creating ValuationService (crypto_volatility={settings.crypto_volatility}, "
        f"default_volatility={settings.default_volatility})"
    )
    return ValuationService(
        crypto_volatility=settings.crypto_volatility,
        default_volatility=settings.default_volatility,
    )


@lru_cache(maxsize=1)
def get_analytics_service() -> AnalyticsService:
    """Get the singleton analytics service (cross-sectional views)."""
    return AnalyticsService(
        top_holdings_limit=settings.top_holdings_limit,
        pnl_ranking_limit=settings.pnl_ranking_limit,
    )
