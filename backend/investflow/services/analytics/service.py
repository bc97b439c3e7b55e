# backend/investflow/services/analytics/service.py
"""
Analytics Service - orchestrates the cross-sectional portfolio views.

Values the asset list once (one FX conversion per asset) and feeds the
same valuations to every exposure calculation, so all views agree with
each other and with the valuation snapshot.

Usage:
    from investflow.services.analytics import AnalyticsService

    service = AnalyticsService()
    analytics = service.get_analytics(assets, "USD", rates)

    analytics.balance_sheet.debt_ratio
    analytics.risk_buckets
"""

from __future__ import annotations

import logging
from typing import Sequence

from investflow.models import Asset
from investflow.services.analytics import exposure
from investflow.services.analytics.types import PortfolioAnalytics
from investflow.services.constants import PNL_RANKING_LIMIT, TOP_HOLDINGS_LIMIT
from investflow.services.protocols import CurrencyConverter
from investflow.services.valuation.snapshot import value_assets

logger = logging.getLogger(__name__)


class AnalyticsService:
    """
    Service computing allocation, debt and ranking views.

    Attributes:
        _top_holdings_limit: Number of entries in the top holdings view
        _pnl_ranking_limit: Number of entries in each P&L ranking view
    """

    def __init__(
            self,
            top_holdings_limit: int = TOP_HOLDINGS_LIMIT,
            pnl_ranking_limit: int = PNL_RANKING_LIMIT,
    ) -> None:
        self._top_holdings_limit = top_holdings_limit
        self._pnl_ranking_limit = pnl_ranking_limit

    def get_analytics(
            self,
            assets: Sequence[Asset],
            base_currency: str,
            rates: CurrencyConverter,
    ) -> PortfolioAnalytics:
        """
        Compute every cross-sectional view for the current holdings.

        Args:
            assets: Current asset list (not modified)
            base_currency: Currency for all amounts
            rates: Exchange rate snapshot

        Returns:
            PortfolioAnalytics (all views empty when there are no assets)

        Raises:
            FXRateNotFoundError: If an asset currency cannot be converted
        """
        if not assets:
            logger.debug("No assets, returning empty analytics")
            return PortfolioAnalytics(base_currency=base_currency)

        valuations = value_assets(assets, base_currency, rates)
        ranking = exposure.rank_by_pnl(valuations)

        analytics = PortfolioAnalytics(
            base_currency=base_currency,
            allocation=exposure.allocation_by_class(valuations),
            liabilities=exposure.liability_breakdown(valuations),
            balance_sheet=exposure.balance_sheet(valuations),
            risk_buckets=exposure.risk_buckets(valuations),
            top_holdings=exposure.top_holdings(valuations, self._top_holdings_limit),
            pnl_ranking=ranking[:self._pnl_ranking_limit],
            worst_performers=exposure.worst_performers(
                valuations, self._pnl_ranking_limit, ranking=ranking
            ),
        )

        logger.debug(
            f"Analytics for {len(assets)} assets in {base_currency}: "
            f"debt_ratio={analytics.balance_sheet.debt_ratio}"
        )
        return analytics
