# backend/investflow/services/analytics/exposure.py
"""
Cross-sectional exposure calculations.

Pure functions over the current holdings (no date dimension). Each one
takes asset valuations already converted to the base currency (see
investflow.services.valuation.value_assets) and returns a view sorted for
display.

Views:
- allocation_by_class: Value per asset class, liabilities excluded
- liability_breakdown: Each liability and its value
- balance_sheet: Assets vs liabilities with the debt ratio
- risk_buckets: High / Medium / Low exposure
- top_holdings: Largest holdings with value and cost
- rank_by_pnl / pnl_ranking / worst_performers: Unrealized P&L ranking

All sorts are descending and stable: holdings with equal amounts keep
their input order. Inputs are never modified.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Sequence

from investflow.models import AssetClass
from investflow.services.analytics.types import (
    BalanceSheet,
    CategoryAmount,
    HoldingComparison,
    LiabilityAmount,
    PnLEntry,
    RiskBucket,
    RiskTier,
)
from investflow.services.constants import PNL_RANKING_LIMIT, TOP_HOLDINGS_LIMIT, ZERO
from investflow.services.valuation.types import AssetValuation, percent_of

logger = logging.getLogger(__name__)

# Asset class → risk tier (anything not listed is LOW)
RISK_TIER_BY_CLASS: dict[AssetClass, RiskTier] = {
    AssetClass.CRYPTO: RiskTier.HIGH,
    AssetClass.STOCK: RiskTier.MEDIUM,
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _holdings(valuations: Sequence[AssetValuation]) -> list[AssetValuation]:
    """Non-liability valuations, in input order."""
    return [v for v in valuations if not v.asset.is_liability]


def _liabilities(valuations: Sequence[AssetValuation]) -> list[AssetValuation]:
    """Liability valuations, in input order."""
    return [v for v in valuations if v.asset.is_liability]


def risk_tier_for(asset_class: AssetClass) -> RiskTier:
    """Map an asset class to its risk tier."""
    return RISK_TIER_BY_CLASS.get(asset_class, RiskTier.LOW)


# =============================================================================
# ALLOCATION
# =============================================================================

def allocation_by_class(valuations: Sequence[AssetValuation]) -> list[CategoryAmount]:
    """
    Sum current value per asset class, excluding liabilities.

    Returns:
        One entry per class present, largest value first
    """
    totals: dict[AssetClass, Decimal] = {}
    for valuation in _holdings(valuations):
        asset_class = valuation.asset.asset_class
        totals[asset_class] = totals.get(asset_class, ZERO) + valuation.value

    return sorted(
        (CategoryAmount(category=cls, value=value) for cls, value in totals.items()),
        key=lambda entry: entry.value,
        reverse=True,
    )


def liability_breakdown(valuations: Sequence[AssetValuation]) -> list[LiabilityAmount]:
    """
    List every liability with its outstanding value.

    Returns:
        One entry per liability asset, largest value first
    """
    return sorted(
        (
            LiabilityAmount(
                asset_id=v.asset.id,
                name=v.asset.display_name,
                value=v.value,
            )
            for v in _liabilities(valuations)
        ),
        key=lambda entry: entry.value,
        reverse=True,
    )


# =============================================================================
# BALANCE SHEET
# =============================================================================

def balance_sheet(valuations: Sequence[AssetValuation]) -> BalanceSheet:
    """
    Compare total holdings against total liabilities.

    debt_ratio = total_liabilities / total_assets × 100

    When total_assets is 0 the ratio is 0, whether or not there are
    liabilities. Consumers render the figure directly, so it must stay a
    finite number.
    """
    total_assets = sum((v.value for v in _holdings(valuations)), ZERO)
    total_liabilities = sum((v.value for v in _liabilities(valuations)), ZERO)

    if total_assets == ZERO and total_liabilities > ZERO:
        logger.debug("Debt ratio undefined with no assets, reporting 0")

    return BalanceSheet(
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        debt_ratio=percent_of(total_liabilities, total_assets),
    )


# =============================================================================
# RISK
# =============================================================================

def risk_buckets(valuations: Sequence[AssetValuation]) -> list[RiskBucket]:
    """
    Split non-liability value into High / Medium / Low tiers.

    The buckets partition total holdings value exactly. Tiers with zero
    value are left out rather than emitted as empty entries. A tier that
    nets negative (short positions) is kept so the partition still holds.

    Returns:
        Buckets in tier order (High, Medium, Low)
    """
    totals: dict[RiskTier, Decimal] = {tier: ZERO for tier in RiskTier}
    for valuation in _holdings(valuations):
        totals[risk_tier_for(valuation.asset.asset_class)] += valuation.value

    return [
        RiskBucket(tier=tier, value=value)
        for tier, value in totals.items()
        if value != ZERO
    ]


# =============================================================================
# RANKINGS
# =============================================================================

def top_holdings(
        valuations: Sequence[AssetValuation],
        limit: int = TOP_HOLDINGS_LIMIT,
) -> list[HoldingComparison]:
    """
    Largest holdings by current value, with cost for comparison.

    Returns:
        At most ``limit`` entries, largest value first
    """
    ranked = sorted(_holdings(valuations), key=lambda v: v.value, reverse=True)
    return [
        HoldingComparison(
            asset_id=v.asset.id,
            name=v.asset.symbol,
            value=v.value,
            cost=v.cost,
        )
        for v in ranked[:limit]
    ]


def rank_by_pnl(valuations: Sequence[AssetValuation]) -> list[PnLEntry]:
    """
    Every holding ranked by unrealized P&L, best first.

    This full ranking backs both the top performers and the worst
    performers views.
    """
    entries = [
        PnLEntry(asset_id=v.asset.id, name=v.asset.symbol, pnl=v.pnl)
        for v in _holdings(valuations)
    ]
    return sorted(entries, key=lambda entry: entry.pnl, reverse=True)


def pnl_ranking(
        valuations: Sequence[AssetValuation],
        limit: int = PNL_RANKING_LIMIT,
) -> list[PnLEntry]:
    """Best performers: the head of rank_by_pnl()."""
    return rank_by_pnl(valuations)[:limit]


def worst_performers(
        valuations: Sequence[AssetValuation],
        limit: int = PNL_RANKING_LIMIT,
        ranking: list[PnLEntry] | None = None,
) -> list[PnLEntry]:
    """
    Worst performers: the tail of rank_by_pnl(), worst first.

    Args:
        valuations: Asset valuations in base currency
        limit: Maximum number of entries
        ranking: A full ranking already computed by rank_by_pnl()
    """
    if limit <= 0:
        return []
    ranking = ranking if ranking is not None else rank_by_pnl(valuations)
    return list(reversed(ranking[-limit:]))
