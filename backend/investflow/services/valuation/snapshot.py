# backend/investflow/services/valuation/snapshot.py
"""
Point-in-time valuation of the current asset list.

SnapshotCalculator reduces today's assets into the two anchor figures the
history engine starts from:

    net_worth  = Σ value(non-liability) - Σ value(liability)
    cost_basis = Σ cost(non-liability)  - Σ cost(liability)

where value = quantity × current_price and cost = quantity × avg_cost, each
converted from the asset's currency into the base currency.

Design Principles:
- Stateless (no instance state, pure functions)
- Receives the rate snapshot explicitly
- Uses Decimal for ALL financial calculations
- A missing rate is an error, never a silent 1:1 conversion
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable

from investflow.models import Asset
from investflow.services.protocols import CurrencyConverter
from investflow.services.valuation.types import AssetValuation, ValuationSnapshot

logger = logging.getLogger(__name__)


def value_asset(
        asset: Asset,
        base_currency: str,
        rates: CurrencyConverter,
) -> AssetValuation:
    """
    Convert one asset's value and cost into the base currency.

    Raises:
        FXRateNotFoundError: If the asset's currency has no path to base_currency
    """
    return AssetValuation(
        asset=asset,
        value=rates.convert(asset.market_value_local, asset.currency, base_currency),
        cost=rates.convert(asset.cost_local, asset.currency, base_currency),
    )


def value_assets(
        assets: Iterable[Asset],
        base_currency: str,
        rates: CurrencyConverter,
) -> list[AssetValuation]:
    """Value every asset, preserving input order."""
    return [value_asset(asset, base_currency, rates) for asset in assets]


class SnapshotCalculator:
    """
    Calculates today's net worth and cost basis.

    Liabilities are stored as positive magnitudes on the asset; this is
    where the sign flip happens.
    """

    def calculate(
            self,
            assets: Iterable[Asset],
            base_currency: str,
            rates: CurrencyConverter,
    ) -> ValuationSnapshot:
        """
        Build the valuation snapshot.

        Args:
            assets: Current asset list (not modified)
            base_currency: Currency to express totals in
            rates: Exchange rate snapshot

        Returns:
            ValuationSnapshot with net worth and cost basis

        Raises:
            FXRateNotFoundError: If any asset currency cannot be converted
        """
        net_worth = Decimal("0")
        cost_basis = Decimal("0")
        count = 0

        for valuation in value_assets(assets, base_currency, rates):
            if valuation.asset.is_liability:
                net_worth -= valuation.value
                cost_basis -= valuation.cost
            else:
                net_worth += valuation.value
                cost_basis += valuation.cost
            count += 1

        logger.debug(
            f"Snapshot in {base_currency}: {count} assets, "
            f"net_worth={net_worth}, cost_basis={cost_basis}"
        )

        return ValuationSnapshot(
            base_currency=base_currency,
            net_worth=net_worth,
            cost_basis=cost_basis,
            asset_count=count,
        )


def build_snapshot(
        assets: Iterable[Asset],
        base_currency: str,
        rates: CurrencyConverter,
) -> ValuationSnapshot:
    """Functional shortcut for SnapshotCalculator().calculate()."""
    return SnapshotCalculator().calculate(assets, base_currency, rates)
