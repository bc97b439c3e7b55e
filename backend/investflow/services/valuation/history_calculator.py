# backend/investflow/services/valuation/history_calculator.py
"""
History Calculator for reconstructed portfolio valuation.

There is no historical price database. The only inputs are today's asset
list, the transaction log and today's exchange rates. The series is built
by starting from today's exact snapshot and walking BACKWARD one day at a
time:

1. Undo every transaction dated on that day (reverse replay)
2. Clamp the cost basis at zero (today only when something was undone)
3. For every day except today, remove a bounded random drift from the value
4. Record the day's point

The collected points are then reversed so callers get oldest-first data.

Reverse Replay Rules (base currency amounts):
    BUY:   cost  -= total          value -= total
    SELL:  cost  += qty × price    value += total

    The SELL cost reversal uses market value as a stand-in for the realized
    cost basis of the lots sold. This drifts from lot-level accounting when
    the same asset is bought and sold repeatedly; it is kept as is.

Noise:
    drift = (u - 0.5) × volatility × value,   u ~ U[0, 1)
    volatility = 0.02 if any asset is crypto, else 0.008

    The drift is never applied to the cost basis, and never to today's
    point. With no transactions dated today, the last point equals the
    snapshot exactly (including a negative cost basis from liabilities).

Design Principles:
- Pure function of its inputs (no shared mutable state, inputs not modified)
- The random source is injected so tests can seed or neutralize it
- Current exchange rates are reused for every historical day
- O(N + D) for N transactions and D days (transactions bucketed once)
"""

from __future__ import annotations

import logging
import random
from datetime import date
from decimal import Decimal
from typing import Sequence

from investflow.models import Asset, AssetClass, Transaction, TransactionType
from investflow.services.constants import (
    ALL_RANGE_BUFFER_DAYS,
    ALL_RANGE_DEFAULT_DAYS,
    CRYPTO_VOLATILITY,
    DEFAULT_VOLATILITY,
    NOISE_MIDPOINT,
    ZERO,
)
from investflow.services.protocols import CurrencyConverter, RandomSource
from investflow.services.valuation.replay import bucket_by_date, earliest_transaction_date
from investflow.services.valuation.snapshot import SnapshotCalculator
from investflow.services.valuation.types import (
    DailyPoint,
    HistoryRange,
    PortfolioHistory,
)
from investflow.utils.date_utils import days_back

logger = logging.getLogger(__name__)


class HistoryCalculator:
    """
    Reconstructs a daily valuation history from a single current snapshot.

    Key Insight:
        Today's net worth and cost basis are known exactly. Yesterday's are
        today's minus whatever today's transactions added, minus whatever
        the market did today. We can undo the first precisely (modulo the
        SELL approximation) and can only guess the second, hence the noise.

    Attributes:
        _snapshot_calc: Calculator producing today's anchor figures
        _rng: Source of uniform [0, 1) draws for the market drift
        _crypto_volatility: Drift coefficient when crypto is held
        _default_volatility: Drift coefficient otherwise
    """

    def __init__(
            self,
            snapshot_calc: SnapshotCalculator | None = None,
            rng: RandomSource | None = None,
            crypto_volatility: Decimal = CRYPTO_VOLATILITY,
            default_volatility: Decimal = DEFAULT_VOLATILITY,
    ) -> None:
        """
        Initialize with calculator dependencies.

        Args:
            snapshot_calc: Snapshot calculator (default: new instance)
            rng: Random source (default: unseeded random.Random)
            crypto_volatility: Drift coefficient for portfolios holding crypto
            default_volatility: Drift coefficient for all other portfolios
        """
        self._snapshot_calc = snapshot_calc or SnapshotCalculator()
        self._rng = rng or random.Random()
        self._crypto_volatility = crypto_volatility
        self._default_volatility = default_volatility

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def calculate(
            self,
            assets: Sequence[Asset],
            transactions: Sequence[Transaction],
            history_range: HistoryRange | str,
            base_currency: str,
            rates: CurrencyConverter,
            today: date | None = None,
    ) -> PortfolioHistory:
        """
        Reconstruct the valuation history for a range.

        Args:
            assets: Current asset list (not modified)
            transactions: Transaction log (not modified)
            history_range: Range enum or label ("1W", "1M", ... "ALL")
            base_currency: Currency for all output values
            rates: Exchange rate snapshot, reused for every day
            today: Anchor date (default: date.today())

        Returns:
            PortfolioHistory with one point per day, oldest first.
            Empty data if there are no assets.

        Raises:
            InvalidRangeError: If history_range is not a known label
            FXRateNotFoundError: If an asset or transaction currency
                                 cannot be converted to base_currency
        """
        history_range = HistoryRange.parse(history_range)
        today = today or date.today()
        start_date = self.resolve_start_date(history_range, transactions, today)
        volatility = self.select_volatility(assets)

        if not assets:
            logger.debug("No assets, returning empty history")
            return PortfolioHistory(
                base_currency=base_currency,
                history_range=history_range,
                start_date=start_date,
                end_date=today,
                volatility=volatility,
                data=[],
            )

        warnings: list[str] = []
        snapshot = self._snapshot_calc.calculate(assets, base_currency, rates)
        currency_by_asset = {asset.id: asset.currency for asset in assets}
        buckets = bucket_by_date(transactions)

        future_count = sum(
            len(txns) for day, txns in buckets.items() if day > today
        )
        if future_count:
            msg = f"{future_count} transaction(s) dated after {today} were not replayed"
            logger.warning(msg)
            warnings.append(msg)

        total_days = max((today - start_date).days, 0)

        logger.info(
            f"Reconstructing {history_range.value} history: {start_date} to {today} "
            f"({total_days + 1} points, {len(transactions)} transactions, "
            f"volatility={volatility})"
        )

        sim_value = snapshot.net_worth
        sim_cost = snapshot.cost_basis
        points: list[DailyPoint] = []

        for offset in range(total_days + 1):
            current_date = days_back(today, offset)

            day_txns = buckets.get(current_date, [])
            for txn in day_txns:
                sim_value, sim_cost = self._undo_transaction(
                    txn=txn,
                    sim_value=sim_value,
                    sim_cost=sim_cost,
                    currency_by_asset=currency_by_asset,
                    base_currency=base_currency,
                    rates=rates,
                    warnings=warnings,
                )

            # An untouched today is the exact snapshot; once anything has been
            # undone the cost basis is floored at zero
            if (offset > 0 or day_txns) and sim_cost < ZERO:
                sim_cost = ZERO
            if offset > 0:
                sim_value -= self._drift(sim_value, volatility)

            points.append(DailyPoint(date=current_date, value=sim_value, cost=sim_cost))

        points.reverse()

        return PortfolioHistory(
            base_currency=base_currency,
            history_range=history_range,
            start_date=points[0].date,
            end_date=today,
            volatility=volatility,
            data=points,
            warnings=warnings,
        )

    def reconstruct(
            self,
            assets: Sequence[Asset],
            transactions: Sequence[Transaction],
            history_range: HistoryRange | str,
            base_currency: str,
            rates: CurrencyConverter,
            today: date | None = None,
    ) -> list[DailyPoint]:
        """Same as calculate(), returning only the ordered daily points."""
        return self.calculate(
            assets, transactions, history_range, base_currency, rates, today
        ).data

    def resolve_start_date(
            self,
            history_range: HistoryRange,
            transactions: Sequence[Transaction],
            today: date,
    ) -> date:
        """
        Resolve the oldest date of the series.

        Fixed ranges step back a fixed number of days. ALL starts one week
        before the earliest transaction, or one year back with no
        transactions, so it never comes back empty and never looks further
        back than needed.
        """
        fixed_days = history_range.fixed_days
        if fixed_days is not None:
            return days_back(today, fixed_days)

        earliest = earliest_transaction_date(transactions)
        if earliest is None:
            return days_back(today, ALL_RANGE_DEFAULT_DAYS)

        # Never later than today, so the series always has at least one point
        return min(days_back(earliest, ALL_RANGE_BUFFER_DAYS), today)

    def select_volatility(self, assets: Sequence[Asset]) -> Decimal:
        """Crypto holdings make the reconstructed curve noisier."""
        if any(asset.asset_class == AssetClass.CRYPTO for asset in assets):
            return self._crypto_volatility
        return self._default_volatility

    # =========================================================================
    # PRIVATE HELPERS
    # =========================================================================

    def _undo_transaction(
            self,
            txn: Transaction,
            sim_value: Decimal,
            sim_cost: Decimal,
            currency_by_asset: dict[str, str],
            base_currency: str,
            rates: CurrencyConverter,
            warnings: list[str],
    ) -> tuple[Decimal, Decimal]:
        """
        Reverse one transaction's effect on the running totals.

        A transaction is denominated in its asset's currency. If the asset
        is no longer in the batch, the amounts are taken as base currency.

        Returns:
            (value, cost) as they were before the transaction
        """
        currency = currency_by_asset.get(txn.asset_id)
        if currency is None:
            msg = (
                f"Transaction {txn.id} references unknown asset {txn.asset_id}; "
                f"treating amounts as {base_currency}"
            )
            logger.warning(msg)
            warnings.append(msg)
            currency = base_currency

        total_base = rates.convert(txn.total, currency, base_currency)

        if txn.transaction_type == TransactionType.BUY:
            # Before the buy, that capital was not yet in the portfolio
            return sim_value - total_base, sim_cost - total_base

        # SELL: market value stands in for the realized cost of the lots sold
        gross_base = rates.convert(txn.gross_amount, currency, base_currency)
        return sim_value + total_base, sim_cost + gross_base

    def _drift(self, value: Decimal, volatility: Decimal) -> Decimal:
        """One day's market drift, bounded by ±volatility/2 × value."""
        draw = Decimal(str(self._rng.random()))
        return (draw - NOISE_MIDPOINT) * volatility * value


def reconstruct(
        assets: Sequence[Asset],
        transactions: Sequence[Transaction],
        history_range: HistoryRange | str,
        base_currency: str,
        rates: CurrencyConverter,
        today: date | None = None,
        rng: RandomSource | None = None,
) -> list[DailyPoint]:
    """Functional shortcut for HistoryCalculator(rng=rng).reconstruct()."""
    return HistoryCalculator(rng=rng).reconstruct(
        assets, transactions, history_range, base_currency, rates, today
    )
