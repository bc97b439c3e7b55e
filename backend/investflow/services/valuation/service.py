# backend/investflow/services/valuation/service.py
"""
Valuation Service - Main orchestrator for portfolio valuation.

This is the single entry point for all valuation operations:
- get_snapshot(): Today's net worth and cost basis
- get_history(): Reconstructed daily series for charts

Design Principles:
- Dependency Injection: calculators and random source via constructor
- Single Entry Point: All valuation goes through this service
- No HTTP Knowledge: Raises domain exceptions, not HTTPException
- Snapshot Inputs: assets, transactions and rates are passed on every
  call; the service keeps no portfolio state between calls

Usage:
    from investflow.services.valuation import ValuationService

    service = ValuationService()

    snapshot = service.get_snapshot(assets, "USD", rates)

    history = service.get_history(
        assets, transactions, history_range="3M",
        base_currency="USD", rates=rates,
    )
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Sequence

from investflow.models import Asset, Transaction
from investflow.services.constants import CRYPTO_VOLATILITY, DEFAULT_VOLATILITY
from investflow.services.protocols import CurrencyConverter, RandomSource
from investflow.services.valuation.history_calculator import HistoryCalculator
from investflow.services.valuation.snapshot import SnapshotCalculator
from investflow.services.valuation.types import (
    HistoryRange,
    PortfolioHistory,
    ValuationSnapshot,
)

logger = logging.getLogger(__name__)


class ValuationService:
    """
    Main service for portfolio valuation operations.

    Composes the snapshot calculator (today's anchor) and the history
    calculator (reverse replay). Safe to share between concurrent callers:
    the only instance state is configuration and the random source.

    Attributes:
        _snapshot_calc: Calculator for today's totals
        _history_calc: Calculator for the reconstructed series
    """

    def __init__(
            self,
            rng: RandomSource | None = None,
            crypto_volatility: Decimal = CRYPTO_VOLATILITY,
            default_volatility: Decimal = DEFAULT_VOLATILITY,
    ) -> None:
        """
        Initialize the valuation service.

        Args:
            rng: Random source for history drift (default: unseeded)
            crypto_volatility: Drift coefficient when crypto is held
            default_volatility: Drift coefficient otherwise
        """
        self._snapshot_calc = SnapshotCalculator()
        self._history_calc = HistoryCalculator(
            snapshot_calc=self._snapshot_calc,
            rng=rng,
            crypto_volatility=crypto_volatility,
            default_volatility=default_volatility,
        )

        logger.info("ValuationService initialized")

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def get_snapshot(
            self,
            assets: Sequence[Asset],
            base_currency: str,
            rates: CurrencyConverter,
    ) -> ValuationSnapshot:
        """
        Get today's net worth and cost basis.

        Raises:
            FXRateNotFoundError: If an asset currency cannot be converted
        """
        return self._snapshot_calc.calculate(assets, base_currency, rates)

    def get_history(
            self,
            assets: Sequence[Asset],
            transactions: Sequence[Transaction],
            history_range: HistoryRange | str,
            base_currency: str,
            rates: CurrencyConverter,
            today: date | None = None,
    ) -> PortfolioHistory:
        """
        Get the reconstructed daily valuation history.

        Args:
            assets: Current asset list
            transactions: Transaction log
            history_range: "1W", "1M", "3M", "6M", "1Y" or "ALL"
            base_currency: Currency for all values
            rates: Exchange rate snapshot
            today: Anchor date (default: date.today())

        Returns:
            PortfolioHistory, oldest point first

        Raises:
            InvalidRangeError: If history_range is unknown
            FXRateNotFoundError: If a currency cannot be converted
        """
        history = self._history_calc.calculate(
            assets=assets,
            transactions=transactions,
            history_range=history_range,
            base_currency=base_currency,
            rates=rates,
            today=today,
        )

        if history.warnings:
            logger.info(
                f"History for {history.history_range.value} built with "
                f"{len(history.warnings)} warning(s)"
            )

        return history
