# backend/investflow/services/valuation/__init__.py
"""
Valuation Service Package.

This package provides portfolio valuation capabilities:
- Today's snapshot (get_snapshot)
- Reconstructed daily history for charts (get_history)

Usage:
    from investflow.services.valuation import ValuationService

    service = ValuationService()

    snapshot = service.get_snapshot(assets, "EUR", rates)
    history = service.get_history(assets, transactions, "1M", "EUR", rates)

Architecture:
    valuation/
    ├── __init__.py              # This file - package exports
    ├── types.py                 # Internal data classes
    ├── snapshot.py              # Today's net worth / cost basis
    ├── replay.py                # Transaction bucketing by calendar day
    ├── history_calculator.py    # Reverse replay time series
    └── service.py               # ValuationService (orchestrator)

Data Flow:
    Assets + Rates → SnapshotCalculator → ValuationSnapshot
    Transactions → bucket_by_date → {day: [txn, ...]}
    Snapshot + Buckets + Noise → HistoryCalculator → PortfolioHistory

Key Types:
    - HistoryRange: 1W / 1M / 3M / 6M / 1Y / ALL
    - AssetValuation: One asset's value and cost in base currency
    - ValuationSnapshot: Today's totals
    - DailyPoint: Single point in the time series
    - PortfolioHistory: Full time series result
"""

# Calculators (for testing / direct usage)
from investflow.services.valuation.history_calculator import HistoryCalculator, reconstruct
from investflow.services.valuation.replay import bucket_by_date
from investflow.services.valuation.snapshot import (
    SnapshotCalculator,
    build_snapshot,
    value_asset,
    value_assets,
)
# Main service
from investflow.services.valuation.service import ValuationService
# Internal types (for advanced usage / testing)
from investflow.services.valuation.types import (
    AssetValuation,
    DailyPoint,
    HistoryRange,
    PortfolioHistory,
    ValuationSnapshot,
)

__all__ = [
    # Main service
    "ValuationService",

    # Data types
    "HistoryRange",
    "AssetValuation",
    "ValuationSnapshot",
    "DailyPoint",
    "PortfolioHistory",

    # Calculators and functional entry points
    "SnapshotCalculator",
    "HistoryCalculator",
    "build_snapshot",
    "bucket_by_date",
    "reconstruct",
    "value_asset",
    "value_assets",
]
