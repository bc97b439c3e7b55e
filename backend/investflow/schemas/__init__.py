# backend/investflow/schemas/__init__.py
"""
Pydantic schemas for API request/response validation.

This package contains all Pydantic schemas organized by domain:
- analytics: Cross-sectional views (allocation, risk, rankings)
- errors: Error response formats
- portfolio: Portfolio snapshot request (assets, transactions, rates)
- validators: Reusable validation functions (currency, symbol, dates)
- valuation: Snapshot and reconstructed history

Usage:
    from investflow.schemas import PortfolioSnapshotRequest
    from investflow.schemas import PortfolioHistoryResponse
"""

from investflow.schemas.analytics import (
    BalanceSheetResponse,
    CategoryAmountResponse,
    HoldingComparisonResponse,
    LiabilityAmountResponse,
    PnLEntryResponse,
    PortfolioExposureResponse,
    RiskBucketResponse,
)
from investflow.schemas.errors import ErrorDetail, ValidationErrorDetail
from investflow.schemas.portfolio import (
    AssetInput,
    ExchangeRateInput,
    PortfolioSnapshotRequest,
    TransactionInput,
)
from investflow.schemas.valuation import (
    HistoryTrendSummary,
    PortfolioHistoryResponse,
    ValuationHistoryPoint,
    ValuationSnapshotResponse,
)

__all__ = [
    # Request
    "PortfolioSnapshotRequest",
    "AssetInput",
    "TransactionInput",
    "ExchangeRateInput",
    # Valuation
    "ValuationSnapshotResponse",
    "ValuationHistoryPoint",
    "HistoryTrendSummary",
    "PortfolioHistoryResponse",
    # Analytics
    "PortfolioExposureResponse",
    "CategoryAmountResponse",
    "LiabilityAmountResponse",
    "BalanceSheetResponse",
    "RiskBucketResponse",
    "HoldingComparisonResponse",
    "PnLEntryResponse",
    # Errors
    "ErrorDetail",
    "ValidationErrorDetail",
]
