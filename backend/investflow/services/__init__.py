# backend/investflow/services/__init__.py
"""
Services package for business logic.

Subpackages:
- valuation: Today's snapshot and the reconstructed daily history
- analytics: Cross-sectional views (allocation, debt, risk, rankings)

Shared modules:
- exceptions: Domain exceptions (no HTTP knowledge)
- fx_rates: Exchange rate snapshot and currency conversion
- constants: Business constants (ranges, volatility, ranking sizes)
- protocols: Structural types for injected collaborators

Only the exceptions are re-exported here; import the engines from their
subpackages (investflow.services.valuation, investflow.services.analytics).
"""

from investflow.services.exceptions import (
    FXConversionError,
    FXRateError,
    FXRateNotFoundError,
    InvalidRangeError,
    InvalidTransactionError,
    ServiceError,
    ValidationError,
)

__all__ = [
    "ServiceError",
    "ValidationError",
    "InvalidRangeError",
    "InvalidTransactionError",
    "FXRateError",
    "FXRateNotFoundError",
    "FXConversionError",
]
