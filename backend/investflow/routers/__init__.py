# backend/investflow/routers/__init__.py
"""
API routers for the InvestFlow API.

Each router handles a specific domain:
- valuation: Today's snapshot and reconstructed history
- analytics: Cross-sectional exposure views
"""

from investflow.routers.analytics import router as analytics_router
from investflow.routers.valuation import router as valuation_router

__all__ = [
    "valuation_router",
    "analytics_router",
]
