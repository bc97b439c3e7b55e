# backend/investflow/middleware/rate_limit.py
"""
Rate limiting middleware for API protection.

Valuation requests carry the whole portfolio and replay up to a full
transaction history, so they are limited per client using slowapi.

Rate limits are configured in investflow/services/constants.py per endpoint
type (health, valuation, analytics).

Key by: Client IP address (X-Forwarded-For only from trusted proxies)
Storage: In-memory (single-instance deployments)

Usage:
    from investflow.middleware.rate_limit import limiter, RATE_LIMIT_VALUATION

    @router.post("/history")
    @limiter.limit(RATE_LIMIT_VALUATION)
    def get_history(request: Request, ...):
        ...
"""

import logging

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from investflow.config import settings
from investflow.services.constants import (
    RATE_LIMIT_ANALYTICS,
    RATE_LIMIT_DEFAULT,
    RATE_LIMIT_HEALTH,
    RATE_LIMIT_VALUATION,
)

logger = logging.getLogger(__name__)

# Seconds a throttled client is told to wait
RETRY_AFTER_SECONDS = 60


def _is_trusted_proxy(request: Request) -> bool:
    """
    Check if the immediate client is a trusted proxy.

    With TRUST_PROXY_HEADERS enabled every forwarding header is trusted
    (use only behind a load balancer). Otherwise the direct peer must be
    listed in TRUSTED_PROXY_IPS.
    """
    if settings.trust_proxy_headers:
        return True

    return get_remote_address(request) in settings.trusted_proxy_ips


def _get_client_ip(request: Request) -> str:
    """
    Extract the client IP address used as the rate limit key.

    Forwarding headers are only read from trusted proxies, so clients cannot
    dodge the limit by setting their own X-Forwarded-For.
    """
    if _is_trusted_proxy(request):
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            # First entry is the original client
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

    return get_remote_address(request)


# =============================================================================
# LIMITER INSTANCE
# =============================================================================

limiter = Limiter(
    key_func=_get_client_ip,
    default_limits=[RATE_LIMIT_DEFAULT],
    enabled=not settings.is_test,
)


# =============================================================================
# RATE LIMIT EXCEEDED HANDLER
# =============================================================================

async def rate_limit_exceeded_handler(
        request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """
    Handle rate limit exceeded errors with the standard error format.

    Returns:
        JSONResponse with 429 status and a Retry-After header
    """
    limit_info = str(exc.detail) if exc.detail else "Rate limit exceeded"

    logger.warning(f"Rate limit exceeded for {_get_client_ip(request)}: {limit_info}")

    return JSONResponse(
        status_code=429,
        content={
            "error": "RateLimitError",
            "message": f"Too many requests. {limit_info}",
            "details": {"retry_after": RETRY_AFTER_SECONDS},
        },
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )


__all__ = [
    "limiter",
    "rate_limit_exceeded_handler",
    "SlowAPIMiddleware",
    "RATE_LIMIT_DEFAULT",
    "RATE_LIMIT_HEALTH",
    "RATE_LIMIT_VALUATION",
    "RATE_LIMIT_ANALYTICS",
]
