# backend/investflow/middleware/correlation.py
"""
Request tracing for the valuation endpoints.

Each request runs under one correlation ID: the caller's X-Correlation-ID
(or X-Request-ID) when given, a fresh UUID4 otherwise. The ID is stored in
the request context so every log line written while valuing the portfolio
carries it, and it is echoed back in the X-Correlation-ID response header.
"""

import uuid
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from investflow.utils.context import clear_correlation_id, set_correlation_id

CORRELATION_ID_HEADER = "X-Correlation-ID"

# Checked in order; the first non-empty value wins
INCOMING_HEADERS = (CORRELATION_ID_HEADER, "X-Request-ID")


def resolve_correlation_id(request: Request) -> str:
    """Caller-supplied ID if any, else a new UUID4."""
    for header in INCOMING_HEADERS:
        value = request.headers.get(header, "").strip()
        if value:
            return value
    return str(uuid.uuid4())


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Binds a correlation ID to the request context for the request's lifetime."""

    async def dispatch(
            self,
            request: Request,
            call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        correlation_id = resolve_correlation_id(request)
        set_correlation_id(correlation_id)
        try:
            response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
