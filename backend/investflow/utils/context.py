# backend/investflow/utils/context.py
"""
Request context for the InvestFlow API.

Holds the correlation ID of the request being served, so that every log
line written while computing a valuation can be traced back to it.

Uses Python's contextvars for async-safe storage that automatically
propagates through async/await calls and into the threadpool used for
sync endpoints.

Usage:
    from investflow.utils.context import get_correlation_id, set_correlation_id

    # In middleware
    set_correlation_id("abc-123")

    # In any service/handler
    correlation_id = get_correlation_id()  # Returns "abc-123"
"""

from contextvars import ContextVar

# =============================================================================
# CONTEXT VARIABLES
# =============================================================================

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


# =============================================================================
# CORRELATION ID
# =============================================================================

def get_correlation_id() -> str | None:
    """
    Get the current request's correlation ID.

    Returns:
        The correlation ID for the current request, or None outside a request.
    """
    return _correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    """
    Set the correlation ID for the current request.

    Args:
        correlation_id: Unique identifier for this request
    """
    _correlation_id_var.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation ID at the end of a request."""
    _correlation_id_var.set(None)
