# backend/investflow/schemas/errors.py
"""
Error response bodies written by the exception handlers in main.py.

Every failure reaches the client as {"error", "message", "details"}, so a
dashboard can show the message without knowing which error it was.
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Body for service errors (bad range, missing FX rate, rate limit, ...)."""

    error: str = Field(..., description="Exception class name, e.g. 'FXRateNotFoundError'")
    message: str
    details: dict | None = None


class ValidationErrorDetail(BaseModel):
    """Body for 422 responses; one entry per invalid field of the portfolio payload."""

    error: str = "ValidationError"
    message: str = "Request validation failed"
    details: list[dict]
