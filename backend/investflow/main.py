# backend/investflow/main.py
"""
FastAPI application entry point.

This file:
- Configures application-wide logging
- Creates the FastAPI application
- Registers middleware (CORS, rate limiting, correlation IDs)
- Registers global exception handlers
- Registers all routers
- Defines global endpoints (health check)

Run locally:
    uvicorn investflow.main:app --reload --app-dir backend
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from investflow.config import settings
from investflow.middleware import (
    RATE_LIMIT_HEALTH,
    CorrelationIdMiddleware,
    SlowAPIMiddleware,
    limiter,
    rate_limit_exceeded_handler,
)
from investflow.routers import analytics_router, valuation_router
from investflow.schemas.errors import ErrorDetail, ValidationErrorDetail
from investflow.services.exceptions import (
    FXConversionError,
    FXRateNotFoundError,
    InvalidRangeError,
    ServiceError,
    ValidationError,
)
from investflow.utils import setup_logging

logger = logging.getLogger(__name__)

# =============================================================================
# LOGGING SETUP (must be before app creation)
# =============================================================================

setup_logging()

# =============================================================================
# APPLICATION SETUP
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Portfolio valuation history and exposure analytics API",
    version="0.1.0",
)


# =============================================================================
# CORS MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)


# =============================================================================
# MIDDLEWARE (order matters: last added = first executed)
# =============================================================================

# Attach limiter to app state (required by slowapi)
app.state.limiter = limiter

app.add_middleware(SlowAPIMiddleware)
app.add_middleware(CorrelationIdMiddleware)


# =============================================================================
# GLOBAL EXCEPTION HANDLERS
# =============================================================================
# Service exceptions carry no HTTP knowledge; they are mapped to status
# codes here. The most specific registered class wins.
# =============================================================================

app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


@app.exception_handler(InvalidRangeError)
async def invalid_range_handler(
        request: Request, exc: InvalidRangeError
) -> JSONResponse:
    """Handle unknown history range labels (400)."""
    logger.warning(f"Invalid range: {exc.history_range}")
    return JSONResponse(
        status_code=400,
        content=ErrorDetail(
            error="InvalidRangeError",
            message=str(exc),
            details={
                "range": exc.history_range,
                "valid_options": InvalidRangeError.VALID_OPTIONS,
            },
        ).model_dump(),
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(
        request: Request, exc: ValidationError
) -> JSONResponse:
    """Handle domain validation errors (400)."""
    logger.warning(f"Validation error: {exc}")
    return JSONResponse(
        status_code=400,
        content=ErrorDetail(
            error="ValidationError",
            message=str(exc),
            details={"field": exc.field} if exc.field else None,
        ).model_dump(),
    )


@app.exception_handler(FXRateNotFoundError)
async def fx_rate_not_found_handler(
        request: Request, exc: FXRateNotFoundError
) -> JSONResponse:
    """Handle a currency with no conversion path in the rate table (422)."""
    logger.warning(f"FX rate not found: {exc.base_currency}/{exc.quote_currency}")
    return JSONResponse(
        status_code=422,
        content=ErrorDetail(
            error="FXRateNotFoundError",
            message=str(exc),
            details={
                "base_currency": exc.base_currency,
                "quote_currency": exc.quote_currency,
            },
        ).model_dump(),
    )


@app.exception_handler(FXConversionError)
async def fx_conversion_error_handler(
        request: Request, exc: FXConversionError
) -> JSONResponse:
    """Handle unusable rates in the rate table (400)."""
    logger.warning(f"FX conversion error: {exc}")
    return JSONResponse(
        status_code=400,
        content=ErrorDetail(
            error="FXConversionError",
            message=str(exc),
            details={
                "base_currency": exc.base_currency,
                "quote_currency": exc.quote_currency,
            } if exc.base_currency else None,
        ).model_dump(),
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Handle generic service errors (500)."""
    logger.error(f"Service error: {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorDetail(
            error="ServiceError",
            message=str(exc),
            details=None,
        ).model_dump(),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle all HTTPExceptions with consistent error format.

    Converts FastAPI's default {"detail": "..."} format to ErrorDetail.
    """
    error_types = {
        400: "BadRequestError",
        404: "NotFoundError",
        405: "MethodNotAllowedError",
        422: "ValidationError",
        429: "RateLimitError",
        500: "InternalServerError",
    }
    error_type = error_types.get(exc.status_code, "HTTPError")

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorDetail(
            error=error_type,
            message=str(exc.detail) if exc.detail else "An error occurred",
            details=None,
        ).model_dump(),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
        request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Convert Pydantic request validation errors to ValidationErrorDetail (422)."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]

    return JSONResponse(
        status_code=422,
        content=ValidationErrorDetail(
            error="ValidationError",
            message="Request validation failed",
            details=errors,
        ).model_dump(),
    )


# =============================================================================
# ROUTER REGISTRATION
# =============================================================================

app.include_router(valuation_router)  # /valuation/*
app.include_router(analytics_router)  # /analytics/*


# =============================================================================
# GLOBAL ENDPOINTS
# =============================================================================

@app.get("/health", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def health_check(request: Request):
    """
    Liveness check.

    The engine has no database or external dependency, so being able to
    answer is the whole check.
    """
    return {
        "status": "healthy",
        "app": settings.app_name,
        "environment": settings.environment,
    }
