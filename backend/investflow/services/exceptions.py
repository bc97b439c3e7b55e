# backend/investflow/services/exceptions.py
"""
Service layer exceptions.

These exceptions represent domain-specific errors and contain NO HTTP knowledge.
The router layer is responsible for mapping these to appropriate HTTP responses.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    │   ├── InvalidRangeError
    │   └── InvalidTransactionError
    └── FXRateError
        ├── FXRateNotFoundError
        └── FXConversionError

Empty inputs are NOT errors: the engines return empty results for them.
Zero denominators are NOT errors either: percentages fall back to 0.
"""


class ServiceError(Exception):
    """
    Base exception for all service layer errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ServiceError):
    """
    Raised when input validation fails.

    This is for programmatic validation errors (invalid parameters, malformed
    domain objects), NOT for request validation which is handled by Pydantic.

    Attributes:
        field: The field that failed validation (optional)
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class InvalidRangeError(ValidationError):
    """
    Raised when an unknown history range label is requested.

    Valid ranges are: 1W, 1M, 3M, 6M, 1Y, ALL
    """

    VALID_OPTIONS = ["1W", "1M", "3M", "6M", "1Y", "ALL"]

    def __init__(self, history_range: str) -> None:
        self.history_range = history_range
        super().__init__(
            f"Invalid range: '{history_range}'. "
            f"Valid options: {', '.join(self.VALID_OPTIONS)}",
            field="range",
        )


class InvalidTransactionError(ValidationError):
    """
    Raised when a transaction cannot be built from the given figures.

    Examples:
    - Zero or negative quantity
    - Negative price or fee
    """

    def __init__(self, reason: str, field: str | None = None) -> None:
        self.reason = reason
        super().__init__(f"Invalid transaction: {reason}", field=field)


# =============================================================================
# FX RATE ERRORS
# =============================================================================


class FXRateError(ServiceError):
    """
    Base exception for FX rate errors.

    Attributes:
        base_currency: The currency being converted from
        quote_currency: The currency being converted to
    """

    def __init__(
            self,
            message: str,
            base_currency: str | None = None,
            quote_currency: str | None = None,
    ) -> None:
        self.base_currency = base_currency
        self.quote_currency = quote_currency
        super().__init__(message)


class FXRateNotFoundError(FXRateError):
    """
    Raised when the rate table has no path between two currencies.

    Valuations are never silently converted at 1:1; callers must supply
    a rate table covering every asset currency.
    """

    def __init__(
            self,
            base_currency: str,
            quote_currency: str,
            message: str | None = None,
    ) -> None:
        msg = message or f"No FX rate found for {base_currency}/{quote_currency}"
        super().__init__(msg, base_currency=base_currency, quote_currency=quote_currency)


class FXConversionError(FXRateError):
    """
    Raised when a rate in the table cannot be used for conversion.

    Examples:
    - A zero rate that would have to be inverted
    - A negative rate

    Attributes:
        reason: Specific reason for conversion failure
    """

    def __init__(
            self,
            reason: str,
            base_currency: str | None = None,
            quote_currency: str | None = None,
    ) -> None:
        self.reason = reason
        super().__init__(
            f"FX conversion error: {reason}",
            base_currency=base_currency,
            quote_currency=quote_currency,
        )


__all__ = [
    # Base
    "ServiceError",
    # Validation
    "ValidationError",
    "InvalidRangeError",
    "InvalidTransactionError",
    # FX Rate
    "FXRateError",
    "FXRateNotFoundError",
    "FXConversionError",
]
