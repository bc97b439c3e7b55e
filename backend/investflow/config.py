# backend/investflow/config.py
"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables with validation:
- ENVIRONMENT: Runtime mode (development, test, production)
- DEFAULT_BASE_CURRENCY: Reporting currency used when a request omits one
- CRYPTO_VOLATILITY / DEFAULT_VOLATILITY: Noise amplitude for history charts
- TOP_HOLDINGS_LIMIT / PNL_RANKING_LIMIT: Size of the ranking views

The valuation engine itself takes these values as constructor arguments,
so it can be used without any environment configuration. This module only
feeds the HTTP application.

Configuration is validated on application startup. Invalid configuration
will raise a ValueError with a descriptive message.

Usage:
    from investflow.config import settings

    if settings.is_production:
        # Production-specific logic
        ...
"""
from decimal import Decimal
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from investflow.services.constants import (
    CRYPTO_VOLATILITY,
    DEFAULT_VOLATILITY,
    PNL_RANKING_LIMIT,
    TOP_HOLDINGS_LIMIT,
)

# Find the .env file in project root (parent of backend/)
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_PROJECT_ROOT = _BACKEND_DIR.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables:
        - ENVIRONMENT: Runtime environment (development, test, production)
        - APP_NAME: Application name (default: "InvestFlow Valuation Engine")
        - DEBUG: Enable debug mode (default: False)
        - LOG_LEVEL: Logging level (default: "INFO")
        - LOG_FORMAT: "text" or "json" (default: "text")

    Valuation Settings (optional, with sensible defaults):
        - DEFAULT_BASE_CURRENCY: ISO 4217 code (default: "USD")
        - CRYPTO_VOLATILITY: Daily noise when holding crypto (default: 0.02)
        - DEFAULT_VOLATILITY: Daily noise otherwise (default: 0.008)
        - TOP_HOLDINGS_LIMIT: Entries in the top holdings view (default: 6)
        - PNL_RANKING_LIMIT: Entries in each P&L ranking (default: 8)
    """

    # Environment mode
    environment: Literal["development", "test", "production"] = Field(
        default="development",
        description="Runtime environment (development, test, production)"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: Literal["text", "json"] = Field(
        default="text",
        description="Log output format (text for humans, json for aggregation)"
    )

    # Optional - safe defaults
    app_name: str = "InvestFlow Valuation Engine"
    debug: bool = False

    # =========================================================================
    # VALUATION
    # =========================================================================
    default_base_currency: str = Field(
        default="USD",
        description="Reporting currency when a request does not name one"
    )
    crypto_volatility: Decimal = Field(
        default=CRYPTO_VOLATILITY,
        ge=0,
        le=1,
        description="Daily noise amplitude when the portfolio holds crypto"
    )
    default_volatility: Decimal = Field(
        default=DEFAULT_VOLATILITY,
        ge=0,
        le=1,
        description="Daily noise amplitude for portfolios without crypto"
    )

    # =========================================================================
    # ANALYTICS
    # =========================================================================
    top_holdings_limit: int = Field(
        default=TOP_HOLDINGS_LIMIT,
        ge=1,
        le=50,
        description="Number of holdings in the top holdings view"
    )
    pnl_ranking_limit: int = Field(
        default=PNL_RANKING_LIMIT,
        ge=1,
        le=50,
        description="Number of holdings in each P&L ranking"
    )

    # =========================================================================
    # CORS
    # =========================================================================
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"],
        description="Allowed CORS origins (JSON list in env var)"
    )
    cors_allow_credentials: bool = Field(
        default=True,
        description="Allow credentials in CORS requests"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"],
        description="Allowed HTTP methods for CORS"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        description="Allowed HTTP headers for CORS"
    )

    # =========================================================================
    # RATE LIMITING
    # =========================================================================
    trust_proxy_headers: bool = Field(
        default=False,
        description="Read client IP from X-Forwarded-For / X-Real-IP"
    )
    trusted_proxy_ips: list[str] = Field(
        default=[],
        description="Proxy IPs allowed to set forwarding headers (empty = any)"
    )

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("default_base_currency")
    @classmethod
    def validate_base_currency(cls, v: str) -> str:
        """Normalize to upper case and require a 3-letter code."""
        v = v.strip().upper()
        if len(v) != 3 or not v.isalpha():
            raise ValueError(
                f"DEFAULT_BASE_CURRENCY must be a 3-letter ISO 4217 code, got: '{v}'"
            )
        return v

    @model_validator(mode="after")
    def validate_volatility(self) -> "Settings":
        """
        Validate the noise settings.

        Crypto portfolios swing harder than everything else, so the default
        volatility may never exceed the crypto one.
        """
        if self.default_volatility > self.crypto_volatility:
            raise ValueError(
                f"DEFAULT_VOLATILITY ({self.default_volatility}) must not exceed "
                f"CRYPTO_VOLATILITY ({self.crypto_volatility})"
            )
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


# Create single instance
settings = Settings()
