# backend/investflow/schemas/portfolio.py
"""
Pydantic schemas for the portfolio snapshot sent with every request.

The API holds no portfolio state: each request carries the full asset list,
the transaction log and the exchange rate table it should be valued with.

These schemas handle:
- Asset input
- Transaction input (total computed from price and fee when omitted)
- Exchange rate input
- Conversion into the engine's domain objects
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from investflow.models import Asset, AssetClass, Transaction, TransactionType
from investflow.schemas.validators import (
    coerce_calendar_day,
    normalize_symbol,
    validate_currency,
)
from investflow.services.fx_rates import ExchangeRates


# =============================================================================
# ASSET SCHEMAS
# =============================================================================

class AssetInput(BaseModel):
    """A current holding or liability."""

    id: str = Field(..., min_length=1, max_length=64, description="Asset identifier")
    symbol: str = Field(..., description="Ticker or short code (e.g., AAPL, BTC)")
    name: str | None = Field(default=None, max_length=255, description="Display name")
    asset_class: AssetClass = Field(..., description="Asset class tag")
    quantity: Decimal = Field(..., description="Units held (liabilities: positive magnitude)")
    avg_cost: Decimal = Field(..., ge=0, description="Average cost per unit, native currency")
    current_price: Decimal = Field(..., ge=0, description="Current price per unit, native currency")
    currency: str = Field(..., description="Native currency (ISO 4217)")

    @field_validator("symbol")
    @classmethod
    def check_symbol(cls, v: str) -> str:
        return normalize_symbol(v)

    @field_validator("currency")
    @classmethod
    def check_currency(cls, v: str) -> str:
        return validate_currency(v)

    def to_domain(self) -> Asset:
        return Asset(
            id=self.id,
            symbol=self.symbol,
            name=self.name,
            asset_class=self.asset_class,
            quantity=self.quantity,
            avg_cost=self.avg_cost,
            current_price=self.current_price,
            currency=self.currency,
        )


# =============================================================================
# TRANSACTION SCHEMAS
# =============================================================================

class TransactionInput(BaseModel):
    """
    A single buy or sell.

    ``total`` is optional: when omitted it is computed from quantity, price
    and fee (BUY adds the fee, SELL subtracts it). When supplied it is
    trusted as the settled amount.
    """

    id: str = Field(..., min_length=1, max_length=64, description="Transaction identifier")
    asset_id: str = Field(..., min_length=1, max_length=64, description="Asset the trade belongs to")
    transaction_type: TransactionType = Field(..., description="BUY or SELL")
    date: dt.date = Field(..., description="Trade date (time of day is dropped)")
    quantity: Decimal = Field(..., gt=0, description="Units traded")
    price: Decimal = Field(..., ge=0, description="Price per unit, asset currency")
    fee: Decimal = Field(default=Decimal("0"), ge=0, description="Fee, asset currency")
    total: Decimal | None = Field(
        default=None,
        description="Settled amount including fee (computed when omitted)"
    )

    @field_validator("date", mode="before")
    @classmethod
    def truncate_to_day(cls, v):
        return coerce_calendar_day(v)

    def to_domain(self) -> Transaction:
        if self.total is None:
            return Transaction.create(
                id=self.id,
                asset_id=self.asset_id,
                transaction_type=self.transaction_type,
                date=self.date,
                quantity=self.quantity,
                price=self.price,
                fee=self.fee,
            )
        return Transaction(
            id=self.id,
            asset_id=self.asset_id,
            transaction_type=self.transaction_type,
            date=self.date,
            quantity=self.quantity,
            price=self.price,
            fee=self.fee,
            total=self.total,
        )


# =============================================================================
# EXCHANGE RATE SCHEMAS
# =============================================================================

class ExchangeRateInput(BaseModel):
    """One exchange rate: 1 from_currency = rate × to_currency."""

    from_currency: str = Field(..., description="Source currency (ISO 4217)")
    to_currency: str = Field(..., description="Target currency (ISO 4217)")
    rate: Decimal = Field(..., gt=0, description="Multiplicative rate")

    @field_validator("from_currency", "to_currency")
    @classmethod
    def check_currency(cls, v: str) -> str:
        return validate_currency(v)


# =============================================================================
# REQUEST SCHEMA
# =============================================================================

class PortfolioSnapshotRequest(BaseModel):
    """
    A point-in-time portfolio snapshot.

    Every endpoint values exactly what is in this body, with exactly these
    rates, so concurrent requests never see each other's data.
    """

    base_currency: str | None = Field(
        default=None,
        description="Reporting currency (default: DEFAULT_BASE_CURRENCY setting)"
    )
    assets: list[AssetInput] = Field(default_factory=list)
    transactions: list[TransactionInput] = Field(default_factory=list)
    exchange_rates: list[ExchangeRateInput] = Field(default_factory=list)

    @field_validator("base_currency")
    @classmethod
    def validate_base_currency(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return validate_currency(v)

    def to_assets(self) -> list[Asset]:
        return [asset.to_domain() for asset in self.assets]

    def to_transactions(self) -> list[Transaction]:
        return [txn.to_domain() for txn in self.transactions]

    def to_exchange_rates(self) -> ExchangeRates:
        """Build the rate table; a repeated pair keeps its last rate."""
        return ExchangeRates.from_pairs(
            {(r.from_currency, r.to_currency): r.rate for r in self.exchange_rates}
        )
