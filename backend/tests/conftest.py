# backend/tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- Test environment settings (set before the app is imported)
- Deterministic random sources for history reconstruction
- Sample data factories (assets, transactions, exchange rates)
- JSON payload factories for API tests
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("APP_NAME", "Test App")

from datetime import date
from decimal import Decimal

import pytest

from investflow.models import Asset, AssetClass, Transaction, TransactionType
from investflow.services.fx_rates import ExchangeRates


# =============================================================================
# CONSTANTS
# =============================================================================

# Fixed anchor date so every history test is reproducible
TODAY = date(2024, 6, 15)


# =============================================================================
# RANDOM SOURCES
# =============================================================================

class ConstantRandom:
    """Random source that always returns the same draw (0.5 = no drift)."""

    def __init__(self, value: float = 0.5):
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


class SequenceRandom:
    """Random source that cycles through a fixed list of draws."""

    def __init__(self, values: list[float]):
        self._values = values
        self._index = 0

    def random(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value


# =============================================================================
# FACTORY FUNCTIONS
# =============================================================================

def make_asset(
        id: str = "a1",
        symbol: str = "AAPL",
        asset_class: AssetClass = AssetClass.STOCK,
        quantity: str | Decimal = "10",
        current_price: str | Decimal = "100",
        avg_cost: str | Decimal = "80",
        currency: str = "USD",
        name: str | None = None,
) -> Asset:
    """Factory: Create an asset with Decimal amounts."""
    return Asset(
        id=id,
        symbol=symbol,
        name=name,
        asset_class=asset_class,
        quantity=Decimal(quantity),
        avg_cost=Decimal(avg_cost),
        current_price=Decimal(current_price),
        currency=currency,
    )


def make_transaction(
        id: str = "t1",
        asset_id: str = "a1",
        transaction_type: TransactionType = TransactionType.BUY,
        txn_date: date = TODAY,
        quantity: str | Decimal = "1",
        price: str | Decimal = "100",
        fee: str | Decimal = "0",
) -> Transaction:
    """Factory: Create a transaction with its total computed from price and fee."""
    return Transaction.create(
        id=id,
        asset_id=asset_id,
        transaction_type=transaction_type,
        date=txn_date,
        quantity=Decimal(quantity),
        price=Decimal(price),
        fee=Decimal(fee),
    )


def asset_payload(
        id: str = "a1",
        symbol: str = "AAPL",
        asset_class: str = "STOCK",
        quantity: str = "10",
        current_price: str = "100",
        avg_cost: str = "80",
        currency: str = "USD",
        name: str | None = None,
) -> dict:
    """JSON body entry for AssetInput."""
    return {
        "id": id,
        "symbol": symbol,
        "name": name,
        "asset_class": asset_class,
        "quantity": quantity,
        "current_price": current_price,
        "avg_cost": avg_cost,
        "currency": currency,
    }


def transaction_payload(
        id: str = "t1",
        asset_id: str = "a1",
        transaction_type: str = "BUY",
        txn_date: date | None = None,
        quantity: str = "2",
        price: str = "100",
        fee: str = "0",
) -> dict:
    """JSON body entry for TransactionInput (dated today by default)."""
    return {
        "id": id,
        "asset_id": asset_id,
        "transaction_type": transaction_type,
        "date": (txn_date or date.today()).isoformat(),
        "quantity": quantity,
        "price": price,
        "fee": fee,
    }


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def no_noise() -> ConstantRandom:
    """Random source that disables the market drift."""
    return ConstantRandom(0.5)


@pytest.fixture
def empty_rates() -> ExchangeRates:
    """Rate table with no entries (same-currency conversion only)."""
    return ExchangeRates()


@pytest.fixture
def eur_usd_rates() -> ExchangeRates:
    """1 EUR = 1.10 USD, 1 GBP = 1.25 USD."""
    return ExchangeRates.from_pairs({
        ("EUR", "USD"): Decimal("1.10"),
        ("GBP", "USD"): Decimal("1.25"),
    })


@pytest.fixture
def stock_asset() -> Asset:
    """10 × AAPL at 100 USD, bought at 80."""
    return make_asset()


@pytest.fixture
def liability_asset() -> Asset:
    """A 5000 USD loan."""
    return make_asset(
        id="loan",
        symbol="LOAN",
        name="Car Loan",
        asset_class=AssetClass.LIABILITY,
        quantity="1",
        current_price="5000",
        avg_cost="5000",
    )
