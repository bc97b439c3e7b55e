# backend/tests/test_models.py
"""
Tests for the domain models.

Covers:
- Asset derived amounts and display name
- Transaction total construction (fee direction, validation)
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from investflow.models import (
    AssetClass,
    Transaction,
    TransactionType,
    calculate_transaction_total,
)
from investflow.services.exceptions import InvalidTransactionError, ValidationError
from tests.conftest import make_asset


# =============================================================================
# ASSET
# =============================================================================

class TestAsset:
    """Tests for Asset derived properties."""

    def test_market_value_and_cost_in_local_currency(self):
        """value = quantity × price, cost = quantity × avg cost."""
        asset = make_asset(quantity="10", current_price="100", avg_cost="80")

        assert asset.market_value_local == Decimal("1000")
        assert asset.cost_local == Decimal("800")

    def test_is_liability(self):
        assert make_asset(asset_class=AssetClass.LIABILITY).is_liability
        assert not make_asset(asset_class=AssetClass.CASH).is_liability

    def test_display_name_falls_back_to_symbol(self):
        assert make_asset(symbol="BTC", name=None).display_name == "BTC"
        assert make_asset(symbol="BTC", name="Bitcoin").display_name == "Bitcoin"

    def test_asset_is_immutable(self):
        asset = make_asset()
        with pytest.raises(AttributeError):
            asset.quantity = Decimal("5")


# =============================================================================
# TRANSACTION TOTAL
# =============================================================================

class TestTransactionTotal:
    """Tests for calculate_transaction_total and Transaction.create."""

    def test_buy_adds_fee(self):
        total = calculate_transaction_total(
            TransactionType.BUY, Decimal("10"), Decimal("50"), Decimal("5")
        )
        assert total == Decimal("505")

    def test_sell_subtracts_fee(self):
        total = calculate_transaction_total(
            TransactionType.SELL, Decimal("10"), Decimal("50"), Decimal("5")
        )
        assert total == Decimal("495")

    def test_zero_price_is_allowed(self):
        """Gifts / airdrops come in at price 0."""
        total = calculate_transaction_total(
            TransactionType.BUY, Decimal("1"), Decimal("0"), Decimal("0")
        )
        assert total == Decimal("0")

    @pytest.mark.parametrize("quantity", [Decimal("0"), Decimal("-1")])
    def test_non_positive_quantity_rejected(self, quantity):
        with pytest.raises(InvalidTransactionError) as exc_info:
            calculate_transaction_total(
                TransactionType.BUY, quantity, Decimal("10"), Decimal("0")
            )
        assert exc_info.value.field == "quantity"

    def test_negative_price_rejected(self):
        with pytest.raises(InvalidTransactionError) as exc_info:
            calculate_transaction_total(
                TransactionType.BUY, Decimal("1"), Decimal("-10"), Decimal("0")
            )
        assert exc_info.value.field == "price"

    def test_negative_fee_rejected(self):
        with pytest.raises(InvalidTransactionError) as exc_info:
            calculate_transaction_total(
                TransactionType.SELL, Decimal("1"), Decimal("10"), Decimal("-1")
            )
        assert exc_info.value.field == "fee"

    def test_invalid_transaction_is_a_validation_error(self):
        """Routers map every ValidationError to 400."""
        with pytest.raises(ValidationError):
            calculate_transaction_total(
                TransactionType.BUY, Decimal("0"), Decimal("1"), Decimal("0")
            )

    def test_create_fills_total(self):
        txn = Transaction.create(
            id="t1",
            asset_id="a1",
            transaction_type=TransactionType.BUY,
            date=date(2024, 1, 2),
            quantity=Decimal("2"),
            price=Decimal("100"),
            fee=Decimal("1.50"),
        )

        assert txn.total == Decimal("201.50")
        assert txn.gross_amount == Decimal("200")

    def test_create_keeps_datetime(self):
        """The model keeps what it is given; truncation happens at bucketing."""
        stamp = datetime(2024, 1, 2, 15, 30)
        txn = Transaction.create(
            id="t1",
            asset_id="a1",
            transaction_type=TransactionType.SELL,
            date=stamp,
            quantity=Decimal("1"),
            price=Decimal("10"),
        )

        assert txn.date == stamp
        assert txn.fee == Decimal("0")
        assert txn.total == Decimal("10")
