# backend/investflow/models.py
"""
Domain models for portfolio assets and transactions.

Assets and transactions are owned by external portfolio storage. The engines
receive them as immutable batches (one consistent snapshot per call) and
never mutate them, so both models are frozen dataclasses.
"""

import enum
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from investflow.services.exceptions import InvalidTransactionError


# Enums keep class tags and transaction kinds to a closed set
class TransactionType(str, enum.Enum):
    BUY = "BUY"
    SELL = "SELL"


class AssetClass(str, enum.Enum):
    STOCK = "STOCK"
    CRYPTO = "CRYPTO"
    FUND = "FUND"
    CASH = "CASH"
    REAL_ESTATE = "REAL_ESTATE"
    LIABILITY = "LIABILITY"


@dataclass(frozen=True)
class Asset:
    """
    A current holding (or debt) in the portfolio.

    quantity, avg_cost and current_price are all expressed in the asset's
    native currency. Liabilities store positive magnitudes; the aggregators,
    not the asset, apply the sign flip.
    """

    id: str
    symbol: str
    name: str | None
    asset_class: AssetClass
    quantity: Decimal
    avg_cost: Decimal
    current_price: Decimal
    currency: str

    @property
    def is_liability(self) -> bool:
        return self.asset_class == AssetClass.LIABILITY

    @property
    def display_name(self) -> str:
        """Name shown in breakdowns, falling back to the symbol."""
        return self.name or self.symbol

    @property
    def market_value_local(self) -> Decimal:
        """quantity × current price, in the asset's currency."""
        return self.quantity * self.current_price

    @property
    def cost_local(self) -> Decimal:
        """quantity × average cost, in the asset's currency."""
        return self.quantity * self.avg_cost


@dataclass(frozen=True)
class Transaction:
    """
    A single entry in the append-only transaction log.

    ``total`` already includes the fee in the direction of the trade
    (added for BUY, subtracted for SELL). The history engine trusts it.
    ``date`` may carry a time component; it is truncated to a calendar day
    before bucketing.
    """

    id: str
    asset_id: str
    transaction_type: TransactionType
    date: date | datetime
    quantity: Decimal
    price: Decimal
    fee: Decimal
    total: Decimal

    @property
    def gross_amount(self) -> Decimal:
        """quantity × price, excluding the fee."""
        return self.quantity * self.price

    @classmethod
    def create(
            cls,
            id: str,
            asset_id: str,
            transaction_type: TransactionType,
            date: date | datetime,
            quantity: Decimal,
            price: Decimal,
            fee: Decimal = Decimal("0"),
    ) -> "Transaction":
        """Build a transaction with its fee-adjusted total computed."""
        return cls(
            id=id,
            asset_id=asset_id,
            transaction_type=transaction_type,
            date=date,
            quantity=quantity,
            price=price,
            fee=fee,
            total=calculate_transaction_total(transaction_type, quantity, price, fee),
        )


def calculate_transaction_total(
        transaction_type: TransactionType,
        quantity: Decimal,
        price: Decimal,
        fee: Decimal,
) -> Decimal:
    """
    Calculate the settled total of a trade.

    BUY:  total = quantity × price + fee  (what left the wallet)
    SELL: total = quantity × price - fee  (what came back)

    Raises:
        InvalidTransactionError: If quantity <= 0, price < 0 or fee < 0
    """
    if quantity <= 0:
        raise InvalidTransactionError("quantity must be positive", field="quantity")
    if price < 0:
        raise InvalidTransactionError("price cannot be negative", field="price")
    if fee < 0:
        raise InvalidTransactionError("fee cannot be negative", field="fee")

    gross = quantity * price
    if transaction_type == TransactionType.BUY:
        return gross + fee
    return gross - fee
