# backend/investflow/services/valuation/types.py
"""
Internal data types for the Valuation Service.

These dataclasses are used internally by the valuation calculators.
They are NOT Pydantic schemas - those are defined in
investflow/schemas/valuation.py for API serialization.

Design Principles:
- Immutable where possible (frozen=True for value objects)
- Use Decimal for ALL financial values (never float)
- Use date (not datetime) for points in a series
- Percentages with a zero denominator are 0, never None/NaN

Type Hierarchy:
    HistoryRange        - Fixed lookback window (1W ... ALL)
    AssetValuation      - One asset's value and cost in base currency
    ValuationSnapshot   - Today's net worth and cost basis
    DailyPoint          - Single day in the reconstructed series
    PortfolioHistory    - Full series plus trend summary
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from investflow.services.constants import HUNDRED, PERCENT_QUANTIZE, RANGE_DAYS, ZERO
from investflow.services.exceptions import InvalidRangeError

if TYPE_CHECKING:
    from investflow.models import Asset


def percent_of(numerator: Decimal, denominator: Decimal) -> Decimal:
    """
    numerator / denominator × 100, quantized to 4 places.

    Returns 0 when the denominator is 0, since consumers render the value
    directly and cannot handle Infinity or NaN.
    """
    if denominator == 0:
        return ZERO
    return (numerator / denominator * HUNDRED).quantize(PERCENT_QUANTIZE)


# =============================================================================
# RANGE
# =============================================================================

class HistoryRange(str, enum.Enum):
    """Lookback window for history reconstruction."""

    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    ALL = "ALL"

    @property
    def fixed_days(self) -> int | None:
        """Days looked back for fixed ranges; None for ALL."""
        return RANGE_DAYS.get(self.value)

    @classmethod
    def parse(cls, value: str | HistoryRange) -> HistoryRange:
        """
        Parse a range label case-insensitively.

        Raises:
            InvalidRangeError: If the label is not a known range
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise InvalidRangeError(str(value)) from None


# =============================================================================
# SNAPSHOT
# =============================================================================

@dataclass(frozen=True)
class AssetValuation:
    """
    One asset's current value and cost, converted to the base currency.

    Amounts keep the stored (positive) sign even for liabilities; callers
    decide whether to add or subtract them.

    Attributes:
        asset: The asset being valued
        value: quantity × current price in base currency
        cost: quantity × average cost in base currency
    """

    asset: Asset
    value: Decimal
    cost: Decimal

    @property
    def pnl(self) -> Decimal:
        return self.value - self.cost


@dataclass(frozen=True)
class ValuationSnapshot:
    """
    Today's portfolio totals in the base currency.

    Attributes:
        base_currency: Currency all amounts are expressed in
        net_worth: Non-liability value minus liability value
        cost_basis: Non-liability cost minus liability cost
        asset_count: Number of assets that contributed

    Note:
        cost_basis can be negative when liabilities outweigh holdings.
        The history engine clamps it on every replayed day.
    """

    base_currency: str
    net_worth: Decimal
    cost_basis: Decimal
    asset_count: int = 0

    @property
    def unrealized_pnl(self) -> Decimal:
        return self.net_worth - self.cost_basis

    @property
    def unrealized_pnl_percent(self) -> Decimal:
        return percent_of(self.unrealized_pnl, self.cost_basis)


# =============================================================================
# HISTORY (Time series for charts)
# =============================================================================

@dataclass(frozen=True)
class DailyPoint:
    """
    A single day in the reconstructed valuation history.

    Represents what the portfolio looked like at the end of ``date``.

    Attributes:
        date: Calendar day
        value: Net worth in base currency
        cost: Cost basis in base currency (never negative once a day is replayed)
    """

    date: date
    value: Decimal
    cost: Decimal

    @property
    def pnl(self) -> Decimal:
        """Unrealized P&L (value - cost)."""
        return self.value - self.cost

    @property
    def pnl_percent(self) -> Decimal:
        """P&L as a percentage of cost; 0 when cost is 0."""
        return percent_of(self.pnl, self.cost)


@dataclass
class PortfolioHistory:
    """
    Reconstructed portfolio valuation history.

    This is an illustrative trend, not an auditable ledger: past values
    are derived by undoing transactions against today's snapshot and
    adding bounded random drift. Only the last point (today) is exact.

    Attributes:
        base_currency: Currency for all values
        history_range: Range the series was built for
        start_date: First date in the series (oldest)
        end_date: Last date in the series (today)
        volatility: Noise coefficient used for the reconstruction
        data: Daily points, oldest first
        warnings: Data quality notes (unknown assets, future-dated trades)
    """

    base_currency: str
    history_range: HistoryRange
    start_date: date
    end_date: date
    volatility: Decimal
    data: list[DailyPoint]
    warnings: list[str] = field(default_factory=list)

    @property
    def total_points(self) -> int:
        """Number of data points in the series."""
        return len(self.data)

    @property
    def first_point(self) -> DailyPoint | None:
        return self.data[0] if self.data else None

    @property
    def last_point(self) -> DailyPoint | None:
        return self.data[-1] if self.data else None

    @property
    def period_change(self) -> Decimal:
        """Value change from the first to the last point."""
        if not self.data:
            return ZERO
        return self.data[-1].value - self.data[0].value

    @property
    def period_change_percent(self) -> Decimal:
        """Value change as a percentage of the first point's value."""
        if not self.data:
            return ZERO
        return percent_of(self.period_change, self.data[0].value)

    @property
    def is_profitable(self) -> bool:
        """True if today's point shows a non-negative P&L."""
        last = self.last_point
        return last is not None and last.pnl >= 0
