# backend/investflow/services/fx_rates.py
"""
Exchange rate snapshot and currency conversion.

The rate table is refreshed by an external poller. The engines never read
"current rates" from process state: every call receives an ExchangeRates
snapshot, and the same rates are reused for every historical point.

=============================================================================
FX RATE CONVENTION
=============================================================================

    rates[(FROM, TO)] = X   means   1 FROM = X TO

    Example:
        rates[("EUR", "USD")] = 1.08   →   1 EUR = 1.08 USD

    Conversion formula:
        To convert EUR → USD:  USD_amount = EUR_amount × rate
        To convert USD → EUR:  EUR_amount = USD_amount ÷ rate

=============================================================================

Resolution order for convert(amount, FROM, TO):
    1. FROM == TO            → amount unchanged
    2. (FROM, TO) in table   → multiply
    3. (TO, FROM) in table   → divide
    4. One intermediate currency C with FROM→C and C→TO resolvable by
       steps 2-3 (e.g. a table quoted entirely against USD)
    5. Otherwise             → FXRateNotFoundError (never a 1:1 fallback)

Usage:
    rates = ExchangeRates.from_pairs({("EUR", "USD"): Decimal("1.08")})
    usd = rates.convert(Decimal("100"), "EUR", "USD")   # Decimal("108.00")
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from investflow.services.exceptions import FXConversionError, FXRateNotFoundError

logger = logging.getLogger(__name__)


def _normalize_currency(code: str) -> str:
    return code.strip().upper()


@dataclass(frozen=True)
class ExchangeRates:
    """
    Immutable point-in-time snapshot of exchange rates.

    Attributes:
        rates: Mapping of (from_currency, to_currency) to a multiplicative rate
    """

    rates: Mapping[tuple[str, str], Decimal] = field(default_factory=dict)

    @classmethod
    def from_pairs(cls, pairs: Mapping[tuple[str, str], Decimal]) -> "ExchangeRates":
        """
        Build a snapshot from a plain mapping.

        Currency codes are normalized (uppercase, trimmed) and the mapping is
        copied so later changes by the caller cannot leak into a computation.

        Raises:
            FXConversionError: If any rate is zero or negative
        """
        normalized: dict[tuple[str, str], Decimal] = {}
        for (from_currency, to_currency), rate in pairs.items():
            src = _normalize_currency(from_currency)
            dst = _normalize_currency(to_currency)
            rate = Decimal(str(rate))
            if rate <= 0:
                raise FXConversionError(
                    f"rate for {src}/{dst} must be positive, got {rate}",
                    base_currency=src,
                    quote_currency=dst,
                )
            normalized[(src, dst)] = rate
        return cls(rates=MappingProxyType(normalized))

    @property
    def currencies(self) -> set[str]:
        """All currency codes that appear in the table."""
        codes: set[str] = set()
        for src, dst in self.rates:
            codes.add(src)
            codes.add(dst)
        return codes

    def _direct_rate(self, from_currency: str, to_currency: str) -> Decimal | None:
        """Rate from a direct or inverted table entry, or None."""
        if from_currency == to_currency:
            return Decimal("1")

        rate = self.rates.get((from_currency, to_currency))
        if rate is not None:
            return rate

        inverse = self.rates.get((to_currency, from_currency))
        if inverse is not None:
            if inverse == 0:
                raise FXConversionError(
                    "cannot invert a zero rate",
                    base_currency=to_currency,
                    quote_currency=from_currency,
                )
            return Decimal("1") / inverse

        return None

    def get_rate(self, from_currency: str, to_currency: str) -> Decimal:
        """
        Get the multiplicative rate converting from_currency into to_currency.

        Args:
            from_currency: Source currency code
            to_currency: Target currency code

        Returns:
            Rate such that to_amount = from_amount × rate

        Raises:
            FXRateNotFoundError: If no direct, inverse or one-hop path exists
        """
        src = _normalize_currency(from_currency)
        dst = _normalize_currency(to_currency)

        rate = self._direct_rate(src, dst)
        if rate is not None:
            return rate

        # Cross through one intermediate currency (sorted for determinism)
        for pivot in sorted(self.currencies - {src, dst}):
            first_leg = self._direct_rate(src, pivot)
            if first_leg is None:
                continue
            second_leg = self._direct_rate(pivot, dst)
            if second_leg is None:
                continue
            logger.debug(f"Cross rate {src}/{dst} resolved via {pivot}")
            return first_leg * second_leg

        raise FXRateNotFoundError(src, dst)

    def convert(self, amount: Decimal, from_currency: str, to_currency: str) -> Decimal:
        """
        Convert an amount between currencies.

        Raises:
            FXRateNotFoundError: If the table has no path between the currencies
        """
        return amount * self.get_rate(from_currency, to_currency)
