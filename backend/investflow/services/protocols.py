# backend/investflow/services/protocols.py
"""
Protocol interfaces for service dependency injection.

Using typing.Protocol enables structural subtyping:
- ExchangeRates satisfies CurrencyConverter without inheriting from it
- random.Random satisfies RandomSource, and so does any test stub
- Clear documentation of required interfaces
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol


class CurrencyConverter(Protocol):
    """Interface required by the snapshot builder and the aggregators."""

    def convert(self, amount: Decimal, from_currency: str, to_currency: str) -> Decimal:
        ...


class RandomSource(Protocol):
    """
    Interface for the noise generator used by history reconstruction.

    random() must return a float in [0, 1). Tests inject a seeded
    random.Random, or a constant 0.5 source which disables the noise.
    """

    def random(self) -> float:
        ...
