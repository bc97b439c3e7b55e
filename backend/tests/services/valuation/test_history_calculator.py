# backend/tests/services/valuation/test_history_calculator.py
"""
Unit tests for HistoryCalculator.

These tests verify the reverse replay algorithm that starts from today's
exact snapshot and walks backward one day at a time.

Key Properties Tested:
1. Today's point equals the snapshot exactly
2. The series has days_in_range + 1 points, strictly chronological
3. BUY / SELL transactions are undone on their own day
4. The cost basis is clamped at zero for past days
5. Noise only touches the value, never today's point, and stays bounded
6. ALL range resolution from the transaction log
7. Data quality warnings (unknown assets, future-dated trades)

A constant 0.5 random source removes the noise so exact values can be
asserted; a seeded random.Random checks the bounded behaviour.
"""

import random
from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from investflow.models import AssetClass, TransactionType
from investflow.services.constants import CRYPTO_VOLATILITY, DEFAULT_VOLATILITY
from investflow.services.exceptions import FXRateNotFoundError, InvalidRangeError
from investflow.services.fx_rates import ExchangeRates
from investflow.services.valuation import HistoryCalculator, HistoryRange, reconstruct
from tests.conftest import TODAY, ConstantRandom, make_asset, make_transaction


# =============================================================================
# HELPERS
# =============================================================================

def point_on(history, day: date):
    """Find the point for a given day."""
    return next(p for p in history.data if p.date == day)


def days_ago(n: int) -> date:
    return TODAY - timedelta(days=n)


@pytest.fixture
def calculator(no_noise) -> HistoryCalculator:
    return HistoryCalculator(rng=no_noise)


# =============================================================================
# SHAPE OF THE SERIES
# =============================================================================

class TestSeriesShape:
    """Length, ordering and anchor of the series."""

    @pytest.mark.parametrize(
        "history_range,days",
        [("1W", 7), ("1M", 30), ("3M", 90), ("6M", 180), ("1Y", 365)],
    )
    def test_length_is_days_plus_one(self, calculator, empty_rates, stock_asset, history_range, days):
        history = calculator.calculate([stock_asset], [], history_range, "USD", empty_rates, today=TODAY)

        assert history.total_points == days + 1
        assert history.start_date == days_ago(days)
        assert history.end_date == TODAY

    def test_strictly_chronological_without_gaps(self, calculator, empty_rates, stock_asset):
        history = calculator.calculate([stock_asset], [], "1M", "USD", empty_rates, today=TODAY)

        dates = [p.date for p in history.data]
        assert dates[0] == days_ago(30)
        assert dates[-1] == TODAY
        for earlier, later in zip(dates, dates[1:]):
            assert later - earlier == timedelta(days=1)

    def test_single_stock_scenario_without_noise(self, calculator, empty_rates, stock_asset):
        """10 × 100 bought at 80, no transactions, 1M: flat 1000 / 800."""
        points = calculator.reconstruct([stock_asset], [], "1M", "USD", empty_rates, today=TODAY)

        assert len(points) == 31
        for point in points:
            assert point.value == Decimal("1000")
            assert point.cost == Decimal("800")
            assert point.pnl == Decimal("200")
            assert point.pnl_percent == Decimal("25.0000")

    def test_single_stock_scenario_with_noise(self, empty_rates, stock_asset):
        """Today is exact; earlier days deviate only within the drift bound."""
        calculator = HistoryCalculator(rng=random.Random(42))

        points = calculator.reconstruct([stock_asset], [], "1M", "USD", empty_rates, today=TODAY)

        assert len(points) == 31
        assert points[-1].value == Decimal("1000")
        assert points[-1].cost == Decimal("800")
        # At most 0.4% drift per day over 30 days stays well inside ±15%
        for point in points:
            assert abs(point.value - Decimal("1000")) <= Decimal("150")
            assert point.cost == Decimal("800")

    def test_history_range_enum_accepted(self, calculator, empty_rates, stock_asset):
        history = calculator.calculate(
            [stock_asset], [], HistoryRange.ONE_WEEK, "USD", empty_rates, today=TODAY
        )

        assert history.history_range == HistoryRange.ONE_WEEK
        assert history.total_points == 8

    def test_lowercase_range_accepted(self, calculator, empty_rates, stock_asset):
        history = calculator.calculate([stock_asset], [], "1w", "USD", empty_rates, today=TODAY)

        assert history.history_range == HistoryRange.ONE_WEEK

    def test_invalid_range_raises(self, calculator, empty_rates, stock_asset):
        with pytest.raises(InvalidRangeError):
            calculator.calculate([stock_asset], [], "2W", "USD", empty_rates, today=TODAY)

    def test_empty_assets_give_empty_series(self, calculator, empty_rates):
        """Transactions alone are not enough to build a history."""
        txns = [make_transaction(txn_date=days_ago(3))]

        history = calculator.calculate([], txns, "1M", "USD", empty_rates, today=TODAY)

        assert history.data == []
        assert history.first_point is None
        assert history.period_change == Decimal("0")
        assert history.is_profitable is False

    def test_defaults_today_to_current_date(self, calculator, empty_rates, stock_asset):
        history = calculator.calculate([stock_asset], [], "1W", "USD", empty_rates)

        assert history.end_date == date.today()
        assert history.data[-1].date == date.today()


# =============================================================================
# REVERSE REPLAY
# =============================================================================

class TestReverseReplay:
    """Undoing BUY and SELL transactions."""

    def test_buy_is_undone_on_its_own_day(self, calculator, empty_rates, stock_asset):
        buy = make_transaction(quantity="2", price="100", txn_date=days_ago(5))

        history = calculator.calculate([stock_asset], [buy], "1W", "USD", empty_rates, today=TODAY)

        # After the buy: today's figures
        for n in range(0, 5):
            assert point_on(history, days_ago(n)).value == Decimal("1000")
            assert point_on(history, days_ago(n)).cost == Decimal("800")
        # On and before the buy day: capital not yet invested
        for n in range(5, 8):
            assert point_on(history, days_ago(n)).value == Decimal("800")
            assert point_on(history, days_ago(n)).cost == Decimal("600")

    def test_buy_total_includes_fee(self, calculator, empty_rates, stock_asset):
        buy = make_transaction(quantity="2", price="100", fee="5", txn_date=days_ago(1))

        history = calculator.calculate([stock_asset], [buy], "1W", "USD", empty_rates, today=TODAY)

        # total = 205
        assert point_on(history, days_ago(1)).value == Decimal("795")
        assert point_on(history, days_ago(1)).cost == Decimal("595")

    def test_sell_is_undone_with_market_value_cost(self, calculator, empty_rates, stock_asset):
        sell = make_transaction(
            transaction_type=TransactionType.SELL,
            quantity="1",
            price="120",
            fee="2",
            txn_date=days_ago(3),
        )

        history = calculator.calculate([stock_asset], [sell], "1W", "USD", empty_rates, today=TODAY)

        # value += total (118), cost += quantity × price (120)
        before = point_on(history, days_ago(3))
        assert before.value == Decimal("1118")
        assert before.cost == Decimal("920")
        assert point_on(history, days_ago(2)).value == Decimal("1000")

    def test_transactions_converted_from_asset_currency(self, calculator, eur_usd_rates):
        asset = make_asset(currency="EUR")
        buy = make_transaction(quantity="1", price="100", txn_date=days_ago(1))

        history = calculator.calculate([asset], [buy], "1W", "USD", eur_usd_rates, today=TODAY)

        # Snapshot: 1100 / 880 USD; the 100 EUR buy is 110 USD
        assert history.data[-1].value == Decimal("1100")
        assert point_on(history, days_ago(1)).value == Decimal("990")
        assert point_on(history, days_ago(1)).cost == Decimal("770")

    def test_multiple_transactions_on_same_day(self, calculator, empty_rates, stock_asset):
        txns = [
            make_transaction(id="b1", quantity="1", price="100", txn_date=days_ago(2)),
            make_transaction(id="b2", quantity="1", price="50", txn_date=days_ago(2)),
        ]

        history = calculator.calculate([stock_asset], txns, "1W", "USD", empty_rates, today=TODAY)

        assert point_on(history, days_ago(2)).value == Decimal("850")
        assert point_on(history, days_ago(2)).cost == Decimal("650")

    def test_datetime_transactions_bucket_on_their_day(self, calculator, empty_rates, stock_asset):
        stamp = datetime.combine(days_ago(2), datetime.max.time())
        buy = make_transaction(quantity="1", price="100", txn_date=stamp)

        history = calculator.calculate([stock_asset], [buy], "1W", "USD", empty_rates, today=TODAY)

        assert point_on(history, days_ago(1)).value == Decimal("1000")
        assert point_on(history, days_ago(2)).value == Decimal("900")

    def test_transactions_before_range_are_ignored(self, calculator, empty_rates, stock_asset):
        old_buy = make_transaction(quantity="5", price="100", txn_date=days_ago(60))

        history = calculator.calculate([stock_asset], [old_buy], "1M", "USD", empty_rates, today=TODAY)

        assert all(p.value == Decimal("1000") for p in history.data)

    def test_todays_transactions_are_undone_in_todays_point(self, calculator, empty_rates, stock_asset):
        buy = make_transaction(quantity="1", price="100", txn_date=TODAY)

        history = calculator.calculate([stock_asset], [buy], "1W", "USD", empty_rates, today=TODAY)

        assert history.data[-1].value == Decimal("900")
        assert history.data[-1].cost == Decimal("700")

    def test_todays_undone_buy_clamps_cost(self, calculator, empty_rates, stock_asset):
        """Undoing a buy larger than the cost basis floors today's cost at zero."""
        big_buy = make_transaction(quantity="10", price="100", txn_date=TODAY)

        history = calculator.calculate([stock_asset], [big_buy], "1W", "USD", empty_rates, today=TODAY)

        # 800 - 1000 would be -200
        today_point = history.data[-1]
        assert today_point.value == Decimal("0")
        assert today_point.cost == Decimal("0")
        assert today_point.pnl_percent == Decimal("0")
        assert all(p.cost >= 0 for p in history.data)

    def test_missing_rate_raises(self, calculator):
        """CHF only reaches EUR; there is no path to USD."""
        asset = make_asset(currency="CHF")
        rates = ExchangeRates.from_pairs({("CHF", "EUR"): Decimal("1.05")})
        buy = make_transaction(txn_date=days_ago(1))

        with pytest.raises(FXRateNotFoundError):
            calculator.calculate([asset], [buy], "1W", "USD", rates, today=TODAY)

    def test_inputs_not_mutated(self, calculator, empty_rates, stock_asset):
        txns = [make_transaction(txn_date=days_ago(1))]
        snapshot_of_txns = list(txns)

        calculator.calculate([stock_asset], txns, "1W", "USD", empty_rates, today=TODAY)

        assert txns == snapshot_of_txns


# =============================================================================
# COST CLAMP
# =============================================================================

class TestCostClamp:
    """The cost basis never goes negative once a day has been replayed."""

    def test_cost_clamped_at_zero(self, calculator, empty_rates, stock_asset):
        big_buy = make_transaction(quantity="10", price="100", txn_date=days_ago(2))

        history = calculator.calculate([stock_asset], [big_buy], "1W", "USD", empty_rates, today=TODAY)

        # 800 - 1000 would be -200
        assert point_on(history, days_ago(2)).cost == Decimal("0")
        assert point_on(history, days_ago(2)).value == Decimal("0")
        assert point_on(history, days_ago(2)).pnl_percent == Decimal("0")
        assert all(p.cost >= 0 for p in history.data)

    def test_liability_only_today_keeps_negative_cost(self, calculator, empty_rates, liability_asset):
        """With nothing undone today, today is the exact snapshot."""
        history = calculator.calculate([liability_asset], [], "1W", "USD", empty_rates, today=TODAY)

        assert history.data[-1].value == Decimal("-5000")
        assert history.data[-1].cost == Decimal("-5000")
        for point in history.data[:-1]:
            assert point.cost == Decimal("0")
            assert point.value == Decimal("-5000")


# =============================================================================
# NOISE
# =============================================================================

class TestNoise:
    """Market drift applied to past days."""

    def test_today_never_drifts(self, empty_rates, stock_asset):
        rng = ConstantRandom(0.0)
        calculator = HistoryCalculator(rng=rng)

        history = calculator.calculate([stock_asset], [], "1W", "USD", empty_rates, today=TODAY)

        assert history.data[-1].value == Decimal("1000")
        # One draw per past day
        assert rng.calls == 7

    def test_drift_compounds_backward(self, empty_rates, stock_asset):
        """u = 0 removes (0 - 0.5) × 0.008 × value, i.e. adds 0.4% per day."""
        calculator = HistoryCalculator(rng=ConstantRandom(0.0))

        history = calculator.calculate([stock_asset], [], "1W", "USD", empty_rates, today=TODAY)

        assert point_on(history, days_ago(1)).value == Decimal("1004")
        assert point_on(history, days_ago(2)).value == Decimal("1008.016")

    def test_drift_never_touches_cost(self, empty_rates, stock_asset):
        calculator = HistoryCalculator(rng=ConstantRandom(0.9))

        history = calculator.calculate([stock_asset], [], "1M", "USD", empty_rates, today=TODAY)

        assert all(p.cost == Decimal("800") for p in history.data)

    def test_crypto_uses_higher_volatility(self, empty_rates, stock_asset):
        btc = make_asset(id="btc", symbol="BTC", asset_class=AssetClass.CRYPTO)
        calculator = HistoryCalculator(rng=ConstantRandom(0.0))

        history = calculator.calculate([stock_asset, btc], [], "1W", "USD", empty_rates, today=TODAY)

        assert history.volatility == CRYPTO_VOLATILITY
        # 2000 × (1 + 0.5 × 0.02)
        assert point_on(history, days_ago(1)).value == Decimal("2020")

    def test_default_volatility_without_crypto(self, calculator, empty_rates, stock_asset):
        history = calculator.calculate([stock_asset], [], "1W", "USD", empty_rates, today=TODAY)

        assert history.volatility == DEFAULT_VOLATILITY

    def test_custom_volatility(self, empty_rates, stock_asset):
        calculator = HistoryCalculator(
            rng=ConstantRandom(0.0),
            default_volatility=Decimal("0.01"),
        )

        history = calculator.calculate([stock_asset], [], "1W", "USD", empty_rates, today=TODAY)

        assert point_on(history, days_ago(1)).value == Decimal("1005")

    def test_seeded_random_is_reproducible(self, empty_rates, stock_asset):
        first = reconstruct([stock_asset], [], "1M", "USD", empty_rates, TODAY, rng=random.Random(7))
        second = reconstruct([stock_asset], [], "1M", "USD", empty_rates, TODAY, rng=random.Random(7))

        assert first == second


# =============================================================================
# ALL RANGE
# =============================================================================

class TestAllRange:
    """Resolution of the ALL range."""

    def test_starts_a_week_before_first_transaction(self, calculator, empty_rates, stock_asset):
        txns = [
            make_transaction(id="t2", txn_date=days_ago(5)),
            make_transaction(id="t1", txn_date=days_ago(20)),
        ]

        history = calculator.calculate([stock_asset], txns, "ALL", "USD", empty_rates, today=TODAY)

        assert history.start_date == days_ago(27)
        assert history.total_points == 28

    def test_one_year_without_transactions(self, calculator, empty_rates, stock_asset):
        history = calculator.calculate([stock_asset], [], "ALL", "USD", empty_rates, today=TODAY)

        assert history.start_date == days_ago(365)
        assert history.total_points == 366

    def test_never_starts_after_today(self, calculator, empty_rates, stock_asset):
        future = make_transaction(txn_date=TODAY + timedelta(days=10))

        history = calculator.calculate([stock_asset], [future], "ALL", "USD", empty_rates, today=TODAY)

        assert history.start_date == TODAY
        assert history.total_points == 1


# =============================================================================
# WARNINGS
# =============================================================================

class TestWarnings:
    """Data quality warnings."""

    def test_unknown_asset_treated_as_base_currency(self, calculator, eur_usd_rates, stock_asset):
        orphan = make_transaction(asset_id="ghost", quantity="1", price="50", txn_date=days_ago(1))

        history = calculator.calculate([stock_asset], [orphan], "1W", "USD", eur_usd_rates, today=TODAY)

        assert point_on(history, days_ago(1)).value == Decimal("950")
        assert len(history.warnings) == 1
        assert "ghost" in history.warnings[0]

    def test_future_transactions_reported(self, calculator, empty_rates, stock_asset):
        future = make_transaction(txn_date=TODAY + timedelta(days=3))

        history = calculator.calculate([stock_asset], [future], "1M", "USD", empty_rates, today=TODAY)

        assert history.data[-1].value == Decimal("1000")
        assert any("not replayed" in w for w in history.warnings)

    def test_clean_data_has_no_warnings(self, calculator, empty_rates, stock_asset):
        history = calculator.calculate(
            [stock_asset], [make_transaction(txn_date=days_ago(1))], "1W", "USD", empty_rates, today=TODAY
        )

        assert history.warnings == []


# =============================================================================
# TREND SUMMARY
# =============================================================================

class TestTrendSummary:
    """Period change and profitability."""

    def test_period_change_after_buy(self, calculator, empty_rates, stock_asset):
        buy = make_transaction(quantity="2", price="100", txn_date=days_ago(3))

        history = calculator.calculate([stock_asset], [buy], "1W", "USD", empty_rates, today=TODAY)

        assert history.first_point.value == Decimal("800")
        assert history.last_point.value == Decimal("1000")
        assert history.period_change == Decimal("200")
        assert history.period_change_percent == Decimal("25.0000")
        assert history.is_profitable is True

    def test_not_profitable_when_value_below_cost(self, calculator, empty_rates):
        loser = make_asset(current_price="50", avg_cost="80")

        history = calculator.calculate([loser], [], "1W", "USD", empty_rates, today=TODAY)

        assert history.is_profitable is False
        assert history.period_change == Decimal("0")
