"""
Tests for the indicator library.
"""

import math

import numpy as np
import pytest

from marketlens.services.indicators.calculations import (
    NEUTRAL_RSI,
    NEUTRAL_VOLATILITY,
    adx,
    atr,
    bollinger_bands,
    ema,
    last_change_ratio,
    macd,
    price_change,
    price_roc,
    price_step,
    round_price,
    rsi,
    rsi_series,
    sma,
    sma_latest,
    standard_deviation,
    stoch_rsi,
    trend_intensity,
    true_range,
    volatility,
    volume_ratio,
    volume_trend,
)


def test_sma_rolling_pads_with_zeros():
    result = sma([1, 2, 3, 4], 2)
    assert list(result) == [0.0, 1.5, 2.5, 3.5]


def test_sma_shorter_than_period():
    assert list(sma([1, 2], 5)) == [0.0, 0.0]
    assert len(sma([], 3)) == 0


def test_sma_latest_uses_all_points_when_short():
    assert sma_latest([1, 2, 3], 5) == pytest.approx(2.0)
    assert sma_latest([1, 2, 3, 4, 5], 2) == pytest.approx(4.5)
    assert sma_latest([], 20) == 0.0


def test_ema_seeded_with_first_element():
    result = ema([10, 10, 10], 5)
    assert list(result) == [10.0, 10.0, 10.0]
    rising = ema([1, 2, 3], 2)
    assert rising[0] == 1.0
    assert rising[1] == pytest.approx(2 * (2 / 3) + 1 * (1 / 3))


def test_rsi_neutral_when_short():
    assert rsi([1, 2, 3], 14) == NEUTRAL_RSI
    assert rsi([100.0] * 14, 14) == NEUTRAL_RSI


def test_rsi_rising_is_100(rising_prices):
    assert rsi(rising_prices) == 100.0


def test_rsi_bounded(random_walk):
    value = rsi(random_walk)
    assert 0.0 <= value <= 100.0
    assert all(0.0 <= v <= 100.0 for v in rsi_series(random_walk))


def test_rsi_series_needs_one_step_past_seed():
    assert len(rsi_series([1.0] * 15, 14)) == 0
    assert len(rsi_series(list(range(1, 21)), 14)) == 5


def test_stoch_rsi_degenerate_is_neutral(rising_prices):
    # RSI pinned at 100 everywhere
    assert stoch_rsi(rising_prices) == NEUTRAL_RSI
    assert stoch_rsi([1, 2]) == NEUTRAL_RSI


def test_stoch_rsi_bounded(random_walk):
    assert 0.0 <= stoch_rsi(random_walk) <= 100.0


def test_macd_rising_series(rising_prices):
    result = macd(rising_prices)
    assert result.line > 0
    assert result.histogram == pytest.approx(result.line - result.signal)


def test_macd_empty():
    result = macd([])
    assert (result.line, result.signal, result.histogram) == (0.0, 0.0, 0.0)


def test_true_range_and_atr():
    assert list(true_range([1, 2, 4])) == [1.0, 2.0]
    assert atr([1, 2, 4]) == pytest.approx(1.5)
    assert atr([5]) == 0.0


def test_adx_directional_and_flat(rising_prices):
    assert adx(rising_prices) == pytest.approx(100.0)
    assert adx([100.0] * 30) == 0.0
    assert adx([1]) == 0.0


def test_adx_balanced_moves_is_zero():
    prices = [100, 101] * 10
    assert adx(prices, 14) == pytest.approx(0.0)


def test_volatility_bounds(random_walk):
    assert volatility([100]) == NEUTRAL_VOLATILITY
    assert volatility([100.0] * 10) == 0.0
    assert 0.0 <= volatility(random_walk) <= 100.0


def test_volatility_clamped_for_wild_series():
    prices = [100, 300] * 20
    assert volatility(prices) == 100.0


def test_standard_deviation_and_bollinger():
    assert standard_deviation([], 20) == 0.0
    bands = bollinger_bands([2, 4, 4, 4, 5, 5, 7, 9], period=8)
    assert bands.middle == pytest.approx(5.0)
    assert bands.upper == pytest.approx(9.0)
    assert bands.lower == pytest.approx(1.0)


def test_volume_ratio():
    assert volume_ratio([100.0] * 10) == 1.0
    assert volume_ratio([0.0] * 30) == 1.0
    volumes = [100.0] * 15 + [200.0] * 5
    assert volume_ratio(volumes) == pytest.approx(200 / 125)


def test_volume_trend():
    assert volume_trend([1.0] * 5) == 0.0
    volumes = [100.0] * 15 + [200.0] * 5
    assert volume_trend(volumes) == pytest.approx((200 - 125) / 125)


def test_trend_intensity():
    assert trend_intensity([1, 2, 1, 2]) == pytest.approx(1 / 3)
    assert trend_intensity([5]) == 0.0
    assert trend_intensity([3, 2, 1]) == -1.0


def test_price_roc():
    prices = [100.0] * 13 + [110.0]
    assert price_roc(prices, 14) == pytest.approx(10.0)
    assert price_roc([1, 2], 14) == 0.0


def test_price_change_and_last_change_ratio():
    assert price_change([100, 105, 110]) == pytest.approx(0.1)
    assert price_change([5]) == 0.0
    assert last_change_ratio([100, 150]) == pytest.approx(1.5)
    assert last_change_ratio([0, 150]) == 1.0
    assert last_change_ratio([]) == 1.0


def test_functions_accept_numpy_input(random_walk):
    data = np.asarray(random_walk)
    assert math.isfinite(rsi(data))
    assert math.isfinite(volatility(data))
    assert len(sma(data, 20)) == len(data)


def test_round_price():
    assert round_price(1234.5678) == 1234.57
    assert round_price(0.123456789) == 0.123457
    assert round_price(0.0000123456789) == 1.23457e-05
    assert round_price(4e-7) == 4e-7


@pytest.mark.parametrize("value", [3.0, 0.5, 1.2e-5, 4e-7])
def test_price_step_survives_rounding(value):
    assert round_price(value + price_step(value)) > round_price(value)
