"""
Tests for price prediction policies.
"""

import pytest

from marketlens.core.config import PredictionPolicyName
from marketlens.schemas.analysis import KeyLevels
from marketlens.services.base import ValidationError
from marketlens.services.market_phase import default_key_levels
from marketlens.services.prediction import (
    FibonacciPolicy,
    PredictionInput,
    PricePredictor,
    WideningPolicy,
    default_predictions,
    prediction_signals,
)
from marketlens.services.prediction.policies import _horizon


def horizons(predictions):
    return [predictions.short_term, predictions.mid_term, predictions.long_term]


def width(horizon):
    return horizon.price.high - horizon.price.low


@pytest.mark.parametrize("vol", [0.0, 5.0, 30.0, 80.0, 100.0])
@pytest.mark.parametrize("sentiment", [0.0, 50.0, 100.0])
def test_widening_ranges_nest(rising_prices, vol, sentiment):
    data = PredictionInput(
        current_price=rising_prices[-1],
        prices=rising_prices,
        volatility=vol,
        sentiment_score=sentiment,
    )
    predictions = WideningPolicy().predict(data)
    short, mid, long_ = horizons(predictions)

    assert width(short) <= width(mid) <= width(long_)
    for h in (short, mid, long_):
        assert h.price.low < h.price.high
        assert 30 <= h.confidence <= 95
    assert short.confidence > mid.confidence > long_.confidence


def test_widening_clamped_to_fifteen_percent():
    data = PredictionInput(current_price=100.0, prices=[100.0] * 30, volatility=100.0)
    long_term = WideningPolicy().predict(data).long_term
    assert long_term.price.low >= 85.0
    assert long_term.price.high <= 115.0


def test_widening_known_values():
    data = PredictionInput(current_price=100.0, prices=[100.0] * 30, volatility=20.0)
    predictions = WideningPolicy().predict(data)
    # vf = 0.02, half widths 0.03 / 0.06 / 0.09
    assert predictions.short_term.price.low == 97.0
    assert predictions.short_term.price.high == 103.0
    assert predictions.long_term.price.low == 91.0
    assert predictions.short_term.confidence == 68.0


@pytest.mark.parametrize("ts", [-1.0, -0.3, 0.0, 0.6, 1.0])
def test_fibonacci_low_below_high(random_walk, ts):
    price = random_walk[-1]
    for levels in (default_key_levels("x", price), None):
        data = PredictionInput(
            current_price=price,
            prices=random_walk,
            volatility=40.0,
            key_levels=levels,
            trend_strength=ts,
        )
        predictions = FibonacciPolicy().predict(data)
        confidences = [h.confidence for h in horizons(predictions)]
        assert all(h.price.low < h.price.high for h in horizons(predictions))
        assert all(30 <= c <= 95 for c in confidences)
        assert confidences[0] > confidences[1] > confidences[2]


def test_fibonacci_degenerate_band_uses_symmetric_range():
    levels = KeyLevels(
        strong_support=100.0, support=100.0, pivot=100.0, resistance=100.0, strong_resistance=100.0
    )
    data = PredictionInput(
        current_price=100.0, prices=[100.0] * 30, volatility=0.0, key_levels=levels
    )
    short = FibonacciPolicy().predict(data).short_term
    assert short.price.low == 99.0
    assert short.price.high == 101.0


def test_prediction_signals():
    assert prediction_signals(100, 112, 0.04) == [
        "Significant price movement expected",
        "Higher than average volatility",
    ]
    assert prediction_signals(100, 106, 0.02) == ["Moderate price movement expected"]
    assert prediction_signals(100, 101, 0.005) == [
        "Stable price action expected",
        "Lower than average volatility",
    ]


def test_default_predictions():
    predictions = default_predictions(100.0)
    assert predictions.short_term.price.low == pytest.approx(95.0)
    assert predictions.long_term.price.high == pytest.approx(115.0)
    assert [h.confidence for h in horizons(predictions)] == [50.0, 40.0, 30.0]


def test_predictor_rejects_bad_price():
    predictor = PricePredictor.for_policy(PredictionPolicyName.WIDENING)
    result = predictor.predict(PredictionInput(current_price=0.0, prices=[], volatility=10.0))
    assert not result.ok
    assert isinstance(result.error, ValidationError)


def test_predictor_selects_policy():
    assert isinstance(PricePredictor.for_policy("fibonacci").policy, FibonacciPolicy)
    assert isinstance(PricePredictor.for_policy(PredictionPolicyName.WIDENING).policy, WideningPolicy)


# =============================================================================
# MICRO-PRICED ASSETS
# =============================================================================


@pytest.fixture
def micro_prices():
    return [1.2e-5 * (1 + 0.02 * ((i % 17) - 8) / 8) for i in range(250)]


@pytest.mark.parametrize("vol", [0.0, 40.0])
def test_widening_keeps_micro_ranges_open(micro_prices, vol):
    data = PredictionInput(current_price=micro_prices[-1], prices=micro_prices, volatility=vol)
    for h in horizons(WideningPolicy().predict(data)):
        assert 0 < h.price.low < h.price.high


@pytest.mark.parametrize("vol", [0.0, 40.0])
def test_fibonacci_keeps_micro_ranges_open(micro_prices, vol):
    price = micro_prices[-1]
    for levels in (default_key_levels("x", price), None):
        data = PredictionInput(
            current_price=price, prices=micro_prices, volatility=vol, key_levels=levels
        )
        for h in horizons(FibonacciPolicy().predict(data)):
            assert 0 < h.price.low < h.price.high


def test_horizon_reopens_range_collapsed_by_rounding():
    horizon = _horizon(1.0, 1.004, 50.0, 0.0)
    assert horizon.price.low == 1.0
    assert horizon.price.high == 1.01

    micro = _horizon(1.2e-5, 1.2000001e-5, 50.0, 0.0)
    assert micro.price.low < micro.price.high
