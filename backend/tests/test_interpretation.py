"""
Tests for qualitative indicator readings.
"""

from marketlens.schemas.indicators import (
    TrendDirection,
    VolatilityRisk,
    VolatilityTrend,
    VolumeSignificance,
    VolumeTrend,
)
from marketlens.services.indicators.calculations import MACDResult
from marketlens.services.indicators.interpretation import (
    interpret_macd,
    interpret_rsi,
    interpret_stoch_rsi,
    primary_trend,
    secondary_trend,
    volatility_risk,
    volatility_trend,
    volume_significance,
    volume_trend_label,
)


def test_rsi_labels():
    assert interpret_rsi(75) == "overbought"
    assert interpret_rsi(25) == "oversold"
    assert interpret_rsi(70) == "neutral"
    assert interpret_rsi(30) == "neutral"


def test_stoch_rsi_labels():
    assert interpret_stoch_rsi(85) == "extremely overbought"
    assert interpret_stoch_rsi(65) == "overbought"
    assert interpret_stoch_rsi(50) == "neutral"
    assert interpret_stoch_rsi(35) == "oversold"
    assert interpret_stoch_rsi(10) == "extremely oversold"


def test_macd_strong_bullish_upward():
    text = interpret_macd(MACDResult(line=1.0, signal=0.5, histogram=0.5))
    assert text == "Strong bullish momentum, upward trend"


def test_macd_weak_bearish_downward_reversal():
    text = interpret_macd(MACDResult(line=-10.0, signal=-9.95, histogram=-0.05))
    assert text == "Bearish momentum, downward trend, potential trend reversal"


def test_macd_neutral():
    text = interpret_macd(MACDResult(line=0.0, signal=0.0, histogram=0.0))
    assert text == "Neutral momentum, potential trend reversal"


def test_primary_and_secondary_trend(rising_prices):
    assert primary_trend(rising_prices) == TrendDirection.BULLISH
    assert primary_trend(list(reversed(rising_prices))) == TrendDirection.BEARISH
    assert primary_trend([100.0] * 50) == TrendDirection.NEUTRAL
    assert secondary_trend(rising_prices) == TrendDirection.BULLISH
    assert secondary_trend([]) == TrendDirection.NEUTRAL


def test_volatility_trend_needs_100_points(random_walk):
    assert volatility_trend(random_walk[:99]) == VolatilityTrend.STABLE
    calm_then_wild = [100.0, 100.5] * 25 + [100.0, 110.0] * 25
    assert volatility_trend(calm_then_wild) == VolatilityTrend.INCREASING
    assert volatility_trend(list(reversed(calm_then_wild))) == VolatilityTrend.DECREASING


def test_volatility_risk_buckets():
    assert volatility_risk(81) == VolatilityRisk.HIGH
    assert volatility_risk(80) == VolatilityRisk.MEDIUM
    assert volatility_risk(41) == VolatilityRisk.MEDIUM
    assert volatility_risk(40) == VolatilityRisk.LOW


def test_volume_trend_label():
    assert volume_trend_label([1.0] * 99) == VolumeTrend.NEUTRAL
    assert volume_trend_label([100.0] * 50 + [120.0] * 50) == VolumeTrend.INCREASING
    assert volume_trend_label([100.0] * 50 + [80.0] * 50) == VolumeTrend.DECREASING
    assert volume_trend_label([100.0] * 100) == VolumeTrend.NEUTRAL


def test_volume_significance():
    assert volume_significance(0.8) == VolumeSignificance.STRONG
    assert volume_significance(0.5) == VolumeSignificance.MODERATE
    assert volume_significance(0.4) == VolumeSignificance.WEAK
