"""
Qualitative indicator readings.

Threshold maps from raw indicator values to the labels shown in
TechnicalSignals.
"""

from marketlens.schemas.indicators import (
    TrendDirection,
    VolatilityRisk,
    VolatilityTrend,
    VolumeSignificance,
    VolumeTrend,
)
from marketlens.services.indicators.calculations import (
    MACDResult,
    Series,
    as_array,
    ema,
    sma_latest,
    volatility,
)


def interpret_rsi(value: float) -> str:
    if value > 70:
        return "overbought"
    if value < 30:
        return "oversold"
    return "neutral"


def interpret_stoch_rsi(value: float) -> str:
    if value > 80:
        return "extremely overbought"
    if value > 60:
        return "overbought"
    if value < 20:
        return "extremely oversold"
    if value < 40:
        return "oversold"
    return "neutral"


def interpret_macd(result: MACDResult) -> str:
    """
    Describe MACD momentum.

    Momentum is "strong" when the histogram exceeds 10% of the MACD line.
    """
    histogram = result.histogram
    strong = abs(histogram) > 0.1 * abs(result.line)

    if histogram > 0:
        text = "Strong bullish momentum" if strong else "Bullish momentum"
    elif histogram < 0:
        text = "Strong bearish momentum" if strong else "Bearish momentum"
    else:
        text = "Neutral momentum"

    if result.line > 0 and result.signal > 0:
        text += ", upward trend"
    elif result.line < 0 and result.signal < 0:
        text += ", downward trend"

    if abs(result.line - result.signal) < 0.1:
        text += ", potential trend reversal"

    return text


def primary_trend(prices: Series) -> TrendDirection:
    """MA20/MA50/MA200 alignment."""
    ma20 = sma_latest(prices, 20)
    ma50 = sma_latest(prices, 50)
    ma200 = sma_latest(prices, 200)

    if ma20 > ma50 > ma200:
        return TrendDirection.BULLISH
    if ma20 < ma50 < ma200:
        return TrendDirection.BEARISH
    return TrendDirection.NEUTRAL


def secondary_trend(prices: Series) -> TrendDirection:
    """EMA5 against EMA10 over the last 20 prices."""
    recent = as_array(prices)[-20:]
    if len(recent) == 0:
        return TrendDirection.NEUTRAL

    short_ma = ema(recent, 5)[-1]
    medium_ma = ema(recent, 10)[-1]
    if short_ma > medium_ma:
        return TrendDirection.BULLISH
    if short_ma < medium_ma:
        return TrendDirection.BEARISH
    return TrendDirection.NEUTRAL


def volatility_trend(prices: Series) -> VolatilityTrend:
    """Volatility of the last 50 prices against the 50 before."""
    data = as_array(prices)
    if len(data) < 100:
        return VolatilityTrend.STABLE

    current = volatility(data[-50:])
    previous = volatility(data[-100:-50])
    if current > previous * 1.2:
        return VolatilityTrend.INCREASING
    if current < previous * 0.8:
        return VolatilityTrend.DECREASING
    return VolatilityTrend.STABLE


def volatility_risk(value: float) -> VolatilityRisk:
    if value > 80:
        return VolatilityRisk.HIGH
    if value > 40:
        return VolatilityRisk.MEDIUM
    return VolatilityRisk.LOW


def volume_trend_label(volumes: Series) -> VolumeTrend:
    """Mean of the last 50 volumes against the 50 before."""
    data = as_array(volumes)
    if len(data) < 100:
        return VolumeTrend.NEUTRAL

    recent = float(data[-50:].mean())
    previous = float(data[-100:-50].mean())
    if recent > previous * 1.1:
        return VolumeTrend.INCREASING
    if recent < previous * 0.9:
        return VolumeTrend.DECREASING
    return VolumeTrend.NEUTRAL


def volume_significance(strength: float) -> VolumeSignificance:
    if strength > 0.7:
        return VolumeSignificance.STRONG
    if strength > 0.4:
        return VolumeSignificance.MODERATE
    return VolumeSignificance.WEAK
