"""
Technical Indicator Calculations

Pure NumPy implementations of the indicators used by the market engine.
All math is deterministic. A single price series stands in for high, low
and close, so range-based indicators work off consecutive price deltas.

Every function accepts any sequence of floats and never raises on short or
degenerate input: it returns a documented neutral value instead.
"""

from dataclasses import dataclass
from typing import Sequence, Union
import math

import numpy as np

Series = Union[Sequence[float], np.ndarray]

NEUTRAL_RSI = 50.0
NEUTRAL_VOLATILITY = 30.0
ANNUALISATION = math.sqrt(365)


@dataclass(frozen=True)
class MACDResult:
    """Latest MACD readings."""

    line: float
    signal: float
    histogram: float


@dataclass(frozen=True)
class BollingerBands:
    """Latest Bollinger Band values."""

    upper: float
    middle: float
    lower: float


def as_array(series: Series) -> np.ndarray:
    return np.asarray(series, dtype=float).ravel()


def _finite_or(value: float, fallback: float) -> float:
    return float(value) if np.isfinite(value) else fallback


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(series: Series, period: int) -> np.ndarray:
    """
    Rolling Simple Moving Average.

    Same length as the input; positions before ``period - 1`` hold 0.0.
    """
    data = as_array(series)
    result = np.zeros(len(data))
    if period <= 0 or len(data) < period:
        return result

    cumulative = np.cumsum(np.insert(data, 0, 0.0))
    result[period - 1 :] = (cumulative[period:] - cumulative[:-period]) / period
    return result


def sma_latest(series: Series, period: int) -> float:
    """
    Moving average at the last point.

    Mean of the trailing ``period`` values, or of all values when fewer
    are available. Every "MA right now" lookup goes through here.
    """
    data = as_array(series)
    if len(data) == 0 or period <= 0:
        return 0.0
    return float(np.mean(data[-period:]))


def ema(series: Series, period: int) -> np.ndarray:
    """Exponential Moving Average seeded with the first element."""
    data = as_array(series)
    result = np.zeros(len(data))
    if len(data) == 0:
        return result

    k = 2 / (period + 1)
    result[0] = data[0]
    for i in range(1, len(data)):
        result[i] = data[i] * k + result[i - 1] * (1 - k)
    return result


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def _wilder_averages(data: np.ndarray, period: int):
    """Yield (avg_gain, avg_loss) after the seed window and each later step."""
    deltas = np.diff(data)
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    avg_gain = float(np.mean(gains[:period]))
    avg_loss = float(np.mean(losses[:period]))
    yield avg_gain, avg_loss

    for i in range(period, len(deltas)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        yield avg_gain, avg_loss


def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return _finite_or(100 - (100 / (1 + rs)), NEUTRAL_RSI)


def rsi(series: Series, period: int = 14) -> float:
    """Relative Strength Index (Wilder smoothing) at the last point."""
    data = as_array(series)
    if len(data) < period + 1:
        return NEUTRAL_RSI

    value = NEUTRAL_RSI
    for avg_gain, avg_loss in _wilder_averages(data, period):
        value = _rsi_from_averages(avg_gain, avg_loss)
    return value


def rsi_series(series: Series, period: int = 14) -> np.ndarray:
    """RSI after every smoothing step past the seed window."""
    data = as_array(series)
    if len(data) < period + 2:
        return np.array([])

    averages = list(_wilder_averages(data, period))[1:]
    return np.array([_rsi_from_averages(gain, loss) for gain, loss in averages])


def macd(
    series: Series,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> MACDResult:
    """
    MACD (Moving Average Convergence Divergence) at the last point.

    line = EMA(fast) - EMA(slow); signal = EMA of the line;
    histogram = line - signal.
    """
    data = as_array(series)
    if len(data) == 0:
        return MACDResult(line=0.0, signal=0.0, histogram=0.0)

    macd_line = ema(data, fast_period) - ema(data, slow_period)
    signal_line = ema(macd_line, signal_period)

    line = _finite_or(macd_line[-1], 0.0)
    signal = _finite_or(signal_line[-1], 0.0)
    return MACDResult(line=line, signal=signal, histogram=line - signal)


def stoch_rsi(series: Series, period: int = 14) -> float:
    """Latest RSI placed within the min/max of the last ``period`` RSI values."""
    values = rsi_series(series, period)[-period:]
    if len(values) < 2:
        return NEUTRAL_RSI

    low, high = float(np.min(values)), float(np.max(values))
    if high == low:
        return NEUTRAL_RSI
    return _finite_or((values[-1] - low) / (high - low) * 100, NEUTRAL_RSI)


def price_roc(series: Series, period: int = 14) -> float:
    """Rate of change (%) against the price ``period`` points back."""
    data = as_array(series)
    if len(data) < period or period <= 0:
        return 0.0

    old_price = data[-period]
    if old_price == 0:
        return 0.0
    return _finite_or((data[-1] - old_price) / old_price * 100, 0.0)


def trend_intensity(series: Series) -> float:
    """(up steps - down steps) / steps, in [-1, 1]."""
    data = as_array(series)
    if len(data) < 2:
        return 0.0

    deltas = np.diff(data)
    ups = int(np.sum(deltas > 0))
    downs = int(np.sum(deltas < 0))
    return (ups - downs) / len(deltas)


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def true_range(series: Series) -> np.ndarray:
    """
    True range per step.

    With price as both high and low this reduces to |p[i] - p[i-1]|.
    """
    data = as_array(series)
    if len(data) < 2:
        return np.array([])
    return np.abs(np.diff(data))


def atr(series: Series, period: int = 14) -> float:
    """Average True Range over the trailing ``period`` steps."""
    tr = true_range(series)
    if len(tr) == 0:
        return 0.0
    return _finite_or(np.mean(tr[-period:]), 0.0)


def standard_deviation(series: Series, period: int) -> float:
    """Population standard deviation of the trailing window."""
    data = as_array(series)
    if len(data) == 0 or period <= 0:
        return 0.0
    return _finite_or(np.std(data[-period:]), 0.0)


def volatility(series: Series) -> float:
    """
    Annualised volatility of log returns, as a percentage.

    Clamped to [0, 100]; 30 when there is not enough data.
    """
    data = as_array(series)
    if len(data) < 2:
        return NEUTRAL_VOLATILITY

    with np.errstate(divide="ignore", invalid="ignore"):
        returns = np.diff(np.log(data))
        value = np.std(returns) * ANNUALISATION * 100

    if not np.isfinite(value):
        return NEUTRAL_VOLATILITY
    return clamp(float(value), 0.0, 100.0)


def bollinger_bands(
    series: Series, period: int = 20, multiplier: float = 2.0
) -> BollingerBands:
    """Bollinger Bands at the last point."""
    middle = sma_latest(series, period)
    width = multiplier * standard_deviation(series, period)
    return BollingerBands(upper=middle + width, middle=middle, lower=middle - width)


# =============================================================================
# TREND INDICATORS
# =============================================================================


def adx(series: Series, period: int = 14) -> float:
    """
    Average Directional Index from close-to-close movement.

    DM+ / DM- are summed over the trailing ``period`` steps and normalised
    by ATR. Returns |DI+ - DI-| / (DI+ + DI-) * 100, or 0 when degenerate.
    """
    data = as_array(series)
    if len(data) < 2:
        return 0.0

    deltas = np.diff(data)[-period:]
    average_true_range = atr(data, period)
    if average_true_range == 0:
        return 0.0

    plus_di = np.sum(np.maximum(deltas, 0.0)) / period / average_true_range * 100
    minus_di = np.sum(np.maximum(-deltas, 0.0)) / period / average_true_range * 100

    total = plus_di + minus_di
    if total == 0:
        return 0.0
    return _finite_or(abs(plus_di - minus_di) / total * 100, 0.0)


def price_change(series: Series, lookback: int = 20) -> float:
    """Fractional change across the trailing ``lookback`` window."""
    data = as_array(series)[-lookback:]
    if len(data) < 2 or data[0] == 0:
        return 0.0
    return _finite_or((data[-1] - data[0]) / data[0], 0.0)


def last_change_ratio(series: Series) -> float:
    """series[-1] / series[-2]; 1 when undefined."""
    data = as_array(series)
    if len(data) < 2 or data[-2] == 0:
        return 1.0
    return _finite_or(data[-1] / data[-2], 1.0)


# =============================================================================
# VOLUME INDICATORS
# =============================================================================


def volume_ratio(volumes: Series) -> float:
    """Mean of the last 5 volumes over the mean of the last 20."""
    data = as_array(volumes)
    if len(data) < 20:
        return 1.0

    average = np.mean(data[-20:])
    if average == 0:
        return 1.0
    ratio = np.mean(data[-5:]) / average
    return max(0.0, _finite_or(ratio, 1.0))


def volume_trend(volumes: Series) -> float:
    """(mean5 - mean20) / mean20, the relative lift in recent volume."""
    data = as_array(volumes)
    if len(data) < 20:
        return 0.0

    average = np.mean(data[-20:])
    if average == 0:
        return 0.0
    return _finite_or((np.mean(data[-5:]) - average) / average, 0.0)


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def round_sig(value: float, digits: int = 6) -> float:
    """Round to a number of significant figures."""
    return float(f"{value:.{digits}g}")


def round_price(value: float) -> float:
    """Round to cents for prices >= 1, else to 6 significant figures."""
    if abs(value) >= 1:
        return round(value, 2)
    return round_sig(value)


def price_step(value: float) -> float:
    """Smallest increment that survives round_price at this magnitude."""
    if abs(value) >= 1:
        return 0.01
    if value == 0:
        return 0.000001
    return 10 ** (math.floor(math.log10(abs(value))) - 5)

