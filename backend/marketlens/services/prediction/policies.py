"""
Prediction policies.

Each policy turns the current price context into three price ranges
(short, mid, long) plus per-horizon confidence.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from marketlens.core.config import PredictionPolicyName
from marketlens.schemas.analysis import (
    HorizonPrediction,
    KeyLevels,
    PredictionSet,
    PriceRange,
)
from marketlens.services.indicators.calculations import (
    clamp,
    price_change,
    price_step,
    round_price,
)

HORIZONS = (1, 2, 3)


@dataclass
class PredictionInput:
    """Everything a prediction policy may draw on."""

    current_price: float
    prices: list[float]
    volatility: float
    sentiment_score: float = 50.0
    key_levels: Optional[KeyLevels] = None
    trend_strength: float = 0.0

    @property
    def volatility_factor(self) -> float:
        """Volatility contribution, capped at 5%."""
        return min(0.05, max(0.0, self.volatility) / 1000)


def prediction_signals(low: float, high: float, volatility_factor: float) -> list[str]:
    """Describe the expected movement for one horizon."""
    signals = []
    spread = (high - low) / low if low > 0 else 0.0

    if spread > 0.10:
        signals.append("Significant price movement expected")
    elif spread > 0.05:
        signals.append("Moderate price movement expected")
    else:
        signals.append("Stable price action expected")

    if volatility_factor > 0.03:
        signals.append("Higher than average volatility")
    elif volatility_factor < 0.01:
        signals.append("Lower than average volatility")

    return signals


def _horizon(low: float, high: float, confidence: float, volatility_factor: float) -> HorizonPrediction:
    low, high = round_price(low), round_price(high)
    if high <= low:
        high = round_price(low + price_step(low))
    return HorizonPrediction(
        price=PriceRange(low=low, high=high),
        confidence=round(clamp(confidence, 30.0, 95.0), 2),
        signals=prediction_signals(low, high, volatility_factor),
    )


class PredictionPolicy(ABC):
    name: PredictionPolicyName

    @abstractmethod
    def predict(self, data: PredictionInput) -> PredictionSet:
        pass


class WideningPolicy(PredictionPolicy):
    """
    Ranges widen with the horizon and are nudged by sentiment and the
    20-point trend, then clamped to +/-15% of price.
    """

    name = PredictionPolicyName.WIDENING

    def predict(self, data: PredictionInput) -> PredictionSet:
        price = data.current_price
        vf = data.volatility_factor
        sentiment_factor = (data.sentiment_score - 50) / 100 * 0.02
        trend_factor = clamp(price_change(data.prices, 20), -0.03, 0.03)
        shift = price * (sentiment_factor + trend_factor)

        base = clamp(70 - vf * 100 + abs(sentiment_factor) * 100, 50.0, 90.0)
        confidences = (base, max(40.0, base * 0.9), max(30.0, base * 0.8))

        horizons = []
        for k, confidence in zip(HORIZONS, confidences):
            half_width = k * vf + 0.01 * k
            low = max(price * (1 - half_width) + shift, price * 0.85)
            high = min(price * (1 + half_width) + shift, price * 1.15)
            horizons.append(_horizon(low, high, confidence, vf * k))

        return PredictionSet(short_term=horizons[0], mid_term=horizons[1], long_term=horizons[2])


class FibonacciPolicy(PredictionPolicy):
    """
    Ranges from Fibonacci retracements of the support/resistance band.
    Confidence follows the trend model's estimate.
    """

    name = PredictionPolicyName.FIBONACCI

    def predict(self, data: PredictionInput) -> PredictionSet:
        price = data.current_price
        vf = data.volatility_factor
        spread = vf + 0.01

        levels = data.key_levels
        if levels is None or levels.resistance <= levels.support:
            support, resistance = price * (1 - 3 * spread), price * (1 + 3 * spread)
        else:
            support, resistance = levels.support, levels.resistance

        band = resistance - support
        fib236 = support + band * 0.236
        fib382 = support + band * 0.382
        fib618 = support + band * 0.618

        ranges = [
            (max(fib236, price * (1 - spread)), min(resistance, price * (1 + spread))),
            (min(price, fib382), max(price, fib618)),
            (support, resistance),
        ]

        base = clamp(50 + abs(data.trend_strength) * 40, 30.0, 95.0)
        confidences = (base, base * 0.9, base * 0.8)

        horizons = []
        for k, (low, high), confidence in zip(HORIZONS, ranges, confidences):
            if not low < high:
                low, high = price * (1 - k * spread), price * (1 + k * spread)
            horizons.append(_horizon(low, high, confidence, vf * k))

        return PredictionSet(short_term=horizons[0], mid_term=horizons[1], long_term=horizons[2])


_POLICIES = {
    PredictionPolicyName.WIDENING: WideningPolicy,
    PredictionPolicyName.FIBONACCI: FibonacciPolicy,
}


def get_prediction_policy(name: PredictionPolicyName) -> PredictionPolicy:
    return _POLICIES[PredictionPolicyName(name)]()
