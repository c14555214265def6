"""
Trend-strength model features.

The model consumes a fixed 4-element vector:
    [adx, trend_intensity, price_roc, volume_trend]
"""

import numpy as np

from marketlens.services.indicators.calculations import (
    Series,
    adx,
    price_roc,
    trend_intensity,
    volume_trend,
)

FEATURE_NAMES = ("adx", "trend_intensity", "price_roc", "volume_trend")


def build_feature_vector(prices: Series, volumes: Series) -> np.ndarray:
    """Feature vector of shape (4,) for the trend-strength model."""
    return np.array(
        [
            adx(prices, 14),
            trend_intensity(prices),
            price_roc(prices, 14),
            volume_trend(volumes),
        ],
        dtype=float,
    )
