"""
Trend-Strength Model

CONTRACT:
    Input:  feature vector [adx, trend_intensity, price_roc, volume_trend]
    Output: scalar trend strength, roughly in [-1, 1]

RESPONSIBILITIES:
    - Build the feature vector from price/volume series
    - Hold the model behind a lazily built, thread-safe handle
    - Guard against non-finite model output
"""

from marketlens.services.trend_model.features import FEATURE_NAMES, build_feature_vector
from marketlens.services.trend_model.model import (
    TrendModel,
    LinearTrendModel,
    load_trend_model,
)
from marketlens.services.trend_model.handle import TrendModelHandle, get_trend_model_handle

__all__ = [
    "FEATURE_NAMES",
    "build_feature_vector",
    "TrendModel",
    "LinearTrendModel",
    "load_trend_model",
    "TrendModelHandle",
    "get_trend_model_handle",
]
