"""
Price Predictor

CONTRACT:
    Input:  PredictionInput (price, volatility, sentiment, levels, trend strength)
    Output: StageResult[PredictionSet]

RESPONSIBILITIES:
    - Short/mid/long price ranges with low < high
    - Per-horizon confidence in [30, 95], falling with the horizon
    - Descriptive signals per horizon
"""

from marketlens.services.prediction.policies import (
    PredictionInput,
    PredictionPolicy,
    WideningPolicy,
    FibonacciPolicy,
    get_prediction_policy,
    prediction_signals,
)
from marketlens.services.prediction.service import PricePredictor, default_predictions

__all__ = [
    "PredictionInput",
    "PredictionPolicy",
    "WideningPolicy",
    "FibonacciPolicy",
    "get_prediction_policy",
    "prediction_signals",
    "PricePredictor",
    "default_predictions",
]
