"""
Trend-strength models.

A trend model maps the 4-element feature vector to a scalar roughly in
[-1, 1]: positive for up-trends, negative for down-trends, near zero when
the market has no direction.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np

from marketlens.services.trend_model.features import FEATURE_NAMES

logger = logging.getLogger(__name__)

# Weights for [adx, trend_intensity, price_roc, volume_trend]
DEFAULT_WEIGHTS = (0.6, 1.2, 0.8, 0.2)
DEFAULT_BIAS = 0.0
# ADX is 0-100, ROC is a percentage
DEFAULT_SCALE = (100.0, 1.0, 10.0, 1.0)


class TrendModel(ABC):
    """Black-box trend-strength estimator."""

    @abstractmethod
    def predict(self, features: np.ndarray) -> float:
        """Return the trend-strength estimate for one feature vector."""
        pass


class LinearTrendModel(TrendModel):
    """
    tanh(bias + sum(w_i * x_i / scale_i)).

    ADX carries no direction, so it is signed by the trend intensity
    before weighting.
    """

    def __init__(
        self,
        weights: Sequence[float] = DEFAULT_WEIGHTS,
        bias: float = DEFAULT_BIAS,
        scale: Sequence[float] = DEFAULT_SCALE,
    ):
        self.weights = np.asarray(weights, dtype=float)
        self.scale = np.asarray(scale, dtype=float)
        self.bias = float(bias)

        expected = len(FEATURE_NAMES)
        if self.weights.shape != (expected,) or self.scale.shape != (expected,):
            raise ValueError(
                f"Expected {expected} weights and scales, "
                f"got {self.weights.shape} and {self.scale.shape}"
            )
        if np.any(self.scale == 0):
            raise ValueError("Feature scale must be non-zero")

    @classmethod
    def default(cls) -> "LinearTrendModel":
        return cls()

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "LinearTrendModel":
        """Load ``{"weights": [...], "bias": b, "scale": [...]}`` from JSON."""
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)

        return cls(
            weights=payload["weights"],
            bias=payload.get("bias", DEFAULT_BIAS),
            scale=payload.get("scale", DEFAULT_SCALE),
        )

    def predict(self, features: np.ndarray) -> float:
        x = np.asarray(features, dtype=float).ravel()
        if x.shape != self.weights.shape:
            raise ValueError(f"Expected feature shape {self.weights.shape}, got {x.shape}")

        x = x / self.scale
        x[0] = x[0] * np.sign(x[1])
        return float(np.tanh(self.bias + np.dot(self.weights, x)))


def load_trend_model(path: Optional[str] = None) -> TrendModel:
    """Load weights from ``path``, falling back to the built-in weights."""
    if not path:
        return LinearTrendModel.default()

    try:
        model = LinearTrendModel.from_file(path)
        logger.info(f"Loaded trend model weights from {path}")
        return model
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.warning(f"Could not load trend model from {path}: {e}, using built-in weights")
        return LinearTrendModel.default()
