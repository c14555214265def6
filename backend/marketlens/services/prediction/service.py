"""
Price Predictor

Runs the configured prediction policy and reports the outcome as a
StageResult.
"""

import logging
import math
from typing import Optional

from marketlens.core.config import PredictionPolicyName, settings
from marketlens.schemas.analysis import HorizonPrediction, PredictionSet, PriceRange
from marketlens.services.base import ComputationError, StageResult, ValidationError
from marketlens.services.prediction.policies import (
    PredictionInput,
    PredictionPolicy,
    get_prediction_policy,
)

logger = logging.getLogger(__name__)


def default_predictions(price: float) -> PredictionSet:
    """+/-5%, 10% and 15% bands with falling confidence."""

    def horizon(width: float, confidence: float) -> HorizonPrediction:
        return HorizonPrediction(
            price=PriceRange(low=price * (1 - width), high=price * (1 + width)),
            confidence=confidence,
            signals=["Default prediction"],
        )

    return PredictionSet(
        short_term=horizon(0.05, 50.0),
        mid_term=horizon(0.10, 40.0),
        long_term=horizon(0.15, 30.0),
    )


class PricePredictor:
    """Short/mid/long price ranges under one PredictionPolicy."""

    name = "PricePredictor"

    def __init__(self, policy: Optional[PredictionPolicy] = None):
        self.policy = policy or get_prediction_policy(settings.prediction_policy)

    @classmethod
    def for_policy(cls, name: PredictionPolicyName) -> "PricePredictor":
        return cls(get_prediction_policy(name))

    def predict(self, data: PredictionInput) -> StageResult[PredictionSet]:
        price = data.current_price
        if not math.isfinite(price) or price <= 0:
            return StageResult.failure(
                ValidationError(self.name, "Current price must be positive", {"price": price})
            )

        try:
            predictions = self.policy.predict(data)
        except (ArithmeticError, ValueError) as e:
            logger.error(f"Price prediction failed: {e}")
            return StageResult.failure(ComputationError(self.name, str(e)))

        logger.info(
            f"Predictions ({self.policy.name.value}): short "
            f"{predictions.short_term.price.low}-{predictions.short_term.price.high}"
        )
        return StageResult.success(predictions)
