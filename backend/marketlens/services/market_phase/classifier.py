"""
Market Phase Classifier

Combines the MA structure, the trend-strength estimate and the volume
profile into a MarketCondition. Returns a StageResult; the analysis
orchestrator decides what replaces a failure.
"""

import logging
import math
from typing import Optional

from marketlens.core.config import PhasePolicyName, settings
from marketlens.schemas.analysis import MarketCondition
from marketlens.schemas.indicators import VolumeProfile
from marketlens.services.base import ComputationError, StageResult, ValidationError
from marketlens.services.indicators.calculations import as_array, clamp, sma_latest
from marketlens.services.market_phase.levels import compute_key_levels
from marketlens.services.market_phase.policies import (
    MAStructure,
    PhasePolicy,
    get_phase_policy,
)

logger = logging.getLogger(__name__)


class MarketPhaseClassifier:
    """Classifies the market phase under one PhasePolicy."""

    name = "MarketPhaseClassifier"

    def __init__(self, policy: Optional[PhasePolicy] = None):
        self.policy = policy or get_phase_policy(settings.phase_policy)

    @classmethod
    def for_policy(cls, name: PhasePolicyName) -> "MarketPhaseClassifier":
        return cls(get_phase_policy(name))

    def classify(
        self,
        prices: list[float],
        trend_strength: float,
        profile: VolumeProfile,
    ) -> StageResult[MarketCondition]:
        """
        Classify one snapshot.

        Deterministic: identical inputs always give an identical condition.
        """
        try:
            data = as_array(prices)
        except (TypeError, ValueError) as e:
            return StageResult.failure(ValidationError(self.name, f"Non-numeric prices: {e}"))
        if len(data) == 0:
            return StageResult.failure(ValidationError(self.name, "Empty price series"))
        if not all(math.isfinite(p) and p > 0 for p in data):
            return StageResult.failure(
                ValidationError(self.name, "Price series must be positive and finite")
            )
        if not math.isfinite(trend_strength):
            return StageResult.failure(
                ValidationError(
                    self.name,
                    "Trend strength is not finite",
                    {"trend_strength": trend_strength},
                )
            )

        try:
            return StageResult.success(self._classify(data, trend_strength, profile))
        except (ArithmeticError, ValueError) as e:
            logger.error(f"Market phase classification failed: {e}")
            return StageResult.failure(ComputationError(self.name, str(e)))

    def _classify(self, data, trend_strength: float, profile: VolumeProfile) -> MarketCondition:
        price = float(data[-1])
        structure = MAStructure(
            price=price,
            ma20=sma_latest(data, 20),
            ma50=sma_latest(data, 50),
            ma200=sma_latest(data, 200),
        )

        phase = self.policy.select_phase(structure, trend_strength)
        strength = self.policy.phase_strength(phase, trend_strength, profile)
        levels = compute_key_levels(data, price, structure.ma20, structure.ma50)

        position = (price - levels.support) / (levels.resistance - levels.support)
        confidence = clamp(
            (
                strength * 100
                + (60 if structure.above_ma50 else 40)
                + (60 if structure.above_ma200 else 40)
                + clamp(position, 0.0, 1.0) * 100
            )
            / 4,
            30.0,
            95.0,
        )

        logger.info(
            f"Market phase: {phase.value} (policy {self.policy.name.value}, "
            f"trend strength {trend_strength:.3f}, confidence {confidence:.1f})"
        )

        return MarketCondition(
            phase=phase,
            strength=round(clamp(strength, 0.0, 1.0), 2),
            confidence=round(confidence, 2),
            key_levels=levels,
        )
