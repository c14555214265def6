"""
Risk Scorer Implementation

Deterministic composite risk. All rules are auditable.
"""

import logging
from typing import Optional

import numpy as np

from marketlens.schemas.analysis import RiskAssessment, RiskFactors
from marketlens.services.base import ComputationError, StageResult
from marketlens.services.indicators.calculations import (
    as_array,
    clamp,
    last_change_ratio,
    price_change,
    volatility,
)
from marketlens.services.risk.interface import RiskInput, RiskScorerInterface

logger = logging.getLogger(__name__)

NO_RISK_WARNING = "No significant risks detected"


def _clamp_score(value: float) -> float:
    return round(clamp(value, 0.0, 100.0), 2)


class RiskScorer(RiskScorerInterface):
    """
    Risk Scorer.

    Four independent factors, averaged into one 0-100 score.
    """

    @property
    def name(self) -> str:
        return "RiskScorer"

    async def execute(self, input_data: RiskInput) -> RiskAssessment:
        result = self.score(input_data)
        if not result.ok:
            raise result.error
        return result.value

    def score(self, input_data: RiskInput) -> StageResult[RiskAssessment]:
        try:
            assessment = self._score(input_data)
        except (ArithmeticError, ValueError) as e:
            logger.error(f"Risk scoring failed: {e}")
            return StageResult.failure(ComputationError(self.name, str(e)))

        logger.info(f"Risk: overall {assessment.overall}, warnings {assessment.warnings}")
        return StageResult.success(assessment)

    def _score(self, data: RiskInput) -> RiskAssessment:
        volume_change = last_change_ratio(data.volumes)

        factors = RiskFactors(
            technical=_clamp_score(
                data.volatility * 0.7 + (1 - abs(data.trend_strength)) * 30
            ),
            fundamental=self._fundamental_risk(data.prices, volume_change),
            sentiment=_clamp_score(100 - data.sentiment_score),
            market=self._market_risk(data.prices, data.volumes),
        )

        overall = (
            factors.technical + factors.fundamental + factors.sentiment + factors.market
        ) / 4

        return RiskAssessment(
            overall=_clamp_score(overall),
            factors=factors,
            warnings=self._warnings(data.volatility, data.trend_strength, volume_change),
        )

    def _fundamental_risk(self, prices: list[float], volume_change: float) -> float:
        """Volatility plus last-step volume and price moves."""
        step_change = last_change_ratio(prices) - 1
        return _clamp_score(
            volatility(prices) * 0.4
            + abs(volume_change - 1) * 30
            + abs(step_change) * 30
        )

    def _market_risk(self, prices: list[float], volumes: list[float]) -> float:
        """Trend-deficit over 20 points plus deviation of the last volume."""
        move = abs(price_change(prices, 20))

        recent = as_array(volumes)[-20:]
        average = float(np.mean(recent)) if len(recent) else 0.0
        volume_deviation = recent[-1] / average if average > 0 else 1.0

        return _clamp_score((50 - move * 100) * 0.6 + abs(volume_deviation - 1) * 40)

    def _warnings(self, vol: float, trend_strength: float, volume_change: float) -> list[str]:
        warnings = []
        if vol > 50:
            warnings.append("High market volatility")
        if abs(trend_strength) < 0.3:
            warnings.append("Weak market trend")
        if volume_change > 2:
            warnings.append("Unusual trading volume")
        return warnings or [NO_RISK_WARNING]

    async def health_check(self) -> bool:
        return True


# Singleton instance
_service_instance: Optional[RiskScorer] = None


def get_risk_scorer() -> RiskScorer:
    """Get or create risk scorer instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = RiskScorer()
    return _service_instance
