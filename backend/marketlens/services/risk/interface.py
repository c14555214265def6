"""
Risk Scorer Interface

Defines the contract for the composite risk layer.
"""

from abc import abstractmethod
from dataclasses import dataclass

from marketlens.services.base import BaseService, StageResult
from marketlens.schemas.analysis import RiskAssessment


@dataclass
class RiskInput:
    """Inputs to the risk scorer."""

    prices: list[float]
    volumes: list[float]
    volatility: float
    trend_strength: float
    sentiment_score: float = 50.0


class RiskScorerInterface(BaseService[RiskInput, RiskAssessment]):
    """
    Risk Scorer Contract.

    INPUT: RiskInput
        - prices / volumes: validated series
        - volatility: annualised volatility (0-100)
        - trend_strength: trend model estimate
        - sentiment_score: blended news/social score (0-100)

    OUTPUT: RiskAssessment
        - factors: technical, fundamental, sentiment, market (each 0-100)
        - overall: unweighted mean of the factors
        - warnings: never empty

    FACTORS:
        technical   = volatility * 0.7 + (1 - |trend|) * 30
        sentiment   = 100 - sentiment score
        fundamental = volatility * 0.4 + |volume change - 1| * 30 + |price change| * 30
        market      = (50 - |20-point change| * 100) * 0.6 + |volume / avg20 - 1| * 40
    """

    @property
    def name(self) -> str:
        return "RiskScorer"

    @abstractmethod
    async def execute(self, input_data: RiskInput) -> RiskAssessment:
        pass

    @abstractmethod
    def score(self, input_data: RiskInput) -> StageResult[RiskAssessment]:
        """Score risk, reporting failures as a StageResult."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass
