"""
Strategy Generator Interface

The strategy generator consumes the engine's output and produces a
recommendation. The engine treats the result as opaque and forwards it
into the report.
"""

from abc import abstractmethod
from dataclasses import dataclass

from marketlens.services.base import BaseService
from marketlens.schemas.analysis import (
    MarketCondition,
    PredictionSet,
    RiskAssessment,
    TradingStrategy,
)
from marketlens.schemas.indicators import TechnicalSignals


@dataclass
class StrategyInput:
    """Everything the engine computed for one asset."""

    current_price: float
    market_condition: MarketCondition
    technical_signals: TechnicalSignals
    sentiment_score: float
    risk_analysis: RiskAssessment
    predictions: PredictionSet


class StrategyGeneratorInterface(BaseService[StrategyInput, TradingStrategy]):
    """
    Strategy Generator Contract.

    INPUT: StrategyInput
        - current_price, market_condition, technical_signals
        - sentiment_score, risk_analysis, predictions

    OUTPUT: TradingStrategy
        - recommendation: Buy / Sell / Hold
        - entries, stop_loss, targets
        - timeframe, rationale
    """

    @property
    def name(self) -> str:
        return "StrategyGenerator"

    @abstractmethod
    async def execute(self, input_data: StrategyInput) -> TradingStrategy:
        pass

    @abstractmethod
    def generate(self, input_data: StrategyInput) -> TradingStrategy:
        """Synchronous recommendation."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass
