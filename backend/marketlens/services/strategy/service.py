"""
Rule-Based Strategy Generator

Deterministic recommendation from phase, momentum and risk.
"""

import logging
from typing import Optional

from marketlens.schemas.analysis import (
    BEARISH_PHASES,
    BULLISH_PHASES,
    EntryLevels,
    Recommendation,
    StopLossLevels,
    TargetLevels,
    TradingStrategy,
)
from marketlens.services.indicators.calculations import clamp, round_price
from marketlens.services.strategy.interface import StrategyGeneratorInterface, StrategyInput

logger = logging.getLogger(__name__)

MAX_BUY_RSI = 70
MIN_SELL_RSI = 30
MAX_BUY_RISK = 60


def default_strategy(price: float, reason: str) -> TradingStrategy:
    """Hold with fixed-percentage levels around ``price``."""
    return TradingStrategy(
        recommendation=Recommendation.HOLD,
        confidence=50.0,
        entries=EntryLevels(
            conservative=price * 0.98, moderate=price, aggressive=price * 1.02
        ),
        stop_loss=StopLossLevels(tight=price * 0.95, normal=price * 0.93, wide=price * 0.90),
        targets=TargetLevels(primary=price * 1.05, secondary=price * 1.10, final=price * 1.15),
        timeframe="Medium-term",
        rationale=[reason],
    )


class RuleBasedStrategyGenerator(StrategyGeneratorInterface):
    """
    Rule-based strategy generator.

    Stops always sit below the lowest entry and targets above the
    moderate entry.
    """

    @property
    def name(self) -> str:
        return "RuleBasedStrategyGenerator"

    async def execute(self, input_data: StrategyInput) -> TradingStrategy:
        return self.generate(input_data)

    def generate(self, input_data: StrategyInput) -> TradingStrategy:
        price = input_data.current_price
        condition = input_data.market_condition
        levels = condition.key_levels
        rsi = input_data.technical_signals.momentum.rsi.value
        risk = input_data.risk_analysis.overall

        recommendation = self._recommend(condition.phase, rsi, risk)

        conservative = max(levels.support, price * 0.97)
        aggressive = min(levels.resistance, price * 1.02)
        entries = EntryLevels(
            conservative=round_price(min(conservative, price)),
            moderate=round_price(price),
            aggressive=round_price(max(aggressive, price)),
        )

        tight = min(levels.strong_support, entries.conservative * 0.99)
        stop_loss = StopLossLevels(
            tight=round_price(tight),
            normal=round_price(tight * 0.98),
            wide=round_price(tight * 0.95),
        )

        predictions = input_data.predictions
        primary = max(levels.resistance, predictions.short_term.price.high, price * 1.01)
        secondary = max(predictions.mid_term.price.high, primary * 1.02)
        final = max(predictions.long_term.price.high, secondary * 1.02)
        targets = TargetLevels(
            primary=round_price(primary),
            secondary=round_price(secondary),
            final=round_price(final),
        )

        confidence = clamp(condition.confidence - max(0.0, risk - 50) * 0.5, 30.0, 95.0)

        strategy = TradingStrategy(
            recommendation=recommendation,
            confidence=round(confidence, 2),
            entries=entries,
            stop_loss=stop_loss,
            targets=targets,
            timeframe=self._timeframe(condition.strength),
            rationale=self._rationale(input_data),
        )
        logger.info(
            f"Strategy: {strategy.recommendation.value} "
            f"(confidence {strategy.confidence}, {strategy.timeframe})"
        )
        return strategy

    def _recommend(self, phase, rsi: float, risk: float) -> Recommendation:
        if phase in BULLISH_PHASES and rsi < MAX_BUY_RSI and risk < MAX_BUY_RISK:
            return Recommendation.BUY
        if phase in BEARISH_PHASES and rsi > MIN_SELL_RSI:
            return Recommendation.SELL
        return Recommendation.HOLD

    def _timeframe(self, strength: float) -> str:
        if strength >= 0.7:
            return "Short-term"
        if strength >= 0.4:
            return "Medium-term"
        return "Long-term"

    def _rationale(self, data: StrategyInput) -> list[str]:
        condition = data.market_condition
        momentum = data.technical_signals.momentum
        risk = data.risk_analysis

        rationale = [
            f"Market phase {condition.phase.value} with strength {condition.strength:.2f}",
            f"RSI {momentum.rsi.value:.1f} ({momentum.rsi.signal})",
            f"MACD: {momentum.macd.signal}",
            f"Risk score {risk.overall:.1f}/100",
            f"Sentiment score {data.sentiment_score:.1f}/100",
        ]
        rationale.extend(risk.warnings)
        return rationale

    async def health_check(self) -> bool:
        return True


# Singleton instance
_service_instance: Optional[RuleBasedStrategyGenerator] = None


def get_strategy_generator() -> RuleBasedStrategyGenerator:
    """Get or create strategy generator instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = RuleBasedStrategyGenerator()
    return _service_instance
