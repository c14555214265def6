"""
Tests for the rule-based strategy generator.
"""

import pytest

from marketlens.schemas.analysis import (
    MarketPhase,
    Recommendation,
    RiskAssessment,
    RiskFactors,
)
from marketlens.services.analysis import default_risk_assessment, default_technical_signals
from marketlens.services.market_phase import default_market_condition
from marketlens.services.prediction import default_predictions
from marketlens.services.strategy import (
    RuleBasedStrategyGenerator,
    StrategyInput,
    default_strategy,
)


def make_input(phase, risk=None, price=100.0):
    return StrategyInput(
        current_price=price,
        market_condition=default_market_condition("test-asset", price, phase),
        technical_signals=default_technical_signals(),
        sentiment_score=50.0,
        risk_analysis=risk or default_risk_assessment(),
        predictions=default_predictions(price),
    )


def risk_of(overall):
    return RiskAssessment(
        overall=overall,
        factors=RiskFactors(technical=overall, fundamental=overall, sentiment=overall, market=overall),
        warnings=["Weak market trend"],
    )


@pytest.mark.parametrize(
    "phase,expected",
    [
        (MarketPhase.BULLISH, Recommendation.BUY),
        (MarketPhase.MARKUP, Recommendation.BUY),
        (MarketPhase.BEARISH, Recommendation.SELL),
        (MarketPhase.MARKDOWN, Recommendation.SELL),
        (MarketPhase.SIDEWAYS, Recommendation.HOLD),
        (MarketPhase.NEUTRAL, Recommendation.HOLD),
    ],
)
def test_recommendation_by_phase(phase, expected):
    strategy = RuleBasedStrategyGenerator().generate(make_input(phase))
    assert strategy.recommendation == expected


def test_high_risk_blocks_buy():
    strategy = RuleBasedStrategyGenerator().generate(make_input(MarketPhase.BULLISH, risk_of(70.0)))
    assert strategy.recommendation == Recommendation.HOLD
    assert strategy.confidence == pytest.approx(40.0)


def test_levels_are_consistent():
    strategy = RuleBasedStrategyGenerator().generate(make_input(MarketPhase.BULLISH))
    entries, stops, targets = strategy.entries, strategy.stop_loss, strategy.targets

    assert entries.conservative <= entries.moderate <= entries.aggressive
    assert stops.wide < stops.normal < stops.tight < entries.conservative
    assert entries.moderate < targets.primary < targets.secondary < targets.final


def test_confidence_and_timeframe():
    strategy = RuleBasedStrategyGenerator().generate(make_input(MarketPhase.BULLISH))
    assert strategy.confidence == 50.0
    assert strategy.timeframe == "Medium-term"
    assert "Using default analysis due to data unavailability" in strategy.rationale


def test_default_strategy():
    strategy = default_strategy(100.0, "reason")
    assert strategy.recommendation == Recommendation.HOLD
    assert strategy.rationale == ["reason"]
    assert strategy.stop_loss.tight < strategy.entries.conservative


@pytest.mark.asyncio
async def test_execute_matches_generate():
    generator = RuleBasedStrategyGenerator()
    data = make_input(MarketPhase.BEARISH)
    assert await generator.execute(data) == generator.generate(data)
