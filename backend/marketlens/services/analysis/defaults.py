"""
Default analysis artifacts.

Used whenever the engine cannot produce a real assessment. Everything
here is deterministic: two default reports for the same asset and policy
compare equal.
"""

from typing import Optional

from marketlens.core.config import PhasePolicyName, settings
from marketlens.schemas.analysis import AnalysisReport, RiskAssessment, RiskFactors
from marketlens.schemas.indicators import (
    IndicatorReading,
    MomentumSignals,
    TechnicalSignals,
    TrendDirection,
    TrendSignal,
    VolatilityRisk,
    VolatilitySignal,
    VolatilityTrend,
    VolumeSignal,
    VolumeSignificance,
    VolumeTrend,
)
from marketlens.services.market_phase import default_market_condition, get_phase_policy
from marketlens.services.prediction import default_predictions
from marketlens.services.sentiment import default_sentiment_summary
from marketlens.services.strategy import default_strategy

DEFAULT_REASON = "Using default analysis due to data unavailability"


def default_technical_signals() -> TechnicalSignals:
    return TechnicalSignals(
        trend=TrendSignal(
            primary=TrendDirection.NEUTRAL, secondary=TrendDirection.NEUTRAL, strength=0.5
        ),
        momentum=MomentumSignals(
            rsi=IndicatorReading(value=50.0, signal="neutral"),
            macd=IndicatorReading(value=0.0, signal="neutral"),
            stoch_rsi=IndicatorReading(value=50.0, signal="neutral"),
        ),
        volatility=VolatilitySignal(
            current=30.0, trend=VolatilityTrend.STABLE, risk=VolatilityRisk.LOW
        ),
        volume=VolumeSignal(
            change=1.0, trend=VolumeTrend.NEUTRAL, significance=VolumeSignificance.MODERATE
        ),
    )


def default_risk_assessment() -> RiskAssessment:
    return RiskAssessment(
        overall=50.0,
        factors=RiskFactors(technical=50.0, fundamental=50.0, sentiment=50.0, market=50.0),
        warnings=[DEFAULT_REASON],
    )


def default_report(
    asset_id: str,
    phase_policy: Optional[PhasePolicyName] = None,
    price: Optional[float] = None,
) -> AnalysisReport:
    """Fully populated neutral report at the configured default price."""
    price = price or settings.default_price
    policy = get_phase_policy(phase_policy or settings.phase_policy)

    return AnalysisReport(
        asset_id=asset_id,
        current_price=price,
        market_condition=default_market_condition(asset_id, price, policy.fallback_phase),
        technical_signals=default_technical_signals(),
        sentiment_analysis=default_sentiment_summary(),
        predictions=default_predictions(price),
        risk_analysis=default_risk_assessment(),
        trading_strategy=default_strategy(price, DEFAULT_REASON),
        is_default=True,
    )
