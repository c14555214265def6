"""
CONTRACT 2: Indicator Engine

Input: price/volume series
Output: TechnicalSignals, VolumeProfile

This module describes the results of ALL mathematical calculations.
Pure Python/NumPy - deterministic and reproducible.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class TrendDirection(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class VolatilityTrend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class VolatilityRisk(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class VolumeTrend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    NEUTRAL = "neutral"


class VolumeSignificance(str, Enum):
    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"


# =============================================================================
# VOLUME PROFILE
# =============================================================================


class ValueArea(BaseModel):
    """Price band holding ~68% of traded volume around the POC."""

    low: float
    high: float


class VolumeProfile(BaseModel):
    """Volume-at-price histogram summary."""

    point_of_control: float = Field(..., description="Bucket with the highest traded volume")
    value_area: ValueArea
    buying_pressure: float = Field(..., ge=0, le=1)
    selling_pressure: float = Field(..., ge=0, le=1)
    strength: float = Field(..., ge=0, le=1, description="POC volume / total volume")


# =============================================================================
# TECHNICAL SIGNALS
# =============================================================================


class TrendSignal(BaseModel):
    """Moving-average trend read."""

    primary: TrendDirection
    secondary: TrendDirection
    strength: float = Field(..., ge=0, le=1)


class IndicatorReading(BaseModel):
    """Numeric indicator value plus its qualitative label."""

    value: float
    signal: str


class MomentumSignals(BaseModel):
    """Momentum oscillators."""

    rsi: IndicatorReading
    macd: IndicatorReading
    stoch_rsi: IndicatorReading


class BollingerBandsData(BaseModel):
    """Bollinger Bands values."""

    upper: float
    middle: float
    lower: float


class VolatilitySignal(BaseModel):
    """Volatility indicators."""

    current: float = Field(..., ge=0, le=100, description="Annualised volatility, clamped")
    trend: VolatilityTrend
    risk: VolatilityRisk
    atr: float = Field(default=0.0, ge=0)
    bollinger: Optional[BollingerBandsData] = None


class VolumeSignal(BaseModel):
    """Volume-based indicators."""

    change: float = Field(..., ge=0, description="Recent/average volume ratio")
    trend: VolumeTrend
    significance: VolumeSignificance


class TechnicalSignals(BaseModel):
    """
    Complete technical read for one price/volume snapshot.
    Returned by: Technical Signal Service
    Consumed by: Market Phase Classifier, Risk Scorer, Strategy Generator
    """

    trend: TrendSignal
    momentum: MomentumSignals
    volatility: VolatilitySignal
    volume: VolumeSignal

    class Config:
        json_schema_extra = {
            "example": {
                "trend": {"primary": "bullish", "secondary": "bullish", "strength": 0.12},
                "momentum": {
                    "rsi": {"value": 61.4, "signal": "neutral"},
                    "macd": {"value": 412.8, "signal": "Strong bullish momentum, upward trend"},
                    "stoch_rsi": {"value": 72.1, "signal": "overbought"},
                },
                "volatility": {"current": 38.2, "trend": "stable", "risk": "low"},
                "volume": {"change": 1.12, "trend": "increasing", "significance": "weak"},
            }
        }
