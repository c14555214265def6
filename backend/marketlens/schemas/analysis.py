"""
CONTRACT 3: Market Assessment

Input: TechnicalSignals + trend-strength estimate + sentiment/news
Output: AnalysisReport

MarketCondition, PredictionSet and RiskAssessment are produced by the
deterministic engine. TradingStrategy comes from the strategy generator
and is forwarded into the report untouched.
"""

from enum import Enum
from pydantic import BaseModel, Field

from marketlens.schemas.indicators import TechnicalSignals


# =============================================================================
# ENUMS
# =============================================================================


class MarketPhase(str, Enum):
    # MA-alignment policy
    BULLISH = "bullish"
    BEARISH = "bearish"
    CORRECTION = "correction"
    RECOVERY = "recovery"
    NEUTRAL = "neutral"
    # Shared
    SIDEWAYS = "sideways"
    # Wyckoff policy
    MARKUP = "markup"
    MARKDOWN = "markdown"
    ACCUMULATION = "accumulation"
    DISTRIBUTION = "distribution"


BULLISH_PHASES = frozenset({MarketPhase.BULLISH, MarketPhase.MARKUP})
BEARISH_PHASES = frozenset({MarketPhase.BEARISH, MarketPhase.MARKDOWN})


class Recommendation(str, Enum):
    BUY = "Buy"
    SELL = "Sell"
    HOLD = "Hold"


# =============================================================================
# MARKET CONDITION
# =============================================================================


class KeyLevels(BaseModel):
    """strong_support <= support <= pivot <= resistance <= strong_resistance."""

    strong_support: float
    support: float
    pivot: float = Field(..., description="Current price")
    resistance: float
    strong_resistance: float


class MarketCondition(BaseModel):
    """Classified market phase with support/resistance levels."""

    phase: MarketPhase
    strength: float = Field(..., ge=0, le=1)
    confidence: float = Field(..., ge=30, le=95)
    key_levels: KeyLevels


# =============================================================================
# PREDICTIONS
# =============================================================================


class PriceRange(BaseModel):
    low: float
    high: float


class HorizonPrediction(BaseModel):
    """Price range for one horizon."""

    price: PriceRange
    confidence: float = Field(..., ge=30, le=95)
    signals: list[str] = Field(default_factory=list)


class PredictionSet(BaseModel):
    """Short/mid/long horizon price ranges; confidence falls with horizon."""

    short_term: HorizonPrediction
    mid_term: HorizonPrediction
    long_term: HorizonPrediction


# =============================================================================
# RISK
# =============================================================================


class RiskFactors(BaseModel):
    technical: float = Field(..., ge=0, le=100)
    fundamental: float = Field(..., ge=0, le=100)
    sentiment: float = Field(..., ge=0, le=100)
    market: float = Field(..., ge=0, le=100)


class RiskAssessment(BaseModel):
    """Composite 0-100 risk score with contributing factors."""

    overall: float = Field(..., ge=0, le=100)
    factors: RiskFactors
    warnings: list[str] = Field(..., min_length=1)


# =============================================================================
# SENTIMENT
# =============================================================================


class OverallSentiment(BaseModel):
    score: float = Field(..., ge=0, le=100)
    signal: str
    confidence: float = Field(..., ge=30, le=95)


class NewsSentimentComponent(BaseModel):
    score: float = Field(..., ge=0, le=100)
    recent: list[str] = Field(default_factory=list)
    trend: str


class SocialSentimentComponent(BaseModel):
    score: float
    trend: str
    volume: float


class MarketSentimentComponent(BaseModel):
    score: float
    dominance: float
    flow: str


class SentimentComponents(BaseModel):
    news: NewsSentimentComponent
    social: SocialSentimentComponent
    market: MarketSentimentComponent


class SentimentSummary(BaseModel):
    """Blended news/social/market sentiment."""

    overall: OverallSentiment
    components: SentimentComponents


# =============================================================================
# TRADING STRATEGY (strategy generator output)
# =============================================================================


class EntryLevels(BaseModel):
    conservative: float
    moderate: float
    aggressive: float


class StopLossLevels(BaseModel):
    tight: float
    normal: float
    wide: float


class TargetLevels(BaseModel):
    primary: float
    secondary: float
    final: float


class TradingStrategy(BaseModel):
    """Recommendation produced by the strategy generator."""

    recommendation: Recommendation
    confidence: float = Field(..., ge=0, le=100)
    entries: EntryLevels
    stop_loss: StopLossLevels
    targets: TargetLevels
    timeframe: str
    rationale: list[str] = Field(default_factory=list)


# =============================================================================
# OUTPUT: AnalysisReport (Complete Response)
# =============================================================================


class AnalysisReport(BaseModel):
    """
    Complete market assessment for one asset.
    Returned by: Analysis Orchestrator
    Consumed by: API / strategy consumers

    Always fully populated - failures resolve to defaults, never to
    a partial report.
    """

    asset_id: str
    current_price: float = Field(..., gt=0)
    market_condition: MarketCondition
    technical_signals: TechnicalSignals
    sentiment_analysis: SentimentSummary
    predictions: PredictionSet
    risk_analysis: RiskAssessment
    trading_strategy: TradingStrategy
    is_default: bool = False
    degraded_stages: list[str] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "asset_id": "bitcoin",
                "current_price": 65012.9,
                "market_condition": {
                    "phase": "bullish",
                    "strength": 0.84,
                    "confidence": 66.3,
                    "key_levels": {
                        "strong_support": 62145.1,
                        "support": 62772.8,
                        "pivot": 65012.9,
                        "resistance": 65338.0,
                        "strong_resistance": 65991.4,
                    },
                },
                "is_default": False,
                "degraded_stages": [],
            }
        }
