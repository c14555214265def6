"""
MarketLens Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from marketlens.schemas.market import (
    PriceHistory,
    SentimentRecord,
    NewsItem,
    NewsFeed,
)
from marketlens.schemas.indicators import (
    VolumeProfile,
    ValueArea,
    TechnicalSignals,
    TrendSignal,
    MomentumSignals,
    VolatilitySignal,
    VolumeSignal,
)
from marketlens.schemas.analysis import (
    MarketPhase,
    MarketCondition,
    KeyLevels,
    PredictionSet,
    HorizonPrediction,
    RiskAssessment,
    SentimentSummary,
    TradingStrategy,
    AnalysisReport,
)

__all__ = [
    # Market
    "PriceHistory",
    "SentimentRecord",
    "NewsItem",
    "NewsFeed",
    # Indicators
    "VolumeProfile",
    "ValueArea",
    "TechnicalSignals",
    "TrendSignal",
    "MomentumSignals",
    "VolatilitySignal",
    "VolumeSignal",
    # Analysis
    "MarketPhase",
    "MarketCondition",
    "KeyLevels",
    "PredictionSet",
    "HorizonPrediction",
    "RiskAssessment",
    "SentimentSummary",
    "TradingStrategy",
    "AnalysisReport",
]
