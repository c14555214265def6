"""
Analysis Orchestrator

CONTRACT:
    Input:  AnalysisRequest (asset id + optional policy overrides)
    Output: AnalysisReport (always complete)

RESPONSIBILITIES:
    - Sequence data fetch, signals, trend model, classification,
      sentiment, predictions, risk and strategy
    - Validate fetched series
    - Resolve failures centrally: degraded classification or default report

This is the main entry point for market assessments.
"""

from marketlens.services.analysis.interface import (
    AnalysisServiceInterface,
    AnalysisRequest,
    MarketSeries,
)
from marketlens.services.analysis.defaults import (
    DEFAULT_REASON,
    default_report,
    default_risk_assessment,
    default_technical_signals,
)
from marketlens.services.analysis.service import AnalysisService, get_analysis_service

__all__ = [
    "AnalysisServiceInterface",
    "AnalysisRequest",
    "MarketSeries",
    "DEFAULT_REASON",
    "default_report",
    "default_risk_assessment",
    "default_technical_signals",
    "AnalysisService",
    "get_analysis_service",
]
