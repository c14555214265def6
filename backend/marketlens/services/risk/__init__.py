"""
Risk Scorer

CONTRACT:
    Input:  RiskInput (series, volatility, trend strength, sentiment score)
    Output: RiskAssessment

RESPONSIBILITIES:
    - Score technical, fundamental, sentiment and market risk (0-100 each)
    - Average them into the overall score
    - Emit human-readable warnings (never an empty list)

PURE PYTHON - deterministic.
"""

from marketlens.services.risk.interface import RiskScorerInterface, RiskInput
from marketlens.services.risk.service import RiskScorer, get_risk_scorer, NO_RISK_WARNING

__all__ = [
    "RiskScorerInterface",
    "RiskInput",
    "RiskScorer",
    "get_risk_scorer",
    "NO_RISK_WARNING",
]
