"""
Market Phase Classifier

CONTRACT:
    Input:  price series + trend-strength estimate + VolumeProfile
    Output: StageResult[MarketCondition]

RESPONSIBILITIES:
    - Pick a phase label under the configured PhasePolicy
    - Score phase strength and confidence
    - Derive ordered support/resistance levels
    - Provide the asset-keyed default condition used on failure
"""

from marketlens.services.market_phase.policies import (
    MAStructure,
    PhasePolicy,
    MAAlignmentPolicy,
    WyckoffPolicy,
    get_phase_policy,
)
from marketlens.services.market_phase.levels import (
    compute_key_levels,
    default_key_levels,
    default_market_condition,
)
from marketlens.services.market_phase.classifier import MarketPhaseClassifier

__all__ = [
    "MAStructure",
    "PhasePolicy",
    "MAAlignmentPolicy",
    "WyckoffPolicy",
    "get_phase_policy",
    "compute_key_levels",
    "default_key_levels",
    "default_market_condition",
    "MarketPhaseClassifier",
]
