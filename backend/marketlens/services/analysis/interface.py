"""
Analysis Orchestrator Interface

The main entry point: one asset id in, one complete AnalysisReport out.
"""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Optional

from marketlens.core.config import PhasePolicyName, PredictionPolicyName
from marketlens.services.base import BaseService
from marketlens.schemas.analysis import AnalysisReport


@dataclass
class AnalysisRequest:
    """Request for a market assessment."""

    asset_id: str
    phase_policy: Optional[PhasePolicyName] = None
    prediction_policy: Optional[PredictionPolicyName] = None


@dataclass
class MarketSeries:
    """Validated, index-aligned series for one asset."""

    prices: list[float]
    volumes: list[float]

    @property
    def current_price(self) -> float:
        return self.prices[-1]


class AnalysisServiceInterface(BaseService[AnalysisRequest, AnalysisReport]):
    """
    Analysis Orchestrator Contract.

    INPUT: AnalysisRequest
        - asset_id: asset to analyse
        - phase_policy / prediction_policy: optional overrides

    OUTPUT: AnalysisReport
        - always fully populated; never raises

    PIPELINE:
        1. Fetch history (bounded timeout)
        2. Validate series
        3. Technical signals + volume profile
        4. Trend-strength estimate (trend model handle)
        5. Market condition (failure -> asset-keyed default, degraded)
        6. Sentiment + news (concurrent)
        7. Sentiment summary
        8. Predictions
        9. Risk assessment
        10. Strategy recommendation
        11. Assemble report

    Any failure outside step 5 resolves to the default report.
    """

    @property
    def name(self) -> str:
        return "AnalysisService"

    @abstractmethod
    async def execute(self, input_data: AnalysisRequest) -> AnalysisReport:
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass
