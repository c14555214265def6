"""
Analysis API Endpoints

Full market assessment for one asset.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query

from marketlens.core.config import PhasePolicyName, PredictionPolicyName
from marketlens.schemas.analysis import AnalysisReport
from marketlens.services.analysis import AnalysisRequest, get_analysis_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def analysis_health():
    """Health of the analysis pipeline and its data provider."""
    healthy = await get_analysis_service().health_check()
    return {"status": "healthy" if healthy else "degraded"}


@router.get("/{asset_id}", response_model=AnalysisReport)
async def analyze_asset(
    asset_id: str,
    phase_policy: Optional[PhasePolicyName] = Query(
        None, description="Market-phase policy (defaults to configured policy)"
    ),
    prediction_policy: Optional[PredictionPolicyName] = Query(
        None, description="Prediction policy (defaults to configured policy)"
    ),
):
    """
    Analyse an asset.

    Always returns a complete report. When data is unavailable the report
    is the default one, flagged with is_default=true.
    """
    logger.info(f"Analysis requested for {asset_id}")
    request = AnalysisRequest(
        asset_id=asset_id,
        phase_policy=phase_policy,
        prediction_policy=prediction_policy,
    )
    return await get_analysis_service().execute(request)
