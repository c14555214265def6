"""
Analysis Orchestrator Implementation

Runs the full assessment pipeline for one asset:
    Data Provider -> Signals -> Trend Model -> Market Phase
    -> Sentiment -> Predictions -> Risk -> Strategy

Every stage reports a StageResult. Failures are resolved in one place:
a failed classification degrades to the asset-keyed default condition,
anything else resolves to the default report.
"""

import asyncio
import logging
import math
from numbers import Real
from typing import Any, Awaitable, Optional

from marketlens.core.config import Settings, settings as default_settings
from marketlens.schemas.analysis import AnalysisReport
from marketlens.schemas.market import NewsFeed, PriceHistory
from marketlens.services.base import (
    ComputationError,
    ExternalAPIError,
    ServiceError,
    StageResult,
    ValidationError,
)
from marketlens.services.analysis.defaults import default_report
from marketlens.services.analysis.interface import (
    AnalysisRequest,
    AnalysisServiceInterface,
    MarketSeries,
)
from marketlens.services.data_ingestion import (
    MarketDataProvider,
    create_data_provider,
    get_data_provider,
)
from marketlens.services.indicators import TechnicalSignalService, get_technical_signal_service
from marketlens.services.market_phase import MarketPhaseClassifier, default_market_condition
from marketlens.services.prediction import PredictionInput, PricePredictor
from marketlens.services.risk import RiskInput, RiskScorer, get_risk_scorer
from marketlens.services.sentiment import sentiment_score, summarize_sentiment
from marketlens.services.strategy import (
    StrategyGeneratorInterface,
    StrategyInput,
    get_strategy_generator,
)
from marketlens.services.trend_model import (
    TrendModelHandle,
    build_feature_vector,
    get_trend_model_handle,
)

logger = logging.getLogger(__name__)

MARKET_CONDITION_STAGE = "market_condition"


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


class AnalysisService(AnalysisServiceInterface):
    """
    Analysis Orchestrator.

    Collaborators are injected or lazily loaded from their get_* accessors.
    """

    def __init__(
        self,
        data_provider: Optional[MarketDataProvider] = None,
        trend_model: Optional[TrendModelHandle] = None,
        signal_service: Optional[TechnicalSignalService] = None,
        risk_scorer: Optional[RiskScorer] = None,
        strategy_generator: Optional[StrategyGeneratorInterface] = None,
        config: Optional[Settings] = None,
    ):
        self._data_provider = data_provider
        self._trend_model = trend_model
        self._signal_service = signal_service
        self._risk_scorer = risk_scorer
        self._strategy_generator = strategy_generator
        self.config = config or default_settings
        self._owns_provider = False

    @property
    def data_provider(self) -> MarketDataProvider:
        """Lazy load data provider."""
        if self._data_provider is None:
            if self.config is default_settings:
                self._data_provider = get_data_provider()
            else:
                self._data_provider = create_data_provider(self.config.data_provider, self.config)
                self._owns_provider = True
        return self._data_provider

    @property
    def trend_model(self) -> TrendModelHandle:
        """Lazy load trend model handle."""
        if self._trend_model is None:
            self._trend_model = get_trend_model_handle()
        return self._trend_model

    @property
    def signal_service(self) -> TechnicalSignalService:
        """Lazy load technical signal service."""
        if self._signal_service is None:
            if self.config is default_settings:
                self._signal_service = get_technical_signal_service()
            else:
                self._signal_service = TechnicalSignalService(config=self.config)
        return self._signal_service

    @property
    def risk_scorer(self) -> RiskScorer:
        """Lazy load risk scorer."""
        if self._risk_scorer is None:
            self._risk_scorer = get_risk_scorer()
        return self._risk_scorer

    @property
    def strategy_generator(self) -> StrategyGeneratorInterface:
        """Lazy load strategy generator."""
        if self._strategy_generator is None:
            self._strategy_generator = get_strategy_generator()
        return self._strategy_generator

    @property
    def name(self) -> str:
        return "AnalysisService"

    async def execute(self, input_data: AnalysisRequest) -> AnalysisReport:
        """Run the pipeline; never raises."""
        try:
            return await self._run(input_data)
        except Exception as e:
            logger.exception(f"Unexpected analysis failure for {input_data.asset_id}")
            return self._resolve(
                input_data, "pipeline", ComputationError(self.name, f"Unexpected failure: {e}")
            )

    def _resolve(
        self, request: AnalysisRequest, stage: str, error: ServiceError
    ) -> AnalysisReport:
        """Single place where a failed stage becomes the default report."""
        logger.warning(
            f"Stage '{stage}' failed for {request.asset_id}: {error}; using default report"
        )
        return default_report(
            request.asset_id,
            request.phase_policy or self.config.phase_policy,
            price=self.config.default_price,
        )

    async def _fetch(self, stage: str, call: Awaitable[Any]) -> StageResult:
        """Await an upstream call with a bounded timeout."""
        try:
            value = await asyncio.wait_for(call, timeout=self.config.upstream_timeout_seconds)
        except asyncio.TimeoutError:
            return StageResult.failure(
                ExternalAPIError(
                    stage,
                    f"Timed out after {self.config.upstream_timeout_seconds}s",
                )
            )
        except ServiceError as e:
            return StageResult.failure(e)
        except (ValueError, TypeError, KeyError) as e:
            return StageResult.failure(ExternalAPIError(stage, f"Malformed response: {e}"))
        return StageResult.success(value)

    def _validate(self, history: PriceHistory) -> StageResult[MarketSeries]:
        """Check the fetched history and align volumes with prices."""
        prices = history.prices or []
        minimum = self.config.min_price_points

        if len(prices) < minimum:
            return StageResult.failure(
                ValidationError(
                    "validation",
                    f"Insufficient price data: {len(prices)} < {minimum}",
                    {"points": len(prices)},
                )
            )
        if not all(_is_number(p) and p > 0 for p in prices):
            return StageResult.failure(
                ValidationError("validation", "Prices must be positive finite numbers")
            )
        if history.current_price is not None and not (
            _is_number(history.current_price) and history.current_price > 0
        ):
            return StageResult.failure(
                ValidationError(
                    "validation",
                    "Current price must be a positive finite number",
                    {"current_price": history.current_price},
                )
            )

        volumes = history.volumes
        if not volumes:
            volumes = [0.0] * len(prices)
        else:
            if not all(_is_number(v) and v >= 0 for v in volumes):
                return StageResult.failure(
                    ValidationError("validation", "Volumes must be non-negative finite numbers")
                )
            if not any(v > 0 for v in volumes):
                return StageResult.failure(
                    ValidationError("validation", "Volume series is all zero")
                )
            # Align on the most recent points; unknown older volume counts as zero
            volumes = list(volumes[-len(prices):])
            volumes = [0.0] * (len(prices) - len(volumes)) + volumes

        return StageResult.success(
            MarketSeries(
                prices=[float(p) for p in prices],
                volumes=[float(v) for v in volumes],
            )
        )

    def _estimate_trend(self, series: MarketSeries) -> StageResult[float]:
        features = build_feature_vector(series.prices, series.volumes)
        try:
            return StageResult.success(self.trend_model.estimate(features))
        except (ArithmeticError, ValueError, TypeError) as e:
            logger.error(f"Trend model inference failed: {e}")
            return StageResult.failure(ExternalAPIError("trend_model", str(e)))

    async def _run(self, request: AnalysisRequest) -> AnalysisReport:
        asset_id = request.asset_id
        classifier = MarketPhaseClassifier.for_policy(
            request.phase_policy or self.config.phase_policy
        )
        predictor = PricePredictor.for_policy(
            request.prediction_policy or self.config.prediction_policy
        )
        degraded: list[str] = []

        logger.info(f"Starting analysis pipeline for {asset_id}")

        # =================================================================
        # STAGE 1-2: History + validation
        # =================================================================
        logger.info("Stage 1: Fetch history")
        history = await self._fetch("history", self.data_provider.get_historical_data(asset_id))
        if not history.ok:
            return self._resolve(request, "history", history.error)

        logger.info("Stage 2: Validate series")
        validated = self._validate(history.value)
        if not validated.ok:
            return self._resolve(request, "validation", validated.error)
        series = validated.value
        price = series.current_price
        logger.info(f"Stage 2 complete: {len(series.prices)} points, price {price}")

        # =================================================================
        # STAGE 3-4: Signals + trend strength
        # =================================================================
        logger.info("Stage 3: Technical signals")
        try:
            profile = self.signal_service.volume_profile(series.prices, series.volumes)
            signals = self.signal_service.compute(series.prices, series.volumes, profile)
        except (ArithmeticError, ValueError) as e:
            return self._resolve(request, "signals", ComputationError("signals", str(e)))

        logger.info("Stage 4: Trend strength")
        trend = self._estimate_trend(series)
        if not trend.ok:
            return self._resolve(request, "trend_model", trend.error)
        trend_strength = trend.value
        logger.info(f"Stage 4 complete: trend strength {trend_strength:.3f}")

        # =================================================================
        # STAGE 5: Market condition (degrades instead of failing)
        # =================================================================
        logger.info("Stage 5: Market condition")
        condition = classifier.classify(series.prices, trend_strength, profile)
        if condition.ok:
            market_condition = condition.value
        else:
            logger.warning(f"Classification failed ({condition.error}); using default condition")
            market_condition = default_market_condition(
                asset_id, price, classifier.policy.fallback_phase
            )
            degraded.append(MARKET_CONDITION_STAGE)

        # =================================================================
        # STAGE 6-7: Sentiment + news
        # =================================================================
        logger.info("Stage 6: Sentiment and news")
        sentiment_result, news_result = await asyncio.gather(
            self._fetch("sentiment", self.data_provider.get_sentiment(asset_id)),
            self._fetch("news", self.data_provider.get_news(asset_id)),
        )
        if not sentiment_result.ok:
            return self._resolve(request, "sentiment", sentiment_result.error)
        if not news_result.ok:
            return self._resolve(request, "news", news_result.error)

        records = sentiment_result.value or []
        feed: NewsFeed = news_result.value or NewsFeed()
        blended_sentiment = sentiment_score(feed.news, records)
        summary = summarize_sentiment(feed.news, records, signals)

        # =================================================================
        # STAGE 8: Predictions
        # =================================================================
        logger.info("Stage 8: Predictions")
        predictions = predictor.predict(
            PredictionInput(
                current_price=price,
                prices=series.prices,
                volatility=signals.volatility.current,
                sentiment_score=blended_sentiment,
                key_levels=market_condition.key_levels,
                trend_strength=trend_strength,
            )
        )
        if not predictions.ok:
            return self._resolve(request, "predictions", predictions.error)

        # =================================================================
        # STAGE 9: Risk
        # =================================================================
        logger.info("Stage 9: Risk")
        risk = self.risk_scorer.score(
            RiskInput(
                prices=series.prices,
                volumes=series.volumes,
                volatility=signals.volatility.current,
                trend_strength=trend_strength,
                sentiment_score=blended_sentiment,
            )
        )
        if not risk.ok:
            return self._resolve(request, "risk", risk.error)

        # =================================================================
        # STAGE 10: Strategy
        # =================================================================
        logger.info("Stage 10: Strategy")
        try:
            strategy = await self.strategy_generator.execute(
                StrategyInput(
                    current_price=price,
                    market_condition=market_condition,
                    technical_signals=signals,
                    sentiment_score=blended_sentiment,
                    risk_analysis=risk.value,
                    predictions=predictions.value,
                )
            )
        except (ServiceError, ValueError) as e:
            return self._resolve(request, "strategy", ExternalAPIError("strategy", str(e)))

        # =================================================================
        # STAGE 11: Report
        # =================================================================
        report = AnalysisReport(
            asset_id=asset_id,
            current_price=price,
            market_condition=market_condition,
            technical_signals=signals,
            sentiment_analysis=summary,
            predictions=predictions.value,
            risk_analysis=risk.value,
            trading_strategy=strategy,
            is_default=False,
            degraded_stages=degraded,
        )
        logger.info(f"Pipeline complete for {asset_id}: phase {market_condition.phase.value}")
        return report

    async def health_check(self) -> bool:
        """Check health of dependent services."""
        try:
            return all(
                [
                    await self.data_provider.health_check(),
                    await self.signal_service.health_check(),
                    await self.risk_scorer.health_check(),
                    await self.strategy_generator.health_check(),
                ]
            )
        except ServiceError as e:
            logger.error(f"Health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close a data provider this service created for its own config."""
        if self._owns_provider and self._data_provider is not None:
            await self._data_provider.close()
            self._data_provider = None
            self._owns_provider = False


# Singleton instance
_service_instance: Optional[AnalysisService] = None


def get_analysis_service() -> AnalysisService:
    """Get or create analysis service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = AnalysisService()
    return _service_instance
