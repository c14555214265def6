"""
Technical Signal Service Implementation

Turns a price/volume snapshot into TechnicalSignals.
Pure Python/NumPy calculations.
"""

import logging
from typing import Optional

from marketlens.core.config import Settings, settings
from marketlens.schemas.indicators import (
    BollingerBandsData,
    IndicatorReading,
    MomentumSignals,
    TechnicalSignals,
    TrendSignal,
    VolatilitySignal,
    VolumeProfile,
    VolumeSignal,
)
from marketlens.services.indicators.interface import (
    SignalInput,
    TechnicalSignalServiceInterface,
)
from marketlens.services.indicators.calculations import (
    atr,
    bollinger_bands,
    macd,
    round_sig,
    rsi,
    stoch_rsi,
    volatility,
    volume_ratio,
)
from marketlens.services.indicators.interpretation import (
    interpret_macd,
    interpret_rsi,
    interpret_stoch_rsi,
    primary_trend,
    secondary_trend,
    volatility_risk,
    volatility_trend,
    volume_significance,
    volume_trend_label,
)
from marketlens.services.indicators.volume_profile import build_volume_profile

logger = logging.getLogger(__name__)

# Trailing windows
VOLUME_WINDOW = 100
VOLATILITY_WINDOW = 100
PROFILE_WINDOW = 200


class TechnicalSignalService(TechnicalSignalServiceInterface):
    """
    Technical Signal Service.

    Calculates momentum, volatility, volume and trend readings.
    All calculations are deterministic and reproducible.
    """

    def __init__(
        self, bucket_size: Optional[float] = None, config: Optional[Settings] = None
    ):
        self.config = config or settings
        self.bucket_size = bucket_size or self.config.volume_profile_bucket

    @property
    def name(self) -> str:
        return "TechnicalSignalService"

    async def execute(self, input_data: SignalInput) -> TechnicalSignals:
        return self.compute(input_data.prices, input_data.volumes)

    def volume_profile(self, prices: list[float], volumes: list[float]) -> VolumeProfile:
        return build_volume_profile(
            prices[-PROFILE_WINDOW:], volumes[-PROFILE_WINDOW:], self.bucket_size
        )

    def compute(
        self,
        prices: list[float],
        volumes: list[float],
        profile: Optional[VolumeProfile] = None,
    ) -> TechnicalSignals:
        """Calculate all signals for one snapshot."""
        if profile is None:
            profile = self.volume_profile(prices, volumes)

        trend = self._calculate_trend(prices, profile)
        momentum = self._calculate_momentum(prices)
        volatility_signal = self._calculate_volatility(prices)
        volume = self._calculate_volume(volumes, profile)

        logger.debug(
            f"Signals: {len(prices)} points, RSI {momentum.rsi.value}, "
            f"volatility {volatility_signal.current}, volume change {volume.change}"
        )

        return TechnicalSignals(
            trend=trend,
            momentum=momentum,
            volatility=volatility_signal,
            volume=volume,
        )

    def _calculate_trend(self, prices: list[float], profile: VolumeProfile) -> TrendSignal:
        return TrendSignal(
            primary=primary_trend(prices),
            secondary=secondary_trend(prices),
            strength=round(profile.strength, 2),
        )

    def _calculate_momentum(self, prices: list[float]) -> MomentumSignals:
        rsi_val = rsi(prices, 14)
        macd_result = macd(prices)
        stoch_val = stoch_rsi(prices, 14)

        return MomentumSignals(
            rsi=IndicatorReading(value=round(rsi_val, 2), signal=interpret_rsi(rsi_val)),
            macd=IndicatorReading(
                value=round(macd_result.line, 2), signal=interpret_macd(macd_result)
            ),
            stoch_rsi=IndicatorReading(
                value=round(stoch_val, 2), signal=interpret_stoch_rsi(stoch_val)
            ),
        )

    def _calculate_volatility(self, prices: list[float]) -> VolatilitySignal:
        recent = prices[-VOLATILITY_WINDOW:]
        current = volatility(recent)
        bands = bollinger_bands(prices, 20, 2.0)

        return VolatilitySignal(
            current=round(current, 2),
            trend=volatility_trend(recent),
            risk=volatility_risk(current),
            atr=round_sig(atr(prices, 14)),
            bollinger=BollingerBandsData(
                upper=round_sig(bands.upper),
                middle=round_sig(bands.middle),
                lower=round_sig(bands.lower),
            ),
        )

    def _calculate_volume(self, volumes: list[float], profile: VolumeProfile) -> VolumeSignal:
        recent = volumes[-VOLUME_WINDOW:]
        change = volume_ratio(recent) if recent else 1.0

        return VolumeSignal(
            change=round(change, 2),
            trend=volume_trend_label(recent),
            significance=volume_significance(profile.strength),
        )

    async def health_check(self) -> bool:
        """Signal service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[TechnicalSignalService] = None


def get_technical_signal_service() -> TechnicalSignalService:
    """Get or create technical signal service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = TechnicalSignalService()
    return _service_instance
