"""
Technical Signal Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from marketlens.services.base import BaseService
from marketlens.schemas.indicators import TechnicalSignals, VolumeProfile


@dataclass
class SignalInput:
    """Validated, index-aligned price and volume series."""

    prices: list[float]
    volumes: list[float] = field(default_factory=list)


class TechnicalSignalServiceInterface(BaseService[SignalInput, TechnicalSignals]):
    """
    Technical Signal Service Contract.

    INPUT: SignalInput
        - prices: chronological, positive, finite
        - volumes: aligned with prices (zeros when unknown)

    OUTPUT: TechnicalSignals
        - trend: MA alignment + EMA5/EMA10 + volume-profile strength
        - momentum: RSI, MACD, Stochastic RSI with labels
        - volatility: annualised volatility, trend, risk bucket, ATR, Bollinger
        - volume: 5/20 volume ratio, trend, significance
    """

    @property
    def name(self) -> str:
        return "TechnicalSignalService"

    @abstractmethod
    async def execute(self, input_data: SignalInput) -> TechnicalSignals:
        """Compute signals for one price/volume snapshot."""
        pass

    @abstractmethod
    def compute(
        self,
        prices: list[float],
        volumes: list[float],
        profile: Optional[VolumeProfile] = None,
    ) -> TechnicalSignals:
        """
        Synchronous signal computation.

        Args:
            prices: Price series
            volumes: Volume series aligned with prices
            profile: Precomputed volume profile (built here when omitted)
        """
        pass

    @abstractmethod
    def volume_profile(self, prices: list[float], volumes: list[float]) -> VolumeProfile:
        """Volume profile over the trailing profile window."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Signal service is always healthy (pure computation)."""
        pass
