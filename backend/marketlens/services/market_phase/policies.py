"""
Market phase policies.

A policy owns one label set and the rules that pick a label from the
moving-average structure and the trend-strength estimate. Rules are
evaluated in priority order; the first match wins.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from marketlens.core.config import PhasePolicyName
from marketlens.schemas.analysis import MarketPhase
from marketlens.schemas.indicators import VolumeProfile

STRONG_TREND_THRESHOLD = 0.5
WEAK_TREND_THRESHOLD = 0.3


@dataclass(frozen=True)
class MAStructure:
    """Current price against its 20/50/200 moving averages."""

    price: float
    ma20: float
    ma50: float
    ma200: float

    @property
    def bullish_alignment(self) -> bool:
        return (
            self.price > self.ma20
            and self.price > self.ma50
            and self.price > self.ma200
            and self.ma20 > self.ma50 > self.ma200
        )

    @property
    def bearish_alignment(self) -> bool:
        return (
            self.price < self.ma20
            and self.price < self.ma50
            and self.price < self.ma200
            and self.ma20 < self.ma50 < self.ma200
        )

    @property
    def above_ma50(self) -> bool:
        return self.price > self.ma50

    @property
    def above_ma200(self) -> bool:
        return self.price > self.ma200


class PhasePolicy(ABC):
    """Maps MA structure + trend strength to a MarketPhase."""

    name: PhasePolicyName
    labels: frozenset
    fallback_phase: MarketPhase

    @abstractmethod
    def select_phase(self, structure: MAStructure, trend_strength: float) -> MarketPhase:
        pass

    def phase_strength(
        self, phase: MarketPhase, trend_strength: float, profile: VolumeProfile
    ) -> float:
        """Strength of the chosen phase in [0, 1]."""
        if phase in (
            MarketPhase.BULLISH,
            MarketPhase.BEARISH,
            MarketPhase.MARKUP,
            MarketPhase.MARKDOWN,
        ):
            return min(1.0, abs(trend_strength) * 1.2)
        if phase == MarketPhase.ACCUMULATION:
            return min(1.0, profile.buying_pressure * 1.5)
        if phase == MarketPhase.DISTRIBUTION:
            return min(1.0, profile.selling_pressure * 1.5)
        return 0.5


class MAAlignmentPolicy(PhasePolicy):
    """bullish / bearish / correction / recovery / sideways / neutral."""

    name = PhasePolicyName.MA_ALIGNMENT
    labels = frozenset(
        {
            MarketPhase.BULLISH,
            MarketPhase.BEARISH,
            MarketPhase.CORRECTION,
            MarketPhase.RECOVERY,
            MarketPhase.SIDEWAYS,
            MarketPhase.NEUTRAL,
        }
    )
    fallback_phase = MarketPhase.NEUTRAL

    def select_phase(self, structure: MAStructure, trend_strength: float) -> MarketPhase:
        s = structure

        # Rule 1-2: full alignment with a strong trend
        if s.bullish_alignment and trend_strength > STRONG_TREND_THRESHOLD:
            return MarketPhase.BULLISH
        if s.bearish_alignment and trend_strength < -STRONG_TREND_THRESHOLD:
            return MarketPhase.BEARISH

        # Rule 3: above long-term, below medium-term
        if s.ma200 < s.price < s.ma50:
            return MarketPhase.CORRECTION

        # Rule 4: above medium-term, below long-term
        if s.ma50 < s.price < s.ma200:
            return MarketPhase.RECOVERY

        if abs(trend_strength) < WEAK_TREND_THRESHOLD:
            return MarketPhase.SIDEWAYS

        return MarketPhase.NEUTRAL


class WyckoffPolicy(PhasePolicy):
    """markup / markdown / accumulation / distribution / sideways."""

    name = PhasePolicyName.WYCKOFF
    labels = frozenset(
        {
            MarketPhase.MARKUP,
            MarketPhase.MARKDOWN,
            MarketPhase.ACCUMULATION,
            MarketPhase.DISTRIBUTION,
            MarketPhase.SIDEWAYS,
        }
    )
    fallback_phase = MarketPhase.SIDEWAYS

    def select_phase(self, structure: MAStructure, trend_strength: float) -> MarketPhase:
        if structure.bullish_alignment and trend_strength > STRONG_TREND_THRESHOLD:
            return MarketPhase.MARKUP
        if structure.bearish_alignment and trend_strength < -STRONG_TREND_THRESHOLD:
            return MarketPhase.MARKDOWN
        if abs(trend_strength) < WEAK_TREND_THRESHOLD:
            return MarketPhase.SIDEWAYS
        if trend_strength > 0:
            return MarketPhase.ACCUMULATION
        return MarketPhase.DISTRIBUTION


_POLICIES = {
    PhasePolicyName.MA_ALIGNMENT: MAAlignmentPolicy,
    PhasePolicyName.WYCKOFF: WyckoffPolicy,
}


def get_phase_policy(name: PhasePolicyName) -> PhasePolicy:
    """Instantiate the phase policy registered under ``name``."""
    return _POLICIES[PhasePolicyName(name)]()
