"""
Support/resistance levels.

Levels are always ordered:
    strong_support <= support <= pivot <= resistance <= strong_resistance
with resistance strictly above support.
"""

from typing import Optional

from marketlens.schemas.analysis import KeyLevels, MarketCondition, MarketPhase
from marketlens.services.indicators.calculations import Series, as_array, price_step, round_price

# Known support/resistance bands used when classification is unavailable
DEFAULT_BANDS: dict[str, tuple[float, float]] = {
    "bitcoin": (65000.0, 70000.0),
    "ethereum": (2300.0, 2500.0),
    "binancecoin": (280.0, 320.0),
    "cardano": (0.45, 0.55),
    "solana": (90.0, 110.0),
}


def _ordered_levels(
    support: float, resistance: float, price: float, inner: float, outer: float
) -> KeyLevels:
    """Round and build KeyLevels, keeping resistance above support after rounding."""
    pivot = round_price(price)
    support = min(round_price(support), pivot)
    resistance = max(round_price(resistance), pivot)
    if resistance <= support:
        resistance = round_price(support + price_step(support))

    return KeyLevels(
        strong_support=min(round_price(support * inner), support),
        support=support,
        pivot=pivot,
        resistance=resistance,
        strong_resistance=max(round_price(resistance * outer), resistance),
    )


def compute_key_levels(prices: Series, price: float, ma20: float, ma50: float) -> KeyLevels:
    """
    Levels from the 20-point range and the MA20/MA50 band.

    Support never sits more than 5% under price and resistance never more
    than 5% over it, unless needed to keep resistance >= support * 1.01.
    """
    recent = as_array(prices)[-20:]
    low20 = float(recent.min()) if len(recent) else price
    high20 = float(recent.max()) if len(recent) else price

    support = min(max(low20, min(ma20, ma50) * 0.995, price * 0.95), price)
    resistance = max(
        min(high20, max(ma20, ma50) * 1.005, price * 1.05),
        price,
        support * 1.01,
    )
    return _ordered_levels(support, resistance, price, 0.99, 1.01)


def default_key_levels(asset_id: str, price: float) -> KeyLevels:
    """
    Asset-keyed band when it brackets the price, else +/-5% of price.
    """
    band: Optional[tuple[float, float]] = DEFAULT_BANDS.get(asset_id.lower())
    if band is None or not band[0] <= price <= band[1]:
        band = (price * 0.95, price * 1.05)

    support, resistance = band
    return _ordered_levels(support, resistance, price, 0.98, 1.02)


def default_market_condition(
    asset_id: str, price: float, phase: MarketPhase = MarketPhase.NEUTRAL
) -> MarketCondition:
    """Deterministic condition used when classification fails."""
    return MarketCondition(
        phase=phase,
        strength=0.5,
        confidence=50.0,
        key_levels=default_key_levels(asset_id, price),
    )
