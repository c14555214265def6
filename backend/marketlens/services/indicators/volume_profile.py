"""
Volume Profile Builder

Buckets prices into fixed-size levels, finds the point of control (POC)
and grows a value area around it until it holds 68% of traded volume.
"""

import logging
from typing import Optional

import numpy as np

from marketlens.schemas.indicators import ValueArea, VolumeProfile
from marketlens.services.indicators.calculations import Series, as_array, clamp

logger = logging.getLogger(__name__)

VALUE_AREA_FRACTION = 0.68
DEFAULT_BUCKET_SIZE = 10.0


def neutral_profile(price: float = 0.0) -> VolumeProfile:
    """Profile used when there is no usable volume."""
    return VolumeProfile(
        point_of_control=price,
        value_area=ValueArea(low=price, high=price),
        buying_pressure=0.5,
        selling_pressure=0.5,
        strength=0.5,
    )


def _bucket_volumes(
    prices: np.ndarray, volumes: np.ndarray, bucket_size: float
) -> tuple[np.ndarray, np.ndarray]:
    """Sum volume per price bucket; returns (levels ascending, volume per level)."""
    # Half-up rounding to the nearest bucket multiple
    buckets = np.floor(prices / bucket_size + 0.5) * bucket_size
    levels, inverse = np.unique(buckets, return_inverse=True)
    totals = np.zeros(len(levels))
    np.add.at(totals, inverse, volumes)
    return levels, totals


def _expand_value_area(totals: np.ndarray, poc_index: int, target: float) -> tuple[int, int, float]:
    """
    Greedily widen [low, high] from the POC, taking the larger neighbour.

    The POC volume counts toward the target. Once one side is exhausted
    the other side is taken, so the loop ends after at most len(totals) steps.
    """
    low = high = poc_index
    accumulated = float(totals[poc_index])
    last = len(totals) - 1

    while accumulated < target and (low > 0 or high < last):
        below = totals[low - 1] if low > 0 else None
        above = totals[high + 1] if high < last else None

        if above is None or (below is not None and below > above):
            low -= 1
            accumulated += float(below)
        else:
            high += 1
            accumulated += float(above)

    return low, high, accumulated


def build_volume_profile(
    prices: Series,
    volumes: Series,
    bucket_size: Optional[float] = None,
) -> VolumeProfile:
    """
    Build the volume profile for aligned price/volume series.

    Series of different lengths are truncated to their common trailing
    window. Empty input or zero total volume gives the neutral profile.
    """
    bucket_size = bucket_size or DEFAULT_BUCKET_SIZE
    price_data = as_array(prices)
    volume_data = as_array(volumes)

    length = min(len(price_data), len(volume_data))
    fallback_price = float(price_data[-1]) if len(price_data) else 0.0
    if length == 0:
        return neutral_profile(fallback_price)

    price_data = price_data[-length:]
    volume_data = volume_data[-length:]

    total_volume = float(np.sum(volume_data))
    if not np.isfinite(total_volume) or total_volume <= 0:
        return neutral_profile(fallback_price)

    levels, totals = _bucket_volumes(price_data, volume_data, bucket_size)
    poc_index = int(np.argmax(totals))
    poc_volume = float(totals[poc_index])

    low, high, accumulated = _expand_value_area(
        totals, poc_index, total_volume * VALUE_AREA_FRACTION
    )

    buying_pressure = clamp(accumulated / total_volume, 0.0, 1.0)

    logger.debug(
        f"Volume profile: {len(levels)} levels, POC {levels[poc_index]}, "
        f"value area {levels[low]}-{levels[high]}"
    )

    return VolumeProfile(
        point_of_control=float(levels[poc_index]),
        value_area=ValueArea(low=float(levels[low]), high=float(levels[high])),
        buying_pressure=buying_pressure,
        selling_pressure=1.0 - buying_pressure,
        strength=clamp(poc_volume / total_volume, 0.0, 1.0),
    )
