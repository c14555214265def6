"""
Technical Signal Service

CONTRACT:
    Input:  SignalInput (price + volume series)
    Output: TechnicalSignals

RESPONSIBILITIES:
    - Calculate indicators (SMA, EMA, RSI, MACD, Stochastic RSI, ADX, ATR)
    - Calculate volatility and volume metrics
    - Build the volume profile (POC, value area, pressures)
    - Map raw values to qualitative labels

PURE PYTHON - Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from marketlens.services.indicators.interface import (
    SignalInput,
    TechnicalSignalServiceInterface,
)
from marketlens.services.indicators.service import (
    TechnicalSignalService,
    get_technical_signal_service,
)
from marketlens.services.indicators.volume_profile import (
    build_volume_profile,
    neutral_profile,
)

__all__ = [
    "SignalInput",
    "TechnicalSignalServiceInterface",
    "TechnicalSignalService",
    "get_technical_signal_service",
    "build_volume_profile",
    "neutral_profile",
]
