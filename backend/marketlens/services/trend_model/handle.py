"""
Trend Model Handle

Process-wide, lazily built trend model. Built once on first use and
shared read-only by every analysis call.
"""

import logging
import math
import threading
from typing import Callable, Optional

import numpy as np

from marketlens.core.config import settings
from marketlens.services.trend_model.model import TrendModel, load_trend_model

logger = logging.getLogger(__name__)


class TrendModelHandle:
    """Thread-safe lazy holder for a TrendModel."""

    def __init__(self, factory: Optional[Callable[[], TrendModel]] = None):
        self._factory = factory or (lambda: load_trend_model(settings.trend_model_path))
        self._model: Optional[TrendModel] = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._model is not None

    def get(self) -> TrendModel:
        """Return the model, building it on first access."""
        if self._model is None:
            with self._lock:
                if self._model is None:
                    logger.info("Initializing trend model")
                    self._model = self._factory()
        return self._model

    def estimate(self, features: np.ndarray) -> float:
        """Trend-strength estimate; 0.0 when the model output is not finite."""
        value = self.get().predict(features)
        if value is None or not math.isfinite(value):
            logger.warning(f"Trend model returned non-finite output: {value}")
            return 0.0
        return float(value)


# Singleton instance
_handle_instance: Optional[TrendModelHandle] = None
_handle_lock = threading.Lock()


def get_trend_model_handle() -> TrendModelHandle:
    """Get or create the process-wide trend model handle."""
    global _handle_instance
    if _handle_instance is None:
        with _handle_lock:
            if _handle_instance is None:
                _handle_instance = TrendModelHandle()
    return _handle_instance
