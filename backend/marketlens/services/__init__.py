"""
MarketLens Services

Service layer containing all analysis logic.
Each service has a defined interface (contract) and implementation.
"""

from marketlens.services.base import (
    BaseService,
    ComputationError,
    ExternalAPIError,
    ServiceError,
    StageResult,
    ValidationError,
)

__all__ = [
    "BaseService",
    "ComputationError",
    "ExternalAPIError",
    "ServiceError",
    "StageResult",
    "ValidationError",
]
