"""
Application Configuration

All settings loaded from environment variables.
"""

from enum import Enum
from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class PhasePolicyName(str, Enum):
    MA_ALIGNMENT = "ma_alignment"
    WYCKOFF = "wyckoff"


class PredictionPolicyName(str, Enum):
    WIDENING = "widening"
    FIBONACCI = "fibonacci"


class DataProviderName(str, Enum):
    MOCK = "mock"
    COINGECKO = "coingecko"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "MarketLens Backend"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Data provider
    data_provider: DataProviderName = DataProviderName.MOCK
    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    coingecko_api_key: Optional[str] = None
    history_days: int = 365

    # Analysis policies
    phase_policy: PhasePolicyName = PhasePolicyName.MA_ALIGNMENT
    prediction_policy: PredictionPolicyName = PredictionPolicyName.WIDENING

    # Trend-strength model (JSON weights file; built-in weights when unset)
    trend_model_path: Optional[str] = None

    # Analysis limits
    min_price_points: int = 20
    default_price: float = 76000.0
    volume_profile_bucket: float = 10.0

    # Upstream calls (seconds)
    upstream_timeout_seconds: float = 10.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
