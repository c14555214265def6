"""
Data provider selection.
"""

import logging
from typing import Optional

from marketlens.core.config import DataProviderName, Settings, settings
from marketlens.services.data_ingestion.interface import MarketDataProvider
from marketlens.services.data_ingestion.mock_data import MockMarketDataProvider
from marketlens.services.data_ingestion.coingecko import CoinGeckoProvider

logger = logging.getLogger(__name__)

# Singleton instance
_provider_instance: Optional[MarketDataProvider] = None


def create_data_provider(
    name: DataProviderName, config: Optional[Settings] = None
) -> MarketDataProvider:
    if DataProviderName(name) == DataProviderName.COINGECKO:
        return CoinGeckoProvider(config=config)
    return MockMarketDataProvider()


def get_data_provider() -> MarketDataProvider:
    """Get or create the configured data provider."""
    global _provider_instance
    if _provider_instance is None:
        _provider_instance = create_data_provider(settings.data_provider)
        logger.info(f"Data provider: {_provider_instance.name}")
    return _provider_instance


async def close_data_provider() -> None:
    global _provider_instance
    if _provider_instance is not None:
        await _provider_instance.close()
        _provider_instance = None
