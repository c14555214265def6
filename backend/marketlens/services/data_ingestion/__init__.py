"""
Market Data Providers

CONTRACT:
    Input:  asset id
    Output: PriceHistory, list[SentimentRecord], NewsFeed

RESPONSIBILITIES:
    - Fetch price/volume history
    - Fetch social sentiment and news headlines
    - Report upstream failures as ExternalAPIError

Providers:
    - MockMarketDataProvider: deterministic synthetic data
    - CoinGeckoProvider: CoinGecko API + Google News RSS
"""

from marketlens.services.data_ingestion.interface import MarketDataProvider
from marketlens.services.data_ingestion.mock_data import MockMarketDataProvider
from marketlens.services.data_ingestion.coingecko import CoinGeckoProvider
from marketlens.services.data_ingestion.service import (
    create_data_provider,
    get_data_provider,
    close_data_provider,
)

__all__ = [
    "MarketDataProvider",
    "MockMarketDataProvider",
    "CoinGeckoProvider",
    "create_data_provider",
    "get_data_provider",
    "close_data_provider",
]
