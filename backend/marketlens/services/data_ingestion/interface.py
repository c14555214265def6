"""
Market Data Provider Interface

Defines the contract for the data retrieval layer.
"""

from abc import ABC, abstractmethod

from marketlens.schemas.market import NewsFeed, PriceHistory, SentimentRecord


class MarketDataProvider(ABC):
    """
    Market Data Provider Contract.

    get_historical_data(asset_id) -> PriceHistory
        - prices: chronological, last element = current price
        - volumes: aligned with prices (optional)
    get_sentiment(asset_id) -> list[SentimentRecord]
    get_news(asset_id) -> NewsFeed

    Providers return raw payloads; validation happens downstream.
    Upstream failures raise ExternalAPIError.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    async def get_historical_data(self, asset_id: str) -> PriceHistory:
        pass

    @abstractmethod
    async def get_sentiment(self, asset_id: str) -> list[SentimentRecord]:
        pass

    @abstractmethod
    async def get_news(self, asset_id: str) -> NewsFeed:
        pass

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        """Release connections held by the provider."""
        pass
