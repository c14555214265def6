"""
Shared fixtures for the MarketLens test suite.
"""

from typing import Optional

import numpy as np
import pytest

from marketlens.schemas.market import NewsFeed, NewsItem, PriceHistory, SentimentRecord
from marketlens.services.data_ingestion import MarketDataProvider


class StubProvider(MarketDataProvider):
    """In-memory provider; any *_error set is raised by the matching call."""

    def __init__(
        self,
        history: PriceHistory,
        sentiment: Optional[list[SentimentRecord]] = None,
        news: Optional[NewsFeed] = None,
        history_error: Optional[Exception] = None,
        sentiment_error: Optional[Exception] = None,
        news_error: Optional[Exception] = None,
    ):
        self.history = history
        self.sentiment = sentiment if sentiment is not None else [SentimentRecord()]
        self.news = news if news is not None else NewsFeed()
        self.history_error = history_error
        self.sentiment_error = sentiment_error
        self.news_error = news_error
        self.calls: list[str] = []

    @property
    def name(self) -> str:
        return "StubProvider"

    async def get_historical_data(self, asset_id: str) -> PriceHistory:
        self.calls.append("history")
        if self.history_error:
            raise self.history_error
        return self.history

    async def get_sentiment(self, asset_id: str) -> list[SentimentRecord]:
        self.calls.append("sentiment")
        if self.sentiment_error:
            raise self.sentiment_error
        return self.sentiment

    async def get_news(self, asset_id: str) -> NewsFeed:
        self.calls.append("news")
        if self.news_error:
            raise self.news_error
        return self.news


@pytest.fixture
def rising_prices() -> list[float]:
    """200 strictly rising prices."""
    return [100.0 + i for i in range(200)]


@pytest.fixture
def flat_volumes() -> list[float]:
    return [1000.0] * 200


@pytest.fixture
def random_walk() -> list[float]:
    """Seeded 300-point random walk, always positive."""
    rng = np.random.default_rng(7)
    steps = 1 + rng.normal(0, 0.02, 300)
    return list(100.0 * np.cumprod(steps))


@pytest.fixture
def sharp_drop_prices() -> list[float]:
    """20 points: flat at 100, then a 35% drop over the last 5."""
    return [100.0] * 15 + [100.0 * 0.65 ** ((i + 1) / 5) for i in range(5)]


@pytest.fixture
def sample_news() -> NewsFeed:
    return NewsFeed(
        news=[
            NewsItem(title="Bitcoin rallies to record high", sentiment="positive"),
            NewsItem(title="ETF inflows surge", sentiment="positive"),
            NewsItem(title="Exchange hack sparks fears", sentiment="negative"),
            NewsItem(title="Markets quiet ahead of data", sentiment="neutral"),
        ]
    )


@pytest.fixture
def make_provider():
    """Factory for StubProvider instances."""
    return StubProvider
