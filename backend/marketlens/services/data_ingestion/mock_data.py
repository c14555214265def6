"""
Mock Market Data Provider

Generates deterministic synthetic market data for development and testing.
The same asset id always yields the same series.
"""

import random
import zlib

from marketlens.schemas.market import NewsFeed, NewsItem, PriceHistory, SentimentRecord
from marketlens.services.data_ingestion.interface import MarketDataProvider
from marketlens.services.sentiment.keywords import classify_headline

# Base prices for common assets
ASSET_BASE_PRICES = {
    "bitcoin": 65000.0,
    "ethereum": 2400.0,
    "binancecoin": 300.0,
    "cardano": 0.5,
    "solana": 100.0,
}

HEADLINE_TEMPLATES = [
    "{name} rallies as institutional inflows hit record high",
    "{name} slides as traders fear further losses",
    "Analysts split on where {name} heads next",
    "{name} network upgrade approved by developers",
    "{name} drops after exchange hack concerns",
    "{name} trading volume steady ahead of macro data",
    "Whales accumulate {name} during quiet week",
    "{name} faces regulatory warning in key market",
]


def _rng(asset_id: str, salt: str = "") -> random.Random:
    return random.Random(zlib.crc32(f"{asset_id.lower()}{salt}".encode("utf-8")))


def get_base_price(asset_id: str) -> float:
    """Base price for an asset; derived from its id when unknown."""
    base = ASSET_BASE_PRICES.get(asset_id.lower())
    if base is not None:
        return base
    return round(10 + _rng(asset_id, "base").random() * 990, 2)


def generate_mock_history(asset_id: str, points: int = 365) -> PriceHistory:
    """Random-walk prices with ~2% daily moves and random volumes."""
    rng = _rng(asset_id)
    price = get_base_price(asset_id)
    prices, volumes = [], []

    for _ in range(points):
        price = max(price * (1 + (rng.random() - 0.5) * 0.04), 1e-6)
        prices.append(round(price, 6))
        volumes.append(round(price * rng.uniform(1_000, 50_000), 2))

    previous = prices[-2] if len(prices) > 1 else prices[-1]
    return PriceHistory(
        prices=prices,
        volumes=volumes,
        current_price=prices[-1],
        market_cap=round(prices[-1] * 19_000_000, 2),
        price_change_24h=round((prices[-1] - previous) / previous * 100, 2),
    )


def generate_mock_news(asset_id: str, count: int = 6) -> NewsFeed:
    """Synthetic headlines, sentiment scored by keyword."""
    rng = _rng(asset_id, "news")
    name = asset_id.replace("-", " ").title()
    templates = rng.sample(HEADLINE_TEMPLATES, k=min(count, len(HEADLINE_TEMPLATES)))
    titles = [t.format(name=name) for t in templates]

    return NewsFeed(
        news=[NewsItem(title=title, sentiment=classify_headline(title)) for title in titles]
    )


class MockMarketDataProvider(MarketDataProvider):
    """Deterministic synthetic data keyed by asset id."""

    def __init__(self, points: int = 365):
        self.points = points

    @property
    def name(self) -> str:
        return "MockMarketDataProvider"

    async def get_historical_data(self, asset_id: str) -> PriceHistory:
        return generate_mock_history(asset_id, self.points)

    async def get_sentiment(self, asset_id: str) -> list[SentimentRecord]:
        return [SentimentRecord(volume=50.0, sentiment="neutral")]

    async def get_news(self, asset_id: str) -> NewsFeed:
        return generate_mock_news(asset_id)
