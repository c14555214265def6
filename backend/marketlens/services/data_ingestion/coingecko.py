"""
CoinGecko Data Provider

Historical prices/volumes and community sentiment from the public
CoinGecko API, news headlines from Google News RSS.
"""

import asyncio
import logging
import xml.etree.ElementTree as ET
from typing import Any, Optional
from urllib.parse import quote_plus

import aiohttp

from marketlens.core.config import Settings, settings
from marketlens.schemas.market import NewsFeed, NewsItem, PriceHistory, SentimentRecord
from marketlens.services.base import ExternalAPIError
from marketlens.services.data_ingestion.interface import MarketDataProvider
from marketlens.services.sentiment.keywords import classify_headline

logger = logging.getLogger(__name__)

NEWS_URL = "https://news.google.com/rss/search?q={query}&hl=en-US&gl=US&ceid=US:en"


class CoinGeckoProvider(MarketDataProvider):
    """
    CoinGecko adapter.

    Endpoints:
    - /coins/{id}/market_chart: daily prices and total volumes
    - /coins/{id}: current price, 24h change, community sentiment votes
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        days: Optional[int] = None,
        timeout: Optional[float] = None,
        config: Optional[Settings] = None,
    ):
        self.config = config or settings
        self.base_url = (base_url or self.config.coingecko_base_url).rstrip("/")
        self.api_key = api_key or self.config.coingecko_api_key
        self.days = days or self.config.history_days
        self.timeout = timeout or self.config.upstream_timeout_seconds
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def name(self) -> str:
        return "CoinGeckoProvider"

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            headers = {"Accept": "application/json"}
            if self.api_key:
                headers["x-cg-demo-api-key"] = self.api_key
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers=headers,
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def _get_json(self, path: str, params: Optional[dict] = None) -> Any:
        session = await self._ensure_session()
        url = f"{self.base_url}{path}"
        try:
            async with session.get(url, params=params) as resp:
                if resp.status != 200:
                    raise ExternalAPIError(
                        self.name,
                        f"GET {path} returned status {resp.status}",
                        {"status": resp.status},
                    )
                return await resp.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ExternalAPIError(self.name, f"GET {path} failed: {e}") from e

    async def _get_coin(self, asset_id: str) -> dict:
        return await self._get_json(
            f"/coins/{asset_id}",
            {
                "localization": "false",
                "tickers": "false",
                "market_data": "true",
                "community_data": "false",
                "developer_data": "false",
            },
        )

    async def get_historical_data(self, asset_id: str) -> PriceHistory:
        chart = await self._get_json(
            f"/coins/{asset_id}/market_chart",
            {"vs_currency": "usd", "days": str(self.days), "interval": "daily"},
        )
        try:
            prices = [point[1] for point in chart.get("prices", [])]
            volumes = [point[1] for point in chart.get("total_volumes", [])]
            caps = chart.get("market_caps") or []
        except (AttributeError, IndexError, TypeError) as e:
            raise ExternalAPIError(self.name, f"Malformed market_chart payload: {e}") from e

        logger.info(f"CoinGecko: {len(prices)} price points for {asset_id}")

        current_price = prices[-1] if prices else None
        change_24h = None
        if len(prices) > 1 and prices[-2]:
            change_24h = (prices[-1] - prices[-2]) / prices[-2] * 100

        return PriceHistory(
            prices=prices,
            volumes=volumes or None,
            current_price=current_price,
            market_cap=caps[-1][1] if caps else None,
            price_change_24h=change_24h,
        )

    async def get_sentiment(self, asset_id: str) -> list[SentimentRecord]:
        coin = await self._get_coin(asset_id)
        votes_up = coin.get("sentiment_votes_up_percentage")
        if votes_up is None:
            return []

        if votes_up > 60:
            label = "bullish"
        elif votes_up < 40:
            label = "bearish"
        else:
            label = "neutral"
        return [SentimentRecord(volume=float(votes_up), sentiment=label)]

    async def get_news(self, asset_id: str, limit: int = 10) -> NewsFeed:
        """Latest headlines from Google News RSS, keyword-scored."""
        session = await self._ensure_session()
        url = NEWS_URL.format(query=quote_plus(f"{asset_id} crypto"))

        try:
            async with session.get(url) as resp:
                if resp.status != 200:
                    raise ExternalAPIError(
                        self.name, f"News feed returned status {resp.status}"
                    )
                content = await resp.text()
            root = ET.fromstring(content)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ExternalAPIError(self.name, f"News fetch failed: {e}") from e
        except ET.ParseError as e:
            raise ExternalAPIError(self.name, f"Malformed news feed: {e}") from e

        items = []
        for item in root.findall(".//item")[:limit]:
            title = item.findtext("title")
            if not title:
                continue
            items.append(NewsItem(title=title, sentiment=classify_headline(title)))
        return NewsFeed(news=items)

    async def health_check(self) -> bool:
        try:
            await self._get_json("/ping")
            return True
        except ExternalAPIError as e:
            logger.error(f"CoinGecko health check failed: {e}")
            return False
