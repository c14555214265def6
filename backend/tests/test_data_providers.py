"""
Tests for the market data providers.
"""

import pytest

from marketlens.core.config import DataProviderName, Settings
from marketlens.services.base import ExternalAPIError
from marketlens.services.data_ingestion import (
    CoinGeckoProvider,
    MockMarketDataProvider,
    create_data_provider,
)
from marketlens.services.data_ingestion.mock_data import generate_mock_history, get_base_price


def fake_json(payloads):
    async def _get_json(path, params=None):
        for prefix, payload in payloads.items():
            if path.endswith(prefix):
                if isinstance(payload, Exception):
                    raise payload
                return payload
        raise AssertionError(f"unexpected path {path}")

    return _get_json


def test_mock_history_is_deterministic():
    first = generate_mock_history("bitcoin", 50)
    assert first == generate_mock_history("bitcoin", 50)
    assert first != generate_mock_history("ethereum", 50)
    assert len(first.prices) == len(first.volumes) == 50
    assert all(p > 0 for p in first.prices)
    assert first.current_price == first.prices[-1]


def test_mock_base_price():
    assert get_base_price("Bitcoin") == 65000.0
    assert 10 <= get_base_price("unknown-coin") <= 1000


@pytest.mark.asyncio
async def test_mock_provider():
    provider = MockMarketDataProvider(points=30)
    history = await provider.get_historical_data("solana")
    news = await provider.get_news("solana")
    sentiment = await provider.get_sentiment("solana")

    assert len(history.prices) == 30
    assert news.news
    assert all(n.sentiment in {"positive", "negative", "neutral"} for n in news.news)
    assert sentiment[0].volume == 50.0
    assert await provider.health_check()


def test_create_data_provider():
    assert isinstance(create_data_provider(DataProviderName.MOCK), MockMarketDataProvider)
    assert isinstance(create_data_provider("coingecko"), CoinGeckoProvider)


@pytest.mark.asyncio
async def test_coingecko_history_parsing():
    provider = CoinGeckoProvider(base_url="http://test", days=3)
    provider._get_json = fake_json(
        {
            "/market_chart": {
                "prices": [[1, 100.0], [2, 110.0], [3, 121.0]],
                "total_volumes": [[1, 5.0], [2, 6.0], [3, 7.0]],
                "market_caps": [[3, 1e9]],
            }
        }
    )
    history = await provider.get_historical_data("bitcoin")

    assert history.prices == [100.0, 110.0, 121.0]
    assert history.volumes == [5.0, 6.0, 7.0]
    assert history.current_price == 121.0
    assert history.market_cap == 1e9
    assert history.price_change_24h == pytest.approx(10.0)


@pytest.mark.asyncio
async def test_coingecko_malformed_history():
    provider = CoinGeckoProvider(base_url="http://test")
    provider._get_json = fake_json({"/market_chart": {"prices": [5, 6]}})
    with pytest.raises(ExternalAPIError):
        await provider.get_historical_data("bitcoin")


@pytest.mark.asyncio
async def test_coingecko_sentiment():
    provider = CoinGeckoProvider(base_url="http://test")
    provider._get_json = fake_json({"/coins/bitcoin": {"sentiment_votes_up_percentage": 72.5}})
    records = await provider.get_sentiment("bitcoin")
    assert records[0].volume == 72.5
    assert records[0].sentiment == "bullish"

    provider._get_json = fake_json({"/coins/bitcoin": {}})
    assert await provider.get_sentiment("bitcoin") == []


@pytest.mark.asyncio
async def test_coingecko_health_check_reports_failure():
    provider = CoinGeckoProvider(base_url="http://test")
    provider._get_json = fake_json({"/ping": ExternalAPIError("CoinGeckoProvider", "down")})
    assert await provider.health_check() is False


@pytest.mark.asyncio
async def test_coingecko_takes_settings_from_injected_config():
    config = Settings(
        coingecko_base_url="https://example.test/api/v3/",
        upstream_timeout_seconds=3.0,
        history_days=30,
    )
    provider = create_data_provider(DataProviderName.COINGECKO, config)
    assert provider.base_url == "https://example.test/api/v3"
    assert provider.days == 30
    assert provider.timeout == 3.0

    session = await provider._ensure_session()
    assert session.timeout.total == 3.0
    await provider.close()


def test_coingecko_explicit_timeout_wins():
    assert CoinGeckoProvider(timeout=1.5, config=Settings(upstream_timeout_seconds=9.0)).timeout == 1.5
