"""
CONTRACT 1: Data Provider

Input: asset id
Output: PriceHistory, list[SentimentRecord], NewsFeed

Raw payloads exactly as the provider hands them over.
Nothing here is validated beyond shape - the analysis orchestrator
decides whether a history is usable.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class PriceHistory(BaseModel):
    """
    Historical price/volume series for one asset.
    Sent by: Data Provider
    Received by: Analysis Orchestrator

    Prices are chronological; the last element is the current price.
    """

    prices: list[Any] = Field(default_factory=list)
    volumes: Optional[list[Any]] = None
    current_price: Optional[float] = None
    market_cap: Optional[float] = None
    price_change_24h: Optional[float] = None

    class Config:
        json_schema_extra = {
            "example": {
                "prices": [64210.5, 64480.1, 65012.9],
                "volumes": [2.1e10, 1.9e10, 2.4e10],
                "current_price": 65012.9,
                "market_cap": 1.28e12,
                "price_change_24h": 1.25,
            }
        }


class SentimentRecord(BaseModel):
    """Social sentiment reading (volume is a 0-100 score)."""

    volume: float = 50.0
    sentiment: str = "neutral"


class NewsItem(BaseModel):
    """Single news headline."""

    title: str
    sentiment: str = Field(
        default="neutral",
        description="positive / negative / anything else counts as neutral",
    )


class NewsFeed(BaseModel):
    """News response from the data provider."""

    news: list[NewsItem] = Field(default_factory=list)
