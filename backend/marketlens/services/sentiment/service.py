"""
Sentiment Summary

Blends news headlines, social sentiment and market readings into the
SentimentSummary section of the report.
"""

import logging

from marketlens.schemas.analysis import (
    MarketSentimentComponent,
    NewsSentimentComponent,
    OverallSentiment,
    SentimentComponents,
    SentimentSummary,
    SocialSentimentComponent,
)
from marketlens.schemas.indicators import TechnicalSignals
from marketlens.schemas.market import NewsItem, SentimentRecord
from marketlens.services.indicators.calculations import clamp

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50.0


def news_score(news: list[NewsItem]) -> float:
    """((positive - negative) / n + 1) * 50; 50 with no news."""
    if not news:
        return NEUTRAL_SCORE
    positive = sum(1 for n in news if n.sentiment == "positive")
    negative = sum(1 for n in news if n.sentiment == "negative")
    return ((positive - negative) / len(news) + 1) * 50


def news_trend(news: list[NewsItem]) -> str:
    """Direction of the 5 most recent headlines."""
    recent = news[:5]
    positive = sum(1 for n in recent if n.sentiment == "positive")
    negative = sum(1 for n in recent if n.sentiment == "negative")

    if not recent:
        return "neutral"
    if positive > negative * 1.5:
        return "bullish"
    if negative > positive * 1.5:
        return "bearish"
    return "neutral"


def social_score(records: list[SentimentRecord]) -> float:
    """First record's 0-100 volume score, or 50."""
    if not records or not records[0].volume:
        return NEUTRAL_SCORE
    return clamp(records[0].volume, 0.0, 100.0)


def sentiment_score(news: list[NewsItem], records: list[SentimentRecord]) -> float:
    """Blended news/social score in [0, 100]; 50 with no news."""
    if not news:
        return NEUTRAL_SCORE
    return (news_score(news) + social_score(records)) / 2


def sentiment_signal(records: list[SentimentRecord]) -> str:
    score = social_score(records)
    if score > 60:
        return "bullish"
    if score < 40:
        return "bearish"
    return "neutral"


def summarize_sentiment(
    news: list[NewsItem],
    records: list[SentimentRecord],
    signals: TechnicalSignals,
) -> SentimentSummary:
    """Build the report's sentiment section."""
    score_news = news_score(news)
    score_social = social_score(records)
    strength = signals.trend.strength

    macd_bias = 60 if signals.momentum.macd.value > 0 else 40
    confidence = clamp((strength * 100 + score_news) / 2, 30.0, 95.0)

    summary = SentimentSummary(
        overall=OverallSentiment(
            score=round(sentiment_score(news, records), 2),
            signal=sentiment_signal(records),
            confidence=round(confidence, 2),
        ),
        components=SentimentComponents(
            news=NewsSentimentComponent(
                score=round(score_news, 2),
                recent=[n.title for n in news[:3]],
                trend=news_trend(news),
            ),
            social=SocialSentimentComponent(
                score=round(score_social, 2),
                trend=records[0].sentiment if records else "neutral",
                volume=signals.volume.change,
            ),
            market=MarketSentimentComponent(
                score=round((signals.momentum.rsi.value + macd_bias) / 2, 2),
                dominance=round(strength * 100, 2),
                flow="inflow" if signals.volume.change > 1 else "outflow",
            ),
        ),
    )

    logger.debug(f"Sentiment: overall {summary.overall.score} ({summary.overall.signal})")
    return summary


def default_sentiment_summary() -> SentimentSummary:
    """Neutral summary used by the default report."""
    return SentimentSummary(
        overall=OverallSentiment(score=50.0, signal="neutral", confidence=50.0),
        components=SentimentComponents(
            news=NewsSentimentComponent(score=50.0, recent=[], trend="neutral"),
            social=SocialSentimentComponent(score=50.0, trend="neutral", volume=1.0),
            market=MarketSentimentComponent(score=50.0, dominance=50.0, flow="stable"),
        ),
    )
