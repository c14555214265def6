"""
Tests for headline classification and the sentiment summary.
"""

import pytest

from marketlens.schemas.market import NewsItem, SentimentRecord
from marketlens.services.analysis import default_technical_signals
from marketlens.services.sentiment import (
    classify_headline,
    news_score,
    news_trend,
    sentiment_score,
    sentiment_signal,
    social_score,
    summarize_sentiment,
)


def test_classify_headline():
    assert classify_headline("Bitcoin rallies to record high") == "positive"
    assert classify_headline("Token drops after exchange hack") == "negative"
    assert classify_headline("Developers meet in Lisbon") == "neutral"
    assert classify_headline("Gains fade as fears return") == "neutral"


def test_news_score(sample_news):
    assert news_score(sample_news.news) == pytest.approx(62.5)
    assert news_score([]) == 50.0


def test_news_trend(sample_news):
    assert news_trend(sample_news.news) == "bullish"
    negative = [NewsItem(title="x", sentiment="negative")] * 3
    assert news_trend(negative) == "bearish"
    assert news_trend([]) == "neutral"


def test_social_score():
    assert social_score([]) == 50.0
    assert social_score([SentimentRecord(volume=0.0)]) == 50.0
    assert social_score([SentimentRecord(volume=72.0)]) == 72.0
    assert social_score([SentimentRecord(volume=150.0)]) == 100.0


def test_sentiment_score(sample_news):
    records = [SentimentRecord(volume=70.0)]
    assert sentiment_score(sample_news.news, records) == pytest.approx((62.5 + 70) / 2)
    assert sentiment_score([], records) == 50.0


def test_sentiment_signal():
    assert sentiment_signal([SentimentRecord(volume=61.0)]) == "bullish"
    assert sentiment_signal([SentimentRecord(volume=39.0)]) == "bearish"
    assert sentiment_signal([]) == "neutral"


def test_summary(sample_news):
    records = [SentimentRecord(volume=70.0, sentiment="bullish")]
    summary = summarize_sentiment(sample_news.news, records, default_technical_signals())

    assert summary.overall.score == pytest.approx(66.25)
    assert summary.overall.signal == "bullish"
    assert summary.overall.confidence == pytest.approx((50 + 62.5) / 2)
    assert summary.components.news.recent == [n.title for n in sample_news.news[:3]]
    assert summary.components.social.trend == "bullish"
    assert summary.components.market.dominance == 50.0
    assert summary.components.market.flow == "outflow"
    assert summary.components.market.score == pytest.approx((50 + 40) / 2)
