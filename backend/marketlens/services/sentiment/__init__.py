"""
Sentiment Summary

CONTRACT:
    Input:  NewsFeed items + SentimentRecords + TechnicalSignals
    Output: SentimentSummary, blended sentiment score

RESPONSIBILITIES:
    - Score news headlines and their recent trend
    - Read the social sentiment score
    - Derive market sentiment from momentum and volume flow
    - Keyword headline classification for data providers
"""

from marketlens.services.sentiment.keywords import classify_headline, headline_score
from marketlens.services.sentiment.service import (
    news_score,
    news_trend,
    social_score,
    sentiment_score,
    sentiment_signal,
    summarize_sentiment,
    default_sentiment_summary,
)

__all__ = [
    "classify_headline",
    "headline_score",
    "news_score",
    "news_trend",
    "social_score",
    "sentiment_score",
    "sentiment_signal",
    "summarize_sentiment",
    "default_sentiment_summary",
]
