"""
Keyword headline sentiment.

Classifies a headline as positive, negative or neutral by counting
bullish and bearish keywords.
"""

import re

BULLISH_KEYWORDS = frozenset({
    "surge", "surges", "surging", "soar", "soars", "soaring",
    "rally", "rallies", "rallying", "gain", "gains", "gaining",
    "rise", "rises", "rising", "jump", "jumps", "jumping",
    "breakout", "breakthrough", "upgrade", "upgraded", "adoption",
    "outperform", "bullish", "positive", "strong", "inflow", "inflows",
    "growth", "record", "high", "highs", "all-time", "boom", "approval",
    "approves", "approved", "optimistic", "partnership", "launch",
})

BEARISH_KEYWORDS = frozenset({
    "fall", "falls", "falling", "drop", "drops", "dropping",
    "decline", "declines", "declining", "crash", "crashes", "crashing",
    "plunge", "plunges", "plunging", "sink", "sinks", "sinking",
    "selloff", "sell-off", "downgrade", "hack", "hacked", "exploit",
    "underperform", "bearish", "negative", "weak", "weakness", "outflow",
    "outflows", "loss", "losses", "low", "lows", "slump", "warning",
    "warns", "concern", "concerns", "fear", "fears", "ban", "lawsuit",
})

_WORD = re.compile(r"[a-z][a-z\-]*")


def headline_score(text: str) -> float:
    """Keyword score in [-1, 1]; 0 when no keyword matches."""
    words = _WORD.findall(text.lower())
    bullish = sum(1 for w in words if w in BULLISH_KEYWORDS)
    bearish = sum(1 for w in words if w in BEARISH_KEYWORDS)

    total = bullish + bearish
    if total == 0:
        return 0.0
    return (bullish - bearish) / total


def classify_headline(text: str) -> str:
    """positive / negative / neutral."""
    score = headline_score(text)
    if score >= 0.2:
        return "positive"
    if score <= -0.2:
        return "negative"
    return "neutral"
