"""Reduce a news-sentiment feed into a single market mood"""

from typing import Any, Dict, List

from revelation_gateway.domain.models import MarketSentiment

NEUTRAL_SENTIMENT = MarketSentiment(
    sentiment="neutral",
    confidence=0.7,
    summary="Moderate market sentiment with some uncertainty",
    recommendation="Keep a balanced approach to your investments",
)


def analyze_sentiment(feed: List[Dict[str, Any]]) -> MarketSentiment:
    """
    Average the overall sentiment score across feed items.

    Thresholds: > 0.1 positive, < -0.1 negative, otherwise neutral.
    Items without a usable score are ignored.
    """
    scores = []
    for item in feed:
        raw = item.get("overall_sentiment_score")
        if raw in (None, ""):
            continue
        try:
            scores.append(float(raw))
        except (TypeError, ValueError):
            continue

    average = sum(scores) / len(scores) if scores else 0.0

    if average > 0.1:
        sentiment = "positive"
        recommendation = "Favorable conditions for investing, but stay careful"
    elif average < -0.1:
        sentiment = "negative"
        recommendation = "Uncertain period, favor caution and diversification"
    else:
        sentiment = "neutral"
        recommendation = "Stable market, keep your current investment strategy"

    return MarketSentiment(
        sentiment=sentiment,
        confidence=min(0.9, abs(average) + 0.5),
        summary=f"Market sentiment is {sentiment} based on {len(scores)} news sources",
        recommendation=recommendation,
        details={"average_score": average, "sources": len(scores)},
    )
