"""News-sentiment HTTP client with a neutral fallback"""

import logging

import httpx

from revelation_gateway.config import settings
from revelation_gateway.domain.exceptions import MarketDataError
from revelation_gateway.domain.models import MarketSentiment
from revelation_gateway.domain.sentiment import NEUTRAL_SENTIMENT, analyze_sentiment

logger = logging.getLogger(__name__)


class MarketClient:
    """Client for the Alpha Vantage news-sentiment endpoint"""

    def __init__(self, base_url: str | None = None, api_key: str | None = None, timeout: float | None = None):
        self.base_url = base_url or settings.market_api_url
        self.api_key = api_key or settings.alpha_vantage_key
        self.timeout = timeout or settings.http_timeout_seconds

    async def fetch_feed(self) -> list:
        """
        Fetch the latest news feed items.

        Raises:
            MarketDataError: On timeout, HTTP errors, or a response without a feed
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(
                    self.base_url,
                    params={"function": "NEWS_SENTIMENT", "apikey": self.api_key, "limit": 5},
                )
                response.raise_for_status()
                feed = response.json()["feed"]
                if not isinstance(feed, list):
                    raise TypeError("feed is not a list")
                return feed

            except httpx.TimeoutException as e:
                raise MarketDataError(f"Market API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise MarketDataError(f"Market API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise MarketDataError(f"Market API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise MarketDataError(f"Invalid market data: {e}") from e

    async def get_market_sentiment(self) -> MarketSentiment:
        """Best-effort market mood; neutral when unconfigured or unavailable"""
        if not self.api_key:
            return NEUTRAL_SENTIMENT

        try:
            feed = await self.fetch_feed()
        except MarketDataError as e:
            logger.warning(f"Falling back to neutral market sentiment: {e}")
            return NEUTRAL_SENTIMENT

        return analyze_sentiment(feed)
