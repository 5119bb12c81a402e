"""ZenQuotes HTTP client for motivational quotes"""

import time
from typing import Dict, Optional, Tuple

import httpx

from revelation_gateway.config import settings
from revelation_gateway.domain.exceptions import QuoteProviderError
from revelation_gateway.domain.models import Quote


class QuoteClient:
    """Client for the external random-quote API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        cache_seconds: int | None = None,
    ):
        self.base_url = base_url or settings.quote_api_url
        self.timeout = timeout or settings.quote_timeout_seconds
        self.cache_seconds = settings.quote_cache_seconds if cache_seconds is None else cache_seconds
        self._cache: Dict[str, Tuple[Quote, float]] = {}

    async def fetch_random_quote(self, category: Optional[str] = None) -> Quote:
        """
        Fetch one random quote, reusing the last one per category while it is fresh.

        Raises:
            QuoteProviderError: On timeout, HTTP errors, or invalid response
        """
        cache_key = category or "general"
        cached = self._cache.get(cache_key)
        if cached and time.monotonic() - cached[1] < self.cache_seconds:
            return cached[0]

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(self.base_url)
                response.raise_for_status()
                data = response.json()
                quote = Quote(text=data[0]["q"], author=data[0]["a"])

            except httpx.TimeoutException as e:
                raise QuoteProviderError(f"Quote API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise QuoteProviderError(f"Quote API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise QuoteProviderError(f"Quote API unreachable: {e}") from e
            except (KeyError, IndexError, ValueError, TypeError) as e:
                raise QuoteProviderError(f"Invalid quote data: {e}") from e

        self._cache[cache_key] = (quote, time.monotonic())
        return quote
