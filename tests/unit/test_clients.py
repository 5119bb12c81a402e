"""Unit tests for outbound HTTP clients"""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from revelation_gateway.domain.exceptions import MarketDataError, QuoteProviderError
from revelation_gateway.domain.models import Quote
from revelation_gateway.domain.sentiment import NEUTRAL_SENTIMENT
from revelation_gateway.infrastructure.clients.market import MarketClient
from revelation_gateway.infrastructure.clients.notifier import NotificationClient
from revelation_gateway.infrastructure.clients.quotes import QuoteClient

QUOTE_URL = "https://quotes.test/api/random"
MARKET_URL = "https://market.test/query"
WEBHOOK_URL = "https://relay.test/notify"


def _response(status_code, url, method="GET", **kwargs):
    return httpx.Response(status_code, request=httpx.Request(method, url), **kwargs)


# Quotes


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
async def test_quote_client_parses_and_caches(mock_get: AsyncMock):
    mock_get.return_value = _response(200, QUOTE_URL, json=[{"q": "Know thyself.", "a": "Socrates"}])
    client = QuoteClient(base_url=QUOTE_URL, cache_seconds=3600)

    first = await client.fetch_random_quote("saving")
    second = await client.fetch_random_quote("saving")

    assert first == Quote("Know thyself.", "Socrates")
    assert second == first
    assert mock_get.await_count == 1


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
async def test_quote_client_cache_is_per_category(mock_get: AsyncMock):
    mock_get.return_value = _response(200, QUOTE_URL, json=[{"q": "Q", "a": "A"}])
    client = QuoteClient(base_url=QUOTE_URL, cache_seconds=3600)

    await client.fetch_random_quote("saving")
    await client.fetch_random_quote("goals")

    assert mock_get.await_count == 2


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
async def test_quote_client_http_error(mock_get: AsyncMock):
    mock_get.return_value = _response(503, QUOTE_URL)

    with pytest.raises(QuoteProviderError, match="503"):
        await QuoteClient(base_url=QUOTE_URL).fetch_random_quote()


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
async def test_quote_client_invalid_payload(mock_get: AsyncMock):
    mock_get.return_value = _response(200, QUOTE_URL, json=[])

    with pytest.raises(QuoteProviderError, match="Invalid quote data"):
        await QuoteClient(base_url=QUOTE_URL).fetch_random_quote()


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
async def test_quote_client_timeout(mock_get: AsyncMock):
    mock_get.side_effect = httpx.ReadTimeout("slow")

    with pytest.raises(QuoteProviderError, match="timeout"):
        await QuoteClient(base_url=QUOTE_URL).fetch_random_quote()


# Market sentiment


async def test_market_client_without_key_is_neutral():
    client = MarketClient(base_url=MARKET_URL)
    client.api_key = ""

    assert await client.get_market_sentiment() == NEUTRAL_SENTIMENT


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
async def test_market_client_analyzes_feed(mock_get: AsyncMock):
    mock_get.return_value = _response(
        200, MARKET_URL, json={"feed": [{"overall_sentiment_score": 0.4}, {"overall_sentiment_score": 0.2}]}
    )

    result = await MarketClient(base_url=MARKET_URL, api_key="demo").get_market_sentiment()

    assert result.sentiment == "positive"
    assert result.details["sources"] == 2


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
async def test_market_client_falls_back_on_missing_feed(mock_get: AsyncMock):
    mock_get.return_value = _response(200, MARKET_URL, json={"Information": "rate limited"})
    client = MarketClient(base_url=MARKET_URL, api_key="demo")

    with pytest.raises(MarketDataError):
        await client.fetch_feed()
    assert await client.get_market_sentiment() == NEUTRAL_SENTIMENT


# Notifications


@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_notifier_sends_user_payload(mock_post: AsyncMock):
    mock_post.return_value = _response(200, WEBHOOK_URL, method="POST")

    await NotificationClient(webhook_url=WEBHOOK_URL).push("user_1", {"event": "INSIGHTS_READY"})

    assert mock_post.await_args.kwargs["json"] == {"user_id": "user_1", "event": "INSIGHTS_READY"}


@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_notifier_retries_then_succeeds(mock_post: AsyncMock):
    mock_post.side_effect = [
        _response(502, WEBHOOK_URL, method="POST"),
        httpx.ConnectError("refused"),
        _response(200, WEBHOOK_URL, method="POST"),
    ]
    client = NotificationClient(webhook_url=WEBHOOK_URL)
    client.backoff_base = 0

    await client.push("user_1", {"event": "INSIGHTS_READY"})

    assert mock_post.await_count == 3


@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_notifier_raises_after_max_retries(mock_post: AsyncMock):
    mock_post.return_value = _response(500, WEBHOOK_URL, method="POST")
    client = NotificationClient(webhook_url=WEBHOOK_URL)
    client.backoff_base = 0
    client.max_retries = 2

    with pytest.raises(httpx.HTTPStatusError):
        await client.push("user_1", {"event": "INSIGHTS_READY"})
    assert mock_post.await_count == 2
