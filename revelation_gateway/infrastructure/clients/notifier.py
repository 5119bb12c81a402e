"""Notification push client with exponential backoff retry logic"""

import asyncio
from typing import Any, Dict

import httpx

from revelation_gateway.config import settings
from revelation_gateway.infrastructure.observability.metrics import webhook_failure_counter, webhook_latency_histogram


class NotificationClient:
    """Delivers push(user_id, payload) events to the real-time notification relay"""

    def __init__(self, webhook_url: str | None = None):
        self.webhook_url = webhook_url or settings.notification_webhook_url
        self.max_retries = settings.webhook_max_retries
        self.backoff_base = settings.webhook_backoff_base

    async def push(self, user_id: str, payload: Dict[str, Any]) -> None:
        """
        Send a notification event for one user with retry logic.

        Retry strategy:
        - Exponential backoff: 1s, 2s, 4s, 8s (base * 2^attempt)
        - Retries on 5xx errors and network failures
        - Tracks latency histogram and failure counter
        """
        body = {"user_id": user_id, **payload}
        attempt = 0
        async with httpx.AsyncClient() as client:
            while attempt < self.max_retries:
                try:
                    with webhook_latency_histogram.time():
                        response = await client.post(
                            self.webhook_url,
                            json=body,
                            timeout=settings.http_timeout_seconds,
                        )
                        response.raise_for_status()
                        return

                except (httpx.HTTPStatusError, httpx.RequestError):
                    attempt += 1
                    webhook_failure_counter.inc()

                    if attempt >= self.max_retries:
                        raise

                    backoff = self.backoff_base * (2 ** (attempt - 1))
                    await asyncio.sleep(backoff)
