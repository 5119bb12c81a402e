"""In-memory per-user response cache for the insight endpoints"""

import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple

from revelation_gateway.config import settings

logger = logging.getLogger(__name__)


class ResponseCache:
    """
    TTL cache keyed strictly by (endpoint key, user id).

    Expired entries are dropped when read and swept on every write; stale
    data within the TTL window is acceptable for these endpoints.
    """

    def __init__(self, ttl_seconds: int | None = None, clock: Callable[[], float] = time.monotonic):
        self.ttl = settings.response_cache_seconds if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(key: str, user_id: str) -> str:
        return f"{key}:{user_id}"

    def get(self, key: str, user_id: str) -> Optional[Any]:
        cache_key = self.make_key(key, user_id)
        entry = self._entries.get(cache_key)
        if entry is None:
            self.misses += 1
            return None

        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[cache_key]
            self.misses += 1
            logger.debug(f"Cache expired: {cache_key}")
            return None

        self.hits += 1
        return value

    def set(self, key: str, user_id: str, value: Any) -> None:
        if self.ttl <= 0:
            return
        now = self._clock()
        self._evict_expired(now)
        self._entries[self.make_key(key, user_id)] = (value, now + self.ttl)

    def _evict_expired(self, now: float) -> None:
        for cache_key in [k for k, (_, expires_at) in self._entries.items() if now >= expires_at]:
            del self._entries[cache_key]

    def invalidate_user(self, user_id: str) -> None:
        """Drop every cached response for one user"""
        suffix = f":{user_id}"
        for cache_key in [k for k in self._entries if k.endswith(suffix)]:
            del self._entries[cache_key]

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0


response_cache = ResponseCache()
