"""Best-effort enrichment of insights with quotes and psychology facts"""

import asyncio
import logging
import random
from typing import List, Optional, Protocol

from revelation_gateway.config import settings
from revelation_gateway.domain.models import Insight, Quote
from revelation_gateway.domain.psychology import fallback_quote, get_psychology_facts
from revelation_gateway.infrastructure.observability.metrics import quote_fetch_counter

logger = logging.getLogger(__name__)


class QuoteProvider(Protocol):
    async def fetch_random_quote(self, category: Optional[str] = None) -> Quote: ...


class QuoteEnricher:
    """
    Attach a quote to roughly `probability` of the insights and a fact to every insight lacking one.

    The random source is injected so both branches are reproducible in tests.
    Enrichment never raises: remote failures fall back to curated quotes.
    """

    def __init__(
        self,
        provider: Optional[QuoteProvider] = None,
        rng: Optional[random.Random] = None,
        probability: float | None = None,
        timeout: float | None = None,
    ):
        self.provider = provider
        self.rng = rng or random.Random(settings.enrichment_seed)
        self.probability = settings.enrichment_probability if probability is None else probability
        self.timeout = timeout or settings.quote_timeout_seconds

    async def enrich(self, insights: List[Insight]) -> List[Insight]:
        for insight in insights:
            if insight.psychological_fact is None:
                insight.psychological_fact = self._fact_for(insight)

        # Draw all coin flips up front so the outcome does not depend on fetch timing
        selected = [i for i in insights if self.rng.random() < self.probability]
        remote = await asyncio.gather(*(self._fetch_remote(i.category) for i in selected))

        for insight, quote in zip(selected, remote):
            if quote is None:
                quote_fetch_counter.labels(source="fallback").inc()
                quote = fallback_quote(insight.category, self.rng)
            else:
                quote_fetch_counter.labels(source="remote").inc()
            insight.quote = quote

        return insights

    async def _fetch_remote(self, category: str) -> Optional[Quote]:
        if self.provider is None:
            return None
        try:
            return await asyncio.wait_for(self.provider.fetch_random_quote(category), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Quote fetch timed out after {self.timeout}s, using local quote")
        except Exception as e:
            logger.warning(f"Failed to fetch quote, using local quote: {e}")
        return None

    @staticmethod
    def _fact_for(insight: Insight) -> Optional[str]:
        if insight.bias is not None:
            return insight.bias.psychological_fact
        facts = get_psychology_facts(insight.category)
        return facts[0].fact if facts else None
