"""Insights orchestrator - fetches user data and runs generators, enricher and scorer"""

import asyncio
import logging
from datetime import date, datetime, timezone
from typing import Callable, List, Optional, Protocol, Tuple

from revelation_gateway.config import InsightPolicy, default_policy, settings
from revelation_gateway.domain import aggregators, generators
from revelation_gateway.domain.exceptions import GeneratorError
from revelation_gateway.domain.models import (
    CompleteRevelation,
    Emotion,
    Goal,
    Insight,
    RevelationScore,
    Transaction,
)
from revelation_gateway.domain.revelation import assemble_revelation
from revelation_gateway.domain.scoring import calculate_revelation_score
from revelation_gateway.infrastructure.observability.metrics import (
    generator_failure_counter,
    record_insights,
    record_score,
)
from revelation_gateway.services.enrichment import QuoteEnricher
from revelation_gateway.utils.date_utils import days_ago

logger = logging.getLogger(__name__)


class FinanceStore(Protocol):
    async def list_transactions(
        self, user_id: str, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> List[Transaction]: ...

    async def list_active_goals(self, user_id: str) -> List[Goal]: ...

    async def list_emotions(
        self, user_id: str, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> List[Emotion]: ...


def sort_by_severity(insights: List[Insight]) -> List[Insight]:
    """Most severe first; ties keep emission order"""
    return sorted(insights, key=lambda i: i.severity_rank, reverse=True)


class InsightsService:
    """
    Per-request insights engine.

    Constructed with its collaborators rather than living as a module
    singleton; every call computes fresh results from the current store
    contents and shares no mutable state with other calls.
    """

    def __init__(
        self,
        store: FinanceStore,
        enricher: Optional[QuoteEnricher] = None,
        policy: InsightPolicy = default_policy,
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        transaction_window_days: int | None = None,
        pattern_window_days: int | None = None,
        emotion_window_days: int | None = None,
    ):
        self.store = store
        self.enricher = enricher or QuoteEnricher()
        self.policy = policy
        self.today = today
        self.now = now
        self.transaction_window_days = transaction_window_days or settings.transaction_window_days
        self.pattern_window_days = pattern_window_days or settings.pattern_window_days
        self.emotion_window_days = emotion_window_days or settings.emotion_window_days

    async def _fetch_all(
        self, user_id: str, today: date
    ) -> Tuple[List[Transaction], List[Goal], List[Emotion]]:
        """Fetch the broadest transaction window once; generators narrow it in memory"""
        transactions, goals, emotions = await asyncio.gather(
            self.store.list_transactions(user_id, date_from=days_ago(today, self.transaction_window_days)),
            self.store.list_active_goals(user_id),
            self.store.list_emotions(user_id, date_from=days_ago(today, self.emotion_window_days)),
        )
        return transactions, goals, emotions

    def _run_generator(self, name: str, generator: Callable[..., List[Insight]], *args) -> List[Insight]:
        try:
            return generator(*args)
        except Exception as e:
            error = GeneratorError(name, e)
            generator_failure_counter.labels(generator=name).inc()
            logger.exception(f"{error}; skipping its insights", extra={"generator": name})
            return []

    async def generate_smart_insights(self, user_id: str) -> List[Insight]:
        """
        Run every generator over the user's recent data and return enriched insights.

        Flow:
        1. Fetch transactions, active goals and emotions concurrently
        2. Run the spending, goal, bias and emotional generators in isolation
        3. Attach quotes and facts
        4. Sort by severity
        """
        today = self.today()
        transactions, goals, emotions = await self._fetch_all(user_id, today)
        recent = aggregators.within_window(transactions, days_ago(today, self.pattern_window_days))

        insights: List[Insight] = []
        insights += self._run_generator(
            "spending_patterns", generators.analyze_spending_patterns, recent, today, self.policy
        )
        insights += self._run_generator(
            "goal_progress", generators.analyze_goal_progress, goals, recent, today, self.policy
        )
        insights += self._run_generator(
            "cognitive_biases", generators.detect_cognitive_biases, recent, goals, today, self.policy
        )
        insights += self._run_generator(
            "emotional_spending", generators.analyze_emotional_spending, recent, emotions, self.policy
        )

        await self.enricher.enrich(insights)
        record_insights(i.severity for i in insights)
        return sort_by_severity(insights)

    async def calculate_revelation_score(self, user_id: str) -> RevelationScore:
        """Score the user's last transaction window and active goals"""
        today = self.today()
        transactions, goals = await asyncio.gather(
            self.store.list_transactions(user_id, date_from=days_ago(today, self.transaction_window_days)),
            self.store.list_active_goals(user_id),
        )
        score = calculate_revelation_score(transactions, goals, today, self.policy)
        record_score(score.overall)
        return score

    async def get_complete_revelation(self, user_id: str) -> CompleteRevelation:
        insights, score = await asyncio.gather(
            self.generate_smart_insights(user_id),
            self.calculate_revelation_score(user_id),
        )
        return assemble_revelation(insights, score, self.now(), self.policy)
