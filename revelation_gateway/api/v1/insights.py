"""GET /v1/insights/* - revelation insights, score and supporting content"""

import random
import time
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from revelation_gateway.api.dependencies import (
    get_current_user_id,
    get_insights_service,
    get_market_client,
    get_notification_client,
    get_request_id,
    get_response_cache,
)
from revelation_gateway.api.v1.schemas import (
    CognitiveBiasSchema,
    CompleteRevelationResponse,
    FactsResponse,
    InsightSchema,
    InsightsResponse,
    MarketSentimentSchema,
    PsychologyFactSchema,
    RevelationScoreSchema,
)
from revelation_gateway.domain.biases import get_bias
from revelation_gateway.domain.exceptions import UnknownBiasError
from revelation_gateway.domain.psychology import get_psychology_facts, random_psychology_facts
from revelation_gateway.infrastructure.cache import ResponseCache
from revelation_gateway.infrastructure.clients.market import MarketClient
from revelation_gateway.infrastructure.clients.notifier import NotificationClient
from revelation_gateway.infrastructure.database.repositories import NotificationRepository
from revelation_gateway.infrastructure.database.session import get_db
from revelation_gateway.infrastructure.observability.logging import log_insights_pass
from revelation_gateway.services.insights import InsightsService

router = APIRouter()

_facts_rng = random.Random()


@router.get("/insights/revelation", response_model=InsightsResponse)
async def get_revelation_insights(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    service: InsightsService = Depends(get_insights_service),
    cache: ResponseCache = Depends(get_response_cache),
):
    """Smart insights with detected cognitive biases, quotes and psychology facts"""
    cached = cache.get("revelation-insights", user_id)
    if cached is not None:
        return cached

    start_time = time.time()
    request_id = get_request_id(request)
    insights = await service.generate_smart_insights(user_id)

    response = InsightsResponse(insights=[InsightSchema.from_domain(i) for i in insights])
    cache.set("revelation-insights", user_id, response)

    log_insights_pass(request_id, user_id, "insights", len(insights), None, (time.time() - start_time) * 1000)
    return response


@router.get("/insights/score", response_model=RevelationScoreSchema)
async def get_revelation_score(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    service: InsightsService = Depends(get_insights_service),
    cache: ResponseCache = Depends(get_response_cache),
):
    """Composite score built from financial health, behavioral discipline and goal progress"""
    cached = cache.get("revelation-score", user_id)
    if cached is not None:
        return cached

    start_time = time.time()
    request_id = get_request_id(request)
    score = await service.calculate_revelation_score(user_id)

    response = RevelationScoreSchema.from_domain(score)
    cache.set("revelation-score", user_id, response)

    log_insights_pass(request_id, user_id, "score", 0, score.overall, (time.time() - start_time) * 1000)
    return response


@router.get("/insights/complete", response_model=CompleteRevelationResponse)
async def get_complete_revelation(
    request: Request,
    background_tasks: BackgroundTasks,
    user_id: str = Depends(get_current_user_id),
    service: InsightsService = Depends(get_insights_service),
    cache: ResponseCache = Depends(get_response_cache),
    db: Session = Depends(get_db),
    notifier: NotificationClient = Depends(get_notification_client),
):
    """
    Everything the revelation screen needs: score, bucketed insights, priorities and stats.

    Flow:
    1. Generate insights and score concurrently
    2. Bucket insights and derive priorities
    3. Store and push a notification when something needs attention
    """
    cached = cache.get("complete-revelation", user_id)
    if cached is not None:
        return cached

    start_time = time.time()
    request_id = get_request_id(request)
    revelation = await service.get_complete_revelation(user_id)

    needs_attention = revelation.insights["critical"] + revelation.insights["warning"]
    if needs_attention:
        message = f"{len(needs_attention)} insight(s) need your attention"
        NotificationRepository(db).create(user_id, "insights", message)
        db.commit()
        background_tasks.add_task(
            notifier.push,
            user_id,
            {
                "event": "INSIGHTS_READY",
                "message": message,
                "overall_score": revelation.score.overall,
            },
        )

    response = CompleteRevelationResponse.from_domain(revelation)
    cache.set("complete-revelation", user_id, response)

    log_insights_pass(
        request_id,
        user_id,
        "complete",
        revelation.stats.total_insights,
        revelation.score.overall,
        (time.time() - start_time) * 1000,
    )
    return response


@router.get("/insights/psychology-facts", response_model=FactsResponse)
def get_facts(category: Optional[str] = Query(None, description="Restrict to one category")):
    """Top facts for a category, or three random facts"""
    facts = get_psychology_facts(category) if category else random_psychology_facts(_facts_rng)
    return FactsResponse(facts=[PsychologyFactSchema.from_domain(f) for f in facts])


@router.get("/insights/biases/{key}", response_model=CognitiveBiasSchema)
def get_cognitive_bias(key: str):
    try:
        bias = get_bias(key)
    except UnknownBiasError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return CognitiveBiasSchema(
        key=bias.key,
        name=bias.name,
        type=bias.type,
        description=bias.description,
        psychological_fact=bias.psychological_fact,
        severity=bias.severity,
        recommendation=bias.recommendation,
    )


@router.get("/insights/market-sentiment", response_model=MarketSentimentSchema)
async def get_market_sentiment(market: MarketClient = Depends(get_market_client)):
    """Best-effort market mood; neutral when the feed is unavailable"""
    return MarketSentimentSchema.from_domain(await market.get_market_sentiment())
