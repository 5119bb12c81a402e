"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from revelation_gateway.infrastructure.cache import ResponseCache, response_cache
from revelation_gateway.infrastructure.clients.market import MarketClient
from revelation_gateway.infrastructure.clients.notifier import NotificationClient
from revelation_gateway.infrastructure.clients.quotes import QuoteClient
from revelation_gateway.infrastructure.database.session import get_db
from revelation_gateway.infrastructure.database.store import SqlFinanceStore
from revelation_gateway.services.enrichment import QuoteEnricher
from revelation_gateway.services.insights import InsightsService

# Shared so its per-category quote cache outlives a single request
_quote_client = QuoteClient()


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_current_user_id(x_user_id: str = Header(..., min_length=1)) -> str:
    """Authenticated caller, resolved upstream and forwarded as X-User-ID"""
    return x_user_id


def get_quote_client() -> QuoteClient:
    return _quote_client


def get_enricher(quote_client: QuoteClient = Depends(get_quote_client)) -> QuoteEnricher:
    return QuoteEnricher(provider=quote_client)


def get_insights_service(
    db: Session = Depends(get_db),
    enricher: QuoteEnricher = Depends(get_enricher),
) -> InsightsService:
    """Provide an insights engine bound to this request's database session"""
    return InsightsService(store=SqlFinanceStore(db), enricher=enricher)


def get_market_client() -> MarketClient:
    return MarketClient()


def get_notification_client() -> NotificationClient:
    """Provide notification relay client instance"""
    return NotificationClient()


def get_response_cache() -> ResponseCache:
    return response_cache
