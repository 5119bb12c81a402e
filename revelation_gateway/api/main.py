"""FastAPI application factory"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from revelation_gateway.api.dependencies import get_request_id
from revelation_gateway.api.middleware import MetricsMiddleware, RequestIDMiddleware
from revelation_gateway.api.v1 import emotions, goals, insights, notifications, transactions
from revelation_gateway.config import settings
from revelation_gateway.domain.exceptions import DataFetchError, DomainException
from revelation_gateway.infrastructure.observability.logging import setup_logging

setup_logging(settings.log_level)

logger = logging.getLogger(__name__)


async def data_fetch_error_handler(request: Request, exc: DataFetchError) -> JSONResponse:
    logger.error(f"Data store error: {exc}", extra={"request_id": get_request_id(request)})
    return JSONResponse(status_code=503, content={"detail": "Data store unavailable"})


async def domain_error_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Domain errors a route did not map itself"""
    request_id = get_request_id(request)
    logger.error(f"Unhandled domain error: {exc}", exc_info=exc, extra={"request_id": request_id})
    return JSONResponse(status_code=500, content={"detail": "Internal error", "request_id": request_id})


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Revelation Gateway",
        description="Personal finance insights, cognitive-bias detection and revelation score",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Last added runs first: request id is set before metrics are timed
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(DataFetchError, data_fetch_error_handler)
    app.add_exception_handler(DomainException, domain_error_handler)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    for module, tag in (
        (insights, "insights"),
        (transactions, "transactions"),
        (goals, "goals"),
        (emotions, "emotions"),
        (notifications, "notifications"),
    ):
        app.include_router(module.router, prefix="/v1", tags=[tag])

    return app


app = create_app()
