"""
FastAPI application entry point with health check and metrics routes.
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from proworker.api.dependencies import get_chat_gateway
from proworker.api.middleware import (
    AppException,
    CorrelationIdMiddleware,
    app_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from proworker.api.routes import chat, workers
from proworker.lib.logging import get_logger
from proworker.lib.metrics import get_metrics_collector
from proworker.lib.settings import settings
from proworker.services.chat_gateway import ChatGateway

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager for startup/shutdown events.
    """
    logger.info(f"{settings.app_name} starting up...")
    yield
    logger.info(f"{settings.app_name} shutting down...")


app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="Performance analytics and AI assistant for service workers",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.frontend_url,
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(CorrelationIdMiddleware)


app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


app.include_router(workers.router)
app.include_router(chat.router)


@app.get("/health")
def health_check(gateway: ChatGateway = Depends(get_chat_gateway)):
    """Health check with the current daily quota usage."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "requests_used": gateway.quota.used,
        "requests_remaining": gateway.quota.remaining,
        "daily_limit": gateway.quota.limit,
        "assistant_available": gateway.assistant.is_available(),
    }


@app.get("/metrics", include_in_schema=False)
def metrics_endpoint():
    """
    Prometheus-compatible metrics endpoint.

    Metrics exposed:
    - worker_context_aggregations_total: Snapshot builds by outcome
    - chat_requests_total: Chat requests by outcome
    - llm_calls_total: LLM provider calls by intent and status
    """
    metrics = get_metrics_collector()
    return PlainTextResponse(
        content=metrics.export_prometheus(),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
