"""
Chat API routes.

POST /api/chat answers a worker's question about their own performance.
"""
from datetime import datetime

import openai
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from proworker.ai.assistant import AssistantUnavailableError
from proworker.api.dependencies import get_aggregation_service, get_chat_gateway
from proworker.api.middleware.error_handler import (
    BadRequestException,
    NotFoundException,
    RateLimitException,
    ServiceUnavailableException,
)
from proworker.api.routes.workers import WORKER_UNAVAILABLE
from proworker.lib.logging import get_logger, log_with_context
from proworker.services.aggregation_service import AggregationService, WorkerNotFoundError
from proworker.services.chat_gateway import ChatGateway, QueueFullError, QuotaExceededError

logger = get_logger(__name__)


# Pydantic schemas
class ChatRequest(BaseModel):
    """Chat request body."""
    user_question: str = Field(..., description="The worker's question")
    worker_id: int = Field(..., description="Worker whose data the answer is based on")


class ChatResponse(BaseModel):
    """Chat response envelope."""
    success: bool = True
    response: str
    timestamp: datetime
    cached: bool = False


# Router
router = APIRouter(prefix="/api", tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    service: AggregationService = Depends(get_aggregation_service),
    gateway: ChatGateway = Depends(get_chat_gateway),
) -> ChatResponse:
    """
    Answer a question using the worker's analytics snapshot.

    Error responses:
    - 400: Blank question
    - 404: Worker does not exist
    - 429: Daily quota reached or provider still rate limiting
    - 503: Queue full or assistant not configured
    """
    question = request.user_question.strip()
    if not question:
        raise BadRequestException("Question is required")

    try:
        result = await gateway.ask(question, request.worker_id, service.build_context)
    except WorkerNotFoundError:
        raise NotFoundException(WORKER_UNAVAILABLE, details={"worker_id": request.worker_id})
    except QuotaExceededError as e:
        raise RateLimitException(
            f"Daily limit reached ({e.limit} requests). Please try again later.",
            details={"reset_at": e.reset_at.isoformat()},
        )
    except openai.RateLimitError:
        raise RateLimitException("The assistant is busy right now. Please try again in a minute.")
    except QueueFullError:
        raise ServiceUnavailableException("Too many requests are waiting. Please try again shortly.")
    except AssistantUnavailableError:
        raise ServiceUnavailableException("The assistant is not configured.")

    log_with_context(
        logger,
        "info",
        "Chat response sent",
        worker_id=request.worker_id,
        cached=result.cached,
    )

    return ChatResponse(
        success=True,
        response=result.response,
        timestamp=result.timestamp,
        cached=result.cached,
    )
