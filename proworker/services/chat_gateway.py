"""
Chat gateway - the process-scoped front door to the assistant.

Responsibilities:
- Response cache keyed by (normalized question, worker id) with a TTL
- Daily request quota over a rolling 24h window
- Single-flight FIFO queue to the LLM provider with a delay between calls

All time-dependent behavior reads from an injected Clock so tests can drive
expiry and quota resets without sleeping.
"""
import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta
from threading import Lock
from typing import Awaitable, Callable, Dict, Optional, Tuple

from proworker.ai.assistant import WorkerAssistant
from proworker.analytics.snapshot import WorkerContext
from proworker.lib.clock import Clock, system_clock
from proworker.lib.logging import get_logger
from proworker.lib.metrics import get_metrics_collector
from proworker.lib.settings import settings

logger = get_logger(__name__)


QUOTA_WINDOW = timedelta(hours=24)


class QuotaExceededError(RuntimeError):
    """Daily request limit reached."""

    def __init__(self, limit: int, reset_at: datetime):
        self.limit = limit
        self.reset_at = reset_at
        super().__init__(f"Daily limit of {limit} requests reached, resets at {reset_at.isoformat()}")


class QueueFullError(RuntimeError):
    """Too many requests already waiting for the provider."""

    def __init__(self, max_pending: int):
        self.max_pending = max_pending
        super().__init__(f"Request queue is full ({max_pending} pending)")


@dataclass(frozen=True)
class ChatResult:
    response: str
    cached: bool
    timestamp: datetime


def cache_key(question: str, worker_id: int) -> Tuple[str, int]:
    return (question.strip().lower(), worker_id)


class ResponseCache:
    """
    TTL cache of assistant answers.

    Expired entries are evicted when read and swept on every put, so
    one-off questions do not pile up for the life of the process.
    """

    def __init__(self, ttl_seconds: float, clock: Clock = system_clock):
        self.ttl = timedelta(seconds=ttl_seconds)
        self.clock = clock
        self._entries: Dict[Tuple[str, int], Tuple[str, datetime]] = {}
        self._lock = Lock()

    def get(self, question: str, worker_id: int) -> Optional[str]:
        key = cache_key(question, worker_id)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            response, stored_at = entry
            if self.clock.now() - stored_at >= self.ttl:
                del self._entries[key]
                return None
            return response

    def put(self, question: str, worker_id: int, response: str) -> None:
        now = self.clock.now()
        with self._lock:
            expired = [key for key, (_, stored_at) in self._entries.items() if now - stored_at >= self.ttl]
            for key in expired:
                del self._entries[key]
            self._entries[cache_key(question, worker_id)] = (response, now)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class DailyQuota:
    """
    Request counter that resets once the clock passes the window end.

    The window opens at construction (or at the previous reset) and lasts 24h.
    """

    def __init__(self, limit: int, clock: Clock = system_clock):
        self.limit = limit
        self.clock = clock
        self._used = 0
        self._reset_at = clock.now() + QUOTA_WINDOW

    def _roll(self) -> None:
        now = self.clock.now()
        if now >= self._reset_at:
            self._used = 0
            self._reset_at = now + QUOTA_WINDOW

    @property
    def used(self) -> int:
        self._roll()
        return self._used

    @property
    def remaining(self) -> int:
        self._roll()
        return max(0, self.limit - self._used)

    @property
    def reset_at(self) -> datetime:
        self._roll()
        return self._reset_at

    def is_exhausted(self) -> bool:
        return self.remaining == 0

    def consume(self) -> None:
        self._roll()
        self._used += 1


ContextProvider = Callable[[int], WorkerContext]


class ChatGateway:
    """
    Cache, quota and single-flight queue in front of WorkerAssistant.

    Example:
        gateway = ChatGateway(WorkerAssistant())
        result = await gateway.ask("How am I doing?", 1, service.build_context)
    """

    def __init__(
        self,
        assistant: WorkerAssistant,
        clock: Clock = system_clock,
        cache_ttl_seconds: Optional[float] = None,
        daily_limit: Optional[int] = None,
        max_pending: Optional[int] = None,
        delay_seconds: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.assistant = assistant
        self.clock = clock
        self.cache = ResponseCache(
            cache_ttl_seconds if cache_ttl_seconds is not None else settings.chat_cache_ttl_seconds,
            clock,
        )
        self.quota = DailyQuota(
            daily_limit if daily_limit is not None else settings.chat_daily_request_limit,
            clock,
        )
        self.max_pending = max_pending if max_pending is not None else settings.chat_queue_max_pending
        self.delay_seconds = delay_seconds if delay_seconds is not None else settings.chat_queue_delay_seconds
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._pending = 0

    @property
    def pending(self) -> int:
        return self._pending

    def _check_quota(self) -> None:
        if self.quota.is_exhausted():
            get_metrics_collector().increment_chat_requests("quota_exceeded")
            raise QuotaExceededError(self.quota.limit, self.quota.reset_at)

    async def ask(
        self,
        question: str,
        worker_id: int,
        context_provider: ContextProvider,
    ) -> ChatResult:
        """
        Answer a question for one worker.

        Args:
            question: Non-blank question text
            worker_id: Worker whose snapshot the answer is based on
            context_provider: Builds the WorkerContext for worker_id

        Returns:
            ChatResult; cached=True when served from the response cache

        Raises:
            QuotaExceededError: Daily limit reached
            QueueFullError: max_pending requests already waiting
            WorkerNotFoundError: Propagated from context_provider
            AssistantUnavailableError: No LLM provider configured
        """
        metrics = get_metrics_collector()

        cached = self.cache.get(question, worker_id)
        if cached is not None:
            metrics.increment_chat_requests("cached")
            logger.info("Serving cached answer", extra={"worker_id": worker_id})
            return ChatResult(response=cached, cached=True, timestamp=self.clock.now())

        self._check_quota()

        if self._pending >= self.max_pending:
            metrics.increment_chat_requests("queue_full")
            raise QueueFullError(self.max_pending)

        context = context_provider(worker_id)

        self._pending += 1
        try:
            async with self._lock:
                # An earlier request in the queue may have answered the same question
                cached = self.cache.get(question, worker_id)
                if cached is not None:
                    metrics.increment_chat_requests("cached")
                    return ChatResult(response=cached, cached=True, timestamp=self.clock.now())

                self._check_quota()

                try:
                    response = await self.assistant.answer(question, context)
                except Exception:
                    metrics.increment_chat_requests("failed")
                    raise

                self.quota.consume()
                self.cache.put(question, worker_id, response)
                metrics.increment_chat_requests("answered")
                logger.info(
                    "Chat request answered",
                    extra={
                        "worker_id": worker_id,
                        "requests_remaining": self.quota.remaining,
                    }
                )

                if self._pending > 1 and self.delay_seconds > 0:
                    await self._sleep(self.delay_seconds)

                return ChatResult(response=response, cached=False, timestamp=self.clock.now())
        finally:
            self._pending -= 1


_chat_gateway: Optional[ChatGateway] = None


def get_chat_gateway() -> ChatGateway:
    """Process-wide gateway; cache and quota live as long as the process."""
    global _chat_gateway
    if _chat_gateway is None:
        _chat_gateway = ChatGateway(WorkerAssistant())
    return _chat_gateway
