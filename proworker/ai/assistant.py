"""
Worker Assistant - answers a worker's question about their own snapshot.

Flow:
1. Detect query intent (picks temperature and fallback copy)
2. Pre-compute comparisons and the monthly trend
3. Render the system prompt template and the question prompt
4. Call the LLM, retrying provider rate limits with exponential backoff
5. Fall back to intent-specific copy when the model returns nothing

The assistant only ever sees a finished WorkerContext; it has no access to
the data store.
"""
import json
from typing import Any, Dict, Optional

import openai
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from proworker.ai.client import OpenAIClient, get_openai_client
from proworker.ai.insights import (
    build_prompt_payload,
    calculate_comparison,
    detect_query_intent,
    monthly_trend,
)
from proworker.ai.template_loader import format_template, load_template
from proworker.analytics.snapshot import WorkerContext
from proworker.lib.logging import get_logger
from proworker.lib.metrics import get_metrics_collector
from proworker.lib.settings import settings

logger = get_logger(__name__)


EMPTY_RESPONSE_FALLBACKS = {
    "financial": "I'm having trouble retrieving your earnings data right now. Please try again in a moment.",
    "planning": "I'm unable to access your schedule at the moment. Please check back soon.",
    "performance": "I'm having trouble analyzing your performance data. Please try again.",
}
DEFAULT_FALLBACK = "I'm having trouble processing your request right now. Please try again."
CONNECTION_FALLBACK = (
    "I'm currently unable to reach the service. "
    "Please check your internet connection and try again."
)

FALLBACK_SYSTEM_PROMPT = """You are the ProWorker AI Assistant, a short, warm and practical guide for a gig worker.
Answer only from the JSON context you are given. Never invent numbers, never reveal coordinates,
and pair weak results with one concrete next step."""


class AssistantUnavailableError(RuntimeError):
    """No LLM provider is configured."""


def _display(value: Optional[Any]) -> str:
    return "unknown" if value is None else str(value)


class WorkerAssistant:
    """
    LLM answering strategy over a WorkerContext.
    """

    def __init__(self, client: Optional[OpenAIClient] = None):
        """
        Args:
            client: OpenAI client (defaults to global instance)
        """
        self.client = client or get_openai_client()

    def is_available(self) -> bool:
        return self.client.is_available()

    def build_system_prompt(self, context: WorkerContext) -> str:
        """Render the persona/rules prompt with this worker's comparison figures."""
        comparison = calculate_comparison(context)
        trend = monthly_trend(context)
        distribution = comparison["gender_distribution"]
        rating = comparison["rating_comparison"]
        orders = comparison["order_comparison"]

        if trend is None:
            trend_line = "insufficient data"
        else:
            sign = "+" if trend["change"] > 0 else ""
            trend_line = (
                f"{trend['current_orders']} orders this month vs {trend['previous_orders']} last month "
                f"({sign}{trend['change']}, {trend['percent_change']}%), {trend['trend'].upper()}"
            )

        profession_demand = ", ".join(
            f"{p['profession']} ({p['order_count']} orders)" for p in comparison["top_professions"]
        ) or "unknown"

        values = {
            "language": (context.settings.applanguage if context.settings else None) or "English",
            "my_rating": rating["my_rating"],
            "profession_avg": rating["profession_avg"],
            "rating_status": "above average" if rating["above_average"] else "below average, room to improve",
            "order_rank": _display(orders["rank"]),
            "total_workers": orders["total_workers"],
            "profession_peers": orders["profession_peers"],
            "male_count": distribution.get("Male", 0),
            "female_count": distribution.get("Female", 0),
            "other_count": distribution.get("Other", 0),
            "gender_rank": _display(comparison["gender_rank"]),
            "trend_line": trend_line,
            "profession_demand": profession_demand,
        }

        template = load_template("assistant", "en", 1)
        if template is None:
            logger.warning("Assistant template missing, using fallback system prompt")
            return FALLBACK_SYSTEM_PROMPT
        return format_template(template, values)

    def build_user_prompt(self, question: str, context: WorkerContext, intent: str) -> str:
        payload = build_prompt_payload(context)
        values: Dict[str, Any] = {
            "context_json": json.dumps(payload, indent=2, default=str),
            "question": question,
            "intent": intent.upper(),
        }
        template = load_template("assistant_question", "en", 1)
        if template is None:
            return f"CONTEXT DATA (JSON):\n{values['context_json']}\n\nUSER QUESTION:\n\"{question}\""
        return format_template(template, values)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=2, min=2, max=8),
        retry=retry_if_exception_type(openai.RateLimitError),
        reraise=True,
    )
    async def _complete(self, system_prompt: str, user_prompt: str, temperature: float) -> str:
        return await self.client.complete(system_prompt, user_prompt, temperature=temperature)

    async def answer(self, question: str, context: WorkerContext) -> str:
        """
        Answer a question about the worker's snapshot.

        Args:
            question: The worker's free-text question
            context: Snapshot built by AggregationService

        Returns:
            The model's answer, or fallback copy when it returned nothing or
            the provider could not be reached

        Raises:
            AssistantUnavailableError: If no API key is configured
            openai.RateLimitError: If the provider is still rate limiting after retries
        """
        if not self.is_available():
            raise AssistantUnavailableError("LLM provider is not configured")

        metrics = get_metrics_collector()
        intent = detect_query_intent(question)
        temperature = (
            settings.llm_temperature_coaching if intent == "coaching"
            else settings.llm_temperature_default
        )

        system_prompt = self.build_system_prompt(context)
        user_prompt = self.build_user_prompt(question, context, intent)

        logger.info(
            "Generating assistant answer",
            extra={
                "worker_id": context.profile.id,
                "intent": intent,
                "temperature": temperature,
            }
        )

        try:
            text = await self._complete(system_prompt, user_prompt, temperature)
        except openai.RateLimitError:
            metrics.increment_llm_calls(intent, status="rate_limited")
            logger.warning("LLM rate limit persisted after retries", extra={"intent": intent})
            raise
        except openai.APIConnectionError as e:
            metrics.increment_llm_calls(intent, status="error")
            logger.error(f"LLM provider unreachable: {e}")
            return CONNECTION_FALLBACK

        if not text:
            metrics.increment_llm_calls(intent, status="empty")
            logger.warning("LLM returned an empty answer", extra={"intent": intent})
            return EMPTY_RESPONSE_FALLBACKS.get(intent, DEFAULT_FALLBACK)

        metrics.increment_llm_calls(intent, status="ok")
        return text
