"""
OpenAI client wrapper for assistant answers.
Reads API key from settings and provides a configured async client instance.
"""
from openai import AsyncOpenAI
from typing import Optional

from proworker.lib.settings import settings
from proworker.lib.logging import get_logger

logger = get_logger(__name__)


class OpenAIClient:
    """
    Wrapper around the async OpenAI client with configuration and error handling.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """
        Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (defaults to settings.openai_api_key)
            model: Chat model (defaults to settings.llm_model)
        """
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.llm_model

        if not self.api_key:
            logger.warning("OpenAI API key not configured. Assistant answers will be unavailable.")

        self.client = AsyncOpenAI(api_key=self.api_key) if self.api_key else None

    def is_available(self) -> bool:
        """Check if the OpenAI client is available (API key is set)."""
        return self.client is not None

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 600,
    ) -> str:
        """
        Run one chat completion and return the stripped text ("" if the model returned nothing).

        Raises:
            RuntimeError: If no API key is configured
            openai.OpenAIError: On provider failures (rate limits included)
        """
        if self.client is None:
            raise RuntimeError("OpenAI client not configured")

        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
        )

        usage = response.usage
        logger.info(
            "LLM completion received",
            extra={
                "model": response.model,
                "total_tokens": usage.total_tokens if usage else None,
            }
        )

        content = response.choices[0].message.content if response.choices else None
        return (content or "").strip()


# Global client instance
openai_client = OpenAIClient()


def get_openai_client() -> OpenAIClient:
    """
    Get the global OpenAI client instance.

    Returns:
        Configured OpenAI client wrapper
    """
    return openai_client
