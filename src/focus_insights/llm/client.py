"""Async Claude client for narrative insight text, with retry logic."""

from __future__ import annotations

import asyncio
import logging
import os

from focus_insights.exceptions import InsightGenerationError, LLMError

logger = logging.getLogger(__name__)


DEFAULT_MODEL = os.environ.get("FOCUS_INSIGHTS_MODEL", "claude-haiku-4-5-20251001")


class AsyncLLMClient:
    """Turns one system prompt and one user prompt into Claude's reply text."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        max_retries: int = 3,
    ):
        if not api_key and not os.environ.get("ANTHROPIC_API_KEY"):
            raise LLMError(
                "Anthropic API key is required. "
                "Pass it directly or set ANTHROPIC_API_KEY in your environment."
            )
        try:
            from anthropic import AsyncAnthropic
        except ImportError:
            raise ImportError(
                "anthropic is required for AsyncLLMClient. "
                "Install with: pip install focus-insights[llm]"
            )
        self._client = AsyncAnthropic(api_key=api_key or None)
        self.model = model
        self.max_retries = max_retries

    async def generate_text(
        self,
        system_prompt: str,
        prompt: str,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> str:
        """Return the stripped text of Claude's reply.

        Raises:
            InsightGenerationError: the reply carried no text.
            LLMError: the API rejected the request or retries ran out.
        """
        response = await self._create_message(system_prompt, prompt, max_tokens, temperature)
        logger.debug(
            "Claude reply used %d input / %d output tokens",
            response.usage.input_tokens,
            response.usage.output_tokens,
        )
        text = "\n".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        ).strip()
        if not text:
            raise InsightGenerationError(f"{self.model} returned no text")
        return text

    async def _create_message(self, system_prompt: str, prompt: str, max_tokens: int, temperature: float):
        from anthropic import APIError, APITimeoutError, RateLimitError

        for attempt in range(self.max_retries):
            try:
                return await self._client.messages.create(
                    model=self.model,
                    max_tokens=max_tokens,
                    temperature=temperature,
                    system=system_prompt,
                    messages=[{"role": "user", "content": prompt}],
                )
            except RateLimitError:
                wait = 2 ** (attempt + 1)
                logger.warning("Rate limited, retrying in %ds (attempt %d)", wait, attempt + 1)
                await asyncio.sleep(wait)
            except APITimeoutError:
                wait = 2 ** attempt
                logger.warning("API timeout, retrying in %ds (attempt %d)", wait, attempt + 1)
                await asyncio.sleep(wait)
            except APIError as e:
                raise LLMError(f"Claude API error: {e}") from e

        raise LLMError(f"Failed after {self.max_retries} retries")
