"""Anthropic LLM provider adapter.

Wraps the ``anthropic`` async client to implement :class:`ILLMProvider`.

Differences from the OpenAI adapter:
    - Uses the Messages API (not chat.completions)
    - System prompt is a separate parameter, not a message in the list
    - Response content is a list of blocks; text blocks are joined
    - Usage is reported as input/output tokens, summed for the total
"""

from __future__ import annotations

import anthropic
import structlog

from winescribe.config.settings import Settings
from winescribe.interfaces.llm_provider import ILLMProvider
from winescribe.models.generation import LLMCompletion, TokenUsage
from winescribe.utils.errors import LLMError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_MODEL = "claude-sonnet-4-5"


class AnthropicLLMProvider(ILLMProvider):
    """LLM provider backed by the Anthropic Claude API."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._api_key = settings.anthropic_api_key
        self._client: anthropic.AsyncAnthropic | None = None
        if self._api_key:
            self._client = anthropic.AsyncAnthropic(
                api_key=self._api_key,
                timeout=settings.llm_timeout_seconds,
                max_retries=0,
            )

    # ------------------------------------------------------------------
    # ILLMProvider implementation
    # ------------------------------------------------------------------

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.5,
        max_tokens: int = 4000,
        model: str | None = None,
    ) -> LLMCompletion:
        """Generate a text completion via the Anthropic Messages API."""
        if self._client is None:
            raise LLMError(
                message="Anthropic API key is not configured (set ANTHROPIC_API_KEY)",
                provider_name=self.get_provider_name(),
            )

        api_model = model or _DEFAULT_MODEL
        try:
            response = await self._client.messages.create(
                model=api_model,
                max_tokens=max_tokens,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
                temperature=temperature,
            )
        except anthropic.APIError as exc:
            raise LLMError(
                message=f"Anthropic API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        text = "\n".join(
            block.text for block in response.content if block.type == "text"
        )
        usage = TokenUsage(
            prompt_tokens=response.usage.input_tokens,
            completion_tokens=response.usage.output_tokens,
            total_tokens=response.usage.input_tokens + response.usage.output_tokens,
        )
        logger.info(
            "anthropic_completion",
            model=api_model,
            input_tokens=usage.prompt_tokens,
            output_tokens=usage.completion_tokens,
            empty=not text,
        )
        return LLMCompletion(text=text, usage=usage, model=api_model)

    def is_available(self) -> bool:
        """Return ``True`` if an Anthropic API key is configured."""
        return bool(self._api_key)

    def get_provider_name(self) -> str:
        return "anthropic"
