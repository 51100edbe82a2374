"""OpenAI-compatible LLM provider adapter.

Wraps the ``openai`` async client to implement :class:`ILLMProvider`.
When a custom ``openai_base_url`` is configured the client points at that
URL instead of the default OpenAI endpoint, so any OpenAI-compatible
service can serve the pipeline.

Reasoning models (``gpt-5*``, ``o1``, ``o3``, ``o4``) only accept their default
sampling temperature, so no ``temperature`` is sent for them and the
per-stage temperatures in ``config/config.yaml`` have no effect on those
models, the default ``gpt-5-mini`` included.
"""

from __future__ import annotations

import openai
import structlog

from winescribe.config.settings import Settings
from winescribe.interfaces.llm_provider import ILLMProvider
from winescribe.models.generation import LLMCompletion, TokenUsage
from winescribe.utils.errors import LLMError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_MODEL = "gpt-5-mini"

# Reasoning models only accept the default sampling temperature.
_FIXED_TEMPERATURE_PREFIXES = ("gpt-5", "o1", "o3", "o4")


def _supports_temperature(model: str) -> bool:
    return not model.startswith(_FIXED_TEMPERATURE_PREFIXES)


class OpenAILLMProvider(ILLMProvider):
    """LLM provider backed by an OpenAI-compatible chat completions API.

    The SDK client is built once per provider and shared by every request;
    it holds no per-request state.  Without an API key no client is built
    and ``complete`` raises an API key ``LLMError``.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._api_key = settings.openai_api_key

        client_kwargs: dict = {
            "api_key": self._api_key,
            "timeout": openai.Timeout(settings.llm_timeout_seconds, connect=5.0),
            # Retries are the caller's decision, never the SDK's.
            "max_retries": 0,
        }
        if settings.openai_base_url:
            client_kwargs["base_url"] = settings.openai_base_url

        self._client: openai.AsyncOpenAI | None = (
            openai.AsyncOpenAI(**client_kwargs) if self._api_key else None
        )
        self._provider_label = (
            "openai-compatible" if settings.openai_base_url else "openai"
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
        """Generate a text completion via the chat completions API.

        A ``None`` message content is returned as an empty string; deciding
        whether empty output is acceptable is up to the calling stage.
        """
        if self._client is None:
            raise LLMError(
                message="OpenAI API key is not configured (set OPENAI_API_KEY)",
                provider_name=self.get_provider_name(),
            )

        api_model = model or _DEFAULT_MODEL
        request_kwargs: dict = {
            "model": api_model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "max_completion_tokens": max_tokens,
        }
        if _supports_temperature(api_model):
            request_kwargs["temperature"] = temperature

        try:
            response = await self._client.chat.completions.create(**request_kwargs)
        except openai.APITimeoutError as exc:
            raise LLMError(
                message=(
                    f"{self._provider_label} timed out after "
                    f"{self._settings.llm_timeout_seconds:g}s"
                ),
                provider_name=self.get_provider_name(),
            ) from exc
        except openai.APIError as exc:
            # "from exc" keeps the SDK traceback; the message keeps the
            # status code so credential failures stay recognisable.
            raise LLMError(
                message=f"{self._provider_label} API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""

        usage = TokenUsage()
        if response.usage is not None:
            usage = TokenUsage(
                prompt_tokens=response.usage.prompt_tokens or 0,
                completion_tokens=response.usage.completion_tokens or 0,
                total_tokens=response.usage.total_tokens or 0,
            )

        logger.info(
            "openai_completion",
            model=api_model,
            provider=self._provider_label,
            tokens=usage.total_tokens,
            empty=not content,
        )
        return LLMCompletion(text=content, usage=usage, model=api_model)

    def is_available(self) -> bool:
        """Return ``True`` if an API key is configured (doesn't verify it works)."""
        return bool(self._api_key)

    def get_provider_name(self) -> str:
        """Return 'openai' or 'openai-compatible' depending on configuration."""
        return self._provider_label
