"""Abstract base class for LLM service providers.

Defines the contract for any large-language-model backend used by the
pipeline stages.  Implementations wrap the OpenAI or Anthropic APIs; the
adapter pattern keeps every call-site provider-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from winescribe.models.generation import LLMCompletion


# Concrete implementations: OpenAILLMProvider, AnthropicLLMProvider
# Located in: winescribe/providers/llm/
class ILLMProvider(ABC):
    """Contract for LLM services used throughout the winescribe pipeline."""

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.5,
        max_tokens: int = 4000,
        model: str | None = None,
    ) -> LLMCompletion:
        """Generate a text completion from the model.

        Parameters
        ----------
        system_prompt:
            The system/instruction message that sets the model's behaviour.
        user_prompt:
            The user-facing prompt containing the actual request or data.
        temperature:
            Sampling temperature (0.0 = deterministic, 1.0 = creative).
        max_tokens:
            Upper bound on the number of tokens in the response.
        model:
            API model name.  ``None`` selects the provider's default.

        Returns
        -------
        LLMCompletion
            The response text (possibly empty) and the reported token usage.

        Raises
        ------
        winescribe.utils.errors.LLMError
            If the API call fails.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"openai"`` or ``"anthropic"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured.

        Implementations should verify that credentials are present without
        making an inference call.
        """
