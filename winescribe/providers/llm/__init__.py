"""LLM provider adapters.

Two concrete implementations of ILLMProvider (winescribe/interfaces/llm_provider.py):
    - OpenAILLMProvider   : gpt-5 family / gpt-4o-mini (also OpenAI-compatible APIs)
    - AnthropicLLMProvider: Claude Sonnet / Haiku

At startup, main.py creates the provider matching the configured API key
and stores it on FastAPI's app.state.
"""

from winescribe.providers.llm.anthropic_provider import AnthropicLLMProvider
from winescribe.providers.llm.openai_provider import OpenAILLMProvider

__all__ = ["OpenAILLMProvider", "AnthropicLLMProvider"]
