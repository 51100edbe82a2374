"""Public interface definitions for all external service providers.

Every external API used by winescribe is accessed through the abstract
base classes in this package.  Concrete adapters implement them and are
injected at startup in ``winescribe/main.py``, so services never import
an SDK directly and tests can inject mocks.

    Interface                  →  Concrete implementations
    ─────────────────────────────────────────────────────────────────────
    ILLMProvider               →  OpenAILLMProvider, AnthropicLLMProvider
    IImageSearchProvider       →  UnsplashImageProvider
"""

from winescribe.interfaces.image_search_provider import IImageSearchProvider
from winescribe.interfaces.llm_provider import ILLMProvider

__all__ = [
    "IImageSearchProvider",
    "ILLMProvider",
]
