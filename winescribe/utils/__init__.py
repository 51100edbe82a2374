"""Utility modules for winescribe.

- **errors** -- Domain exception hierarchy rooted at WinescribeError, plus
  the message matchers that tell credential failures apart from other
  upstream errors.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from winescribe.utils.errors import (
    ConfigurationError,
    GenerationError,
    ImageSearchError,
    InvalidRequestError,
    LLMError,
    WinescribeError,
    is_api_key_error,
    is_unauthorized_error,
)
from winescribe.utils.logging import configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "GenerationError",
    "ImageSearchError",
    "InvalidRequestError",
    "LLMError",
    "WinescribeError",
    "configure_logging",
    "get_logger",
    "is_api_key_error",
    "is_unauthorized_error",
]
