"""Custom exception hierarchy for winescribe.

All application exceptions inherit from :class:`WinescribeError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "openai", "anthropic", "unsplash") caused the
failure.

    WinescribeError  (base -- catch-all for any winescribe error)
    +-- InvalidRequestError   (client input rejected before any model call)
    +-- LLMError              (any LLM API call failure)
    +-- GenerationError       (pipeline failure in generation or correction)
    +-- ImageSearchError      (image search provider failure)
    +-- ConfigurationError    (startup / missing config)
"""

from __future__ import annotations

# Substrings that identify a credential problem with the model provider.
# Matched against the error message; the API layer answers these with a
# dedicated message instead of the generic failure template.
_API_KEY_MARKERS: tuple[str, ...] = ("API key", "apiKey")
_UNAUTHORIZED_MARKERS: tuple[str, ...] = ("401", "Unauthorized")


class WinescribeError(Exception):
    """Base exception for all winescribe errors.

    ``__str__`` prefixes the provider name in brackets for log output,
    e.g. ``[openai] Rate limit exceeded``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


class InvalidRequestError(WinescribeError):
    """Raised when client input is missing or malformed."""

    def __init__(
        self,
        message: str = "Invalid request",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class LLMError(WinescribeError):
    """Raised when an LLM API call fails."""

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class GenerationError(WinescribeError):
    """Raised when the generation or correction stage fails."""

    def __init__(
        self,
        message: str = "Blog generation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ImageSearchError(WinescribeError):
    """Raised when an image search provider call fails."""

    def __init__(
        self,
        message: str = "Image search failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(WinescribeError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


def is_api_key_error(message: str) -> bool:
    """Return ``True`` if *message* reports a missing or malformed API key."""
    return any(marker in message for marker in _API_KEY_MARKERS)


def is_unauthorized_error(message: str) -> bool:
    """Return ``True`` if *message* reports a rejected credential."""
    return any(marker in message for marker in _UNAUTHORIZED_MARKERS)
