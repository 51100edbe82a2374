"""Pydantic request/response schemas for the winescribe API.

Request bodies use camelCase JSON keys (``wineName``, ``currentContent``)
through ``alias_generator=to_camel``; Python code keeps snake_case.
Response models are serialized by alias, so ``hook_message`` goes out as
``hookMessage``.  Token usage keeps its snake_case keys.

The generation endpoint accepts :class:`GenerationRequest` from
:mod:`winescribe.models.generation` directly.

Required text fields default to ``""`` so a missing field reaches the
service layer and gets the localized 400 message, not a schema error.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from winescribe.models.generation import TokenUsage
from winescribe.models.images import ImageResult


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerateResponse(_CamelModel):
    """Final blog text, ending with the contact footer."""

    content: str
    usage: TokenUsage = Field(default_factory=TokenUsage)


class ModifyRequest(_CamelModel):
    """A post plus a free-form description of the change wanted."""

    current_content: str = ""
    modify_request: str = ""


class ModifyResponse(_CamelModel):
    content: str
    usage: TokenUsage = Field(default_factory=TokenUsage)


class SummarizeRequest(_CamelModel):
    content: str = ""


class SummarizeResponse(_CamelModel):
    """Summary of at most ~400 characters and a 2-4 line purchase hook."""

    summary: str
    hook_message: str
    usage: TokenUsage = Field(default_factory=TokenUsage)


class ImageSearchResponse(_CamelModel):
    """Photo candidates; ``source`` is ``"default"`` for the static fallback set."""

    results: list[ImageResult] = Field(default_factory=list)
    source: str


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, Any]


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
