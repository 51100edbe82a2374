"""Image search result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ImageResult(BaseModel):
    """A single photo suggestion for a blog post."""

    model_config = ConfigDict(frozen=True)

    id: str
    thumb: str
    regular: str
    alt: str
    credit: str


class ImageSearchResult(BaseModel):
    """Photos for a query plus where they came from (``unsplash`` or ``default``)."""

    model_config = ConfigDict(frozen=True)

    results: list[ImageResult] = Field(default_factory=list)
    source: str = "default"
