"""Abstract base class for stock-photo search providers.

Blog posts carry ``[이미지N: ...]`` markers that the editor fills with
photos.  Implementations search a photo service for candidates; the
:class:`~winescribe.services.image_search_service.ImageSearchService`
falls back to a static set when no provider is configured.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from winescribe.models.images import ImageResult


# Concrete implementation: UnsplashImageProvider (winescribe/providers/images/)
class IImageSearchProvider(ABC):
    """Contract for photo search services."""

    @abstractmethod
    async def search(self, query: str, per_page: int = 8) -> list[ImageResult]:
        """Return up to *per_page* photos for *query*.

        Raises
        ------
        winescribe.utils.errors.ImageSearchError
            If the provider call fails or returns an unexpected payload.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"unsplash"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider has the credentials it needs."""
