"""Image search provider adapters."""

from winescribe.providers.images.unsplash_provider import UnsplashImageProvider

__all__ = ["UnsplashImageProvider"]
