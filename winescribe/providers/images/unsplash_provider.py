"""Unsplash photo search provider implementing IImageSearchProvider.

Calls the Unsplash ``/search/photos`` endpoint with the configured access
key.  The ``httpx.AsyncClient`` is injected so the application shares one
connection pool and tests can swap in a ``MockTransport``.
"""

from __future__ import annotations

import httpx

from winescribe.interfaces.image_search_provider import IImageSearchProvider
from winescribe.models.images import ImageResult
from winescribe.utils.errors import ImageSearchError
from winescribe.utils.logging import get_logger

_SEARCH_URL = "https://api.unsplash.com/search/photos"


class UnsplashImageProvider(IImageSearchProvider):
    """Searches Unsplash for landscape wine photos."""

    def __init__(self, http_client: httpx.AsyncClient, access_key: str) -> None:
        self._http = http_client
        self._access_key = access_key
        self._logger = get_logger(__name__)

    async def search(self, query: str, per_page: int = 8) -> list[ImageResult]:
        # Unsplash ranks generic photos higher without the extra keyword.
        params = {
            "query": f"{query} wine",
            "per_page": per_page,
            "orientation": "landscape",
        }
        headers = {"Authorization": f"Client-ID {self._access_key}"}
        try:
            response = await self._http.get(_SEARCH_URL, params=params, headers=headers)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ImageSearchError(
                message=f"Unsplash API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not isinstance(payload, dict):
            raise ImageSearchError(
                message=f"Unexpected Unsplash payload type: {type(payload).__name__}",
                provider_name=self.get_provider_name(),
            )

        try:
            results = [
                ImageResult(
                    id=str(item["id"]),
                    thumb=item["urls"]["small"],
                    regular=item["urls"]["regular"],
                    alt=item.get("alt_description") or query,
                    credit=item["user"]["name"],
                )
                for item in payload.get("results", [])
            ]
        except (KeyError, TypeError) as exc:
            raise ImageSearchError(
                message=f"Unexpected Unsplash payload: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        self._logger.info("unsplash_search_complete", query=query, results=len(results))
        return results

    def get_provider_name(self) -> str:
        return "unsplash"

    def is_available(self) -> bool:
        return bool(self._access_key)
