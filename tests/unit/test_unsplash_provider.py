"""Unit tests for the Unsplash image provider using httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from winescribe.providers.images.unsplash_provider import UnsplashImageProvider
from winescribe.services.image_search_service import DEFAULT_WINE_IMAGES, ImageSearchService
from winescribe.utils.errors import ImageSearchError

_PAYLOAD = {
    "results": [
        {
            "id": "xyz789",
            "urls": {"small": "https://img/s.jpg", "regular": "https://img/r.jpg"},
            "alt_description": "glass of red wine",
            "user": {"name": "Jane Doe"},
        },
        {
            "id": "abc123",
            "urls": {"small": "https://img/s2.jpg", "regular": "https://img/r2.jpg"},
            "alt_description": None,
            "user": {"name": "John Roe"},
        },
    ]
}


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestUnsplashImageProvider:
    @pytest.mark.asyncio()
    async def test_search_maps_results(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_PAYLOAD)

        async with _client(handler) as client:
            provider = UnsplashImageProvider(client, access_key="key-123")
            results = await provider.search("말벡")

        assert [r.id for r in results] == ["xyz789", "abc123"]
        assert results[0].thumb == "https://img/s.jpg"
        assert results[0].credit == "Jane Doe"
        assert results[1].alt == "말벡"

        request = seen[0]
        assert request.url.path == "/search/photos"
        assert request.url.params["query"] == "말벡 wine"
        assert request.url.params["per_page"] == "8"
        assert request.url.params["orientation"] == "landscape"
        assert request.headers["Authorization"] == "Client-ID key-123"

    @pytest.mark.asyncio()
    async def test_http_error_raises_image_search_error(self) -> None:
        async with _client(lambda request: httpx.Response(401, json={"errors": ["bad key"]})) as client:
            provider = UnsplashImageProvider(client, access_key="bad")
            with pytest.raises(ImageSearchError) as exc_info:
                await provider.search("wine")

        assert exc_info.value.provider_name == "unsplash"

    @pytest.mark.asyncio()
    async def test_malformed_payload_raises_image_search_error(self) -> None:
        payload = {"results": [{"id": "1", "urls": {}}]}
        async with _client(lambda request: httpx.Response(200, json=payload)) as client:
            provider = UnsplashImageProvider(client, access_key="key")
            with pytest.raises(ImageSearchError):
                await provider.search("wine")

    @pytest.mark.asyncio()
    @pytest.mark.parametrize("body", [b"[]", b"null", b'"results"'])
    async def test_non_object_payload_raises_image_search_error(self, body: bytes) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=body, headers={"Content-Type": "application/json"})

        async with _client(handler) as client:
            provider = UnsplashImageProvider(client, access_key="key")
            with pytest.raises(ImageSearchError):
                await provider.search("merlot")

    @pytest.mark.asyncio()
    async def test_service_falls_back_on_non_object_payload(self) -> None:
        async with _client(lambda request: httpx.Response(200, json=[])) as client:
            service = ImageSearchService(UnsplashImageProvider(client, access_key="key"))
            result = await service.search("merlot")

        assert result.source == "default"
        assert result.results == list(DEFAULT_WINE_IMAGES)

    def test_availability_follows_key(self) -> None:
        client = httpx.AsyncClient()
        assert UnsplashImageProvider(client, access_key="").is_available() is False
        assert UnsplashImageProvider(client, access_key="k").is_available() is True
