"""Photo suggestions for the ``[이미지N: ...]`` markers in a post.

Uses the configured provider when one is available and falls back to a
fixed set of six wine photos otherwise, including when the provider
call fails.  The fallback is reported with ``source="default"`` so the
editor can tell the two apart.
"""

from __future__ import annotations

from winescribe.interfaces.image_search_provider import IImageSearchProvider
from winescribe.models.images import ImageResult, ImageSearchResult
from winescribe.utils.errors import ImageSearchError, InvalidRequestError
from winescribe.utils.logging import get_logger

_UNSPLASH_PHOTO_URL = "https://images.unsplash.com/{photo_id}"


def _default_image(photo_id: str, alt: str) -> ImageResult:
    url = _UNSPLASH_PHOTO_URL.format(photo_id=photo_id)
    return ImageResult(
        id=photo_id,
        thumb=f"{url}?w=400",
        regular=f"{url}?w=800",
        alt=alt,
        credit="Unsplash",
    )


DEFAULT_WINE_IMAGES: tuple[ImageResult, ...] = (
    _default_image("photo-1510812431401-41d2bd2722f3", "레드 와인"),
    _default_image("photo-1474722883778-792e7990302f", "와인 셀러"),
    _default_image("photo-1506377247377-2a5b3b417ebb", "포도밭"),
    _default_image("photo-1567529692333-de9fd6772897", "와인 따르기"),
    _default_image("photo-1553361371-9b22f78e8b1d", "화이트 와인"),
    _default_image("photo-1528823872057-9c018a7a7553", "와인과 치즈"),
)


class ImageSearchService:
    """Searches for wine photos with a static fallback."""

    def __init__(
        self,
        provider: IImageSearchProvider | None = None,
        per_page: int = 8,
    ) -> None:
        self._provider = provider
        self._per_page = per_page
        self._logger = get_logger(__name__)

    async def search(self, query: str) -> ImageSearchResult:
        """Return photos for *query*.

        Raises
        ------
        InvalidRequestError
            If *query* is blank.
        """
        query = (query or "").strip()
        if not query:
            raise InvalidRequestError(message="검색어를 입력해주세요.")

        if self._provider is None or not self._provider.is_available():
            return ImageSearchResult(results=list(DEFAULT_WINE_IMAGES), source="default")

        try:
            results = await self._provider.search(query, per_page=self._per_page)
        except ImageSearchError as exc:
            self._logger.warning(
                "image_search_fallback",
                query=query,
                provider=self._provider.get_provider_name(),
                error=str(exc),
            )
            return ImageSearchResult(results=list(DEFAULT_WINE_IMAGES), source="default")

        return ImageSearchResult(results=results, source=self._provider.get_provider_name())
