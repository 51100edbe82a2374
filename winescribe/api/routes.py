"""FastAPI routes for the winescribe service.

Service dependencies are resolved from ``app.state`` via FastAPI's
``Depends`` using the ``Annotated`` pattern; ``main._build_all`` puts
them there at startup.

Route map:

    /api/generate        POST  Fact-grounded blog generation
    /api/modify          POST  Free-form edit of an existing post
    /api/summarize       POST  Summary + purchase hook for a post
    /api/images/search   GET   Wine photo suggestions (static fallback)
    /api/health          GET   Health check + provider status

Every error body is ``{"error": "..."}``: 400 for missing input, 500 for
upstream failures.  Errors are logged before they are mapped.
"""

from __future__ import annotations

import asyncio
from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from winescribe.api.schemas import (
    ErrorResponse,
    GenerateResponse,
    HealthResponse,
    ImageSearchResponse,
    ModifyRequest,
    ModifyResponse,
    SummarizeRequest,
    SummarizeResponse,
)
from winescribe.models.generation import GenerationRequest
from winescribe.pipeline.orchestrator import BlogGenerationPipeline
from winescribe.services.content_modifier import ContentModifier
from winescribe.services.content_summarizer import ContentSummarizer
from winescribe.services.image_search_service import ImageSearchService
from winescribe.utils.errors import (
    InvalidRequestError,
    is_api_key_error,
    is_unauthorized_error,
)
from winescribe.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api")

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

_GENERATION_ERROR = "글 생성 중 오류: {message}"
_MODIFY_ERROR = "수정 중 오류: {message}"
_SUMMARY_ERROR = "요약 생성 중 오류: {message}"


# ---------------------------------------------------------------------------
# Dependency helpers
# ---------------------------------------------------------------------------


def _get_pipeline(request: Request) -> BlogGenerationPipeline:
    return request.app.state.pipeline


def _get_modifier(request: Request) -> ContentModifier:
    return request.app.state.content_modifier


def _get_summarizer(request: Request) -> ContentSummarizer:
    return request.app.state.content_summarizer


def _get_image_search(request: Request) -> ImageSearchService:
    return request.app.state.image_search


def _get_generation_timeout(request: Request) -> float:
    return request.app.state.generation_timeout


PipelineDep = Annotated[BlogGenerationPipeline, Depends(_get_pipeline)]
ModifierDep = Annotated[ContentModifier, Depends(_get_modifier)]
SummarizerDep = Annotated[ContentSummarizer, Depends(_get_summarizer)]
ImageSearchDep = Annotated[ImageSearchService, Depends(_get_image_search)]
TimeoutDep = Annotated[float, Depends(_get_generation_timeout)]


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


def classify_error(message: str) -> str:
    """Map a generation failure message to the client-facing error text.

    Credential problems get a dedicated message; everything else is
    interpolated into the generic generation template.
    """
    if is_api_key_error(message):
        return f"API 키 오류: {message}"
    if is_unauthorized_error(message):
        return "API 키가 유효하지 않습니다. 키를 확인해주세요."
    return _GENERATION_ERROR.format(message=message)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def _error_message(exc: Exception) -> str:
    # WinescribeError.__str__ adds a "[provider]" prefix; clients get the bare message.
    return getattr(exc, "message", None) or str(exc)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post(
    "/generate",
    response_model=GenerateResponse,
    responses=_ERROR_RESPONSES,
    summary="Generate a fact-grounded wine blog post",
)
async def generate(
    body: GenerationRequest,
    pipeline: PipelineDep,
    timeout: TimeoutDep,
) -> GenerateResponse | JSONResponse:
    try:
        pipeline.validate_request(body)
    except InvalidRequestError as exc:
        _logger.info("generate_rejected", reason=exc.message)
        return _error(400, exc.message)

    try:
        result = await asyncio.wait_for(pipeline.run(body), timeout=timeout)
    except asyncio.TimeoutError:
        _logger.error("generate_timeout", timeout_seconds=timeout)
        return _error(500, classify_error(f"Generation timed out after {timeout:g}s"))
    except Exception as exc:
        _logger.error("generate_failed", error=str(exc), error_type=type(exc).__name__)
        return _error(500, classify_error(_error_message(exc)))

    return GenerateResponse(content=result.content, usage=result.usage)


@router.post(
    "/modify",
    response_model=ModifyResponse,
    responses=_ERROR_RESPONSES,
    summary="Apply a free-form modification to a post",
)
async def modify(body: ModifyRequest, modifier: ModifierDep) -> ModifyResponse | JSONResponse:
    try:
        completion = await modifier.modify(body.current_content, body.modify_request)
    except InvalidRequestError as exc:
        return _error(400, exc.message)
    except Exception as exc:
        _logger.error("modify_failed", error=str(exc), error_type=type(exc).__name__)
        return _error(500, _MODIFY_ERROR.format(message=_error_message(exc)))

    return ModifyResponse(content=completion.text, usage=completion.usage)


@router.post(
    "/summarize",
    response_model=SummarizeResponse,
    responses=_ERROR_RESPONSES,
    summary="Summarize a post and write a purchase hook",
)
async def summarize(
    body: SummarizeRequest,
    summarizer: SummarizerDep,
) -> SummarizeResponse | JSONResponse:
    try:
        result = await summarizer.summarize(body.content)
    except InvalidRequestError as exc:
        return _error(400, exc.message)
    except Exception as exc:
        _logger.error("summarize_failed", error=str(exc), error_type=type(exc).__name__)
        return _error(500, _SUMMARY_ERROR.format(message=_error_message(exc)))

    return SummarizeResponse(
        summary=result.summary,
        hook_message=result.hook_message,
        usage=result.usage,
    )


@router.get(
    "/images/search",
    response_model=ImageSearchResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Search wine photos",
)
async def search_images(
    image_search: ImageSearchDep,
    q: Annotated[str, Query()] = "",
) -> ImageSearchResponse | JSONResponse:
    try:
        result = await image_search.search(q)
    except InvalidRequestError as exc:
        return _error(400, exc.message)

    return ImageSearchResponse(results=result.results, source=result.source)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
)
async def health_check(request: Request) -> HealthResponse:
    """Return application health, version, and provider availability."""
    providers: dict[str, Any] = dict(getattr(request.app.state, "provider_registry", {}))
    status = "healthy" if providers.get("llm") else "unhealthy"
    return HealthResponse(
        status=status,
        version=request.app.version,
        providers=providers,
    )
