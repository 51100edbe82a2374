"""API middleware: CORS, request logging, and error handling.

Starlette middleware runs last-added-first.  ``main.create_app`` adds
ErrorHandlingMiddleware before RequestLoggingMiddleware, so a request
flows:

    Client → RequestLogging → ErrorHandling → route handler

and RequestLoggingMiddleware sees the final status code, including the
500 that ErrorHandling substitutes for a stray ``WinescribeError``.

Schema validation failures (malformed JSON, wrong field types) are
answered by :func:`validation_exception_handler` with a 400 ``{error}``
body in place of FastAPI's default 422.
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from winescribe.api.schemas import ErrorResponse
from winescribe.utils.errors import WinescribeError
from winescribe.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

# Localized "missing input" messages, keyed by route path.
_MISSING_INPUT_MESSAGES: dict[str, str] = {
    "/api/generate": "와인 정보를 입력해주세요.",
    "/api/modify": "현재 글과 수정 요청을 입력해주세요.",
    "/api/summarize": "요약할 글을 입력해주세요.",
    "/api/images/search": "검색어를 입력해주세요.",
}
_DEFAULT_INVALID_MESSAGE = "잘못된 요청입니다."


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware to the FastAPI application.

    Parameters
    ----------
    app:
        The FastAPI application instance.
    allowed_origins:
        Explicit list of allowed origins.  Defaults to ``["*"]`` for
        development; override in ``config/config.yaml`` for production.
    """
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Catch ``WinescribeError`` subclasses and return ``{error}`` JSON.

    Routes map their own failures; this only sees errors raised outside
    a route's handling (e.g. in a dependency).  Details stay in the log.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except WinescribeError as exc:
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=str(request.url.path),
            )
            return JSONResponse(
                status_code=500,
                content=ErrorResponse(error=exc.message).model_dump(),
            )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Answer request validation failures with a localized 400."""
    path = str(request.url.path)
    _logger.info("request_validation_failed", path=path, errors=len(exc.errors()))
    message = _MISSING_INPUT_MESSAGES.get(path, _DEFAULT_INVALID_MESSAGE)
    return JSONResponse(status_code=400, content=ErrorResponse(error=message).model_dump())
