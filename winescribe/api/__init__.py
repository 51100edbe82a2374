"""winescribe API layer: routes, schemas, and middleware."""

from winescribe.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    validation_exception_handler,
)
from winescribe.api.routes import router
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

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "validation_exception_handler",
    "router",
    "ErrorResponse",
    "GenerateResponse",
    "HealthResponse",
    "ImageSearchResponse",
    "ModifyRequest",
    "ModifyResponse",
    "SummarizeRequest",
    "SummarizeResponse",
]
