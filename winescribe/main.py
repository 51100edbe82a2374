"""winescribe FastAPI application entry point.

Wires together the LLM provider, the pipeline services and the routes via
dependency injection.  Loads configuration from ``.env`` and
``config/config.yaml`` and configures structured logging.

Also exposes :func:`build_pipeline` for CLI or scripting use outside the
web server.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from winescribe.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    validation_exception_handler,
)
from winescribe.api.routes import router as api_router
from winescribe.config.loader import load_config, load_pipeline_config
from winescribe.config.settings import Settings
from winescribe.interfaces.llm_provider import ILLMProvider
from winescribe.models.pipeline import PipelineConfig
from winescribe.pipeline.orchestrator import BlogGenerationPipeline
from winescribe.providers.images.unsplash_provider import UnsplashImageProvider
from winescribe.providers.llm.anthropic_provider import AnthropicLLMProvider
from winescribe.providers.llm.openai_provider import OpenAILLMProvider
from winescribe.services.content_corrector import ContentCorrector
from winescribe.services.content_generator import ContentGenerator
from winescribe.services.content_modifier import ContentModifier
from winescribe.services.content_summarizer import ContentSummarizer
from winescribe.services.content_verifier import ContentVerifier
from winescribe.services.fact_extractor import FactExtractor
from winescribe.services.image_search_service import ImageSearchService
from winescribe.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings.config_path, settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)

_APP_VERSION = str(config.get("app", {}).get("version", "0.1.0"))


# ---------------------------------------------------------------------------
# LLM provider selection
# ---------------------------------------------------------------------------


def _build_llm_provider(app_settings: Settings) -> ILLMProvider:
    """Select the LLM provider based on configured API keys.

    Priority order: Anthropic -> OpenAI.  With no key at all the OpenAI
    provider is still returned; its calls fail with an API key error
    that the routes report as such.
    """
    if app_settings.anthropic_api_key:
        return AnthropicLLMProvider(settings=app_settings)
    return OpenAILLMProvider(settings=app_settings)


def _build_pipeline(llm: ILLMProvider, pipeline_config: PipelineConfig) -> BlogGenerationPipeline:
    return BlogGenerationPipeline(
        llm_provider=llm,
        fact_extractor=FactExtractor(llm, pipeline_config.fact_extraction),
        content_generator=ContentGenerator(llm, pipeline_config.generation),
        content_verifier=ContentVerifier(llm, pipeline_config.verification),
        content_corrector=ContentCorrector(llm, pipeline_config.correction),
    )


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings, app_config: dict) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    pipeline_config = load_pipeline_config(app_config)

    # -- Shared resources --
    http_client = httpx.AsyncClient(timeout=30.0)

    # -- LLM --
    llm = _build_llm_provider(app_settings)

    # -- Images --
    image_provider = (
        UnsplashImageProvider(http_client, app_settings.unsplash_access_key)
        if app_settings.unsplash_access_key
        else None
    )

    provider_registry = {
        "llm": llm.is_available(),
        "llm_provider": llm.get_provider_name(),
        "images": image_provider.get_provider_name() if image_provider else "default",
    }

    return {
        "http_client": http_client,
        "llm_provider": llm,
        "pipeline": _build_pipeline(llm, pipeline_config),
        "content_modifier": ContentModifier(llm, pipeline_config.modification),
        "content_summarizer": ContentSummarizer(llm, pipeline_config.summary),
        "image_search": ImageSearchService(image_provider),
        "generation_timeout": app_settings.generation_timeout_seconds,
        "provider_registry": provider_registry,
    }


# ---------------------------------------------------------------------------
# Standalone pipeline helper (CLI / scripting)
# ---------------------------------------------------------------------------


def build_pipeline(custom_settings: Settings | None = None) -> BlogGenerationPipeline:
    """Construct the generation pipeline with injected dependencies.

    Parameters
    ----------
    custom_settings:
        Application settings.  Uses module-level ``settings`` if not provided.
    """
    app_settings = custom_settings or settings
    app_config = load_config(app_settings.config_path, settings=app_settings)
    llm = _build_llm_provider(app_settings)
    return _build_pipeline(llm, load_pipeline_config(app_config))


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise all providers and services on startup, clean up on shutdown."""
    components = _build_all(settings, config)

    for key, value in components.items():
        setattr(application.state, key, value)

    _logger.info(
        "app_startup",
        version=_APP_VERSION,
        environment=settings.app_env,
        llm_provider=components["provider_registry"]["llm_provider"],
        llm_available=components["provider_registry"]["llm"],
        images=components["provider_registry"]["images"],
    )

    yield

    # -- Shutdown: close shared httpx client --
    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="winescribe API",
        version=_APP_VERSION,
        description=(
            "Turn a wine description into a Korean marketing blog post: "
            "extract verifiable facts, generate grounded copy, then verify "
            "and correct it."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=config.get("cors", {}).get("allowed_origins"))

    application.add_exception_handler(RequestValidationError, validation_exception_handler)

    # -- API routes --
    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# Server entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "winescribe.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
